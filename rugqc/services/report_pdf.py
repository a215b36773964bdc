"""Inspection report PDF.

Page 1 (and its continuations) carries the summary: header bar, result
badge, field sections, defects and remarks. Each photo then gets a page of
its own. Layout is a single cursor moving down the page; every block checks
the remaining space first and starts a new page when it does not fit.
"""
import base64
import io
import logging
import os
from datetime import datetime

import requests
from flask import current_app, has_app_context
from PIL import Image
from reportlab.lib.colors import HexColor, white
from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import ImageReader, simpleSplit
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen import canvas

from rugqc.exceptions import ReportGenerationError
from rugqc.services.report_data import (
    report_sections, defect_rows, defect_totals, photo_entries, is_pass, result_color,
    display_value, BRAND_COLOR, FAILURE_COLOR,
)

logger = logging.getLogger(__name__)

PAGE_WIDTH, PAGE_HEIGHT = A4
MARGIN = 40
FOOTER_HEIGHT = 30
CONTENT_WIDTH = PAGE_WIDTH - 2 * MARGIN
ROW_HEIGHT = 16
SUMMARY_TITLE = 'Inspection Summary'
IMAGE_PLACEHOLDER = 'Image could not be loaded'

BORDER = HexColor('#d1d5db')
MUTED = HexColor('#6b7280')
TEXT = HexColor('#111827')
ROW_SHADE = HexColor('#f3f4f6')


def fetch_image(url):
    timeout = current_app.config.get('IMAGE_FETCH_TIMEOUT', 15) if has_app_context() else 15
    resp = requests.get(url, timeout=timeout)
    resp.raise_for_status()
    return resp.content


def _register_ttf(path):
    if not path:
        return None
    name = os.path.splitext(os.path.basename(path))[0]
    if name not in pdfmetrics.getRegisteredFontNames():
        pdfmetrics.registerFont(TTFont(name, path))
    return name


def report_fonts():
    """Return the ``(regular, bold)`` font names for report text.

    Helvetica only covers Latin-1; set ``PDF_FONT_PATH`` (and optionally
    ``PDF_BOLD_FONT_PATH``) to a TTF for names in other scripts.
    """
    config = current_app.config if has_app_context() else {}
    regular = _register_ttf(config.get('PDF_FONT_PATH'))
    if not regular:
        return 'Helvetica', 'Helvetica-Bold'
    return regular, _register_ttf(config.get('PDF_BOLD_FONT_PATH')) or regular


class InspectionPdf:

    def __init__(self, doc, image_fetcher=None, generated_at=None, fonts=None):
        self.doc = doc
        self.image_fetcher = image_fetcher or fetch_image
        self.generated_at = generated_at or datetime.now()
        self.fonts = fonts
        self.font = self.bold_font = None
        self.page_titles = []
        self.canvas = None
        self.y = 0

    def render(self):
        buffer = io.BytesIO()
        try:
            self.font, self.bold_font = self.fonts or report_fonts()
            self.canvas = canvas.Canvas(buffer, pagesize=A4, invariant=1)
            self.canvas.setTitle(f"Final Inspection {self.doc.get('document_no') or ''}")
            self.canvas.setAuthor(self.doc.get('company_name') or '')
            self._start_page(SUMMARY_TITLE)
            self._draw_summary()
            for label, url in photo_entries(self.doc):
                self._draw_photo_page(label, url)
            self._finish_page()
            self.canvas.save()
        except ReportGenerationError:
            raise
        except Exception as e:
            logger.error(f"PDF generation failed for {self.doc.get('document_no')}: {e}")
            raise ReportGenerationError() from e
        return buffer.getvalue()

    # ─── Pages ───

    def _start_page(self, title):
        self.page_titles.append(title)
        self.y = PAGE_HEIGHT - MARGIN

    def _finish_page(self):
        c = self.canvas
        c.setStrokeColor(BORDER)
        c.line(MARGIN, MARGIN + FOOTER_HEIGHT - 10, PAGE_WIDTH - MARGIN, MARGIN + FOOTER_HEIGHT - 10)
        c.setFont(self.font, 8)
        c.setFillColor(MUTED)
        c.drawString(MARGIN, MARGIN + 6,
                     f"Generated {self.generated_at.strftime('%Y-%m-%d %H:%M')}")
        c.drawRightString(PAGE_WIDTH - MARGIN, MARGIN + 6,
                          f"{self.doc.get('document_no') or ''}  |  Page {len(self.page_titles)}")

    def _new_page(self, title):
        self._finish_page()
        self.canvas.showPage()
        self._start_page(title)

    def _ensure_space(self, height):
        if self.y - height < MARGIN + FOOTER_HEIGHT:
            self._new_page(f'{SUMMARY_TITLE} (continued)')

    # ─── Summary ───

    def _draw_summary(self):
        self._draw_header_bar()
        self._draw_badge()
        for title, rows in report_sections(self.doc):
            self._draw_section(title, rows)
        rows = defect_rows(self.doc)
        if rows:
            self._draw_defects(rows)
        remarks = (self.doc.get('qc_inspector_remarks') or '').strip()
        if remarks:
            self._draw_remarks(remarks)

    def _draw_header_bar(self):
        c = self.canvas
        height = 50
        c.setFillColor(HexColor(BRAND_COLOR))
        c.rect(MARGIN, self.y - height, CONTENT_WIDTH, height, stroke=0, fill=1)
        c.setFillColor(white)
        c.setFont(self.bold_font, 16)
        c.drawString(MARGIN + 12, self.y - 22, self.doc.get('company_name') or self.doc.get('company') or '')
        c.setFont(self.font, 10)
        c.drawString(MARGIN + 12, self.y - 40, 'Final Inspection Report')
        c.drawRightString(PAGE_WIDTH - MARGIN - 12, self.y - 22,
                          f"Doc No: {self.doc.get('document_no') or ''}")
        c.drawRightString(PAGE_WIDTH - MARGIN - 12, self.y - 40,
                          f"Date: {display_value(self.doc.get('inspection_date'))}")
        self.y -= height + 14

    def _draw_badge(self):
        c = self.canvas
        width, height = 160, 30
        x = (PAGE_WIDTH - width) / 2
        c.setFillColor(HexColor(result_color(self.doc)))
        c.roundRect(x, self.y - height, width, height, 6, stroke=0, fill=1)
        c.setFillColor(white)
        c.setFont(self.bold_font, 16)
        c.drawCentredString(PAGE_WIDTH / 2, self.y - 20, 'PASSED' if is_pass(self.doc) else 'FAILED')
        self.y -= height + 16

    def _draw_section_title(self, title):
        self._ensure_space(ROW_HEIGHT * 2 + 6)
        c = self.canvas
        c.setFillColor(HexColor(BRAND_COLOR))
        c.setFont(self.bold_font, 11)
        c.drawString(MARGIN, self.y - 12, title)
        c.setStrokeColor(HexColor(BRAND_COLOR))
        c.line(MARGIN, self.y - 16, PAGE_WIDTH - MARGIN, self.y - 16)
        self.y -= 22

    def _draw_section(self, title, rows):
        self._draw_section_title(title)
        label_width = CONTENT_WIDTH * 0.4
        for i, (label, value) in enumerate(rows):
            lines = simpleSplit(value, self.font, 9, CONTENT_WIDTH - label_width - 12) or ['']
            height = ROW_HEIGHT + (len(lines) - 1) * 11
            self._ensure_space(height)
            c = self.canvas
            if i % 2:
                c.setFillColor(ROW_SHADE)
                c.rect(MARGIN, self.y - height, CONTENT_WIDTH, height, stroke=0, fill=1)
            c.setStrokeColor(BORDER)
            c.rect(MARGIN, self.y - height, CONTENT_WIDTH, height, stroke=1, fill=0)
            c.setFillColor(TEXT)
            c.setFont(self.bold_font, 9)
            c.drawString(MARGIN + 6, self.y - 11, label)
            if value == 'NOT OK':
                c.setFillColor(HexColor(FAILURE_COLOR))
            c.setFont(self.font, 9)
            for n, line in enumerate(lines):
                c.drawString(MARGIN + label_width + 6, self.y - 11 - n * 11, line)
            self.y -= height
        self.y -= 10

    def _draw_defects(self, rows):
        self._draw_section_title('Defects')
        columns = [('Code', 60), ('Description', CONTENT_WIDTH - 180), ('Major', 60), ('Minor', 60)]
        self._draw_defect_row([name for name, _ in columns], columns, bold=True, shade=True)
        for row in rows:
            self._draw_defect_row([
                display_value(row.get('defect_code')),
                display_value(row.get('description')),
                str(row.get('major_count') or 0),
                str(row.get('minor_count') or 0),
            ], columns)
        totals = defect_totals(rows)
        self._draw_defect_row(['Total', '', str(totals['major']), str(totals['minor'])],
                              columns, bold=True, shade=True)
        self.y -= 10

    def _draw_defect_row(self, values, columns, bold=False, shade=False):
        font = self.bold_font if bold else self.font
        cells = [simpleSplit(value, font, 9, width - 8) or [''] for value, (_, width) in zip(values, columns)]
        height = ROW_HEIGHT + (max(len(lines) for lines in cells) - 1) * 11
        self._ensure_space(height)
        c = self.canvas
        if shade:
            c.setFillColor(ROW_SHADE)
            c.rect(MARGIN, self.y - height, CONTENT_WIDTH, height, stroke=0, fill=1)
        c.setStrokeColor(BORDER)
        c.setFillColor(TEXT)
        c.setFont(font, 9)
        x = MARGIN
        for lines, (_, width) in zip(cells, columns):
            c.rect(x, self.y - height, width, height, stroke=1, fill=0)
            for n, line in enumerate(lines):
                c.drawString(x + 4, self.y - 11 - n * 11, line)
            x += width
        self.y -= height

    def _draw_remarks(self, remarks):
        self._draw_section_title('QC Inspector Remarks')
        for paragraph in remarks.splitlines():
            for line in simpleSplit(paragraph, self.font, 9, CONTENT_WIDTH) or ['']:
                self._ensure_space(12)
                c = self.canvas
                c.setFillColor(TEXT)
                c.setFont(self.font, 9)
                c.drawString(MARGIN, self.y - 10, line)
                self.y -= 12

    # ─── Photos ───

    def _draw_photo_page(self, label, url):
        self._new_page(label)
        c = self.canvas
        c.setFillColor(HexColor(BRAND_COLOR))
        c.setFont(self.bold_font, 14)
        c.drawString(MARGIN, self.y - 16, label)
        self.y -= 30

        image = self._load_image(label, url)
        box_height = self.y - MARGIN - FOOTER_HEIGHT
        if image is None:
            c.setStrokeColor(BORDER)
            c.rect(MARGIN, self.y - box_height, CONTENT_WIDTH, box_height, stroke=1, fill=0)
            c.setFillColor(MUTED)
            c.setFont(self.font, 12)
            c.drawCentredString(PAGE_WIDTH / 2, self.y - box_height / 2, IMAGE_PLACEHOLDER)
            return

        width, height = image.size
        scale = min(CONTENT_WIDTH / width, box_height / height)
        draw_width, draw_height = width * scale, height * scale
        x = MARGIN + (CONTENT_WIDTH - draw_width) / 2
        c.drawImage(ImageReader(image), x, self.y - draw_height, draw_width, draw_height)
        self.y -= draw_height

    def _load_image(self, label, url):
        try:
            data = self.image_fetcher(url)
            image = Image.open(io.BytesIO(data))
            image.load()
            return image.convert('RGB')
        except (requests.RequestException, OSError, ValueError) as e:
            logger.warning(f'Could not load image for {label} ({url}): {e}')
            return None


def render_report_pdf(doc, image_fetcher=None, generated_at=None, fonts=None):
    """Return ``(pdf_bytes, page_titles)`` for an inspection document."""
    pdf = InspectionPdf(doc, image_fetcher=image_fetcher, generated_at=generated_at, fonts=fonts)
    data = pdf.render()
    return data, pdf.page_titles


def to_base64(data):
    return base64.b64encode(data).decode('ascii')
