"""Report content shared by the PDF and the email body."""
from rugqc.constants import REPORT_SECTIONS, FIELD_LABELS, PHOTO_KEYS, PHOTO_LABELS

SUCCESS_COLOR = '#22c55e'
FAILURE_COLOR = '#ef4444'
BRAND_COLOR = '#1e3a5f'


def display_value(value):
    if value is None or (isinstance(value, str) and not value.strip()):
        return '-'
    return str(value)


def is_pass(doc):
    return doc.get('inspection_result') == 'PASS'


def result_color(doc):
    return SUCCESS_COLOR if is_pass(doc) else FAILURE_COLOR


def report_sections(doc):
    """``[(title, [(label, value), ...]), ...]`` for the fields ``doc`` carries.

    Fields absent from ``doc`` are skipped, and so is a section left empty.
    """
    sections = []
    for title, fields in REPORT_SECTIONS:
        rows = [(FIELD_LABELS.get(f, f), display_value(doc[f])) for f in fields if f in doc]
        if rows:
            sections.append((title, rows))
    return sections


def defect_rows(doc):
    return [row for row in (doc.get('defects') or []) if isinstance(row, dict)]


def defect_totals(rows):
    major = sum(_count(r.get('major_count')) for r in rows)
    minor = sum(_count(r.get('minor_count')) for r in rows)
    return {'major': major, 'minor': minor, 'total': major + minor}


def _count(value):
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


def photo_entries(doc):
    """``[(label, url), ...]``: named slots, then other photos, then NOT-OK photos."""
    entries = []
    photos = doc.get('photos') or {}
    for key in PHOTO_KEYS:
        if photos.get(key):
            entries.append((PHOTO_LABELS[key], photos[key]))
    for i, url in enumerate(doc.get('other_photos') or []):
        if url:
            entries.append((f'Other Photo {i + 1}', url))
    for field, url in (doc.get('not_ok_photos') or {}).items():
        if url:
            entries.append((f'NOT OK: {FIELD_LABELS.get(field, field)}', url))
    return entries


def report_filename(doc):
    return f"Final_Inspection_{doc.get('ops_no') or ''}_{doc.get('inspection_date') or ''}.pdf"


def report_subject(doc):
    return (f"Final Inspection: {doc.get('customer_name') or ''} - {doc.get('buyer_design_name') or ''} "
            f"[{doc.get('inspection_result') or ''}] - {doc.get('document_no') or ''}")
