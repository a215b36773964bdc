from flask import render_template

from rugqc.services.report_data import (
    report_sections, defect_rows, defect_totals, photo_entries, is_pass, result_color, display_value,
    BRAND_COLOR,
)


def render_report_html(doc):
    """Email body for an inspection document, as a self-contained HTML fragment."""
    rows = defect_rows(doc)
    return render_template(
        'email/inspection_report.html',
        doc=doc,
        passed=is_pass(doc),
        result_color=result_color(doc),
        brand_color=BRAND_COLOR,
        sections=report_sections(doc),
        defects=rows,
        totals=defect_totals(rows),
        photos=photo_entries(doc),
        remarks=(doc.get('qc_inspector_remarks') or '').strip(),
        display=display_value,
    )
