"""Inspection submission: validate, upload, build, persist, render, deliver."""
import logging
from datetime import datetime, timezone

from flask import current_app, g, has_request_context
from sqlalchemy.exc import SQLAlchemyError

from rugqc.constants import ORDER_FIELDS, QUANTITY_FIELDS
from rugqc.exceptions import ReportGenerationError, DeliveryError
from rugqc.extensions import db
from rugqc.models.audit import AuditLog
from rugqc.models.inspection import InspectionRecord, SECTION_FIELDS, SCALAR_TEXT_FIELDS
from rugqc.services.delivery import dispatch
from rugqc.services.photo_upload import PhotoUploader
from rugqc.services.report_data import report_filename, report_subject
from rugqc.services.report_html import render_report_html
from rugqc.services.report_pdf import render_report_pdf, to_base64
from rugqc.utils.quantities import parse_quantity

logger = logging.getLogger(__name__)


def build_record(values, defects, photo_urls, created_by=None, created_at=None):
    """Assemble an unsaved record from validated form values.

    Empty quantities and defect counts are stored as 0.
    """
    record = InspectionRecord(
        company=values['company'],
        document_no=values['document_no'],
        aql=values['aql'],
        inspection_result=values['inspection_result'],
        created_by=created_by,
        created_at=created_at or datetime.now(timezone.utc),
    )
    for field in ORDER_FIELDS:
        setattr(record, field, str(values.get(field) or '').strip())
    for field in QUANTITY_FIELDS:
        setattr(record, field, parse_quantity(values.get(field), field=field, empty=0))
    for field in SCALAR_TEXT_FIELDS:
        setattr(record, field, values.get(field) or '')
    for column, fields in SECTION_FIELDS.items():
        setattr(record, column, {f: values.get(f, '') for f in fields})

    record.defects = [{
        'defect_code': row.get('defect_code') or '',
        'description': row.get('description') or '',
        'major_count': parse_quantity(row.get('major_count'), field='major_count', empty=0),
        'minor_count': parse_quantity(row.get('minor_count'), field='minor_count', empty=0),
    } for row in defects]

    record.photos = dict(photo_urls.get('photos', {}))
    record.other_photos = list(photo_urls.get('other_photos', []))
    record.not_ok_photos = dict(photo_urls.get('not_ok_photos', {}))
    return record


def persist_record(record):
    try:
        db.session.add(record)
        db.session.flush()
        AuditLog.log('final_inspections', record.id, 'INSERT', new_data=record.to_summary())
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f'Failed to save inspection {record.ops_no}: {e}')
        raise
    logger.info(f'Saved inspection {record.id} ({record.document_no}, OPS {record.ops_no})')
    return record


def render_pdf_for(record, image_fetcher=None):
    """``(pdf_bytes, filename)`` for a stored record."""
    doc = record.to_document()
    data, _ = render_report_pdf(doc, image_fetcher=image_fetcher)
    return data, report_filename(doc)


def deliver_report(record, recipients, image_fetcher=None, send=None):
    """Render and send the report for ``record``. Returns whether anything was sent."""
    if not recipients:
        return False
    if not current_app.config.get('EMAIL_ENABLED', True):
        logger.info(f'Email disabled, report for inspection {record.id} not sent')
        return False
    if not current_app.config.get('EMAIL_ENDPOINT_URL'):
        logger.warning(f'EMAIL_ENDPOINT_URL not set, report for inspection {record.id} not sent')
        return False
    doc = record.to_document()
    pdf_bytes, _ = render_report_pdf(doc, image_fetcher=image_fetcher)
    html = render_report_html(doc)
    return (send or dispatch)(recipients, report_subject(doc), html, to_base64(pdf_bytes), report_filename(doc))


def submit_inspection(form, recipients, uploader=None, image_fetcher=None, send=None):
    """Run a full submission for a populated ``InspectionForm``.

    Nothing is written if validation or any upload fails. Once the record is
    saved, report or delivery failures are reported in the result and the
    record stays.
    """
    form.validate()
    urls = (uploader or PhotoUploader()).upload_form(form)

    created_by = getattr(g, 'current_user', {}).get('user_name') if has_request_context() else None
    record = build_record(form.to_values(), form.defects, urls, created_by=created_by)
    persist_record(record)

    email_sent = False
    delivery_error = None
    try:
        email_sent = deliver_report(record, recipients, image_fetcher=image_fetcher, send=send)
    except (ReportGenerationError, DeliveryError) as e:
        delivery_error = e.message
        logger.error(f'Inspection {record.id} saved but report not delivered: {e.message}')

    form.reset()
    return {
        'inspection': record.to_document(),
        'email_sent': email_sent,
        'delivery_error': delivery_error,
    }


def delete_record(record):
    old_data = record.to_summary()
    db.session.delete(record)
    AuditLog.log('final_inspections', old_data['id'], 'DELETE', old_data=old_data)
    db.session.commit()
    logger.info(f"Deleted inspection {old_data['id']} ({old_data['document_no']})")
