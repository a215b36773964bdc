import io

from flask import Blueprint, request, send_file
from sqlalchemy import or_

from rugqc.middleware.auth_middleware import token_required, role_required
from rugqc.models.inspection import InspectionRecord
from rugqc.services.form_state import InspectionForm, default_fields
from rugqc.services.inspection_service import submit_inspection, render_pdf_for, deliver_report, delete_record
from rugqc.services.option_store import OptionRegistry
from rugqc.utils.pagination import get_pagination_params, paginate_query
from rugqc.utils.responses import success_response, error_response

inspection_bp = Blueprint('inspections', __name__)


def _get_record(inspection_id):
    return InspectionRecord.query.get_or_404(inspection_id)


@inspection_bp.route('/inspections/defaults', methods=['GET'])
@token_required
def get_defaults():
    """Initial values for a new inspection form."""
    return success_response(data=default_fields())


@inspection_bp.route('/inspections', methods=['POST'])
@token_required
@role_required('admin', 'inspector')
def create_inspection():
    registry = OptionRegistry.from_config()
    form = InspectionForm.from_request(request.form, request.files,
                                       aql_levels=registry.options('aql_levels'))
    result = submit_inspection(form, registry.recipients())

    if result['email_sent']:
        message = 'Inspection saved and report emailed'
    elif result['delivery_error']:
        message = f"Inspection saved but email failed: {result['delivery_error']}"
    else:
        message = 'Inspection saved'
    return success_response(data=result, message=message, status_code=201)


@inspection_bp.route('/inspections', methods=['GET'])
@token_required
def list_inspections():
    page, per_page = get_pagination_params()
    query = InspectionRecord.query

    search = request.args.get('search')
    if search:
        query = query.filter(or_(
            InspectionRecord.customer_name.ilike(f'%{search}%'),
            InspectionRecord.ops_no.ilike(f'%{search}%'),
            InspectionRecord.buyer_design_name.ilike(f'%{search}%'),
            InspectionRecord.customer_po_no.ilike(f'%{search}%'),
        ))
    if request.args.get('result'):
        query = query.filter_by(inspection_result=request.args['result'].upper())
    if request.args.get('company'):
        query = query.filter_by(company=request.args['company'].upper())

    query = query.order_by(InspectionRecord.created_at.desc(), InspectionRecord.id.desc())
    items, meta = paginate_query(query, page, per_page)
    return success_response(data=[r.to_summary() for r in items], meta=meta)


@inspection_bp.route('/inspections/<int:inspection_id>', methods=['GET'])
@token_required
def get_inspection(inspection_id):
    return success_response(data=_get_record(inspection_id).to_document())


@inspection_bp.route('/inspections/<int:inspection_id>', methods=['DELETE'])
@token_required
@role_required('admin', 'inspector')
def remove_inspection(inspection_id):
    record = _get_record(inspection_id)
    if request.args.get('confirm', '').lower() != 'true':
        return error_response('Deleting an inspection cannot be undone. Repeat with ?confirm=true', 400)
    delete_record(record)
    return success_response(message='Inspection deleted')


@inspection_bp.route('/inspections/<int:inspection_id>/pdf', methods=['GET'])
@token_required
def download_pdf(inspection_id):
    data, filename = render_pdf_for(_get_record(inspection_id))
    return send_file(io.BytesIO(data), mimetype='application/pdf',
                     as_attachment=True, download_name=filename)


@inspection_bp.route('/inspections/<int:inspection_id>/resend', methods=['POST'])
@token_required
@role_required('admin', 'inspector')
def resend_report(inspection_id):
    record = _get_record(inspection_id)
    recipients = OptionRegistry.from_config().recipients()
    if not recipients:
        return error_response('No email recipients configured', 400)
    if not deliver_report(record, recipients):
        return error_response('Email delivery is disabled or not configured', 409)
    return success_response(data={'recipients': recipients}, message='Report sent')
