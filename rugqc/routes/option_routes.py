from flask import Blueprint, request

from rugqc.constants import (
    COMPANIES, COMPANY_NAMES, DOCUMENT_NUMBERS, DEFECT_CODES, PHOTO_TYPES, MATERIAL_TYPES,
    PACKING_TYPES, OK_NOT_OK, YES_NO, INSPECTION_RESULTS, FIELD_LABELS, REQUIRED_FIELDS,
)
from rugqc.middleware.auth_middleware import token_required
from rugqc.schemas.inspection_schema import CustomerSchema, CustomOptionSchema
from rugqc.services.option_store import OptionRegistry, OPTION_TYPES, CUSTOMERS_KEY
from rugqc.utils.responses import success_response, error_response

option_bp = Blueprint('options', __name__)
customer_schema = CustomerSchema()
option_schema = CustomOptionSchema()


@option_bp.route('/options/<option_type>', methods=['GET'])
@token_required
def get_options(option_type):
    if option_type not in OPTION_TYPES:
        return error_response(f'Unknown option type: {option_type}', 404)
    return success_response(data=OptionRegistry.from_config().options(option_type))


@option_bp.route('/options/<option_type>', methods=['POST'])
@token_required
def add_option(option_type):
    if option_type not in OPTION_TYPES or option_type == CUSTOMERS_KEY:
        return error_response(f'Unknown option type: {option_type}', 404)
    data = option_schema.load(request.get_json() or {})
    options = OptionRegistry.from_config().add_option(option_type, data['value'])
    return success_response(data=options, message=f'{data["value"]} added', status_code=201)


@option_bp.route('/customers', methods=['GET'])
@token_required
def get_customers():
    return success_response(data=OptionRegistry.from_config().customers())


@option_bp.route('/customers', methods=['POST'])
@token_required
def create_customer():
    data = customer_schema.load(request.get_json() or {})
    registry = OptionRegistry.from_config()
    if registry.find_customer(data['name']):
        return error_response(f'Customer {data["name"]} already exists', 409,
                              [{'field': 'name', 'message': 'Customer already exists'}])
    registry.add_option(CUSTOMERS_KEY, {'name': data['name'], 'code': data['code']})
    return success_response(data={'name': data['name'], 'code': data['code']},
                            message='Customer added', status_code=201)


@option_bp.route('/lookups/defect-codes', methods=['GET'])
@token_required
def lookup_defect_codes():
    return success_response(data=DEFECT_CODES)


@option_bp.route('/lookups/photo-types', methods=['GET'])
@token_required
def lookup_photo_types():
    return success_response(data=PHOTO_TYPES)


@option_bp.route('/lookups/form', methods=['GET'])
@token_required
def lookup_form():
    """Fixed enumerations and labels the inspection form is built from."""
    return success_response(data={
        'companies': [{'code': c, 'name': COMPANY_NAMES[c], 'document_no': DOCUMENT_NUMBERS[c]}
                      for c in COMPANIES],
        'material_types': MATERIAL_TYPES,
        'packing_types': PACKING_TYPES,
        'ok_not_ok': list(OK_NOT_OK),
        'yes_no': list(YES_NO),
        'inspection_results': list(INSPECTION_RESULTS),
        'required_fields': REQUIRED_FIELDS,
        'field_labels': FIELD_LABELS,
    })
