from flask import Blueprint, request

from rugqc.middleware.auth_middleware import token_required, role_required
from rugqc.schemas.inspection_schema import EmailSettingsSchema
from rugqc.services.option_store import OptionRegistry
from rugqc.utils.responses import success_response

settings_bp = Blueprint('settings', __name__)
email_settings_schema = EmailSettingsSchema()


@settings_bp.route('/settings/email', methods=['GET'])
@token_required
def get_email_settings():
    return success_response(data={'recipients': OptionRegistry.from_config().recipients()})


@settings_bp.route('/settings/email', methods=['PUT'])
@token_required
@role_required('admin', 'inspector')
def update_email_settings():
    data = email_settings_schema.load(request.get_json() or {})
    recipients = OptionRegistry.from_config().set_recipients(data['recipients'])
    return success_response(data={'recipients': recipients}, message='Email recipients updated')
