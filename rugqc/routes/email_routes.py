import binascii
import smtplib

from flask import Blueprint, request, jsonify, current_app
from marshmallow import ValidationError

from rugqc.extensions import limiter, EMAIL_RATE_LIMIT
from rugqc.middleware.auth_middleware import token_required
from rugqc.schemas.inspection_schema import EmailPayloadSchema
from rugqc.services.delivery import send_smtp_email

email_bp = Blueprint('email', __name__)
payload_schema = EmailPayloadSchema()


@email_bp.route('/send-email', methods=['POST'])
@limiter.limit(EMAIL_RATE_LIMIT)
@token_required
def send_email():
    """SMTP relay used by the report dispatcher."""
    try:
        data = payload_schema.load(request.get_json(silent=True) or {})
    except ValidationError as e:
        return jsonify({'success': False, 'error': 'Invalid email payload', 'errors': e.messages}), 400

    try:
        send_smtp_email(data['to'], data['subject'], data['html'],
                        pdf_base64=data.get('pdfBase64'), pdf_filename=data.get('pdfFilename'))
    except (smtplib.SMTPException, OSError, binascii.Error) as e:
        current_app.logger.error(f'SMTP send failed for "{data["subject"]}": {e}')
        return jsonify({'success': False, 'error': str(e)}), 500

    return jsonify({'success': True, 'message': 'Email sent successfully'})
