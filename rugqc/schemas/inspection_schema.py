from marshmallow import Schema, fields, validate, validates_schema, ValidationError, pre_load, EXCLUDE

from rugqc.constants import DEFECT_DESCRIPTIONS
from rugqc.exceptions import QuantityParseError
from rugqc.utils.quantities import parse_quantity
from rugqc.utils.validators import sanitize_string, validate_email, CUSTOMER_CODE_REGEX


class DefectSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    defect_code = fields.Str(load_default='', validate=validate.Length(max=20))
    description = fields.Str(load_default='', validate=validate.Length(max=500))
    major_count = fields.Int(load_default=0, validate=validate.Range(min=0))
    minor_count = fields.Int(load_default=0, validate=validate.Range(min=0))

    @pre_load
    def sanitize(self, data, **kwargs):
        data = dict(data)
        for key in ('defect_code', 'description'):
            if data.get(key):
                data[key] = sanitize_string(data[key])
        # Blank counts are recorded as zero
        for key in ('major_count', 'minor_count'):
            try:
                data[key] = parse_quantity(data.get(key), field=key, empty=0)
            except QuantityParseError as e:
                raise ValidationError(e.message, key)
        if data.get('defect_code') and not data.get('description'):
            data['description'] = DEFECT_DESCRIPTIONS.get(data['defect_code'], '')
        return data

    @validates_schema
    def validate_row(self, data, **kwargs):
        if not data.get('defect_code') and not data.get('description'):
            raise ValidationError('Defect code or description required', 'defect_code')


class CustomerSchema(Schema):
    id = fields.Int(dump_only=True)
    name = fields.Str(required=True, validate=validate.Length(min=1, max=200))
    code = fields.Str(required=True, validate=[
        validate.Length(min=1, max=50),
        validate.Regexp(CUSTOMER_CODE_REGEX, error='Only alphanumeric and hyphens allowed')
    ])

    @pre_load
    def sanitize(self, data, **kwargs):
        if not isinstance(data, dict):
            return data
        for key in ('name', 'code'):
            if isinstance(data.get(key), str):
                data[key] = sanitize_string(data[key]).upper()
        return data


class CustomOptionSchema(Schema):
    value = fields.Str(required=True, validate=validate.Length(min=1, max=200))

    @pre_load
    def sanitize(self, data, **kwargs):
        if not isinstance(data, dict):
            return data
        if isinstance(data.get('value'), str):
            data['value'] = sanitize_string(data['value'])
        return data


class EmailSettingsSchema(Schema):
    recipients = fields.List(fields.Str(), required=True)

    @pre_load
    def normalize(self, data, **kwargs):
        if not isinstance(data, dict):
            return data
        recipients = data.get('recipients')
        if isinstance(recipients, list):
            cleaned = []
            for email in recipients:
                email = str(email or '').strip().lower()
                if email and email not in cleaned:
                    cleaned.append(email)
            data['recipients'] = cleaned
        return data

    @validates_schema
    def validate_recipients(self, data, **kwargs):
        errors = []
        for i, email in enumerate(data.get('recipients', [])):
            msg = validate_email(email)
            if msg:
                errors.append({'field': f'recipients[{i}]', 'message': f'{msg}: {email}'})
        if errors:
            raise ValidationError(errors)


class EmailPayloadSchema(Schema):
    """Body accepted by the email relay endpoint."""
    class Meta:
        unknown = EXCLUDE

    to = fields.Raw(required=True)
    subject = fields.Str(required=True, validate=validate.Length(min=1, max=500))
    html = fields.Str(required=True)
    pdfBase64 = fields.Str(load_default=None, allow_none=True)
    pdfFilename = fields.Str(load_default='report.pdf', allow_none=True)

    @validates_schema
    def validate_to(self, data, **kwargs):
        to = data.get('to')
        recipients = to if isinstance(to, list) else [to]
        if not recipients or not all(isinstance(r, str) and r.strip() for r in recipients):
            raise ValidationError('to must be an email or a list of emails', 'to')
        for email in recipients:
            if validate_email(email):
                raise ValidationError(f'Invalid email format: {email}', 'to')
