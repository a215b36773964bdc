from flask import jsonify


def success_response(data=None, message='Success', status_code=200, meta=None):
    body = {'success': True, 'message': message}
    if data is not None:
        body['data'] = data
    if meta is not None:
        body['meta'] = meta
    return jsonify(body), status_code


def error_response(message='An error occurred', status_code=400, errors=None):
    return jsonify({
        'success': False,
        'message': message,
        'errors': errors or [],
    }), status_code


def validation_error(errors, message='Validation failed'):
    """400 with field-level errors, from a marshmallow messages dict or a ready list."""
    if isinstance(errors, dict):
        formatted = []
        for field, msgs in errors.items():
            for msg in (msgs if isinstance(msgs, list) else [msgs]):
                if isinstance(msg, dict) and 'message' in msg:
                    formatted.append(msg)
                else:
                    formatted.append({'field': field, 'message': str(msg)})
    else:
        formatted = list(errors or [])
    return error_response(message, 400, formatted)
