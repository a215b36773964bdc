from functools import wraps
from flask import request, g, current_app
from rugqc.utils.responses import error_response


def _user_from_headers(defaults):
    return {
        'user_id': request.headers.get('X-User-Id', defaults.get('user_id')),
        'user_name': request.headers.get('X-User-Name', defaults.get('user_name')),
        'role': request.headers.get('X-User-Role', defaults.get('role')),
        'email': request.headers.get('X-User-Email', defaults.get('email', '')),
    }


def token_required(f):
    """Validate Bearer token and put the calling inspector on Flask g."""
    @wraps(f)
    def decorated(*args, **kwargs):
        if not current_app.config.get('AUTH_ENABLED', True):
            g.current_user = _user_from_headers({
                'user_id': '1', 'user_name': 'QC Station', 'role': 'admin', 'email': 'qc@easternmills.com',
            })
            return f(*args, **kwargs)

        auth_header = request.headers.get('Authorization', '')
        token = auth_header[len('Bearer '):] if auth_header.startswith('Bearer ') else ''

        if not token or token != current_app.config.get('API_SECRET_TOKEN'):
            return error_response('Unauthorized - Invalid or missing token', 401)

        if not request.headers.get('X-User-Id'):
            return error_response('Unauthorized - X-User-Id header required', 401)

        g.current_user = _user_from_headers({'user_name': 'Unknown', 'role': 'inspector'})
        return f(*args, **kwargs)
    return decorated


def role_required(*allowed_roles):
    """Only let users with one of ``allowed_roles`` through."""
    def decorator(f):
        @wraps(f)
        def decorated(*args, **kwargs):
            user_role = g.current_user.get('role', '')
            if user_role not in allowed_roles:
                return error_response(
                    f'Forbidden - Role "{user_role}" cannot do this. Required: {", ".join(allowed_roles)}',
                    403
                )
            return f(*args, **kwargs)
        return decorated
    return decorator
