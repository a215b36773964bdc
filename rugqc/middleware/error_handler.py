import traceback
from flask import current_app
from marshmallow import ValidationError
from sqlalchemy.exc import IntegrityError, OperationalError
from werkzeug.exceptions import HTTPException

from rugqc.exceptions import InspectionError
from rugqc.extensions import db
from rugqc.utils.responses import error_response, validation_error


def _description(e, default):
    return str(e.description) if getattr(e, 'description', None) else default


def register_error_handlers(app):

    @app.errorhandler(400)
    def bad_request(e):
        return error_response(_description(e, 'Bad request'), 400)

    @app.errorhandler(401)
    def unauthorized(e):
        return error_response('Unauthorized', 401)

    @app.errorhandler(403)
    def forbidden(e):
        return error_response('Forbidden', 403)

    @app.errorhandler(404)
    def not_found(e):
        return error_response('Resource not found', 404)

    @app.errorhandler(405)
    def method_not_allowed(e):
        return error_response('Method not allowed', 405)

    @app.errorhandler(413)
    def too_large(e):
        return error_response('Request too large. Reduce photo sizes and resubmit.', 413)

    @app.errorhandler(422)
    def unprocessable(e):
        return error_response(_description(e, 'Unprocessable entity'), 422)

    @app.errorhandler(429)
    def rate_limited(e):
        return error_response('Rate limit exceeded. Please slow down.', 429)

    @app.errorhandler(HTTPException)
    def http_error(e):
        return error_response(_description(e, e.name), e.code)

    @app.errorhandler(ValidationError)
    def marshmallow_validation_error(e):
        messages = e.messages if isinstance(e.messages, dict) else {'_schema': e.messages}
        return validation_error(messages)

    @app.errorhandler(InspectionError)
    def inspection_error(e):
        if e.status_code >= 500:
            current_app.logger.error(f'{type(e).__name__}: {e.message}')
        else:
            current_app.logger.info(f'{type(e).__name__}: {e.message}')
        return error_response(e.message, e.status_code, e.errors)

    @app.errorhandler(IntegrityError)
    def db_integrity_error(e):
        db.session.rollback()
        current_app.logger.error(f'IntegrityError: {e}')
        orig = str(e.orig).lower()
        msg = 'A database constraint was violated'
        if 'unique' in orig or 'duplicate' in orig:
            msg = 'A record with this value already exists'
        elif 'not-null' in orig or 'not null' in orig:
            msg = 'A required field is missing'
        if current_app.debug:
            msg = f'{msg}: {e.orig}'
        return error_response(msg, 409)

    @app.errorhandler(OperationalError)
    def db_operational_error(e):
        db.session.rollback()
        current_app.logger.error(f'OperationalError: {e}')
        return error_response('Database connection error' if not current_app.debug else str(e), 500)

    @app.errorhandler(500)
    def internal_error(e):
        current_app.logger.error(f'500 Error: {e}\n{traceback.format_exc()}')
        return error_response('Something went wrong' if not current_app.debug else str(e), 500)

    @app.errorhandler(Exception)
    def unhandled_exception(e):
        db.session.rollback()
        current_app.logger.error(f'Unhandled Exception: {e}\n{traceback.format_exc()}')
        msg = 'Something went wrong' if not current_app.debug else f'{type(e).__name__}: {e}'
        return error_response(msg, 500)
