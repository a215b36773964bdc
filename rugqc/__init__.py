import os
import logging
from logging.handlers import RotatingFileHandler
from flask import Flask, jsonify
from dotenv import load_dotenv

from rugqc.config import config
from rugqc.extensions import db, cors, limiter


def create_app(config_name=None, overrides=None):
    load_dotenv()

    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')

    app = Flask(__name__)
    app.config.from_object(config.get(config_name, config['default']))
    if overrides:
        app.config.update(overrides)

    db.init_app(app)
    cors.init_app(app, origins=app.config.get('CORS_ORIGINS', ['*']),
                  allow_headers=['Content-Type', 'Authorization',
                                 'X-User-Id', 'X-User-Name', 'X-User-Role', 'X-User-Email'],
                  methods=['GET', 'POST', 'PUT', 'DELETE', 'OPTIONS'])
    limiter.init_app(app)

    _setup_logging(app)

    if app.config.get('UPLOAD_STORAGE', 'local') == 'local':
        os.makedirs(app.config['UPLOAD_DIR'], exist_ok=True)

    from rugqc.middleware.error_handler import register_error_handlers
    register_error_handlers(app)

    @app.after_request
    def add_security_headers(response):
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'DENY'
        response.headers['Strict-Transport-Security'] = 'max-age=31536000'
        response.headers.setdefault('Cache-Control', 'no-store')
        return response

    @app.route('/api/v1/health', methods=['GET'])
    def health_check():
        db_status = 'connected'
        try:
            db.session.execute(db.text('SELECT 1'))
        except Exception:
            db_status = 'disconnected'
        return jsonify({
            'status': 'ok',
            'database': db_status,
            'version': '1.0.0',
            'environment': config_name,
        })

    _register_blueprints(app)

    if app.config.get('TESTING') or app.debug:
        with app.app_context():
            import rugqc.models  # noqa: F401
            db.create_all()

    return app


def _register_blueprints(app):
    from rugqc.routes.inspection_routes import inspection_bp
    from rugqc.routes.option_routes import option_bp
    from rugqc.routes.settings_routes import settings_bp
    from rugqc.routes.email_routes import email_bp
    from rugqc.routes.file_routes import file_bp

    for bp in (inspection_bp, option_bp, settings_bp, email_bp, file_bp):
        app.register_blueprint(bp, url_prefix='/api/v1')


def _setup_logging(app):
    log_level = getattr(logging, app.config.get('LOG_LEVEL', 'DEBUG').upper(), logging.DEBUG)
    log_file = app.config.get('LOG_FILE', './logs/app.log')

    os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)

    handler = RotatingFileHandler(log_file, maxBytes=10_000_000, backupCount=5)
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter('[%(asctime)s] %(levelname)s in %(module)s: %(message)s'))

    # app.logger is the 'rugqc' logger, parent of every service module logger
    app.logger.addHandler(handler)
    app.logger.setLevel(log_level)
