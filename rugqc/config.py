import os


def _build_database_url():
    """Build DATABASE_URL from individual parts OR use full URL if provided."""
    full_url = os.environ.get('DATABASE_URL')
    if full_url:
        return full_url

    # Build from individual env vars
    host = os.environ.get('DB_HOST', 'localhost')
    port = os.environ.get('DB_PORT', '5432')
    name = os.environ.get('DB_NAME', 'final_inspection')
    user = os.environ.get('DB_USER', 'postgres')
    password = os.environ.get('DB_PASSWORD', 'postgres')
    return f'postgresql://{user}:{password}@{host}:{port}/{name}'


def _get_engine_options(pool_size=None, max_overflow=None):
    """Build SQLAlchemy engine options with schema search_path."""
    schema = os.environ.get('DB_SCHEMA', 'public')
    options = {
        'pool_pre_ping': True,
        'pool_recycle': 300,
        'connect_args': {
            'connect_timeout': 10,
            'options': f'-csearch_path={schema},public'
        }
    }
    if pool_size:
        options['pool_size'] = pool_size
    if max_overflow:
        options['max_overflow'] = max_overflow
    return options


def _get_option_store_backends():
    """Per option type store selection. Override with OPTION_STORE_BACKENDS=type:backend,..."""
    backends = {
        'inspectors': 'local',
        'merchants': 'local',
        'buyer_designs': 'local',
        'aql_levels': 'local',
        'product_sizes': 'local',
        'customers': 'database',
    }
    raw = os.environ.get('OPTION_STORE_BACKENDS', '')
    for pair in filter(None, (p.strip() for p in raw.split(','))):
        key, _, backend = pair.partition(':')
        if key and backend in ('local', 'database'):
            backends[key.strip()] = backend
    return backends


class BaseConfig:
    SECRET_KEY = os.environ.get('SECRET_KEY', 'dev-secret')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    MAX_CONTENT_LENGTH = 100 * 1024 * 1024  # 11 photo slots + extras per submission
    API_SECRET_TOKEN = os.environ.get('API_SECRET_TOKEN', 'local-dev-token-2026')
    AUTH_ENABLED = os.environ.get('AUTH_ENABLED', 'true').lower() in ('true', '1', 'yes')
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', 'http://localhost:5173,http://localhost:3000').split(',')
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')
    LOG_FILE = os.environ.get('LOG_FILE', './logs/app.log')

    # Database schema (public for local)
    DB_SCHEMA = os.environ.get('DB_SCHEMA', 'public')

    # Photo storage
    UPLOAD_DIR = os.environ.get('UPLOAD_DIR', './uploads')
    UPLOAD_STORAGE = os.environ.get('UPLOAD_STORAGE', 'local')
    AWS_REGION = os.environ.get('AWS_REGION', 'ap-south-1')
    AWS_S3_BUCKET = os.environ.get('AWS_S3_BUCKET')
    PUBLIC_BASE_URL = os.environ.get('PUBLIC_BASE_URL', 'http://localhost:5000')
    PHOTO_COLLECTION = os.environ.get('PHOTO_COLLECTION', 'final-inspection-images')
    ALLOWED_EXTENSIONS = {'jpg', 'jpeg', 'png', 'webp'}

    # Report rendering
    IMAGE_FETCH_TIMEOUT = float(os.environ.get('IMAGE_FETCH_TIMEOUT', '20'))
    # TTF used for report text; Helvetica when unset
    PDF_FONT_PATH = os.environ.get('PDF_FONT_PATH') or None
    PDF_BOLD_FONT_PATH = os.environ.get('PDF_BOLD_FONT_PATH') or None

    # Email delivery
    EMAIL_ENABLED = os.environ.get('EMAIL_ENABLED', 'true').lower() == 'true'
    # Relay URL, normally a separate worker's /api/v1/send-email. Unset skips delivery.
    EMAIL_ENDPOINT_URL = os.environ.get('EMAIL_ENDPOINT_URL') or None
    SMTP_HOST = os.environ.get('SMTP_HOST', 'smtp.gmail.com')
    SMTP_PORT = int(os.environ.get('SMTP_PORT', '587'))
    SMTP_USER = os.environ.get('SMTP_USER', '')
    SMTP_PASSWORD = os.environ.get('SMTP_PASSWORD', '')
    MAIL_FROM = os.environ.get('MAIL_FROM', '"Eastern Mills QC" <automations@easternmills.com>')
    EMAIL_TIMEOUT = float(os.environ.get('EMAIL_TIMEOUT', '60'))

    # Custom option overlay
    LOCAL_OPTIONS_FILE = os.environ.get('LOCAL_OPTIONS_FILE', './data/local_options.json')
    OPTION_STORE_BACKENDS = _get_option_store_backends()

    # Pagination defaults
    DEFAULT_PAGE = 1
    DEFAULT_PER_PAGE = 20
    MAX_PER_PAGE = 100

    # Rate limiting
    RATELIMIT_DEFAULT = "100/minute"
    RATELIMIT_STORAGE_URI = "memory://"


class DevelopmentConfig(BaseConfig):
    """Local development: points to localhost PostgreSQL (public schema)."""
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = _build_database_url()
    SQLALCHEMY_ENGINE_OPTIONS = _get_engine_options()


class StagingConfig(BaseConfig):
    """Staging: hosted PostgreSQL, S3 photo bucket."""
    DEBUG = True
    UPLOAD_STORAGE = os.environ.get('UPLOAD_STORAGE', 's3')
    SQLALCHEMY_DATABASE_URI = _build_database_url()
    SQLALCHEMY_ENGINE_OPTIONS = _get_engine_options(pool_size=5, max_overflow=10)


class ProductionConfig(BaseConfig):
    """Production: stricter settings."""
    DEBUG = False
    UPLOAD_STORAGE = os.environ.get('UPLOAD_STORAGE', 's3')
    SQLALCHEMY_DATABASE_URI = _build_database_url()
    RATELIMIT_STORAGE_URI = os.environ.get('REDIS_URL', 'memory://')
    SQLALCHEMY_ENGINE_OPTIONS = _get_engine_options(pool_size=10, max_overflow=20)


class TestingConfig(BaseConfig):
    """Unit / integration tests: in-memory SQLite."""
    TESTING = True
    AUTH_ENABLED = True
    RATELIMIT_ENABLED = False
    UPLOAD_STORAGE = 'local'
    SQLALCHEMY_DATABASE_URI = os.environ.get('TEST_DATABASE_URL', 'sqlite://')
    SQLALCHEMY_ENGINE_OPTIONS = {}


config = {
    'development': DevelopmentConfig,
    'staging': StagingConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig,
}
