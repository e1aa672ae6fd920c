# portfolio/config.py
import os
import binascii


def _database_url(default):
    url = os.environ.get('DATABASE_URL', default)
    # Heroku-style URLs still use the legacy scheme name
    if url.startswith('postgres://'):
        url = 'postgresql://' + url[len('postgres://'):]
    return url


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or binascii.hexlify(os.urandom(24)).decode()

    JWT_SECRET = os.environ.get('JWT_SECRET') or SECRET_KEY
    JWT_ALGORITHM = 'HS256'
    JWT_EXPIRES_HOURS = int(os.environ.get('JWT_EXPIRES_HOURS', 24 * 7))

    BASE_DIR = os.path.abspath(os.path.dirname(__file__))

    DATABASE_PATH = os.path.join(BASE_DIR, 'portfolio_data.db')

    SQLALCHEMY_DATABASE_URI = _database_url(f'sqlite:///{DATABASE_PATH}')

    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Rich-text bodies carry inline base64 images
    MAX_CONTENT_LENGTH = 50 * 1024 * 1024

    ENV_NAME = os.environ.get('APP_ENV') or os.environ.get('NODE_ENV', 'development')
    PORT = int(os.environ.get('PORT', 3000))
    FRONTEND_URL = os.environ.get('FRONTEND_URL', '*')
    LOG_TIMEZONE = os.environ.get('LOG_TIMEZONE', 'UTC')

    # Optional admin bootstrap on start-up
    ADMIN_NAME = os.environ.get('ADMIN_NAME', 'Admin')
    ADMIN_EMAIL = os.environ.get('ADMIN_EMAIL')
    ADMIN_PASSWORD = os.environ.get('ADMIN_PASSWORD')

    # Contact notifications through Brevo; disabled when either is missing
    BREVO_API_KEY = os.environ.get('BREVO_API_KEY')
    NOTIFY_EMAIL = os.environ.get('NOTIFY_EMAIL')


class TestingConfig(Config):
    TESTING = True
    ENV_NAME = 'test'
    SECRET_KEY = 'test-secret-key'
    JWT_SECRET = 'test-jwt-secret'
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    ADMIN_EMAIL = None
    ADMIN_PASSWORD = None
    BREVO_API_KEY = None
    NOTIFY_EMAIL = None


def is_production(app):
    return app.config.get('ENV_NAME') == 'production'
