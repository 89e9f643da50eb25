import json
import os
from datetime import timedelta
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Config:
    """Base configuration class."""
    SECRET_KEY = os.environ.get('SECRET_KEY')

    # Data directory holds the sqlite database, uploads and invoices
    APP_DATA_DIR = os.environ.get('APP_DATA_DIR', 'instance')
    DATABASE_PATH = os.environ.get('DATABASE_PATH', os.path.join(APP_DATA_DIR, 'shining_star.db'))

    FLASK_ENV = os.environ.get('FLASK_ENV', 'development')
    if FLASK_ENV == 'CHANGE_THIS_ENVIRONMENT':
        raise ValueError("FLASK_ENV must be changed from the default placeholder value")

    # Application settings
    DEBUG = False
    TESTING = False

    # Session configuration (configurable via environment variables)
    PERMANENT_SESSION_LIFETIME = timedelta(hours=int(os.environ.get('SESSION_LIFETIME_HOURS', '24')))
    SESSION_COOKIE_SECURE = True  # Only send cookies over HTTPS
    SESSION_COOKIE_HTTPONLY = True  # Prevent XSS attacks
    SESSION_COOKIE_SAMESITE = 'Lax'  # CSRF protection

    # Cache settings (configurable via environment variables)
    CACHE_TYPE = 'SimpleCache'
    CACHE_DEFAULT_TIMEOUT = int(os.environ.get('CACHE_DEFAULT_TIMEOUT', '300'))  # 5 minutes default

    # Business settings
    BUSINESS_NAME = os.environ.get('BUSINESS_NAME', 'Shining Star Cleaning Services')
    BUSINESS_ADDRESS = os.environ.get('BUSINESS_ADDRESS', '1650 Woodbourn St, Philadelphia, PA')
    BUSINESS_PHONE = os.environ.get('BUSINESS_PHONE', '(215) 555-STAR')
    BUSINESS_EMAIL = os.environ.get('BUSINESS_EMAIL', 'info@shiningstar-cleaning.com')
    CURRENCY = 'USD'

    # Distance lookup settings: 'fixed' (lookup table) or 'google' (Distance Matrix API)
    DISTANCE_RESOLVER = os.environ.get('DISTANCE_RESOLVER', 'fixed')
    GOOGLE_MAPS_API_KEY = os.environ.get('GOOGLE_MAPS_API_KEY')
    DISTANCE_TIMEOUT_SECONDS = float(os.environ.get('DISTANCE_TIMEOUT_SECONDS', '5'))
    # JSON object of address -> one-way miles for the fixed resolver
    DISTANCE_TABLE = json.loads(os.environ.get('DISTANCE_TABLE', '{}'))
    DISTANCE_DEFAULT_MILES = None

    # Upload settings (configurable via environment variables)
    MAX_CONTENT_LENGTH = int(os.environ.get('MAX_CONTENT_LENGTH', str(5 * 1024 * 1024)))  # 5MB max upload default
    UPLOAD_FOLDER = os.environ.get('UPLOAD_FOLDER', os.path.join(APP_DATA_DIR, 'uploads', 'portfolio'))
    INVOICE_FOLDER = os.environ.get('INVOICE_FOLDER', os.path.join(APP_DATA_DIR, 'invoices'))
    ALLOWED_EXTENSIONS = {'jpg', 'jpeg', 'png', 'gif'}

    # Initial admin account, created only when the users table is empty
    ADMIN_USERNAME = os.environ.get('ADMIN_USERNAME', 'admin')
    ADMIN_PASSWORD = os.environ.get('ADMIN_PASSWORD')
    ADMIN_EMAIL = os.environ.get('ADMIN_EMAIL', 'admin@shiningstar-cleaning.com')

    SUPPORTED_LANGUAGES = ('en', 'ru', 'es')
    DEFAULT_LANGUAGE = 'en'


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    SESSION_COOKIE_SECURE = os.environ.get('SESSION_COOKIE_SECURE', 'false').lower() == 'true'  # Allow HTTP in development
    SESSION_COOKIE_DOMAIN = None  # Allow cookies on localhost and IP addresses
    DISTANCE_DEFAULT_MILES = float(os.environ.get('DISTANCE_DEFAULT_MILES', '0'))


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    SECRET_KEY = 'test-secret-key-do-not-use-in-production'
    SESSION_COOKIE_SECURE = False  # Allow HTTP in testing
    CACHE_TYPE = 'NullCache'
    DISTANCE_RESOLVER = 'fixed'


class ProductionConfig(Config):
    """Production configuration."""
    # Explicitly disable debug mode in production
    DEBUG = False

    # Ensure HTTPS in production
    SESSION_COOKIE_SECURE = True

    # Additional production security headers
    SEND_FILE_MAX_AGE_DEFAULT = timedelta(hours=1)


def check_secret_key(secret_key):
    """Reject missing or placeholder secret keys."""
    if not secret_key:
        raise ValueError("SECRET_KEY environment variable must be set")
    if secret_key in ['CHANGE_THIS_SECRET_KEY', 'your-secret-key-here']:
        raise ValueError("SECRET_KEY must be changed from the default placeholder value")


# Configuration dictionary
config = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig
}
