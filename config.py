"""
Flask application configuration classes.
Provides configuration for development, production, and testing environments.
"""

import os
from datetime import timedelta


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).lower() in ('1', 'true', 'yes')


class Config:
    """Base configuration class with common settings."""

    # Secret key for session management and CSRF protection
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'

    # Database configuration
    DATABASE_PATH = os.environ.get('DATABASE_PATH') or 'instance/reservations.db'

    # Security settings
    WTF_CSRF_ENABLED = True
    WTF_CSRF_TIME_LIMIT = 3600  # CSRF token expires after 1 hour
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    SESSION_COOKIE_SECURE = False  # Set to True in production with HTTPS
    PERMANENT_SESSION_LIFETIME = timedelta(
        hours=int(os.environ.get('SESSION_TIMEOUT_HOURS', 8))
    )

    # Timezone used for "today" and past-slot checks
    TIMEZONE = os.environ.get('TIMEZONE', 'Africa/Accra')

    # Restaurant details substituted into customer notifications
    RESTAURANT_NAME = os.environ.get('RESTAURANT_NAME', 'Rose Garden Restaurant')
    RESTAURANT_PHONE = os.environ.get('RESTAURANT_PHONE', '0244 365634')

    # Replaces the leading trunk 0 of local phone numbers for SMS and WhatsApp
    DEFAULT_COUNTRY_CODE = os.environ.get('DEFAULT_COUNTRY_CODE', '233')

    # Booking rules
    LARGE_PARTY_THRESHOLD = int(os.environ.get('LARGE_PARTY_THRESHOLD', 10))

    # Notifications
    NOTIFY_ON_RECEIVED = _env_flag('NOTIFY_ON_RECEIVED', 'true')
    NOTIFICATIONS_DRY_RUN = _env_flag('NOTIFICATIONS_DRY_RUN', 'false')
    NOTIFICATION_TIMEOUT = float(os.environ.get('NOTIFICATION_TIMEOUT', 10))

    # Application settings
    APP_NAME = 'Rose Garden Reservations'
    APP_VERSION = '1.0.0'


class DevelopmentConfig(Config):
    """Development environment configuration."""

    DEBUG = True
    TESTING = False
    SESSION_COOKIE_SECURE = False
    WTF_CSRF_SSL_STRICT = False
    NOTIFICATIONS_DRY_RUN = _env_flag('NOTIFICATIONS_DRY_RUN', 'true')


class ProductionConfig(Config):
    """Production environment configuration."""

    DEBUG = False
    TESTING = False
    SESSION_COOKIE_SECURE = os.environ.get('SESSION_COOKIE_SECURE', 'true').lower() == 'true'
    WTF_CSRF_SSL_STRICT = SESSION_COOKIE_SECURE

    # Simulated sends are never allowed in production
    NOTIFICATIONS_DRY_RUN = False

    # URL scheme preference (follows SESSION_COOKIE_SECURE setting)
    PREFERRED_URL_SCHEME = 'https' if SESSION_COOKIE_SECURE else 'http'

    @classmethod
    def validate(cls) -> None:
        """Validate that required production environment variables are set."""
        secret_key = os.environ.get('SECRET_KEY')
        if not secret_key:
            raise ValueError("SECRET_KEY environment variable must be set in production")
        if len(secret_key) < 32:
            raise ValueError("SECRET_KEY must be at least 32 characters in production")
        if not os.environ.get('DATABASE_PATH'):
            raise ValueError("DATABASE_PATH environment variable must be set in production")


class TestConfig(Config):
    """Testing environment configuration."""

    TESTING = True
    DEBUG = True
    WTF_CSRF_ENABLED = False  # Disable CSRF for tests
    DATABASE_PATH = os.environ.get('DATABASE_PATH', ':memory:')
    SECRET_KEY = 'test-secret-key'
    NOTIFICATIONS_DRY_RUN = False
    TIMEZONE = 'UTC'


# Configuration dictionary
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'test': TestConfig,
    'default': DevelopmentConfig
}
