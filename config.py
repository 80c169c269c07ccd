import os
from datetime import timedelta


class Config:
    """Settings shared by every environment; secrets come from the environment"""

    # Flask Settings
    SECRET_KEY = os.environ.get('SESSION_SECRET', 'CHANGE-THIS-SECRET-KEY-IN-PRODUCTION')
    PERMANENT_SESSION_LIFETIME = timedelta(days=7)
    SESSION_COOKIE_SECURE = False
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'

    # Database Settings
    _database_url = os.environ.get('DATABASE_URL')
    if _database_url and _database_url.startswith("postgres://"):
        _database_url = _database_url.replace("postgres://", "postgresql://", 1)

    SQLALCHEMY_DATABASE_URI = _database_url or 'sqlite:///portfolio.db'
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_recycle': 3600,
        'pool_pre_ping': True,
    }
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Upload / Object Storage Settings
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024  # 16MB
    STORAGE_ROOT = os.environ.get('STORAGE_ROOT', 'storage')
    STORAGE_PUBLIC_URL = os.environ.get('STORAGE_PUBLIC_URL', '/storage')
    ALLOWED_UPLOAD_EXTENSIONS = {
        'pdf', 'doc', 'docx', 'txt', 'zip', 'png', 'jpg', 'jpeg', 'gif', 'webp'
    }

    # Owner account (seeded on startup when set)
    OWNER_USERNAME = os.environ.get('OWNER_USERNAME')
    OWNER_EMAIL = os.environ.get('OWNER_EMAIL')
    OWNER_PASSWORD = os.environ.get('OWNER_PASSWORD')

    # GitHub Activity Settings
    GITHUB_USERNAME = os.environ.get('GITHUB_USERNAME', 'SarathiManikandan0')
    GITHUB_API_ROOT = os.environ.get('GITHUB_API_ROOT', 'https://api.github.com')
    GITHUB_ACTIVITY_LIMIT = int(os.environ.get('GITHUB_ACTIVITY_LIMIT', '4'))
    GITHUB_TIMEOUT = float(os.environ.get('GITHUB_TIMEOUT', '10'))

    # Rate limiting for public forms
    RATE_LIMIT_MAX_REQUESTS = 10
    RATE_LIMIT_WINDOW = 60

    # Admin Notification Settings
    ADMIN_TELEGRAM_BOT_TOKEN = os.environ.get('ADMIN_TELEGRAM_BOT_TOKEN')
    ADMIN_TELEGRAM_CHAT_ID = os.environ.get('ADMIN_TELEGRAM_CHAT_ID')


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    TESTING = False


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    TESTING = False
    SESSION_COOKIE_SECURE = True


class TestingConfig(Config):
    """Testing configuration"""
    DEBUG = True
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    # In-memory SQLite runs on a StaticPool, which rejects the pool options
    SQLALCHEMY_ENGINE_OPTIONS = {}
    OWNER_USERNAME = None
    OWNER_EMAIL = None
    OWNER_PASSWORD = None
    ADMIN_TELEGRAM_BOT_TOKEN = None
    ADMIN_TELEGRAM_CHAT_ID = None


# Select configuration based on environment
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}


def get_config(name=None):
    """Get configuration by name, falling back to FLASK_ENV"""
    env = name or os.environ.get('FLASK_ENV', 'development')
    return config.get(env, config['default'])
