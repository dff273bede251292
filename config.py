import os
from dotenv import load_dotenv

# Load .env file
dotenv_path = os.path.join(os.path.dirname(__file__), '.env')
if os.path.exists(dotenv_path):
    load_dotenv(dotenv_path)
else:
    print("Warning: .env file not found. Using defaults or environment variables.")

class Config:
    """Base configuration."""
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'a_default_fallback_secret_key_for_development_only'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    WTF_CSRF_ENABLED = True # Enabled by default, can be disabled in testing
    LOG_LEVEL = os.environ.get('LOG_LEVEL', "INFO")

    # Supabase (hosted auth + Postgres)
    SUPABASE_URL = os.environ.get('SUPABASE_URL')
    SUPABASE_ANON_KEY = os.environ.get('SUPABASE_ANON_KEY')
    # HS256 projects sign access tokens with this secret; when unset the JWKS endpoint is used
    SUPABASE_JWT_SECRET = os.environ.get('SUPABASE_JWT_SECRET')
    SUPABASE_TIMEOUT = int(os.environ.get('SUPABASE_TIMEOUT', 10))

    # New accounts on this domain are given the admin role on first sign-in
    ADMIN_EMAIL_DOMAIN = os.environ.get('ADMIN_EMAIL_DOMAIN', 'creativestudio.com')
    OAUTH_PROVIDERS = [p.strip() for p in os.environ.get('OAUTH_PROVIDERS', 'google,github').split(',') if p.strip()]

    # Where contact form submissions are forwarded; leave empty to only store them
    CONTACT_RECIPIENT = os.environ.get('CONTACT_RECIPIENT')

    # Flask-Mail (SMTP) for contact notifications
    MAIL_SERVER = os.environ.get('MAIL_SERVER', 'smtp.gmail.com')
    MAIL_PORT = int(os.environ.get('MAIL_PORT', 587))
    MAIL_USE_TLS = os.environ.get('MAIL_USE_TLS', 'true').lower() == 'true'
    MAIL_USE_SSL = os.environ.get('MAIL_USE_SSL', 'false').lower() == 'true'
    MAIL_USERNAME = os.environ.get('MAIL_USERNAME')
    MAIL_PASSWORD = os.environ.get('MAIL_PASSWORD')
    MAIL_DEFAULT_SENDER = os.environ.get('MAIL_DEFAULT_SENDER', 'no-reply@creativestudio.com')

    # Sentry Configuration
    SENTRY_DSN = os.environ.get('SENTRY_DSN')

    # Rate limits for the public auth and contact forms
    RATELIMIT_STORAGE_URI = os.environ.get('RATELIMIT_STORAGE_URI', 'memory://')
    AUTH_RATE_LIMIT = os.environ.get('AUTH_RATE_LIMIT', '30 per minute')
    CONTACT_RATE_LIMIT = os.environ.get('CONTACT_RATE_LIMIT', '10 per hour')

    PROJECTS_PAGE_SIZE = int(os.environ.get('PROJECTS_PAGE_SIZE', 10))

class DevelopmentConfig(Config):
    FLASK_ENV = 'development'
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///studio-dev.db'
    LOG_LEVEL = "DEBUG"

class ProductionConfig(Config):
    FLASK_ENV = 'production'
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') # The Supabase Postgres connection string
    SESSION_COOKIE_SECURE = True

    @classmethod
    def validate(cls):
        # Ensure critical secrets are set in production
        if not cls.SECRET_KEY or cls.SECRET_KEY == 'a_default_fallback_secret_key_for_development_only':
            raise ValueError("CRITICAL: SECRET_KEY not found in environment!")

        if not cls.SQLALCHEMY_DATABASE_URI:
            raise ValueError("CRITICAL: DATABASE_URL for production is not set!")

        if not cls.SUPABASE_URL:
            raise ValueError("CRITICAL: SUPABASE_URL for production is not set!")

        if not cls.SENTRY_DSN:
            print("Warning: SENTRY_DSN not found. Error tracking will be disabled.")

class TestingConfig(Config):
    TESTING = True
    # In-memory SQLite keeps the tests fast and isolated from the hosted database.
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    WTF_CSRF_ENABLED = False
    RATELIMIT_ENABLED = False # Disable rate limiting for tests
    SECRET_KEY = 'test-secret-key'
    SUPABASE_URL = 'https://studio-test.supabase.co'
    SUPABASE_ANON_KEY = 'test-anon-key'
    SUPABASE_JWT_SECRET = 'your-super-secret-and-long-enough-test-key-for-hs256'
    CONTACT_RECIPIENT = 'hello@creativestudio.com'
    MAIL_SUPPRESS_SEND = True

config_by_name = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
