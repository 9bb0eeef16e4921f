import os
from dotenv import load_dotenv

load_dotenv(override=True)


def _env_bool(key, default):
    value = os.getenv(key)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    """
    Base configuration for the renosite app.
    Every value can be overridden through the environment (or a .env file).
    """
    # Flask settings
    SECRET_KEY = os.getenv('FLASK_SECRET_KEY')

    # Get DB_DIR from environment, or use a default if not set
    DB_DIR = os.getenv('DB_DIR', os.path.join(os.getcwd(), 'databases'))
    LOG_DB = os.getenv('LOG_DB', os.path.join(DB_DIR, 'app_logs.db'))

    # Remote REST backend that owns all project data
    BACKEND_API_URL = os.getenv('BACKEND_API_URL', 'http://localhost:5005')
    BACKEND_TIMEOUT = int(os.getenv('BACKEND_TIMEOUT', '15'))

    # Image proxy upstream (serves /uploads/<path> and /images/<path>)
    IMAGE_UPSTREAM_URL = os.getenv('IMAGE_UPSTREAM_URL', 'http://localhost:8000')
    IMAGE_PROXY_TIMEOUT = int(os.getenv('IMAGE_PROXY_TIMEOUT', '15'))
    IMAGE_PROXY_FALLBACK_ON_TRANSPORT_ERROR = _env_bool('IMAGE_PROXY_FALLBACK_ON_TRANSPORT_ERROR', True)

    # Direct remote host tried by the image resolver after the proxy
    IMAGE_REMOTE_URL = os.getenv('IMAGE_REMOTE_URL', 'http://localhost:8080')
    IMAGE_PLACEHOLDER = os.getenv('IMAGE_PLACEHOLDER', '/placeholder.jpg')

    # Admin panel
    PROJECTS_PER_PAGE = int(os.getenv('PROJECTS_PER_PAGE', '5'))

    # Site
    BRAND_NAME = os.getenv('BRAND_NAME', 'TCR Renovations')
    CONTACT_ADDRESS = os.getenv('CONTACT_ADDRESS', '1470 Buck Hill Dr, Southampton PA, United States')
    CONTACT_PHONE = os.getenv('CONTACT_PHONE', '+1 (267) 650-0283')
    CONTACT_EMAIL = os.getenv('CONTACT_EMAIL', 'info@tcrrenovations.com')
    CONTACT_HOURS = os.getenv('CONTACT_HOURS', 'Monday - Friday: 8:00 AM - 6:00 PM')

    # Port for local server
    port = int(os.getenv('PORT', '5000'))

    @classmethod
    def as_dict(cls):
        """Upper-case settings as a plain dict (for seeding app.config)."""
        return {key: getattr(cls, key) for key in dir(cls) if key.isupper()}


def get_config_value(key, default=None):
    """Get configuration value: Flask app config first, then Config, then env var"""
    try:
        from flask import current_app
        val = current_app.config.get(key)
        if val is not None:
            return val
    except RuntimeError:
        pass
    val = getattr(Config, key, None)
    if val is not None:
        return val
    return os.getenv(key, default)
