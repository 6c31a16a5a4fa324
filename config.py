"""
config.py — Flask configuration classes for ForgeGuard.
"""
import os
import secrets

_DATA_DIR = os.path.join(os.path.dirname(__file__), "data")


class BaseConfig:
    """Base configuration shared by all environments."""
    SECRET_KEY = os.environ.get("SECRET_KEY") or secrets.token_hex(32)
    MAX_METADATA_MB = int(os.environ.get("MAX_METADATA_MB", 5))
    MAX_CONTENT_LENGTH = MAX_METADATA_MB * 1024 * 1024  # bytes

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # "sql" (Flask-SQLAlchemy) or "file" (single JSON document)
    REPORT_STORE = os.environ.get("REPORT_STORE", "sql")

    if os.environ.get("VERCEL") == "1":
        REPORTS_FILE = os.environ.get("REPORTS_FILE", os.path.join("/tmp", "reports.json"))
        DATABASE_URL = os.environ.get("DATABASE_URL", f"sqlite:///{os.path.join('/tmp', 'app.db')}")
    else:
        REPORTS_FILE = os.environ.get("REPORTS_FILE", os.path.join(_DATA_DIR, "reports.json"))
        DATABASE_URL = os.environ.get("DATABASE_URL", f"sqlite:///{os.path.join(_DATA_DIR, 'app.db')}")

    SQLALCHEMY_DATABASE_URI = DATABASE_URL
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    INSFORGE_TIMEOUT = float(os.environ.get("INSFORGE_TIMEOUT", 15))

    RATE_LIMIT = os.environ.get("RATE_LIMIT", "60 per minute")
    RATELIMIT_STORAGE_URI = os.environ.get("RATELIMIT_STORAGE_URI", "memory://")
    CORS_ORIGINS = os.environ.get("CORS_ORIGINS", "same-origin")

    VERSION = "1.0.0"


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    TESTING = False
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL",
        f"sqlite:///{os.path.join(_DATA_DIR, 'dev.db')}"
    )


class ProductionConfig(BaseConfig):
    DEBUG = False
    TESTING = False


class TestingConfig(BaseConfig):
    DEBUG = True
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    REPORT_STORE = "sql"
    RATELIMIT_ENABLED = False


config_map = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
    "default": DevelopmentConfig,
}
