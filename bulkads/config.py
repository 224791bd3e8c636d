from dotenv import load_dotenv
load_dotenv()  # Load environment variables from .env file

import os


def _env_bool(name, default="False"):
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes")


class Config:
    """Base configuration class."""
    APP_NAME = os.getenv("APP_NAME", "Bulk Ads Importer")

    SECRET_KEY = os.getenv("SECRET_KEY", "your_default_secret_key")
    DEBUG = _env_bool("FLASK_DEBUG")
    TESTING = False

    # ========================================
    # MONGODB
    # ========================================
    MONGO_URI = os.getenv("MONGO_URI", "mongodb://localhost:27017")
    DB_NAME = os.getenv("DB_NAME", "bulkads")
    MONGO_TIMEOUT_MS = int(os.getenv("MONGO_TIMEOUT_MS", 5000))

    # ========================================
    # FACEBOOK MARKETING API
    # ========================================
    FACEBOOK_API_VERSION = os.getenv("FACEBOOK_API_VERSION", "v23.0")
    FACEBOOK_REQUEST_TIMEOUT = int(os.getenv("FACEBOOK_REQUEST_TIMEOUT", 30))
    CAMPAIGN_TIMEZONE = os.getenv("CAMPAIGN_TIMEZONE", "Asia/Ho_Chi_Minh")
    STRICT_POST_VALIDATION = _env_bool("STRICT_POST_VALIDATION")
    MIN_ACCESS_TOKEN_LENGTH = 50

    # ========================================
    # UPLOADS / CORS / RATE LIMITS
    # ========================================
    MAX_CONTENT_LENGTH = int(os.getenv("MAX_UPLOAD_BYTES", 10 * 1024 * 1024))
    CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
    RATELIMIT_ENABLED = _env_bool("RATELIMIT_ENABLED", "True")
    RATELIMIT_STORAGE_URI = os.getenv("RATE_LIMIT_STORAGE_URI", "memory://")

class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True

class TestingConfig(Config):
    """Testing configuration."""
    DEBUG = False
    TESTING = True
    SECRET_KEY = "test-secret-key"
    MONGO_URI = os.getenv("TEST_MONGO_URI", "mongodb://localhost:27017")
    DB_NAME = "bulkads_test"
    RATELIMIT_ENABLED = False

class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False


CONFIGS = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def load_config(app, config_name=None):
    load_dotenv()
    config_name = config_name or os.getenv("APP_ENV", "development")
    app.config.from_object(CONFIGS.get(config_name, DevelopmentConfig))
    return app.config
