import os

def _env_bool(name: str, default: str) -> bool:
    return (os.getenv(name, default) or default).lower() == "true"

class BaseConfig:
    # Secrets (env in prod; dev/test may use defaults)
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-not-secure")

    # Database (env in prod; dev/test may use default)
    try:
        from dotenv import dotenv_values
        _ENV_FALLBACK = dotenv_values(".env")
    except Exception:
        _ENV_FALLBACK = {}
    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL") or _ENV_FALLBACK.get("DATABASE_URL") or "sqlite:///feedbacks.db"
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Logging / misc
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Flask-Limiter default: off globally; prefer per-route limits
    RATELIMIT_DEFAULT = None

    # --- Query service ---
    # Row cap for GET /api/feedbacks (50 on the Pages deployment, 100 on the internal one)
    FEEDBACKS_ROW_LIMIT = int(os.getenv("FEEDBACKS_ROW_LIMIT", "50"))

    # --- Dashboard ---
    # When set, views fetch from a remote query service instead of the local DB
    FEEDBACKS_API_URL = os.getenv("FEEDBACKS_API_URL") or None
    FEEDBACKS_API_TIMEOUT = float(os.getenv("FEEDBACKS_API_TIMEOUT", "10.0"))
    # Analytics/table views render the built-in sample set when the fetch fails
    DASHBOARD_SAMPLE_FALLBACK = _env_bool("DASHBOARD_SAMPLE_FALLBACK", "true")

class DevelopmentConfig(BaseConfig):
    DEBUG = True
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "DEBUG")

class ProductionConfig(BaseConfig):
    DEBUG = False
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "WARNING")
    # REQUIRE env vars in production (fail fast if missing)
    SECRET_KEY = os.environ.get("SECRET_KEY")
    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL")

class TestingConfig(BaseConfig):
    TESTING = True
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.environ.get("TEST_DATABASE_URL", "sqlite:///:memory:")
    FEEDBACKS_API_URL = None
    DASHBOARD_SAMPLE_FALLBACK = True
    RATELIMIT_ENABLED = False

_ENV_MAP = {
    "development": DevelopmentConfig,
    "staging": ProductionConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}

def get_config():
    env = os.environ.get("APP_ENV", "development").lower()
    return _ENV_MAP.get(env, DevelopmentConfig)
