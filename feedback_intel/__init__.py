import os
from flask import Flask, request

# Load .env only for local/dev. In prod, env vars come from the platform.
if os.getenv("APP_ENV", "development") != "production":
    from dotenv import load_dotenv
    load_dotenv(".env", override=False)


from .config import get_config
from .extensions import db, migrate, limiter
from .security import init_security
from .observability import init_logging, init_sentry

def _wants_json() -> bool:
    accept = (request.headers.get("Accept") or "").lower()
    return (
        "application/json" in accept
        or request.path.startswith("/api/")
        or request.path.endswith(".json")
    )

def create_app():
    app = Flask(__name__)
    # View payloads keep their envelope order (state, source, ...)
    app.json.sort_keys = False

    # ---- Rate limiting storage ----
    app_env = (os.getenv("APP_ENV", "development") or "development").lower()
    use_redis = app_env in ("staging", "production")
    storage_uri = os.environ.get("REDIS_URL") if use_redis else "memory://"
    if use_redis and not storage_uri:
        # Hard fail in stage/prod so we never silently run without RL storage
        raise RuntimeError("REDIS_URL is required in staging/production for rate limiting")

    app.config["RATELIMIT_STORAGE_URI"] = storage_uri
    app.config.setdefault("RATELIMIT_DEFAULTS", ["1000 per hour"])
    app.config.setdefault("RATELIMIT_HEADERS_ENABLED", True)

    # Config: clean, explicit, class-based
    app.config.from_object(get_config())

    # --- Required env validation for prod-like envs (staging/production) ---
    def _require(name: str):
        val = os.getenv(name) or app.config.get(name)
        if not val:
            raise RuntimeError(f"Missing required environment variable: {name}")
        return val

    if app_env in ("staging", "production"):
        _require("SECRET_KEY")
        _require("DATABASE_URL")

    # --- Observability & Security ---
    init_logging(app)
    init_sentry(app)

    if app_env in ("staging", "production"):
        init_security(app)

    # Init extensions
    db.init_app(app)
    migrate.init_app(app, db, directory="migrations")
    limiter.init_app(app)

    from .blueprints.api import bp as api_bp
    from .blueprints.dashboard import bp as dashboard_bp

    app.register_blueprint(api_bp, url_prefix="/api")
    app.register_blueprint(dashboard_bp, url_prefix="/dash")

    @limiter.exempt
    @app.get("/healthz")
    def healthz():
        return {"status": "ok"}, 200

    # Error handlers (minimal): JSON for API/dashboard callers, text otherwise
    @app.errorhandler(404)
    def not_found(e):
        if _wants_json():
            return {"error": "not_found", "code": 404}, 404
        return ("Not Found", 404)

    @app.errorhandler(500)
    def server_error(e):
        if _wants_json():
            return {"error": "server_error", "code": 500}, 500
        return ("Internal Server Error", 500)

    # 429 Too Many Requests — consistent JSON/text with Retry-After
    @app.errorhandler(429)
    def too_many_requests(e):
        retry_after = getattr(e, "retry_after", None)
        headers = {}
        if retry_after is not None:
            headers["Retry-After"] = str(int(retry_after))
        if _wants_json():
            payload = {"error": "rate_limited", "code": 429}
            if retry_after is not None:
                payload["retry_after"] = int(retry_after)
            return (payload, 429, headers)
        return ("Too Many Requests", 429, headers)

    # CLI commands
    from .cli import register_cli
    register_cli(app)

    app.logger.info("feedback dashboard ready (env=%s)", app_env)
    return app
