"""Application factory for the hookpress backend."""
from __future__ import annotations

import time

from flask import Flask, g, send_from_directory
from sqlalchemy.exc import OperationalError

from .config import Config
from .errors import register_error_handlers
from .extensions import cors, db, host, limiter

_REQUEST_STATE = (
    "_api_protection_enabled",
    "_request_token",
    "api_token",
    "_style_queue",
    "_admin_notices",
)


def create_app(config_class: type[Config] = Config) -> Flask:
    """Create and configure the Flask application instance."""
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.logger.setLevel(str(app.config.get("LOG_LEVEL") or "INFO").upper())

    db.init_app(app)

    @app.before_request
    def _reset_request_state() -> None:
        # The application context (and with it ``g``) may outlive one request.
        for name in _REQUEST_STATE:
            g.pop(name, None)

    if cors is not None:
        allowed_origins = [
            origin.strip()
            for origin in (app.config.get("CORS_ALLOWED_ORIGINS") or "").split(",")
            if origin.strip()
        ]
        cors.init_app(
            app,
            resources={r"/api/*": {"origins": allowed_origins}},
            allow_headers=["Content-Type", "Authorization"],
        )

    limiter.init_app(app)
    state = host.init_app(app)
    register_error_handlers(app)

    from .admin.views import bp as admin_bp
    from .api.auth import bp as auth_bp
    from .api.content import bp as content_bp
    from .api.entries import bp as entries_bp
    from .api.health import bp as health_bp
    from .site import bp as site_bp

    app.register_blueprint(health_bp, url_prefix="/api")
    app.register_blueprint(auth_bp, url_prefix="/api")
    app.register_blueprint(content_bp, url_prefix="/api")
    app.register_blueprint(admin_bp, url_prefix="/admin")
    app.register_blueprint(site_bp)

    _register_ads_route(app)

    from .plugins import activate_plugins, load_plugins, parse_plugin_slugs

    plugins = load_plugins(
        app, state.hooks, parse_plugin_slugs(app.config.get("ENABLED_PLUGINS"))
    )
    state.active_plugins = [plugin.slug for plugin in plugins]
    # The entries table belongs to the console plugin.
    if "entries_crud" in state.active_plugins:
        app.register_blueprint(entries_bp, url_prefix="/api")

    with app.app_context():
        # Import models to ensure they are registered with SQLAlchemy before creating tables.
        from .models import auth, settings  # noqa: F401

        _initialize_database(app)
        activate_plugins(app, state.hooks, plugins)
        state.hooks.do_action("init")
        state.hooks.do_action("admin_menu")

    return app


def _register_ads_route(app: Flask) -> None:
    """Serve the ad image directory under ``ADS_URL_PATH``."""

    url_path = "/" + str(app.config.get("ADS_URL_PATH") or "/ads").strip("/")

    def ad_image(filename: str):
        return send_from_directory(app.config["ADS_DIR"], filename)

    app.add_url_rule(f"{url_path}/<path:filename>", "ad_image", ad_image)


def _initialize_database(app: Flask) -> None:
    """Create the host tables, retrying while the database is unavailable."""

    from .models.auth import ApiToken
    from .models.settings import AppSetting

    host_tables = [ApiToken.__table__, AppSetting.__table__]
    max_retries = int(app.config.get("DB_INIT_MAX_RETRIES", 30))
    retry_delay = float(app.config.get("DB_INIT_RETRY_DELAY", 2))

    for attempt in range(1, max_retries + 1):
        try:
            db.metadata.create_all(bind=db.engine, tables=host_tables)
            return
        except OperationalError as exc:
            if attempt >= max_retries:
                app.logger.exception("Database initialization failed after %s attempts.", attempt)
                raise

            app.logger.warning(
                "Database initialization attempt %s/%s failed: %s", attempt, max_retries, exc
            )
            time.sleep(retry_delay)
