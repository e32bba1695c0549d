"""Flask application package."""

from __future__ import annotations

from typing import Any

from dotenv import load_dotenv
from flask import Flask


def create_app(config_overrides: dict[str, Any] | None = None) -> Flask:
    """Application factory.

    Args:
        config_overrides: values applied on top of the environment config
            (tests use this for a throwaway database and instant draws).

    Returns:
        Configured Flask application.
    """
    load_dotenv()

    from rifa.config import get_config
    from rifa.db import init_db
    from rifa.draw.session import DrawTimings
    from rifa.error_handlers import register_error_handlers
    from rifa.logging_config import configure_logging
    from rifa.routes.draw import draw_bp
    from rifa.routes.events import events_bp
    from rifa.routes.health import health_bp
    from rifa.routes.web import web_bp
    from rifa.services.draw_session_service import DrawSessionService

    app = Flask(__name__)
    app.config.from_object(get_config())
    if config_overrides:
        app.config.update(config_overrides)

    configure_logging(app)
    init_db(app)
    register_error_handlers(app)

    app.extensions["draw_sessions"] = DrawSessionService(
        DrawTimings(
            spin_duration_ms=int(app.config["DRAW_SPIN_DURATION_MS"]),
            reveal_delay_ms=int(app.config["DRAW_REVEAL_DELAY_MS"]),
            base_interval_ms=int(app.config["DRAW_TICK_BASE_MS"]),
            max_interval_ms=int(app.config["DRAW_TICK_MAX_MS"]),
        ),
        seed=app.config.get("DRAW_RANDOM_SEED"),
    )

    app.register_blueprint(health_bp)
    app.register_blueprint(web_bp)
    app.register_blueprint(events_bp, url_prefix="/api")
    app.register_blueprint(draw_bp, url_prefix="/api")

    return app
