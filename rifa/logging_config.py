"""Logging configuration."""

from __future__ import annotations

import logging

from flask import Flask


def configure_logging(app: Flask) -> None:
    """Configure plain-text logs from LOG_LEVEL.

    Draw sessions log every start and resolution; keep ``rifa.draw`` at INFO
    or lower to retain that trail.
    """

    level_name = str(app.config.get("LOG_LEVEL", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    app.logger.setLevel(level)

    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
