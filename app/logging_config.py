"""structlog setup shared by every module."""

import logging

import structlog

from app import config


def configure_logging(level: str = config.LOG_LEVEL, json_logs: bool = config.LOG_JSON):
    """Configure structlog processors and the level filter.

    Args:
        level: Minimum level name to emit, e.g. ``"INFO"``.
        json_logs: Render JSON lines instead of the console format.
    """
    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelNamesMapping().get(level.upper(), logging.INFO)
        ),
    )


configure_logging()
logger = structlog.get_logger("world_api")
