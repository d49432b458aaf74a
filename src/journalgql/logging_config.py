"""structlog setup.

Learn: Every module does `logger = structlog.get_logger()` and logs dotted
event names with keyword context (`logger.info("auth.registered",
user_id=...)`). This module wires the processor chain once at startup:
contextvars first (so the request_id bound by RequestIdMiddleware lands on
every line), then level and timestamp, then a renderer. Development gets
readable console output, JOURNAL_LOG_JSON=1 gets one JSON object per line.
"""

import logging

import structlog

from journalgql.config import Settings


def configure_logging(settings: Settings) -> None:
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]
    if settings.log_json:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        # ConsoleRenderer pretty-prints exc_info itself
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=False,
    )
