"""
Structured Logging

Every component logs through structlog with event-style names and
key/value context, e.g.::

    logger.info("export_completed", kind="loans", row_count=3)

configure_logging() wires structlog into the standard library so the
host application keeps control of handlers and levels.
"""

import logging
import sys
from typing import Optional

import structlog

from finance_engine.config import LoggingSettings

_configured = False


def configure_logging(
    level: str = "INFO",
    renderer: str = "json",
) -> None:
    """
    Configure structlog and the root stdlib logger.

    Args:
        level: Standard library level name.
        renderer: "json" for one JSON object per line, "console" for
                  human-readable output.
    """
    global _configured

    final_renderer = (
        structlog.dev.ConsoleRenderer()
        if renderer == "console"
        else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            final_renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)
    root.setLevel(level)

    _configured = True


def configure_from_settings(settings: Optional[LoggingSettings] = None) -> None:
    """Configure logging from LoggingSettings (environment by default)."""
    settings = settings or LoggingSettings()
    configure_logging(level=settings.level, renderer=settings.renderer)


def is_configured() -> bool:
    return _configured
