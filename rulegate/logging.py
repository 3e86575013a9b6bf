"""
Structured logging setup.

Usage:
    from rulegate.config import get_settings
    from rulegate.logging import configure_logging

    configure_logging(get_settings())

Modules log through structlog:
    logger = structlog.get_logger(__name__)
    logger.debug("authorization_evaluated", rules=3, failures=1)
"""

import logging
import sys
from typing import Any

import structlog

from .config import Settings


def add_package_context(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Structlog processor tagging events emitted from rulegate modules."""
    logger_name = event_dict.get("logger", "")
    if logger_name.startswith("rulegate"):
        event_dict["component"] = logger_name.split(".")[-1]
    return event_dict


def configure_logging(settings: Settings) -> None:
    """Configure structlog and the standard library root logger."""
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    renderer: Any
    if settings.log_format == "text":
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            add_package_context,
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )
