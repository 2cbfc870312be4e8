"""
Structured logging setup shared by the stress monitor services.

Modules import `logger` from here and bind their own component context.
configure_logging() switches between JSON (production) and console output.
"""

import logging

import structlog

from stress_monitor.config import LoggingConfig


def _processors(fmt: str) -> list:
    renderer = (
        structlog.dev.ConsoleRenderer() if fmt == "console" else structlog.processors.JSONRenderer()
    )
    return [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        renderer,
    ]


def configure_logging(config: LoggingConfig | None = None) -> None:
    """Configure structlog (and the stdlib level it filters on) from config."""
    config = config or LoggingConfig()
    logging.basicConfig(format="%(message)s", level=getattr(logging, config.level))
    logging.getLogger().setLevel(getattr(logging, config.level))

    structlog.configure(
        processors=_processors(config.format),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


# JSON by default until the application configures logging from its config
structlog.configure(
    processors=_processors("json"),
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=False,
)

logger = structlog.get_logger("stress_monitor")
