"""Structured logging setup shared by the CLI and library modules."""

import logging
from typing import Any, cast

import structlog
from structlog import dev, processors, stdlib
from structlog.stdlib import BoundLogger
from structlog.types import Processor

PACKAGE_LOGGER = "mintpipe"

# httpx logs every request at INFO
QUIET_LOGGERS = ("httpx", "httpcore")


def resolve_level(level: str) -> int:
    """Map a level name (any case) to its numeric value, INFO if unknown."""
    return logging.getLevelNamesMapping().get(level.upper(), logging.INFO)


def _shared_processors() -> list[Processor]:
    return [
        stdlib.add_logger_name,
        stdlib.add_log_level,
        stdlib.PositionalArgumentsFormatter(),
        processors.TimeStamper(fmt="iso", utc=True),
        processors.dict_tracebacks,
    ]


def _handler(renderer: Processor, pre_chain: list[Processor], level: int) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(
        stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=pre_chain)
    )
    return handler


def configure_logging(
    testing: bool = False, level: str = "info", json_logs: bool = True
) -> None:
    """Configure structlog and the stdlib loggers it writes through.

    Args:
        testing: Render key/value events for test output instead of JSON
        level: Log level name
        json_logs: Emit JSON lines outside of tests
    """
    log_level = resolve_level(level)
    render_json = json_logs and not testing
    shared = _shared_processors()

    structlog.configure(
        processors=[
            stdlib.filter_by_level,
            *shared,
            processors.format_exc_info,
            processors.JSONRenderer() if render_json else processors.KeyValueRenderer(),
        ],
        context_class=dict,
        logger_factory=stdlib.LoggerFactory(),
        wrapper_class=stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = _handler(
        processors.JSONRenderer() if render_json else dev.ConsoleRenderer(),
        shared,
        log_level,
    )

    for name in (None, PACKAGE_LOGGER):
        target = logging.getLogger(name)
        target.handlers = [handler]
        target.setLevel(log_level)
    logging.getLogger(PACKAGE_LOGGER).propagate = False

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))


def get_logger(**initial_values: Any) -> BoundLogger:
    """Return a lazily bound structured logger.

    Configuration is resolved on first use, so module-level loggers follow
    whatever configure_logging set up later.
    """
    return cast(BoundLogger, structlog.get_logger(**initial_values))
