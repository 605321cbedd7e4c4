"""Structured logging setup for the job service client.

Library modules only request loggers through `config_get_logger`; applications
embedding the client call `config_setup_logging` once at startup.
"""

import logging
import sys

import structlog
from structlog.types import Processor

LIBRARY_LOGGER_NAME = "jobclient"

# silent until the embedding application configures logging
logging.getLogger(LIBRARY_LOGGER_NAME).addHandler(logging.NullHandler())


def config_setup_logging(log_level: str = "INFO", json_logs: bool = False) -> None:
    """Configure structlog on top of standard library logging.

    Args:
        log_level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_logs: Emit JSON lines when True, colored console output otherwise.

    Returns:
        None: Configures global logging state as side effect.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=numeric_level)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if json_logs:
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def config_get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a structured logger bound to `name` that emits through stdlib logging.

    Events reach the stdlib logger `name`, so they stay silent unless the
    embedding application attaches handlers or calls `config_setup_logging`.

    Args:
        name: Logger name, typically `__name__`.

    Returns:
        structlog.stdlib.BoundLogger: Logger supporting key/value context.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return structlog.wrap_logger(  # type: ignore[no-any-return]
        logging.getLogger(name),
        wrapper_class=structlog.stdlib.BoundLogger,
    )
