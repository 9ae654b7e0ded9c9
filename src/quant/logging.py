"""Structured logging for the analytics engine (structlog over stdlib logging).

Handlers are attached to the ``quant`` logger tree only, so embedding the
engine in a host application never replaces the host's root handlers.
"""

import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager

import structlog

_ROOT_LOGGER = "quant"
_FORMAT_ENV = "QUANT_LOG_FORMAT"

_SHARED_PROCESSORS: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
]


def _renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def setup_logging(log_level: str = "INFO", log_format: str | None = None) -> None:
    """Configure structlog and the ``quant`` stdlib logger.

    Args:
        log_level: Stdlib level name; unknown names fall back to INFO.
        log_format: "json" or "console". Defaults to the QUANT_LOG_FORMAT
            environment variable, then "console".
    """
    fmt = (log_format or os.environ.get(_FORMAT_ENV, "console")).lower()

    structlog.configure(
        processors=[
            *_SHARED_PROCESSORS,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(fmt),
            ],
        )
    )

    quant_logger = logging.getLogger(_ROOT_LOGGER)
    quant_logger.handlers.clear()
    quant_logger.addHandler(handler)
    quant_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    quant_logger.propagate = False


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a bound structlog logger with the given name."""
    return structlog.get_logger(name)


@contextmanager
def asset_context(asset_id: str) -> Iterator[None]:
    """Tag every event logged inside the block with ``asset=asset_id``."""
    with structlog.contextvars.bound_contextvars(asset=asset_id):
        yield
