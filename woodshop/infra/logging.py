"""Structured logging for the gallery API.

Events are key-value pairs rendered as JSON lines outside of dev and as
colored console output locally. Each request binds its method, path and
filter query into the context, so events logged by the service and the
repository while handling it carry the same fields.
"""

import logging
import sys

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from woodshop import __version__
from woodshop.config import settings

SERVICE_NAME = "woodshop"

# Libraries that log every request or statement at INFO
NOISY_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "asyncpg")


def resolve_level(name: str) -> int:
    """Numeric level for a level name. Unknown names fall back to INFO."""
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def add_service_info(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Tag every JSON event with the service name and version."""
    event_dict.setdefault("service", SERVICE_NAME)
    event_dict.setdefault("version", __version__)
    return event_dict


def build_processors(use_json: bool) -> list[Processor]:
    """Processor chain for JSON lines or the dev console."""
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if use_json:
        processors += [
            add_service_info,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    return processors


def setup_logging() -> None:
    """Configure structlog and the stdlib root logger from settings."""
    level = resolve_level(settings.log_level)
    use_json = settings.log_json and settings.environment != "dev"

    structlog.configure(
        processors=build_processors(use_json),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def bind_request_context(method: str, path: str, query: str) -> None:
    """Start a fresh log context for one request."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(method=method, path=path, query=query)


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a logger, usually with __name__."""
    return structlog.get_logger(name)
