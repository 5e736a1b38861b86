"""Structured logging for ItemVault.

Configures structlog to render JSON lines in production and colored console
output in development. Request-scoped values such as the correlation ID are
carried in contextvars and merged into every entry.
"""

import logging
import sys
import uuid
from typing import Any

import structlog
from structlog._config import BoundLoggerLazyProxy
from structlog.types import EventDict, Processor

from itemvault.core.config import Settings, get_settings

DEFAULT_LOGGER_NAME = "itemvault"


def new_correlation_id() -> str:
    """Generate a short correlation ID for request tracing."""
    return f"cid_{uuid.uuid4().hex[:12]}"


def add_logger_name(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Add the logger name, falling back to the package name.

    get_logger binds the module name as initial context. structlog's own
    add_logger_name requires a stdlib logger; PrintLogger instances have no
    name attribute.
    """
    if not event_dict.get("logger"):
        event_dict["logger"] = getattr(logger, "name", None) or DEFAULT_LOGGER_NAME
    return event_dict


def rename_event_to_message(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Expose the log event under a 'message' key for log shippers."""
    if "event" in event_dict:
        event_dict["message"] = event_dict.pop("event")
    return event_dict


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structlog and the standard library root logger.

    Args:
        settings: Optional settings instance. Loaded from the environment
            when omitted.
    """
    if settings is None:
        settings = get_settings()

    level = getattr(logging, settings.log_level)
    console = settings.is_development or settings.log_format == "console"

    if console:
        renderer: Processor = structlog.dev.ConsoleRenderer(
            colors=True,
            exception_formatter=structlog.dev.plain_traceback,
        )
        processors = _shared_processors() + [renderer]
    else:
        processors = _shared_processors() + [
            structlog.processors.format_exc_info,
            rename_event_to_message,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=not console,
    )

    # Third-party libraries (uvicorn, botocore, sqlalchemy) log through stdlib
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )
    for logger_name in ("uvicorn", "uvicorn.access", "uvicorn.error"):
        logging.getLogger(logger_name).setLevel(level)
    # botocore is chatty at DEBUG
    logging.getLogger("botocore").setLevel(max(level, logging.INFO))


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Optional logger name. Defaults to 'itemvault'.

    Returns:
        BoundLogger: Configured structured logger instance.
    """
    # structlog.get_logger(logger=...) collides with wrap_logger's own
    # 'logger' parameter; build the same lazy proxy with it as initial context.
    return BoundLoggerLazyProxy(
        None,
        initial_values={"logger": name or DEFAULT_LOGGER_NAME},
        logger_factory_args=(),
    )


def bind_correlation_id(correlation_id: str) -> None:
    """Bind a correlation ID to the current logging context."""
    structlog.contextvars.bind_contextvars(correlation_id=correlation_id)


def clear_context() -> None:
    """Clear all context variables so values do not leak between requests."""
    structlog.contextvars.clear_contextvars()
