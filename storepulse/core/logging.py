"""Structured logging with structlog.

Every event of one analytics run carries the same run_id, and every event
carries the application name and environment from Settings.
"""

import logging
import uuid
from collections.abc import Iterator, MutableMapping
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any

import structlog

from storepulse.core.config import Settings, get_settings

# Correlates all events of one snapshot computation
run_id_ctx: ContextVar[str | None] = ContextVar("run_id", default=None)


def add_run_id(
    _logger: structlog.types.WrappedLogger,
    _method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """Add run_id from context to log events."""
    run_id = run_id_ctx.get()
    if run_id:
        event_dict["run_id"] = run_id
    return event_dict


def app_context(settings: Settings) -> structlog.types.Processor:
    """Build a processor stamping app and env onto every event.

    Values already bound on the event win.
    """

    def add_app_context(
        _logger: structlog.types.WrappedLogger,
        _method_name: str,
        event_dict: MutableMapping[str, Any],
    ) -> MutableMapping[str, Any]:
        event_dict.setdefault("app", settings.app_name)
        event_dict.setdefault("env", settings.app_env)
        return event_dict

    return add_app_context


@contextmanager
def run_context(run_id: str | None = None) -> Iterator[str]:
    """Scope run_id for the events logged inside the block.

    Args:
        run_id: Correlation id; a random hex id when omitted.

    Yields:
        The run id in effect.
    """
    value = run_id or uuid.uuid4().hex
    token = run_id_ctx.set(value)
    try:
        yield value
    finally:
        run_id_ctx.reset(token)


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structlog from Settings.

    Args:
        settings: Source of log level, format and app context; the cached
            settings when omitted.
    """
    settings = settings or get_settings()

    processors: list[structlog.types.Processor] = [
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        app_context(settings),
        add_run_id,
        structlog.processors.format_exc_info,
    ]

    if settings.log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=settings.is_development))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelNamesMapping()[settings.log_level]
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> structlog.typing.FilteringBoundLogger:
    """Get a logger; name is typically the calling module's __name__."""
    logger: structlog.typing.FilteringBoundLogger = structlog.get_logger(name)
    return logger
