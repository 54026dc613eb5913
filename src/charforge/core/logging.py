"""Structured logging for charforge.

Every state change of a character is logged as a key-value event through
structlog, so a hosting layer can trace gold, slot and feat changes per
character. Output is a colored console stream during development and one
JSON object per line otherwise.

Example:
    >>> from charforge.core.logging import configure_logging, get_logger
    >>> configure_logging(level="DEBUG")
    >>> logger = get_logger(__name__)
    >>> logger.info("Item equipped", character="Valeros", slot="chest")
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Generator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

import structlog
from structlog.types import Processor


if TYPE_CHECKING:
    from structlog.types import EventDict, WrappedLogger

    from charforge.core.config import Settings


APP_NAME = "charforge"


def add_app_context(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Tag every entry with the application name.

    Args:
        logger: The wrapped logger instance.
        method_name: Name of the logging method called.
        event_dict: The event dictionary to modify.

    Returns:
        The event dictionary with an ``app`` key.
    """
    event_dict["app"] = APP_NAME
    return event_dict


def _processors(json_format: bool) -> list[Processor]:
    chain: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_app_context,
        structlog.processors.StackInfoRenderer(),
    ]
    if json_format:
        chain += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        chain.append(
            structlog.dev.ConsoleRenderer(exception_formatter=structlog.dev.plain_traceback)
        )
    return chain


def configure_logging(*, level: str = "INFO", json_format: bool = False) -> None:
    """Configure structlog and the standard library root logger.

    Args:
        level: The logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_format: Emit JSON lines instead of console output.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    structlog.configure(
        processors=_processors(json_format),
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # pydantic and other libraries log through the standard library
    logging.basicConfig(
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        level=numeric_level,
        stream=sys.stdout,
        force=True,
    )


def configure_logging_from_settings(settings: Settings | None = None) -> None:
    """Configure logging from ``Settings.log_level`` and ``Settings.json_logs``.

    Debug mode forces DEBUG level regardless of ``log_level``.
    """
    if settings is None:
        from charforge.core.config import get_settings

        settings = get_settings()
    level = "DEBUG" if settings.debug else settings.log_level
    configure_logging(level=level, json_format=settings.json_logs)


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a logger, typically with ``__name__``."""
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind key-value pairs to every later log entry in this context."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all bound context variables."""
    structlog.contextvars.clear_contextvars()


@contextmanager
def character_context(character_id: str, **kwargs: Any) -> Generator[None, None, None]:
    """Tag log entries emitted inside the block with a character id.

    Previously bound values are restored on exit.

    Example:
        >>> with character_context("abc123", request_id="r-1"):
        ...     logger.info("Gold added", amount=25)
    """
    with structlog.contextvars.bound_contextvars(character_id=character_id, **kwargs):
        yield


__all__ = [
    "add_app_context",
    "bind_context",
    "character_context",
    "clear_context",
    "configure_logging",
    "configure_logging_from_settings",
    "get_logger",
]
