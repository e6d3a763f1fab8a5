"""
Centralized logging configuration using structlog
"""

import base64
import logging
import secrets
import sys
import time
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any
from uuid import UUID

import structlog

from .errors import BaseError, UnknownError

# Context variables for request tracking
request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)
user_id_ctx: ContextVar[str | None] = ContextVar("user_id", default=None)


class RequestContextFilter:
    """Add request context to log records."""

    def __call__(self, logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        """Add request context to the event dict."""
        _ = logger, method_name

        request_id = request_id_ctx.get()
        user_id = user_id_ctx.get()

        if request_id:
            event_dict["request_id"] = request_id

        if user_id and "user_id" not in event_dict:
            event_dict["user_id"] = user_id

        return event_dict


def configure_logging(debug: bool = False) -> None:
    """Configure structlog with appropriate processors and formatters.

    Args:
        debug: If True, use human-readable console output. If False, use JSON.
    """
    log_level = logging.DEBUG if debug else logging.INFO

    logging.basicConfig(
        level=log_level,
        stream=sys.stdout,
        format="%(message)s",
        force=True,
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        RequestContextFilter(),
        structlog.processors.TimeStamper(fmt="ISO", utc=True),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if debug:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


def generate_request_id() -> str:
    """Generate a compact request ID from a microsecond timestamp plus randomness.

    Format: 14-character urlsafe base64 string.
    """
    timestamp_us = int(time.time() * 1_000_000)
    random_bytes = secrets.token_bytes(2)
    combined_bytes = timestamp_us.to_bytes(8, byteorder="big") + random_bytes
    return base64.urlsafe_b64encode(combined_bytes).decode("ascii").rstrip("=")


def set_request_context(request_id: str | None = None, user_id: str | None = None) -> None:
    """Set request context variables.

    Args:
        request_id: Request ID to set (generates one if None)
        user_id: User ID to set
    """
    if request_id is None:
        request_id = generate_request_id()

    request_id_ctx.set(request_id)
    if user_id is not None:
        user_id_ctx.set(user_id)


def clear_request_context() -> None:
    """Clear request context variables."""
    request_id_ctx.set(None)
    user_id_ctx.set(None)


def get_request_id() -> str | None:
    """Get the current request ID."""
    return request_id_ctx.get()


def get_user_id() -> str | None:
    """Get the current user ID."""
    return user_id_ctx.get()


_error_logger = get_logger("notevault.errors")


def log_request(operation: str, user_id: UUID | str | None = None) -> None:
    """Record the start of a GraphQL operation."""
    _error_logger.debug(
        f"GraphQL request: {operation}",
        operation=operation,
        user_id=str(user_id) if user_id else None,
    )


def log_error(
    operation: str,
    error: BaseException,
    user_id: UUID | str | None = None,
) -> None:
    """Log an error on its way back to the caller.

    Taxonomy errors are logged with their code, status and sanitized metadata.
    Non-operational errors also carry the traceback of the underlying cause.
    """
    fields: dict[str, Any] = {
        "operation": operation,
        "user_id": str(user_id) if user_id else None,
        "error": str(error),
        "error_type": type(error).__name__,
    }

    if isinstance(error, BaseError):
        fields.update(
            code=error.code,
            status_code=error.status_code,
            is_operational=error.is_operational,
            meta=error.meta,
        )
        if not error.is_operational:
            fields["exc_info"] = error.__cause__ or error
    else:
        fields["exc_info"] = error

    _error_logger.error(f"Error in {operation}", **fields)


@contextmanager
def error_boundary(operation: str, user_id: UUID | str | None = None) -> Iterator[None]:
    """Log and re-raise every error leaving the block as a taxonomy error.

    Taxonomy errors pass through unchanged. Anything else is wrapped in a
    non-operational ``UnknownError`` whose cause is the original exception.
    """
    try:
        yield
    except BaseError as error:
        log_error(operation, error, user_id)
        raise
    except Exception as e:
        error = UnknownError(meta={"operation": operation, "original_error": repr(e)})
        error.__cause__ = e
        log_error(operation, error, user_id)
        raise error from e
