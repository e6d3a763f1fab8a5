"""
Error taxonomy shared by every resolver and lifecycle operation.

Each error kind carries a machine-readable code, a human message, an HTTP-style
status code, an ``is_operational`` flag and a metadata bag. Operational errors
are expected failures that are safe to show to the caller; non-operational
errors are bugs or infrastructure faults and only ever surface a generic
message.

Errors expose an ``extensions`` mapping, which graphql-core copies onto the
GraphQL error it builds when a resolver raises, so the taxonomy reaches the
wire without a custom error formatter.
"""

from __future__ import annotations

from typing import Any

from redis.exceptions import RedisError
from sqlalchemy.exc import DBAPIError, IntegrityError, SQLAlchemyError

NOT_AUTHENTICATED = "NOT_AUTHENTICATED"
INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
VALIDATION_FAILED = "VALIDATION_FAILED"
ALREADY_TAKEN = "ALREADY_TAKEN"
NOT_FOUND = "NOT_FOUND"
DATABASE_ERROR = "DATABASE_ERROR"
NAME_EXHAUSTED = "NAME_EXHAUSTED"
INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"

GENERIC_MESSAGE = "Internal Server Error"

# Postgres SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"

SENSITIVE_KEYS = {
    "password",
    "token",
    "api_key",
    "secret",
    "auth",
    "authorization",
    "access_token",
    "refresh_token",
    "private_key",
    "jwt",
    "cookie",
    "credentials",
    "hash",
}


def sanitize_meta(meta: dict[str, Any] | None) -> dict[str, Any]:
    """Redact values whose key looks like a credential, recursing into nested dicts."""
    if not meta:
        return {}

    sanitized: dict[str, Any] = {}
    for key, value in meta.items():
        if any(sensitive in key.lower() for sensitive in SENSITIVE_KEYS):
            sanitized[key] = "[REDACTED]"
        elif isinstance(value, dict):
            sanitized[key] = sanitize_meta(value)
        else:
            sanitized[key] = value
    return sanitized


class BaseError(Exception):
    """Root of the error taxonomy."""

    code: str = INTERNAL_SERVER_ERROR
    status_code: int = 500
    is_operational: bool = True
    default_message: str = "Something went wrong"

    def __init__(
        self,
        message: str | None = None,
        meta: dict[str, Any] | None = None,
        *,
        code: str | None = None,
    ):
        self.message = message or self.default_message
        self.meta = sanitize_meta(meta)
        if code is not None:
            self.code = code
        super().__init__(self.message)

    @property
    def extensions(self) -> dict[str, Any]:
        """GraphQL error extensions for this error."""
        if not self.is_operational:
            return {
                "code": self.code,
                "statusCode": self.status_code,
                "isOperational": False,
            }
        return {
            "code": self.code,
            "statusCode": self.status_code,
            "isOperational": True,
            "meta": self.meta,
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


class AuthenticationError(BaseError):
    """Caller is not logged in, or login credentials are wrong."""

    code = NOT_AUTHENTICATED
    status_code = 401
    default_message = "Not authenticated"


class ValidationError(BaseError):
    """Input failed schema checks. ``meta['validation_errors']`` lists the issues."""

    code = VALIDATION_FAILED
    status_code = 400
    default_message = "Validation failed"


class ConflictError(BaseError):
    """A uniqueness rule was violated."""

    code = ALREADY_TAKEN
    status_code = 409
    default_message = "Already taken"


class NotFoundError(BaseError):
    """Referenced resource does not exist or does not belong to the caller."""

    code = NOT_FOUND
    status_code = 404
    default_message = "Not found"


class NoteNotFoundError(NotFoundError):
    code = "NOTE_NOT_FOUND"
    default_message = "Note not found"


class TodoNotFoundError(NotFoundError):
    code = "TODO_NOT_FOUND"
    default_message = "Todo not found"


class PasswordNotFoundError(NotFoundError):
    code = "PASSWORD_NOT_FOUND"
    default_message = "Password entry not found"


class UserNotFoundError(NotFoundError):
    code = "USER_NOT_FOUND"
    default_message = "User not found"


class DatabaseError(BaseError):
    """The backing store raised a known transient or integrity error."""

    code = DATABASE_ERROR
    status_code = 500
    default_message = "Database error"


class NameExhaustedError(DatabaseError):
    """Every candidate name for a resource is already taken by its owner."""

    code = NAME_EXHAUSTED
    default_message = "Could not allocate a unique name"


class UnknownError(BaseError):
    """Anything unanticipated. Always presented to the caller as a generic message."""

    code = INTERNAL_SERVER_ERROR
    status_code = 500
    is_operational = False
    default_message = GENERIC_MESSAGE


def is_unique_violation(exc: IntegrityError) -> bool:
    """Whether an IntegrityError was raised by a unique constraint."""
    orig = exc.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate == UNIQUE_VIOLATION:
        return True
    text = str(orig).lower()
    return "unique" in text or "duplicate key" in text


def store_error_name(exc: BaseException) -> str:
    """Name a storage failure by its exception types only.

    Driver messages and rendered SQL can embed statement parameters and are
    left out.
    """
    name = type(exc).__name__
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return f"{name} ({type(exc.orig).__name__})"
    return name


def classify_error(exc: BaseException, meta: dict[str, Any] | None = None) -> BaseError:
    """Map any exception onto exactly one taxonomy kind.

    Args:
        exc: The raised exception
        meta: Diagnostic context to attach to newly classified errors

    Returns:
        ``exc`` itself when it is already a taxonomy error, otherwise a new
        error whose ``__cause__`` is ``exc``.
    """
    if isinstance(exc, BaseError):
        return exc

    context = dict(meta or {})
    if isinstance(exc, IntegrityError) and is_unique_violation(exc):
        error: BaseError = ConflictError(meta=context)
    elif isinstance(exc, (SQLAlchemyError, RedisError)):
        context["original_error"] = store_error_name(exc)
        error = DatabaseError(meta=context)
    else:
        context["original_error"] = f"{type(exc).__name__}: {exc}"
        error = UnknownError(meta=context)

    error.__cause__ = exc
    return error
