"""Session handling and caller identity."""

from .guard import authorize
from .session import ANONYMOUS, Session, SessionStore

__all__ = ["ANONYMOUS", "Session", "SessionStore", "authorize"]
