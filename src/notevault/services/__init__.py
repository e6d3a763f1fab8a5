"""Application services outside the resource lifecycle."""

from .users import UserService

__all__ = ["UserService"]
