"""
Request context for GraphQL resolvers.

The context carries the caller's ``Session`` and the services resolvers use.
Nothing reads the session from ambient state: resolvers pass the context's
session into every lifecycle operation.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Any

import strawberry
from fastapi import Request, Response

from ..auth.session import ANONYMOUS, Session, SessionStore
from ..config import settings
from ..lifecycle.engine import LifecycleEngine
from ..logging import get_logger, get_request_id, set_request_context
from ..repositories import NoteRepository, PasswordRepository, TodoRepository
from ..schemas import NoteRecord, PasswordRecord, TodoRecord
from ..services.users import UserService

logger = get_logger(__name__)


@dataclass
class Services:
    """Everything a resolver may call."""

    notes: LifecycleEngine[NoteRecord]
    todos: LifecycleEngine[TodoRecord]
    passwords: LifecycleEngine[PasswordRecord]
    users: UserService
    session_store: SessionStore


def build_services(session_store: SessionStore | None = None) -> Services:
    store = session_store or SessionStore()
    return Services(
        notes=LifecycleEngine(NoteRepository()),
        todos=LifecycleEngine(TodoRepository()),
        passwords=LifecycleEngine(PasswordRepository()),
        users=UserService(store),
        session_store=store,
    )


@lru_cache(maxsize=1)
def get_services() -> Services:
    """Process-wide services, built on first use."""
    return build_services()


async def get_context(request: Request, response: Response) -> dict[str, Any]:
    """Build the context for one GraphQL request."""
    services = get_services()
    session_id = request.cookies.get(settings.session_cookie_name)
    session = await services.session_store.load(session_id)

    if session.user_id is not None:
        set_request_context(request_id=get_request_id(), user_id=str(session.user_id))

    return {
        "request": request,
        "response": response,
        "session": session,
        "services": services,
    }


def get_session_from_info(info: strawberry.Info) -> Session:
    """The caller's session, or an anonymous one if the context has none."""
    session = info.context.get("session")
    if session is None:
        logger.error("Session not found in GraphQL context")
        return ANONYMOUS
    return session


def get_services_from_info(info: strawberry.Info) -> Services:
    return info.context["services"]


def set_session(info: strawberry.Info, session: Session | None) -> None:
    """Replace the request's session and update the session cookie.

    Passing None clears the cookie.
    """
    info.context["session"] = session or ANONYMOUS
    response: Response | None = info.context.get("response")
    if response is None:
        return

    if session is None or session.session_id is None:
        response.delete_cookie(settings.session_cookie_name)
        return

    response.set_cookie(
        settings.session_cookie_name,
        session.session_id,
        max_age=settings.session_ttl_seconds,
        httponly=True,
        samesite="lax",
        secure=settings.cookie_secure,
    )
