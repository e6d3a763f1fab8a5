"""
User and account resolvers
"""

from typing import TYPE_CHECKING
from uuid import UUID

import strawberry

from ...logging import get_logger
from ..context import get_services_from_info, get_session_from_info, set_session
from .resources import input_fields

if TYPE_CHECKING:
    from ..mutations.root import CreateUserInput, LoginUserInput, UpdateUserInput
    from ..types.user import User

logger = get_logger(__name__)


async def resolve_current_user(info: strawberry.Info) -> "User | None":
    """The signed-in user, or None."""
    from ..types.user import User

    services = get_services_from_info(info)
    record = await services.users.current_user(get_session_from_info(info))
    return User.from_record(record) if record is not None else None


async def resolve_user_by_id(info: strawberry.Info, user_id: UUID) -> "User | None":
    """Resolve a resource owner. Only the caller's own account is visible."""
    from ..types.user import User

    session = get_session_from_info(info)
    if session.user_id != user_id:
        return None

    record = await get_services_from_info(info).users.get_user(user_id)
    return User.from_record(record) if record is not None else None


async def create_user(info: strawberry.Info, input: "CreateUserInput") -> "User":
    from ..types.user import User

    services = get_services_from_info(info)
    record, session = await services.users.register(
        input_fields(input), get_session_from_info(info)
    )
    set_session(info, session)
    return User.from_record(record)


async def login_user(info: strawberry.Info, input: "LoginUserInput") -> "User":
    from ..types.user import User

    services = get_services_from_info(info)
    record, session = await services.users.login(
        input_fields(input), get_session_from_info(info)
    )
    set_session(info, session)
    return User.from_record(record)


async def logout_user(info: strawberry.Info) -> bool:
    services = get_services_from_info(info)
    result = await services.users.logout(get_session_from_info(info))
    set_session(info, None)
    return result


async def update_user(info: strawberry.Info, input: "UpdateUserInput") -> bool:
    services = get_services_from_info(info)
    return await services.users.change_password(
        input_fields(input), get_session_from_info(info)
    )


async def delete_user(info: strawberry.Info) -> bool:
    services = get_services_from_info(info)
    result = await services.users.delete_account(get_session_from_info(info))
    set_session(info, None)
    return result
