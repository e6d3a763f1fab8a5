"""
Shared resolvers for owner-scoped resources
"""

from collections.abc import Callable
from enum import Enum
from typing import Any, Generic, TypeVar
from uuid import UUID

import strawberry

from ...lifecycle.adapter import RecordT
from ...lifecycle.engine import LifecycleEngine
from ..context import get_services_from_info, get_session_from_info

T = TypeVar("T")


def input_fields(input: Any, *, exclude: frozenset[str] = frozenset()) -> dict[str, Any]:
    """Collect the fields a client actually sent on a Strawberry input.

    Unset and null fields are dropped so partial updates leave them untouched.
    Strawberry enums are reduced to their values.
    """
    data: dict[str, Any] = {}
    for name, value in vars(input).items():
        if name in exclude or value is None or value is strawberry.UNSET:
            continue
        if isinstance(value, Enum):
            value = value.value
        data[name] = value
    return data


class ResourceResolvers(Generic[RecordT, T]):
    """Resolvers for one resource kind, backed by its lifecycle engine.

    Args:
        service: Name of the engine attribute on the context ``Services``
        to_type: Converts an engine record into the GraphQL type
    """

    def __init__(self, service: str, to_type: Callable[[RecordT], T]):
        self.service = service
        self.to_type = to_type

    def engine(self, info: strawberry.Info) -> LifecycleEngine[RecordT]:
        return getattr(get_services_from_info(info), self.service)

    async def create(self, info: strawberry.Info, input: Any) -> T:
        record = await self.engine(info).create(
            input_fields(input), get_session_from_info(info)
        )
        return self.to_type(record)

    async def update(self, info: strawberry.Info, input: Any) -> T:
        record = await self.engine(info).update(
            input.id,
            input_fields(input, exclude=frozenset({"id"})),
            get_session_from_info(info),
        )
        return self.to_type(record)

    async def soft_delete(self, info: strawberry.Info, id: UUID) -> T:
        record = await self.engine(info).soft_delete(id, get_session_from_info(info))
        return self.to_type(record)

    async def restore(self, info: strawberry.Info, id: UUID) -> T:
        record = await self.engine(info).restore(id, get_session_from_info(info))
        return self.to_type(record)

    async def hard_delete(self, info: strawberry.Info, id: UUID) -> T:
        record = await self.engine(info).hard_delete(id, get_session_from_info(info))
        return self.to_type(record)

    async def get(self, info: strawberry.Info, id: UUID) -> T:
        record = await self.engine(info).get(id, get_session_from_info(info))
        return self.to_type(record)

    async def list(
        self,
        info: strawberry.Info,
        is_deleted: bool | None = None,
        cursor: int = 0,
    ) -> list[T]:
        records = await self.engine(info).list(
            get_session_from_info(info), is_deleted=is_deleted, offset=cursor
        )
        return [self.to_type(record) for record in records]
