"""Contract between the lifecycle engine and a resource kind's storage."""

from __future__ import annotations

from enum import Enum
from typing import Any, Protocol, TypeVar
from uuid import UUID

from ..errors import NotFoundError
from ..schemas import ResourceRecord

RecordT = TypeVar("RecordT", bound=ResourceRecord)


class ResourceKind(Enum):
    NOTE = "note"
    TODO = "todo"
    PASSWORD = "password"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class ResourceAdapter(Protocol[RecordT]):
    """Storage and validation hooks for one resource kind.

    Lookups are always scoped to an owner. ``find_by_id`` returns None both
    when the id does not exist and when it belongs to someone else.
    """

    kind: ResourceKind
    name_field: str
    not_found_error: type[NotFoundError]

    async def find_by_id(self, id: UUID, owner_id: UUID) -> RecordT | None: ...

    async def find_by_name(self, name: str, owner_id: UUID) -> RecordT | None: ...

    async def list(
        self,
        owner_id: UUID,
        *,
        is_deleted: bool | None = None,
        offset: int = 0,
        limit: int = 20,
    ) -> list[RecordT]: ...

    async def insert(self, fields: dict[str, Any]) -> RecordT: ...

    async def patch(self, id: UUID, fields: dict[str, Any]) -> RecordT: ...

    async def remove(self, id: UUID) -> None: ...

    def validate(self, data: dict[str, Any], *, partial: bool) -> dict[str, Any]:
        """Validate a payload.

        With ``partial`` set, only the supplied, non-null fields are returned.

        Raises:
            ValidationError: If any field fails validation
        """
        ...
