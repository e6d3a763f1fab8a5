"""
Resource lifecycle engine.

One engine instance drives every mutation of one resource kind through the
same state machine::

    [nonexistent] --create--> [active]
    [active] --soft_delete--> [soft-deleted]
    [soft-deleted] --restore--> [active]
    [active|soft-deleted] --hard_delete--> [nonexistent]
    [active|soft-deleted] --update--> [same state]

Every operation authorizes the session first and, when addressed by id,
confirms the caller owns the target before anything is written. Each
operation writes to the store at most once. Failures are classified into the
error taxonomy, logged, and raised.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from datetime import datetime
from typing import Any, Generic, Literal, TypeVar
from uuid import UUID

from ..auth.guard import authorize
from ..auth.session import Session
from ..config import settings
from ..dbmodels import utcnow
from ..errors import BaseError, classify_error
from ..logging import error_boundary, get_logger, log_request
from .adapter import RecordT, ResourceAdapter
from .naming import allocate_name

logger = get_logger(__name__)

T = TypeVar("T")

RenamePolicy = Literal["allow", "allocate"]

# Resolver-facing operation names, e.g. "softDeleteNote"
OPERATION_PREFIXES = {
    "create": "create",
    "update": "update",
    "soft_delete": "softDelete",
    "restore": "restore",
    "hard_delete": "delete",
    "get": "get",
    "list": "list",
}


class LifecycleEngine(Generic[RecordT]):
    """Create, update, soft-delete, restore and hard-delete resources of one kind."""

    def __init__(
        self,
        adapter: ResourceAdapter[RecordT],
        *,
        max_title_attempts: int | None = None,
        rename_policy: RenamePolicy | None = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.adapter = adapter
        self.max_title_attempts = (
            settings.max_title_attempts if max_title_attempts is None else max_title_attempts
        )
        self.rename_policy: RenamePolicy = rename_policy or settings.rename_policy
        self.clock = clock

    @property
    def label(self) -> str:
        return self.adapter.kind.label

    def operation_name(self, operation: str) -> str:
        return f"{OPERATION_PREFIXES[operation]}{self.label}"

    # Mutations

    async def create(self, data: dict[str, Any], session: Session) -> RecordT:
        """Create a resource owned by the caller under a unique name."""
        return await self._run("create", session, self._create, data)

    async def update(self, id: UUID, data: dict[str, Any], session: Session) -> RecordT:
        """Merge the supplied fields into an existing resource."""
        return await self._run("update", session, self._update, id, data)

    async def soft_delete(self, id: UUID, session: Session) -> RecordT:
        """Mark a resource deleted. Already soft-deleted resources are returned as-is."""
        return await self._run("soft_delete", session, self._soft_delete, id)

    async def restore(self, id: UUID, session: Session) -> RecordT:
        """Bring a soft-deleted resource back. Active resources are returned as-is."""
        return await self._run("restore", session, self._restore, id)

    async def hard_delete(self, id: UUID, session: Session) -> RecordT:
        """Remove a resource permanently and return its last stored state."""
        return await self._run("hard_delete", session, self._hard_delete, id)

    # Reads

    async def get(self, id: UUID, session: Session) -> RecordT:
        return await self._run("get", session, self._get_owned, id)

    async def list(
        self,
        session: Session,
        *,
        is_deleted: bool | None = None,
        offset: int = 0,
        limit: int | None = None,
    ) -> list[RecordT]:
        """List the caller's resources, newest first."""

        async def _list(owner_id: UUID) -> list[RecordT]:
            return await self._call(
                self.adapter.list,
                owner_id,
                is_deleted=is_deleted,
                offset=max(offset, 0),
                limit=limit or settings.rows_limit,
            )

        return await self._run("list", session, _list)

    # Transitions

    async def _create(self, owner_id: UUID, data: dict[str, Any]) -> RecordT:
        fields = self.adapter.validate(data, partial=False)
        fields[self.adapter.name_field] = await self._allocate(
            fields[self.adapter.name_field], owner_id
        )
        fields.update(user_id=owner_id, is_deleted=False, deleted_at=None)

        record = await self._call(self.adapter.insert, fields)
        self._log_success("create", record, owner_id)
        return record

    async def _update(self, owner_id: UUID, id: UUID, data: dict[str, Any]) -> RecordT:
        changes = self.adapter.validate(data, partial=True)
        current = await self._get_owned(owner_id, id)

        if not changes:
            return current

        new_name = changes.get(self.adapter.name_field)
        if (
            self.rename_policy == "allocate"
            and new_name is not None
            and new_name != current.name
        ):
            changes[self.adapter.name_field] = await self._allocate(new_name, owner_id)

        updated_fields = sorted(changes)
        changes["updated_at"] = self.clock()
        record = await self._call(self.adapter.patch, id, changes)
        self._log_success("update", record, owner_id, updated_fields=updated_fields)
        return record

    async def _soft_delete(self, owner_id: UUID, id: UUID) -> RecordT:
        current = await self._get_owned(owner_id, id)
        if current.is_soft_deleted:
            logger.debug(f"{self.label} already soft-deleted", resource_id=str(id))
            return current

        now = self.clock()
        record = await self._call(
            self.adapter.patch,
            id,
            {"is_deleted": True, "deleted_at": now, "updated_at": now},
        )
        self._log_success("soft_delete", record, owner_id)
        return record

    async def _restore(self, owner_id: UUID, id: UUID) -> RecordT:
        current = await self._get_owned(owner_id, id)
        # Covers the legacy mixed state is_deleted=False with a stale deleted_at
        if not current.is_deleted:
            logger.debug(f"{self.label} already active", resource_id=str(id))
            return current

        record = await self._call(
            self.adapter.patch,
            id,
            {"is_deleted": False, "deleted_at": None, "updated_at": self.clock()},
        )
        self._log_success("restore", record, owner_id)
        return record

    async def _hard_delete(self, owner_id: UUID, id: UUID) -> RecordT:
        snapshot = await self._get_owned(owner_id, id)
        await self._call(self.adapter.remove, id)
        self._log_success("hard_delete", snapshot, owner_id)
        return snapshot

    # Helpers

    async def _get_owned(self, owner_id: UUID, id: UUID) -> RecordT:
        record = await self._call(self.adapter.find_by_id, id, owner_id)
        if record is None:
            raise self.adapter.not_found_error(
                meta={"id": str(id), "kind": self.adapter.kind.value}
            )
        return record

    async def _allocate(self, desired: str, owner_id: UUID) -> str:
        return await allocate_name(
            desired,
            owner_id,
            lambda name, owner: self._call(self.adapter.find_by_name, name, owner),
            max_attempts=self.max_title_attempts,
            kind=self.adapter.kind.value,
        )

    async def _call(self, func: Callable[..., Awaitable[T]], *args: Any, **kwargs: Any) -> T:
        """Invoke an adapter function, classifying anything it raises."""
        try:
            return await func(*args, **kwargs)
        except BaseError:
            raise
        except Exception as e:
            raise classify_error(
                e,
                {"kind": self.adapter.kind.value, "call": getattr(func, "__name__", repr(func))},
            ) from e

    async def _run(
        self,
        operation: str,
        session: Session,
        func: Callable[..., Awaitable[T]],
        *args: Any,
    ) -> T:
        name = self.operation_name(operation)
        user_id = session.user_id if session else None
        log_request(name, user_id)

        with error_boundary(name, user_id):
            owner_id = authorize(session)
            return await func(owner_id, *args)

    def _log_success(
        self, operation: str, record: RecordT, owner_id: UUID, **extra: Any
    ) -> None:
        logger.info(
            f"{self.label} {operation.replace('_', '-')}",
            operation=self.operation_name(operation),
            resource_id=str(record.id),
            user_id=str(owner_id),
            **extra,
        )
