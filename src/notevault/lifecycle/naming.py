"""Per-owner unique name allocation.

A desired name that is already taken gets a numeric suffix: ``Report``,
``Report_1``, ``Report_2`` and so on, in attempt order. Existing stored names
follow this exact pattern, so the scheme must not change.

The check and the later insert are not atomic. The storage layer's unique
constraint on (owner, name) is what settles concurrent creates.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any
from uuid import UUID

from ..config import settings
from ..errors import NameExhaustedError
from ..logging import get_logger

logger = get_logger(__name__)

NameLookup = Callable[[str, UUID], Awaitable[Any | None]]


def candidate_name(desired: str, attempt: int) -> str:
    """Name tried on a given attempt; attempt 0 is the desired name itself."""
    if attempt == 0:
        return desired
    return f"{desired}_{attempt}"


async def allocate_name(
    desired: str,
    owner_id: UUID,
    find_by_name: NameLookup,
    *,
    max_attempts: int | None = None,
    kind: str | None = None,
) -> str:
    """Return the first name derived from ``desired`` that the owner has not used.

    Args:
        desired: Requested name
        owner_id: Owner whose namespace is searched
        find_by_name: Lookup returning the existing resource for (name, owner), or None
        max_attempts: Total number of candidates to try, the desired name included
        kind: Resource kind, for error metadata

    Raises:
        NameExhaustedError: If ``max_attempts`` candidates in a row are taken
    """
    limit = settings.max_title_attempts if max_attempts is None else max_attempts

    for attempt in range(limit):
        candidate = candidate_name(desired, attempt)
        if await find_by_name(candidate, owner_id) is None:
            if attempt:
                logger.debug(
                    "Allocated suffixed name",
                    desired=desired,
                    allocated=candidate,
                    kind=kind,
                )
            return candidate

    raise NameExhaustedError(
        meta={
            "desired_name": desired,
            "owner_id": str(owner_id),
            "kind": kind,
            "max_attempts": limit,
        }
    )
