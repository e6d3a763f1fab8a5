"""Resource lifecycle: authorization, unique naming and the soft-delete state machine."""

from .adapter import ResourceAdapter, ResourceKind
from .engine import LifecycleEngine
from .naming import allocate_name, candidate_name

__all__ = [
    "LifecycleEngine",
    "ResourceAdapter",
    "ResourceKind",
    "allocate_name",
    "candidate_name",
]
