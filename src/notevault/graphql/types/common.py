"""
Types shared by several resource kinds
"""

from enum import Enum

import strawberry


@strawberry.enum
class Priority(Enum):
    """Priority of a todo or password entry."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"
