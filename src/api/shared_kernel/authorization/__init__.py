"""Authorization primitives shared across bounded contexts.

Roles, resource kinds, permissions, and the per-request actor context
consumed by the visibility resolver and the application services.
"""

from shared_kernel.authorization.context import (
    ActorContext,
    InvalidActorContextError,
)
from shared_kernel.authorization.types import (
    GroupRole,
    Permission,
    ResourceType,
    UserRole,
)

__all__ = [
    "ActorContext",
    "InvalidActorContextError",
    "GroupRole",
    "Permission",
    "ResourceType",
    "UserRole",
]
