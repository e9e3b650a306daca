"""Ports (interfaces) for IAM bounded context.

Ports define the contracts for repositories without specifying
implementation details. This allows for dependency inversion and makes
the domain layer independent of infrastructure.
"""

from iam.ports.exceptions import (
    AlreadyMemberError,
    DuplicateGroupNameError,
    GroupNotFoundError,
    NotAMemberError,
    UnauthorizedError,
    UserNotFoundError,
)
from iam.ports.repositories import (
    IGroupEventPurger,
    IGroupRepository,
    IMembershipRepository,
    IUserRepository,
)

__all__ = [
    "IGroupEventPurger",
    "IGroupRepository",
    "IMembershipRepository",
    "IUserRepository",
    "AlreadyMemberError",
    "DuplicateGroupNameError",
    "GroupNotFoundError",
    "NotAMemberError",
    "UnauthorizedError",
    "UserNotFoundError",
]
