"""Value objects for IAM domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for identifiers and domain concepts.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ulid import ULID

from shared_kernel.authorization.types import GroupRole


@dataclass(frozen=True)
class GroupId:
    """Identifier for a Group aggregate.

    New ids are ULIDs for sortability. Ids read back from storage or a URL
    are opaque strings and are not validated.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> GroupId:
        """Generate a new GroupId using ULID."""
        return cls(value=str(ULID()))


@dataclass(frozen=True)
class UserId:
    """Identifier for a User aggregate.

    User ids come from the token issuer and are treated as opaque strings;
    only newly generated ids are guaranteed to be ULIDs.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> UserId:
        """Generate a new UserId using ULID."""
        return cls(value=str(ULID()))


@dataclass(frozen=True)
class GroupMembership:
    """A user's membership in one group.

    Attributes:
        user_id: The member
        group_id: The group
        role: The member's role within the group
        joined_at: When the membership was created
    """

    user_id: UserId
    group_id: GroupId
    role: GroupRole
    joined_at: datetime | None = None

    def is_admin(self) -> bool:
        """Check if the membership grants group ADMIN."""
        return self.role == GroupRole.ADMIN


@dataclass(frozen=True)
class GroupListOptions:
    """Filtering and paging options for group listings.

    Attributes:
        search: Case-insensitive substring matched against name and description
        page: 1-based page number
        limit: Page size
        include_hidden: Accepted for compatibility; listings never narrow on it
    """

    search: str | None = None
    page: int = 1
    limit: int = 10
    include_hidden: bool = False

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError("page must be >= 1")
        if self.limit < 1:
            raise ValueError("limit must be >= 1")

    @property
    def offset(self) -> int:
        """Row offset of the first item on the page."""
        return (self.page - 1) * self.limit
