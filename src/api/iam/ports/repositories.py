"""Repository protocols (ports) for IAM bounded context.

Repository protocols define the interface for persisting and retrieving
aggregates. Listing methods accept a visibility predicate that the
implementation compiles into its query.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from iam.domain.aggregates import Group, User
from iam.domain.value_objects import (
    GroupId,
    GroupListOptions,
    GroupMembership,
    UserId,
)
from shared_kernel.authorization.types import GroupRole
from visibility.domain.predicates import Predicate


@runtime_checkable
class IUserRepository(Protocol):
    """Repository for provisioned User aggregates."""

    async def get_by_id(self, user_id: UserId) -> User | None:
        """Retrieve a user by ID.

        Args:
            user_id: The unique identifier of the user

        Returns:
            The User aggregate, or None if not found
        """
        ...

    async def save(self, user: User) -> None:
        """Persist a user's role and active flag.

        Raises:
            UserNotFoundError: If the user has not been provisioned
        """
        ...


@runtime_checkable
class IGroupRepository(Protocol):
    """Repository for Group aggregate persistence."""

    async def save(self, group: Group) -> None:
        """Persist a group aggregate.

        Creates a new group or updates an existing one.

        Raises:
            DuplicateGroupNameError: If the group name is already taken
        """
        ...

    async def get_by_id(self, group_id: GroupId) -> Group | None:
        """Retrieve a group by its ID.

        Returns:
            The Group aggregate, or None if not found
        """
        ...

    async def get_by_name(self, name: str) -> Group | None:
        """Retrieve a group by its unique name."""
        ...

    async def list_matching(
        self, predicate: Predicate, options: GroupListOptions
    ) -> tuple[list[Group], int]:
        """List one page of groups matching a visibility predicate.

        Args:
            predicate: Row filter, usually built by the visibility resolver
            options: Search text and paging

        Returns:
            The page of groups, newest first, and the total match count
        """
        ...

    async def delete(self, group_id: GroupId) -> bool:
        """Delete a group row.

        Memberships and events must already be removed.

        Returns:
            True if deleted, False if not found
        """
        ...


@runtime_checkable
class IMembershipRepository(Protocol):
    """Repository for group membership rows."""

    async def get(self, user_id: UserId, group_id: GroupId) -> GroupMembership | None:
        """Retrieve one membership, or None if the user is not a member."""
        ...

    async def add(self, membership: GroupMembership) -> None:
        """Persist a new membership.

        Raises:
            AlreadyMemberError: If the membership already exists
        """
        ...

    async def remove(self, user_id: UserId, group_id: GroupId) -> bool:
        """Delete a membership.

        Returns:
            True if deleted, False if the user was not a member
        """
        ...

    async def list_by_group(self, group_id: GroupId) -> list[GroupMembership]:
        """List every membership of a group, admins first."""
        ...

    async def update_role(
        self, user_id: UserId, group_id: GroupId, role: GroupRole
    ) -> bool:
        """Change a member's group role.

        Returns:
            True if updated, False if the user was not a member
        """
        ...

    async def delete_by_group(self, group_id: GroupId) -> int:
        """Delete every membership of a group.

        Returns:
            Number of memberships removed
        """
        ...


@runtime_checkable
class IGroupEventPurger(Protocol):
    """Removes the events owned by a group, subscriptions first.

    Implemented by the events context; the group service depends only on
    this port so that IAM does not import event code.
    """

    async def delete_by_group(self, group_id: str) -> int:
        """Delete every event of a group and their subscriptions.

        Returns:
            Number of events removed
        """
        ...
