"""Store port for the visibility resolver.

The resolver's only collaborator. Each method answers one point check in a
single lookup, already resolved against the calling user.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from shared_kernel.authorization.types import GroupRole
from visibility.domain.value_objects import EventFlags, GroupFlags


@runtime_checkable
class IVisibilityStore(Protocol):
    """Read-only lookups backing the visibility point checks.

    Implementations must return None for absent targets and raise for
    storage failures; they never translate a failure into "not found".
    """

    async def get_group_flags(
        self, group_id: str, user_id: str | None
    ) -> GroupFlags | None:
        """Fetch a group's visibility flag and the caller's admin status.

        Args:
            group_id: The group to look up
            user_id: The calling user, or None to skip membership resolution

        Returns:
            GroupFlags, or None if the group does not exist
        """
        ...

    async def get_event_flags(
        self, event_id: str, user_id: str | None
    ) -> EventFlags | None:
        """Fetch an event's visibility flag, creator and the caller's relations.

        Args:
            event_id: The event to look up
            user_id: The calling user, or None to skip relation resolution

        Returns:
            EventFlags, or None if the event does not exist
        """
        ...

    async def get_membership_role(
        self, user_id: str, group_id: str
    ) -> GroupRole | None:
        """Fetch the role a user holds in a group.

        Returns:
            The GroupRole, or None if the user is not a member
        """
        ...
