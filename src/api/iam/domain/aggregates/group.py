"""Group aggregate for IAM context."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from iam.domain.value_objects import GroupId, UserId


@dataclass
class Group:
    """Group aggregate: an organizing unit that owns events.

    Memberships are stored separately (one row per member) and are not
    hydrated onto the aggregate; listings of groups stay one query.

    Business rules:
    - Group names are unique
    - A hidden group is listed only to its group admins and site admins
    """

    id: GroupId
    name: str
    created_by: UserId
    description: str | None = None
    visible: bool = True
    created_at: datetime | None = None

    @classmethod
    def create(
        cls,
        name: str,
        created_by: UserId,
        description: str | None = None,
        visible: bool = True,
    ) -> Group:
        """Factory method for creating a new group.

        Args:
            name: The name of the group
            created_by: The user creating the group
            description: Optional free-text description
            visible: Initial visibility flag

        Returns:
            A new Group aggregate

        Raises:
            ValueError: If the name is blank
        """
        name = name.strip()
        if not name:
            raise ValueError("Group name cannot be empty")

        return cls(
            id=GroupId.generate(),
            name=name,
            created_by=created_by,
            description=description,
            visible=visible,
        )

    def set_visibility(self, visible: bool) -> None:
        """Show or hide the group."""
        self.visible = visible
