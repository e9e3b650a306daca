"""Protocol for group application service observability.

Defines the interface for domain probes that capture application-level
domain events for group service operations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class GroupServiceProbe(Protocol):
    """Domain probe for group application service operations."""

    def group_created(self, group_id: str, name: str, creator_id: str) -> None:
        """Record that a group was created."""
        ...

    def group_creation_failed(self, name: str, error: str) -> None:
        """Record that group creation failed."""
        ...

    def group_visibility_changed(
        self, group_id: str, visible: bool, changed_by: str | None
    ) -> None:
        """Record that a group was shown or hidden."""
        ...

    def group_joined(self, group_id: str, user_id: str) -> None:
        """Record that a user joined a group."""
        ...

    def group_left(self, group_id: str, user_id: str) -> None:
        """Record that a user left a group."""
        ...

    def group_deleted(
        self, group_id: str, events_removed: int, memberships_removed: int
    ) -> None:
        """Record that a group and its contents were deleted."""
        ...

    def member_added(
        self, group_id: str, user_id: str, role: str, added_by: str | None
    ) -> None:
        """Record that a group admin added a member."""
        ...

    def member_role_changed(
        self, group_id: str, user_id: str, role: str, changed_by: str | None
    ) -> None:
        """Record that a member was promoted or demoted."""
        ...

    def member_removed(
        self, group_id: str, user_id: str, removed_by: str | None
    ) -> None:
        """Record that a group admin removed a member."""
        ...

    def permission_denied(
        self, operation: str, group_id: str | None, user_id: str | None
    ) -> None:
        """Record that an operation was refused for lack of permission."""
        ...

    def with_context(self, context: ObservationContext) -> GroupServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultGroupServiceProbe:
    """Default implementation of GroupServiceProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultGroupServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultGroupServiceProbe(logger=self._logger, context=context)

    def group_created(self, group_id: str, name: str, creator_id: str) -> None:
        """Record that a group was created."""
        self._logger.info(
            "group_created",
            group_id=group_id,
            name=name,
            creator_id=creator_id,
            **self._get_context_kwargs(),
        )

    def group_creation_failed(self, name: str, error: str) -> None:
        """Record that group creation failed."""
        self._logger.error(
            "group_creation_failed",
            name=name,
            error=error,
            **self._get_context_kwargs(),
        )

    def group_visibility_changed(
        self, group_id: str, visible: bool, changed_by: str | None
    ) -> None:
        """Record that a group was shown or hidden."""
        self._logger.info(
            "group_visibility_changed",
            group_id=group_id,
            visible=visible,
            changed_by=changed_by,
            **self._get_context_kwargs(),
        )

    def group_joined(self, group_id: str, user_id: str) -> None:
        """Record that a user joined a group."""
        self._logger.info(
            "group_joined",
            group_id=group_id,
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def group_left(self, group_id: str, user_id: str) -> None:
        """Record that a user left a group."""
        self._logger.info(
            "group_left",
            group_id=group_id,
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def group_deleted(
        self, group_id: str, events_removed: int, memberships_removed: int
    ) -> None:
        """Record that a group and its contents were deleted."""
        self._logger.info(
            "group_deleted",
            group_id=group_id,
            events_removed=events_removed,
            memberships_removed=memberships_removed,
            **self._get_context_kwargs(),
        )

    def member_added(
        self, group_id: str, user_id: str, role: str, added_by: str | None
    ) -> None:
        """Record that a group admin added a member."""
        self._logger.info(
            "group_member_added",
            group_id=group_id,
            user_id=user_id,
            role=role,
            added_by=added_by,
            **self._get_context_kwargs(),
        )

    def member_role_changed(
        self, group_id: str, user_id: str, role: str, changed_by: str | None
    ) -> None:
        """Record that a member was promoted or demoted."""
        self._logger.info(
            "group_member_role_changed",
            group_id=group_id,
            user_id=user_id,
            role=role,
            changed_by=changed_by,
            **self._get_context_kwargs(),
        )

    def member_removed(
        self, group_id: str, user_id: str, removed_by: str | None
    ) -> None:
        """Record that a group admin removed a member."""
        self._logger.info(
            "group_member_removed",
            group_id=group_id,
            user_id=user_id,
            removed_by=removed_by,
            **self._get_context_kwargs(),
        )

    def permission_denied(
        self, operation: str, group_id: str | None, user_id: str | None
    ) -> None:
        """Record that an operation was refused for lack of permission."""
        self._logger.warning(
            "group_permission_denied",
            operation=operation,
            group_id=group_id,
            user_id=user_id,
            **self._get_context_kwargs(),
        )
