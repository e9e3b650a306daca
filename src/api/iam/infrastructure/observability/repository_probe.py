"""Domain probe for IAM repository operations.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to user, group, and membership
repository operations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class UserRepositoryProbe(Protocol):
    """Domain probe for user repository operations."""

    def user_retrieved(self, user_id: str) -> None:
        """Record that a user was retrieved."""
        ...

    def user_not_found(self, user_id: str) -> None:
        """Record that a user was not found."""
        ...

    def user_saved(self, user_id: str, role: str, active: bool) -> None:
        """Record that a user's role or active flag was persisted."""
        ...

    def with_context(self, context: ObservationContext) -> UserRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class GroupRepositoryProbe(Protocol):
    """Domain probe for group repository operations.

    Records domain events during group persistence operations.
    """

    def group_saved(self, group_id: str, visible: bool) -> None:
        """Record that a group was successfully saved."""
        ...

    def group_retrieved(self, group_id: str) -> None:
        """Record that a group was retrieved."""
        ...

    def group_not_found(self, group_id: str) -> None:
        """Record that a group was not found."""
        ...

    def group_deleted(self, group_id: str) -> None:
        """Record that a group was deleted."""
        ...

    def groups_listed(self, count: int, total: int) -> None:
        """Record that a page of groups was listed."""
        ...

    def duplicate_group_name(self, name: str) -> None:
        """Record that a duplicate group name was detected."""
        ...

    def with_context(self, context: ObservationContext) -> GroupRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class MembershipRepositoryProbe(Protocol):
    """Domain probe for group membership repository operations."""

    def membership_added(self, user_id: str, group_id: str, role: str) -> None:
        """Record that a membership was created."""
        ...

    def membership_removed(self, user_id: str, group_id: str) -> None:
        """Record that a membership was deleted."""
        ...

    def membership_role_changed(self, user_id: str, group_id: str, role: str) -> None:
        """Record that a member was given a new group role."""
        ...

    def memberships_purged(self, group_id: str, count: int) -> None:
        """Record that all memberships of a group were deleted."""
        ...

    def with_context(self, context: ObservationContext) -> MembershipRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultUserRepositoryProbe:
    """Default implementation of UserRepositoryProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultUserRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultUserRepositoryProbe(logger=self._logger, context=context)

    def user_retrieved(self, user_id: str) -> None:
        """Record that a user was retrieved."""
        self._logger.debug(
            "user_retrieved",
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def user_not_found(self, user_id: str) -> None:
        """Record that a user was not found."""
        self._logger.debug(
            "user_not_found",
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def user_saved(self, user_id: str, role: str, active: bool) -> None:
        """Record that a user's role or active flag was persisted."""
        self._logger.info(
            "user_saved",
            user_id=user_id,
            role=role,
            active=active,
            **self._get_context_kwargs(),
        )


class DefaultGroupRepositoryProbe:
    """Default implementation of GroupRepositoryProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultGroupRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultGroupRepositoryProbe(logger=self._logger, context=context)

    def group_saved(self, group_id: str, visible: bool) -> None:
        """Record that a group was successfully saved."""
        self._logger.info(
            "group_saved",
            group_id=group_id,
            visible=visible,
            **self._get_context_kwargs(),
        )

    def group_retrieved(self, group_id: str) -> None:
        """Record that a group was retrieved."""
        self._logger.debug(
            "group_retrieved",
            group_id=group_id,
            **self._get_context_kwargs(),
        )

    def group_not_found(self, group_id: str) -> None:
        """Record that a group was not found."""
        self._logger.debug(
            "group_not_found",
            group_id=group_id,
            **self._get_context_kwargs(),
        )

    def group_deleted(self, group_id: str) -> None:
        """Record that a group was deleted."""
        self._logger.info(
            "group_deleted",
            group_id=group_id,
            **self._get_context_kwargs(),
        )

    def groups_listed(self, count: int, total: int) -> None:
        """Record that a page of groups was listed."""
        self._logger.debug(
            "groups_listed",
            count=count,
            total=total,
            **self._get_context_kwargs(),
        )

    def duplicate_group_name(self, name: str) -> None:
        """Record that a duplicate group name was detected."""
        self._logger.warning(
            "duplicate_group_name",
            name=name,
            **self._get_context_kwargs(),
        )


class DefaultMembershipRepositoryProbe:
    """Default implementation of MembershipRepositoryProbe using structlog."""

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

    def with_context(
        self, context: ObservationContext
    ) -> DefaultMembershipRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultMembershipRepositoryProbe(logger=self._logger, context=context)

    def membership_added(self, user_id: str, group_id: str, role: str) -> None:
        """Record that a membership was created."""
        self._logger.info(
            "membership_added",
            user_id=user_id,
            group_id=group_id,
            role=role,
            **self._get_context_kwargs(),
        )

    def membership_removed(self, user_id: str, group_id: str) -> None:
        """Record that a membership was deleted."""
        self._logger.info(
            "membership_removed",
            user_id=user_id,
            group_id=group_id,
            **self._get_context_kwargs(),
        )

    def memberships_purged(self, group_id: str, count: int) -> None:
        """Record that all memberships of a group were deleted."""
        self._logger.info(
            "memberships_purged",
            group_id=group_id,
            count=count,
            **self._get_context_kwargs(),
        )

    def membership_role_changed(self, user_id: str, group_id: str, role: str) -> None:
        """Record that a member was given a new group role."""
        self._logger.info(
            "membership_role_changed",
            user_id=user_id,
            group_id=group_id,
            role=role,
            **self._get_context_kwargs(),
        )
