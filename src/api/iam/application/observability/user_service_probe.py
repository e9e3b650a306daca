"""Protocol for user administration observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class UserServiceProbe(Protocol):
    """Domain probe for user administration operations."""

    def user_role_changed(self, user_id: str, role: str, changed_by: str) -> None:
        """Record that a user's site-wide role was changed."""
        ...

    def user_active_changed(self, user_id: str, active: bool, changed_by: str) -> None:
        """Record that a user was activated or deactivated."""
        ...

    def permission_denied(
        self, operation: str, user_id: str, actor_id: str | None
    ) -> None:
        """Record that a user administration request was refused."""
        ...

    def with_context(self, context: ObservationContext) -> UserServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultUserServiceProbe:
    """Default implementation of UserServiceProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultUserServiceProbe:
        return DefaultUserServiceProbe(logger=self._logger, context=context)

    def user_role_changed(self, user_id: str, role: str, changed_by: str) -> None:
        self._logger.info(
            "user_role_changed",
            user_id=user_id,
            role=role,
            changed_by=changed_by,
            **self._get_context_kwargs(),
        )

    def user_active_changed(self, user_id: str, active: bool, changed_by: str) -> None:
        self._logger.info(
            "user_active_changed",
            user_id=user_id,
            active=active,
            changed_by=changed_by,
            **self._get_context_kwargs(),
        )

    def permission_denied(
        self, operation: str, user_id: str, actor_id: str | None
    ) -> None:
        self._logger.warning(
            "user_permission_denied",
            operation=operation,
            user_id=user_id,
            actor_id=actor_id,
            **self._get_context_kwargs(),
        )
