"""Protocol for event application service observability.

Defines the interface for domain probes that capture application-level
domain events for event service operations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class EventServiceProbe(Protocol):
    """Domain probe for event application service operations."""

    def event_created(self, event_id: str, group_id: str, creator_id: str) -> None:
        """Record that an event was created."""
        ...

    def event_creation_failed(self, group_id: str, error: str) -> None:
        """Record that event creation failed."""
        ...

    def event_visibility_changed(
        self, event_id: str, visible: bool, changed_by: str | None
    ) -> None:
        """Record that an event was shown or hidden."""
        ...

    def subscribed(self, event_id: str, user_id: str) -> None:
        """Record that a user subscribed to an event."""
        ...

    def unsubscribed(self, event_id: str, user_id: str) -> None:
        """Record that a user unsubscribed from an event."""
        ...

    def event_deleted(self, event_id: str) -> None:
        """Record that an event was deleted."""
        ...

    def permission_denied(
        self, operation: str, event_id: str | None, user_id: str | None
    ) -> None:
        """Record that an operation was refused for lack of permission."""
        ...

    def with_context(self, context: ObservationContext) -> EventServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultEventServiceProbe:
    """Default implementation of EventServiceProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultEventServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultEventServiceProbe(logger=self._logger, context=context)

    def event_created(self, event_id: str, group_id: str, creator_id: str) -> None:
        """Record that an event was created."""
        self._logger.info(
            "event_created",
            event_id=event_id,
            group_id=group_id,
            creator_id=creator_id,
            **self._get_context_kwargs(),
        )

    def event_creation_failed(self, group_id: str, error: str) -> None:
        """Record that event creation failed."""
        self._logger.error(
            "event_creation_failed",
            group_id=group_id,
            error=error,
            **self._get_context_kwargs(),
        )

    def event_visibility_changed(
        self, event_id: str, visible: bool, changed_by: str | None
    ) -> None:
        """Record that an event was shown or hidden."""
        self._logger.info(
            "event_visibility_changed",
            event_id=event_id,
            visible=visible,
            changed_by=changed_by,
            **self._get_context_kwargs(),
        )

    def subscribed(self, event_id: str, user_id: str) -> None:
        """Record that a user subscribed to an event."""
        self._logger.info(
            "event_subscribed",
            event_id=event_id,
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def unsubscribed(self, event_id: str, user_id: str) -> None:
        """Record that a user unsubscribed from an event."""
        self._logger.info(
            "event_unsubscribed",
            event_id=event_id,
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def event_deleted(self, event_id: str) -> None:
        """Record that an event was deleted."""
        self._logger.info(
            "event_deleted_by_admin",
            event_id=event_id,
            **self._get_context_kwargs(),
        )

    def permission_denied(
        self, operation: str, event_id: str | None, user_id: str | None
    ) -> None:
        """Record that an operation was refused for lack of permission."""
        self._logger.warning(
            "event_permission_denied",
            operation=operation,
            event_id=event_id,
            user_id=user_id,
            **self._get_context_kwargs(),
        )
