"""Domain probe for event repository operations.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to event and subscription persistence.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class EventRepositoryProbe(Protocol):
    """Domain probe for event repository operations."""

    def event_saved(self, event_id: str, group_id: str) -> None:
        """Record that an event was successfully saved."""
        ...

    def event_not_found(self, event_id: str) -> None:
        """Record that an event was not found."""
        ...

    def event_deleted(self, event_id: str, subscriptions_removed: int) -> None:
        """Record that an event and its subscriptions were deleted."""
        ...

    def group_events_deleted(
        self, group_id: str, events_removed: int, subscriptions_removed: int
    ) -> None:
        """Record that all events of a group were deleted."""
        ...

    def events_listed(self, count: int) -> None:
        """Record that events were listed."""
        ...

    def with_context(self, context: ObservationContext) -> EventRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class SubscriptionRepositoryProbe(Protocol):
    """Domain probe for subscription repository operations."""

    def subscription_added(self, event_id: str, user_id: str) -> None:
        """Record that a user subscribed to an event."""
        ...

    def subscription_removed(self, event_id: str, user_id: str) -> None:
        """Record that a user unsubscribed from an event."""
        ...

    def with_context(
        self, context: ObservationContext
    ) -> SubscriptionRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultEventRepositoryProbe:
    """Default implementation of EventRepositoryProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultEventRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultEventRepositoryProbe(logger=self._logger, context=context)

    def event_saved(self, event_id: str, group_id: str) -> None:
        """Record that an event was successfully saved."""
        self._logger.info(
            "event_saved",
            event_id=event_id,
            group_id=group_id,
            **self._get_context_kwargs(),
        )

    def event_not_found(self, event_id: str) -> None:
        """Record that an event was not found."""
        self._logger.debug(
            "event_not_found",
            event_id=event_id,
            **self._get_context_kwargs(),
        )

    def event_deleted(self, event_id: str, subscriptions_removed: int) -> None:
        """Record that an event and its subscriptions were deleted."""
        self._logger.info(
            "event_deleted",
            event_id=event_id,
            subscriptions_removed=subscriptions_removed,
            **self._get_context_kwargs(),
        )

    def group_events_deleted(
        self, group_id: str, events_removed: int, subscriptions_removed: int
    ) -> None:
        """Record that all events of a group were deleted."""
        self._logger.info(
            "group_events_deleted",
            group_id=group_id,
            events_removed=events_removed,
            subscriptions_removed=subscriptions_removed,
            **self._get_context_kwargs(),
        )

    def events_listed(self, count: int) -> None:
        """Record that events were listed."""
        self._logger.debug(
            "events_listed",
            count=count,
            **self._get_context_kwargs(),
        )


class DefaultSubscriptionRepositoryProbe:
    """Default implementation of SubscriptionRepositoryProbe using structlog."""

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
    ) -> DefaultSubscriptionRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultSubscriptionRepositoryProbe(logger=self._logger, context=context)

    def subscription_added(self, event_id: str, user_id: str) -> None:
        """Record that a user subscribed to an event."""
        self._logger.info(
            "subscription_added",
            event_id=event_id,
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def subscription_removed(self, event_id: str, user_id: str) -> None:
        """Record that a user unsubscribed from an event."""
        self._logger.info(
            "subscription_removed",
            event_id=event_id,
            user_id=user_id,
            **self._get_context_kwargs(),
        )
