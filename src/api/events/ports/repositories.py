"""Repository protocols (ports) for the events bounded context."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, runtime_checkable

from events.domain.aggregates import Event
from events.domain.value_objects import EventId, EventListOptions, Subscription
from shared_kernel.authorization.types import GroupRole
from visibility.domain.predicates import Predicate


@runtime_checkable
class IEventRepository(Protocol):
    """Repository for Event aggregate persistence."""

    async def save(self, event: Event) -> None:
        """Create a new event or update an existing one."""
        ...

    async def get_by_id(self, event_id: EventId) -> Event | None:
        """Retrieve an event by ID, or None if not found."""
        ...

    async def list_matching(
        self,
        predicate: Predicate,
        options: EventListOptions,
        now: datetime,
    ) -> list[Event]:
        """List events matching a visibility predicate and the options.

        Args:
            predicate: Row filter, usually built by the visibility resolver
            options: Group and date filters; ``subscribed`` is expected to be
                folded into ``predicate`` by the caller
            now: Reference time for ``upcoming``

        Returns:
            Matching events ordered by start date
        """
        ...

    async def delete(self, event_id: EventId) -> bool:
        """Delete an event and its subscriptions.

        Returns:
            True if deleted, False if not found
        """
        ...

    async def delete_by_group(self, group_id: str) -> int:
        """Delete every event of a group and their subscriptions.

        Returns:
            Number of events removed
        """
        ...


@runtime_checkable
class ISubscriptionRepository(Protocol):
    """Repository for event subscriptions."""

    async def exists(self, event_id: EventId, user_id: str) -> bool:
        """Check whether a user is subscribed to an event."""
        ...

    async def add(self, subscription: Subscription) -> None:
        """Persist a subscription.

        Raises:
            AlreadySubscribedError: If the subscription already exists
        """
        ...

    async def remove(self, event_id: EventId, user_id: str) -> bool:
        """Delete a subscription.

        Returns:
            True if deleted, False if the user was not subscribed
        """
        ...


@runtime_checkable
class IGroupMembershipReader(Protocol):
    """Read-only view of group memberships needed by event use cases."""

    async def group_exists(self, group_id: str) -> bool:
        """Check whether a group exists."""
        ...

    async def get_role(self, user_id: str, group_id: str) -> GroupRole | None:
        """Role the user holds in the group, or None if not a member."""
        ...
