"""Event application service for the events bounded context.

Orchestrates event listing, creation, visibility changes, subscriptions and
deletion. Every visibility decision is delegated to the visibility resolver.
"""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy.ext.asyncio import AsyncSession

from events.application.observability import (
    DefaultEventServiceProbe,
    EventServiceProbe,
)
from events.domain.aggregates import Event
from events.domain.value_objects import EventId, EventListOptions, Subscription
from events.ports.exceptions import (
    EventNotFoundError,
    NotSubscribedError,
    OwningGroupNotFoundError,
    UnauthorizedError,
)
from events.ports.repositories import (
    IEventRepository,
    IGroupMembershipReader,
    ISubscriptionRepository,
)
from shared_kernel.authorization.context import ActorContext
from shared_kernel.authorization.types import GroupRole
from visibility.application.resolver import VisibilityResolver
from visibility.domain.predicates import SubscriptionExists, all_of


class EventService:
    """Application service for events and their attendee lists.

    Manages database transactions: each write use case runs its visibility
    checks and mutations in one transaction.
    """

    def __init__(
        self,
        session: AsyncSession,
        event_repository: IEventRepository,
        subscription_repository: ISubscriptionRepository,
        membership_reader: IGroupMembershipReader,
        resolver: VisibilityResolver,
        probe: EventServiceProbe | None = None,
    ):
        """Initialize EventService with dependencies.

        Args:
            session: Database session for transaction management
            event_repository: Repository for event persistence
            subscription_repository: Repository for event subscriptions
            membership_reader: Group existence and membership lookups
            resolver: Visibility resolver for permission checks
            probe: Optional domain probe for observability
        """
        self._session = session
        self._event_repository = event_repository
        self._subscription_repository = subscription_repository
        self._membership_reader = membership_reader
        self._resolver = resolver
        self._probe = probe or DefaultEventServiceProbe()

    async def list_events(
        self,
        actor: ActorContext,
        options: EventListOptions | None = None,
        now: datetime | None = None,
    ) -> list[Event]:
        """List the events the actor may see, ordered by start date.

        Args:
            actor: The requesting actor
            options: Group, upcoming and subscribed filters
            now: Reference time for ``upcoming`` (defaults to the current time)

        Returns:
            Visible events matching the options
        """
        options = options or EventListOptions()
        predicate = self._resolver.event_visibility_filter(actor)

        if options.subscribed:
            if actor.user_id is None:
                return []
            predicate = all_of(predicate, SubscriptionExists(actor.user_id))

        return await self._event_repository.list_matching(
            predicate, options, now or datetime.now(UTC)
        )

    async def get_event(self, event_id: EventId, actor: ActorContext) -> Event | None:
        """Get an event if the actor may see it.

        Returns None if the event doesn't exist or is hidden from the actor.
        """
        if not await self._resolver.can_see_event(event_id.value, actor):
            return None
        return await self._event_repository.get_by_id(event_id)

    async def create_event(
        self,
        actor: ActorContext,
        title: str,
        start_date: datetime,
        end_date: datetime,
        group_id: str,
        description: str | None = None,
        location: str | None = None,
        visible: bool = True,
    ) -> Event:
        """Create an event in a group.

        Allowed for site admins and for admins of the group.

        Returns:
            The created Event aggregate

        Raises:
            UnauthorizedError: If the actor may not create events in the group
            OwningGroupNotFoundError: If the group does not exist
            ValueError: If the title is blank or the dates are out of order
        """
        if actor.user_id is None:
            raise UnauthorizedError("Authentication required to create events")

        try:
            event = Event.create(
                title=title,
                start_date=start_date,
                end_date=end_date,
                group_id=group_id,
                created_by=actor.user_id,
                description=description,
                location=location,
                visible=visible,
            )

            async with self._session.begin():
                if not await self._membership_reader.group_exists(group_id):
                    raise OwningGroupNotFoundError(f"Group {group_id} not found")

                if not actor.is_site_admin:
                    role = await self._membership_reader.get_role(
                        actor.user_id, group_id
                    )
                    if role != GroupRole.ADMIN:
                        self._probe.permission_denied(
                            "create_event", None, actor.user_id
                        )
                        raise UnauthorizedError("Cannot create events in this group")

                await self._event_repository.save(event)

            self._probe.event_created(
                event_id=event.id.value,
                group_id=group_id,
                creator_id=actor.user_id,
            )
            return event

        except Exception as e:
            self._probe.event_creation_failed(group_id=group_id, error=str(e))
            raise

    async def set_event_visibility(
        self,
        event_id: EventId,
        actor: ActorContext,
        visible: bool,
    ) -> Event:
        """Show or hide an event.

        Raises:
            EventNotFoundError: If the event is missing or hidden from the actor
            UnauthorizedError: If the actor is neither the creator nor a group admin
        """
        async with self._session.begin():
            event = await self._event_repository.get_by_id(event_id)
            if event is None or not await self._resolver.can_see_event(
                event_id.value, actor
            ):
                raise EventNotFoundError(f"Event {event_id.value} not found")

            if not await self._resolver.can_modify_event_visibility(
                event_id.value, actor
            ):
                self._probe.permission_denied(
                    "set_event_visibility", event_id.value, actor.user_id
                )
                raise UnauthorizedError(
                    "Only the event creator or group admins can change event visibility"
                )

            event.set_visibility(visible)
            await self._event_repository.save(event)

        self._probe.event_visibility_changed(
            event_id=event_id.value, visible=visible, changed_by=actor.user_id
        )
        return event

    async def subscribe(self, event_id: EventId, actor: ActorContext) -> Subscription:
        """Put the actor on an event's attendee list.

        Raises:
            UnauthorizedError: If the actor is anonymous or not a group member
            EventNotFoundError: If the event is missing or hidden from the actor
            AlreadySubscribedError: If the actor is already subscribed
        """
        if actor.user_id is None:
            raise UnauthorizedError("Authentication required to subscribe")

        subscription = Subscription(event_id=event_id, user_id=actor.user_id)

        async with self._session.begin():
            event = await self._event_repository.get_by_id(event_id)
            if event is None or not await self._resolver.can_see_event(
                event_id.value, actor
            ):
                raise EventNotFoundError(f"Event {event_id.value} not found")

            role = await self._membership_reader.get_role(actor.user_id, event.group_id)
            if role is None:
                self._probe.permission_denied("subscribe", event_id.value, actor.user_id)
                raise UnauthorizedError("Must be group member to subscribe")

            await self._subscription_repository.add(subscription)

        self._probe.subscribed(event_id=event_id.value, user_id=actor.user_id)
        return subscription

    async def unsubscribe(self, event_id: EventId, actor: ActorContext) -> None:
        """Remove the actor from an event's attendee list.

        Raises:
            UnauthorizedError: If the actor is anonymous
            NotSubscribedError: If the actor is not subscribed
        """
        if actor.user_id is None:
            raise UnauthorizedError("Authentication required to unsubscribe")

        async with self._session.begin():
            removed = await self._subscription_repository.remove(
                event_id, actor.user_id
            )
            if not removed:
                raise NotSubscribedError(
                    f"User {actor.user_id} is not subscribed to event {event_id.value}"
                )

        self._probe.unsubscribed(event_id=event_id.value, user_id=actor.user_id)

    async def delete_event(self, event_id: EventId, actor: ActorContext) -> None:
        """Delete an event and its subscriptions.

        Raises:
            UnauthorizedError: If the actor is not a site admin
            EventNotFoundError: If the event does not exist
        """
        if not actor.is_site_admin:
            self._probe.permission_denied("delete_event", event_id.value, actor.user_id)
            raise UnauthorizedError("Only administrators can delete events")

        async with self._session.begin():
            deleted = await self._event_repository.delete(event_id)
            if not deleted:
                raise EventNotFoundError(f"Event {event_id.value} not found")

        self._probe.event_deleted(event_id=event_id.value)
