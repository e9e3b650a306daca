"""PostgreSQL implementation of IEventRepository.

Storage does not cascade: subscriptions are deleted explicitly before the
events they reference.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from events.domain.aggregates import Event
from events.domain.value_objects import EventId, EventListOptions
from events.infrastructure.models import EventModel, EventSubscriptionModel
from events.infrastructure.observability import (
    DefaultEventRepositoryProbe,
    EventRepositoryProbe,
)
from events.ports.repositories import IEventRepository
from visibility.domain.predicates import Predicate
from visibility.infrastructure.predicate_compiler import (
    EVENT_TARGET,
    compile_predicate,
)


class EventRepository(IEventRepository):
    """PostgreSQL-backed repository for Event aggregates."""

    def __init__(
        self,
        session: AsyncSession,
        probe: EventRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with database session.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultEventRepositoryProbe()

    async def save(self, event: Event) -> None:
        stmt = select(EventModel).where(EventModel.id == event.id.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model:
            model.title = event.title
            model.description = event.description
            model.start_date = event.start_date
            model.end_date = event.end_date
            model.location = event.location
            model.visible = event.visible
        else:
            model = EventModel(
                id=event.id.value,
                title=event.title,
                description=event.description,
                start_date=event.start_date,
                end_date=event.end_date,
                location=event.location,
                group_id=event.group_id,
                created_by=event.created_by,
                visible=event.visible,
            )
            self._session.add(model)

        await self._session.flush()
        self._probe.event_saved(event.id.value, event.group_id)

    async def get_by_id(self, event_id: EventId) -> Event | None:
        stmt = select(EventModel).where(EventModel.id == event_id.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            self._probe.event_not_found(event_id.value)
            return None

        return self._to_domain(model)

    async def list_matching(
        self,
        predicate: Predicate,
        options: EventListOptions,
        now: datetime,
    ) -> list[Event]:
        stmt = select(EventModel).where(compile_predicate(predicate, EVENT_TARGET))
        if options.group_id is not None:
            stmt = stmt.where(EventModel.group_id == options.group_id)
        if options.upcoming:
            stmt = stmt.where(EventModel.start_date >= now)
        stmt = stmt.order_by(EventModel.start_date.asc(), EventModel.id.asc())

        result = await self._session.execute(stmt)
        events = [self._to_domain(model) for model in result.scalars().all()]

        self._probe.events_listed(count=len(events))
        return events

    async def delete(self, event_id: EventId) -> bool:
        """Delete an event after removing its subscriptions.

        Args:
            event_id: The event to delete

        Returns:
            True if deleted, False if not found
        """
        subscriptions = await self._session.execute(
            delete(EventSubscriptionModel).where(
                EventSubscriptionModel.event_id == event_id.value
            )
        )
        result = await self._session.execute(
            delete(EventModel).where(EventModel.id == event_id.value)
        )

        if result.rowcount == 0:
            self._probe.event_not_found(event_id.value)
            return False

        self._probe.event_deleted(event_id.value, subscriptions.rowcount)
        return True

    async def delete_by_group(self, group_id: str) -> int:
        """Delete every event of a group, subscriptions first.

        Args:
            group_id: The owning group

        Returns:
            Number of events removed
        """
        group_events = select(EventModel.id).where(EventModel.group_id == group_id)
        subscriptions = await self._session.execute(
            delete(EventSubscriptionModel).where(
                EventSubscriptionModel.event_id.in_(group_events)
            )
        )
        result = await self._session.execute(
            delete(EventModel).where(EventModel.group_id == group_id)
        )

        self._probe.group_events_deleted(
            group_id=group_id,
            events_removed=result.rowcount,
            subscriptions_removed=subscriptions.rowcount,
        )
        return result.rowcount

    @staticmethod
    def _to_domain(model: EventModel) -> Event:
        return Event(
            id=EventId(value=model.id),
            title=model.title,
            start_date=model.start_date,
            end_date=model.end_date,
            group_id=model.group_id,
            created_by=model.created_by,
            description=model.description,
            location=model.location,
            visible=model.visible,
        )
