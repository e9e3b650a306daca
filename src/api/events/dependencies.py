"""Dependency injection for the events bounded context.

Composes the request session with event repositories, the group membership
reader and the visibility resolver.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from events.application.observability import (
    DefaultEventServiceProbe,
    EventServiceProbe,
)
from events.application.services.event_service import EventService
from events.infrastructure.event_repository import EventRepository
from events.infrastructure.group_membership_reader import GroupMembershipReader
from events.infrastructure.subscription_repository import SubscriptionRepository
from infrastructure.database.dependencies import get_session
from visibility.application.resolver import VisibilityResolver
from visibility.dependencies import get_visibility_resolver


def get_event_service_probe() -> EventServiceProbe:
    """Get EventServiceProbe instance."""
    return DefaultEventServiceProbe()


def get_event_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> EventRepository:
    """Get EventRepository instance."""
    return EventRepository(session=session)


def get_subscription_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> SubscriptionRepository:
    """Get SubscriptionRepository instance."""
    return SubscriptionRepository(session=session)


def get_group_membership_reader(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> GroupMembershipReader:
    """Get GroupMembershipReader instance."""
    return GroupMembershipReader(session=session)


def get_event_service(
    session: Annotated[AsyncSession, Depends(get_session)],
    event_repo: Annotated[EventRepository, Depends(get_event_repository)],
    subscription_repo: Annotated[
        SubscriptionRepository, Depends(get_subscription_repository)
    ],
    membership_reader: Annotated[
        GroupMembershipReader, Depends(get_group_membership_reader)
    ],
    resolver: Annotated[VisibilityResolver, Depends(get_visibility_resolver)],
    probe: Annotated[EventServiceProbe, Depends(get_event_service_probe)],
) -> EventService:
    """Get EventService instance.

    Args:
        session: Database session for transaction management
        event_repo: Event repository (shares session via FastAPI dependency caching)
        subscription_repo: Subscription repository
        membership_reader: Group membership lookups
        resolver: Visibility resolver
        probe: Event service probe for observability

    Returns:
        EventService instance
    """
    return EventService(
        session=session,
        event_repository=event_repo,
        subscription_repository=subscription_repo,
        membership_reader=membership_reader,
        resolver=resolver,
        probe=probe,
    )
