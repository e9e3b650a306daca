from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from events.infrastructure.event_repository import EventRepository
from iam.application.observability import (
    DefaultGroupServiceProbe,
    GroupServiceProbe,
)
from iam.application.services.group_service import GroupService
from iam.dependencies.user import get_user_repository
from iam.infrastructure.group_repository import GroupRepository
from iam.infrastructure.membership_repository import MembershipRepository
from iam.ports.repositories import IUserRepository
from infrastructure.database.dependencies import get_session
from visibility.application.resolver import VisibilityResolver
from visibility.dependencies import get_visibility_resolver


def get_group_service_probe() -> GroupServiceProbe:
    """Get GroupServiceProbe instance.

    Returns:
        DefaultGroupServiceProbe instance for observability
    """
    return DefaultGroupServiceProbe()


def get_group_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> GroupRepository:
    """Get GroupRepository instance.

    Args:
        session: Async database session

    Returns:
        GroupRepository instance
    """
    return GroupRepository(session=session)


def get_membership_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> MembershipRepository:
    """Get MembershipRepository instance.

    Args:
        session: Async database session

    Returns:
        MembershipRepository instance
    """
    return MembershipRepository(session=session)


def get_group_event_purger(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> EventRepository:
    """Get the repository that removes a group's events on group deletion.

    Args:
        session: Async database session

    Returns:
        EventRepository instance
    """
    return EventRepository(session=session)


def get_group_service(
    session: Annotated[AsyncSession, Depends(get_session)],
    group_repo: Annotated[GroupRepository, Depends(get_group_repository)],
    membership_repo: Annotated[
        MembershipRepository, Depends(get_membership_repository)
    ],
    user_repo: Annotated[IUserRepository, Depends(get_user_repository)],
    event_purger: Annotated[EventRepository, Depends(get_group_event_purger)],
    resolver: Annotated[VisibilityResolver, Depends(get_visibility_resolver)],
    probe: Annotated[GroupServiceProbe, Depends(get_group_service_probe)],
) -> GroupService:
    """Get GroupService instance.

    Args:
        session: Database session for transaction management
        group_repo: Group repository (shares session via FastAPI dependency caching)
        membership_repo: Membership repository
        user_repo: User repository for member lookups
        event_purger: Removes events when a group is deleted
        resolver: Visibility resolver
        probe: Group service probe for observability

    Returns:
        GroupService instance
    """
    return GroupService(
        session=session,
        group_repository=group_repo,
        membership_repository=membership_repo,
        user_repository=user_repo,
        event_purger=event_purger,
        resolver=resolver,
        probe=probe,
    )
