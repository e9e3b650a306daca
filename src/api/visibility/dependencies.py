"""Dependency injection for the visibility bounded context.

Builds a request-scoped resolver over the request's database session, so
point checks run inside the same transaction as the use case they guard.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.dependencies import get_session
from visibility.application.observability import (
    DefaultVisibilityProbe,
    VisibilityProbe,
)
from visibility.application.resolver import VisibilityResolver
from visibility.infrastructure.store import SqlAlchemyVisibilityStore
from visibility.ports.store import IVisibilityStore


def get_visibility_probe() -> VisibilityProbe:
    """Get VisibilityProbe instance.

    Returns:
        DefaultVisibilityProbe instance for observability
    """
    return DefaultVisibilityProbe()


def get_visibility_store(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> IVisibilityStore:
    """Get the SQL-backed visibility store.

    Args:
        session: Async database session

    Returns:
        SqlAlchemyVisibilityStore instance
    """
    return SqlAlchemyVisibilityStore(session=session)


def get_visibility_resolver(
    store: Annotated[IVisibilityStore, Depends(get_visibility_store)],
    probe: Annotated[VisibilityProbe, Depends(get_visibility_probe)],
) -> VisibilityResolver:
    """Get VisibilityResolver instance.

    Args:
        store: Visibility store (shares the request session)
        probe: Visibility probe for observability

    Returns:
        VisibilityResolver instance
    """
    return VisibilityResolver(store=store, probe=probe)
