"""SQLAlchemy implementation of IVisibilityStore.

Each lookup is one statement: the target row's columns plus the caller's
relations selected as labeled EXISTS columns.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import InterfaceError, OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from events.infrastructure.models import EventModel
from iam.infrastructure.models import GroupModel, UserGroupModel
from infrastructure.database.exceptions import DatabaseConnectionError, DatabaseError
from shared_kernel.authorization.types import GroupRole
from visibility.domain.value_objects import EventFlags, GroupFlags
from visibility.infrastructure.predicate_compiler import (
    membership_exists_clause,
    subscription_exists_clause,
)
from visibility.ports.store import IVisibilityStore


class SqlAlchemyVisibilityStore(IVisibilityStore):
    """Visibility lookups over the groups, events and membership tables.

    Driver failures are raised as DatabaseConnectionError (connection level)
    or DatabaseError (anything else). Absent rows return None.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the store.

        Args:
            session: AsyncSession from FastAPI dependency injection
        """
        self._session = session

    async def get_group_flags(
        self, group_id: str, user_id: str | None
    ) -> GroupFlags | None:
        columns = [GroupModel.visible]
        if user_id is not None:
            columns.append(
                membership_exists_clause(
                    GroupModel.id, user_id, GroupRole.ADMIN
                ).label("caller_is_group_admin")
            )
        stmt = select(*columns).where(GroupModel.id == group_id)

        row = await self._fetch_one(stmt)
        if row is None:
            return None
        return GroupFlags(
            visible=bool(row.visible),
            caller_is_group_admin=(
                user_id is not None and bool(row.caller_is_group_admin)
            ),
        )

    async def get_event_flags(
        self, event_id: str, user_id: str | None
    ) -> EventFlags | None:
        columns = [EventModel.visible, EventModel.created_by]
        if user_id is not None:
            columns.append(
                subscription_exists_clause(EventModel.id, user_id).label(
                    "caller_is_subscribed"
                )
            )
            columns.append(
                membership_exists_clause(
                    EventModel.group_id, user_id, GroupRole.ADMIN
                ).label("caller_is_group_admin")
            )
        stmt = select(*columns).where(EventModel.id == event_id)

        row = await self._fetch_one(stmt)
        if row is None:
            return None
        if user_id is None:
            return EventFlags(visible=bool(row.visible), created_by=row.created_by)
        return EventFlags(
            visible=bool(row.visible),
            created_by=row.created_by,
            caller_is_subscribed=bool(row.caller_is_subscribed),
            caller_is_group_admin=bool(row.caller_is_group_admin),
        )

    async def get_membership_role(
        self, user_id: str, group_id: str
    ) -> GroupRole | None:
        stmt = select(UserGroupModel.role).where(
            UserGroupModel.user_id == user_id,
            UserGroupModel.group_id == group_id,
        )
        row = await self._fetch_one(stmt)
        if row is None:
            return None
        return GroupRole(row.role)

    async def _fetch_one(self, stmt):
        try:
            result = await self._session.execute(stmt)
            return result.one_or_none()
        except (OperationalError, InterfaceError) as e:
            raise DatabaseConnectionError(
                f"Visibility lookup failed to reach the database: {e}"
            ) from e
        except SQLAlchemyError as e:
            raise DatabaseError(f"Visibility lookup failed: {e}") from e
