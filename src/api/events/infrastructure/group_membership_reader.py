"""Read-only adapter over the IAM group tables for event use cases."""

from __future__ import annotations

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from events.ports.repositories import IGroupMembershipReader
from iam.infrastructure.models import GroupModel, UserGroupModel
from shared_kernel.authorization.types import GroupRole


class GroupMembershipReader(IGroupMembershipReader):
    """Answers "does the group exist" and "what role does the user hold"."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def group_exists(self, group_id: str) -> bool:
        stmt = select(exists().where(GroupModel.id == group_id))
        result = await self._session.execute(stmt)
        return bool(result.scalar())

    async def get_role(self, user_id: str, group_id: str) -> GroupRole | None:
        stmt = select(UserGroupModel.role).where(
            UserGroupModel.user_id == user_id,
            UserGroupModel.group_id == group_id,
        )
        result = await self._session.execute(stmt)
        role = result.scalar_one_or_none()
        return GroupRole(role) if role is not None else None
