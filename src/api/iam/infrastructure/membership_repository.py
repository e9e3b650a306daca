"""PostgreSQL implementation of IMembershipRepository."""

from __future__ import annotations

from sqlalchemy import case, delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from iam.domain.value_objects import GroupId, GroupMembership, UserId
from iam.infrastructure.models import UserGroupModel
from iam.infrastructure.observability import (
    DefaultMembershipRepositoryProbe,
    MembershipRepositoryProbe,
)
from iam.ports.exceptions import AlreadyMemberError
from iam.ports.repositories import IMembershipRepository
from shared_kernel.authorization.types import GroupRole


class MembershipRepository(IMembershipRepository):
    """Repository for rows of the user_groups table."""

    def __init__(
        self,
        session: AsyncSession,
        probe: MembershipRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with database session.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultMembershipRepositoryProbe()

    async def get(self, user_id: UserId, group_id: GroupId) -> GroupMembership | None:
        stmt = select(UserGroupModel).where(
            UserGroupModel.user_id == user_id.value,
            UserGroupModel.group_id == group_id.value,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._to_domain(model)

    async def add(self, membership: GroupMembership) -> None:
        """Persist a new membership.

        Raises:
            AlreadyMemberError: If the user already belongs to the group
        """
        if await self.get(membership.user_id, membership.group_id) is not None:
            raise AlreadyMemberError(
                f"User {membership.user_id.value} is already a member of "
                f"group {membership.group_id.value}"
            )

        self._session.add(
            UserGroupModel(
                user_id=membership.user_id.value,
                group_id=membership.group_id.value,
                role=membership.role.value,
            )
        )
        try:
            await self._session.flush()
        except IntegrityError as e:
            if "pk_user_groups" in str(e):
                raise AlreadyMemberError(
                    f"User {membership.user_id.value} is already a member of "
                    f"group {membership.group_id.value}"
                ) from e
            raise

        self._probe.membership_added(
            user_id=membership.user_id.value,
            group_id=membership.group_id.value,
            role=membership.role.value,
        )

    async def remove(self, user_id: UserId, group_id: GroupId) -> bool:
        stmt = delete(UserGroupModel).where(
            UserGroupModel.user_id == user_id.value,
            UserGroupModel.group_id == group_id.value,
        )
        result = await self._session.execute(stmt)

        if result.rowcount == 0:
            return False

        self._probe.membership_removed(user_id=user_id.value, group_id=group_id.value)
        return True

    async def list_by_group(self, group_id: GroupId) -> list[GroupMembership]:
        """List a group's memberships, admins first, then by join date."""
        stmt = (
            select(UserGroupModel)
            .where(UserGroupModel.group_id == group_id.value)
            .order_by(
                case((UserGroupModel.role == GroupRole.ADMIN.value, 0), else_=1),
                UserGroupModel.joined_at,
            )
        )
        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def update_role(
        self, user_id: UserId, group_id: GroupId, role: GroupRole
    ) -> bool:
        stmt = (
            update(UserGroupModel)
            .where(
                UserGroupModel.user_id == user_id.value,
                UserGroupModel.group_id == group_id.value,
            )
            .values(role=role.value)
        )
        result = await self._session.execute(stmt)

        if result.rowcount == 0:
            return False

        self._probe.membership_role_changed(
            user_id=user_id.value, group_id=group_id.value, role=role.value
        )
        return True

    async def delete_by_group(self, group_id: GroupId) -> int:
        stmt = delete(UserGroupModel).where(UserGroupModel.group_id == group_id.value)
        result = await self._session.execute(stmt)

        self._probe.memberships_purged(group_id=group_id.value, count=result.rowcount)
        return result.rowcount

    @staticmethod
    def _to_domain(model: UserGroupModel) -> GroupMembership:
        return GroupMembership(
            user_id=UserId(value=model.user_id),
            group_id=GroupId(value=model.group_id),
            role=GroupRole(model.role),
            joined_at=model.joined_at,
        )
