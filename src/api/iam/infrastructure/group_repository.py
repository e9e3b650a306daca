"""PostgreSQL implementation of IGroupRepository.

Listings are filtered in SQL: the visibility predicate is compiled into the
WHERE clause so that paging and counting see only rows the caller may see.
"""

from __future__ import annotations

from sqlalchemy import delete, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from iam.domain.aggregates import Group
from iam.domain.value_objects import GroupId, GroupListOptions, UserId
from iam.infrastructure.models import GroupModel
from iam.infrastructure.observability import (
    DefaultGroupRepositoryProbe,
    GroupRepositoryProbe,
)
from iam.ports.exceptions import DuplicateGroupNameError
from iam.ports.repositories import IGroupRepository
from visibility.domain.predicates import Predicate
from visibility.infrastructure.predicate_compiler import (
    GROUP_TARGET,
    compile_predicate,
)


class GroupRepository(IGroupRepository):
    """PostgreSQL-backed repository for Group aggregates."""

    def __init__(
        self,
        session: AsyncSession,
        probe: GroupRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with database session.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultGroupRepositoryProbe()

    async def save(self, group: Group) -> None:
        """Persist group metadata.

        Args:
            group: The Group aggregate to persist

        Raises:
            DuplicateGroupNameError: If the group name is already taken
        """
        existing = await self.get_by_name(group.name)
        if existing and existing.id.value != group.id.value:
            self._probe.duplicate_group_name(group.name)
            raise DuplicateGroupNameError(f"Group '{group.name}' already exists")

        stmt = select(GroupModel).where(GroupModel.id == group.id.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model:
            model.name = group.name
            model.description = group.description
            model.visible = group.visible
        else:
            model = GroupModel(
                id=group.id.value,
                name=group.name,
                description=group.description,
                created_by=group.created_by.value,
                visible=group.visible,
            )
            self._session.add(model)

        # Flush to surface integrity errors inside the caller's transaction
        try:
            await self._session.flush()
        except IntegrityError as e:
            if "uq_groups_name" in str(e):
                self._probe.duplicate_group_name(group.name)
                raise DuplicateGroupNameError(
                    f"Group '{group.name}' already exists"
                ) from e
            raise

        self._probe.group_saved(group.id.value, group.visible)

    async def get_by_id(self, group_id: GroupId) -> Group | None:
        """Retrieve a group by its ID.

        Args:
            group_id: The unique identifier of the group

        Returns:
            The Group aggregate, or None if not found
        """
        stmt = select(GroupModel).where(GroupModel.id == group_id.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            self._probe.group_not_found(group_id.value)
            return None

        self._probe.group_retrieved(group_id.value)
        return self._to_domain(model)

    async def get_by_name(self, name: str) -> Group | None:
        """Retrieve a group by its unique name.

        Args:
            name: The group name

        Returns:
            The Group aggregate, or None if not found
        """
        stmt = select(GroupModel).where(GroupModel.name == name)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._to_domain(model)

    async def list_matching(
        self, predicate: Predicate, options: GroupListOptions
    ) -> tuple[list[Group], int]:
        """List one page of groups matching a visibility predicate.

        Args:
            predicate: Row filter, compiled into the WHERE clause
            options: Search text and paging

        Returns:
            The page of groups, newest first, and the total match count
        """
        conditions = [compile_predicate(predicate, GROUP_TARGET)]
        if options.search:
            pattern = f"%{options.search}%"
            conditions.append(
                or_(
                    GroupModel.name.ilike(pattern),
                    GroupModel.description.ilike(pattern),
                )
            )

        count_stmt = select(func.count()).select_from(GroupModel).where(*conditions)
        total = (await self._session.execute(count_stmt)).scalar_one()

        stmt = (
            select(GroupModel)
            .where(*conditions)
            .order_by(GroupModel.created_at.desc(), GroupModel.id.desc())
            .offset(options.offset)
            .limit(options.limit)
        )
        result = await self._session.execute(stmt)
        groups = [self._to_domain(model) for model in result.scalars().all()]

        self._probe.groups_listed(count=len(groups), total=total)
        return groups, total

    async def delete(self, group_id: GroupId) -> bool:
        """Delete a group row.

        Memberships and events must already have been removed in the same
        transaction; the foreign keys restrict deletion otherwise.

        Args:
            group_id: The group to delete

        Returns:
            True if deleted, False if not found
        """
        stmt = delete(GroupModel).where(GroupModel.id == group_id.value)
        result = await self._session.execute(stmt)

        if result.rowcount == 0:
            self._probe.group_not_found(group_id.value)
            return False

        self._probe.group_deleted(group_id.value)
        return True

    @staticmethod
    def _to_domain(model: GroupModel) -> Group:
        return Group(
            id=GroupId(value=model.id),
            name=model.name,
            created_by=UserId(value=model.created_by),
            description=model.description,
            visible=model.visible,
            created_at=model.created_at,
        )
