"""PostgreSQL implementation of IUserRepository.

Users are provisioned outside this service. Authentication reads them to
resolve the caller's current role; site admins update role and active flag.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from iam.domain.aggregates import User
from iam.domain.value_objects import UserId
from iam.infrastructure.models import UserModel
from iam.infrastructure.observability import (
    DefaultUserRepositoryProbe,
    UserRepositoryProbe,
)
from iam.ports.exceptions import UserNotFoundError
from iam.ports.repositories import IUserRepository
from shared_kernel.authorization.types import UserRole


class UserRepository(IUserRepository):
    """PostgreSQL-backed repository for User aggregates."""

    def __init__(
        self, session: AsyncSession, probe: UserRepositoryProbe | None = None
    ) -> None:
        """Initialize repository with database session and probe.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultUserRepositoryProbe()

    async def get_by_id(self, user_id: UserId) -> User | None:
        """Retrieve a user by their ID.

        Args:
            user_id: The unique identifier of the user

        Returns:
            The User aggregate, or None if not found
        """
        stmt = select(UserModel).where(UserModel.id == user_id.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            self._probe.user_not_found(user_id.value)
            return None

        self._probe.user_retrieved(user_id.value)
        return User(
            id=UserId(value=model.id),
            email=model.email,
            name=model.name,
            role=UserRole(model.role),
            active=model.active,
        )

    async def save(self, user: User) -> None:
        """Persist a provisioned user's role and active flag.

        Args:
            user: The User aggregate to persist

        Raises:
            UserNotFoundError: If no row exists for the user
        """
        stmt = select(UserModel).where(UserModel.id == user.id.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            self._probe.user_not_found(user.id.value)
            raise UserNotFoundError(f"User {user.id.value} not found")

        model.role = user.role.value
        model.active = user.active
        await self._session.flush()
        self._probe.user_saved(user.id.value, user.role.value, user.active)
