"""User administration service for IAM bounded context.

Site admins change another user's site-wide role or active flag. An
admin's own account cannot be changed through this service.
"""

from __future__ import annotations

from dataclasses import replace

from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import DefaultUserServiceProbe, UserServiceProbe
from iam.domain.aggregates import User
from iam.domain.value_objects import UserId
from iam.ports.exceptions import UnauthorizedError, UserNotFoundError
from iam.ports.repositories import IUserRepository
from shared_kernel.authorization.context import ActorContext
from shared_kernel.authorization.types import UserRole


class UserService:
    """Application service for site-wide user administration."""

    def __init__(
        self,
        session: AsyncSession,
        user_repository: IUserRepository,
        probe: UserServiceProbe | None = None,
    ):
        """Initialize UserService with dependencies.

        Args:
            session: Database session for transaction management
            user_repository: Repository for user persistence
            probe: Optional domain probe for observability
        """
        self._session = session
        self._user_repository = user_repository
        self._probe = probe or DefaultUserServiceProbe()

    async def set_user_role(
        self, user_id: str, actor: ActorContext, role: UserRole
    ) -> User:
        """Change a user's site-wide role.

        Raises:
            UnauthorizedError: If the actor is not a site admin, or targets
                their own account
            UserNotFoundError: If the user does not exist
        """
        self._require_site_admin("set_user_role", user_id, actor)

        async with self._session.begin():
            user = await self._load(user_id)
            user = replace(user, role=role)
            await self._user_repository.save(user)

        self._probe.user_role_changed(
            user_id=user_id, role=role.value, changed_by=actor.user_id
        )
        return user

    async def set_user_active(
        self, user_id: str, actor: ActorContext, active: bool
    ) -> User:
        """Activate or deactivate a user.

        A deactivated user is rejected on their next authenticated request.

        Raises:
            UnauthorizedError: If the actor is not a site admin, or targets
                their own account
            UserNotFoundError: If the user does not exist
        """
        self._require_site_admin("set_user_active", user_id, actor)

        async with self._session.begin():
            user = await self._load(user_id)
            user = replace(user, active=active)
            await self._user_repository.save(user)

        self._probe.user_active_changed(
            user_id=user_id, active=active, changed_by=actor.user_id
        )
        return user

    def _require_site_admin(
        self, operation: str, user_id: str, actor: ActorContext
    ) -> None:
        if not actor.is_site_admin or actor.user_id is None:
            self._probe.permission_denied(operation, user_id, actor.user_id)
            raise UnauthorizedError("Only administrators can manage users")
        if actor.user_id == user_id:
            self._probe.permission_denied(operation, user_id, actor.user_id)
            raise UnauthorizedError("Administrators cannot change their own account")

    async def _load(self, user_id: str) -> User:
        user = await self._user_repository.get_by_id(UserId(value=user_id))
        if user is None:
            raise UserNotFoundError(f"User {user_id} not found")
        return user
