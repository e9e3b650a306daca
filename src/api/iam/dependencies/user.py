from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import (
    AuthenticationProbe,
    DefaultUserServiceProbe,
    UserServiceProbe,
)
from iam.application.services.user_service import UserService
from iam.dependencies.authentication import (
    bearer_scheme,
    get_authentication_probe,
    get_jwt_validator,
)
from iam.domain.value_objects import UserId
from iam.infrastructure.user_repository import UserRepository
from iam.ports.repositories import IUserRepository
from infrastructure.database.dependencies import get_session
from shared_kernel.auth import InvalidTokenError, JWTValidator
from shared_kernel.authorization.context import ActorContext


def get_user_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> IUserRepository:
    """Get UserRepository instance.

    Args:
        session: Async database session

    Returns:
        UserRepository instance
    """
    return UserRepository(session=session)


async def get_actor_context(
    validator: Annotated[JWTValidator, Depends(get_jwt_validator)],
    auth_probe: Annotated[AuthenticationProbe, Depends(get_authentication_probe)],
    user_repo: Annotated[IUserRepository, Depends(get_user_repository)],
    session: Annotated[AsyncSession, Depends(get_session)],
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ] = None,
) -> ActorContext:
    """Resolve the ActorContext for the current request.

    This is the single source of truth for caller identity. The token only
    names the user; role and active flag are reloaded from the users table
    so that demotions and deactivations apply immediately.

    Args:
        validator: JWT validator for token validation
        auth_probe: Authentication probe for observability
        user_repo: Repository used to load the caller
        session: Database session; the lookup runs in its own transaction
        credentials: Bearer credentials, None when no Authorization header

    Returns:
        An anonymous context without credentials, otherwise the user's context

    Raises:
        HTTPException 401: If the token is invalid or names an unknown user
        HTTPException 403: If the account is deactivated
    """
    if credentials is None:
        auth_probe.anonymous_request()
        return ActorContext.anonymous()

    try:
        claims = await validator.validate_token(credentials.credentials)
    except InvalidTokenError as e:
        auth_probe.authentication_failed(reason=str(e))
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        ) from e

    async with session.begin():
        user = await user_repo.get_by_id(UserId(value=claims.sub))

    if user is None:
        auth_probe.authentication_failed(reason="Unknown user")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user.active:
        auth_probe.inactive_user_rejected(user_id=user.id.value)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is deactivated",
        )

    auth_probe.user_authenticated(user_id=user.id.value, role=user.role)
    return ActorContext.for_user(user.id.value, user.role)


async def require_authenticated_actor(
    actor: Annotated[ActorContext, Depends(get_actor_context)],
) -> ActorContext:
    """Resolve the ActorContext, rejecting anonymous requests.

    Raises:
        HTTPException 401: If the request carried no credentials
    """
    if not actor.is_authenticated:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return actor


def get_user_service_probe() -> UserServiceProbe:
    """Get UserServiceProbe instance."""
    return DefaultUserServiceProbe()


def get_user_service(
    session: Annotated[AsyncSession, Depends(get_session)],
    user_repo: Annotated[IUserRepository, Depends(get_user_repository)],
    probe: Annotated[UserServiceProbe, Depends(get_user_service_probe)],
) -> UserService:
    """Get UserService instance.

    Args:
        session: Database session for transaction management
        user_repo: User repository
        probe: User service probe for observability

    Returns:
        UserService instance
    """
    return UserService(session=session, user_repository=user_repo, probe=probe)
