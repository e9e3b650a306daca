"""HTTP routes for site-wide user administration."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from iam.application.services import UserService
from iam.dependencies.user import get_user_service, require_authenticated_actor
from iam.ports.exceptions import UnauthorizedError, UserNotFoundError
from iam.presentation.users.models import (
    UpdateUserActiveRequest,
    UpdateUserRoleRequest,
    UserResponse,
)
from shared_kernel.authorization.context import ActorContext

router = APIRouter(
    prefix="/users",
    tags=["users"],
)


@router.patch(
    "/{user_id}/role",
    response_model=UserResponse,
    summary="Change a user's site role",
    responses={
        200: {"description": "Role changed"},
        403: {"description": "Caller is not a site admin, or targeted themselves"},
        404: {"description": "User not found"},
        500: {"description": "Internal server error"},
    },
)
async def set_user_role(
    user_id: str,
    request: UpdateUserRoleRequest,
    actor: Annotated[ActorContext, Depends(require_authenticated_actor)],
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    """Change a user's site-wide role. Site admins only."""
    try:
        user = await service.set_user_role(user_id, actor, role=request.role)
        return UserResponse.from_domain(user)

    except UnauthorizedError as e:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=str(e),
        )
    except UserNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to change user role",
        )


@router.patch(
    "/{user_id}/active",
    response_model=UserResponse,
    summary="Activate or deactivate a user",
    responses={
        200: {"description": "Active flag changed"},
        403: {"description": "Caller is not a site admin, or targeted themselves"},
        404: {"description": "User not found"},
        500: {"description": "Internal server error"},
    },
)
async def set_user_active(
    user_id: str,
    request: UpdateUserActiveRequest,
    actor: Annotated[ActorContext, Depends(require_authenticated_actor)],
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    """Activate or deactivate a user. Site admins only."""
    try:
        user = await service.set_user_active(user_id, actor, active=request.active)
        return UserResponse.from_domain(user)

    except UnauthorizedError as e:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=str(e),
        )
    except UserNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to change user status",
        )
