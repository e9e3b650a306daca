"""HTTP routes for group management."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from iam.application.services import GroupService
from iam.dependencies.group import get_group_service
from iam.dependencies.user import require_authenticated_actor
from iam.domain.value_objects import GroupId, GroupListOptions
from iam.ports.exceptions import (
    AlreadyMemberError,
    DuplicateGroupNameError,
    GroupNotFoundError,
    NotAMemberError,
    UnauthorizedError,
    UserNotFoundError,
)
from iam.presentation.groups.models import (
    AddMemberRequest,
    ChangeMemberRoleRequest,
    CreateGroupRequest,
    GroupListResponse,
    GroupResponse,
    MemberListResponse,
    MembershipResponse,
    UpdateVisibilityRequest,
)
from shared_kernel.authorization.context import ActorContext

router = APIRouter(
    prefix="/groups",
    tags=["groups"],
)


@router.get(
    "",
    response_model=GroupListResponse,
    summary="List groups",
    description="List the groups the caller may see, newest first",
    responses={
        200: {"description": "Groups listed successfully"},
        401: {"description": "Authentication required"},
        500: {"description": "Internal server error"},
    },
)
async def list_groups(
    actor: Annotated[ActorContext, Depends(require_authenticated_actor)],
    service: Annotated[GroupService, Depends(get_group_service)],
    search: Annotated[str | None, Query(max_length=255)] = None,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
    include_hidden: bool = False,
) -> GroupListResponse:
    """List groups visible to the caller."""
    options = GroupListOptions(
        search=search,
        page=page,
        limit=limit,
        include_hidden=include_hidden,
    )
    try:
        result = await service.list_groups(actor, options)
        return GroupListResponse.from_page(result)

    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list groups",
        )


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_group(
    request: CreateGroupRequest,
    actor: Annotated[ActorContext, Depends(require_authenticated_actor)],
    service: Annotated[GroupService, Depends(get_group_service)],
) -> GroupResponse:
    """Create a new group with the caller as its first admin.

    Only site administrators may create groups.

    Args:
        request: Group creation request
        actor: The authenticated caller
        service: Group service

    Returns:
        GroupResponse with created group details

    Raises:
        HTTPException: 403 if the caller is not a site admin
        HTTPException: 409 if group name already exists
        HTTPException: 500 for unexpected errors
    """
    try:
        group = await service.create_group(
            actor,
            name=request.name,
            description=request.description,
            visible=request.visible,
        )
        return GroupResponse.from_domain(group)

    except UnauthorizedError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only administrators can create groups",
        )
    except DuplicateGroupNameError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A group with this name already exists",
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create group",
        )


@router.get("/{group_id}")
async def get_group(
    group_id: str,
    actor: Annotated[ActorContext, Depends(require_authenticated_actor)],
    service: Annotated[GroupService, Depends(get_group_service)],
) -> GroupResponse:
    """Get a group by ID.

    Hidden groups are reported as missing to callers who may not see them.

    Raises:
        HTTPException: 404 if group not found or not visible
        HTTPException: 500 for unexpected errors
    """
    group_id_obj = GroupId(value=group_id)

    try:
        group = await service.get_group(group_id_obj, actor)
        if group is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Group not found",
            )
        return GroupResponse.from_domain(group)

    except HTTPException:
        raise
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve group",
        )


@router.patch(
    "/{group_id}/visibility",
    response_model=GroupResponse,
    summary="Show or hide a group",
    description="Change a group's visibility flag. Requires group ADMIN.",
    responses={
        200: {"description": "Visibility updated"},
        403: {"description": "Insufficient permissions"},
        404: {"description": "Group not found"},
        500: {"description": "Internal server error"},
    },
)
async def set_group_visibility(
    group_id: str,
    request: UpdateVisibilityRequest,
    actor: Annotated[ActorContext, Depends(require_authenticated_actor)],
    service: Annotated[GroupService, Depends(get_group_service)],
) -> GroupResponse:
    """Change a group's visibility flag."""
    group_id_obj = GroupId(value=group_id)

    try:
        group = await service.set_group_visibility(
            group_id_obj, actor, visible=request.visible
        )
        return GroupResponse.from_domain(group)

    except GroupNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Group not found",
        )
    except UnauthorizedError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Insufficient permissions to change group visibility",
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update group visibility",
        )


@router.delete("/{group_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_group(
    group_id: str,
    actor: Annotated[ActorContext, Depends(require_authenticated_actor)],
    service: Annotated[GroupService, Depends(get_group_service)],
) -> None:
    """Delete a group with its events, subscriptions and memberships.

    Raises:
        HTTPException: 403 if the caller is not a site admin
        HTTPException: 404 if group not found
        HTTPException: 500 for unexpected errors
    """
    group_id_obj = GroupId(value=group_id)

    try:
        await service.delete_group(group_id_obj, actor)

    except UnauthorizedError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only administrators can delete groups",
        )
    except GroupNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Group not found",
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete group",
        )


@router.post(
    "/{group_id}/membership",
    status_code=status.HTTP_201_CREATED,
    response_model=MembershipResponse,
    summary="Join group",
    responses={
        201: {"description": "Joined group"},
        404: {"description": "Group not found"},
        409: {"description": "Already a member"},
        500: {"description": "Internal server error"},
    },
)
async def join_group(
    group_id: str,
    actor: Annotated[ActorContext, Depends(require_authenticated_actor)],
    service: Annotated[GroupService, Depends(get_group_service)],
) -> MembershipResponse:
    """Join a group as a MEMBER."""
    group_id_obj = GroupId(value=group_id)

    try:
        membership = await service.join_group(group_id_obj, actor)
        return MembershipResponse.from_domain(membership)

    except GroupNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Group not found",
        )
    except AlreadyMemberError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Already a member of this group",
        )
    except UnauthorizedError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Cannot join this group",
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to join group",
        )


@router.delete("/{group_id}/membership", status_code=status.HTTP_204_NO_CONTENT)
async def leave_group(
    group_id: str,
    actor: Annotated[ActorContext, Depends(require_authenticated_actor)],
    service: Annotated[GroupService, Depends(get_group_service)],
) -> None:
    """Leave a group."""
    group_id_obj = GroupId(value=group_id)

    try:
        await service.leave_group(group_id_obj, actor)

    except NotAMemberError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Not a member of this group",
        )
    except UnauthorizedError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Cannot leave this group",
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to leave group",
        )


@router.get(
    "/{group_id}/members",
    response_model=MemberListResponse,
    summary="List group members",
    description="List a group's members, admins first. Requires group ADMIN.",
    responses={
        200: {"description": "Members listed"},
        403: {"description": "Insufficient permissions"},
        404: {"description": "Group not found"},
        500: {"description": "Internal server error"},
    },
)
async def list_members(
    group_id: str,
    actor: Annotated[ActorContext, Depends(require_authenticated_actor)],
    service: Annotated[GroupService, Depends(get_group_service)],
) -> MemberListResponse:
    """List a group's members."""
    try:
        memberships = await service.list_members(GroupId(value=group_id), actor)
        return MemberListResponse.from_domain(memberships)

    except GroupNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Group not found",
        )
    except UnauthorizedError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Insufficient permissions to manage group members",
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list group members",
        )


@router.post(
    "/{group_id}/members",
    status_code=status.HTTP_201_CREATED,
    response_model=MembershipResponse,
    summary="Add group member",
    description="Add a user to a group as MEMBER or ADMIN. Requires group ADMIN.",
    responses={
        201: {"description": "Member added"},
        400: {"description": "User is deactivated"},
        403: {"description": "Insufficient permissions"},
        404: {"description": "Group or user not found"},
        409: {"description": "Already a member"},
        500: {"description": "Internal server error"},
    },
)
async def add_member(
    group_id: str,
    request: AddMemberRequest,
    actor: Annotated[ActorContext, Depends(require_authenticated_actor)],
    service: Annotated[GroupService, Depends(get_group_service)],
) -> MembershipResponse:
    """Add a user to a group."""
    try:
        membership = await service.add_member(
            GroupId(value=group_id), actor, user_id=request.user_id, role=request.role
        )
        return MembershipResponse.from_domain(membership)

    except GroupNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Group not found",
        )
    except UserNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
    except UnauthorizedError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Insufficient permissions to manage group members",
        )
    except AlreadyMemberError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="User is already a member of this group",
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to add group member",
        )


@router.patch(
    "/{group_id}/members/{user_id}",
    response_model=MembershipResponse,
    summary="Change a member's group role",
    description="Promote to ADMIN or demote to MEMBER. Requires group ADMIN.",
    responses={
        200: {"description": "Role changed"},
        403: {"description": "Insufficient permissions"},
        404: {"description": "Group not found or user is not a member"},
        500: {"description": "Internal server error"},
    },
)
async def change_member_role(
    group_id: str,
    user_id: str,
    request: ChangeMemberRoleRequest,
    actor: Annotated[ActorContext, Depends(require_authenticated_actor)],
    service: Annotated[GroupService, Depends(get_group_service)],
) -> MembershipResponse:
    """Change a member's group role."""
    try:
        membership = await service.change_member_role(
            GroupId(value=group_id), actor, user_id=user_id, role=request.role
        )
        return MembershipResponse.from_domain(membership)

    except GroupNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Group not found",
        )
    except NotAMemberError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User is not a member of this group",
        )
    except UnauthorizedError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Insufficient permissions to manage group members",
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to change member role",
        )


@router.delete(
    "/{group_id}/members/{user_id}", status_code=status.HTTP_204_NO_CONTENT
)
async def remove_member(
    group_id: str,
    user_id: str,
    actor: Annotated[ActorContext, Depends(require_authenticated_actor)],
    service: Annotated[GroupService, Depends(get_group_service)],
) -> None:
    """Remove a member from a group.

    Raises:
        HTTPException: 403 if the caller may not manage the group's members
        HTTPException: 404 if group not found or user is not a member
        HTTPException: 500 for unexpected errors
    """
    try:
        await service.remove_member(GroupId(value=group_id), actor, user_id=user_id)

    except GroupNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Group not found",
        )
    except NotAMemberError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User is not a member of this group",
        )
    except UnauthorizedError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Insufficient permissions to manage group members",
        )
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to remove group member",
        )
