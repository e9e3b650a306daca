"""Pydantic models for group API requests and responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from iam.application.value_objects import GroupPage
from iam.domain.aggregates import Group
from iam.domain.value_objects import GroupMembership
from shared_kernel.authorization.types import GroupRole


class CreateGroupRequest(BaseModel):
    """Request model for creating a group."""

    name: str = Field(..., description="Group name", min_length=1, max_length=255)
    description: str | None = Field(
        default=None, description="Group description", max_length=2000
    )
    visible: bool = Field(default=True, description="Whether the group is listed")


class UpdateVisibilityRequest(BaseModel):
    """Request model for showing or hiding a group."""

    visible: bool = Field(..., description="New visibility flag")


class AddMemberRequest(BaseModel):
    """Request model for adding a user to a group."""

    user_id: str = Field(..., description="User to add", min_length=1)
    role: GroupRole = Field(default=GroupRole.MEMBER, description="Group role")


class ChangeMemberRoleRequest(BaseModel):
    """Request model for promoting or demoting a member."""

    role: GroupRole = Field(..., description="New group role (ADMIN or MEMBER)")


class GroupResponse(BaseModel):
    """Response model for group."""

    id: str = Field(..., description="Group ID")
    name: str = Field(..., description="Group name")
    description: str | None = Field(default=None, description="Group description")
    created_by: str = Field(..., description="User ID of the creator")
    visible: bool = Field(..., description="Whether the group is listed")
    created_at: datetime | None = Field(default=None, description="Creation time")

    @classmethod
    def from_domain(cls, group: Group) -> GroupResponse:
        """Convert domain Group aggregate to API response.

        Args:
            group: Group domain aggregate

        Returns:
            GroupResponse with group details
        """
        return cls(
            id=group.id.value,
            name=group.name,
            description=group.description,
            created_by=group.created_by.value,
            visible=group.visible,
            created_at=group.created_at,
        )


class GroupListResponse(BaseModel):
    """Response model for one page of groups."""

    groups: list[GroupResponse] = Field(..., description="Groups on this page")
    total: int = Field(..., description="Matching groups across all pages")
    page: int = Field(..., description="1-based page number")
    limit: int = Field(..., description="Page size")
    pages: int = Field(..., description="Number of pages")

    @classmethod
    def from_page(cls, page: GroupPage) -> GroupListResponse:
        """Convert a GroupPage to API response."""
        return cls(
            groups=[GroupResponse.from_domain(group) for group in page.items],
            total=page.total,
            page=page.page,
            limit=page.limit,
            pages=page.pages,
        )


class MembershipResponse(BaseModel):
    """Response model for a group membership."""

    group_id: str = Field(..., description="Group ID")
    user_id: str = Field(..., description="Member user ID")
    role: GroupRole = Field(..., description="Member role (ADMIN or MEMBER)")
    joined_at: datetime | None = Field(default=None, description="Join time")

    @classmethod
    def from_domain(cls, membership: GroupMembership) -> MembershipResponse:
        """Convert domain GroupMembership to API response."""
        return cls(
            group_id=membership.group_id.value,
            user_id=membership.user_id.value,
            role=membership.role,
            joined_at=membership.joined_at,
        )


class MemberListResponse(BaseModel):
    """Response model for a group's member list."""

    members: list[MembershipResponse] = Field(..., description="Admins first")
    total: int = Field(..., description="Number of members")
    admin_count: int = Field(..., description="Number of group admins")

    @classmethod
    def from_domain(cls, memberships: list[GroupMembership]) -> MemberListResponse:
        """Convert a list of memberships to API response."""
        return cls(
            members=[MembershipResponse.from_domain(m) for m in memberships],
            total=len(memberships),
            admin_count=sum(1 for m in memberships if m.is_admin()),
        )
