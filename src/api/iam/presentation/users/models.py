"""Pydantic models for user administration requests and responses."""

from __future__ import annotations

from pydantic import BaseModel, Field

from iam.domain.aggregates import User
from shared_kernel.authorization.types import UserRole


class UpdateUserRoleRequest(BaseModel):
    """Request model for changing a user's site-wide role."""

    role: UserRole = Field(..., description="New site role (ADMIN or USER)")


class UpdateUserActiveRequest(BaseModel):
    """Request model for activating or deactivating a user."""

    active: bool = Field(..., description="Whether the account may sign in")


class UserResponse(BaseModel):
    """Response model for a user."""

    id: str = Field(..., description="User ID")
    email: str = Field(..., description="Email address")
    name: str | None = Field(default=None, description="Display name")
    role: UserRole = Field(..., description="Site role (ADMIN or USER)")
    active: bool = Field(..., description="Whether the account is active")

    @classmethod
    def from_domain(cls, user: User) -> UserResponse:
        """Convert domain User aggregate to API response."""
        return cls(
            id=user.id.value,
            email=user.email,
            name=user.name,
            role=user.role,
            active=user.active,
        )
