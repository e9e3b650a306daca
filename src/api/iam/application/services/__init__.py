"""Application services for IAM bounded context."""

from iam.application.services.group_service import GroupService
from iam.application.services.user_service import UserService

__all__ = ["GroupService", "UserService"]
