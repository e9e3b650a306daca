"""SQLAlchemy ORM models for IAM bounded context.

These models map to database tables and are used by repository implementations
and by the visibility store.
"""

from iam.infrastructure.models.group import GroupModel
from iam.infrastructure.models.user import UserModel
from iam.infrastructure.models.user_group import UserGroupModel

__all__ = [
    "GroupModel",
    "UserGroupModel",
    "UserModel",
]
