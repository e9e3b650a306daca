"""SQLAlchemy ORM model for the user_groups membership table."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, utc_now
from shared_kernel.authorization.types import GroupRole


class UserGroupModel(Base):
    """ORM model for group memberships.

    Composite primary key ``(user_id, group_id)``: a user holds at most one
    role per group. Rows are deleted explicitly by the application before a
    group is removed (RESTRICT on both foreign keys).

    The ``(group_id, user_id, role)`` index serves the correlated EXISTS
    lookups issued by visibility filters and point checks.
    """

    __tablename__ = "user_groups"

    user_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("users.id", ondelete="RESTRICT"),
        primary_key=True,
    )
    group_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("groups.id", ondelete="RESTRICT"),
        primary_key=True,
    )
    role: Mapped[str] = mapped_column(
        String(16), nullable=False, default=GroupRole.MEMBER.value
    )
    joined_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        insert_default=utc_now,
        nullable=False,
    )

    __table_args__ = (
        Index("idx_user_groups_group_user_role", "group_id", "user_id", "role"),
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<UserGroupModel(user_id={self.user_id}, group_id={self.group_id}, "
            f"role={self.role})>"
        )
