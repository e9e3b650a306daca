"""SQLAlchemy ORM model for the groups table."""

from sqlalchemy import Boolean, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class GroupModel(Base, TimestampMixin):
    """ORM model for groups table.

    Hidden groups (``visible`` false) are excluded from default listings and
    are only seen by their group admins and site admins.

    Foreign Key Constraint:
    - created_by references users.id with RESTRICT delete
    """

    __tablename__ = "groups"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
    )
    visible: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, index=True
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<GroupModel(id={self.id}, name={self.name}, visible={self.visible})>"
        )
