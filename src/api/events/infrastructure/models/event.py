"""SQLAlchemy ORM model for the events table."""

from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class EventModel(Base, TimestampMixin):
    """ORM model for events table.

    ``visible`` is independent of the owning group's flag: a hidden group may
    expose a visible event and a visible group may hold hidden events.

    Foreign Key Constraints:
    - group_id references groups.id with RESTRICT delete
      Events are deleted explicitly before their group
    - created_by references users.id with RESTRICT delete
    """

    __tablename__ = "events"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    start_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True
    )
    end_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    location: Mapped[str | None] = mapped_column(String(200), nullable=True)
    group_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("groups.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    created_by: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
    )
    visible: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    __table_args__ = (
        CheckConstraint("start_date < end_date", name="ck_events_date_order"),
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<EventModel(id={self.id}, title={self.title}, "
            f"group_id={self.group_id}, visible={self.visible})>"
        )
