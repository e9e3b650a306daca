"""SQLAlchemy ORM model for the event_subscriptions table."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, utc_now


class EventSubscriptionModel(Base):
    """ORM model for a user's subscription to an event.

    Composite primary key ``(event_id, user_id)`` so that "is this user
    subscribed to this event" is a primary-key probe.

    Foreign Key Constraint:
    - event_id references events.id with RESTRICT delete
      Subscriptions are deleted explicitly before their event
    """

    __tablename__ = "event_subscriptions"

    event_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("events.id", ondelete="RESTRICT"),
        primary_key=True,
    )
    user_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("users.id", ondelete="RESTRICT"),
        primary_key=True,
    )
    subscribed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        insert_default=utc_now,
        nullable=False,
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<EventSubscriptionModel(event_id={self.event_id}, "
            f"user_id={self.user_id})>"
        )
