"""SQLAlchemy ORM models for the events bounded context."""

from events.infrastructure.models.event import EventModel
from events.infrastructure.models.event_subscription import EventSubscriptionModel

__all__ = [
    "EventModel",
    "EventSubscriptionModel",
]
