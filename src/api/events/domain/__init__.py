"""Domain layer for the events bounded context."""

from events.domain.aggregates import Event
from events.domain.value_objects import EventId, EventListOptions, Subscription

__all__ = [
    "Event",
    "EventId",
    "EventListOptions",
    "Subscription",
]
