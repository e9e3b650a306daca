"""Value objects for the events domain."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ulid import ULID


@dataclass(frozen=True)
class EventId:
    """Identifier for an Event aggregate.

    New ids are ULIDs for sortability. Ids read back from storage or a URL
    are opaque strings and are not validated.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> EventId:
        """Generate a new EventId using ULID."""
        return cls(value=str(ULID()))


@dataclass(frozen=True)
class EventListOptions:
    """Filters for event listings.

    Attributes:
        group_id: Only events of this group
        upcoming: Only events starting at or after ``now``
        subscribed: Only events the caller is subscribed to
    """

    group_id: str | None = None
    upcoming: bool = False
    subscribed: bool = False


@dataclass(frozen=True)
class Subscription:
    """A user's place on an event's attendee list."""

    event_id: EventId
    user_id: str
    subscribed_at: datetime | None = None
