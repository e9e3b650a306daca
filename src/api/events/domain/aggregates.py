"""Event aggregate for the events context."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from events.domain.value_objects import EventId


@dataclass
class Event:
    """A scheduled activity owned by one group.

    Business rules:
    - ``start_date`` is strictly before ``end_date``
    - The event's ``visible`` flag is its own; it does not follow the
      owning group's flag
    """

    id: EventId
    title: str
    start_date: datetime
    end_date: datetime
    group_id: str
    created_by: str
    description: str | None = None
    location: str | None = None
    visible: bool = True

    def __post_init__(self) -> None:
        if self.start_date >= self.end_date:
            raise ValueError("Event start date must be before its end date")

    @classmethod
    def create(
        cls,
        title: str,
        start_date: datetime,
        end_date: datetime,
        group_id: str,
        created_by: str,
        description: str | None = None,
        location: str | None = None,
        visible: bool = True,
    ) -> Event:
        """Factory method for creating a new event.

        Raises:
            ValueError: If the title is blank or the dates are out of order
        """
        title = title.strip()
        if not title:
            raise ValueError("Event title cannot be empty")

        return cls(
            id=EventId.generate(),
            title=title,
            start_date=start_date,
            end_date=end_date,
            group_id=group_id,
            created_by=created_by,
            description=description,
            location=location,
            visible=visible,
        )

    def set_visibility(self, visible: bool) -> None:
        """Show or hide the event."""
        self.visible = visible
