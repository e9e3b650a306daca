"""Pydantic models for event API requests and responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, model_validator

from events.domain.aggregates import Event
from events.domain.value_objects import Subscription


class CreateEventRequest(BaseModel):
    """Request model for creating an event."""

    title: str = Field(..., description="Event title", min_length=2, max_length=200)
    description: str | None = Field(
        default=None, description="Event description", max_length=2000
    )
    start_date: datetime = Field(..., description="Start of the event")
    end_date: datetime = Field(..., description="End of the event")
    location: str | None = Field(
        default=None, description="Where the event takes place", max_length=200
    )
    group_id: str = Field(..., description="Owning group ID")
    visible: bool = Field(default=True, description="Whether the event is listed")

    @model_validator(mode="after")
    def check_dates(self) -> CreateEventRequest:
        """Reject events that end before they start."""
        if self.start_date >= self.end_date:
            raise ValueError("start_date must be before end_date")
        return self


class UpdateVisibilityRequest(BaseModel):
    """Request model for showing or hiding an event."""

    visible: bool = Field(..., description="New visibility flag")


class EventResponse(BaseModel):
    """Response model for event."""

    id: str = Field(..., description="Event ID")
    title: str = Field(..., description="Event title")
    description: str | None = Field(default=None, description="Event description")
    start_date: datetime = Field(..., description="Start of the event")
    end_date: datetime = Field(..., description="End of the event")
    location: str | None = Field(default=None, description="Event location")
    group_id: str = Field(..., description="Owning group ID")
    created_by: str = Field(..., description="User ID of the creator")
    visible: bool = Field(..., description="Whether the event is listed")

    @classmethod
    def from_domain(cls, event: Event) -> EventResponse:
        """Convert domain Event aggregate to API response.

        Args:
            event: Event domain aggregate

        Returns:
            EventResponse with event details
        """
        return cls(
            id=event.id.value,
            title=event.title,
            description=event.description,
            start_date=event.start_date,
            end_date=event.end_date,
            location=event.location,
            group_id=event.group_id,
            created_by=event.created_by,
            visible=event.visible,
        )


class EventListResponse(BaseModel):
    """Response model for event listings."""

    events: list[EventResponse] = Field(..., description="Visible events")
    count: int = Field(..., description="Number of events returned")


class SubscriptionResponse(BaseModel):
    """Response model for an event subscription."""

    event_id: str = Field(..., description="Event ID")
    user_id: str = Field(..., description="Subscribed user ID")

    @classmethod
    def from_domain(cls, subscription: Subscription) -> SubscriptionResponse:
        """Convert domain Subscription to API response."""
        return cls(
            event_id=subscription.event_id.value,
            user_id=subscription.user_id,
        )
