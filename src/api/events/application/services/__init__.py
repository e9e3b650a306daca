"""Application services for the events bounded context."""

from events.application.services.event_service import EventService

__all__ = ["EventService"]
