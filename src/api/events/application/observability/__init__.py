"""Domain-Oriented Observability for the events application layer."""

from events.application.observability.event_service_probe import (
    DefaultEventServiceProbe,
    EventServiceProbe,
)

__all__ = [
    "EventServiceProbe",
    "DefaultEventServiceProbe",
]
