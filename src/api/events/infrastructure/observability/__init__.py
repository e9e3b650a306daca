"""Domain-Oriented Observability for events infrastructure."""

from events.infrastructure.observability.repository_probe import (
    DefaultEventRepositoryProbe,
    DefaultSubscriptionRepositoryProbe,
    EventRepositoryProbe,
    SubscriptionRepositoryProbe,
)

__all__ = [
    "EventRepositoryProbe",
    "DefaultEventRepositoryProbe",
    "SubscriptionRepositoryProbe",
    "DefaultSubscriptionRepositoryProbe",
]
