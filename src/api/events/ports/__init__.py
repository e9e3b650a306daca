"""Ports (interfaces) for the events bounded context."""

from events.ports.exceptions import (
    AlreadySubscribedError,
    EventNotFoundError,
    NotSubscribedError,
    OwningGroupNotFoundError,
    UnauthorizedError,
)
from events.ports.repositories import (
    IEventRepository,
    IGroupMembershipReader,
    ISubscriptionRepository,
)

__all__ = [
    "IEventRepository",
    "IGroupMembershipReader",
    "ISubscriptionRepository",
    "AlreadySubscribedError",
    "EventNotFoundError",
    "NotSubscribedError",
    "OwningGroupNotFoundError",
    "UnauthorizedError",
]
