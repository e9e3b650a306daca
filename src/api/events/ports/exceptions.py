"""Domain exceptions for the events bounded context.

Raised by the application layer and translated to HTTP responses by the
presentation layer.
"""


class EventNotFoundError(Exception):
    """Raised when an event does not exist or is not visible to the caller.

    Hidden events are reported as missing so that their existence is not
    leaked to callers who may not see them.
    """

    pass


class OwningGroupNotFoundError(Exception):
    """Raised when an event is created for a group that does not exist."""

    pass


class UnauthorizedError(Exception):
    """Raised when a user lacks permission to perform an event operation.

    The presentation layer returns HTTP 403 without exposing internal details.
    """

    pass


class AlreadySubscribedError(Exception):
    """Raised when a user subscribes to an event twice."""

    pass


class NotSubscribedError(Exception):
    """Raised when a user unsubscribes from an event they are not on."""

    pass
