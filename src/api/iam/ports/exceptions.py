"""Domain exceptions for IAM bounded context.

These exceptions represent domain-level errors that can occur during
repository and service operations. They are raised by the application
layer and translated to HTTP responses by the presentation layer.
"""


class DuplicateGroupNameError(Exception):
    """Raised when attempting to create a group with a name that already exists.

    This exception indicates that the business rule of unique group names
    has been violated. The application layer should handle this and provide
    appropriate feedback to the user.
    """

    pass


class GroupNotFoundError(Exception):
    """Raised when a group does not exist or is not visible to the caller.

    Hidden groups are reported as missing so that their existence is not
    leaked to callers who may not see them.
    """

    pass


class UnauthorizedError(Exception):
    """Raised when a user lacks permission to perform an operation.

    This exception indicates that authorization checks have failed.
    The presentation layer returns HTTP 403 without exposing internal details.
    """

    pass


class AlreadyMemberError(Exception):
    """Raised when a user tries to join a group they already belong to."""

    pass


class NotAMemberError(Exception):
    """Raised when a user tries to leave a group they do not belong to."""

    pass


class UserNotFoundError(Exception):
    """Raised when an administrative operation targets an unknown user."""

    pass
