"""Exceptions for the visibility bounded context."""


class UnsupportedPredicateError(Exception):
    """Raised when a predicate cannot be compiled for a target entity.

    For example a subscription predicate applied to a group listing, or a
    predicate node type the compiler does not know.
    """

    pass
