"""Ports for the visibility bounded context."""

from visibility.ports.exceptions import UnsupportedPredicateError
from visibility.ports.store import IVisibilityStore

__all__ = [
    "IVisibilityStore",
    "UnsupportedPredicateError",
]
