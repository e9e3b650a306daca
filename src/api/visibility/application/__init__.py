"""Application layer for the visibility bounded context."""

from visibility.application.resolver import VisibilityResolver

__all__ = ["VisibilityResolver"]
