"""Domain-Oriented Observability for the visibility resolver."""

from visibility.application.observability.visibility_probe import (
    DefaultVisibilityProbe,
    VisibilityProbe,
)

__all__ = [
    "VisibilityProbe",
    "DefaultVisibilityProbe",
]
