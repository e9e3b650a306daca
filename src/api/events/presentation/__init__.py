"""Events presentation layer."""

from events.presentation.routes import router

__all__ = ["router"]
