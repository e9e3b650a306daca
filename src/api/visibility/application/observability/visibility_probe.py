"""Protocol for visibility resolver observability.

Defines the interface for domain probes that capture visibility decisions
and filter construction.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class VisibilityProbe(Protocol):
    """Domain probe for visibility resolver operations."""

    def filter_built(self, resource_type: str, user_id: str | None, kind: str) -> None:
        """Record that a listing filter was built."""
        ...

    def access_decided(
        self,
        resource_type: str,
        resource_id: str,
        permission: str,
        user_id: str | None,
        granted: bool,
    ) -> None:
        """Record the outcome of a point check."""
        ...

    def target_not_found(self, resource_type: str, resource_id: str) -> None:
        """Record that a point check targeted a missing entity."""
        ...

    def lookup_failed(
        self, resource_type: str, resource_id: str, error: str
    ) -> None:
        """Record that a store lookup raised."""
        ...

    def with_context(self, context: ObservationContext) -> VisibilityProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultVisibilityProbe:
    """Default implementation of VisibilityProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultVisibilityProbe:
        """Create a new probe with observation context bound."""
        return DefaultVisibilityProbe(logger=self._logger, context=context)

    def filter_built(self, resource_type: str, user_id: str | None, kind: str) -> None:
        """Record that a listing filter was built."""
        self._logger.debug(
            "visibility_filter_built",
            resource_type=resource_type,
            user_id=user_id,
            kind=kind,
            **self._get_context_kwargs(),
        )

    def access_decided(
        self,
        resource_type: str,
        resource_id: str,
        permission: str,
        user_id: str | None,
        granted: bool,
    ) -> None:
        """Record the outcome of a point check."""
        self._logger.debug(
            "visibility_access_decided",
            resource_type=resource_type,
            resource_id=resource_id,
            permission=permission,
            user_id=user_id,
            granted=granted,
            **self._get_context_kwargs(),
        )

    def target_not_found(self, resource_type: str, resource_id: str) -> None:
        """Record that a point check targeted a missing entity."""
        self._logger.debug(
            "visibility_target_not_found",
            resource_type=resource_type,
            resource_id=resource_id,
            **self._get_context_kwargs(),
        )

    def lookup_failed(
        self, resource_type: str, resource_id: str, error: str
    ) -> None:
        """Record that a store lookup raised."""
        self._logger.error(
            "visibility_lookup_failed",
            resource_type=resource_type,
            resource_id=resource_id,
            error=error,
            **self._get_context_kwargs(),
        )
