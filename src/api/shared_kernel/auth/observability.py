"""Domain probe for bearer token verification.

Expired tokens are reported separately from other rejections: they are the
normal end of a session, not a sign of a forged or misconfigured token.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class JWTValidatorProbe(Protocol):
    """Domain probe for bearer token verification."""

    def token_validated(self, user_id: str) -> None:
        """Record that a token was verified for a user."""
        ...

    def token_expired(self) -> None:
        """Record that a correctly signed token had expired."""
        ...

    def token_rejected(self, reason: str) -> None:
        """Record that a token failed verification."""
        ...

    def with_context(self, context: ObservationContext) -> JWTValidatorProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultJWTValidatorProbe:
    """structlog-backed JWTValidatorProbe."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultJWTValidatorProbe:
        return DefaultJWTValidatorProbe(logger=self._logger, context=context)

    def token_validated(self, user_id: str) -> None:
        self._logger.debug(
            "bearer_token_validated", user_id=user_id, **self._get_context_kwargs()
        )

    def token_expired(self) -> None:
        self._logger.info("bearer_token_expired", **self._get_context_kwargs())

    def token_rejected(self, reason: str) -> None:
        self._logger.warning(
            "bearer_token_rejected", reason=reason, **self._get_context_kwargs()
        )
