"""Actor context: who is asking, as established by the authentication layer."""

from __future__ import annotations

from dataclasses import dataclass

from shared_kernel.authorization.types import UserRole


class InvalidActorContextError(ValueError):
    """Raised when an actor context carries identity without authentication.

    An unauthenticated context must not name a user or a role. Rejecting
    such contexts at construction keeps "user_id is set" equivalent to
    "the caller is authenticated" everywhere downstream.
    """

    pass


@dataclass(frozen=True)
class ActorContext:
    """The requesting actor's identity and site-wide role.

    Attributes:
        user_id: Identifier of the acting user, if known
        user_role: Site-wide role of the acting user, if known
        is_authenticated: Whether the request carried valid credentials

    An authenticated context without a user id is allowed; it is granted
    the most restrictive non-anonymous view (visible entities only).
    """

    user_id: str | None = None
    user_role: UserRole | None = None
    is_authenticated: bool = False

    def __post_init__(self) -> None:
        if not self.is_authenticated and (
            self.user_id is not None or self.user_role is not None
        ):
            raise InvalidActorContextError(
                "Unauthenticated actor context cannot carry a user id or role"
            )

    @classmethod
    def anonymous(cls) -> ActorContext:
        """Context for a request without credentials."""
        return cls()

    @classmethod
    def for_user(cls, user_id: str, user_role: UserRole) -> ActorContext:
        """Context for an authenticated, identified user."""
        return cls(user_id=user_id, user_role=user_role, is_authenticated=True)

    @property
    def is_site_admin(self) -> bool:
        """Whether the actor holds the site-wide ADMIN role."""
        return self.user_role == UserRole.ADMIN
