"""Unit tests for ActorContext."""

import pytest

from shared_kernel.authorization.context import (
    ActorContext,
    InvalidActorContextError,
)
from shared_kernel.authorization.types import UserRole


class TestActorContext:
    """Tests for constructing actor contexts."""

    def test_anonymous_has_no_identity(self):
        context = ActorContext.anonymous()

        assert context.is_authenticated is False
        assert context.user_id is None
        assert context.user_role is None
        assert context.is_site_admin is False

    def test_for_user_is_authenticated(self):
        context = ActorContext.for_user("u1", UserRole.USER)

        assert context.is_authenticated is True
        assert context.user_id == "u1"
        assert context.is_site_admin is False

    def test_site_admin(self):
        assert ActorContext.for_user("a1", UserRole.ADMIN).is_site_admin is True

    def test_authenticated_without_user_id_is_allowed(self):
        context = ActorContext(is_authenticated=True)

        assert context.user_id is None
        assert context.is_site_admin is False

    def test_unauthenticated_admin_is_rejected(self):
        with pytest.raises(InvalidActorContextError):
            ActorContext(user_role=UserRole.ADMIN, is_authenticated=False)

    def test_unauthenticated_user_id_is_rejected(self):
        with pytest.raises(InvalidActorContextError):
            ActorContext(user_id="u1")

    def test_invalid_context_error_is_value_error(self):
        assert issubclass(InvalidActorContextError, ValueError)

    def test_context_is_immutable(self):
        context = ActorContext.for_user("u1", UserRole.USER)

        with pytest.raises(AttributeError):
            context.user_role = UserRole.ADMIN  # type: ignore[misc]
