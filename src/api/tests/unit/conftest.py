"""Unit test fixtures with mocked dependencies."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from shared_kernel.authorization.context import ActorContext
from shared_kernel.authorization.types import UserRole


@pytest.fixture
def mock_session():
    """Create mock async session with transaction support."""
    session = AsyncMock()
    # session.begin() is used as an async context manager, not awaited
    mock_transaction = MagicMock()
    mock_transaction.__aenter__ = AsyncMock(return_value=None)
    mock_transaction.__aexit__ = AsyncMock(return_value=None)
    session.begin = MagicMock(return_value=mock_transaction)
    session.add = MagicMock()
    return session


@pytest.fixture
def anonymous() -> ActorContext:
    """Context of a request without credentials."""
    return ActorContext.anonymous()


@pytest.fixture
def site_admin() -> ActorContext:
    """Context of a site administrator."""
    return ActorContext.for_user("admin-1", UserRole.ADMIN)


@pytest.fixture
def regular_user() -> ActorContext:
    """Context of an ordinary authenticated user."""
    return ActorContext.for_user("user-1", UserRole.USER)


@pytest.fixture
def unidentified_user() -> ActorContext:
    """Authenticated context that carries no user id."""
    return ActorContext(is_authenticated=True)
