"""Unit tests for the /users administration routes."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI, status
from fastapi.testclient import TestClient

from iam.application.services import UserService
from iam.domain.aggregates import User
from iam.domain.value_objects import UserId
from iam.ports.exceptions import UnauthorizedError, UserNotFoundError
from shared_kernel.authorization.context import ActorContext
from shared_kernel.authorization.types import UserRole


@pytest.fixture
def mock_user_service() -> AsyncMock:
    """Mock UserService for testing."""
    return AsyncMock(spec=UserService)


@pytest.fixture
def actor() -> ActorContext:
    return ActorContext.for_user("admin-1", UserRole.ADMIN)


@pytest.fixture
def test_client(mock_user_service: AsyncMock, actor: ActorContext) -> TestClient:
    """Create TestClient with mocked dependencies."""
    from iam.dependencies.user import get_user_service, require_authenticated_actor
    from iam.presentation import router

    app = FastAPI()
    app.dependency_overrides[get_user_service] = lambda: mock_user_service
    app.dependency_overrides[require_authenticated_actor] = lambda: actor
    app.include_router(router)

    return TestClient(app)


class TestSetUserRole:
    """Tests for PATCH /users/{user_id}/role."""

    def test_returns_updated_user(
        self,
        test_client: TestClient,
        mock_user_service: AsyncMock,
        actor: ActorContext,
    ) -> None:
        mock_user_service.set_user_role.return_value = User(
            id=UserId("user-2"), email="sam@example.org", role=UserRole.ADMIN
        )

        response = test_client.patch("/users/user-2/role", json={"role": "ADMIN"})

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {
            "id": "user-2",
            "email": "sam@example.org",
            "name": None,
            "role": "ADMIN",
            "active": True,
        }
        mock_user_service.set_user_role.assert_called_once_with(
            "user-2", actor, role=UserRole.ADMIN
        )

    @pytest.mark.parametrize(
        "error,expected",
        [
            (UnauthorizedError("no"), status.HTTP_403_FORBIDDEN),
            (UserNotFoundError("ghost"), status.HTTP_404_NOT_FOUND),
            (RuntimeError("boom"), status.HTTP_500_INTERNAL_SERVER_ERROR),
        ],
    )
    def test_error_mapping(
        self,
        test_client: TestClient,
        mock_user_service: AsyncMock,
        error: Exception,
        expected: int,
    ) -> None:
        mock_user_service.set_user_role.side_effect = error

        response = test_client.patch("/users/user-2/role", json={"role": "USER"})

        assert response.status_code == expected

    def test_rejects_unknown_role(
        self, test_client: TestClient, mock_user_service: AsyncMock
    ) -> None:
        response = test_client.patch("/users/user-2/role", json={"role": "ROOT"})

        assert response.status_code == 422
        mock_user_service.set_user_role.assert_not_called()


class TestSetUserActive:
    """Tests for PATCH /users/{user_id}/active."""

    def test_deactivates_user(
        self,
        test_client: TestClient,
        mock_user_service: AsyncMock,
        actor: ActorContext,
    ) -> None:
        mock_user_service.set_user_active.return_value = User(
            id=UserId("user-2"), email="sam@example.org", active=False
        )

        response = test_client.patch("/users/user-2/active", json={"active": False})

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["active"] is False
        mock_user_service.set_user_active.assert_called_once_with(
            "user-2", actor, active=False
        )

    def test_self_deactivation_returns_403(
        self, test_client: TestClient, mock_user_service: AsyncMock
    ) -> None:
        mock_user_service.set_user_active.side_effect = UnauthorizedError(
            "Administrators cannot change their own account"
        )

        response = test_client.patch("/users/admin-1/active", json={"active": False})

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert "own account" in response.json()["detail"]
