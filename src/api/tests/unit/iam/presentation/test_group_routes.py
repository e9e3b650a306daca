"""Unit tests for the /groups routes.

Tests the presentation layer with the group service and caller identity
replaced through dependency overrides.
"""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI, status
from fastapi.testclient import TestClient

from iam.application.services import GroupService
from iam.application.value_objects import GroupPage
from iam.domain.aggregates import Group
from iam.domain.value_objects import (
    GroupId,
    GroupListOptions,
    GroupMembership,
    UserId,
)
from iam.ports.exceptions import (
    AlreadyMemberError,
    DuplicateGroupNameError,
    GroupNotFoundError,
    NotAMemberError,
    UnauthorizedError,
    UserNotFoundError,
)
from shared_kernel.authorization.context import ActorContext
from shared_kernel.authorization.types import GroupRole, UserRole


@pytest.fixture
def mock_group_service() -> AsyncMock:
    """Mock GroupService for testing."""
    return AsyncMock(spec=GroupService)


@pytest.fixture
def actor() -> ActorContext:
    return ActorContext.for_user("user-1", UserRole.USER)


@pytest.fixture
def test_client(mock_group_service: AsyncMock, actor: ActorContext) -> TestClient:
    """Create TestClient with mocked dependencies."""
    from iam.dependencies.group import get_group_service
    from iam.dependencies.user import require_authenticated_actor
    from iam.presentation import router

    app = FastAPI()

    app.dependency_overrides[get_group_service] = lambda: mock_group_service
    app.dependency_overrides[require_authenticated_actor] = lambda: actor

    app.include_router(router)

    return TestClient(app)


@pytest.fixture
def group() -> Group:
    return Group.create(name="Garden Club", created_by=UserId("user-1"))


class TestAuthentication:
    """Anonymous callers are rejected on every group route."""

    def test_anonymous_list_returns_401(self, mock_group_service: AsyncMock) -> None:
        from iam.dependencies.group import get_group_service
        from iam.dependencies.user import get_actor_context
        from iam.presentation import router

        app = FastAPI()
        app.dependency_overrides[get_group_service] = lambda: mock_group_service
        app.dependency_overrides[get_actor_context] = ActorContext.anonymous
        app.include_router(router)

        response = TestClient(app).get("/groups")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.headers["WWW-Authenticate"] == "Bearer"
        mock_group_service.list_groups.assert_not_called()


class TestListGroups:
    """Tests for GET /groups."""

    def test_returns_page(
        self,
        test_client: TestClient,
        mock_group_service: AsyncMock,
        group: Group,
    ) -> None:
        mock_group_service.list_groups.return_value = GroupPage(
            items=[group], total=11, page=2, limit=10
        )

        response = test_client.get("/groups", params={"page": 2})

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["groups"][0]["name"] == "Garden Club"
        assert body["total"] == 11
        assert body["page"] == 2
        assert body["pages"] == 2

    def test_passes_query_options(
        self,
        test_client: TestClient,
        mock_group_service: AsyncMock,
        actor: ActorContext,
    ) -> None:
        mock_group_service.list_groups.return_value = GroupPage(
            items=[], total=0, page=1, limit=5
        )

        test_client.get(
            "/groups",
            params={"search": "garden", "limit": 5, "include_hidden": "true"},
        )

        mock_group_service.list_groups.assert_called_once_with(
            actor,
            GroupListOptions(search="garden", page=1, limit=5, include_hidden=True),
        )

    @pytest.mark.parametrize("params", [{"page": 0}, {"limit": 101}])
    def test_rejects_bad_paging(
        self, test_client: TestClient, params: dict[str, int]
    ) -> None:
        response = test_client.get("/groups", params=params)

        assert response.status_code == 422

    def test_returns_500_on_unexpected_error(
        self, test_client: TestClient, mock_group_service: AsyncMock
    ) -> None:
        mock_group_service.list_groups.side_effect = Exception("DB connection failed")

        response = test_client.get("/groups")

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert "failed to list groups" in response.json()["detail"].lower()


class TestCreateGroup:
    """Tests for POST /groups."""

    def test_returns_201(
        self,
        test_client: TestClient,
        mock_group_service: AsyncMock,
        group: Group,
    ) -> None:
        mock_group_service.create_group.return_value = group

        response = test_client.post("/groups", json={"name": "Garden Club"})

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["id"] == group.id.value
        assert response.json()["visible"] is True

    def test_non_admin_returns_403(
        self, test_client: TestClient, mock_group_service: AsyncMock
    ) -> None:
        mock_group_service.create_group.side_effect = UnauthorizedError("no")

        response = test_client.post("/groups", json={"name": "Garden Club"})

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_duplicate_name_returns_409(
        self, test_client: TestClient, mock_group_service: AsyncMock
    ) -> None:
        mock_group_service.create_group.side_effect = DuplicateGroupNameError("dup")

        response = test_client.post("/groups", json={"name": "Garden Club"})

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_blank_name_returns_400(
        self, test_client: TestClient, mock_group_service: AsyncMock
    ) -> None:
        mock_group_service.create_group.side_effect = ValueError(
            "Group name cannot be empty"
        )

        response = test_client.post("/groups", json={"name": "   "})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "Group name cannot be empty"

    def test_missing_name_returns_422(self, test_client: TestClient) -> None:
        response = test_client.post("/groups", json={})

        assert response.status_code == 422


class TestGetGroup:
    """Tests for GET /groups/{group_id}."""

    def test_returns_group(
        self,
        test_client: TestClient,
        mock_group_service: AsyncMock,
        group: Group,
    ) -> None:
        mock_group_service.get_group.return_value = group

        response = test_client.get(f"/groups/{group.id.value}")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["name"] == "Garden Club"

    def test_hidden_or_missing_returns_404(
        self, test_client: TestClient, mock_group_service: AsyncMock
    ) -> None:
        mock_group_service.get_group.return_value = None

        response = test_client.get(f"/groups/{GroupId.generate().value}")

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_opaque_unknown_id_returns_404(
        self,
        test_client: TestClient,
        mock_group_service: AsyncMock,
        actor: ActorContext,
    ) -> None:
        mock_group_service.get_group.return_value = None

        response = test_client.get("/groups/legacy-group-7")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        mock_group_service.get_group.assert_awaited_once_with(
            GroupId(value="legacy-group-7"), actor
        )


class TestSetGroupVisibility:
    """Tests for PATCH /groups/{group_id}/visibility."""

    def test_returns_updated_group(
        self,
        test_client: TestClient,
        mock_group_service: AsyncMock,
        group: Group,
        actor: ActorContext,
    ) -> None:
        group.set_visibility(False)
        mock_group_service.set_group_visibility.return_value = group

        response = test_client.patch(
            f"/groups/{group.id.value}/visibility", json={"visible": False}
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["visible"] is False
        mock_group_service.set_group_visibility.assert_called_once_with(
            group.id, actor, visible=False
        )

    @pytest.mark.parametrize(
        "error,expected",
        [
            (GroupNotFoundError("gone"), status.HTTP_404_NOT_FOUND),
            (UnauthorizedError("no"), status.HTTP_403_FORBIDDEN),
            (RuntimeError("boom"), status.HTTP_500_INTERNAL_SERVER_ERROR),
        ],
    )
    def test_error_mapping(
        self,
        test_client: TestClient,
        mock_group_service: AsyncMock,
        error: Exception,
        expected: int,
    ) -> None:
        mock_group_service.set_group_visibility.side_effect = error

        response = test_client.patch(
            f"/groups/{GroupId.generate().value}/visibility", json={"visible": True}
        )

        assert response.status_code == expected


class TestDeleteGroup:
    """Tests for DELETE /groups/{group_id}."""

    def test_returns_204(
        self, test_client: TestClient, mock_group_service: AsyncMock
    ) -> None:
        response = test_client.delete(f"/groups/{GroupId.generate().value}")

        assert response.status_code == status.HTTP_204_NO_CONTENT
        mock_group_service.delete_group.assert_called_once()

    @pytest.mark.parametrize(
        "error,expected",
        [
            (GroupNotFoundError("gone"), status.HTTP_404_NOT_FOUND),
            (UnauthorizedError("no"), status.HTTP_403_FORBIDDEN),
        ],
    )
    def test_error_mapping(
        self,
        test_client: TestClient,
        mock_group_service: AsyncMock,
        error: Exception,
        expected: int,
    ) -> None:
        mock_group_service.delete_group.side_effect = error

        response = test_client.delete(f"/groups/{GroupId.generate().value}")

        assert response.status_code == expected


class TestMembership:
    """Tests for POST and DELETE /groups/{group_id}/membership."""

    def test_join_returns_201(
        self, test_client: TestClient, mock_group_service: AsyncMock
    ) -> None:
        group_id = GroupId.generate()
        mock_group_service.join_group.return_value = GroupMembership(
            user_id=UserId("user-1"), group_id=group_id, role=GroupRole.MEMBER
        )

        response = test_client.post(f"/groups/{group_id.value}/membership")

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json() == {
            "group_id": group_id.value,
            "user_id": "user-1",
            "role": "MEMBER",
            "joined_at": None,
        }

    @pytest.mark.parametrize(
        "error,expected",
        [
            (GroupNotFoundError("gone"), status.HTTP_404_NOT_FOUND),
            (AlreadyMemberError("dup"), status.HTTP_409_CONFLICT),
            (UnauthorizedError("no"), status.HTTP_403_FORBIDDEN),
        ],
    )
    def test_join_error_mapping(
        self,
        test_client: TestClient,
        mock_group_service: AsyncMock,
        error: Exception,
        expected: int,
    ) -> None:
        mock_group_service.join_group.side_effect = error

        response = test_client.post(f"/groups/{GroupId.generate().value}/membership")

        assert response.status_code == expected

    def test_leave_returns_204(
        self, test_client: TestClient, mock_group_service: AsyncMock
    ) -> None:
        response = test_client.delete(f"/groups/{GroupId.generate().value}/membership")

        assert response.status_code == status.HTTP_204_NO_CONTENT
        mock_group_service.leave_group.assert_called_once()

    def test_leave_when_not_member_returns_404(
        self, test_client: TestClient, mock_group_service: AsyncMock
    ) -> None:
        mock_group_service.leave_group.side_effect = NotAMemberError("no")

        response = test_client.delete(f"/groups/{GroupId.generate().value}/membership")

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestMembers:
    """Tests for the /groups/{group_id}/members routes."""

    def test_list_members(
        self, test_client: TestClient, mock_group_service: AsyncMock
    ) -> None:
        group_id = GroupId.generate()
        mock_group_service.list_members.return_value = [
            GroupMembership(UserId("lead-1"), group_id, GroupRole.ADMIN),
            GroupMembership(UserId("user-2"), group_id, GroupRole.MEMBER),
        ]

        response = test_client.get(f"/groups/{group_id.value}/members")

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert [m["user_id"] for m in body["members"]] == ["lead-1", "user-2"]
        assert body["total"] == 2
        assert body["admin_count"] == 1

    def test_add_member_returns_201(
        self,
        test_client: TestClient,
        mock_group_service: AsyncMock,
        actor: ActorContext,
    ) -> None:
        group_id = GroupId.generate()
        mock_group_service.add_member.return_value = GroupMembership(
            UserId("user-2"), group_id, GroupRole.ADMIN
        )

        response = test_client.post(
            f"/groups/{group_id.value}/members",
            json={"user_id": "user-2", "role": "ADMIN"},
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["role"] == "ADMIN"
        mock_group_service.add_member.assert_called_once_with(
            group_id, actor, user_id="user-2", role=GroupRole.ADMIN
        )

    def test_add_member_defaults_to_member_role(
        self, test_client: TestClient, mock_group_service: AsyncMock
    ) -> None:
        group_id = GroupId.generate()
        mock_group_service.add_member.return_value = GroupMembership(
            UserId("user-2"), group_id, GroupRole.MEMBER
        )

        test_client.post(
            f"/groups/{group_id.value}/members", json={"user_id": "user-2"}
        )

        role = mock_group_service.add_member.call_args.kwargs["role"]
        assert role is GroupRole.MEMBER

    def test_add_member_rejects_unknown_role(
        self, test_client: TestClient, mock_group_service: AsyncMock
    ) -> None:
        response = test_client.post(
            f"/groups/{GroupId.generate().value}/members",
            json={"user_id": "user-2", "role": "OWNER"},
        )

        assert response.status_code == 422
        mock_group_service.add_member.assert_not_called()

    @pytest.mark.parametrize(
        "error,expected",
        [
            (GroupNotFoundError("gone"), status.HTTP_404_NOT_FOUND),
            (UserNotFoundError("ghost"), status.HTTP_404_NOT_FOUND),
            (UnauthorizedError("no"), status.HTTP_403_FORBIDDEN),
            (AlreadyMemberError("dup"), status.HTTP_409_CONFLICT),
            (ValueError("deactivated"), status.HTTP_400_BAD_REQUEST),
            (RuntimeError("boom"), status.HTTP_500_INTERNAL_SERVER_ERROR),
        ],
    )
    def test_add_member_error_mapping(
        self,
        test_client: TestClient,
        mock_group_service: AsyncMock,
        error: Exception,
        expected: int,
    ) -> None:
        mock_group_service.add_member.side_effect = error

        response = test_client.post(
            f"/groups/{GroupId.generate().value}/members", json={"user_id": "user-2"}
        )

        assert response.status_code == expected

    def test_promote_member(
        self,
        test_client: TestClient,
        mock_group_service: AsyncMock,
        actor: ActorContext,
    ) -> None:
        group_id = GroupId.generate()
        mock_group_service.change_member_role.return_value = GroupMembership(
            UserId("user-2"), group_id, GroupRole.ADMIN
        )

        response = test_client.patch(
            f"/groups/{group_id.value}/members/user-2", json={"role": "ADMIN"}
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["role"] == "ADMIN"
        mock_group_service.change_member_role.assert_called_once_with(
            group_id, actor, user_id="user-2", role=GroupRole.ADMIN
        )

    @pytest.mark.parametrize(
        "error,expected",
        [
            (GroupNotFoundError("gone"), status.HTTP_404_NOT_FOUND),
            (NotAMemberError("no"), status.HTTP_404_NOT_FOUND),
            (UnauthorizedError("no"), status.HTTP_403_FORBIDDEN),
        ],
    )
    def test_change_role_error_mapping(
        self,
        test_client: TestClient,
        mock_group_service: AsyncMock,
        error: Exception,
        expected: int,
    ) -> None:
        mock_group_service.change_member_role.side_effect = error

        response = test_client.patch(
            f"/groups/{GroupId.generate().value}/members/user-2",
            json={"role": "MEMBER"},
        )

        assert response.status_code == expected

    def test_remove_member_returns_204(
        self,
        test_client: TestClient,
        mock_group_service: AsyncMock,
        actor: ActorContext,
    ) -> None:
        group_id = GroupId.generate()

        response = test_client.delete(f"/groups/{group_id.value}/members/user-2")

        assert response.status_code == status.HTTP_204_NO_CONTENT
        mock_group_service.remove_member.assert_called_once_with(
            group_id, actor, user_id="user-2"
        )

    def test_remove_non_member_returns_404(
        self, test_client: TestClient, mock_group_service: AsyncMock
    ) -> None:
        mock_group_service.remove_member.side_effect = NotAMemberError("no")

        response = test_client.delete(
            f"/groups/{GroupId.generate().value}/members/user-9"
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
