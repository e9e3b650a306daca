"""Unit tests for IAM value objects."""

import pytest

from iam.application.value_objects import GroupPage
from iam.domain.aggregates import User
from iam.domain.value_objects import (
    GroupId,
    GroupListOptions,
    GroupMembership,
    UserId,
)
from shared_kernel.authorization.types import GroupRole, UserRole


class TestGroupId:
    """Tests for GroupId."""

    def test_generate_produces_ulid(self):
        group_id = GroupId.generate()

        assert len(group_id.value) == 26
        assert str(group_id) == group_id.value

    def test_opaque_ids_are_accepted(self):
        assert GroupId(value="legacy-group").value == "legacy-group"


class TestGroupMembership:
    """Tests for GroupMembership."""

    def test_is_admin(self):
        membership = GroupMembership(
            user_id=UserId("user-1"),
            group_id=GroupId.generate(),
            role=GroupRole.ADMIN,
        )

        assert membership.is_admin()

    def test_member_is_not_admin(self):
        membership = GroupMembership(
            user_id=UserId("user-1"),
            group_id=GroupId.generate(),
            role=GroupRole.MEMBER,
        )

        assert not membership.is_admin()


class TestGroupListOptions:
    """Tests for GroupListOptions."""

    def test_defaults(self):
        options = GroupListOptions()

        assert options.page == 1
        assert options.limit == 10
        assert options.offset == 0
        assert options.include_hidden is False

    def test_offset(self):
        assert GroupListOptions(page=3, limit=25).offset == 50

    @pytest.mark.parametrize("page,limit", [(0, 10), (1, 0), (-1, 5)])
    def test_rejects_non_positive_paging(self, page, limit):
        with pytest.raises(ValueError):
            GroupListOptions(page=page, limit=limit)


class TestGroupPage:
    """Tests for GroupPage.pages."""

    @pytest.mark.parametrize(
        "total,limit,expected",
        [(0, 10, 0), (1, 10, 1), (10, 10, 1), (11, 10, 2), (95, 20, 5)],
    )
    def test_pages(self, total, limit, expected):
        page = GroupPage(items=[], total=total, page=1, limit=limit)

        assert page.pages == expected


class TestUser:
    """Tests for the User aggregate."""

    def test_equality_is_by_id(self):
        first = User(id=UserId("user-1"), email="a@example.com")
        second = User(
            id=UserId("user-1"), email="b@example.com", role=UserRole.ADMIN
        )

        assert first == second
        assert len({first, second}) == 1

    def test_different_ids_are_not_equal(self):
        first = User(id=UserId("user-1"), email="a@example.com")
        second = User(id=UserId("user-2"), email="a@example.com")

        assert first != second

    def test_defaults(self):
        user = User(id=UserId("user-1"), email="a@example.com")

        assert user.role == UserRole.USER
        assert user.active is True
        assert str(user) == "User(a@example.com)"
