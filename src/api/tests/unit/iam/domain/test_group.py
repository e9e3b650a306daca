"""Unit tests for the Group aggregate."""

import pytest

from iam.domain.aggregates import Group
from iam.domain.value_objects import GroupId, UserId


class TestGroupCreation:
    """Tests for Group.create."""

    def test_creates_with_generated_id(self):
        group = Group.create(name="Garden Club", created_by=UserId("user-1"))

        assert isinstance(group.id, GroupId)
        assert group.name == "Garden Club"
        assert group.created_by == UserId("user-1")
        assert group.visible is True

    def test_strips_name(self):
        group = Group.create(name="  Garden Club  ", created_by=UserId("user-1"))

        assert group.name == "Garden Club"

    @pytest.mark.parametrize("name", ["", "   "])
    def test_rejects_blank_name(self, name):
        with pytest.raises(ValueError, match="cannot be empty"):
            Group.create(name=name, created_by=UserId("user-1"))

    def test_can_start_hidden(self):
        group = Group.create(
            name="Board", created_by=UserId("user-1"), visible=False
        )

        assert group.visible is False

    def test_ids_are_unique(self):
        first = Group.create(name="A", created_by=UserId("user-1"))
        second = Group.create(name="B", created_by=UserId("user-1"))

        assert first.id != second.id


class TestGroupVisibility:
    """Tests for Group.set_visibility."""

    def test_hide_and_show(self):
        group = Group.create(name="Garden Club", created_by=UserId("user-1"))

        group.set_visibility(False)
        assert group.visible is False

        group.set_visibility(True)
        assert group.visible is True
