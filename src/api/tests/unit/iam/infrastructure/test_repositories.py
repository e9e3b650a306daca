"""Unit tests for IAM repositories against a mocked session."""

from unittest.mock import MagicMock, create_autospec

import pytest
from sqlalchemy.exc import IntegrityError

from iam.domain.aggregates import Group, User
from iam.domain.value_objects import GroupId, GroupMembership, UserId
from iam.infrastructure.group_repository import GroupRepository
from iam.infrastructure.membership_repository import MembershipRepository
from iam.infrastructure.models import GroupModel, UserGroupModel, UserModel
from iam.infrastructure.observability import (
    GroupRepositoryProbe,
    MembershipRepositoryProbe,
    UserRepositoryProbe,
)
from iam.infrastructure.user_repository import UserRepository
from iam.ports.exceptions import (
    AlreadyMemberError,
    DuplicateGroupNameError,
    UserNotFoundError,
)
from shared_kernel.authorization.types import GroupRole, UserRole


def _result(scalar=None, rowcount=0):
    result = MagicMock()
    result.scalar_one_or_none.return_value = scalar
    result.rowcount = rowcount
    return result


@pytest.fixture
def group_probe():
    return create_autospec(GroupRepositoryProbe, instance=True)


@pytest.fixture
def membership_probe():
    return create_autospec(MembershipRepositoryProbe, instance=True)


@pytest.fixture
def user_probe():
    return create_autospec(UserRepositoryProbe, instance=True)


class TestGroupRepository:
    """Tests for GroupRepository."""

    @pytest.mark.asyncio
    async def test_save_new_group_adds_model(self, mock_session, group_probe):
        group = Group.create(name="Garden Club", created_by=UserId("user-1"))
        mock_session.execute.return_value = _result(None)
        repository = GroupRepository(session=mock_session, probe=group_probe)

        await repository.save(group)

        added = mock_session.add.call_args.args[0]
        assert isinstance(added, GroupModel)
        assert added.id == group.id.value
        assert added.created_by == "user-1"
        mock_session.flush.assert_awaited_once()
        group_probe.group_saved.assert_called_once_with(group.id.value, True)

    @pytest.mark.asyncio
    async def test_save_rejects_taken_name(self, mock_session, group_probe):
        group = Group.create(name="Garden Club", created_by=UserId("user-1"))
        other = GroupModel(
            id=GroupId.generate().value,
            name="Garden Club",
            created_by="user-2",
            visible=True,
        )
        mock_session.execute.return_value = _result(other)
        repository = GroupRepository(session=mock_session, probe=group_probe)

        with pytest.raises(DuplicateGroupNameError):
            await repository.save(group)

        mock_session.add.assert_not_called()
        group_probe.duplicate_group_name.assert_called_once_with("Garden Club")

    @pytest.mark.asyncio
    async def test_save_maps_concurrent_name_clash(self, mock_session, group_probe):
        group = Group.create(name="Garden Club", created_by=UserId("user-1"))
        mock_session.execute.return_value = _result(None)
        mock_session.flush.side_effect = IntegrityError(
            "INSERT INTO groups",
            {},
            Exception(
                'duplicate key value violates unique constraint "uq_groups_name"'
            ),
        )
        repository = GroupRepository(session=mock_session, probe=group_probe)

        with pytest.raises(DuplicateGroupNameError):
            await repository.save(group)

        group_probe.duplicate_group_name.assert_called_once_with("Garden Club")
        group_probe.group_saved.assert_not_called()

    @pytest.mark.asyncio
    async def test_save_reraises_other_integrity_errors(
        self, mock_session, group_probe
    ):
        group = Group.create(name="Garden Club", created_by=UserId("ghost"))
        mock_session.execute.return_value = _result(None)
        mock_session.flush.side_effect = IntegrityError(
            "INSERT INTO groups",
            {},
            Exception('violates foreign key constraint "fk_groups_created_by_users"'),
        )
        repository = GroupRepository(session=mock_session, probe=group_probe)

        with pytest.raises(IntegrityError):
            await repository.save(group)

    @pytest.mark.asyncio
    async def test_save_existing_group_updates_in_place(
        self, mock_session, group_probe
    ):
        group = Group.create(name="Garden Club", created_by=UserId("user-1"))
        model = GroupModel(
            id=group.id.value, name="Garden Club", created_by="user-1", visible=True
        )
        mock_session.execute.return_value = _result(model)
        repository = GroupRepository(session=mock_session, probe=group_probe)

        group.set_visibility(False)
        await repository.save(group)

        assert model.visible is False
        mock_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_get_by_id_not_found(self, mock_session, group_probe):
        mock_session.execute.return_value = _result(None)
        repository = GroupRepository(session=mock_session, probe=group_probe)
        group_id = GroupId.generate()

        assert await repository.get_by_id(group_id) is None
        group_probe.group_not_found.assert_called_once_with(group_id.value)

    @pytest.mark.asyncio
    async def test_delete_reports_missing_group(self, mock_session, group_probe):
        mock_session.execute.return_value = _result(rowcount=0)
        repository = GroupRepository(session=mock_session, probe=group_probe)

        assert await repository.delete(GroupId.generate()) is False


class TestMembershipRepository:
    """Tests for MembershipRepository."""

    @pytest.mark.asyncio
    async def test_add_persists_role(self, mock_session, membership_probe):
        mock_session.execute.return_value = _result(None)
        repository = MembershipRepository(
            session=mock_session, probe=membership_probe
        )
        membership = GroupMembership(
            user_id=UserId("user-1"),
            group_id=GroupId.generate(),
            role=GroupRole.ADMIN,
        )

        await repository.add(membership)

        added = mock_session.add.call_args.args[0]
        assert isinstance(added, UserGroupModel)
        assert added.role == "ADMIN"
        membership_probe.membership_added.assert_called_once()

    @pytest.mark.asyncio
    async def test_add_twice_raises(self, mock_session, membership_probe):
        group_id = GroupId.generate()
        existing = UserGroupModel(
            user_id="user-1", group_id=group_id.value, role="MEMBER"
        )
        mock_session.execute.return_value = _result(existing)
        repository = MembershipRepository(
            session=mock_session, probe=membership_probe
        )

        with pytest.raises(AlreadyMemberError):
            await repository.add(
                GroupMembership(
                    user_id=UserId("user-1"), group_id=group_id, role=GroupRole.MEMBER
                )
            )

        mock_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_get_maps_role(self, mock_session, membership_probe):
        group_id = GroupId.generate()
        mock_session.execute.return_value = _result(
            UserGroupModel(user_id="user-1", group_id=group_id.value, role="ADMIN")
        )
        repository = MembershipRepository(
            session=mock_session, probe=membership_probe
        )

        membership = await repository.get(UserId("user-1"), group_id)

        assert membership is not None
        assert membership.role is GroupRole.ADMIN
        assert membership.is_admin()

    @pytest.mark.asyncio
    async def test_remove_when_absent(self, mock_session, membership_probe):
        mock_session.execute.return_value = _result(rowcount=0)
        repository = MembershipRepository(
            session=mock_session, probe=membership_probe
        )

        assert await repository.remove(UserId("user-1"), GroupId.generate()) is False
        membership_probe.membership_removed.assert_not_called()

    @pytest.mark.asyncio
    async def test_add_maps_concurrent_insert_to_already_member(
        self, mock_session, membership_probe
    ):
        mock_session.execute.return_value = _result(None)
        mock_session.flush.side_effect = IntegrityError(
            "INSERT INTO user_groups",
            {},
            Exception(
                'duplicate key value violates unique constraint "pk_user_groups"'
            ),
        )
        repository = MembershipRepository(
            session=mock_session, probe=membership_probe
        )

        with pytest.raises(AlreadyMemberError):
            await repository.add(
                GroupMembership(
                    user_id=UserId("user-1"),
                    group_id=GroupId.generate(),
                    role=GroupRole.MEMBER,
                )
            )

        membership_probe.membership_added.assert_not_called()

    @pytest.mark.asyncio
    async def test_add_unknown_user_is_not_reported_as_duplicate(
        self, mock_session, membership_probe
    ):
        mock_session.execute.return_value = _result(None)
        mock_session.flush.side_effect = IntegrityError(
            "INSERT INTO user_groups",
            {},
            Exception('violates foreign key constraint "fk_user_groups_user_id_users"'),
        )
        repository = MembershipRepository(
            session=mock_session, probe=membership_probe
        )

        with pytest.raises(IntegrityError):
            await repository.add(
                GroupMembership(
                    user_id=UserId("ghost"),
                    group_id=GroupId.generate(),
                    role=GroupRole.MEMBER,
                )
            )

    @pytest.mark.asyncio
    async def test_list_by_group_maps_rows(self, mock_session, membership_probe):
        group_id = GroupId.generate()
        result = MagicMock()
        result.scalars.return_value.all.return_value = [
            UserGroupModel(user_id="user-1", group_id=group_id.value, role="ADMIN"),
            UserGroupModel(user_id="user-2", group_id=group_id.value, role="MEMBER"),
        ]
        mock_session.execute.return_value = result
        repository = MembershipRepository(
            session=mock_session, probe=membership_probe
        )

        memberships = await repository.list_by_group(group_id)

        assert [m.user_id.value for m in memberships] == ["user-1", "user-2"]
        assert [m.role for m in memberships] == [GroupRole.ADMIN, GroupRole.MEMBER]

    @pytest.mark.asyncio
    async def test_update_role(self, mock_session, membership_probe):
        group_id = GroupId.generate()
        mock_session.execute.return_value = _result(rowcount=1)
        repository = MembershipRepository(
            session=mock_session, probe=membership_probe
        )

        updated = await repository.update_role(
            UserId("user-2"), group_id, GroupRole.ADMIN
        )

        assert updated is True
        membership_probe.membership_role_changed.assert_called_once_with(
            user_id="user-2", group_id=group_id.value, role="ADMIN"
        )

    @pytest.mark.asyncio
    async def test_update_role_when_absent(self, mock_session, membership_probe):
        mock_session.execute.return_value = _result(rowcount=0)
        repository = MembershipRepository(
            session=mock_session, probe=membership_probe
        )

        assert (
            await repository.update_role(
                UserId("user-2"), GroupId.generate(), GroupRole.ADMIN
            )
            is False
        )
        membership_probe.membership_role_changed.assert_not_called()


class TestUserRepository:
    """Tests for UserRepository."""

    @pytest.mark.asyncio
    async def test_save_updates_role_and_active(self, mock_session, user_probe):
        model = UserModel(
            id="user-2", email="sam@example.org", role="USER", active=True
        )
        mock_session.execute.return_value = _result(model)
        repository = UserRepository(session=mock_session, probe=user_probe)

        await repository.save(
            User(
                id=UserId("user-2"),
                email="sam@example.org",
                role=UserRole.ADMIN,
                active=False,
            )
        )

        assert model.role == "ADMIN"
        assert model.active is False
        mock_session.flush.assert_awaited_once()
        user_probe.user_saved.assert_called_once_with("user-2", "ADMIN", False)

    @pytest.mark.asyncio
    async def test_save_unknown_user(self, mock_session, user_probe):
        mock_session.execute.return_value = _result(None)
        repository = UserRepository(session=mock_session, probe=user_probe)

        with pytest.raises(UserNotFoundError):
            await repository.save(User(id=UserId("ghost"), email="ghost@example.org"))

        mock_session.flush.assert_not_called()
