"""Unit tests for SqlAlchemyVisibilityStore."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError, ProgrammingError

from infrastructure.database.exceptions import DatabaseConnectionError, DatabaseError
from shared_kernel.authorization.types import GroupRole
from visibility.domain.value_objects import EventFlags, GroupFlags
from visibility.infrastructure.store import SqlAlchemyVisibilityStore
from visibility.ports.store import IVisibilityStore


@pytest.fixture
def session():
    return AsyncMock()


@pytest.fixture
def store(session) -> SqlAlchemyVisibilityStore:
    return SqlAlchemyVisibilityStore(session=session)


def _returns(session, row):
    result = MagicMock()
    result.one_or_none.return_value = row
    session.execute.return_value = result


class TestProtocolCompliance:
    def test_implements_visibility_store(self, store):
        assert isinstance(store, IVisibilityStore)


class TestGetGroupFlags:
    """Tests for group lookups."""

    @pytest.mark.asyncio
    async def test_returns_none_when_group_missing(self, store, session):
        _returns(session, None)

        assert await store.get_group_flags("G1", "U1") is None

    @pytest.mark.asyncio
    async def test_maps_row_to_flags(self, store, session):
        _returns(session, SimpleNamespace(visible=False, caller_is_group_admin=True))

        flags = await store.get_group_flags("G1", "U1")

        assert flags == GroupFlags(visible=False, caller_is_group_admin=True)

    @pytest.mark.asyncio
    async def test_without_user_selects_flag_only(self, store, session):
        _returns(session, SimpleNamespace(visible=True))

        flags = await store.get_group_flags("G1", None)

        assert flags == GroupFlags(visible=True, caller_is_group_admin=False)
        stmt = session.execute.call_args.args[0]
        assert "caller_is_group_admin" not in str(stmt)

    @pytest.mark.asyncio
    async def test_single_statement_per_lookup(self, store, session):
        _returns(session, SimpleNamespace(visible=True, caller_is_group_admin=False))

        await store.get_group_flags("G1", "U1")

        session.execute.assert_awaited_once()
        assert "caller_is_group_admin" in str(session.execute.call_args.args[0])


class TestGetEventFlags:
    """Tests for event lookups."""

    @pytest.mark.asyncio
    async def test_returns_none_when_event_missing(self, store, session):
        _returns(session, None)

        assert await store.get_event_flags("E1", "U1") is None

    @pytest.mark.asyncio
    async def test_maps_row_to_flags(self, store, session):
        _returns(
            session,
            SimpleNamespace(
                visible=False,
                created_by="C",
                caller_is_subscribed=True,
                caller_is_group_admin=False,
            ),
        )

        flags = await store.get_event_flags("E1", "U1")

        assert flags == EventFlags(
            visible=False,
            created_by="C",
            caller_is_subscribed=True,
            caller_is_group_admin=False,
        )

    @pytest.mark.asyncio
    async def test_without_user_skips_relations(self, store, session):
        _returns(session, SimpleNamespace(visible=True, created_by="C"))

        flags = await store.get_event_flags("E1", None)

        assert flags == EventFlags(visible=True, created_by="C")


class TestGetMembershipRole:
    """Tests for membership lookups."""

    @pytest.mark.asyncio
    async def test_returns_role(self, store, session):
        _returns(session, SimpleNamespace(role="ADMIN"))

        assert await store.get_membership_role("U1", "G1") == GroupRole.ADMIN

    @pytest.mark.asyncio
    async def test_returns_none_when_not_member(self, store, session):
        _returns(session, None)

        assert await store.get_membership_role("U1", "G1") is None


class TestErrorHandling:
    """Driver failures surface as infrastructure errors, never as None."""

    @pytest.mark.asyncio
    async def test_connection_failure_raises_connection_error(self, store, session):
        session.execute.side_effect = OperationalError(
            "SELECT 1", {}, Exception("connection refused")
        )

        with pytest.raises(DatabaseConnectionError):
            await store.get_group_flags("G1", "U1")

    @pytest.mark.asyncio
    async def test_other_failures_raise_database_error(self, store, session):
        session.execute.side_effect = ProgrammingError(
            "SELECT 1", {}, Exception("no such table")
        )

        with pytest.raises(DatabaseError):
            await store.get_event_flags("E1", "U1")
