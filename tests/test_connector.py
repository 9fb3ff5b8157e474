"""Tests for the profile store against the fake session."""

from __future__ import annotations

import asyncio
from datetime import date

import pytest

from app.coach import connector, ledger
from tests.conftest import FakeResult, FakeSession, make_profile


class TestLoadProfile:
    @pytest.mark.asyncio
    async def test_missing(self):
        assert await connector.load_profile(FakeSession(), "nobody") is None

    @pytest.mark.asyncio
    async def test_roundtrip(self):
        session = FakeSession()
        state = ledger.append_entry(make_profile(), date(2026, 3, 1), 79.2)
        await connector.save_profile(session, state)

        loaded = await connector.load_profile(session, state.user_id)
        assert loaded == state
        assert session.commits == 1

    @pytest.mark.asyncio
    async def test_dict_payload(self):
        # JSONB may come back already decoded when a codec is registered
        session = FakeSession()

        async def _execute(stmt, params=None):
            return FakeResult([{"user_id": "selam", "state": make_profile().model_dump(mode="json")}])

        session.execute = _execute
        loaded = await connector.load_profile(session, "selam")
        assert loaded is not None
        assert loaded.start_weight == 80.0

    @pytest.mark.asyncio
    async def test_invalid_payload(self):
        session = FakeSession()
        session.profiles["selam"] = '{"user_id": "selam"}'
        assert await connector.load_profile(session, "selam") is None


class TestSaveProfile:
    @pytest.mark.asyncio
    async def test_last_write_wins(self):
        session = FakeSession()
        state = make_profile()
        await connector.save_profile(session, ledger.log_weight(state, 79.0, date(2026, 3, 1)))
        await connector.save_profile(session, ledger.log_weight(state, 78.0, date(2026, 3, 2)))
        assert session.stored("selam").weight_history == {date(2026, 3, 2): 78.0}


class TestLockedLoad:
    @pytest.mark.asyncio
    async def test_for_update_appends_lock_clause(self):
        session = FakeSession(profiles={"selam": make_profile()})
        seen: list[str] = []
        execute = session.execute

        async def _execute(stmt, params=None):
            seen.append(str(stmt))
            return await execute(stmt, params)

        session.execute = _execute
        await connector.load_profile(session, "selam")
        await connector.load_profile(session, "selam", for_update=True)
        assert not seen[0].endswith("FOR UPDATE")
        assert seen[1].endswith("FOR UPDATE")
        await session.rollback()

    @pytest.mark.asyncio
    async def test_second_locker_waits_for_commit(self):
        session = FakeSession(profiles={"selam": make_profile()})
        order: list[str] = []

        async def writer(name: str, on: date):
            state = await connector.load_profile(session, "selam", for_update=True)
            order.append(f"{name} loaded")
            await asyncio.sleep(0.01)
            await connector.save_profile(session, ledger.append_entry(state, on, 79.0))
            order.append(f"{name} saved")

        await asyncio.gather(writer("a", date(2026, 3, 1)), writer("b", date(2026, 3, 2)))
        assert order == ["a loaded", "a saved", "b loaded", "b saved"]
        assert session.stored("selam").weight_history == {
            date(2026, 3, 1): 79.0,
            date(2026, 3, 2): 79.0,
        }


class TestInsertProfile:
    @pytest.mark.asyncio
    async def test_insert_new(self):
        session = FakeSession()
        assert await connector.insert_profile(session, make_profile()) is True
        assert session.stored("selam").start_weight == 80.0

    @pytest.mark.asyncio
    async def test_insert_existing_keeps_stored(self):
        session = FakeSession(profiles={"selam": make_profile()})
        assert await connector.insert_profile(session, make_profile(start_weight=95.0)) is False
        assert session.stored("selam").start_weight == 80.0
