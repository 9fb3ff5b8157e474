"""Shared fixtures for the test suite."""

from __future__ import annotations

import asyncio
import json
from datetime import date, timedelta
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.db import get_session
from app.main import app
from app.coach.models import DailyCompletion, ProfileState


# ---------------------------------------------------------------------------
# Fake DB session (no real Postgres needed)
# ---------------------------------------------------------------------------

class FakeSession:
    """In-memory stand-in for AsyncSession, understands the coach_profiles queries.

    SELECT ... FOR UPDATE takes a per-user lock held by the calling task until
    it commits or rolls back, like a Postgres row lock. `latency` makes every
    statement yield to the event loop for that many seconds.
    """

    def __init__(self, profiles: dict[str, ProfileState] | None = None):
        # user_id -> JSON text, as asyncpg hands back JSONB without a codec
        self.profiles: dict[str, str] = {
            uid: state.model_dump_json() for uid, state in (profiles or {}).items()
        }
        self.commits = 0
        self.rollbacks = 0
        self.latency = 0.0
        self._row_locks: dict[str, asyncio.Lock] = {}
        self._held: dict[asyncio.Task | None, list[asyncio.Lock]] = {}

    async def execute(self, stmt, params=None):
        sql = str(stmt).strip().upper()
        params = params or {}
        if self.latency:
            await asyncio.sleep(self.latency)
        if sql.startswith("SELECT"):
            user_id = params["user_id"]
            if sql.endswith("FOR UPDATE") and user_id in self.profiles:
                lock = self._row_locks.setdefault(user_id, asyncio.Lock())
                await lock.acquire()
                self._held.setdefault(asyncio.current_task(), []).append(lock)
            raw = self.profiles.get(user_id)
            rows = [] if raw is None else [{"user_id": user_id, "state": raw}]
            return FakeResult(rows)
        if sql.startswith("INSERT"):
            user_id = params["user_id"]
            if "DO NOTHING" in sql:
                if user_id in self.profiles:
                    return FakeResult([])
                self.profiles[user_id] = params["state"]
                return FakeResult([{"user_id": user_id}])
            self.profiles[user_id] = params["state"]
            return FakeResult([])
        raise AssertionError(f"Unexpected statement: {stmt}")

    def _release(self):
        for lock in self._held.pop(asyncio.current_task(), []):
            lock.release()

    async def commit(self):
        self.commits += 1
        self._release()

    async def rollback(self):
        self.rollbacks += 1
        self._release()

    def stored(self, user_id: str) -> ProfileState:
        return ProfileState.model_validate(json.loads(self.profiles[user_id]))

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        pass


class FakeResult:
    def __init__(self, rows: list[dict[str, Any]]):
        self._rows = rows
        self._keys = list(rows[0].keys()) if rows else []

    def keys(self):
        return self._keys

    def fetchone(self):
        if not self._rows:
            return None
        return tuple(self._rows[0][k] for k in self._keys)

    def fetchall(self):
        return [tuple(r[k] for k in self._keys) for r in self._rows]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def fake_session():
    """Return a FakeSession with no profiles (seed via .profiles in tests)."""
    return FakeSession()


@pytest.fixture()
def override_session(fake_session):
    """Override the FastAPI dependency so no real DB is needed."""
    async def _override():
        try:
            yield fake_session
        finally:
            fake_session._release()

    app.dependency_overrides[get_session] = _override
    yield fake_session
    app.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def client(override_session):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


def make_profile(
    user_id: str = "selam",
    start_weight: float = 80.0,
    target_weight: float = 60.0,
    height_cm: float = 165.0,
    **overrides: Any,
) -> ProfileState:
    """Helper to build a ProfileState with sensible defaults."""
    fields: dict[str, Any] = dict(
        user_id=user_id,
        name="Selam Tesfaye",
        age=32,
        height_cm=height_cm,
        start_weight=start_weight,
        target_weight=target_weight,
        baseline_weight=start_weight,
    )
    fields.update(overrides)
    return ProfileState(**fields)


def make_daily_history(
    end: date,
    diet_days: int,
    workout_days: int,
    window: int = 7,
) -> dict[date, DailyCompletion]:
    """Mark the first `diet_days` / `workout_days` days of the window ending at `end` as done."""
    days = [end - timedelta(days=i) for i in range(window - 1, -1, -1)]
    return {
        d: DailyCompletion(diet_completed=i < diet_days, workout_completed=i < workout_days)
        for i, d in enumerate(days)
    }
