"""Profile store: async access to coach_profiles.

Table: coach_profiles
  user_id (text, primary key), state (JSONB), updated_at (timestamptz)

The state column holds ProfileState.model_dump_json(); dates become
ISO strings and are parsed back by model_validate.

Mutations load with for_update=True so the row stays locked until the
save commits; concurrent writers to one profile run one after another.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import ValidationError
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from app.coach.models import ProfileState

logger = logging.getLogger(__name__)


async def load_profile(
    session: AsyncSession,
    user_id: str,
    for_update: bool = False,
) -> ProfileState | None:
    """Fetch one profile. Returns None when missing or unreadable.

    With for_update the row is locked (SELECT ... FOR UPDATE) until the
    session commits or rolls back.
    """
    sql = "SELECT user_id, state FROM coach_profiles WHERE user_id = :user_id"
    if for_update:
        sql += " FOR UPDATE"
    result = await session.execute(text(sql), {"user_id": user_id})
    row = result.fetchone()
    if row is None:
        return None
    data: dict[str, Any] = dict(zip(result.keys(), row))
    raw = data.get("state")
    if isinstance(raw, str):
        raw = json.loads(raw)
    try:
        return ProfileState.model_validate(raw)
    except ValidationError:
        logger.exception("Stored profile for %s does not validate", user_id)
        return None


async def save_profile(session: AsyncSession, state: ProfileState) -> None:
    """Upsert the whole profile and commit.

    Callers that derived `state` from a locked load keep the read-modify-write
    atomic; the commit releases the row lock.
    """
    await session.execute(
        text(
            "INSERT INTO coach_profiles (user_id, state, updated_at) "
            "VALUES (:user_id, CAST(:state AS JSONB), now()) "
            "ON CONFLICT (user_id) DO UPDATE "
            "SET state = EXCLUDED.state, updated_at = EXCLUDED.updated_at"
        ),
        {"user_id": state.user_id, "state": state.model_dump_json()},
    )
    await session.commit()
    logger.debug("Saved profile %s", state.user_id)


async def insert_profile(session: AsyncSession, state: ProfileState) -> bool:
    """Insert a new profile. Returns False, writing nothing, if user_id is taken."""
    result = await session.execute(
        text(
            "INSERT INTO coach_profiles (user_id, state, updated_at) "
            "VALUES (:user_id, CAST(:state AS JSONB), now()) "
            "ON CONFLICT (user_id) DO NOTHING "
            "RETURNING user_id"
        ),
        {"user_id": state.user_id, "state": state.model_dump_json()},
    )
    created = result.fetchone() is not None
    await session.commit()
    return created
