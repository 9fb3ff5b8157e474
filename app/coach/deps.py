"""Shared request dependencies: profile lookup (plain or locked) and the local clock."""

from __future__ import annotations

from datetime import date, datetime
from zoneinfo import ZoneInfo

from fastapi import Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.db import get_session
from app.coach import connector
from app.coach.models import ProfileState


def local_now() -> datetime:
    return datetime.now(ZoneInfo(settings.default_tz))


def today_local() -> date:
    return local_now().date()


async def get_profile(
    user_id: str,
    session: AsyncSession = Depends(get_session),
) -> ProfileState:
    state = await connector.load_profile(session, user_id)
    if state is None:
        raise HTTPException(status_code=404, detail=f"Unknown profile: {user_id}")
    return state


async def get_profile_for_update(
    user_id: str,
    session: AsyncSession = Depends(get_session),
) -> ProfileState:
    """Like get_profile, but keeps the row locked until the route saves.

    Routes using this must share the same request session and end with a
    commit (save) or rollback.
    """
    state = await connector.load_profile(session, user_id, for_update=True)
    if state is None:
        await session.rollback()
        raise HTTPException(status_code=404, detail=f"Unknown profile: {user_id}")
    return state
