"""Logging endpoints: weight, diet, workout and water check-ins.

Each request locks the profile row, applies one pure mutation and saves the
returned state in the same transaction, so writes to one profile never
interleave. Rejected input rolls back and leaves the stored profile untouched.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth import verify_api_key
from app.db import get_session
from app.coach import checkins, connector, hydration, ledger
from app.coach.deps import get_profile_for_update, today_local
from app.coach.errors import InvalidInput
from app.coach.models import (
    CreateProfileRequest,
    LogWeightRequest,
    ProfileState,
    TargetWeightRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/coach", tags=["log"], dependencies=[Depends(verify_api_key)])


async def _apply(
    session: AsyncSession,
    state: ProfileState,
    mutate: Callable[[ProfileState], ProfileState],
) -> ProfileState:
    try:
        updated = mutate(state)
    except InvalidInput as e:
        logger.warning("Rejected update for %s: %s", state.user_id, e)
        await session.rollback()
        raise HTTPException(status_code=422, detail=str(e))
    await connector.save_profile(session, updated)
    return updated


@router.post("/profiles", response_model=ProfileState, status_code=201)
async def create_profile(
    body: CreateProfileRequest,
    session: AsyncSession = Depends(get_session),
) -> ProfileState:
    try:
        state = ledger.create_profile(
            user_id=body.user_id,
            start_weight=body.start_weight,
            target_weight=body.target_weight,
            height_cm=body.height_cm,
            name=body.name,
            age=body.age,
            baseline_weight=body.baseline_weight,
        )
    except InvalidInput as e:
        raise HTTPException(status_code=422, detail=str(e))
    if not await connector.insert_profile(session, state):
        raise HTTPException(status_code=409, detail=f"Profile already exists: {body.user_id}")
    logger.info("Created profile %s", state.user_id)
    return state


@router.post("/profiles/{user_id}/weight", response_model=ProfileState)
async def log_weight(
    body: LogWeightRequest,
    state: ProfileState = Depends(get_profile_for_update),
    session: AsyncSession = Depends(get_session),
) -> ProfileState:
    day = body.day or today_local()
    logger.info("Logging weight for %s on %s", state.user_id, day)
    return await _apply(session, state, lambda s: ledger.append_entry(s, day, body.weight))


@router.put("/profiles/{user_id}/target", response_model=ProfileState)
async def set_target(
    body: TargetWeightRequest,
    state: ProfileState = Depends(get_profile_for_update),
    session: AsyncSession = Depends(get_session),
) -> ProfileState:
    return await _apply(session, state, lambda s: ledger.set_target_weight(s, body.target_weight))


@router.post("/profiles/{user_id}/diet/{on}/toggle", response_model=ProfileState)
async def toggle_diet(
    on: date,
    state: ProfileState = Depends(get_profile_for_update),
    session: AsyncSession = Depends(get_session),
) -> ProfileState:
    return await _apply(session, state, lambda s: checkins.toggle_diet_completed(s, on))


@router.post("/profiles/{user_id}/workout/{on}/toggle", response_model=ProfileState)
async def toggle_workout(
    on: date,
    state: ProfileState = Depends(get_profile_for_update),
    session: AsyncSession = Depends(get_session),
) -> ProfileState:
    return await _apply(session, state, lambda s: checkins.toggle_workout_completed(s, on))


@router.post("/profiles/{user_id}/water/{on}/{hour}/toggle", response_model=ProfileState)
async def toggle_water(
    on: date,
    hour: int,
    state: ProfileState = Depends(get_profile_for_update),
    session: AsyncSession = Depends(get_session),
) -> ProfileState:
    return await _apply(session, state, lambda s: hydration.toggle(s, on, hour))
