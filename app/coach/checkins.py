"""Daily diet / workout check-ins.

Toggles flip one flag for one date; a missing record is treated as both
flags false and created on first toggle.
"""

from __future__ import annotations

import logging
from datetime import date

from app.coach.models import DailyCompletion, ProfileState

logger = logging.getLogger(__name__)


def completion_for(state: ProfileState, on: date) -> DailyCompletion:
    return state.daily_history.get(on) or DailyCompletion()


def _toggle(state: ProfileState, on: date, field: str) -> ProfileState:
    record = completion_for(state, on)
    flipped = record.model_copy(update={field: not getattr(record, field)})
    logger.info("%s %s on %s -> %s", state.user_id, field, on, getattr(flipped, field))
    history = {**state.daily_history, on: flipped}
    return state.model_copy(update={"daily_history": history})


def toggle_diet_completed(state: ProfileState, on: date) -> ProfileState:
    return _toggle(state, on, "diet_completed")


def toggle_workout_completed(state: ProfileState, on: date) -> ProfileState:
    return _toggle(state, on, "workout_completed")
