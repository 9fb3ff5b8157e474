"""Hourly water check-ins over a fixed 12-slot schedule (08:00–19:00)."""

from __future__ import annotations

import logging
from datetime import date

from app.coach.errors import InvalidSlot
from app.coach.features import round_half_up
from app.coach.models import DayPeriod, HydrationSnapshot, ProfileState, SlotStatus

logger = logging.getLogger(__name__)

SCHEDULE: tuple[int, ...] = tuple(range(8, 20))

# Local clock starts six hours after the international one
LOCAL_HOUR_OFFSET = 6


def local_time_label(hour: int) -> int:
    """12-hour local label for an international hour: 8 -> 2, 18 -> 12, 19 -> 1."""
    local = hour - LOCAL_HOUR_OFFSET
    if local <= 0:
        local += 12
    if local > 12:
        local -= 12
    return local


def period_label(hour: int) -> DayPeriod:
    """Period of day, from the international hour."""
    if hour < 12:
        return DayPeriod.morning
    if hour < 17:
        return DayPeriod.afternoon
    return DayPeriod.evening


def completed_hours(state: ProfileState, on: date) -> set[int]:
    return {h for h in state.water_log.get(on, []) if h in SCHEDULE}


def toggle(state: ProfileState, on: date, hour: int) -> ProfileState:
    """Flip one slot for `on`. Hours outside SCHEDULE raise InvalidSlot."""
    if isinstance(hour, bool) or hour not in SCHEDULE:
        logger.warning("Rejected water slot %r for %s", hour, state.user_id)
        raise InvalidSlot(hour)
    done = completed_hours(state, on)
    if hour in done:
        done.discard(hour)
    else:
        done.add(hour)
    log = {**state.water_log, on: sorted(done)}
    if not done:
        del log[on]
    return state.model_copy(update={"water_log": log})


def completion_ratio(state: ProfileState, on: date) -> float:
    return len(completed_hours(state, on)) / len(SCHEDULE)


def hydration_snapshot(
    state: ProfileState,
    on: date,
    current_hour: int | None = None,
) -> HydrationSnapshot:
    """Per-slot status for `on`. current_hour marks the current / past slots."""
    done = completed_hours(state, on)
    slots = [
        SlotStatus(
            hour=hour,
            local_label=local_time_label(hour),
            period=period_label(hour),
            completed=hour in done,
            is_current=current_hour is not None and hour == current_hour,
            is_past=current_hour is not None and hour < current_hour,
        )
        for hour in SCHEDULE
    ]
    ratio = completion_ratio(state, on)
    return HydrationSnapshot(
        day=on,
        completed_count=len(done),
        total_slots=len(SCHEDULE),
        completion_ratio=ratio,
        progress_percent=round_half_up(ratio * 100),
        goal_reached=len(done) == len(SCHEDULE),
        per_slot_status=slots,
    )
