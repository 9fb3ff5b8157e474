"""Weight ledger: dated weight entries plus start / target weight.

Every mutation takes a ProfileState and returns a new one; validation runs
before anything is copied, so a rejected call leaves the caller's state as is.
"""

from __future__ import annotations

import logging
import math
from datetime import date

from app.coach.errors import InvalidInput, InvalidWeight
from app.coach.models import ChartPoint, ProfileState, WeightEntry

logger = logging.getLogger(__name__)


def _require_positive(value: float | None, name: str, exc: type[InvalidInput] = InvalidInput) -> float:
    if value is None or isinstance(value, bool):
        raise exc(f"{name} is required")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise exc(f"{name} must be a number, got {value!r}")
    if not math.isfinite(number) or number <= 0:
        raise exc(f"{name} must be a positive finite number, got {value!r}")
    return number


def create_profile(
    user_id: str,
    start_weight: float,
    target_weight: float,
    height_cm: float,
    name: str = "",
    age: int | None = None,
    baseline_weight: float | None = None,
) -> ProfileState:
    """Build a fresh profile. start_weight is fixed from here on."""
    start = _require_positive(start_weight, "start_weight", InvalidWeight)
    target = _require_positive(target_weight, "target_weight", InvalidWeight)
    height = _require_positive(height_cm, "height_cm")
    baseline = start
    if baseline_weight is not None:
        baseline = _require_positive(baseline_weight, "baseline_weight", InvalidWeight)
    return ProfileState(
        user_id=user_id,
        name=name,
        age=age,
        height_cm=height,
        start_weight=start,
        target_weight=target,
        baseline_weight=baseline,
    )


def append_entry(state: ProfileState, on: date, weight: float) -> ProfileState:
    """Record `weight` for `on`, replacing any entry already logged that day."""
    value = _require_positive(weight, "weight", InvalidWeight)
    if on in state.weight_history:
        logger.info("Overwriting weight for %s on %s", state.user_id, on)
    history = {**state.weight_history, on: value}
    return state.model_copy(update={"weight_history": history})


def log_weight(state: ProfileState, weight: float, today: date) -> ProfileState:
    return append_entry(state, today, weight)


def set_target_weight(state: ProfileState, target_weight: float) -> ProfileState:
    target = _require_positive(target_weight, "target_weight", InvalidWeight)
    return state.model_copy(update={"target_weight": target})


def ordered_entries(state: ProfileState) -> list[WeightEntry]:
    """All entries, ascending by date."""
    return [WeightEntry(day=d, weight=w) for d, w in sorted(state.weight_history.items())]


def current_weight(state: ProfileState) -> float:
    """Latest logged weight, or the profile baseline while nothing is logged."""
    if not state.weight_history:
        return state.baseline_weight
    latest = max(state.weight_history)
    return state.weight_history[latest]


def recent(state: ProfileState, n: int, today: date | None = None) -> list[WeightEntry]:
    """Last `n` entries ascending.

    An empty history yields one synthetic start point at the current weight
    so a chart always has something to draw.
    """
    if n <= 0:
        return []
    entries = ordered_entries(state)
    if not entries:
        return [WeightEntry(day=today or date.today(), weight=current_weight(state), is_start=True)]
    return entries[-n:]


def chart_points(entries: list[WeightEntry], label_format: str = "short") -> list[ChartPoint]:
    """Label entries for charting.

    "short" gives M/D (dashboard), "iso" gives MM-DD (weekly report).
    The synthetic start point is labelled "Start".
    """
    points: list[ChartPoint] = []
    for entry in entries:
        if entry.is_start:
            label = "Start"
        elif label_format == "iso":
            label = entry.day.isoformat()[5:]
        else:
            label = f"{entry.day.month}/{entry.day.day}"
        points.append(ChartPoint(label=label, weight=entry.weight))
    return points
