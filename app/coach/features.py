"""Pure stateless metric functions — math only, never raises."""

from __future__ import annotations

import math
from datetime import date, timedelta
from typing import Mapping

from app.config import settings
from app.coach.models import (
    AdherenceSnapshot,
    BmiCategory,
    BmiSnapshot,
    DailyCompletion,
    ProgressSnapshot,
    Trend,
)

ADHERENCE_WINDOW_DAYS = 7

# Ascending upper bounds, half-open: bmi < bound -> category
BMI_THRESHOLDS: tuple[tuple[float, BmiCategory], ...] = (
    (18.5, BmiCategory.underweight),
    (25.0, BmiCategory.healthy),
    (30.0, BmiCategory.overweight),
)


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    """Clamp `value` into [low, high]."""
    return min(high, max(low, value))


def round_half_up(value: float) -> int:
    """Round to nearest integer, .5 away from zero for positives."""
    return int(math.floor(value + 0.5))


def _is_positive(value: float | None) -> bool:
    return value is not None and math.isfinite(value) and value > 0


# ---------------------------------------------------------------------------
# Progress
# ---------------------------------------------------------------------------


def progress_percent(start: float, target: float, current: float) -> float:
    """Share of the planned loss achieved so far, unclamped.

    Zero when the target is at or above the start weight.
    """
    total_to_lose = start - target
    if total_to_lose <= 0:
        return 0.0
    return ((start - current) / total_to_lose) * 100.0


def compute_progress(start: float, target: float, current: float) -> ProgressSnapshot:
    """Loss so far, clamped bar value and trend relative to the start weight.

    Weight gain yields a negative lost_so_far, OFF_TRACK and a zero bar.
    """
    pct = progress_percent(start, target, current)
    return ProgressSnapshot(
        start_weight=start,
        target_weight=target,
        current_weight=current,
        lost_so_far=start - current,
        progress_percent=pct,
        visual_progress_percent=clamp(pct),
        trend=Trend.on_track if current < start else Trend.off_track,
    )


def total_loss_percent(start: float, current: float) -> float:
    """Loss as a percentage of the start weight, one decimal."""
    if not _is_positive(start):
        return 0.0
    return round(((start - current) / start) * 100.0, 1)


# ---------------------------------------------------------------------------
# BMI
# ---------------------------------------------------------------------------


def bmi_category(bmi: float) -> BmiCategory:
    for bound, category in BMI_THRESHOLDS:
        if bmi < bound:
            return category
    return BmiCategory.obese


def ideal_weight_range(height_cm: float) -> tuple[float, float]:
    """Weights (kg, one decimal) whose BMI lands in the ideal band."""
    if not _is_positive(height_cm):
        return (0.0, 0.0)
    height_m = height_cm / 100.0
    return (
        round(settings.ideal_bmi_low * height_m * height_m, 1),
        round(settings.ideal_bmi_high * height_m * height_m, 1),
    )


def gauge_position(bmi: float) -> float:
    """Map the configured BMI scale (10–40 by default) onto 0–100."""
    span = settings.bmi_gauge_max - settings.bmi_gauge_min
    if span <= 0:
        return 0.0
    return clamp(((bmi - settings.bmi_gauge_min) / span) * 100.0)


def evaluate_bmi(weight_kg: float | None, height_cm: float | None) -> BmiSnapshot:
    """Classify a weight/height pair.

    Degenerate input (missing, non-positive or non-finite) gives bmi 0 and
    UNDEFINED instead of NaN or an exception.
    """
    if not _is_positive(weight_kg) or not _is_positive(height_cm):
        return BmiSnapshot(
            bmi=0.0,
            category=BmiCategory.undefined,
            ideal_weight_range=(0.0, 0.0),
            gauge_position=0.0,
        )

    height_m = height_cm / 100.0
    bmi = weight_kg / (height_m * height_m)
    return BmiSnapshot(
        bmi=round(bmi, 1),
        category=bmi_category(bmi),
        ideal_weight_range=ideal_weight_range(height_cm),
        gauge_position=gauge_position(bmi),
    )


# ---------------------------------------------------------------------------
# Adherence
# ---------------------------------------------------------------------------


def window_dates(reference: date, window_days: int = ADHERENCE_WINDOW_DAYS) -> list[date]:
    """Inclusive [reference - (window_days - 1), reference], ascending."""
    return [reference - timedelta(days=i) for i in range(window_days - 1, -1, -1)]


def window_stats(
    daily_history: Mapping[date, DailyCompletion],
    reference: date,
    window_days: int = ADHERENCE_WINDOW_DAYS,
) -> AdherenceSnapshot:
    """Diet / workout success over the trailing window ending at `reference`.

    A date without a record counts as not completed on both goals.
    """
    days = window_dates(reference, window_days)
    diet_count = 0
    workout_count = 0
    for day in days:
        record = daily_history.get(day)
        if record is None:
            continue
        if record.diet_completed:
            diet_count += 1
        if record.workout_completed:
            workout_count += 1

    def _pct(count: int) -> int:
        if window_days <= 0:
            return 0
        return int(clamp(round_half_up(count / window_days * 100)))

    return AdherenceSnapshot(
        window_start=days[0] if days else reference,
        window_end=reference,
        window_days=window_days,
        diet_success_count=diet_count,
        workout_success_count=workout_count,
        diet_percent=_pct(diet_count),
        workout_percent=_pct(workout_count),
        missed_diet_days=max(window_days - diet_count, 0),
        missed_workout_days=max(window_days - workout_count, 0),
    )
