"""Snapshot builders — the service layer in front of rendering.

Takes a ProfileState, runs every calculator, returns immutable envelopes.
Graceful degradation: thin or odd data produces warnings, never raises.
"""

from __future__ import annotations

from datetime import date

from app.config import settings
from app.coach import features, hydration, ledger, rules
from app.coach.localization import render_recommendation
from app.coach.models import (
    DashboardEnvelope,
    Language,
    ProfileState,
    ProgressSnapshot,
    WeeklyReport,
)


def progress_for(state: ProfileState) -> ProgressSnapshot:
    return features.compute_progress(state.start_weight, state.target_weight, ledger.current_weight(state))


def _warnings(state: ProfileState) -> list[str]:
    warnings: list[str] = []
    if not state.weight_history:
        warnings.append("No weight logged yet; showing the profile weight.")
    if state.target_weight >= state.start_weight:
        warnings.append("Target weight is not below the start weight; progress stays at 0%.")
    return warnings


def build_dashboard(
    state: ProfileState,
    today: date,
    language: Language = Language.english,
    current_hour: int | None = None,
    chart_entries: int | None = None,
) -> DashboardEnvelope:
    n = chart_entries if chart_entries is not None else settings.chart_recent_entries
    current = ledger.current_weight(state)
    adherence = features.window_stats(state.daily_history, today)
    recommendation = rules.classify(adherence.diet_percent, adherence.workout_percent)

    return DashboardEnvelope(
        user_id=state.user_id,
        day=today,
        language=language,
        progress=progress_for(state),
        bmi=features.evaluate_bmi(current, state.height_cm),
        adherence=adherence,
        recommendation=render_recommendation(recommendation, language),
        hydration=hydration.hydration_snapshot(state, today, current_hour),
        chart=ledger.chart_points(ledger.recent(state, n, today), "short"),
        warnings=_warnings(state),
    )


def build_weekly_report(
    state: ProfileState,
    today: date,
    language: Language = Language.english,
) -> WeeklyReport:
    adherence = features.window_stats(state.daily_history, today)
    recommendation = rules.classify(adherence.diet_percent, adherence.workout_percent)
    current = ledger.current_weight(state)
    total_loss = state.start_weight - current
    entries = ledger.ordered_entries(state)[-features.ADHERENCE_WINDOW_DAYS:]

    return WeeklyReport(
        user_id=state.user_id,
        window_start=adherence.window_start,
        window_end=adherence.window_end,
        adherence=adherence,
        recommendation=render_recommendation(recommendation, language),
        total_loss_kg=round(total_loss, 1),
        total_loss_percent=features.total_loss_percent(state.start_weight, current),
        is_loss=total_loss > 0,
        chart=ledger.chart_points(entries, "iso"),
    )
