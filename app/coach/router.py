"""Coach HTTP router: read-only snapshots and AI advice."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query

from app.auth import verify_api_key
from app.coach import advice, builders, features, hydration, ledger, rules
from app.coach.deps import get_profile, local_now, today_local
from app.coach.localization import render_recommendation
from app.coach.models import (
    AdherenceSnapshot,
    AdviceRequest,
    AdviceResponse,
    BmiSnapshot,
    DashboardEnvelope,
    HydrationSnapshot,
    Language,
    LocalizedRecommendation,
    ProfileState,
    ProgressSnapshot,
    WeeklyReport,
)

router = APIRouter(prefix="/coach", tags=["coach"], dependencies=[Depends(verify_api_key)])


def _current_hour(on: date) -> int | None:
    """Current local hour when `on` is today, else None (no current slot)."""
    now = local_now()
    return now.hour if now.date() == on else None


# ---------------------------------------------------------------------------
# Stateless
# ---------------------------------------------------------------------------


@router.get("/bmi", response_model=BmiSnapshot)
async def bmi_calculator(
    weight: float = Query(..., description="Weight (kg)"),
    height: float = Query(..., description="Height (cm)"),
) -> BmiSnapshot:
    return features.evaluate_bmi(weight, height)


# ---------------------------------------------------------------------------
# /coach/profiles/{user_id}/...
# ---------------------------------------------------------------------------


@router.get("/profiles/{user_id}", response_model=ProfileState)
async def profile_detail(
    state: ProfileState = Depends(get_profile),
) -> ProfileState:
    return state


@router.get("/profiles/{user_id}/dashboard", response_model=DashboardEnvelope)
async def dashboard(
    state: ProfileState = Depends(get_profile),
    lang: Language = Query(default=Language.english, description="Text language"),
) -> DashboardEnvelope:
    today = today_local()
    return builders.build_dashboard(state, today, lang, current_hour=_current_hour(today))


@router.get("/profiles/{user_id}/progress", response_model=ProgressSnapshot)
async def progress(
    state: ProfileState = Depends(get_profile),
) -> ProgressSnapshot:
    return builders.progress_for(state)


@router.get("/profiles/{user_id}/bmi", response_model=BmiSnapshot)
async def profile_bmi(
    state: ProfileState = Depends(get_profile),
) -> BmiSnapshot:
    return features.evaluate_bmi(ledger.current_weight(state), state.height_cm)


@router.get("/profiles/{user_id}/adherence", response_model=AdherenceSnapshot)
async def adherence(
    state: ProfileState = Depends(get_profile),
    on: date | None = Query(default=None, description="Last day of the 7-day window (default: today)"),
) -> AdherenceSnapshot:
    return features.window_stats(state.daily_history, on or today_local())


@router.get("/profiles/{user_id}/recommendation", response_model=LocalizedRecommendation)
async def recommendation(
    state: ProfileState = Depends(get_profile),
    on: date | None = Query(default=None, description="Last day of the 7-day window (default: today)"),
    lang: Language = Query(default=Language.english),
) -> LocalizedRecommendation:
    stats = features.window_stats(state.daily_history, on or today_local())
    return render_recommendation(rules.classify(stats.diet_percent, stats.workout_percent), lang)


@router.get("/profiles/{user_id}/hydration", response_model=HydrationSnapshot)
async def hydration_status(
    state: ProfileState = Depends(get_profile),
    on: date | None = Query(default=None, description="Date (default: today)"),
) -> HydrationSnapshot:
    day = on or today_local()
    return hydration.hydration_snapshot(state, day, _current_hour(day))


@router.get("/profiles/{user_id}/weekly-report", response_model=WeeklyReport)
async def weekly_report(
    state: ProfileState = Depends(get_profile),
    lang: Language = Query(default=Language.english),
) -> WeeklyReport:
    return builders.build_weekly_report(state, today_local(), lang)


@router.post("/profiles/{user_id}/advice", response_model=AdviceResponse)
async def ask_advice(
    body: AdviceRequest,
    state: ProfileState = Depends(get_profile),
) -> AdviceResponse:
    query = body.query.strip()
    if not query:
        raise HTTPException(status_code=422, detail="Query must not be blank")
    context = advice.build_context_summary(state, ledger.current_weight(state))
    return await advice.get_health_advice(query, body.language, context)
