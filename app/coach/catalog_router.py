"""Catalog endpoint: thresholds, schedule and categories for clients."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from app.auth import verify_api_key
from app.config import settings
from app.coach import features, hydration, rules
from app.coach.models import BmiCategory, CoachingCategory, Language

router = APIRouter(prefix="/coach", tags=["catalog"], dependencies=[Depends(verify_api_key)])


@router.get("/catalog")
async def get_catalog() -> dict:
    """Return the fixed constants the engine works with.

    Clients use this to label gauges and slots without hardcoding
    thresholds of their own.
    """
    return {
        "bmi": {
            "thresholds": [
                {"below": bound, "category": category.value} for bound, category in features.BMI_THRESHOLDS
            ],
            "top_category": BmiCategory.obese.value,
            "gauge": {"min": settings.bmi_gauge_min, "max": settings.bmi_gauge_max},
            "ideal_bmi": {"low": settings.ideal_bmi_low, "high": settings.ideal_bmi_high},
        },
        "adherence": {"window_days": features.ADHERENCE_WINDOW_DAYS},
        "coaching": {
            "rules": [{"category": r.category.value, "label": r.label} for r in rules.list_rules()],
            "categories": [c.value for c in CoachingCategory],
            "severe_below": rules.SEVERE_THRESHOLD,
        },
        "hydration": {
            "schedule": [
                {
                    "hour": hour,
                    "local_label": hydration.local_time_label(hour),
                    "period": hydration.period_label(hour).value,
                }
                for hour in hydration.SCHEDULE
            ],
        },
        "languages": [lang.value for lang in Language],
        "timezone": settings.default_tz,
    }
