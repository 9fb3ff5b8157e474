"""Profile state and snapshot contracts — Pydantic v2 models."""

from __future__ import annotations

import uuid
from datetime import date, datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Language(str, Enum):
    english = "en"
    amharic = "am"


class Trend(str, Enum):
    on_track = "ON_TRACK"
    off_track = "OFF_TRACK"


class BmiCategory(str, Enum):
    undefined = "UNDEFINED"
    underweight = "UNDERWEIGHT"
    healthy = "HEALTHY"
    overweight = "OVERWEIGHT"
    obese = "OBESE"


class CoachingCategory(str, Enum):
    reset = "RESET"
    kitchen_focus = "KITCHEN_FOCUS"
    move_more = "MOVE_MORE"
    level_up = "LEVEL_UP"


class DayPeriod(str, Enum):
    morning = "MORNING"
    afternoon = "AFTERNOON"
    evening = "EVENING"


# ---------------------------------------------------------------------------
# State
# ---------------------------------------------------------------------------


class WeightEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    day: date
    weight: float  # kg
    is_start: bool = False  # Synthetic chart point for an empty history


class DailyCompletion(BaseModel):
    model_config = ConfigDict(frozen=True)

    diet_completed: bool = False
    workout_completed: bool = False


class ProfileState(BaseModel):
    """Everything persisted for one user. Operations return a new instance."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    name: str = ""
    age: int | None = None
    height_cm: float
    start_weight: float
    target_weight: float
    baseline_weight: float  # Current weight while weight_history is empty
    weight_history: dict[date, float] = Field(default_factory=dict)
    daily_history: dict[date, DailyCompletion] = Field(default_factory=dict)
    water_log: dict[date, list[int]] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Snapshots
# ---------------------------------------------------------------------------


class ProgressSnapshot(BaseModel):
    start_weight: float
    target_weight: float
    current_weight: float
    lost_so_far: float
    progress_percent: float  # Unclamped ratio, may be negative or > 100
    visual_progress_percent: float  # 0–100
    trend: Trend


class BmiSnapshot(BaseModel):
    bmi: float  # One decimal
    category: BmiCategory
    ideal_weight_range: tuple[float, float]
    gauge_position: float  # 0–100


class AdherenceSnapshot(BaseModel):
    window_start: date
    window_end: date
    window_days: int
    diet_success_count: int
    workout_success_count: int
    diet_percent: int
    workout_percent: int
    missed_diet_days: int
    missed_workout_days: int


class Recommendation(BaseModel):
    category: CoachingCategory
    severe: bool


class LocalizedRecommendation(Recommendation):
    language: Language
    title: str
    text: str


class SlotStatus(BaseModel):
    hour: int  # International hour, 8–19
    local_label: int  # 1–12
    period: DayPeriod
    completed: bool
    is_current: bool = False
    is_past: bool = False


class HydrationSnapshot(BaseModel):
    day: date
    completed_count: int
    total_slots: int
    completion_ratio: float  # 0–1
    progress_percent: int
    goal_reached: bool
    per_slot_status: list[SlotStatus] = Field(default_factory=list)


class ChartPoint(BaseModel):
    label: str
    weight: float


class DashboardEnvelope(BaseModel):
    """Top-level dashboard response, always constructible."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    user_id: str
    day: date
    language: Language
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    progress: ProgressSnapshot
    bmi: BmiSnapshot
    adherence: AdherenceSnapshot
    recommendation: LocalizedRecommendation
    hydration: HydrationSnapshot
    chart: list[ChartPoint] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class WeeklyReport(BaseModel):
    user_id: str
    window_start: date
    window_end: date
    adherence: AdherenceSnapshot
    recommendation: LocalizedRecommendation
    total_loss_kg: float
    total_loss_percent: float
    is_loss: bool
    chart: list[ChartPoint] = Field(default_factory=list)


class AdviceResponse(BaseModel):
    text: str
    status: str  # "ok" | "quota" | "error" | "not_configured"


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class CreateProfileRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    user_id: str = Field(min_length=1)
    name: str = ""
    age: int | None = None
    height_cm: float
    start_weight: float
    target_weight: float
    baseline_weight: float | None = None


class LogWeightRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    weight: float
    # Sent as "date"; defaults to today in the configured timezone
    day: date | None = Field(default=None, alias="date")


class TargetWeightRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    target_weight: float


class AdviceRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    query: str = Field(min_length=1)
    language: Language = Language.english
