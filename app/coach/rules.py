"""Weekly coaching rules: static config, evaluated in order.

Each CoachingRule ties a condition on (diet_percent, workout_percent) to a
category. Ranges overlap, so the first matching rule wins; the last rule
always matches.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from app.coach.models import CoachingCategory, Recommendation

SEVERE_THRESHOLD = 50
FOCUS_THRESHOLD = 60


@dataclass(frozen=True, slots=True)
class CoachingRule:
    category: CoachingCategory
    matches: Callable[[float, float], bool]
    label: str = ""


COACHING_RULES: tuple[CoachingRule, ...] = (
    CoachingRule(
        category=CoachingCategory.reset,
        matches=lambda diet, workout: diet < SEVERE_THRESHOLD and workout < SEVERE_THRESHOLD,
        label=f"Diet and workout both below {SEVERE_THRESHOLD}%",
    ),
    CoachingRule(
        category=CoachingCategory.kitchen_focus,
        matches=lambda diet, workout: diet < FOCUS_THRESHOLD,
        label=f"Diet below {FOCUS_THRESHOLD}%",
    ),
    CoachingRule(
        category=CoachingCategory.move_more,
        matches=lambda diet, workout: workout < FOCUS_THRESHOLD,
        label=f"Workout below {FOCUS_THRESHOLD}%",
    ),
    CoachingRule(
        category=CoachingCategory.level_up,
        matches=lambda diet, workout: True,
        label="Everything on target",
    ),
)


def is_severe(diet_percent: float, workout_percent: float) -> bool:
    """Alert vs success indicator; does not influence the category."""
    return diet_percent < SEVERE_THRESHOLD or workout_percent < SEVERE_THRESHOLD


def classify(diet_percent: float, workout_percent: float) -> Recommendation:
    severe = is_severe(diet_percent, workout_percent)
    for rule in COACHING_RULES:
        if rule.matches(diet_percent, workout_percent):
            return Recommendation(category=rule.category, severe=severe)
    raise AssertionError("COACHING_RULES must end with a catch-all rule")


def list_rules() -> list[CoachingRule]:
    return list(COACHING_RULES)
