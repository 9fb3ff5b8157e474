"""Static text tables: (language, category) -> prose.

The rule engine only returns categories; everything user-facing in words
lives here and can be swapped without touching coaching logic.
"""

from __future__ import annotations

from dataclasses import dataclass

from app.coach.models import CoachingCategory, Language, LocalizedRecommendation, Recommendation

DEFAULT_LANGUAGE = Language.english


@dataclass(frozen=True, slots=True)
class CoachingText:
    title: str
    text: str


COACHING_TEXT: dict[tuple[Language, CoachingCategory], CoachingText] = {
    (Language.english, CoachingCategory.reset): CoachingText(
        title="Reset & Restart",
        text=(
            "It looks like a tough week. For next week, focus solely on drinking 3L of water "
            "and eating a healthy breakfast. Ignore the rest until you build momentum."
        ),
    ),
    (Language.english, CoachingCategory.kitchen_focus): CoachingText(
        title="Kitchen Focus Needed",
        text=(
            "Your workouts are good, but the diet is slipping. Next week, try meal prepping "
            "on Sunday so you don't have to make decisions when you are hungry."
        ),
    ),
    (Language.english, CoachingCategory.move_more): CoachingText(
        title="Move More",
        text=(
            "Your nutrition is on point! The weight isn't moving because movement is low. "
            "Commit to just 15 minutes of walking daily next week."
        ),
    ),
    (Language.english, CoachingCategory.level_up): CoachingText(
        title="Level Up",
        text=(
            "Incredible week! You are crushing it. Next week, try adding 1kg weights to your "
            "workout or reducing your eating window by 1 hour."
        ),
    ),
    (Language.amharic, CoachingCategory.reset): CoachingText(
        title="እንደገና እንጀምር",
        text="ይህ ሳምንት ከባድ ነበር። ለሚቀጥለው ሳምንት በቀን 3 ሊትር ውሃ መጠጣት እና ጤናማ ቁርስ መብላት ላይ ብቻ ያተኩሩ።",
    ),
    (Language.amharic, CoachingCategory.kitchen_focus): CoachingText(
        title="አመጋገብ ላይ ትኩረት",
        text="ስፖርትዎ ጥሩ ነው፤ ነገር ግን አመጋገብዎ ክፍተት አለው። በሚቀጥለው ሳምንት ምግቦን ቀድመው ያዘጋጁ።",
    ),
    (Language.amharic, CoachingCategory.move_more): CoachingText(
        title="እንቅስቃሴ ይጨምሩ",
        text=(
            "አመጋገብዎ በጣም ጥሩ ነው! እንቅስቃሴ ስለሌለ ግን ክብደትዎ አልቀነሰም። "
            "በሚቀጥለው ሳምንት በቀን 15 ደቂቃ ለመራመድ ይሞክሩ።"
        ),
    ),
    (Language.amharic, CoachingCategory.level_up): CoachingText(
        title="በጣም ጎበዝ!",
        text="በጣም ውጤታማ ሳምንት ነበር። በሚቀጥለው ሳምንት የስፖርት ክብደት ይጨምሩ ወይም የመመገቢያ ሰዓትን በ 1 ሰዓት ይቀንሱ።",
    ),
}

# Advice failure class -> fallback shown instead of the AI answer
ADVICE_FALLBACKS: dict[tuple[Language, str], str] = {
    (Language.english, "quota"): "Traffic is high. Please wait a minute and try again.",
    (Language.english, "error"): "Sorry, I encountered an issue. Please try again.",
    (Language.english, "not_configured"): "Advice is not available right now. The service is not configured.",
    (Language.amharic, "quota"): "በጣም ብዙ ጥያቄዎች ስለተላኩ እባክዎ ትንሽ ይጠብቁ።",
    (Language.amharic, "error"): "ይቅርታ፣ ችግር አጋጥሟል። እባክዎ እንደገና ይሞክሩ።",
    (Language.amharic, "not_configured"): "ይቅርታ፣ ምክር አሁን አይገኝም።",
}

# Instruction appended to the advice system prompt
ANSWER_INSTRUCTIONS: dict[Language, str] = {
    Language.english: "Answer in English. Be encouraging and supportive like a kind doctor.",
    Language.amharic: (
        "Answer in Amharic (Ethiopian language). Be encouraging and supportive like a kind doctor."
    ),
}


def coaching_text(language: Language, category: CoachingCategory) -> CoachingText:
    """Text for a category, falling back to English for an untranslated language."""
    text = COACHING_TEXT.get((language, category))
    if text is None:
        text = COACHING_TEXT[(DEFAULT_LANGUAGE, category)]
    return text


def render_recommendation(recommendation: Recommendation, language: Language) -> LocalizedRecommendation:
    text = coaching_text(language, recommendation.category)
    return LocalizedRecommendation(
        category=recommendation.category,
        severe=recommendation.severe,
        language=language,
        title=text.title,
        text=text.text,
    )


def advice_fallback(language: Language, failure: str) -> str:
    return (
        ADVICE_FALLBACKS.get((language, failure))
        or ADVICE_FALLBACKS.get((DEFAULT_LANGUAGE, failure))
        or ADVICE_FALLBACKS[(DEFAULT_LANGUAGE, "error")]
    )


def answer_instruction(language: Language) -> str:
    return ANSWER_INSTRUCTIONS.get(language, ANSWER_INSTRUCTIONS[DEFAULT_LANGUAGE])
