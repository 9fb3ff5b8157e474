"""
AI advice via Gemini. The blocking generate_content call runs in a threadpool
with a timeout so it never holds up the event loop or metric reads.
Failures are mapped to localized fallback text at get_health_advice.
"""
from __future__ import annotations

import asyncio
import logging
import re

import google.generativeai as genai
from starlette.concurrency import run_in_threadpool

from app.config import settings
from app.coach.errors import ExternalServiceFailure, QuotaExceeded
from app.coach.localization import advice_fallback, answer_instruction
from app.coach.models import AdviceResponse, Language, ProfileState

logger = logging.getLogger(__name__)

QUOTA_PATTERN = re.compile(r"\b429\b|quota|rate limit", re.IGNORECASE)
# Retry up to 3 times with exponential backoff (1s, 2s) for server-side errors
RETRYABLE_STATUS_PATTERN = re.compile(r"\b5\d{2}\b")
MAX_ATTEMPTS = 3
RETRY_BASE_DELAY = 1.0  # seconds, doubled per attempt

GENERATION_CONFIG = {
    "temperature": 0.7,
    "max_output_tokens": 512,
}

SYSTEM_PROMPT = """You are Doctor JD, a supportive weight loss coach for women in Ethiopia.
{instruction}
Keep answers concise (under 100 words) and practical.
Context about the user: {context}"""


def _error_message(exc: BaseException) -> str:
    return (getattr(exc, "message", None) or str(exc)) if exc else ""


def _is_quota_error(exc: BaseException) -> bool:
    return bool(QUOTA_PATTERN.search(_error_message(exc)))


def _is_retryable_error(exc: BaseException) -> bool:
    return bool(RETRYABLE_STATUS_PATTERN.search(_error_message(exc)))


def build_context_summary(state: ProfileState, current_weight: float) -> str:
    """One-line profile summary handed to the model as context."""
    age = f"{state.age} years old" if state.age is not None else "an adult"
    return (
        f"User is {age} female, {current_weight:g}kg, {state.height_cm:g}cm tall. "
        f"Goal: {state.target_weight:g}kg."
    )


def build_system_prompt(language: Language, context_summary: str) -> str:
    return SYSTEM_PROMPT.format(instruction=answer_instruction(language), context=context_summary)


async def _generate(model, query: str):
    timeout = float(settings.gemini_request_timeout_seconds or 60)
    for attempt in range(MAX_ATTEMPTS):
        try:
            return await asyncio.wait_for(
                run_in_threadpool(model.generate_content, query),
                timeout=timeout,
            )
        except asyncio.TimeoutError as e:
            logger.warning("Gemini request timed out after %ss (attempt %d)", timeout, attempt + 1)
            raise ExternalServiceFailure("Advice request timed out") from e
        except Exception as e:
            if _is_quota_error(e):
                raise QuotaExceeded(_error_message(e)) from e
            if attempt < MAX_ATTEMPTS - 1 and _is_retryable_error(e):
                delay = RETRY_BASE_DELAY * 2 ** attempt
                logger.warning("Gemini request failed (attempt %d), retrying in %ss: %s", attempt + 1, delay, e)
                await asyncio.sleep(delay)
                continue
            raise ExternalServiceFailure(_error_message(e)) from e
    raise ExternalServiceFailure("Advice request exhausted retries")


async def request_advice(query: str, language: Language, context_summary: str) -> str:
    """Ask Gemini for advice. Raises QuotaExceeded or ExternalServiceFailure."""
    genai.configure(api_key=settings.gemini_api_key)
    model = genai.GenerativeModel(
        settings.gemini_model,
        generation_config=GENERATION_CONFIG,
        system_instruction=build_system_prompt(language, context_summary),
    )
    response = await _generate(model, query)
    try:
        text = response.text if response else ""
    except ValueError as e:
        # .text raises when the candidate was blocked or is empty
        raise ExternalServiceFailure(f"No usable advice in response: {e}") from e
    if not text or not text.strip():
        raise ExternalServiceFailure("Empty advice response")
    return text.strip()


async def get_health_advice(query: str, language: Language, context_summary: str) -> AdviceResponse:
    """Boundary around request_advice: always returns text, never raises."""
    if not settings.gemini_api_key:
        logger.error("GEMINI_API_KEY is missing; returning fallback advice")
        return AdviceResponse(text=advice_fallback(language, "not_configured"), status="not_configured")

    try:
        text = await request_advice(query, language, context_summary)
    except QuotaExceeded as e:
        logger.warning("Gemini quota exceeded: %s", e)
        return AdviceResponse(text=advice_fallback(language, "quota"), status="quota")
    except ExternalServiceFailure as e:
        logger.warning("Gemini advice failed: %s", e)
        return AdviceResponse(text=advice_fallback(language, "error"), status="error")
    except Exception:
        logger.exception("Unexpected error while requesting advice")
        return AdviceResponse(text=advice_fallback(language, "error"), status="error")
    return AdviceResponse(text=text, status="ok")
