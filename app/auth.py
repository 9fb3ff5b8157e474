"""Coach API key check, attached to every /coach router as a router dependency.

Router-level dependencies run before any path dependency, so a request with
a bad key is refused before a profile is looked up.
"""

import secrets

from fastapi import Header, HTTPException

from app.config import settings


def _presented_key(x_api_key: str | None, authorization: str | None) -> str | None:
    if x_api_key is not None:
        return x_api_key
    if authorization and authorization.startswith("Bearer "):
        return authorization[7:].strip()
    return None


async def verify_api_key(
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
    authorization: str | None = Header(default=None),
) -> None:
    """Require COACH_API_KEY via X-API-Key or Authorization: Bearer.

    Open when COACH_API_KEY is unset (local development).
    """
    expected = settings.coach_api_key
    if not expected:
        return
    key = _presented_key(x_api_key, authorization)
    if key is None or not secrets.compare_digest(key.encode(), expected.encode()):
        raise HTTPException(status_code=401, detail="Invalid or missing API key")
