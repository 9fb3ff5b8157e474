import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.config import settings
from app.db import init_db
from app.coach.catalog_router import router as catalog_router
from app.coach.log_router import router as log_router
from app.coach.router import router as coach_router

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    stream=sys.stdout,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    yield


app = FastAPI(title="WeightCoach", version="0.1.0", lifespan=lifespan)
app.include_router(coach_router)
app.include_router(log_router)
app.include_router(catalog_router)


@app.get("/")
async def root() -> dict:
    return {
        "status": "ok",
        "docs": "/docs",
        "health": "/health",
        "coach": {
            "catalog": "/coach/catalog",
            "bmi": "/coach/bmi",
            "profiles": "/coach/profiles",
            "dashboard": "/coach/profiles/{user_id}/dashboard",
            "weekly_report": "/coach/profiles/{user_id}/weekly-report",
            "advice": "/coach/profiles/{user_id}/advice",
            "log_weight": "/coach/profiles/{user_id}/weight",
            "toggle_water": "/coach/profiles/{user_id}/water/{date}/{hour}/toggle",
        },
    }


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
