import logging

from botocore.exceptions import BotoCoreError, ClientError
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from elite_coach.api.router import api_router
from elite_coach.core import init_database, settings
from elite_coach.core.db import AsyncSessionLocal
from elite_coach.core.logging import setup_logging
from elite_coach.core.seed_data import create_initial_coach
from elite_coach.services import s3_service

logger = logging.getLogger(__name__)

app = FastAPI(title="Elite Fitness Coach")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api/v1")


@app.on_event("startup")
async def startup_event():
    setup_logging()
    await init_database()

    async with AsyncSessionLocal() as session:
        await create_initial_coach(session)

    try:
        await s3_service.ensure_bucket_exists()
    except (BotoCoreError, ClientError) as e:
        # photo uploads fail until storage is reachable
        logger.warning(f"Object storage unavailable: {e}")

    logger.info("Application started")


@app.get("/")
async def root():
    base_url = "/api/v1"

    return {
        "app": "Elite Fitness Coach",
        "message": "Personal coaching site and client/coach dashboards",
        "links": {
            "site": f"{base_url}/site/content",
            "auth": f"{base_url}/auth/login",
            "dashboard": f"{base_url}/dashboard",
            "workouts": f"{base_url}/workouts",
            "bookings": f"{base_url}/bookings",
            "progress": f"{base_url}/progress",
            "broadcasts": f"{base_url}/broadcasts",
            "docs": "/docs",
        }
    }
