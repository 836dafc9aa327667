from fastapi import APIRouter
from elite_coach.api.v1.auth import router as auth_router
from elite_coach.api.v1.site import router as site_router
from elite_coach.api.v1.dashboard import router as dashboard_router
from elite_coach.api.v1.workouts import router as workouts_router
from elite_coach.api.v1.bookings import router as bookings_router
from elite_coach.api.v1.progress import router as progress_router
from elite_coach.api.v1.broadcasts import router as broadcasts_router
from elite_coach.api.v1.admin import router as admin_router

api_router = APIRouter()

api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_router.include_router(site_router, prefix="/site", tags=["site"])
api_router.include_router(dashboard_router, prefix="/dashboard", tags=["dashboard"])
api_router.include_router(workouts_router, prefix="/workouts", tags=["workouts"])
api_router.include_router(bookings_router, prefix="/bookings", tags=["bookings"])
api_router.include_router(progress_router, prefix="/progress", tags=["progress"])
api_router.include_router(broadcasts_router, prefix="/broadcasts", tags=["broadcasts"])
api_router.include_router(admin_router, prefix="/admin", tags=["admin"])
