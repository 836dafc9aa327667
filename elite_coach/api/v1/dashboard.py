import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.exc import SQLAlchemyError

from elite_coach.core.config import settings
from elite_coach.core.dependencies import (
    security,
    decode_access_token,
    get_current_user,
    get_profile_repository,
    get_workout_repository,
    get_booking_repository,
    get_progress_repository,
    get_engagement_repository,
)
from elite_coach.core.rbac import require_coach
from elite_coach.models.profile import Profile
from elite_coach.models.engagement import UserEngagement
from elite_coach.repositories.profile_repository import ProfileRepository
from elite_coach.repositories.workout_repository import WorkoutRepository
from elite_coach.repositories.booking_repository import BookingRepository
from elite_coach.repositories.progress_repository import ProgressRepository
from elite_coach.repositories.engagement_repository import EngagementRepository
from elite_coach.schemas.dashboard import (
    DashboardRoute,
    ClientHomeResponse,
    NextSession,
    WeeklyActivityDay,
    ProgressTrendPoint,
    CoachOverviewResponse,
    AtRiskClient,
    WeeklyBookingsDay,
    ClientStatusSlice,
)
from elite_coach.schemas.profile import ClientSummary
from elite_coach.services import role_service, stats_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["dashboard"])


@router.get("", response_model=DashboardRoute)
async def route_dashboard(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    repo: ProfileRepository = Depends(get_profile_repository),
):
    """Which dashboard the caller should see. Re-resolved on every call."""
    user_id = decode_access_token(credentials.credentials)
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid access token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    role = await role_service.resolve_role(repo, user_id)
    return role_service.route_for(role)


@router.get("/client", response_model=ClientHomeResponse)
async def client_home(
    current_user: Profile = Depends(get_current_user),
    engagement_repo: EngagementRepository = Depends(get_engagement_repository),
    workout_repo: WorkoutRepository = Depends(get_workout_repository),
    booking_repo: BookingRepository = Depends(get_booking_repository),
    progress_repo: ProgressRepository = Depends(get_progress_repository),
):
    now = datetime.utcnow()
    today = now.date()
    # a rollback expires current_user
    user_id = current_user.id
    full_name = current_user.full_name

    try:
        engagement = await engagement_repo.touch_login(user_id, now)
    except SQLAlchemyError as e:
        # dashboard still renders with zero streaks
        await engagement_repo.rollback()
        logger.error(f"Error updating engagement for profile {user_id}: {e}")
        engagement = UserEngagement(user_id=user_id, current_streak=0, longest_streak=0)

    total_workouts = await workout_repo.count_for_user(user_id)
    start, end = stats_service.trailing_week(today)
    workout_dates = await workout_repo.dates_between(user_id, start, end)

    next_session = None
    booking = await booking_repo.next_confirmed(user_id, today)
    if booking is not None:
        next_session = NextSession(
            id=booking.id,
            session_type=booking.session_type,
            session_date=booking.session_date,
            session_time=booking.session_time,
            countdown=stats_service.time_until_session(booking.session_date, booking.session_time, now),
        )

    recent = await progress_repo.recent(user_id, settings.RECENT_PROGRESS_LIMIT)
    trend = [
        ProgressTrendPoint(
            date=stats_service.chart_label(record.record_date),
            weight=record.weight_kg,
            body_fat=record.body_fat_percentage,
        )
        for record in reversed(recent)
    ]

    return ClientHomeResponse(
        greeting=f"Welcome back, {full_name}!",
        current_streak=engagement.current_streak or 0,
        longest_streak=engagement.longest_streak or 0,
        total_workouts=total_workouts,
        next_session=next_session,
        weekly_activity=[WeeklyActivityDay(**day) for day in stats_service.weekly_activity(workout_dates, today)],
        progress_trend=trend,
    )


@router.get("/coach", response_model=CoachOverviewResponse)
async def coach_overview(
    current_user: Profile = Depends(require_coach),
    profile_repo: ProfileRepository = Depends(get_profile_repository),
    engagement_repo: EngagementRepository = Depends(get_engagement_repository),
    booking_repo: BookingRepository = Depends(get_booking_repository),
):
    now = datetime.utcnow()
    today = now.date()

    clients = await profile_repo.list_clients()
    engagements = await engagement_repo.list_for_clients()
    clients_by_id = {c.id: c for c in clients}

    at_risk = []
    for engagement in stats_service.select_at_risk(engagements, now):
        profile = clients_by_id.get(engagement.user_id)
        elapsed = stats_service.hours_since(engagement.last_login, now)
        at_risk.append(AtRiskClient(
            user_id=engagement.user_id,
            last_login=engagement.last_login,
            hours_inactive=int(elapsed) if elapsed is not None else None,
            profile=ClientSummary.model_validate(profile) if profile is not None else None,
        ))

    total = len(clients)
    active = min(stats_service.count_active(engagements, now), total)
    inactive = total - active

    start, end = stats_service.trailing_week(today)
    weekly = stats_service.weekly_bookings(await booking_repo.list_between(start, end), today)

    return CoachOverviewResponse(
        coach_name=current_user.full_name,
        total_clients=total,
        active_clients=active,
        inactive_clients=inactive,
        at_risk_clients=at_risk,
        pending_approvals=await booking_repo.count_pending(),
        weekly_bookings=[WeeklyBookingsDay(**day) for day in weekly],
        estimated_revenue=stats_service.estimated_revenue(weekly),
        client_status=[
            ClientStatusSlice(name="Active", value=active),
            ClientStatusSlice(name="Inactive", value=inactive),
        ],
    )
