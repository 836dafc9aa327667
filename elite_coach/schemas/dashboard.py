from pydantic import BaseModel
from typing import List, Optional
from datetime import date, time, datetime
from enum import Enum

from elite_coach.schemas.profile import ClientSummary


class DashboardView(str, Enum):
    client = "client"
    coach = "coach"


class ClientTab(str, Enum):
    home = "home"
    workouts = "workouts"
    booking = "booking"
    progress = "progress"
    photos = "photos"
    broadcasts = "broadcasts"


class CoachTab(str, Enum):
    home = "home"
    clients = "clients"
    bookings = "bookings"
    schedule = "schedule"
    broadcasts = "broadcasts"


class DashboardRoute(BaseModel):
    role: str
    view: DashboardView
    tabs: List[str]


class WeeklyActivityDay(BaseModel):
    day: str
    workouts: int
    is_today: bool


class NextSession(BaseModel):
    id: int
    session_type: str
    session_date: date
    session_time: time
    countdown: str


class ProgressTrendPoint(BaseModel):
    date: str
    weight: Optional[float] = None
    body_fat: Optional[float] = None


class ClientHomeResponse(BaseModel):
    greeting: str
    current_streak: int
    longest_streak: int
    total_workouts: int
    next_session: Optional[NextSession] = None
    weekly_activity: List[WeeklyActivityDay]
    progress_trend: List[ProgressTrendPoint]


class AtRiskClient(BaseModel):
    user_id: int
    last_login: Optional[datetime] = None
    hours_inactive: Optional[int] = None
    profile: Optional[ClientSummary] = None


class WeeklyBookingsDay(BaseModel):
    day: str
    confirmed: int
    pending: int


class ClientStatusSlice(BaseModel):
    name: str
    value: int


class CoachOverviewResponse(BaseModel):
    coach_name: str
    total_clients: int
    active_clients: int
    inactive_clients: int
    at_risk_clients: List[AtRiskClient]
    pending_approvals: int
    weekly_bookings: List[WeeklyBookingsDay]
    estimated_revenue: int
    client_status: List[ClientStatusSlice]
