"""
Dashboard aggregation.

Everything here is a pure function over already-fetched rows. Callers pass
``now``/``today`` explicitly so the numbers are reproducible in tests.
"""

from datetime import date, datetime, time, timedelta
from typing import Iterable, List, Optional, Sequence

from elite_coach.core.config import settings
from elite_coach.models.booking import Booking, BookingStatus
from elite_coach.models.engagement import UserEngagement

WEEKDAY_LABELS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
PLACEHOLDER = "-"
SESSION_PASSED = "Session has passed"


def weekday_index(day: date) -> int:
    """Sunday-based index (Sun=0 ... Sat=6)."""
    return (day.weekday() + 1) % 7


def trailing_week(today: date) -> tuple[date, date]:
    """The seven calendar days ending today, inclusive."""
    return today - timedelta(days=6), today


def format_countdown(delta: timedelta) -> str:
    total_seconds = int(delta.total_seconds())
    if total_seconds < 0:
        return SESSION_PASSED

    days, remainder = divmod(total_seconds, 86400)
    hours, remainder = divmod(remainder, 3600)
    minutes = remainder // 60

    if days > 0:
        return f"{days}d {hours}h"
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def time_until_session(session_date: date, session_time: time, now: datetime) -> str:
    return format_countdown(datetime.combine(session_date, session_time) - now)


def weekly_activity(workout_dates: Iterable[date], today: date) -> List[dict]:
    """Workouts of the trailing week bucketed by weekday, Sun..Sat."""
    start, end = trailing_week(today)
    counts = [0] * 7
    for workout_date in workout_dates:
        if start <= workout_date <= end:
            counts[weekday_index(workout_date)] += 1

    today_index = weekday_index(today)
    return [
        {"day": label, "workouts": counts[i], "is_today": i == today_index}
        for i, label in enumerate(WEEKDAY_LABELS)
    ]


def hours_since(moment: Optional[datetime], now: datetime) -> Optional[float]:
    if moment is None:
        return None
    return (now - moment).total_seconds() / 3600


def is_at_risk(engagement: UserEngagement, now: datetime, threshold_hours: int = None) -> bool:
    threshold = settings.AT_RISK_THRESHOLD_HOURS if threshold_hours is None else threshold_hours
    elapsed = hours_since(engagement.last_login, now)
    # never logged in counts as inactive
    return elapsed is None or elapsed >= threshold


def select_at_risk(
    engagements: Sequence[UserEngagement],
    now: datetime,
    threshold_hours: int = None,
    limit: int = None,
) -> List[UserEngagement]:
    limit = settings.AT_RISK_LIMIT if limit is None else limit
    flagged = [e for e in engagements if is_at_risk(e, now, threshold_hours)]
    # longest inactive first
    flagged.sort(key=lambda e: e.last_login or datetime.min)
    return flagged[:limit]


def count_active(engagements: Sequence[UserEngagement], now: datetime, window_days: int = None) -> int:
    window = settings.ACTIVE_WINDOW_DAYS if window_days is None else window_days
    cutoff = now - timedelta(days=window)
    return sum(1 for e in engagements if e.last_login is not None and e.last_login >= cutoff)


def weekly_bookings(bookings: Iterable[Booking], today: date) -> List[dict]:
    """Trailing-week bookings per weekday, split into confirmed and pending."""
    start, end = trailing_week(today)
    confirmed = [0] * 7
    pending = [0] * 7
    for booking in bookings:
        if not (start <= booking.session_date <= end):
            continue
        index = weekday_index(booking.session_date)
        if booking.status == BookingStatus.confirmed:
            confirmed[index] += 1
        elif booking.status == BookingStatus.pending:
            pending[index] += 1

    return [
        {"day": label, "confirmed": confirmed[i], "pending": pending[i]}
        for i, label in enumerate(WEEKDAY_LABELS)
    ]


def estimated_revenue(weekly: Sequence[dict], price: int = None) -> int:
    """Placeholder figure: confirmed sessions times a flat price."""
    price = settings.SESSION_PRICE if price is None else price
    return sum(day["confirmed"] for day in weekly) * price


def metric_change(latest: Optional[float], previous: Optional[float]) -> Optional[float]:
    if latest is None or previous is None:
        return None
    return round(latest - previous, 1)


def display_value(value) -> str:
    if value is None:
        return PLACEHOLDER
    return str(value)


def chart_label(day: date) -> str:
    """"Jun 1" style axis label."""
    return f"{day.strftime('%b')} {day.day}"
