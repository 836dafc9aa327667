"""
Unit tests for the dashboard aggregation helpers.

All functions take an explicit now/today, so no clock patching is needed.
"""

import pytest
from datetime import date, datetime, time, timedelta

from elite_coach.models.booking import Booking, BookingStatus
from elite_coach.models.engagement import UserEngagement
from elite_coach.services import stats_service

pytestmark = pytest.mark.unit

NOW = datetime(2024, 6, 12, 15, 0)   # a Wednesday
TODAY = NOW.date()


def engagement(user_id: int, hours_ago=None) -> UserEngagement:
    last_login = None if hours_ago is None else NOW - timedelta(hours=hours_ago)
    return UserEngagement(user_id=user_id, last_login=last_login, current_streak=0, longest_streak=0)


def booking(day: date, status: BookingStatus) -> Booking:
    return Booking(user_id=1, session_type="Goal Setting", session_date=day, session_time=time(9), status=status)


# ---------------------------------------------------------------------------
# countdown
# ---------------------------------------------------------------------------

def test_countdown_more_than_a_day():
    assert stats_service.format_countdown(timedelta(hours=25)) == "1d 1h"


def test_countdown_hours_and_minutes():
    assert stats_service.format_countdown(timedelta(hours=3, minutes=15)) == "3h 15m"


def test_countdown_minutes_only():
    assert stats_service.format_countdown(timedelta(minutes=40)) == "40m"


def test_countdown_past_session():
    assert stats_service.format_countdown(timedelta(minutes=-1)) == "Session has passed"


def test_time_until_session_combines_date_and_time():
    session_day = (NOW + timedelta(hours=25)).date()
    session_time = (NOW + timedelta(hours=25)).time()
    assert stats_service.time_until_session(session_day, session_time, NOW) == "1d 1h"


# ---------------------------------------------------------------------------
# weekly activity
# ---------------------------------------------------------------------------

def test_weekly_activity_has_seven_days_starting_sunday():
    week = stats_service.weekly_activity([], TODAY)
    assert [d["day"] for d in week] == ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


def test_weekly_activity_flags_today():
    week = stats_service.weekly_activity([], TODAY)
    assert [d["day"] for d in week if d["is_today"]] == ["Wed"]


def test_weekly_activity_counts_only_trailing_week():
    dates = [
        TODAY,
        TODAY,
        TODAY - timedelta(days=1),
        TODAY - timedelta(days=6),   # last Thursday, still inside
        TODAY - timedelta(days=7),   # outside
        TODAY + timedelta(days=1),   # future, outside
    ]
    week = stats_service.weekly_activity(dates, TODAY)
    by_day = {d["day"]: d["workouts"] for d in week}

    assert sum(by_day.values()) == 4
    assert by_day["Wed"] == 2
    assert by_day["Tue"] == 1
    assert by_day["Thu"] == 1


# ---------------------------------------------------------------------------
# at-risk / active
# ---------------------------------------------------------------------------

def test_at_risk_boundary():
    just_over = UserEngagement(user_id=1, last_login=NOW - timedelta(hours=48, minutes=1))
    just_under = UserEngagement(user_id=2, last_login=NOW - timedelta(hours=47, minutes=59))

    flagged = stats_service.select_at_risk([just_over, just_under], NOW)
    assert [e.user_id for e in flagged] == [1]


def test_at_risk_capped_and_longest_inactive_first():
    engagements = [engagement(i, hours_ago=50 + i) for i in range(1, 9)]
    flagged = stats_service.select_at_risk(engagements, NOW)

    assert len(flagged) == 5
    assert flagged[0].user_id == 8


def test_never_logged_in_counts_as_at_risk():
    assert stats_service.select_at_risk([engagement(1)], NOW)[0].user_id == 1


def test_count_active_uses_seven_day_window():
    engagements = [
        engagement(1, hours_ago=1),
        engagement(2, hours_ago=24 * 6),
        engagement(3, hours_ago=24 * 8),
        engagement(4),
    ]
    assert stats_service.count_active(engagements, NOW) == 2


def test_hours_since():
    assert stats_service.hours_since(NOW - timedelta(hours=3), NOW) == 3
    assert stats_service.hours_since(None, NOW) is None


# ---------------------------------------------------------------------------
# bookings / revenue
# ---------------------------------------------------------------------------

def test_weekly_bookings_split_by_status():
    bookings = [
        booking(TODAY, BookingStatus.confirmed),
        booking(TODAY, BookingStatus.pending),
        booking(TODAY, BookingStatus.cancelled),
        booking(TODAY - timedelta(days=2), BookingStatus.confirmed),
        booking(TODAY - timedelta(days=10), BookingStatus.confirmed),
    ]
    week = {d["day"]: d for d in stats_service.weekly_bookings(bookings, TODAY)}

    assert week["Wed"] == {"day": "Wed", "confirmed": 1, "pending": 1}
    assert week["Mon"]["confirmed"] == 1
    assert sum(d["confirmed"] for d in week.values()) == 2


def test_estimated_revenue_uses_session_price():
    week = [{"day": "Mon", "confirmed": 2, "pending": 5}, {"day": "Tue", "confirmed": 1, "pending": 0}]
    assert stats_service.estimated_revenue(week) == 3 * 199
    assert stats_service.estimated_revenue(week, price=100) == 300


# ---------------------------------------------------------------------------
# progress helpers
# ---------------------------------------------------------------------------

def test_metric_change():
    assert stats_service.metric_change(70.5, 72.0) == -1.5
    assert stats_service.metric_change(None, 72.0) is None
    assert stats_service.metric_change(70.0, None) is None


def test_display_value_placeholder():
    assert stats_service.display_value(None) == "-"
    assert stats_service.display_value(70.5) == "70.5"


def test_chart_label():
    assert stats_service.chart_label(date(2024, 6, 1)) == "Jun 1"
