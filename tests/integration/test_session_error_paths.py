"""
Write failures on a real SQLite session.

A rollback expires every object the request session holds, including the
profile loaded by get_current_user; these endpoints must still answer with
their own status and message afterwards.
"""

import pytest
from datetime import time, datetime, timedelta
from unittest.mock import patch, AsyncMock
from sqlalchemy.exc import OperationalError

from elite_coach.models.booking import Booking, BookingStatus, AvailableSlot
from elite_coach.repositories.booking_repository import BookingRepository
from elite_coach.repositories.engagement_repository import EngagementRepository
from elite_coach.repositories.profile_repository import ProfileRepository
from elite_coach.repositories.workout_repository import WorkoutRepository
from tests.conftest import make_auth_headers, seed_profile

pytestmark = pytest.mark.integration

WORKOUT = {
    "workout_name": "Upper body",
    "workout_date": "2024-06-01",
    "duration_minutes": 45,
    "exercises": [{"exercise_name": "Bench press", "sets": 4, "reps": 8, "weight_kg": 60}],
}


def db_down() -> OperationalError:
    return OperationalError("COMMIT", {}, Exception("database is locked"))


async def test_client_home_on_real_session(db_client, db_session):
    client = await seed_profile(db_session, "pat@example.com", full_name="Pat Client")
    tomorrow = datetime.utcnow().date() + timedelta(days=1)
    db_session.add(Booking(
        user_id=client.id,
        session_type="Progress Review",
        session_date=tomorrow,
        session_time=time(10, 0),
        status=BookingStatus.confirmed,
    ))
    await db_session.commit()

    response = await db_client.get("/api/v1/dashboard/client", headers=make_auth_headers(client))

    assert response.status_code == 200
    data = response.json()
    assert data["greeting"] == "Welcome back, Pat Client!"
    assert data["next_session"]["session_type"] == "Progress Review"
    assert data["current_streak"] == 0


async def test_client_home_survives_engagement_failure(db_client, db_session):
    client = await seed_profile(db_session, "pat@example.com", full_name="Pat Client")

    with patch.object(EngagementRepository, "touch_login", new_callable=AsyncMock) as touch_login:
        touch_login.side_effect = db_down()
        response = await db_client.get("/api/v1/dashboard/client", headers=make_auth_headers(client))

    assert response.status_code == 200
    data = response.json()
    assert data["greeting"] == "Welcome back, Pat Client!"
    assert data["current_streak"] == 0
    assert data["longest_streak"] == 0


async def test_workout_commit_failure_returns_message_and_keeps_nothing(db_client, db_session):
    client = await seed_profile(db_session, "pat@example.com")
    headers = make_auth_headers(client)

    with patch.object(WorkoutRepository, "commit", new_callable=AsyncMock) as commit:
        commit.side_effect = db_down()
        response = await db_client.post("/api/v1/workouts", json=WORKOUT, headers=headers)

    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to save workout. Please try again."
    assert (await db_client.get("/api/v1/workouts", headers=headers)).json() == []


async def test_booking_commit_failure_leaves_slot_open(db_client, db_session):
    client = await seed_profile(db_session, "pat@example.com")
    headers = make_auth_headers(client)
    day = datetime.utcnow().date() + timedelta(days=2)
    db_session.add(AvailableSlot(slot_date=day, slot_time=time(9, 0), is_booked=False))
    await db_session.commit()

    with patch.object(BookingRepository, "commit", new_callable=AsyncMock) as commit:
        commit.side_effect = db_down()
        response = await db_client.post(
            "/api/v1/bookings",
            json={"session_date": day.isoformat(), "session_time": "09:00"},
            headers=headers,
        )

    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to book session. Please try again."
    slots = (await db_client.get(f"/api/v1/bookings/slots?from_date={day.isoformat()}", headers=headers)).json()
    assert [s["is_booked"] for s in slots["slots"]] == [False]
    assert (await db_client.get("/api/v1/bookings", headers=headers)).json() == []


async def test_profile_update_failure_returns_message(db_client, db_session):
    client = await seed_profile(db_session, "pat@example.com", full_name="Pat Client")
    headers = make_auth_headers(client)

    with patch.object(ProfileRepository, "save", new_callable=AsyncMock) as save:
        save.side_effect = db_down()
        response = await db_client.patch("/api/v1/auth/me", json={"full_name": "Patricia"}, headers=headers)

    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to update profile. Please try again."
    assert (await db_client.get("/api/v1/auth/me", headers=headers)).json()["full_name"] == "Pat Client"
