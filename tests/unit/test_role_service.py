"""
Unit tests for dashboard routing by role.
"""

import pytest
from unittest.mock import AsyncMock
from sqlalchemy.exc import OperationalError

from elite_coach.models.profile import Profile, RoleEnum
from elite_coach.repositories.profile_repository import ProfileRepository
from elite_coach.schemas.dashboard import DashboardView
from elite_coach.services import role_service

pytestmark = pytest.mark.unit


async def test_coach_profile_resolves_to_coach():
    repo = AsyncMock(spec=ProfileRepository)
    repo.get_by_id.return_value = Profile(id=1, email="c@t.com", full_name="C", password="h", role=RoleEnum.coach)

    assert await role_service.resolve_role(repo, 1) == RoleEnum.coach


async def test_missing_profile_falls_back_to_client():
    repo = AsyncMock(spec=ProfileRepository)
    repo.get_by_id.return_value = None

    assert await role_service.resolve_role(repo, 1) == RoleEnum.client


async def test_fetch_failure_falls_back_to_client():
    repo = AsyncMock(spec=ProfileRepository)
    repo.get_by_id.side_effect = OperationalError("select", {}, Exception("down"))

    assert await role_service.resolve_role(repo, 1) == RoleEnum.client


def test_route_for_coach_lists_coach_tabs():
    route = role_service.route_for(RoleEnum.coach)
    assert route.view == DashboardView.coach
    assert route.tabs == ["home", "clients", "bookings", "schedule", "broadcasts"]


def test_route_for_client_lists_client_tabs():
    route = role_service.route_for(RoleEnum.client)
    assert route.view == DashboardView.client
    assert "booking" in route.tabs and "photos" in route.tabs
