"""
Unit tests for recipient selection and broadcast sending.
"""

import pytest
from unittest.mock import AsyncMock
from fastapi import HTTPException

from elite_coach.models.broadcast import Broadcast
from elite_coach.models.profile import Profile, RoleEnum
from elite_coach.repositories.broadcast_repository import BroadcastRepository
from elite_coach.services.broadcast_service import RecipientSelection, resolve_selection, send_broadcast

pytestmark = pytest.mark.unit


@pytest.fixture
def coach() -> Profile:
    return Profile(id=2, email="coach@test.com", full_name="Coach", password="h", role=RoleEnum.coach)


# ---------------------------------------------------------------------------
# RecipientSelection
# ---------------------------------------------------------------------------

def test_selection_starts_with_everyone():
    selection = RecipientSelection([1, 2, 3])
    assert selection.selected_ids() == [1, 2, 3]
    assert selection.select_all is True


def test_deselecting_one_unchecks_select_all():
    selection = RecipientSelection([1, 2, 3])
    selection.toggle_client(2)
    assert selection.selected_ids() == [1, 3]
    assert selection.select_all is False


def test_reselecting_last_client_checks_select_all():
    selection = RecipientSelection([1, 2, 3])
    selection.toggle_client(2)
    selection.toggle_client(2)
    assert selection.select_all is True


def test_toggle_all_clears_then_fills():
    selection = RecipientSelection([1, 2])
    selection.toggle_all()
    assert len(selection) == 0
    assert selection.select_all is False

    selection.toggle_all()
    assert selection.selected_ids() == [1, 2]
    assert selection.select_all is True


def test_unknown_ids_are_ignored():
    selection = RecipientSelection([1, 2], selected=[2, 99])
    assert selection.selected_ids() == [2]
    selection.toggle_client(99)
    assert selection.selected_ids() == [2]


def test_empty_client_list_is_never_select_all():
    selection = RecipientSelection([])
    assert selection.select_all is False
    assert len(selection) == 0


def test_resolve_selection_select_all_wins():
    clients = [Profile(id=i, email=f"{i}@t.com", full_name=str(i), password="h") for i in (1, 2)]
    assert resolve_selection(clients, [], True).selected_ids() == [1, 2]
    assert resolve_selection(clients, [2], False).selected_ids() == [2]


# ---------------------------------------------------------------------------
# send_broadcast
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("title,message", [("", "body"), ("Title", ""), ("   ", "   ")])
async def test_send_requires_title_and_message(coach, title, message):
    repo = AsyncMock(spec=BroadcastRepository)

    with pytest.raises(HTTPException) as exc_info:
        await send_broadcast(repo, coach, title, message, RecipientSelection([1]))

    assert exc_info.value.status_code == 400
    assert exc_info.value.detail == "Please fill in both title and message"
    repo.create.assert_not_called()


async def test_send_requires_a_recipient(coach):
    repo = AsyncMock(spec=BroadcastRepository)

    with pytest.raises(HTTPException) as exc_info:
        await send_broadcast(repo, coach, "Title", "Body", RecipientSelection([1], selected=[]))

    assert exc_info.value.detail == "Please select at least one client"


async def test_send_inserts_one_row_tagged_with_coach(coach):
    repo = AsyncMock(spec=BroadcastRepository)
    repo.create.side_effect = lambda b: b

    broadcast = await send_broadcast(repo, coach, " Hi ", " Team ", RecipientSelection([1, 2]))

    repo.create.assert_called_once()
    assert isinstance(broadcast, Broadcast)
    assert broadcast.coach_id == coach.id
    assert (broadcast.title, broadcast.message) == ("Hi", "Team")
