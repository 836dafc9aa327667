from typing import List

from fastapi import APIRouter, Depends, status

from elite_coach.core.config import settings
from elite_coach.core.dependencies import (
    get_current_user,
    get_profile_repository,
    get_broadcast_repository,
)
from elite_coach.core.rbac import require_coach
from elite_coach.models.broadcast import Broadcast
from elite_coach.models.profile import Profile
from elite_coach.repositories.broadcast_repository import BroadcastRepository
from elite_coach.repositories.profile_repository import ProfileRepository
from elite_coach.schemas.broadcast import BroadcastCreate, BroadcastRead, BroadcastSent, RecipientSelectionRead
from elite_coach.schemas.profile import ClientSummary
from elite_coach.services import broadcast_service

router = APIRouter(tags=["broadcasts"])


def to_read(broadcast: Broadcast, coach_name: str = None) -> BroadcastRead:
    if coach_name is None and broadcast.coach is not None:
        coach_name = broadcast.coach.full_name
    return BroadcastRead(
        id=broadcast.id,
        coach_id=broadcast.coach_id,
        coach_name=coach_name,
        title=broadcast.title,
        message=broadcast.message,
        sent_at=broadcast.sent_at,
    )


@router.get("", response_model=List[BroadcastRead])
async def inbox(
    current_user: Profile = Depends(get_current_user),
    repo: BroadcastRepository = Depends(get_broadcast_repository),
):
    """Latest coach messages. Every signed-in user sees every broadcast."""
    broadcasts = await repo.latest(settings.BROADCAST_INBOX_LIMIT)
    return [to_read(b) for b in broadcasts]


@router.get("/recipients", response_model=RecipientSelectionRead)
async def recipients(
    current_user: Profile = Depends(require_coach),
    profile_repo: ProfileRepository = Depends(get_profile_repository),
):
    clients = await profile_repo.list_clients()
    selection = broadcast_service.RecipientSelection([c.id for c in clients])
    return RecipientSelectionRead(
        clients=[ClientSummary.model_validate(c) for c in clients],
        selected_ids=selection.selected_ids(),
        select_all=selection.select_all,
    )


@router.post("", response_model=BroadcastSent, status_code=status.HTTP_201_CREATED)
async def send(
    data: BroadcastCreate,
    current_user: Profile = Depends(require_coach),
    profile_repo: ProfileRepository = Depends(get_profile_repository),
    repo: BroadcastRepository = Depends(get_broadcast_repository),
):
    clients = await profile_repo.list_clients()
    selection = broadcast_service.resolve_selection(clients, data.recipient_ids, data.select_all)

    broadcast = await broadcast_service.send_broadcast(
        repo, current_user, data.title, data.message, selection
    )
    read = to_read(broadcast, coach_name=current_user.full_name)
    return BroadcastSent(**read.model_dump(), recipient_count=len(selection))
