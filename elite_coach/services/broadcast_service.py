import logging
from typing import Iterable, List, Optional, Set

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError

from elite_coach.models.broadcast import Broadcast
from elite_coach.models.profile import Profile
from elite_coach.repositories.broadcast_repository import BroadcastRepository

logger = logging.getLogger(__name__)


class RecipientSelection:
    """Recipient set of the composer with its "select all" flag kept in sync.

    Starts with every client selected.
    """

    def __init__(self, client_ids: Iterable[int], selected: Optional[Iterable[int]] = None):
        self.client_ids: List[int] = list(dict.fromkeys(client_ids))
        if selected is None:
            self.selected: Set[int] = set(self.client_ids)
        else:
            known = set(self.client_ids)
            self.selected = {cid for cid in selected if cid in known}
        self.select_all = self._covers_everyone()

    def _covers_everyone(self) -> bool:
        return len(self.client_ids) > 0 and len(self.selected) == len(self.client_ids)

    def toggle_client(self, client_id: int) -> None:
        if client_id in self.selected:
            self.selected.discard(client_id)
            self.select_all = False
        elif client_id in self.client_ids:
            self.selected.add(client_id)
            self.select_all = self._covers_everyone()

    def toggle_all(self) -> None:
        if self.select_all:
            self.selected = set()
            self.select_all = False
        else:
            self.selected = set(self.client_ids)
            self.select_all = self._covers_everyone()

    def selected_ids(self) -> List[int]:
        return [cid for cid in self.client_ids if cid in self.selected]

    def __len__(self):
        return len(self.selected)


def resolve_selection(clients: List[Profile], recipient_ids: List[int], select_all: bool) -> RecipientSelection:
    client_ids = [c.id for c in clients]
    if select_all:
        return RecipientSelection(client_ids)
    return RecipientSelection(client_ids, recipient_ids)


async def send_broadcast(
    repo: BroadcastRepository,
    coach: Profile,
    title: str,
    message: str,
    selection: RecipientSelection,
) -> Broadcast:
    title = (title or "").strip()
    message = (message or "").strip()
    if not title or not message:
        raise HTTPException(status_code=400, detail="Please fill in both title and message")
    if len(selection) == 0:
        raise HTTPException(status_code=400, detail="Please select at least one client")

    coach_id = coach.id
    try:
        broadcast = await repo.create(Broadcast(coach_id=coach_id, title=title, message=message))
    except SQLAlchemyError as e:
        await repo.rollback()
        logger.error(f"Error sending broadcast from coach {coach_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to send broadcast. Please try again.",
        )

    logger.info(f"Broadcast {broadcast.id} sent by coach {coach_id} to {len(selection)} clients")
    return broadcast
