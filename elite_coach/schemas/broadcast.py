from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime

from elite_coach.schemas.profile import ClientSummary


class BroadcastCreate(BaseModel):
    title: str = ""
    message: str = ""
    recipient_ids: List[int] = []
    select_all: bool = False


class BroadcastRead(BaseModel):
    id: int
    coach_id: Optional[int] = None
    coach_name: Optional[str] = None
    title: str
    message: str
    sent_at: Optional[datetime] = None


class BroadcastSent(BroadcastRead):
    recipient_count: int


class RecipientSelectionRead(BaseModel):
    clients: List[ClientSummary]
    selected_ids: List[int]
    select_all: bool
