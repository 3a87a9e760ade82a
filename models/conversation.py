from datetime import datetime
from typing import List, Optional

from models.content import CamelModel


class ConversationTurnCreate(CamelModel):
    question: str
    answer: str
    session_id: Optional[str] = None


class ConversationTurn(ConversationTurnCreate):
    """One persisted question/answer pair. Append-only."""
    id: int
    timestamp: datetime


class HistoryTurn(CamelModel):
    """A prior turn as fed back into the prompt"""
    question: str
    answer: str


class SessionGroup(CamelModel):
    """Derived view: contiguous turns sharing a session id, oldest first"""
    session_id: str  # LEGACY_SESSION_KEY for rows without an id
    label: str
    started_at: datetime
    is_legacy: bool = False
    turns: List[ConversationTurn]
