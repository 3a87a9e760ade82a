"""
SessionManager: conversation continuity across requests sharing a session id.

There is no server-side session store. A session is nothing more than the
persisted conversation turns that carry the same opaque id:
1. Issue an id on the first turn and recognise it afterwards
2. Window the most recent turns of that session as prompt context
3. Group the flat turn history into sessions for the review UI
"""

import secrets
import string
import time
from collections import defaultdict
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional, Tuple
import logging

from config import settings
from models.chat import is_showcase_answer
from models.conversation import ConversationTurn, ConversationTurnCreate, HistoryTurn, SessionGroup
from services.database import DatabaseService

logger = logging.getLogger(__name__)

LEGACY_SESSION_KEY = "legacy"
SORT_ORDERS = ("asc", "desc")
SESSION_ID_ALPHABET = string.ascii_lowercase + string.digits


def generate_session_id() -> str:
    """Mint an opaque id like session_1718000000000_k3j9x0a1b"""
    suffix = "".join(secrets.choice(SESSION_ID_ALPHABET) for _ in range(9))
    return f"session_{int(time.time() * 1000)}_{suffix}"


class SessionManager:
    def __init__(self, db: DatabaseService, window_size: Optional[int] = None):
        self.db = db
        self.window_size = window_size or settings.HISTORY_WINDOW

    def resolve_session_id(self, provided: Optional[str]) -> Tuple[str, bool]:
        """Return (session_id, is_new). A missing id always starts a new session."""
        if provided and provided.strip():
            return provided.strip(), False

        session_id = generate_session_id()
        logger.info(f"Started new session {session_id}")
        return session_id, True

    def history_window(
        self,
        session_id: Optional[str],
        client_history: Optional[List[HistoryTurn]] = None,
    ) -> List[HistoryTurn]:
        """Prior turns of this session to feed back into the prompt, oldest first

        The cap applies to raw turns; empty answers and showcase markers are
        dropped after the cut, so fewer than `window_size` turns may remain.
        Client-supplied history is only used when the store knows nothing of
        the session.
        """
        if not session_id:
            return []

        try:
            rows = self.db.get_session_conversations(session_id, limit=self.window_size)
        except Exception as e:
            logger.error(f"Failed to load history for session {session_id}: {e}", exc_info=True)
            rows = []

        own_rows = [row for row in rows if row.session_id == session_id]
        if len(own_rows) != len(rows):
            logger.warning(
                f"Discarded {len(rows) - len(own_rows)} turn(s) from other sessions "
                f"while loading {session_id}"
            )

        if own_rows:
            own_rows.sort(key=lambda row: row.timestamp)
            window = [HistoryTurn(question=row.question, answer=row.answer) for row in own_rows[-self.window_size:]]
        else:
            window = list(client_history or [])[-self.window_size:]

        return [turn for turn in window if self._usable(turn)]

    def record_turn(self, question: str, answer: str, session_id: Optional[str]) -> Optional[ConversationTurn]:
        """Persist one turn. Best effort: failures are logged, never raised."""
        try:
            turn = ConversationTurnCreate(question=question, answer=answer, session_id=session_id)
            return self.db.add_conversation(turn.model_dump())
        except Exception as e:
            logger.error(f"Failed to persist conversation turn for session {session_id}: {e}", exc_info=True)
            return None

    @staticmethod
    def _usable(turn: HistoryTurn) -> bool:
        return bool(turn.question.strip()) and bool(turn.answer.strip()) and not is_showcase_answer(turn.answer)


def group_sessions(
    turns: List[ConversationTurn],
    order: str = "desc",
    hide_showcases: bool = False,
    now: Optional[datetime] = None,
) -> List[SessionGroup]:
    """Partition turns into sessions for review

    Args:
        turns: Flat turn list in any order
        order: 'asc' or 'desc' by session start time
        hide_showcases: Drop turns whose answer carries a showcase marker first
        now: Reference time for Today/Yesterday labels (UTC)

    Returns:
        Session groups; sessions left empty by filtering are omitted
    """
    if order not in SORT_ORDERS:
        raise ValueError(f"order must be one of {SORT_ORDERS}, got {order!r}")

    now = _as_utc(now or datetime.now(timezone.utc))

    visible = [t for t in turns if not (hide_showcases and is_showcase_answer(t.answer))]

    buckets: Dict[str, List[ConversationTurn]] = defaultdict(list)
    for turn in visible:
        buckets[turn.session_id or LEGACY_SESSION_KEY].append(turn)

    groups = []
    for session_id, members in buckets.items():
        members = sorted(members, key=lambda t: (_as_utc(t.timestamp), t.id))
        started_at = _as_utc(members[0].timestamp)
        groups.append(SessionGroup(
            session_id=session_id,
            label=session_label(started_at, now),
            started_at=started_at,
            is_legacy=session_id == LEGACY_SESSION_KEY,
            turns=members,
        ))

    groups.sort(key=lambda g: (g.started_at, g.session_id), reverse=(order == "desc"))
    return groups


def session_label(started_at: datetime, now: datetime) -> str:
    """'Today 14:05', 'Yesterday 09:30' or 'Mar 05, 2025 14:05'"""
    started_at = _as_utc(started_at)
    now = _as_utc(now)
    clock = started_at.strftime("%H:%M")

    if started_at.date() == now.date():
        return f"Today {clock}"
    if started_at.date() == (now - timedelta(days=1)).date():
        return f"Yesterday {clock}"
    return started_at.strftime("%b %d, %Y %H:%M")


def _as_utc(value: datetime) -> datetime:
    # Naive timestamps are treated as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
