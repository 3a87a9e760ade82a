"""
Unit tests for SessionManager and session grouping

Tests cover:
- Session id issuance and reuse
- History window: isolation, cap, ordering, showcase filtering
- Client-supplied history fallback
- Best-effort turn persistence
- Grouping into sessions for review (order, labels, legacy bucket, filtering)

Run with:
    pytest tests/test_session_manager.py -v
"""

import pytest
import re
from unittest.mock import Mock, patch
from datetime import datetime, timedelta, timezone

from models.conversation import ConversationTurn, HistoryTurn
from services.session_manager import (
    LEGACY_SESSION_KEY,
    SessionManager,
    generate_session_id,
    group_sessions,
    session_label,
)
from tests.fixtures.portfolio_fixtures import BASE_TIME, sample_session_turns


def newest_first(turns, limit=10):
    """Mimic the store: newest first, capped"""
    return sorted(turns, key=lambda t: t.timestamp, reverse=True)[:limit]


@pytest.fixture
def mock_db():
    return Mock()


@pytest.fixture
def manager(mock_db):
    return SessionManager(mock_db, window_size=10)


class TestSessionIds:
    """Test session id issuance"""

    def test_generated_id_format(self):
        session_id = generate_session_id()
        assert re.fullmatch(r"session_\d+_[a-z0-9]{9}", session_id)

    def test_generated_ids_are_unique(self):
        assert len({generate_session_id() for _ in range(50)}) == 50

    def test_missing_id_starts_new_session(self, manager):
        session_id, is_new = manager.resolve_session_id(None)
        assert is_new is True
        assert session_id.startswith("session_")

    def test_blank_id_starts_new_session(self, manager):
        _, is_new = manager.resolve_session_id("   ")
        assert is_new is True

    def test_provided_id_is_reused(self, manager):
        assert manager.resolve_session_id("session_1_abc") == ("session_1_abc", False)


class TestHistoryWindow:
    """Test which prior turns feed the prompt"""

    def test_no_session_means_no_history(self, manager, mock_db):
        assert manager.history_window(None) == []
        mock_db.get_session_conversations.assert_not_called()

    def test_ten_prior_turns_all_included_oldest_first(self, manager, mock_db):
        turns = sample_session_turns("s1", 10)
        mock_db.get_session_conversations.return_value = newest_first(turns)

        history = manager.history_window("s1")

        mock_db.get_session_conversations.assert_called_once_with("s1", limit=10)
        assert [t.question for t in history] == [f"question {i}" for i in range(1, 11)]

    def test_eleven_prior_turns_drop_the_oldest(self, manager, mock_db):
        turns = sample_session_turns("s1", 11)
        mock_db.get_session_conversations.return_value = newest_first(turns)

        history = manager.history_window("s1")

        assert len(history) == 10
        assert history[0].question == "question 2"
        assert history[-1].question == "question 11"

    def test_window_capped_even_if_store_returns_more(self, manager, mock_db):
        turns = sample_session_turns("s1", 15)
        mock_db.get_session_conversations.return_value = newest_first(turns, limit=15)

        history = manager.history_window("s1")

        assert len(history) == 10
        assert history[0].question == "question 6"

    def test_other_sessions_never_leak(self, manager, mock_db):
        own = sample_session_turns("s1", 2)
        other = sample_session_turns("s2", 2, first_id=100)
        mock_db.get_session_conversations.return_value = newest_first(own + other)

        history = manager.history_window("s1")

        assert len(history) == 2
        assert all(t.question in ("question 1", "question 2") for t in history)

    def test_showcase_and_empty_answers_dropped_after_cut(self, manager, mock_db):
        turns = sample_session_turns("s1", 4)
        turns[1].answer = "PROJECT_SHOWCASE"
        turns[2].answer = "   "
        mock_db.get_session_conversations.return_value = newest_first(turns)

        history = manager.history_window("s1")

        assert [t.question for t in history] == ["question 1", "question 4"]

    def test_client_history_used_when_store_has_nothing(self, manager, mock_db):
        mock_db.get_session_conversations.return_value = []
        client_history = [HistoryTurn(question=f"q{i}", answer=f"a{i}") for i in range(12)]

        history = manager.history_window("s1", client_history)

        assert len(history) == 10
        assert history[0].question == "q2"

    def test_store_failure_falls_back_to_client_history(self, manager, mock_db):
        mock_db.get_session_conversations.side_effect = Exception("connection reset")
        client_history = [HistoryTurn(question="q", answer="a")]

        assert manager.history_window("s1", client_history) == client_history

    def test_client_history_ignored_when_store_has_turns(self, manager, mock_db):
        mock_db.get_session_conversations.return_value = sample_session_turns("s1", 1)
        client_history = [HistoryTurn(question="forged", answer="forged")]

        history = manager.history_window("s1", client_history)

        assert [t.question for t in history] == ["question 1"]


class TestRecordTurn:
    """Test turn persistence"""

    def test_record_turn_writes_one_row(self, manager, mock_db):
        manager.record_turn("Hi?", "Hello!", "s1")
        mock_db.add_conversation.assert_called_once_with({
            "question": "Hi?",
            "answer": "Hello!",
            "session_id": "s1",
        })

    def test_record_turn_swallows_store_errors(self, manager, mock_db):
        mock_db.add_conversation.side_effect = Exception("insert failed")
        assert manager.record_turn("Hi?", "Hello!", "s1") is None


class TestGroupSessions:
    """Test grouping of flat history into sessions"""

    @pytest.fixture
    def turns(self):
        first = sample_session_turns("s1", 2, start=BASE_TIME)
        second = sample_session_turns("s2", 2, start=BASE_TIME + timedelta(hours=1), first_id=10)
        legacy = [ConversationTurn(
            id=50, question="old", answer="old answer", session_id=None,
            timestamp=BASE_TIME - timedelta(days=3),
        )]
        return second + legacy + first

    def test_groups_by_session_id(self, turns):
        groups = group_sessions(turns, now=BASE_TIME)
        assert {g.session_id for g in groups} == {"s1", "s2", LEGACY_SESSION_KEY}

    def test_desc_order_by_session_start(self, turns):
        groups = group_sessions(turns, order="desc", now=BASE_TIME)
        assert [g.session_id for g in groups] == ["s2", "s1", LEGACY_SESSION_KEY]

    def test_asc_order_by_session_start(self, turns):
        groups = group_sessions(turns, order="asc", now=BASE_TIME)
        assert [g.session_id for g in groups] == [LEGACY_SESSION_KEY, "s1", "s2"]

    def test_turns_within_group_oldest_first(self, turns):
        groups = group_sessions(list(reversed(turns)), now=BASE_TIME)
        s1 = next(g for g in groups if g.session_id == "s1")
        assert [t.question for t in s1.turns] == ["question 1", "question 2"]

    def test_legacy_rows_flagged(self, turns):
        groups = group_sessions(turns, now=BASE_TIME)
        legacy = next(g for g in groups if g.session_id == LEGACY_SESSION_KEY)
        assert legacy.is_legacy is True

    def test_grouping_is_idempotent(self, turns):
        once = group_sessions(turns, now=BASE_TIME)
        regrouped = group_sessions([t for g in once for t in g.turns], now=BASE_TIME)
        assert [(g.session_id, [t.id for t in g.turns]) for g in once] == \
            [(g.session_id, [t.id for t in g.turns]) for g in regrouped]

    def test_hide_showcases_omits_emptied_sessions(self):
        turns = sample_session_turns("s1", 1) + sample_session_turns("s2", 2, first_id=10)
        turns[0].answer = "SKILLS_SHOWCASE"
        turns[1].answer = "EXPERIENCE_SHOWCASE"

        groups = group_sessions(turns, hide_showcases=True, now=BASE_TIME)

        assert [g.session_id for g in groups] == ["s2"]
        assert len(groups[0].turns) == 1

    def test_invalid_order_rejected(self, turns):
        with pytest.raises(ValueError):
            group_sessions(turns, order="sideways")


class TestSessionLabel:
    """Test human-readable session labels"""

    def test_today(self):
        now = datetime(2025, 3, 5, 18, 0, tzinfo=timezone.utc)
        assert session_label(datetime(2025, 3, 5, 9, 7, tzinfo=timezone.utc), now) == "Today 09:07"

    def test_yesterday(self):
        now = datetime(2025, 3, 5, 18, 0, tzinfo=timezone.utc)
        assert session_label(datetime(2025, 3, 4, 23, 30, tzinfo=timezone.utc), now) == "Yesterday 23:30"

    def test_older_dates(self):
        now = datetime(2025, 3, 5, 18, 0, tzinfo=timezone.utc)
        assert session_label(datetime(2025, 1, 2, 8, 0, tzinfo=timezone.utc), now) == "Jan 02, 2025 08:00"

    def test_naive_timestamps_treated_as_utc(self):
        now = datetime(2025, 3, 5, 18, 0, tzinfo=timezone.utc)
        assert session_label(datetime(2025, 3, 5, 10, 0), now) == "Today 10:00"


class TestSessionIdRandomness:
    """Test the source of session id suffixes"""

    def test_suffix_drawn_from_secrets(self):
        with patch('services.session_manager.secrets.choice', return_value="z") as mock_choice:
            session_id = generate_session_id()

        assert session_id.endswith("_zzzzzzzzz")
        assert mock_choice.call_count == 9
