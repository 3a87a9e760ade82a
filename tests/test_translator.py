"""
Unit tests for Translator

Tests cover:
- English passthrough
- Cache hits and cache writes
- Failures returning the original text
- Concurrent translation of record details

Run with:
    pytest tests/test_translator.py -v
"""

import pytest
from unittest.mock import Mock

from models.content import Translation
from services.translator import Translator
from utils.errors import UpstreamError
from tests.fixtures.portfolio_fixtures import sample_experiences, sample_projects


@pytest.fixture
def completion():
    mock = Mock()
    mock.complete.side_effect = lambda system, user_message, **kwargs: f"[de] {user_message}"
    return mock


@pytest.fixture
def mock_db():
    db = Mock()
    db.get_cached_translation.return_value = None
    return db


@pytest.fixture
def translator(completion, mock_db):
    return Translator(completion, mock_db)


class TestTranslateText:
    """Test single text translation"""

    def test_english_is_identity(self, translator, completion, mock_db):
        assert translator.translate_text("Hello", "en") == "Hello"
        completion.complete.assert_not_called()
        mock_db.get_cached_translation.assert_not_called()

    def test_empty_text_is_returned_as_is(self, translator, completion):
        assert translator.translate_text("", "de") == ""
        completion.complete.assert_not_called()

    def test_translates_and_caches(self, translator, completion, mock_db):
        result = translator.translate_text("Hello", "de", "greeting")

        assert result == "[de] Hello"
        system = completion.complete.call_args.kwargs["system"]
        assert "German" in system
        assert "Context: greeting" in system
        mock_db.add_translation.assert_called_once_with({
            "original_text": "Hello",
            "translated_text": "[de] Hello",
            "language": "de",
            "context": "greeting",
        })

    def test_cache_hit_skips_provider(self, translator, completion, mock_db):
        mock_db.get_cached_translation.return_value = Translation(
            original_text="Hello", translated_text="Hallo", language="de"
        )

        assert translator.translate_text("Hello", "de") == "Hallo"
        completion.complete.assert_not_called()

    def test_provider_failure_returns_original(self, translator, completion, mock_db):
        completion.complete.side_effect = UpstreamError("down")

        assert translator.translate_text("Hello", "de") == "Hello"
        mock_db.add_translation.assert_not_called()

    def test_cache_write_failure_is_not_fatal(self, translator, mock_db):
        mock_db.add_translation.side_effect = Exception("insert failed")
        assert translator.translate_text("Hello", "de") == "[de] Hello"

    def test_cache_lookup_failure_still_translates(self, translator, mock_db):
        mock_db.get_cached_translation.side_effect = Exception("select failed")
        assert translator.translate_text("Hello", "de") == "[de] Hello"

    def test_works_without_store(self, completion):
        translator = Translator(completion)
        assert translator.translate_text("Hello", "de") == "[de] Hello"


class TestTranslateRecords:
    """Test detailed content translation of projects and experiences"""

    def test_english_returns_records_untouched(self, translator, completion):
        projects = sample_projects()
        result, _ = translator.translate_records("en", projects=projects)
        assert result is projects
        completion.complete.assert_not_called()

    def test_translates_only_detailed_content(self, translator):
        projects, experiences = translator.translate_records(
            "de", projects=sample_projects(), experiences=sample_experiences()
        )

        assert projects[0].detailed_content == "[de] Implemented the solver and its HTTP API."
        assert projects[0].title == "Route Planner"
        assert projects[1].detailed_content is None
        assert experiences[0].detailed_content == "[de] Migrated the ledger to event sourcing."

    def test_order_is_preserved(self, translator):
        projects, _ = translator.translate_records("de", projects=sample_projects())
        assert [p.id for p in projects] == [1, 2]

    def test_originals_not_mutated(self, translator):
        originals = sample_projects()
        translator.translate_records("de", projects=originals)
        assert originals[0].detailed_content == "Implemented the solver and its HTTP API."

    def test_failed_record_keeps_original_text(self, translator, completion):
        completion.complete.side_effect = UpstreamError("down")
        projects, _ = translator.translate_records("de", projects=sample_projects())
        assert projects[0].detailed_content == "Implemented the solver and its HTTP API."
