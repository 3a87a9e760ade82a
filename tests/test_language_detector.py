"""
Unit tests for LanguageDetector

Tests cover:
- Accept-Language parsing
- Private and loopback addresses
- Geolocation lookups and their failures

Run with:
    pytest tests/test_language_detector.py -v
"""

import pytest
import requests
from unittest.mock import Mock, patch

from services.language_detector import LanguageDetector


@pytest.fixture
def detector():
    return LanguageDetector(geolocation_url="https://geo.test/{ip}/json/", timeout=2)


def geo_response(country_code):
    response = Mock()
    response.json.return_value = {"country_code": country_code}
    response.raise_for_status.return_value = None
    return response


class TestLocale:
    """Test locale-based detection"""

    @pytest.mark.parametrize("locale,expected", [
        ("de-DE,de;q=0.9,en;q=0.8", "de"),
        ("ko-KR", "ko"),
        ("nl_BE", "nl"),
        ("fr-FR,nl;q=0.5", "nl"),
        ("fr-FR", "en"),
        ("", "en"),
    ])
    def test_from_locale(self, detector, locale, expected):
        assert detector.from_locale(locale) == expected

    def test_missing_value_defaults_to_english(self, detector):
        assert detector.detect_preferred_language(None) == "en"


class TestIpLookup:
    """Test IP geolocation"""

    def test_private_addresses_skip_lookup(self, detector):
        with patch('services.language_detector.requests.get') as mock_get:
            assert detector.detect_preferred_language("192.168.1.10") == "en"
            assert detector.detect_preferred_language("127.0.0.1") == "en"
            mock_get.assert_not_called()

    @pytest.mark.parametrize("country,expected", [
        ("KR", "ko"),
        ("DE", "de"),
        ("AT", "de"),
        ("BE", "nl"),
        ("US", "en"),
    ])
    def test_country_mapping(self, detector, country, expected):
        with patch('services.language_detector.requests.get', return_value=geo_response(country)) as mock_get:
            assert detector.detect_preferred_language("8.8.8.8") == expected
            mock_get.assert_called_once_with("https://geo.test/8.8.8.8/json/", timeout=2)

    def test_lookup_failure_defaults_to_english(self, detector):
        with patch('services.language_detector.requests.get', side_effect=requests.Timeout("slow")):
            assert detector.detect_preferred_language("8.8.8.8") == "en"
