"""
Unit tests for CompletionService

Tests cover:
- Request shape sent to the Anthropic client
- Text extraction and empty responses
- Error mapping to ConfigurationError / UpstreamError

Run with:
    pytest tests/test_completion.py -v
"""

import pytest
import anthropic
import httpx
from unittest.mock import Mock, patch

from services.completion import CompletionService
from utils.errors import ConfigurationError, UpstreamError


def mock_client(text="Hello there"):
    client = Mock()
    mock_response = Mock()
    mock_response.content = [Mock(text=text)]
    client.messages.create.return_value = mock_response
    return client


class TestCompletionInitialization:
    """Test service construction"""

    def test_uses_configured_model(self):
        service = CompletionService(client=mock_client())
        assert service.model == "claude-sonnet-4-5"

    def test_missing_api_key_is_configuration_error(self):
        with patch('services.completion.settings') as mock_settings:
            mock_settings.ANTHROPIC_API_KEY = ""
            with pytest.raises(ConfigurationError):
                CompletionService()


class TestComplete:
    """Test completion calls"""

    def test_sends_system_and_single_user_message(self):
        client = mock_client()
        service = CompletionService(client=client, model="test-model")

        service.complete("You are helpful", "Hi?", max_tokens=100, temperature=0.5)

        client.messages.create.assert_called_once_with(
            model="test-model",
            max_tokens=100,
            temperature=0.5,
            system="You are helpful",
            messages=[{"role": "user", "content": "Hi?"}],
        )

    def test_returns_stripped_text(self):
        service = CompletionService(client=mock_client("  Hello!\n"))
        assert service.complete("s", "u", max_tokens=10, temperature=0) == "Hello!"

    def test_empty_content_returns_empty_string(self):
        client = mock_client()
        client.messages.create.return_value.content = []
        service = CompletionService(client=client)
        assert service.complete("s", "u", max_tokens=10, temperature=0) == ""

    def test_authentication_failure_is_configuration_error(self):
        client = mock_client()
        request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
        client.messages.create.side_effect = anthropic.AuthenticationError(
            "invalid x-api-key",
            response=httpx.Response(401, request=request),
            body=None,
        )
        service = CompletionService(client=client)

        with pytest.raises(ConfigurationError):
            service.complete("s", "u", max_tokens=10, temperature=0)

    def test_other_failures_are_upstream_errors(self):
        client = mock_client()
        client.messages.create.side_effect = TimeoutError("timed out")
        service = CompletionService(client=client)

        with pytest.raises(UpstreamError):
            service.complete("s", "u", max_tokens=10, temperature=0)
