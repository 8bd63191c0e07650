"""Unit tests for LLMClient."""
import sys
sys.path.insert(0, 'backend')

import asyncio
import pytest
from unittest.mock import AsyncMock, Mock, patch
from services.llm_client import LLMClient, LLMError, LLMClientError
from models.conversation import ChatMessage
from config import CHAT_MODEL, CHAT_MAX_TOKENS, CHAT_TEMPERATURE
from groq import RateLimitError, AuthenticationError, APIError, APITimeoutError


MESSAGES = [
    ChatMessage(role="system", content="You are Earthy AI."),
    ChatMessage(role="user", content="Need a quote for a new roof"),
]


def _mock_groq(mock_groq_class, result=None, side_effect=None):
    mock_client = Mock()
    mock_client.chat.completions.create = AsyncMock(return_value=result, side_effect=side_effect)
    mock_groq_class.return_value = mock_client
    return mock_client


class TestLLMClient:
    """Test suite for LLMClient class."""

    def test_initialization_with_api_key(self):
        """Test LLMClient initializes with provided API key."""
        client = LLMClient(api_key="test_key")
        assert client.api_key == "test_key"
        assert client.model == CHAT_MODEL

    def test_initialization_without_api_key_raises_error(self):
        """Test LLMClient raises error when no API key provided."""
        with patch('services.llm_client.GROQ_API_KEY', None):
            with pytest.raises(ValueError, match="GROQ_API_KEY must be provided"):
                LLMClient()

    @patch('services.llm_client.AsyncGroq')
    def test_sdk_retries_disabled(self, mock_groq_class):
        """Test the SDK client is built without automatic retries."""
        LLMClient(api_key="test_key")

        mock_groq_class.assert_called_once_with(api_key="test_key", max_retries=0)

    @patch('services.llm_client.AsyncGroq')
    def test_complete_returns_raw_payload(self, mock_groq_class):
        """Test successful completion returns the upstream payload as a dict."""
        payload = {"choices": [{"message": {"role": "assistant", "content": "Sure, when?"}}]}
        mock_response = Mock()
        mock_response.model_dump.return_value = payload
        _mock_groq(mock_groq_class, result=mock_response)

        client = LLMClient(api_key="test_key")
        result = asyncio.run(client.complete(MESSAGES))

        assert result == payload

    @patch('services.llm_client.AsyncGroq')
    def test_complete_sends_pinned_model_and_sampling(self, mock_groq_class):
        """Test request carries the fixed model, token budget and temperature."""
        mock_response = Mock()
        mock_response.model_dump.return_value = {"choices": []}
        mock_client = _mock_groq(mock_groq_class, result=mock_response)

        client = LLMClient(api_key="test_key")
        asyncio.run(client.complete(MESSAGES))

        mock_client.chat.completions.create.assert_awaited_once_with(
            model=CHAT_MODEL,
            messages=[
                {"role": "system", "content": "You are Earthy AI."},
                {"role": "user", "content": "Need a quote for a new roof"},
            ],
            max_tokens=CHAT_MAX_TOKENS,
            temperature=CHAT_TEMPERATURE
        )

    def test_pinned_defaults(self):
        """Test sampling defaults stay short and moderate."""
        assert CHAT_MAX_TOKENS == 150
        assert CHAT_TEMPERATURE == 0.6

    @patch('services.llm_client.AsyncGroq')
    def test_complete_handles_unknown_error(self, mock_groq_class):
        """Test that unexpected errors are raised with structured error."""
        _mock_groq(mock_groq_class, side_effect=Exception("boom"))

        client = LLMClient(api_key="test_key")

        with pytest.raises(LLMClientError) as exc_info:
            asyncio.run(client.complete(MESSAGES))

        error = exc_info.value.error
        assert isinstance(error, LLMError)
        assert error.code == "UNKNOWN_ERROR"
        assert "Unexpected error" in error.message
        assert error.details["model"] == CHAT_MODEL
        assert error.details["error_type"] == "Exception"

    @patch('services.llm_client.AsyncGroq')
    def test_complete_handles_rate_limit_error(self, mock_groq_class):
        """Test that rate limit errors are mapped."""
        _mock_groq(mock_groq_class, side_effect=RateLimitError(
            message="Rate limit exceeded",
            response=Mock(status_code=429),
            body=None
        ))

        client = LLMClient(api_key="test_key")

        with pytest.raises(LLMClientError) as exc_info:
            asyncio.run(client.complete(MESSAGES))

        assert exc_info.value.error.code == "RATE_LIMIT_ERROR"
        assert "Rate limit exceeded" in exc_info.value.error.message

    @patch('services.llm_client.AsyncGroq')
    def test_complete_handles_authentication_error(self, mock_groq_class):
        """Test that authentication errors are mapped."""
        _mock_groq(mock_groq_class, side_effect=AuthenticationError(
            message="Invalid API key",
            response=Mock(status_code=401),
            body=None
        ))

        client = LLMClient(api_key="test_key")

        with pytest.raises(LLMClientError) as exc_info:
            asyncio.run(client.complete(MESSAGES))

        assert exc_info.value.error.code == "AUTHENTICATION_ERROR"
        assert "Authentication failed" in exc_info.value.error.message

    @patch('services.llm_client.AsyncGroq')
    def test_complete_handles_timeout_error(self, mock_groq_class):
        """Test that timeout errors are mapped."""
        _mock_groq(mock_groq_class, side_effect=APITimeoutError(request=Mock()))

        client = LLMClient(api_key="test_key")

        with pytest.raises(LLMClientError) as exc_info:
            asyncio.run(client.complete(MESSAGES))

        assert exc_info.value.error.code == "TIMEOUT_ERROR"
        assert "timed out" in exc_info.value.error.message

    @patch('services.llm_client.AsyncGroq')
    def test_complete_handles_generic_api_error(self, mock_groq_class):
        """Test that generic API errors are mapped."""
        _mock_groq(mock_groq_class, side_effect=APIError(
            message="Service unavailable",
            request=Mock(),
            body=None
        ))

        client = LLMClient(api_key="test_key")

        with pytest.raises(LLMClientError) as exc_info:
            asyncio.run(client.complete(MESSAGES))

        assert exc_info.value.error.code == "API_ERROR"
        assert "Service unavailable" in exc_info.value.error.message

    @patch('services.llm_client.AsyncGroq')
    def test_complete_called_once_per_request(self, mock_groq_class):
        """Test that a failure is not retried."""
        mock_client = _mock_groq(mock_groq_class, side_effect=Exception("down"))

        client = LLMClient(api_key="test_key")

        with pytest.raises(LLMClientError):
            asyncio.run(client.complete(MESSAGES))

        assert mock_client.chat.completions.create.await_count == 1
