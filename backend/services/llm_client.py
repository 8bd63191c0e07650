"""LLM Client for the Groq chat completions API."""
import time
from dataclasses import dataclass
from typing import List, Optional, Dict, Any
from groq import AsyncGroq
from groq import RateLimitError, AuthenticationError, APIError, APITimeoutError
import logging

from config import GROQ_API_KEY, CHAT_MODEL, CHAT_MAX_TOKENS, CHAT_TEMPERATURE
from models.conversation import ChatMessage

logger = logging.getLogger(__name__)


@dataclass
class LLMError:
    """Structured error response from LLM operations."""
    code: str
    message: str
    details: Dict[str, Any]


class LLMClientError(Exception):
    """Custom exception for LLM client errors with structured error information."""

    def __init__(self, error: LLMError):
        self.error = error
        super().__init__(error.message)


class LLMClient:
    """Client for the completion API with a pinned model and sampling settings."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = CHAT_MODEL,
        max_tokens: int = CHAT_MAX_TOKENS,
        temperature: float = CHAT_TEMPERATURE
    ):
        """
        Initialize LLM client with Groq API key.

        Args:
            api_key: Groq API key (defaults to GROQ_API_KEY from environment)
            model: Model identifier sent with every request
            max_tokens: Maximum tokens to generate per reply
            temperature: Sampling temperature
        """
        self.api_key = api_key or GROQ_API_KEY
        if not self.api_key:
            raise ValueError("GROQ_API_KEY must be provided or set in environment")

        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        # Each upstream call is attempted exactly once
        self.client = AsyncGroq(api_key=self.api_key, max_retries=0)
        logger.info(f"LLMClient initialized with model: {model}")

    async def complete(self, messages: List[ChatMessage]) -> Dict[str, Any]:
        """
        Send the message list to the completion API.

        Args:
            messages: Full conversation including the system message

        Returns:
            Raw completion payload as a dict
            (``{"choices": [{"message": {"content": ...}}], ...}``)

        Raises:
            LLMClientError: Structured error with code, message, and details
        """
        start_time = time.time()

        try:
            logger.debug(f"Requesting completion: model={self.model}, messages={len(messages)}")

            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[message.to_dict() for message in messages],
                max_tokens=self.max_tokens,
                temperature=self.temperature
            )

            latency_ms = int((time.time() - start_time) * 1000)
            logger.info(f"Completion received: model={self.model}, latency={latency_ms}ms")

            return response.model_dump()

        except RateLimitError as e:
            self._raise(
                "RATE_LIMIT_ERROR",
                "Rate limit exceeded. Please try again in a few moments.",
                e,
                start_time
            )
        except AuthenticationError as e:
            self._raise(
                "AUTHENTICATION_ERROR",
                "Authentication failed. Please check your API key.",
                e,
                start_time
            )
        except APITimeoutError as e:
            self._raise("TIMEOUT_ERROR", "Request timed out. Please try again.", e, start_time)
        except APIError as e:
            self._raise("API_ERROR", f"Groq API error: {str(e)}", e, start_time)
        except Exception as e:
            self._raise(
                "UNKNOWN_ERROR",
                f"Unexpected error during completion: {str(e)}",
                e,
                start_time,
                error_type=type(e).__name__
            )

    def _raise(self, code: str, message: str, exc: Exception, start_time: float, **extra: Any) -> None:
        latency_ms = int((time.time() - start_time) * 1000)
        error = LLMError(
            code=code,
            message=message,
            details={
                "model": self.model,
                "latency_ms": latency_ms,
                "original_error": str(exc),
                **extra
            }
        )
        logger.error(
            f"Completion failed: code={code}, model={self.model}, latency={latency_ms}ms, error={exc}",
            exc_info=True,
            extra={"error_code": error.code, "error_details": error.details}
        )
        raise LLMClientError(error) from exc
