"""Chat relay: visitor message in, one completion call, assistant reply out."""
import json
import logging
from typing import Any, Dict, List, Optional

from models.api import ChatResponse, RelayResult
from models.conversation import ChatMessage, ConversationTurn, AI_AUTHOR
from services.history import build_messages_from_history
from services.llm_client import LLMClient, LLMClientError, LLMError

logger = logging.getLogger(__name__)


class ChatRelay:
    """
    Relays one visitor message to the completion API.

    The caller owns the conversation: it sends the full history with every
    request and receives it back, extended by one assistant turn on success.
    Nothing is stored between requests.
    """

    REJECTION_REPLY = "Please enter a message."
    APOLOGY_REPLY = "Sorry — something went wrong. Please try again."
    SERVER_ERROR_REPLY = "Server error"

    def __init__(self, llm_client: Optional[LLMClient], system_prompt: str):
        """
        Args:
            llm_client: Completion client, or None when no credential is configured
            system_prompt: Persona instruction sent as the first message
        """
        self.llm_client = llm_client
        self.system_prompt = system_prompt

    async def handle(self, body: Any) -> RelayResult:
        """
        Process a ``{"input": str, "history": [...]}`` request body.

        Returns:
            RelayResult with status 200, 400 or 500 and a
            ``{"reply": ..., "history": ...}`` body. Never raises.
        """
        data: Dict[str, Any] = body if isinstance(body, dict) else {}

        try:
            user_input = data.get("input")
            history = data.get("history", [])

            if not isinstance(user_input, str) or not user_input.strip():
                logger.info("Rejected chat request with empty input")
                return self._respond(400, self.REJECTION_REPLY, history)

            messages = self.build_messages(user_input, history)
            logger.info(f"Relaying chat message: history_turns={len(messages) - 2}")

            payload = await self._complete(messages)
            reply = self.extract_reply(payload)

            if reply is None:
                logger.error(
                    "Completion API returned no usable reply: %s",
                    json.dumps(payload, indent=2, default=str),
                    extra={"upstream_payload": payload}
                )
                return self._respond(500, self.APOLOGY_REPLY, history)

            prior_turns = list(history) if isinstance(history, list) else []
            updated_history = prior_turns + [ConversationTurn(author=AI_AUTHOR, text=reply).to_dict()]
            return self._respond(200, reply, updated_history)

        except Exception as e:
            logger.error(f"Chat error: {e}", exc_info=True)
            return self.server_error(data.get("history"))

    def build_messages(self, user_input: str, history: Any) -> List[ChatMessage]:
        """System persona, then normalized history, then the new user message."""
        messages = build_messages_from_history(history)
        messages.insert(0, ChatMessage(role="system", content=self.system_prompt))
        messages.append(ChatMessage(role="user", content=user_input))
        return messages

    @staticmethod
    def extract_reply(payload: Any) -> Optional[str]:
        """
        Pull the assistant text out of the first completion choice.

        Returns None when the content is absent, not a string, or blank.
        There is no placeholder fallback.
        """
        try:
            content = payload["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            return None

        if not isinstance(content, str):
            return None

        content = content.strip()
        return content or None

    async def _complete(self, messages: List[ChatMessage]) -> Dict[str, Any]:
        if self.llm_client is None:
            raise LLMClientError(LLMError(
                code="NOT_CONFIGURED",
                message="Completion API credential is not configured",
                details={}
            ))
        return await self.llm_client.complete(messages)

    @classmethod
    def server_error(cls, history: Any = None) -> RelayResult:
        """Generic 500 used when a request cannot be processed; falsy history becomes []."""
        return cls._respond(500, cls.SERVER_ERROR_REPLY, history or [])

    @staticmethod
    def _respond(status_code: int, reply: str, history: Any) -> RelayResult:
        return RelayResult(
            status_code=status_code,
            body=ChatResponse(reply=reply, history=history).model_dump()
        )
