"""Conversation data models."""
from dataclasses import dataclass, asdict
from typing import Dict

USER_AUTHOR = "user"
AI_AUTHOR = "ai"

@dataclass
class ConversationTurn:
    """One message exchanged between a visitor and the assistant."""
    author: str  # "user" or "ai"
    text: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)

@dataclass
class ChatMessage:
    """Role-tagged message in the shape the completion API expects."""
    role: str  # "system", "user" or "assistant"
    content: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)
