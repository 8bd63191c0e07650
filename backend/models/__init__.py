"""Data models for the Earthy AI relay backend."""
from .conversation import ConversationTurn, ChatMessage, USER_AUTHOR, AI_AUTHOR
from .enquiry import EnquiryRecord, normalize_website
from .api import ChatResponse, LeadResponse, RelayResult

__all__ = [
    "ConversationTurn",
    "ChatMessage",
    "USER_AUTHOR",
    "AI_AUTHOR",
    "EnquiryRecord",
    "normalize_website",
    "ChatResponse",
    "LeadResponse",
    "RelayResult",
]
