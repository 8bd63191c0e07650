"""Services for the Earthy AI relay backend."""
from .history import build_messages_from_history
from .llm_client import LLMClient, LLMError, LLMClientError
from .email_client import EmailClient, EmailError, EmailClientError
from .chat_relay import ChatRelay
from .enquiry_relay import EnquiryRelay

__all__ = ['build_messages_from_history', 'LLMClient', 'LLMError', 'LLMClientError', 'EmailClient', 'EmailError', 'EmailClientError', 'ChatRelay', 'EnquiryRelay']
