"""Conversion of caller-supplied history into completion API messages."""
from typing import Any, List

from models.conversation import ChatMessage, USER_AUTHOR


def build_messages_from_history(history: Any) -> List[ChatMessage]:
    """
    Map conversation turns to role-tagged chat messages.

    Entries without a non-empty string ``text`` or an ``author`` are dropped and the
    order of the rest is kept. Anything that is not a list yields no messages.

    Args:
        history: Caller-supplied list of ``{"author": ..., "text": ...}`` turns

    Returns:
        List of ChatMessage with role "user" for user turns and "assistant"
        for everything else
    """
    if not isinstance(history, list):
        return []

    messages: List[ChatMessage] = []
    for turn in history:
        if not isinstance(turn, dict):
            continue
        text = turn.get("text")
        author = turn.get("author")
        if not isinstance(text, str) or not text or not author:
            continue
        messages.append(
            ChatMessage(
                role="user" if author == USER_AUTHOR else "assistant",
                content=text,
            )
        )
    return messages
