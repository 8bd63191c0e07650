"""Unit tests for history normalization."""
import sys
sys.path.insert(0, 'backend')

import pytest
from services.history import build_messages_from_history
from models.conversation import ChatMessage


class TestBuildMessagesFromHistory:
    """Test suite for build_messages_from_history."""

    def test_maps_user_and_ai_authors_to_roles(self):
        history = [
            {"author": "user", "text": "Do you fix gutters?"},
            {"author": "ai", "text": "Yes, we do."},
        ]

        messages = build_messages_from_history(history)

        assert messages == [
            ChatMessage(role="user", content="Do you fix gutters?"),
            ChatMessage(role="assistant", content="Yes, we do."),
        ]

    def test_unknown_author_becomes_assistant(self):
        messages = build_messages_from_history([{"author": "bot", "text": "Hello"}])

        assert messages[0].role == "assistant"

    def test_drops_entries_missing_text_or_author(self):
        history = [
            {"author": "user", "text": "first"},
            {"author": "user"},
            {"text": "no author"},
            {"author": "ai", "text": ""},
            {"author": "", "text": "blank author"},
            None,
            "not a turn",
            {"author": "ai", "text": "second"},
        ]

        messages = build_messages_from_history(history)

        assert [m.content for m in messages] == ["first", "second"]

    def test_drops_non_string_text(self):
        history = [
            {"author": "user", "text": {"a": 1}},
            {"author": "ai", "text": 42},
            {"author": "user", "text": ["list"]},
            {"author": "user", "text": "kept"},
        ]

        messages = build_messages_from_history(history)

        assert messages == [ChatMessage(role="user", content="kept")]

    def test_preserves_order(self):
        history = [{"author": "user" if i % 2 == 0 else "ai", "text": f"turn {i}"} for i in range(6)]

        messages = build_messages_from_history(history)

        assert [m.content for m in messages] == [f"turn {i}" for i in range(6)]

    @pytest.mark.parametrize("value", [None, "history", 42, {"author": "user", "text": "hi"}])
    def test_non_list_input_yields_empty(self, value):
        assert build_messages_from_history(value) == []

    def test_does_not_mutate_input(self):
        history = [{"author": "user", "text": "hi"}, {"author": "user"}]
        snapshot = [dict(turn) for turn in history]

        build_messages_from_history(history)

        assert history == snapshot

    def test_to_dict_wire_shape(self):
        messages = build_messages_from_history([{"author": "user", "text": "hi"}])

        assert messages[0].to_dict() == {"role": "user", "content": "hi"}
