"""
Tests for Request Models

Covers inbound body validation for POST /chat, role normalization, and
translation into the upstream request.
"""

import pytest
from pydantic import ValidationError

from src.models.requests import (
    ChatCompletionRequest,
    ChatRequest,
    Message,
    MessageTurn,
    normalize_role,
)


class TestNormalizeRole:
    @pytest.mark.parametrize("role", ["user", "assistant", "system"])
    def test_known_roles_are_kept(self, role):
        assert normalize_role(role) == role

    @pytest.mark.parametrize("role", ["moderator", "tool", "", "User", "SYSTEM"])
    def test_other_roles_become_user(self, role):
        assert normalize_role(role) == "user"


class TestMessageTurn:
    def test_unknown_role_normalized_without_error(self):
        turn = MessageTurn(role="moderator", content="hello")

        assert turn.role == "user"
        assert turn.content == "hello"

    def test_turn_is_immutable(self):
        turn = MessageTurn(role="user", content="hello")

        with pytest.raises(ValidationError):
            turn.content = "changed"

    def test_content_required(self):
        with pytest.raises(ValidationError):
            MessageTurn.model_validate({"role": "user"})


class TestChatRequest:
    def test_minimal_body(self):
        request = ChatRequest.model_validate(
            {"max_tokens": 50, "contents": [{"role": "user", "content": "hello"}]}
        )

        assert request.api_key == ""
        assert request.max_tokens == 50
        assert request.contents == [MessageTurn(role="user", content="hello")]

    def test_api_key_accepted(self):
        request = ChatRequest.model_validate(
            {"api_key": "sk-request", "max_tokens": 1024, "contents": []}
        )

        assert request.api_key == "sk-request"

    def test_contents_order_preserved(self):
        request = ChatRequest.model_validate(
            {
                "max_tokens": 10,
                "contents": [
                    {"role": "system", "content": "be brief"},
                    {"role": "user", "content": "hi"},
                    {"role": "assistant", "content": "hello"},
                    {"role": "user", "content": "bye"},
                ],
            }
        )

        assert [t.content for t in request.contents] == ["be brief", "hi", "hello", "bye"]
        assert [t.role for t in request.contents] == ["system", "user", "assistant", "user"]

    def test_empty_contents_accepted(self):
        request = ChatRequest.model_validate({"max_tokens": 10, "contents": []})

        assert request.contents == []

    def test_missing_max_tokens_rejected(self):
        with pytest.raises(ValidationError):
            ChatRequest.model_validate({"contents": [{"role": "user", "content": "hi"}]})

    def test_missing_contents_rejected(self):
        with pytest.raises(ValidationError):
            ChatRequest.model_validate({"max_tokens": 10})

    @pytest.mark.parametrize("max_tokens", [-1, 65536, "50", 12.5])
    def test_max_tokens_must_be_u16_integer(self, max_tokens):
        with pytest.raises(ValidationError):
            ChatRequest.model_validate({"max_tokens": max_tokens, "contents": []})


class TestChatCompletionRequest:
    def test_from_chat_request(self):
        inbound = ChatRequest.model_validate(
            {
                "max_tokens": 50,
                "contents": [
                    {"role": "system", "content": "be brief"},
                    {"role": "moderator", "content": "hello"},
                ],
            }
        )

        upstream = ChatCompletionRequest.from_chat_request("gpt-3.5-turbo", inbound)

        assert upstream.model == "gpt-3.5-turbo"
        assert upstream.max_tokens == 50
        assert upstream.messages == [
            Message(role="system", content="be brief"),
            Message(role="user", content="hello"),
        ]

    def test_empty_model_fails_construction(self):
        inbound = ChatRequest.model_validate({"max_tokens": 50, "contents": []})

        with pytest.raises(ValidationError):
            ChatCompletionRequest.from_chat_request("", inbound)
