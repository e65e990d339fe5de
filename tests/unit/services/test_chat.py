"""
Tests for Chat Service

Covers credential resolution, upstream request construction, first-choice
extraction and translation of every failure into a 500 envelope.
"""

import pytest
from pydantic import SecretStr

from src.core.exceptions import (
    CredentialMissingError,
    EmptyChoicesError,
    EmptyContentError,
    ProviderError,
)
from src.models.requests import ChatRequest, Message
from src.models.responses import ChatCompletionResponse, Choice, ChoiceMessage
from src.providers.fake import FakeProviderFactory
from src.services.chat import ChatService, extract_first_choice_text, resolve_api_key


def make_request(**overrides) -> ChatRequest:
    body = {"max_tokens": 50, "contents": [{"role": "user", "content": "hello"}]}
    body.update(overrides)
    return ChatRequest.model_validate(body)


# =============================================================================
# resolve_api_key
# =============================================================================


class TestResolveApiKey:
    def test_request_key_used_when_present(self):
        assert resolve_api_key("sk-request", None) == "sk-request"

    def test_request_key_wins_over_fallback(self):
        assert resolve_api_key("sk-request", SecretStr("sk-fallback")) == "sk-request"

    def test_fallback_used_when_request_key_empty(self):
        assert resolve_api_key("", SecretStr("sk-fallback")) == "sk-fallback"

    def test_whitespace_keys_are_not_empty(self):
        assert resolve_api_key("  ", SecretStr("sk-fallback")) == "  "
        assert resolve_api_key("", SecretStr("  ")) == "  "

    def test_missing_everywhere_raises(self):
        with pytest.raises(CredentialMissingError) as exc_info:
            resolve_api_key("", None)

        assert exc_info.value.message == "api_key is empty"


# =============================================================================
# extract_first_choice_text
# =============================================================================


class TestExtractFirstChoiceText:
    @staticmethod
    def _response(*contents):
        return ChatCompletionResponse(
            id="chatcmpl-1",
            created=0,
            model="gpt-3.5-turbo",
            choices=[
                Choice(index=i, message=ChoiceMessage(content=c))
                for i, c in enumerate(contents)
            ],
        )

    def test_returns_first_choice(self):
        assert extract_first_choice_text(self._response("first", "second")) == "first"

    def test_empty_string_is_valid_content(self):
        assert extract_first_choice_text(self._response("")) == ""

    def test_no_choices(self):
        with pytest.raises(EmptyChoicesError):
            extract_first_choice_text(self._response())

    def test_no_content(self):
        with pytest.raises(EmptyContentError):
            extract_first_choice_text(self._response(None, "second"))


# =============================================================================
# ChatService.complete
# =============================================================================


class TestChatServiceSuccess:
    @pytest.mark.asyncio
    async def test_returns_first_choice_text(self, settings_with_fallback, fake_provider_factory):
        service = ChatService(settings_with_fallback, provider_factory=fake_provider_factory)

        envelope = await service.complete(make_request())

        assert envelope.model_dump() == {"message": "hi there", "code": 200}

    @pytest.mark.asyncio
    async def test_exactly_one_upstream_call(self, settings_with_fallback, fake_provider_factory):
        service = ChatService(settings_with_fallback, provider_factory=fake_provider_factory)

        await service.complete(make_request())

        assert len(fake_provider_factory.providers) == 1
        assert len(fake_provider_factory.complete_calls) == 1

    @pytest.mark.asyncio
    async def test_upstream_request_carries_model_limit_and_turns(
        self, settings_with_fallback, fake_provider_factory
    ):
        service = ChatService(settings_with_fallback, provider_factory=fake_provider_factory)

        await service.complete(
            make_request(
                max_tokens=128,
                contents=[
                    {"role": "system", "content": "be brief"},
                    {"role": "moderator", "content": "hello"},
                ],
            )
        )

        upstream = fake_provider_factory.complete_calls[0]
        assert upstream.model == "gpt-3.5-turbo"
        assert upstream.max_tokens == 128
        assert upstream.messages == [
            Message(role="system", content="be brief"),
            Message(role="user", content="hello"),
        ]

    @pytest.mark.asyncio
    async def test_provider_is_closed(self, settings_with_fallback, fake_provider_factory):
        service = ChatService(settings_with_fallback, provider_factory=fake_provider_factory)

        await service.complete(make_request())

        assert fake_provider_factory.providers[0].closed is True

    @pytest.mark.asyncio
    async def test_empty_contents_forwarded(self, settings_with_fallback, fake_provider_factory):
        service = ChatService(settings_with_fallback, provider_factory=fake_provider_factory)

        envelope = await service.complete(make_request(contents=[]))

        assert envelope.code == 200
        assert fake_provider_factory.complete_calls[0].messages == []


class TestChatServiceCredentials:
    @pytest.mark.asyncio
    async def test_fallback_key_used(self, settings_with_fallback, fake_provider_factory):
        service = ChatService(settings_with_fallback, provider_factory=fake_provider_factory)

        await service.complete(make_request())

        assert fake_provider_factory.api_keys == ["sk-fallback"]

    @pytest.mark.asyncio
    async def test_request_key_takes_priority(self, settings_with_fallback, fake_provider_factory):
        service = ChatService(settings_with_fallback, provider_factory=fake_provider_factory)

        await service.complete(make_request(api_key="sk-request"))

        assert fake_provider_factory.api_keys == ["sk-request"]

    @pytest.mark.asyncio
    async def test_request_key_without_fallback(self, test_settings, fake_provider_factory):
        service = ChatService(test_settings, provider_factory=fake_provider_factory)

        envelope = await service.complete(make_request(api_key="sk-request"))

        assert envelope.code == 200
        assert fake_provider_factory.api_keys == ["sk-request"]

    @pytest.mark.asyncio
    async def test_no_key_fails_before_upstream(self, test_settings, fake_provider_factory):
        service = ChatService(test_settings, provider_factory=fake_provider_factory)

        envelope = await service.complete(make_request())

        assert envelope.model_dump() == {"message": "api_key is empty", "code": 500}
        assert fake_provider_factory.providers == []


class TestChatServiceFailures:
    @pytest.mark.asyncio
    async def test_no_choices(self, settings_with_fallback):
        factory = FakeProviderFactory(choice_count=0)
        service = ChatService(settings_with_fallback, provider_factory=factory)

        envelope = await service.complete(make_request())

        assert envelope.model_dump() == {"message": "no choices", "code": 500}

    @pytest.mark.asyncio
    async def test_no_content(self, settings_with_fallback):
        factory = FakeProviderFactory(response_content=None)
        service = ChatService(settings_with_fallback, provider_factory=factory)

        envelope = await service.complete(make_request())

        assert envelope.model_dump() == {"message": "no content", "code": 500}

    @pytest.mark.asyncio
    async def test_provider_error_relayed_verbatim(self, settings_with_fallback):
        factory = FakeProviderFactory(
            error_on_complete=ProviderError("Connection error.", provider="openai")
        )
        service = ChatService(settings_with_fallback, provider_factory=factory)

        envelope = await service.complete(make_request())

        assert envelope.model_dump() == {"message": "Connection error.", "code": 500}
        assert len(factory.complete_calls) == 1
        assert factory.providers[0].closed is True

    @pytest.mark.asyncio
    async def test_request_build_failure(self, settings_with_fallback, fake_provider_factory):
        settings = settings_with_fallback.model_copy(update={"model": ""})
        service = ChatService(settings, provider_factory=fake_provider_factory)

        envelope = await service.complete(make_request())

        assert envelope.code == 500
        assert "model" in envelope.message
        assert fake_provider_factory.providers == []

    @pytest.mark.asyncio
    async def test_unexpected_errors_propagate(self, settings_with_fallback):
        factory = FakeProviderFactory(error_on_complete=RuntimeError("bug"))
        service = ChatService(settings_with_fallback, provider_factory=factory)

        with pytest.raises(RuntimeError):
            await service.complete(make_request())


class TestChatServiceDefaults:
    def test_default_factory_builds_openai_provider(self, test_settings):
        from src.providers.openai import OpenAIProvider

        service = ChatService(test_settings)

        assert isinstance(service._provider_factory("sk-test"), OpenAIProvider)
