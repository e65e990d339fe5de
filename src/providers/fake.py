"""
Fake Provider - Test Double Implementation

This module provides a FakeProvider that implements the real LLMProvider
interface without making network calls.

This is NOT mocking - it's a proper implementation of the interface for
testing. The FakeProvider can also be used for local development without
API keys.
"""

import time
import uuid
from typing import Optional

from src.models.requests import ChatCompletionRequest
from src.models.responses import (
    ChatCompletionResponse,
    Choice,
    ChoiceMessage,
    Usage,
)
from src.providers.base import LLMProvider


class FakeProvider(LLMProvider):
    """
    Fake provider for testing and local development.

    Attributes:
        api_key: Credential the provider was built with
        response_content: Content of the first choice (None for no content)
        choice_count: Number of choices to return (0 for an empty response)
        error_on_complete: Optional exception to raise on complete() calls

    Example:
        >>> provider = FakeProvider(api_key="sk-test", response_content="hi there")
        >>> response = await provider.complete(request)
        >>> assert response.choices[0].message.content == "hi there"
    """

    name = "fake"

    def __init__(
        self,
        api_key: str = "fake-key",
        response_content: Optional[str] = "Fake response for testing",
        choice_count: int = 1,
        error_on_complete: Optional[Exception] = None,
    ) -> None:
        self.api_key = api_key
        self.response_content = response_content
        self.choice_count = choice_count
        self.error_on_complete = error_on_complete

        # Track calls for test assertions
        self.complete_calls: list[ChatCompletionRequest] = []
        self.closed = False

    async def complete(
        self, request: ChatCompletionRequest
    ) -> ChatCompletionResponse:
        """
        Generate a fake chat completion response.

        Raises:
            Exception: If error_on_complete was set during initialization
        """
        self.complete_calls.append(request)

        if self.error_on_complete is not None:
            raise self.error_on_complete

        choices = [
            Choice(
                index=i,
                message=ChoiceMessage(role="assistant", content=self.response_content),
                finish_reason="stop",
            )
            for i in range(self.choice_count)
        ]
        prompt_tokens = sum(len(m.content.split()) for m in request.messages)
        completion_tokens = len((self.response_content or "").split())

        return ChatCompletionResponse(
            id=f"chatcmpl-fake-{uuid.uuid4().hex[:12]}",
            created=int(time.time()),
            model=request.model,
            choices=choices,
            usage=Usage(
                prompt_tokens=prompt_tokens,
                completion_tokens=completion_tokens,
                total_tokens=prompt_tokens + completion_tokens,
            ),
        )

    async def close(self) -> None:
        self.closed = True


class FakeProviderFactory:
    """
    ProviderFactory that hands out FakeProvider instances and records them.

    Each call builds a provider with the given key and the configured
    behavior; ``providers`` keeps them in call order.
    """

    def __init__(self, **provider_kwargs) -> None:
        self._provider_kwargs = provider_kwargs
        self.providers: list[FakeProvider] = []

    def __call__(self, api_key: str) -> FakeProvider:
        provider = FakeProvider(api_key=api_key, **self._provider_kwargs)
        self.providers.append(provider)
        return provider

    @property
    def api_keys(self) -> list[str]:
        return [p.api_key for p in self.providers]

    @property
    def complete_calls(self) -> list[ChatCompletionRequest]:
        return [call for p in self.providers for call in p.complete_calls]

