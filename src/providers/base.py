"""
Provider Base Interface

This module defines the abstract base class for upstream provider adapters.
The LLMProvider ABC establishes the contract the chat service relies on:
one non-streaming completion call per request, plus a close hook for
releasing the underlying HTTP client.

Design Pattern:
- Ports and Adapters (Hexagonal Architecture)
- LLMProvider serves as the "port" (interface)
- OpenAIProvider and FakeProvider serve as "adapters"

Providers are bound to a single credential, so the chat service builds one
per request through a ProviderFactory.
"""

from abc import ABC, abstractmethod
from typing import Callable

from src.models.requests import ChatCompletionRequest
from src.models.responses import ChatCompletionResponse


class LLMProvider(ABC):
    """
    Abstract base class for upstream provider adapters.

    Methods:
        complete: Non-streaming chat completion
        close: Release any resources held by the provider

    Example:
        >>> provider = factory("sk-...")
        >>> try:
        ...     response = await provider.complete(request)
        ... finally:
        ...     await provider.close()
    """

    name: str = "base"

    @abstractmethod
    async def complete(
        self, request: ChatCompletionRequest
    ) -> ChatCompletionResponse:
        """
        Generate a chat completion response (non-streaming).

        Implementations issue exactly one upstream call and do not retry.

        Args:
            request: The upstream request containing the model identifier,
                the messages and the token limit.

        Returns:
            ChatCompletionResponse: The upstream response. ``choices`` may
                be empty and a choice's content may be None; interpreting
                those cases is the caller's job.

        Raises:
            ProviderError: If the upstream API cannot be reached or
                returns an error.
        """
        ...

    async def close(self) -> None:
        """Release resources. The default implementation holds none."""
        return None


ProviderFactory = Callable[[str], LLMProvider]
"""Builds a provider bound to the given API key."""
