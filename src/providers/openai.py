"""
OpenAI Provider - OpenAI Chat Completions Adapter

This module implements the OpenAI provider adapter used to forward chat
requests upstream.

Design Patterns:
- Ports and Adapters: OpenAIProvider implements LLMProvider interface
- Adapter Pattern: Transforms OpenAI SDK responses to our response models

The gateway relays upstream failures instead of recovering from them, so
the SDK's built-in retries are disabled and its default timeout is kept.
"""

import time
from typing import Any, Optional

import openai
from openai import AsyncOpenAI
from pydantic import ValidationError

from src.core.exceptions import ProviderError
from src.models.requests import ChatCompletionRequest
from src.models.responses import (
    ChatCompletionResponse,
    Choice,
    ChoiceMessage,
    Usage,
)
from src.observability.logging import get_logger
from src.providers.base import LLMProvider, ProviderFactory


logger = get_logger(__name__)

PROVIDER_NAME = "openai"


class OpenAIProvider(LLMProvider):
    """
    OpenAI chat-completion provider adapter.

    Each instance is bound to one API key. The chat service creates a
    provider per request so that per-request credentials never leak
    between callers.

    Args:
        api_key: OpenAI API key.
        base_url: Optional custom endpoint URL (for proxies or compatible APIs).

    Example:
        >>> provider = OpenAIProvider(api_key="sk-...")
        >>> response = await provider.complete(request)
        >>> print(response.choices[0].message.content)
    """

    name = PROVIDER_NAME

    def __init__(
        self,
        api_key: str,
        base_url: Optional[str] = None,
    ) -> None:
        """
        Initialize OpenAI provider.

        Args:
            api_key: OpenAI API key. Always passed explicitly so the SDK
                never falls back to OPENAI_API_KEY from the environment.
            base_url: Optional custom endpoint URL.
        """
        self._base_url = base_url

        client_kwargs: dict[str, Any] = {"api_key": api_key, "max_retries": 0}
        if base_url:
            client_kwargs["base_url"] = base_url
        self._client = AsyncOpenAI(**client_kwargs)

    # =========================================================================
    # complete() method
    # =========================================================================

    async def complete(self, request: ChatCompletionRequest) -> ChatCompletionResponse:
        """
        Generate a chat completion response (non-streaming).

        Args:
            request: The chat completion request.

        Returns:
            ChatCompletionResponse with completion results.

        Raises:
            ProviderError: On any SDK error (connection, timeout, API status).
        """
        kwargs = self._build_request_kwargs(request)

        start = time.monotonic()
        try:
            response = await self._client.chat.completions.create(**kwargs)
        except openai.OpenAIError as e:
            raise ProviderError(
                str(e),
                provider=PROVIDER_NAME,
                status_code=getattr(e, "status_code", None),
            ) from e

        duration_ms = (time.monotonic() - start) * 1000
        logger.debug(
            "upstream completion finished",
            model=request.model,
            duration_ms=round(duration_ms, 2),
        )

        return self._transform_response(response)

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.close()

    # =========================================================================
    # Helper Methods
    # =========================================================================

    def _build_request_kwargs(self, request: ChatCompletionRequest) -> dict[str, Any]:
        """
        Build kwargs for OpenAI API call from request.

        Args:
            request: The chat completion request.

        Returns:
            Dict of kwargs for the API call.
        """
        kwargs: dict[str, Any] = {
            "model": request.model,
            "messages": [
                {"role": msg.role, "content": msg.content} for msg in request.messages
            ],
            "stream": False,
        }
        if request.max_tokens is not None:
            kwargs["max_tokens"] = request.max_tokens
        return kwargs

    def _transform_response(self, response: Any) -> ChatCompletionResponse:
        """
        Transform OpenAI response to our response model.

        The SDK does not validate response bodies, so fields an upstream
        left out arrive as None and are rejected here.

        Args:
            response: The OpenAI API response.

        Returns:
            ChatCompletionResponse model.

        Raises:
            ProviderError: The response body does not match the completion schema.
        """
        try:
            choices = [
                self._transform_choice(choice)
                for choice in getattr(response, "choices", None) or []
            ]

            usage = None
            raw_usage = getattr(response, "usage", None)
            if raw_usage is not None:
                usage = Usage(
                    prompt_tokens=getattr(raw_usage, "prompt_tokens", None),
                    completion_tokens=getattr(raw_usage, "completion_tokens", None),
                    total_tokens=getattr(raw_usage, "total_tokens", None),
                )

            return ChatCompletionResponse(
                id=getattr(response, "id", None),
                created=getattr(response, "created", None),
                model=getattr(response, "model", None),
                choices=choices,
                usage=usage,
            )
        except ValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(part) for part in first["loc"])
            raise ProviderError(
                f"failed to deserialize upstream response: {field}: {first['msg']}",
                provider=PROVIDER_NAME,
            ) from e

    def _transform_choice(self, choice: Any) -> Choice:
        message = getattr(choice, "message", None)
        return Choice(
            index=getattr(choice, "index", None),
            message=ChoiceMessage(
                role=getattr(message, "role", None) or "assistant",
                content=getattr(message, "content", None),
            ),
            finish_reason=getattr(choice, "finish_reason", None),
        )


def create_openai_provider_factory(base_url: Optional[str] = None) -> ProviderFactory:
    """
    Build a factory producing OpenAIProvider instances for a given key.

    Args:
        base_url: Optional custom endpoint shared by every provider.

    Returns:
        Callable taking an API key and returning an OpenAIProvider.
    """

    def factory(api_key: str) -> LLMProvider:
        return OpenAIProvider(api_key=api_key, base_url=base_url)

    return factory
