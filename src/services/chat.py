"""
Chat Service - Request Pipeline

This module implements the single linear pipeline behind POST /chat:

    resolve credential -> build upstream request -> call provider once
    -> pick first choice -> wrap in envelope

Every failure along the way is terminal for the request and is reported
as a 500-coded envelope carrying the error's message. Nothing is retried.

Pattern: Service layer extraction (business logic kept out of the route)
Pattern: Dependency injection (settings and provider factory passed in)
"""

from typing import Optional

from pydantic import SecretStr, ValidationError

from src.core.config import Settings
from src.core.exceptions import (
    CredentialMissingError,
    EmptyChoicesError,
    EmptyContentError,
    GatewayError,
    RequestBuildError,
)
from src.models.requests import ChatCompletionRequest, ChatRequest
from src.models.responses import ChatCompletionResponse, ChatEnvelope
from src.observability.logging import get_logger
from src.providers.base import ProviderFactory
from src.providers.openai import create_openai_provider_factory


logger = get_logger(__name__)


# =============================================================================
# Credential Resolution
# =============================================================================


def resolve_api_key(request_api_key: str, fallback: Optional[SecretStr]) -> str:
    """
    Pick the credential for one request.

    A non-empty per-request key wins. Otherwise the process-wide fallback is
    used. If neither is available the request fails before any upstream
    client is created.

    Args:
        request_api_key: Key from the request body ("" when absent)
        fallback: Process-wide key from settings, if configured

    Returns:
        The API key to use.

    Raises:
        CredentialMissingError: No key available from either source.
    """
    if request_api_key:
        return request_api_key
    if fallback is not None:
        return fallback.get_secret_value()
    raise CredentialMissingError()


# =============================================================================
# Response Extraction
# =============================================================================


def extract_first_choice_text(response: ChatCompletionResponse) -> str:
    """
    Return the text of the first choice.

    Raises:
        EmptyChoicesError: The response has no choices.
        EmptyContentError: The first choice has no content.
    """
    if not response.choices:
        raise EmptyChoicesError()
    content = response.choices[0].message.content
    if content is None:
        raise EmptyContentError()
    return content


# =============================================================================
# Chat Service
# =============================================================================


class ChatService:
    """
    Service class for relaying chat requests upstream.

    Args:
        settings: Frozen application settings (model, fallback credential).
        provider_factory: Builds a provider bound to a given API key.
            Defaults to an OpenAI provider factory using
            ``settings.openai_base_url``.
    """

    def __init__(
        self,
        settings: Settings,
        provider_factory: Optional[ProviderFactory] = None,
    ) -> None:
        self._settings = settings
        self._provider_factory = provider_factory or create_openai_provider_factory(
            base_url=settings.openai_base_url
        )

    @property
    def settings(self) -> Settings:
        return self._settings

    async def complete(self, request: ChatRequest) -> ChatEnvelope:
        """
        Relay one chat request and translate the outcome into an envelope.

        Args:
            request: Validated inbound chat request

        Returns:
            ChatEnvelope: code 200 with the completion text, or code 500
                with the error message.
        """
        try:
            text = await self._relay(request)
        except GatewayError as e:
            logger.warning(
                "chat request failed",
                error_code=getattr(e.error_code, "value", e.error_code),
                message=e.message,
            )
            return ChatEnvelope.from_error(e)

        return ChatEnvelope.success(text)

    async def _relay(self, request: ChatRequest) -> str:
        api_key = resolve_api_key(request.api_key, self._settings.api_key)
        upstream_request = self._build_upstream_request(request)

        logger.debug(
            "relaying chat request",
            model=upstream_request.model,
            turns=len(upstream_request.messages),
            max_tokens=upstream_request.max_tokens,
            per_request_key=bool(request.api_key),
        )

        provider = self._provider_factory(api_key)
        try:
            response = await provider.complete(upstream_request)
        finally:
            await provider.close()

        return extract_first_choice_text(response)

    def _build_upstream_request(self, request: ChatRequest) -> ChatCompletionRequest:
        try:
            return ChatCompletionRequest.from_chat_request(self._settings.model, request)
        except ValidationError as e:
            raise RequestBuildError(str(e)) from e
