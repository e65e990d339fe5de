"""
Custom exceptions for Chat Gateway.

This module provides the exception hierarchy used by the chat pipeline.
All exceptions inherit from GatewayError and carry an error code for
consistent logging. Every GatewayError raised while serving a request is
terminal for that request and is reported to the client as a 500-coded
envelope whose message is the exception's message.
"""

from enum import Enum
from typing import Any, Optional


# =============================================================================
# Error Codes Enum
# =============================================================================


class ErrorCode(str, Enum):
    """
    Error codes for Chat Gateway exceptions.

    These codes identify error types in logs. They are not part of the
    wire contract, which only carries the message and a numeric code.
    """

    GATEWAY_ERROR = "GATEWAY_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    REQUEST_BUILD_ERROR = "REQUEST_BUILD_ERROR"
    PROVIDER_ERROR = "PROVIDER_ERROR"
    UPSTREAM_RESPONSE_ERROR = "UPSTREAM_RESPONSE_ERROR"


# =============================================================================
# Base Exception
# =============================================================================


class GatewayError(Exception):
    """
    Base exception for all Chat Gateway errors.

    Attributes:
        message: Human-readable error message, relayed to the client verbatim.
        error_code: Machine-readable error code from ErrorCode enum.
    """

    def __init__(
        self,
        message: str,
        error_code: str = ErrorCode.GATEWAY_ERROR,
        **kwargs: Any,
    ) -> None:
        """
        Initialize the exception.

        Args:
            message: Human-readable error message.
            error_code: Machine-readable error code.
            **kwargs: Additional attributes to set on the exception.
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code

        for key, value in kwargs.items():
            setattr(self, key, value)


# =============================================================================
# Configuration Errors
# =============================================================================


class CredentialMissingError(GatewayError):
    """
    Raised when neither the request nor the process supplies an API key.

    The message is fixed because clients match on it.
    """

    MESSAGE = "api_key is empty"

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(self.MESSAGE, ErrorCode.CONFIGURATION_ERROR, **kwargs)


# =============================================================================
# Request Construction Errors
# =============================================================================


class RequestBuildError(GatewayError):
    """Raised when the upstream request object cannot be constructed."""

    def __init__(
        self,
        message: str,
        error_code: str = ErrorCode.REQUEST_BUILD_ERROR,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, error_code, **kwargs)


# =============================================================================
# ProviderError
# =============================================================================


class ProviderError(GatewayError):
    """
    Exception for upstream provider issues.

    Raised when communication with the upstream API fails, including
    connection errors, timeouts, and error responses from the API.

    Attributes:
        provider: Name of the provider (e.g., "openai").
        status_code: HTTP status code from the provider API (if applicable).
    """

    def __init__(
        self,
        message: str,
        provider: str,
        status_code: Optional[int] = None,
        error_code: str = ErrorCode.PROVIDER_ERROR,
        **kwargs: Any,
    ) -> None:
        """
        Initialize the provider error.

        Args:
            message: Human-readable error message.
            provider: Name of the upstream provider.
            status_code: HTTP status code from provider (optional).
            error_code: Machine-readable error code.
            **kwargs: Additional attributes.
        """
        super().__init__(message, error_code, **kwargs)
        self.provider = provider
        self.status_code = status_code


# =============================================================================
# Upstream Semantic Errors
# =============================================================================


class UpstreamResponseError(GatewayError):
    """Base for well-formed upstream responses that carry no usable text."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(message, ErrorCode.UPSTREAM_RESPONSE_ERROR, **kwargs)


class EmptyChoicesError(UpstreamResponseError):
    """The upstream response contained zero choices."""

    MESSAGE = "no choices"

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(self.MESSAGE, **kwargs)


class EmptyContentError(UpstreamResponseError):
    """The selected choice carried no textual content."""

    MESSAGE = "no content"

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(self.MESSAGE, **kwargs)
