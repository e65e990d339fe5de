"""
Core module for Chat Gateway.

This module contains configuration and exceptions shared across layers.
"""

from src.core.config import Settings, get_settings
from src.core.exceptions import (
    CredentialMissingError,
    EmptyChoicesError,
    EmptyContentError,
    ErrorCode,
    GatewayError,
    ProviderError,
    RequestBuildError,
    UpstreamResponseError,
)

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Exceptions
    "ErrorCode",
    "GatewayError",
    "CredentialMissingError",
    "RequestBuildError",
    "ProviderError",
    "UpstreamResponseError",
    "EmptyChoicesError",
    "EmptyContentError",
]
