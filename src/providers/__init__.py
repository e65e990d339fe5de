"""
Providers Package - Upstream Provider Adapters

This package contains the abstract provider interface, the OpenAI adapter
used in production, and a fake provider for tests and local development.
"""

from src.providers.base import LLMProvider, ProviderFactory
from src.providers.fake import FakeProvider, FakeProviderFactory
from src.providers.openai import OpenAIProvider, create_openai_provider_factory

__all__ = [
    "LLMProvider",
    "ProviderFactory",
    "FakeProvider",
    "FakeProviderFactory",
    "OpenAIProvider",
    "create_openai_provider_factory",
]
