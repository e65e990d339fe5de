"""
Pytest configuration for the Chat Gateway test suite.

This configuration sets up:
- Test discovery paths
- Shared fixtures following the FakeRepository pattern (FakeProvider
  instead of mocks wherever the provider interface is enough)
- Test markers for categorization
"""

import sys
from pathlib import Path

import pytest
from pydantic import SecretStr
from fastapi.testclient import TestClient

# Add project root to Python path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


# =============================================================================
# Test Markers
# =============================================================================


def pytest_configure(config):
    """
    Register custom markers for test categorization.

    - unit: Low gear tests for individual components
    - integration: High gear tests through the full application
    """
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests for service interactions")


# =============================================================================
# Settings Fixtures
# =============================================================================


@pytest.fixture
def test_settings():
    """
    Settings with no fallback credential.

    Every field is passed explicitly so CHAT_GATEWAY_* variables in the
    developer's environment cannot leak into tests.
    """
    from src.core.config import Settings

    return Settings(
        service_name="chat-gateway-test",
        host="127.0.0.1",
        port=10802,
        environment="development",
        log_level="INFO",
        api_key=None,
        model="gpt-3.5-turbo",
        openai_base_url=None,
    )


@pytest.fixture
def settings_with_fallback(test_settings):
    """Settings carrying a process-wide fallback credential."""
    return test_settings.model_copy(update={"api_key": SecretStr("sk-fallback")})


# =============================================================================
# Provider Fixtures
# =============================================================================


@pytest.fixture
def fake_provider_factory():
    """
    FakeProviderFactory answering "hi there".

    Records every provider it builds so tests can assert which key was
    used and how many upstream calls were made.
    """
    from src.providers.fake import FakeProviderFactory

    return FakeProviderFactory(response_content="hi there")


# =============================================================================
# Application Fixtures
# =============================================================================


@pytest.fixture
def app(test_settings, fake_provider_factory):
    """Full application without fallback credential, backed by the fake provider."""
    from src.main import create_app

    return create_app(test_settings, provider_factory=fake_provider_factory)


@pytest.fixture
def client(app):
    """Test client for the app without fallback credential."""
    return TestClient(app)


@pytest.fixture
def app_with_fallback(settings_with_fallback, fake_provider_factory):
    """Full application with a fallback credential, backed by the fake provider."""
    from src.main import create_app

    return create_app(settings_with_fallback, provider_factory=fake_provider_factory)


@pytest.fixture
def client_with_fallback(app_with_fallback):
    """Test client for the app with a fallback credential."""
    return TestClient(app_with_fallback)
