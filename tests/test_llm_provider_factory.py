"""Tests for hot-swappable LLM provider factory."""

import pytest

from news_dashboard.config import LoggingConfig, ProviderConfig
from news_dashboard.exceptions import ConfigurationError
from news_dashboard.llm.providers.factory import available_providers, create_provider
from news_dashboard.llm.providers.gemini import GeminiProvider
from news_dashboard.llm.providers.openai_compatible import OpenAICompatibleProvider


def test_available_providers_contains_expected_backends():
    names = available_providers()
    assert "gemini" in names
    assert "openai" in names
    assert "openai_compatible" in names


def test_create_provider_gemini():
    provider = create_provider(
        ProviderConfig(
            name="gemini",
            model="gemini-2.0-flash",
            api_key="test-key",
        ),
        LoggingConfig(),
        llm_logger=None,
    )
    assert isinstance(provider, GeminiProvider)


def test_create_provider_openai_compatible():
    provider = create_provider(
        ProviderConfig(
            name="OpenAI",
            model="gpt-4.1-mini",
            api_key="test-key",
            base_url="https://api.openai.com/v1",
        ),
        LoggingConfig(),
        llm_logger=None,
    )
    assert isinstance(provider, OpenAICompatibleProvider)


def test_create_provider_rejects_unknown_backend():
    with pytest.raises(ConfigurationError, match="Unsupported provider"):
        create_provider(
            ProviderConfig(
                name="unknown-provider",
                model="x",
                api_key="test-key",
                base_url="https://example.com",
            ),
            LoggingConfig(),
            llm_logger=None,
        )


def test_create_provider_reads_default_env_key(monkeypatch):
    monkeypatch.setenv("GOOGLE_API_KEY", "from-env")
    provider = create_provider(ProviderConfig(name="gemini"), LoggingConfig())
    assert provider.api_key == "from-env"


def test_create_provider_requires_api_key(monkeypatch):
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
    with pytest.raises(ConfigurationError, match="Missing Google API key"):
        create_provider(ProviderConfig(name="gemini"), LoggingConfig())
