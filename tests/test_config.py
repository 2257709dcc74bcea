"""Tests for YAML configuration loading."""

from news_dashboard.config import AppConfig, ProviderConfig, get_api_key, load_config


def test_load_config_without_path_uses_defaults():
    cfg = load_config(None)
    assert cfg == AppConfig()
    assert cfg.ranking.top_n == 5
    assert cfg.fetch.max_redirects == 5


def test_load_config_merges_sections(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "\n".join(
            [
                "provider:",
                "  name: openai",
                "  model: gpt-4.1-mini",
                "summary:",
                "  language: English",
                "cache:",
                "  ttl_days: null",
                "unknown_section:",
                "  ignored: true",
            ]
        ),
        encoding="utf-8",
    )

    cfg = load_config(str(path))

    assert cfg.provider.name == "openai"
    assert cfg.provider.model == "gpt-4.1-mini"
    assert cfg.provider.timeout_seconds == 30.0
    assert cfg.summary.language == "English"
    assert cfg.summary.target_chars == 100
    assert cfg.cache.ttl_days is None
    assert cfg.feed.regions["jp"]["ceid"] == "JP:ja"


def test_load_config_empty_file(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(str(path)) == AppConfig()


def test_get_api_key_precedence(monkeypatch):
    monkeypatch.setenv("GOOGLE_API_KEY", "google-env")
    monkeypatch.setenv("CUSTOM_KEY", "custom-env")
    monkeypatch.setenv("OPENAI_API_KEY", "openai-env")

    assert get_api_key(ProviderConfig(api_key="inline", api_key_env="CUSTOM_KEY")) == "inline"
    assert get_api_key(ProviderConfig(api_key_env="CUSTOM_KEY")) == "custom-env"
    assert get_api_key(ProviderConfig(name="gemini")) == "google-env"
    assert get_api_key(ProviderConfig(name="openai_compatible")) == "openai-env"


def test_get_api_key_missing(monkeypatch):
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
    assert get_api_key(ProviderConfig(name="gemini")) is None
