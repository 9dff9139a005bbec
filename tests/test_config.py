"""Tests for settings and credential resolution."""
from __future__ import annotations

import json

from travel_ai.core.config import ApiSettings, load_key_overrides, resolve_credentials
from travel_ai.core.notifications import BannerNotifier
from travel_ai.core.types import ProviderId


def test_from_env_reads_aliases(monkeypatch):
    for name in ("GEMINI_API_KEY", "GROK_API_KEY", "TRAVEL_AI_HTTP_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("API_KEY", "gemini-legacy")
    monkeypatch.setenv("XAI_API_KEY", "xai-key")
    monkeypatch.setenv("TRAVEL_AI_CACHE_DIR", "/tmp/travel-cache")

    settings = ApiSettings.from_env()

    assert settings.gemini_api_key == "gemini-legacy"
    assert settings.xai_api_key == "xai-key"
    assert settings.cache_dir == "/tmp/travel-cache"
    assert settings.http_timeout_s == 12.0


def test_override_beats_environment():
    settings = ApiSettings(gemini_api_key="env-key")

    credentials = resolve_credentials(settings, ProviderId.GEMINI, {"GEMINI_API_KEY": "user-key"})

    assert credentials.api_key == "user-key"
    assert credentials.source == "override"
    assert credentials.model == settings.gemini_model


def test_missing_credentials_are_reported_not_raised():
    credentials = resolve_credentials(ApiSettings(), ProviderId.GROK)

    assert credentials.source == "missing"
    assert not credentials.available


def test_load_key_overrides(tmp_path):
    path = tmp_path / "keys.json"
    path.write_text(json.dumps({"OPENAI_API_KEY": "sk-user", "GROK_API_KEY": ""}))

    assert load_key_overrides(str(path)) == {"OPENAI_API_KEY": "sk-user"}
    assert load_key_overrides(str(tmp_path / "missing.json")) == {}
    assert load_key_overrides(None) == {}


def test_load_key_overrides_ignores_garbage(tmp_path):
    path = tmp_path / "keys.json"
    path.write_text("[1, 2")

    assert load_key_overrides(str(path)) == {}


def test_banner_notifier_collects_only_after_start():
    notifier = BannerNotifier()
    notifier.notify("before start")

    notifier.start()
    notifier.notify("GEMINI Error: boom")

    assert notifier.messages() == ["GEMINI Error: boom"]
    notifier.start()
    assert notifier.messages() == []
