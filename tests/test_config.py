"""Tests for settings loading."""
from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from remote_tabs.core.config import BrowserConfig, Settings, ViewportConfig


def test_defaults() -> None:
    settings = Settings()

    assert settings.browser.ws_endpoint is None
    assert settings.browser.cdp_endpoint is None
    assert settings.browser.viewport == ViewportConfig(width=1280, height=800)
    assert settings.browser.discovery_timeout == 5.0
    assert settings.log_level == "INFO"


def test_from_yaml(tmp_path: Path) -> None:
    path = tmp_path / "settings.yaml"
    path.write_text(
        "browser:\n"
        "  ws_endpoint: ws://10.0.0.5:9222/devtools/browser/abc\n"
        "  viewport: null\n"
        "  attach_timeout: 3000\n"
        "log_level: WARNING\n"
    )

    settings = Settings.from_yaml(path)

    assert settings.browser.ws_endpoint == "ws://10.0.0.5:9222/devtools/browser/abc"
    assert settings.browser.viewport is None
    assert settings.browser.attach_timeout == 3000
    assert settings.log_level == "WARNING"


def test_empty_yaml(tmp_path: Path) -> None:
    path = tmp_path / "settings.yaml"
    path.write_text("")

    assert Settings.from_yaml(path).browser == BrowserConfig()


def test_environment_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("REMOTE_TABS_BROWSER__CDP_ENDPOINT", "http://env:9222/json/version")
    monkeypatch.setenv("REMOTE_TABS_LOG_LEVEL", "DEBUG")

    settings = Settings()

    assert settings.browser.cdp_endpoint == "http://env:9222/json/version"
    assert settings.log_level == "DEBUG"


def test_viewport_must_be_positive() -> None:
    with pytest.raises(ValidationError):
        ViewportConfig(width=0, height=800)


def test_environment_wins_over_yaml(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "settings.yaml"
    path.write_text(
        "browser:\n"
        "  ws_endpoint: null\n"
        "  cdp_endpoint: http://127.0.0.1:9222/json/version\n"
        "  attach_timeout: 3000\n"
        "  viewport:\n"
        "    width: 1024\n"
        "    height: 768\n"
    )
    monkeypatch.setenv("REMOTE_TABS_BROWSER__CDP_ENDPOINT", "http://env:9222/json/version")
    monkeypatch.setenv("REMOTE_TABS_BROWSER__VIEWPORT__WIDTH", "1600")

    settings = Settings.from_yaml(path)

    assert settings.browser.cdp_endpoint == "http://env:9222/json/version"
    assert settings.browser.ws_endpoint is None
    assert settings.browser.attach_timeout == 3000
    assert settings.browser.viewport == ViewportConfig(width=1600, height=768)
