"""Tests for settings resolution."""

from __future__ import annotations

import pytest
import streamlit as st
from pydantic import ValidationError

from config import settings as settings_module
from config.settings import DEFAULT_DATA_PATH, Settings, get_settings


@pytest.fixture(autouse=True)
def reset_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults_pin_utc(monkeypatch):
    monkeypatch.delenv("SPLITSPEND_TIMEZONE", raising=False)

    settings = Settings()

    assert settings.timezone == "UTC"
    assert settings.data_path == DEFAULT_DATA_PATH
    assert settings.currency_symbol == "$"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("SPLITSPEND_TIMEZONE", "Europe/Madrid")
    monkeypatch.setenv("SPLITSPEND_LOG_LEVEL", "debug")

    settings = get_settings()

    assert settings.timezone == "Europe/Madrid"
    assert settings.log_level == "DEBUG"


def test_unknown_timezone_rejected():
    with pytest.raises(ValidationError):
        Settings(timezone="Mars/Olympus_Mons")


def test_streamlit_secrets_take_precedence(monkeypatch):
    monkeypatch.setenv("SPLITSPEND_TIMEZONE", "Europe/Madrid")
    monkeypatch.setattr(
        st,
        "secrets",
        {settings_module.SECRETS_SECTION: {"timezone": "Asia/Tokyo", "currency_symbol": "¥"}},
        raising=False,
    )

    settings = get_settings()

    assert settings.timezone == "Asia/Tokyo"
    assert settings.currency_symbol == "¥"
