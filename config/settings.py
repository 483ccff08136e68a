"""Centralised configuration handling for SplitSpend."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import streamlit as st
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.timekeys import DEFAULT_TIMEZONE

DEFAULT_DATA_PATH = Path(__file__).resolve().parent.parent / "data" / "expenses.json"
SECRETS_SECTION = "splitspend"


def _streamlit_section(name: str) -> Mapping[str, Any] | None:
    """Return a mapping from Streamlit secrets for the given section."""

    try:
        if hasattr(st, "secrets") and name in st.secrets:
            section = st.secrets[name]
            if isinstance(section, Mapping):
                return section
            return dict(section)
    except Exception:  # pragma: no cover - accessing secrets may fail in tests
        return None
    return None


class Settings(BaseSettings):
    """Dashboard settings sourced from env vars and Streamlit secrets."""

    timezone: str = DEFAULT_TIMEZONE
    data_path: Path = DEFAULT_DATA_PATH
    currency_symbol: str = "$"
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="SPLITSPEND_", extra="ignore")

    @field_validator("timezone")
    @classmethod
    def _check_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown time zone: {value!r}") from exc
        return value

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.upper()


@lru_cache
def get_settings() -> Settings:
    """Load and cache dashboard settings."""

    overrides: dict[str, Any] = {}
    secrets_section = _streamlit_section(SECRETS_SECTION)
    if secrets_section:
        overrides = {
            "timezone": secrets_section.get("timezone"),
            "data_path": secrets_section.get("data_path"),
            "currency_symbol": secrets_section.get("currency_symbol"),
            "log_level": secrets_section.get("log_level"),
        }

    return Settings(**{k: v for k, v in overrides.items() if v is not None})
