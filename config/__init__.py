"""Application configuration utilities."""

from .settings import DEFAULT_DATA_PATH, Settings, get_settings

__all__ = [
    "DEFAULT_DATA_PATH",
    "Settings",
    "get_settings",
]
