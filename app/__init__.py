"""Streamlit presentation layer for SplitSpend."""

from .main import main

__all__ = ["main"]
