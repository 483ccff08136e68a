"""Page modules for the SplitSpend Streamlit application."""

from .expenses import render_page as render_expenses_page
from .overview import render_page as render_overview_page

__all__ = [
    "render_expenses_page",
    "render_overview_page",
]
