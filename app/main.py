"""SplitSpend dashboard entry point."""

from __future__ import annotations

import logging

import pandas as pd
import streamlit as st

from app.layout import (
    NAV_LINKS,
    determine_active_page,
    inject_css,
    render_navbar,
    render_sidebar_filters,
)
from app.pages import render_expenses_page, render_overview_page
from config import get_settings
from core import Expense, InvalidExpenseError, load_expenses
from core.filters import apply_filters, distinct_categories
from visualization import theme_tokens

logger = logging.getLogger(__name__)


@st.cache_data(show_spinner=False)
def _load_expenses(path: str) -> list[Expense]:
    """Load and cache the expense export for the session."""

    return list(load_expenses(path))


def main() -> None:
    """Application entrypoint for the SplitSpend dashboard."""

    settings = get_settings()
    logging.basicConfig(level=settings.log_level)

    st.set_page_config(
        page_title="SplitSpend | Overview",
        page_icon="📊",
        layout="wide",
    )
    inject_css()

    try:
        expenses = _load_expenses(str(settings.data_path))
    except FileNotFoundError:
        st.error(
            f"No expense export found at {settings.data_path}. "
            "Generate sample data with `python -m data.synth`."
        )
        return
    except InvalidExpenseError as exc:
        logger.warning("Rejected expense export %s: %s", settings.data_path, exc)
        st.error(f"Could not read expenses: {exc}")
        return

    active_page = render_navbar(determine_active_page(link.slug for link in NAV_LINKS))
    filters = render_sidebar_filters(expenses, pd.Timestamp.now(tz=settings.timezone).date())
    filtered = apply_filters(
        expenses,
        start=filters.start,
        end=filters.end,
        user_ids=filters.user_ids,
        category_ids=filters.category_ids,
        tz=settings.timezone,
    )
    logger.debug("Showing %d of %d expenses on %s", len(filtered), len(expenses), active_page)

    if active_page == "expenses":
        render_expenses_page(filtered, settings.timezone)
    else:
        # Colors come from the unfiltered catalog so they stay put when filters change.
        colors = theme_tokens().category_colors(category.id for category in distinct_categories(expenses))
        render_overview_page(filtered, settings.timezone, settings.currency_symbol, colors)


if __name__ == "__main__":
    main()
