"""Shared layout primitives for the SplitSpend Streamlit app."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional, Sequence

import streamlit as st

from core.filters import distinct_categories, distinct_participants, month_ranges
from core.models import Expense


@dataclass(frozen=True)
class NavigationLink:
    slug: str
    label: str


NAV_LINKS: tuple[NavigationLink, ...] = (
    NavigationLink("overview", "Overview"),
    NavigationLink("expenses", "Last spendings"),
)


@dataclass(frozen=True)
class FilterState:
    """Sidebar selections applied before any aggregation."""

    start: Optional[date]
    end: Optional[date]
    user_ids: Optional[list[str]]
    category_ids: Optional[list[str]]


def inject_css() -> None:
    """Inject card styling into the Streamlit app."""

    st.markdown(
        """
        <style>
          :root {
            --gap: 16px;
            --radius: 12px;
            --card-bg: #FFFFFF;
            --border: #E6EAF2;
            --shadow: 0 1px 2px rgba(16, 24, 40, 0.05), 0 1px 3px rgba(16, 24, 40, 0.06);
          }

          body, [data-testid="stAppViewContainer"] > .main {
            background: #F4F6FB;
          }

          .block-container {
            max-width: 1200px;
            padding-top: 2.5rem;
            padding-bottom: 4rem;
          }

          .ss-card-anchor {
            display: none;
          }

          [data-testid="stVerticalBlock"]:has(> .ss-card-anchor) {
            background: var(--card-bg);
            border: 1px solid var(--border);
            border-radius: var(--radius);
            box-shadow: var(--shadow);
            padding: 16px;
            margin-bottom: var(--gap);
            gap: 12px;
          }

          .ss-card__head {
            display: flex;
            align-items: center;
            justify-content: space-between;
            font-weight: 600;
            color: #111827;
          }

          .ss-chip {
            font-size: 12px;
            padding: 2px 8px;
            border-radius: 999px;
            border: 1px solid #D6DEFF;
            background: #F0F4FF;
            color: #3346FF;
          }
        </style>
        """,
        unsafe_allow_html=True,
    )


@contextmanager
def card(title: str, suffix: str | None = None):
    """Render content inside a reusable SplitSpend card."""

    chip_html = f'<span class="ss-chip">{suffix}</span>' if suffix else ""
    container = st.container()
    with container:
        st.markdown('<div class="ss-card-anchor"></div>', unsafe_allow_html=True)
        st.markdown(
            f'<div class="ss-card__head"><span>{title}</span>{chip_html}</div>',
            unsafe_allow_html=True,
        )
        yield


def determine_active_page(valid_pages: Iterable[str]) -> str:
    """Determine the active page from the ``page`` query param."""

    raw_page = st.query_params.get("page", "overview")
    if isinstance(raw_page, list):
        raw_page = raw_page[0] if raw_page else "overview"
    return raw_page if raw_page in set(valid_pages) else "overview"


def render_navbar(active_page: str) -> str:
    """Render page navigation and return the selected page slug."""

    slugs = [link.slug for link in NAV_LINKS]
    labels = {link.slug: link.label for link in NAV_LINKS}
    chosen = st.radio(
        "Page",
        slugs,
        index=slugs.index(active_page),
        format_func=labels.get,
        horizontal=True,
        label_visibility="collapsed",
    )
    if st.query_params.get("page") != chosen:
        st.query_params["page"] = chosen
    return chosen


def render_sidebar_filters(expenses: Sequence[Expense], today: date) -> FilterState:
    """Render date, participant and category filters in the sidebar."""

    presets = month_ranges(today)
    users = distinct_participants(expenses)
    categories = distinct_categories(expenses)

    with st.sidebar:
        st.markdown("### Filters")
        preset_labels = ["Custom range", *[preset.label for preset in presets]]
        preset_label = st.selectbox("Period", preset_labels, index=0)
        preset = next((item for item in presets if item.label == preset_label), None)

        if preset is None:
            picked = st.date_input("Date range", value=(date(2022, 2, 1), today))
        else:
            picked = (preset.start, preset.end)
        start, end = _unpack_range(picked)

        user_labels = {str(user.id): user.display_name or str(user.id) for user in users}
        selected_users = st.multiselect(
            "People",
            list(user_labels),
            default=list(user_labels),
            format_func=user_labels.get,
        )

        category_labels = {str(category.id): category.name for category in categories}
        selected_categories = st.multiselect(
            "Categories",
            list(category_labels),
            format_func=category_labels.get,
            placeholder="All categories",
        )

    return FilterState(
        start=start,
        end=end,
        user_ids=selected_users if users else None,
        category_ids=selected_categories or None,
    )


def _unpack_range(picked: object) -> tuple[Optional[date], Optional[date]]:
    # ``st.date_input`` returns a one-element tuple while a range is half picked.
    if isinstance(picked, (tuple, list)):
        if len(picked) == 2:
            return picked[0], picked[1]
        return None, None
    if isinstance(picked, date):
        return picked, picked
    return None, None


__all__ = [
    "FilterState",
    "NavigationLink",
    "NAV_LINKS",
    "card",
    "determine_active_page",
    "inject_css",
    "render_navbar",
    "render_sidebar_filters",
]
