"""Overview dashboard page layout."""

from __future__ import annotations

from typing import Hashable, Mapping, Optional, Sequence

import streamlit as st

from app.layout import card
from core import (
    CategoryInsight,
    Expense,
    aggregate_by_category,
    aggregate_by_category_by_day,
    aggregate_by_category_by_week,
    format_currency,
    total_spend,
)
from visualization import build_bucket_chart, build_category_chart


def _render_category_list(insights: Sequence[CategoryInsight], currency_symbol: str) -> None:
    if not insights:
        st.info("No spend matches the current filters.")
        return

    for insight in insights:
        name_col, total_col = st.columns((3, 1))
        name_col.write(insight.name)
        total_col.write(format_currency(insight.total, currency_symbol))


def render_page(
    expenses: Sequence[Expense],
    tz: str,
    currency_symbol: str,
    colors: Optional[Mapping[Hashable, str]] = None,
) -> None:
    """Render the overview page for already filtered expenses.

    ``colors`` maps category id to color and is shared by both charts.
    """

    insights = aggregate_by_category(expenses)

    with card("Overview", suffix=f"{len(expenses)} expenses"):
        st.metric("Total", format_currency(total_spend(insights), currency_symbol))
        view = st.radio("View", ["Chart", "List"], horizontal=True, key="overview-view")

        if view == "List":
            _render_category_list(insights, currency_symbol)
            return

        st.plotly_chart(
            build_category_chart(insights, currency_symbol, colors=colors),
            use_container_width=True,
            key="category-donut",
        )

    with card("Spend over time"):
        bucket = st.radio("Bucket", ["Daily", "Weekly"], horizontal=True, key="overview-bucket")
        weekly = bucket == "Weekly"
        bucketed = (
            aggregate_by_category_by_week(expenses, tz)
            if weekly
            else aggregate_by_category_by_day(expenses, tz)
        )
        st.plotly_chart(
            build_bucket_chart(bucketed, tz, currency_symbol, weekly=weekly, colors=colors),
            use_container_width=True,
            key="bucket-bars",
        )


__all__ = ["render_page"]
