"""Searchable table of recent expenses."""

from __future__ import annotations

from typing import Sequence

import pandas as pd
import streamlit as st

from app.layout import card
from core import Expense, build_expense_rows
from core.filters import search_expenses

_COLUMNS = {
    "details": "Details",
    "category": "Category",
    "cost": "Cost",
    "date": "Date",
    "participants": "Users",
}


def render_page(expenses: Sequence[Expense], tz: str) -> None:
    """Render the search box and the matching expenses."""

    with card("Last spendings"):
        query = st.text_input(
            "Search",
            placeholder="Search for a specific spend or category",
            disabled=not expenses,
            label_visibility="collapsed",
        )
        matches = search_expenses(expenses, query)
        if not matches:
            st.info("No expenses match your search.")
            return

        table = pd.DataFrame(build_expense_rows(matches, tz)).set_index("id")
        st.dataframe(table.rename(columns=_COLUMNS), use_container_width=True)


__all__ = ["render_page"]
