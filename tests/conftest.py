"""Shared fixtures for the SplitSpend test suite."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
import streamlit as st

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from core.models import Category, Expense, ExpenseUser, User  # noqa: E402

FOOD = Category(id=1, name="Food")
TRANSPORT = Category(id=2, name="Transport")
RENT = Category(id=3, name="Rent")

ANA = User(id=101, first_name="Ana", last_name="Díaz")
BO = User(id=102, first_name="Bo", last_name="Li")


def make_expense(
    expense_id: int,
    cost: float,
    when: str,
    category: Category = FOOD,
    *,
    description: str = "",
    users: tuple[User, ...] = (ANA,),
    currency_code: str = "USD",
) -> Expense:
    return Expense(
        id=expense_id,
        cost=cost,
        date=when,
        description=description or f"{category.name} #{expense_id}",
        category=category,
        users=tuple(ExpenseUser(user=user, owed_share=cost / len(users)) for user in users),
        currency_code=currency_code,
    )


@pytest.fixture(autouse=True)
def clear_streamlit_secrets(monkeypatch):
    """Provide an empty secrets mapping so tests don't rely on Streamlit runtime."""

    monkeypatch.setattr(st, "secrets", {}, raising=False)


@pytest.fixture()
def week_expenses() -> list[Expense]:
    """Monday food and transport, then Wednesday food, in the week of 29 April 2024."""

    return [
        make_expense(1, 10.0, "2024-04-29T09:15:00Z", FOOD),
        make_expense(2, 5.0, "2024-04-29T18:40:00Z", TRANSPORT),
        make_expense(3, 7.0, "2024-05-01T12:00:00Z", FOOD),
    ]
