"""Formatting helpers for SplitSpend tables and charts."""

from __future__ import annotations

from typing import Iterable, Sequence

from core.models import CategoryInsight, Expense, ExpenseRow, ExpenseUser
from core.timekeys import DEFAULT_TIMEZONE, from_timestamp_ms, timestamp_ms, to_local

__all__ = [
    "build_expense_rows",
    "format_currency",
    "format_date",
    "format_participants",
    "total_spend",
]


def format_date(timestamp: int, tz: str = DEFAULT_TIMEZONE) -> str:
    """Render a millisecond timestamp as ``"Friday May 3"``."""

    moment = from_timestamp_ms(timestamp, tz)
    return f"{moment.day_name()} {moment.month_name()} {moment.day}"


def format_currency(amount: float, symbol: str | None = "$") -> str:
    prefix = f"{symbol} " if symbol else ""
    return f"{prefix}{amount:,.2f}"


def format_participants(users: Iterable[ExpenseUser]) -> str:
    return ", ".join(member.user.display_name for member in users)


def total_spend(insights: Iterable[CategoryInsight]) -> float:
    return float(sum(insight.total for insight in insights))


def build_expense_rows(expenses: Sequence[Expense], tz: str = DEFAULT_TIMEZONE) -> list[ExpenseRow]:
    """Return display rows for the expense table, in input order."""

    rows: list[ExpenseRow] = []
    for expense in expenses:
        currency = expense.currency_code
        cost_label = f"{currency} {expense.cost:,.2f}" if currency else f"{expense.cost:,.2f}"
        rows.append(
            {
                "id": str(expense.id),
                "details": expense.description,
                "category": expense.category.name,
                "cost": cost_label,
                "date": format_date(timestamp_ms(to_local(expense.date, tz)), tz),
                "participants": format_participants(expense.users),
            }
        )
    return rows
