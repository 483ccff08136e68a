"""Expense filters and search used by the dashboard before aggregating."""

from __future__ import annotations

import calendar
import unicodedata
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Collection, Optional, Sequence

import pandas as pd

from core.models import Category, DateLike, Expense, User
from core.timekeys import DEFAULT_TIMEZONE, day_start, to_local

__all__ = [
    "MonthRange",
    "apply_filters",
    "distinct_categories",
    "distinct_participants",
    "filter_by_categories",
    "filter_by_date_range",
    "filter_by_participants",
    "month_ranges",
    "normalize_text",
    "search_expenses",
]


@dataclass(frozen=True)
class MonthRange:
    """A preset for the date range picker covering one calendar month."""

    label: str
    value: str
    start: date
    end: date


def _range_end(bound: DateLike | date, tz: str) -> pd.Timestamp:
    # A bare date as the upper bound covers the whole day.
    if isinstance(bound, date) and not isinstance(bound, datetime):
        return day_start(pd.Timestamp(bound) + pd.Timedelta(days=1), tz) - pd.Timedelta(1, unit="ns")
    return to_local(bound, tz)


def filter_by_date_range(
    expenses: Sequence[Expense],
    start: Optional[DateLike | date],
    end: Optional[DateLike | date],
    tz: str = DEFAULT_TIMEZONE,
) -> list[Expense]:
    """Keep expenses dated within ``[start, end]``.

    When either bound is missing the range is treated as open and every
    expense is kept.
    """

    if start is None or end is None:
        return list(expenses)

    lower = to_local(pd.Timestamp(start), tz)
    upper = _range_end(end, tz)
    return [expense for expense in expenses if lower <= to_local(expense.date, tz) <= upper]


def filter_by_participants(
    expenses: Sequence[Expense],
    user_ids: Optional[Collection[int | str]],
) -> list[Expense]:
    """Keep expenses whose participants are all among ``user_ids``."""

    if user_ids is None:
        return list(expenses)

    selected = {str(user_id) for user_id in user_ids}
    return [
        expense
        for expense in expenses
        if all(str(member.user.id) in selected for member in expense.users)
    ]


def filter_by_categories(
    expenses: Sequence[Expense],
    category_ids: Optional[Collection[int | str]],
) -> list[Expense]:
    if not category_ids:
        return list(expenses)

    selected = {str(category_id) for category_id in category_ids}
    return [expense for expense in expenses if str(expense.category.id) in selected]


def apply_filters(
    expenses: Sequence[Expense],
    *,
    start: Optional[DateLike | date] = None,
    end: Optional[DateLike | date] = None,
    user_ids: Optional[Collection[int | str]] = None,
    category_ids: Optional[Collection[int | str]] = None,
    tz: str = DEFAULT_TIMEZONE,
) -> list[Expense]:
    filtered = filter_by_date_range(expenses, start, end, tz)
    filtered = filter_by_participants(filtered, user_ids)
    return filter_by_categories(filtered, category_ids)


def normalize_text(value: str) -> str:
    """Lower-case ``value`` and strip accents for forgiving search."""

    decomposed = unicodedata.normalize("NFD", value or "")
    stripped = "".join(char for char in decomposed if not unicodedata.combining(char))
    return stripped.casefold().strip()


def search_expenses(expenses: Sequence[Expense], query: str | None) -> list[Expense]:
    """Match ``query`` against the description or category name."""

    needle = normalize_text(query or "")
    if not needle:
        return list(expenses)

    return [
        expense
        for expense in expenses
        if needle in normalize_text(expense.description)
        or needle in normalize_text(expense.category.name)
    ]


def distinct_participants(expenses: Sequence[Expense]) -> list[User]:
    users: dict[int | str, User] = {}
    for expense in expenses:
        for member in expense.users:
            users.setdefault(member.user.id, member.user)
    return list(users.values())


def distinct_categories(expenses: Sequence[Expense]) -> list[Category]:
    categories: dict[int | str, Category] = {}
    for expense in expenses:
        categories.setdefault(expense.category.id, expense.category)
    return list(categories.values())


def month_ranges(today: date, count: int = 12) -> list[MonthRange]:
    """Return presets for the current month and the ``count - 1`` before it."""

    ranges: list[MonthRange] = []
    year, month = today.year, today.month
    for _ in range(max(count, 0)):
        _, last_day = calendar.monthrange(year, month)
        start = date(year, month, 1)
        ranges.append(
            MonthRange(
                label=start.strftime("%B %Y"),
                value=f"{year:04d}-{month:02d}",
                start=start,
                end=start + timedelta(days=last_day - 1),
            )
        )
        year, month = (year - 1, 12) if month == 1 else (year, month - 1)
    return ranges
