"""Shared data model definitions for the SplitSpend dashboard."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import TypedDict, Union

import pandas as pd

DateLike = Union[str, datetime, pd.Timestamp]


class InvalidExpenseError(ValueError):
    """Raised when an expense record cannot be aggregated."""


@dataclass(frozen=True)
class Category:
    id: int | str
    name: str


@dataclass(frozen=True)
class User:
    id: int | str
    first_name: str = ""
    last_name: str = ""

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class ExpenseUser:
    """A participant in an expense together with their share of it."""

    user: User
    paid_share: float = 0.0
    owed_share: float = 0.0


@dataclass(frozen=True)
class Expense:
    """A single recorded transaction.

    ``date`` is stored as a :class:`pandas.Timestamp`. Naive values are read as
    wall-clock times in the dashboard time zone, aware values as instants.
    """

    id: int | str
    cost: float
    date: pd.Timestamp
    description: str
    category: Category
    users: tuple[ExpenseUser, ...] = field(default_factory=tuple)
    currency_code: str = ""

    def __post_init__(self) -> None:
        try:
            cost = float(self.cost)
        except (TypeError, ValueError) as exc:
            raise InvalidExpenseError(f"Expense {self.id!r} has a non-numeric cost: {self.cost!r}") from exc
        if not math.isfinite(cost) or cost < 0:
            raise InvalidExpenseError(f"Expense {self.id!r} has an invalid cost: {self.cost!r}")

        try:
            moment = pd.Timestamp(self.date)
        except (TypeError, ValueError) as exc:
            raise InvalidExpenseError(f"Expense {self.id!r} has an unparseable date: {self.date!r}") from exc
        if pd.isna(moment):
            raise InvalidExpenseError(f"Expense {self.id!r} is missing a date")

        object.__setattr__(self, "cost", cost)
        object.__setattr__(self, "date", moment)
        object.__setattr__(self, "users", tuple(self.users))


@dataclass
class CategoryInsight:
    """Aggregated spend for one category over a set of expenses."""

    id: int | str
    name: str
    total: float
    currency_code: str = ""


BucketedInsights = dict[int, list[CategoryInsight]]


class ExpenseRow(TypedDict):
    id: str
    details: str
    category: str
    cost: str
    date: str
    participants: str


__all__ = [
    "BucketedInsights",
    "Category",
    "CategoryInsight",
    "DateLike",
    "Expense",
    "ExpenseRow",
    "ExpenseUser",
    "InvalidExpenseError",
    "User",
]
