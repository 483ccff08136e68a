"""Core domain package for the SplitSpend dashboard."""

from .aggregation import aggregate_by_category, aggregate_by_category_by_day, aggregate_by_category_by_week
from .data_loader import is_expense_record, load_expenses, parse_expense
from .formatting import build_expense_rows, format_currency, format_date, format_participants, total_spend
from .models import (
    BucketedInsights,
    Category,
    CategoryInsight,
    Expense,
    ExpenseRow,
    ExpenseUser,
    InvalidExpenseError,
    User,
)
from .timekeys import DEFAULT_TIMEZONE, WEEK_STARTS_ON

__all__ = [
    "BucketedInsights",
    "Category",
    "CategoryInsight",
    "DEFAULT_TIMEZONE",
    "Expense",
    "ExpenseRow",
    "ExpenseUser",
    "InvalidExpenseError",
    "User",
    "WEEK_STARTS_ON",
    "aggregate_by_category",
    "aggregate_by_category_by_day",
    "aggregate_by_category_by_week",
    "build_expense_rows",
    "format_currency",
    "format_date",
    "format_participants",
    "is_expense_record",
    "load_expenses",
    "parse_expense",
    "total_spend",
]
