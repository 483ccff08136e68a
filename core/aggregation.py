"""Category totals and day/week bucketing for the SplitSpend dashboard.

Every function here is a pure transformation: the input expenses are read,
never modified, and each call returns freshly allocated insights.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, Sequence

import numpy as np
import pandas as pd

from core.models import BucketedInsights, CategoryInsight, Expense, InvalidExpenseError
from core.timekeys import (
    DEFAULT_TIMEZONE,
    day_start,
    from_timestamp_ms,
    localize_wall_time,
    timestamp_ms,
    week_start,
)

__all__ = [
    "aggregate_by_category",
    "aggregate_by_category_by_day",
    "aggregate_by_category_by_week",
]

logger = logging.getLogger(__name__)


def _cost_frame(rows: list[tuple[int, float]]) -> pd.DataFrame:
    """Return one row per expense: its category code and a validated cost."""

    frame = pd.DataFrame.from_records(rows, columns=["category_code", "cost"])
    try:
        costs = frame["cost"].to_numpy(dtype=float)
    except (TypeError, ValueError) as exc:
        raise InvalidExpenseError("Expense costs must be numeric") from exc
    if not np.isfinite(costs).all():
        raise InvalidExpenseError("Expense costs must be finite")
    frame["cost"] = costs
    return frame


def aggregate_by_category(expenses: Iterable[Expense]) -> list[CategoryInsight]:
    """Total ``expenses`` per category, largest total first.

    The name and currency code of each category come from the first expense
    carrying that category id. Ties keep the order in which categories were
    first seen. ``expenses`` is read exactly once.
    """

    # Codes follow first-seen order; exemplars[code] is that category's first expense.
    codes: dict[object, int] = {}
    exemplars: list[Expense] = []
    rows: list[tuple[int, float]] = []
    for expense in expenses:
        category_id = expense.category.id
        code = codes.get(category_id)
        if code is None:
            code = codes[category_id] = len(exemplars)
            exemplars.append(expense)
        rows.append((code, expense.cost))

    if not rows:
        return []

    totals = _cost_frame(rows).groupby("category_code", sort=True)["cost"].sum()

    insights: list[CategoryInsight] = []
    for code, exemplar in enumerate(exemplars):
        insights.append(
            CategoryInsight(
                id=exemplar.category.id,
                name=exemplar.category.name,
                total=float(totals.loc[code]),
                currency_code=exemplar.currency_code,
            )
        )

    return sorted(insights, key=lambda insight: insight.total, reverse=True)


def aggregate_by_category_by_day(
    expenses: Sequence[Expense],
    tz: str = DEFAULT_TIMEZONE,
) -> BucketedInsights:
    """Bucket category totals by local calendar day.

    Keys are millisecond timestamps of local midnight in ``tz``. Every day
    between the first and last day with an expense is present; days without
    expenses map to an empty list.
    """

    if not expenses:
        return {}

    expenses_by_day: dict[int, list[Expense]] = {}
    for expense in expenses:
        key = timestamp_ms(day_start(expense.date, tz))
        expenses_by_day.setdefault(key, []).append(expense)

    first_day = from_timestamp_ms(min(expenses_by_day), tz).tz_localize(None)
    last_day = from_timestamp_ms(max(expenses_by_day), tz).tz_localize(None)

    daily: BucketedInsights = {}
    for wall in pd.date_range(first_day.normalize(), last_day.normalize(), freq="D"):
        key = timestamp_ms(localize_wall_time(wall, tz))
        day_expenses = expenses_by_day.get(key)
        daily[key] = aggregate_by_category(day_expenses) if day_expenses else []

    logger.debug(
        "Bucketed %d expenses into %d days (%d with spend)",
        len(expenses),
        len(daily),
        len(expenses_by_day),
    )
    return daily


def aggregate_by_category_by_week(
    expenses: Sequence[Expense],
    tz: str = DEFAULT_TIMEZONE,
) -> BucketedInsights:
    """Bucket category totals by week, weeks starting Monday at local midnight.

    Built from the gap-filled daily buckets so weeks without any spend still
    appear between the first and last active week. Insights within a week are
    ordered by first appearance, not by total.
    """

    weeks: BucketedInsights = {}
    daily = aggregate_by_category_by_day(expenses, tz)

    for day_key in sorted(daily):
        day_insights = daily[day_key]
        week_key = timestamp_ms(week_start(from_timestamp_ms(day_key, tz), tz))

        week_insights = weeks.get(week_key)
        if week_insights is None:
            weeks[week_key] = [replace(insight) for insight in day_insights]
            continue

        for insight in day_insights:
            existing = next((item for item in week_insights if item.id == insight.id), None)
            if existing is None:
                week_insights.append(replace(insight))
                continue
            existing.total += insight.total

    logger.debug("Merged %d days into %d weeks", len(daily), len(weeks))
    return weeks
