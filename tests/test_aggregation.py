"""Unit tests for category totals and day/week bucketing."""

from __future__ import annotations

from types import SimpleNamespace

import numpy as np
import pandas as pd
import pytest

from conftest import FOOD, RENT, TRANSPORT, make_expense
from core import aggregation
from core.aggregation import (
    aggregate_by_category,
    aggregate_by_category_by_day,
    aggregate_by_category_by_week,
)
from core.models import Category, InvalidExpenseError


def _ms(value: str, tz: str = "UTC") -> int:
    return pd.Timestamp(value, tz=tz).value // 1_000_000


@pytest.fixture()
def month_expenses():
    rng = np.random.default_rng(42)
    categories = (FOOD, TRANSPORT, RENT)
    days = pd.date_range("2024-03-01", "2024-03-31", freq="D")
    picked_days = sorted(rng.choice(len(days), size=18, replace=True))
    expenses = []
    for idx, day_idx in enumerate(picked_days, start=1):
        category = categories[int(rng.integers(0, len(categories)))]
        hour = int(rng.integers(0, 24))
        when = (days[int(day_idx)] + pd.Timedelta(hours=hour)).isoformat() + "Z"
        expenses.append(make_expense(idx, round(float(rng.uniform(1, 80)), 2), when, category))
    return expenses


def _category_totals(bucketed) -> dict[object, float]:
    totals: dict[object, float] = {}
    for insights in bucketed.values():
        for insight in insights:
            totals[insight.id] = totals.get(insight.id, 0.0) + insight.total
    return totals


def test_aggregate_by_category_sorted_by_total(week_expenses):
    insights = aggregate_by_category(week_expenses)

    assert [(item.name, item.total) for item in insights] == [("Food", 17.0), ("Transport", 5.0)]
    assert insights[0].id == FOOD.id
    assert insights[0].currency_code == "USD"


def test_aggregate_by_category_empty_input():
    assert aggregate_by_category([]) == []


def test_aggregate_by_category_ties_keep_discovery_order():
    expenses = [
        make_expense(1, 4.0, "2024-01-01", RENT),
        make_expense(2, 9.0, "2024-01-01", TRANSPORT),
        make_expense(3, 4.0, "2024-01-02", FOOD),
    ]

    insights = aggregate_by_category(expenses)

    assert [item.id for item in insights] == [TRANSPORT.id, RENT.id, FOOD.id]


def test_aggregate_by_category_uses_first_name_and_currency():
    renamed = Category(id=FOOD.id, name="Groceries")
    expenses = [
        make_expense(1, 3.0, "2024-01-01", FOOD, currency_code="EUR"),
        make_expense(2, 2.0, "2024-01-02", renamed, currency_code="USD"),
    ]

    (insight,) = aggregate_by_category(expenses)

    assert insight.name == "Food"
    assert insight.currency_code == "EUR"
    assert insight.total == pytest.approx(5.0)


def test_aggregate_by_category_preserves_totals(month_expenses):
    insights = aggregate_by_category(month_expenses)
    totals = [item.total for item in insights]

    assert sum(totals) == pytest.approx(sum(expense.cost for expense in month_expenses))
    assert totals == sorted(totals, reverse=True)


def test_aggregate_by_category_rejects_non_finite_cost():
    record = SimpleNamespace(
        id=1,
        cost=float("nan"),
        category=SimpleNamespace(id=1, name="Food"),
        currency_code="",
    )

    with pytest.raises(InvalidExpenseError):
        aggregate_by_category([record])


def test_aggregate_by_category_does_not_mutate_input(week_expenses):
    snapshot = list(week_expenses)

    aggregate_by_category(week_expenses)

    assert week_expenses == snapshot


def test_daily_buckets_fill_gaps(week_expenses):
    daily = aggregate_by_category_by_day(week_expenses)

    assert list(daily) == [_ms("2024-04-29"), _ms("2024-04-30"), _ms("2024-05-01")]
    assert daily[_ms("2024-04-30")] == []
    assert [(item.name, item.total) for item in daily[_ms("2024-04-29")]] == [
        ("Food", 10.0),
        ("Transport", 5.0),
    ]
    assert [(item.name, item.total) for item in daily[_ms("2024-05-01")]] == [("Food", 7.0)]


def test_daily_buckets_empty_input():
    assert aggregate_by_category_by_day([]) == {}


def test_daily_buckets_single_day():
    expenses = [
        make_expense(1, 2.0, "2024-02-29T08:00:00Z"),
        make_expense(2, 3.0, "2024-02-29T23:59:59Z"),
    ]

    daily = aggregate_by_category_by_day(expenses)

    assert list(daily) == [_ms("2024-02-29")]
    assert daily[_ms("2024-02-29")][0].total == pytest.approx(5.0)


def test_daily_buckets_are_contiguous(month_expenses):
    daily = aggregate_by_category_by_day(month_expenses)
    keys = sorted(daily)

    assert all(later - earlier == 86_400_000 for earlier, later in zip(keys, keys[1:]))
    observed = {pd.Timestamp(expense.date).normalize() for expense in month_expenses}
    assert keys[0] == _ms(str(min(observed).date()))
    assert keys[-1] == _ms(str(max(observed).date()))


def test_daily_totals_match_category_totals(month_expenses):
    expected = {item.id: item.total for item in aggregate_by_category(month_expenses)}

    totals = _category_totals(aggregate_by_category_by_day(month_expenses))

    assert totals == pytest.approx(expected)


def test_daily_buckets_follow_configured_timezone():
    expenses = [
        make_expense(1, 4.0, "2024-04-29T16:30:00Z"),
        make_expense(2, 6.0, "2024-04-29T14:00:00Z"),
    ]

    daily = aggregate_by_category_by_day(expenses, tz="Asia/Tokyo")

    # 16:30 UTC is already 01:30 on the 30th in Tokyo.
    assert list(daily) == [_ms("2024-04-29", "Asia/Tokyo"), _ms("2024-04-30", "Asia/Tokyo")]


def test_naive_dates_are_wall_clock_in_timezone():
    expenses = [make_expense(1, 4.0, "2024-04-29T23:30:00")]

    daily = aggregate_by_category_by_day(expenses, tz="America/New_York")

    assert list(daily) == [_ms("2024-04-29", "America/New_York")]


def test_daily_buckets_across_dst_change():
    tz = "America/New_York"
    expenses = [
        make_expense(1, 1.0, "2024-03-09T12:00:00"),
        make_expense(2, 2.0, "2024-03-11T12:00:00"),
    ]

    daily = aggregate_by_category_by_day(expenses, tz=tz)

    assert list(daily) == [
        _ms("2024-03-09", tz),
        _ms("2024-03-10", tz),
        _ms("2024-03-11", tz),
    ]
    assert daily[_ms("2024-03-10", tz)] == []


def test_weekly_buckets_merge_days(week_expenses):
    weekly = aggregate_by_category_by_week(week_expenses)

    assert list(weekly) == [_ms("2024-04-29")]
    assert [(item.name, item.total) for item in weekly[_ms("2024-04-29")]] == [
        ("Food", 17.0),
        ("Transport", 5.0),
    ]


def test_weekly_buckets_start_on_monday():
    expenses = [
        make_expense(1, 3.0, "2024-05-05T10:00:00Z"),  # Sunday
        make_expense(2, 4.0, "2024-05-06T10:00:00Z", TRANSPORT),  # Monday
    ]

    weekly = aggregate_by_category_by_week(expenses)

    assert list(weekly) == [_ms("2024-04-29"), _ms("2024-05-06")]
    assert [(item.name, item.total) for item in weekly[_ms("2024-05-06")]] == [("Transport", 4.0)]


def test_weekly_buckets_keep_empty_weeks():
    expenses = [
        make_expense(1, 3.0, "2024-04-01T10:00:00Z"),
        make_expense(2, 4.0, "2024-04-24T10:00:00Z"),
    ]

    weekly = aggregate_by_category_by_week(expenses)

    assert list(weekly) == [
        _ms("2024-04-01"),
        _ms("2024-04-08"),
        _ms("2024-04-15"),
        _ms("2024-04-22"),
    ]
    assert weekly[_ms("2024-04-08")] == []
    assert weekly[_ms("2024-04-15")] == []


def test_weekly_totals_match_category_totals(month_expenses):
    expected = {item.id: item.total for item in aggregate_by_category(month_expenses)}

    totals = _category_totals(aggregate_by_category_by_week(month_expenses))

    assert totals == pytest.approx(expected)


def test_weekly_insights_do_not_alias_daily(week_expenses, monkeypatch):
    daily = aggregate_by_category_by_day(week_expenses)
    monkeypatch.setattr(aggregation, "aggregate_by_category_by_day", lambda expenses, tz: daily)

    weekly = aggregation.aggregate_by_category_by_week(week_expenses)
    weekly[_ms("2024-04-29")][0].total += 100.0

    assert weekly[_ms("2024-04-29")][0].total == pytest.approx(117.0)
    assert daily[_ms("2024-04-29")][0].total == pytest.approx(10.0)
    assert daily[_ms("2024-05-01")][0].total == pytest.approx(7.0)


def test_weekly_buckets_empty_input():
    assert aggregate_by_category_by_week([]) == {}


def test_aggregate_by_category_accepts_one_shot_iterator(week_expenses):
    insights = aggregate_by_category(iter(week_expenses))

    assert [(item.name, item.total) for item in insights] == [("Food", 17.0), ("Transport", 5.0)]
    assert aggregate_by_category(iter([])) == []
