"""Tests for reading expense exports."""

from __future__ import annotations

import json

import pandas as pd
import pytest

from core.data_loader import is_expense_record, load_expenses, parse_expense
from core.models import Expense, InvalidExpenseError


@pytest.fixture()
def raw_expense() -> dict:
    return {
        "id": 9001,
        "cost": "42.50",
        "date": "2024-05-03T18:20:00Z",
        "description": "Dinner",
        "currency_code": "USD",
        "category": {"id": 13, "name": "Dining out"},
        "users": [
            {
                "user_id": 101,
                "user": {"id": 101, "first_name": "Ana", "last_name": "Díaz"},
                "paid_share": "42.50",
                "owed_share": "21.25",
            },
            {
                "user_id": 102,
                "user": {"id": 102, "first_name": "Bo", "last_name": None},
                "paid_share": "0.0",
                "owed_share": "21.25",
            },
        ],
    }


def test_parse_expense_converts_fields(raw_expense):
    expense = parse_expense(raw_expense)

    assert expense.cost == pytest.approx(42.5)
    assert expense.date == pd.Timestamp("2024-05-03T18:20:00Z")
    assert expense.category.name == "Dining out"
    assert [member.user.display_name for member in expense.users] == ["Ana Díaz", "Bo"]
    assert expense.users[0].paid_share == pytest.approx(42.5)


def test_is_expense_record(raw_expense):
    assert is_expense_record(raw_expense)
    assert not is_expense_record({"id": 1, "cost": 2})
    assert not is_expense_record(None)


@pytest.mark.parametrize(
    "changes",
    [
        {"cost": "twelve"},
        {"cost": "NaN"},
        {"cost": "-3"},
        {"date": "not a date"},
        {"category": None},
        {"users": [{"paid_share": "1"}]},
    ],
)
def test_parse_expense_rejects_malformed(raw_expense, changes):
    raw_expense.update(changes)

    with pytest.raises(InvalidExpenseError):
        parse_expense(raw_expense)


def test_load_expenses_from_wrapped_export(raw_expense, tmp_path):
    path = tmp_path / "export.json"
    path.write_text(json.dumps({"expenses": [raw_expense]}), encoding="utf-8")

    expenses = load_expenses(path)

    assert isinstance(expenses, tuple)
    assert len(expenses) == 1
    assert isinstance(expenses[0], Expense)


def test_load_expenses_from_list(raw_expense, tmp_path):
    path = tmp_path / "list.json"
    path.write_text(json.dumps([raw_expense, {**raw_expense, "id": 9002}]), encoding="utf-8")

    assert [expense.id for expense in load_expenses(path)] == [9001, 9002]


def test_load_expenses_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_expenses(tmp_path / "missing.json")


def test_load_expenses_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(InvalidExpenseError):
        load_expenses(path)
