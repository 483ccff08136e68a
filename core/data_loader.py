"""Loading utilities for SplitSpend expense exports."""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Final, Mapping

from core.models import Category, Expense, ExpenseUser, InvalidExpenseError, User

__all__ = ["is_expense_record", "load_expenses", "parse_expense"]

logger = logging.getLogger(__name__)

_CACHE_SIZE: Final[int] = 8
_REQUIRED_KEYS: Final[tuple[str, ...]] = ("id", "cost", "date", "description", "category")


def is_expense_record(thing: Any) -> bool:
    """Return ``True`` when ``thing`` carries every field of an expense."""

    if not isinstance(thing, Mapping):
        return False
    return all(key in thing for key in _REQUIRED_KEYS)


def _parse_share(value: Any) -> float:
    if value in (None, ""):
        return 0.0
    return float(value)


def _parse_member(raw: Mapping[str, Any]) -> ExpenseUser:
    user_data = raw.get("user") or {}
    user_id = user_data.get("id", raw.get("user_id"))
    if user_id is None:
        raise InvalidExpenseError(f"Participant without a user id: {raw!r}")
    return ExpenseUser(
        user=User(
            id=user_id,
            first_name=user_data.get("first_name") or "",
            last_name=user_data.get("last_name") or "",
        ),
        paid_share=_parse_share(raw.get("paid_share")),
        owed_share=_parse_share(raw.get("owed_share")),
    )


def parse_expense(record: Mapping[str, Any]) -> Expense:
    """Convert one exported expense mapping into an :class:`Expense`.

    Costs and shares may be given as strings, as in the Splitwise API.
    """

    if not is_expense_record(record):
        raise InvalidExpenseError(f"Record is missing expense fields: {record!r}")

    category_data = record["category"]
    if not isinstance(category_data, Mapping) or "id" not in category_data:
        raise InvalidExpenseError(f"Expense {record['id']!r} has no category")

    try:
        members = tuple(_parse_member(member) for member in record.get("users") or ())
    except (TypeError, ValueError, AttributeError) as exc:
        raise InvalidExpenseError(f"Expense {record['id']!r} has malformed participants") from exc

    return Expense(
        id=record["id"],
        cost=record["cost"],
        date=record["date"],
        description=record.get("description") or "",
        category=Category(id=category_data["id"], name=category_data.get("name") or ""),
        users=members,
        currency_code=record.get("currency_code") or "",
    )


@lru_cache(maxsize=_CACHE_SIZE)
def load_expenses(json_path: str | Path) -> tuple[Expense, ...]:
    """Return the parsed expenses stored in a JSON export.

    The file holds either a list of expense objects or an object with an
    ``expenses`` list. Results are cached per path.
    """

    path = Path(json_path)
    if not path.exists():
        raise FileNotFoundError(f"Expense export not found: {path}")

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise InvalidExpenseError(f"Expense export is not valid JSON: {path}") from exc

    records = payload.get("expenses") if isinstance(payload, Mapping) else payload
    if not isinstance(records, list):
        raise InvalidExpenseError(f"Expense export has no expense list: {path}")

    expenses = tuple(parse_expense(record) for record in records)
    logger.debug("Loaded %d expenses from %s", len(expenses), path)
    return expenses
