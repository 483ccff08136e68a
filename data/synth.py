"""Synthetic shared-expense ledger generator for the SplitSpend dashboard.

Produces a household-style export in the Splitwise JSON shape so the
dashboard can be explored without a real account.
"""

from __future__ import annotations

import itertools
import json
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, TypeVar

import numpy as np
import pandas as pd

T = TypeVar("T")


@dataclass(frozen=True)
class CategoryProfile:
    """How often and how much a household spends in one category."""

    id: int
    name: str
    weekly_rate: float
    mean_cost: float
    spread: float
    descriptions: Tuple[str, ...]


HOUSEHOLD: Tuple[Tuple[int, str, str], ...] = (
    (101, "Ana", "Díaz"),
    (102, "Bo", "Li"),
    (103, "Chidi", "Okafor"),
)

CATEGORY_PROFILES: Sequence[CategoryProfile] = (
    CategoryProfile(12, "Groceries", 3.0, 48.0, 16.0, ("Supermarket run", "Farmers market", "Corner shop")),
    CategoryProfile(13, "Dining out", 1.5, 36.0, 14.0, ("Pizza night", "Ramen", "Brunch")),
    CategoryProfile(15, "Transportation", 2.0, 14.0, 6.0, ("Taxi", "Train tickets", "Fuel")),
    CategoryProfile(18, "Utilities", 0.25, 90.0, 12.0, ("Electricity", "Internet", "Water")),
    CategoryProfile(19, "Entertainment", 0.6, 28.0, 10.0, ("Cinema", "Concert", "Board game café")),
    CategoryProfile(2, "General", 0.5, 22.0, 12.0, ("Household supplies", "Gift", "Hardware store")),
)


def generate_synthetic_expenses(
    start_date: date | str,
    days: int = 60,
    *,
    currency: str = "USD",
    seed: Optional[int] = None,
) -> List[dict]:
    """Return ``days`` worth of expense records starting at ``start_date``.

    Each record matches what :func:`core.data_loader.parse_expense` expects,
    with costs serialised as strings like the Splitwise API.
    """

    if days <= 0:
        raise ValueError("days must be a positive integer")

    rng = np.random.default_rng(seed)
    start = _normalize_date(start_date)
    all_days = [d.date() for d in pd.date_range(start=start, periods=days, freq="D")]
    expense_ids = itertools.count(1)
    records: List[dict] = []

    for day in all_days:
        for profile in CATEGORY_PROFILES:
            for _ in range(int(rng.poisson(profile.weekly_rate / 7))):
                cost = round(max(1.0, float(rng.normal(profile.mean_cost, profile.spread))), 2)
                moment = datetime.combine(day, time(hour=int(rng.integers(8, 22)), minute=int(rng.integers(0, 60))))
                records.append(
                    _build_record(
                        expense_id=next(expense_ids),
                        cost=cost,
                        moment=moment,
                        description=_rng_choice(profile.descriptions, rng),
                        profile=profile,
                        participants=_pick_participants(rng),
                        currency=currency,
                    )
                )

    return records


def write_expenses_json(
    path: str | Path,
    start_date: date | str,
    *,
    seed: Optional[int] = None,
    **kwargs,
) -> List[dict]:
    """Generate synthetic expenses and persist them to ``path``.

    Additional keyword arguments are forwarded to
    :func:`generate_synthetic_expenses`.
    """

    records = generate_synthetic_expenses(start_date, seed=seed, **kwargs)
    Path(path).write_text(json.dumps({"expenses": records}, indent=2), encoding="utf-8")
    return records


def _build_record(
    *,
    expense_id: int,
    cost: float,
    moment: datetime,
    description: str,
    profile: CategoryProfile,
    participants: Sequence[Tuple[int, str, str]],
    currency: str,
) -> dict:
    owed = round(cost / len(participants), 2)
    payer_id = participants[0][0]
    return {
        "id": expense_id,
        "cost": f"{cost:.2f}",
        "date": moment.isoformat() + "Z",
        "description": description,
        "currency_code": currency,
        "category": {"id": profile.id, "name": profile.name},
        "users": [
            {
                "user_id": user_id,
                "user": {"id": user_id, "first_name": first, "last_name": last},
                "paid_share": f"{cost if user_id == payer_id else 0.0:.2f}",
                "owed_share": f"{owed:.2f}",
            }
            for user_id, first, last in participants
        ],
    }


def _pick_participants(rng: np.random.Generator) -> List[Tuple[int, str, str]]:
    size = int(rng.integers(1, len(HOUSEHOLD) + 1))
    indices = sorted(int(idx) for idx in rng.choice(len(HOUSEHOLD), size=size, replace=False))
    return [HOUSEHOLD[idx] for idx in indices]


def _normalize_date(value: date | datetime | str) -> date:
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str):
        parsed = datetime.fromisoformat(value)
        return parsed.date()
    raise TypeError(f"Unsupported date value: {value!r}")


def _rng_choice(options: Sequence[T], rng: np.random.Generator) -> T:
    if not options:
        raise ValueError("Cannot choose from an empty sequence")
    idx = int(rng.integers(0, len(options)))
    return options[idx]


if __name__ == "__main__":
    target = Path(__file__).resolve().parent / "expenses.json"
    write_expenses_json(target, date.today() - timedelta(days=59), seed=7)
    print(f"Wrote {target}")
