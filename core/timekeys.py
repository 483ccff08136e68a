"""Day and week bucket keys pinned to an explicit time zone."""

from __future__ import annotations

from typing import Final

import pandas as pd

from core.models import DateLike

__all__ = [
    "DEFAULT_TIMEZONE",
    "WEEK_STARTS_ON",
    "day_start",
    "from_timestamp_ms",
    "localize_wall_time",
    "timestamp_ms",
    "to_local",
    "week_start",
]


DEFAULT_TIMEZONE: Final[str] = "UTC"
# Monday, matching ``Timestamp.weekday()``.
WEEK_STARTS_ON: Final[int] = 0

_NS_PER_MS: Final[int] = 1_000_000


def localize_wall_time(wall: pd.Timestamp, tz: str) -> pd.Timestamp:
    """Attach ``tz`` to a naive wall-clock timestamp.

    Ambiguous times resolve to the DST side and times skipped by a DST jump
    move forward, so every wall-clock midnight maps to exactly one instant.
    """

    return wall.tz_localize(tz, ambiguous=True, nonexistent="shift_forward")


def to_local(moment: DateLike, tz: str = DEFAULT_TIMEZONE) -> pd.Timestamp:
    ts = pd.Timestamp(moment)
    if ts.tzinfo is None:
        return localize_wall_time(ts, tz)
    return ts.tz_convert(tz)


def day_start(moment: DateLike, tz: str = DEFAULT_TIMEZONE) -> pd.Timestamp:
    """Return local midnight of the calendar day containing ``moment``."""

    wall = to_local(moment, tz).tz_localize(None).normalize()
    return localize_wall_time(wall, tz)


def week_start(moment: DateLike, tz: str = DEFAULT_TIMEZONE) -> pd.Timestamp:
    """Return local midnight of the Monday on or before ``moment``."""

    wall = to_local(moment, tz).tz_localize(None).normalize()
    offset = (wall.weekday() - WEEK_STARTS_ON) % 7
    return localize_wall_time(wall - pd.Timedelta(days=offset), tz)


def timestamp_ms(ts: pd.Timestamp) -> int:
    return int(ts.value // _NS_PER_MS)


def from_timestamp_ms(value: int, tz: str = DEFAULT_TIMEZONE) -> pd.Timestamp:
    return pd.Timestamp(int(value), unit="ms", tz="UTC").tz_convert(tz)
