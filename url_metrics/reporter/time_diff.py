"""Human-readable time differences ("5 mins", "2 days")."""

from __future__ import annotations

import time

MINUTE = 60
HOUR = 60 * MINUTE
DAY = 24 * HOUR
WEEK = 7 * DAY
MONTH = 30 * DAY
YEAR = 365 * DAY

_UNITS = [
    (HOUR, MINUTE, "min", "mins"),
    (DAY, HOUR, "hour", "hours"),
    (WEEK, DAY, "day", "days"),
    (MONTH, WEEK, "week", "weeks"),
    (YEAR, MONTH, "month", "months"),
]


def _plural(n: int, singular: str, plural: str) -> str:
    return f"{n} {singular if n == 1 else plural}"


def _round_units(diff: float, unit: int) -> int:
    # Half-up rounding, at least one unit.
    return max(1, int(diff / unit + 0.5))


def human_time_diff(from_ts: float, to_ts: float | None = None) -> str:
    """Describe the distance between two epoch timestamps in the largest fitting unit."""
    if to_ts is None:
        to_ts = time.time()
    diff = abs(to_ts - from_ts)

    if diff < MINUTE:
        return _plural(max(1, int(diff)), "second", "seconds")
    for limit, unit, singular, plural in _UNITS:
        if diff < limit:
            return _plural(_round_units(diff, unit), singular, plural)
    return _plural(_round_units(diff, YEAR), "year", "years")
