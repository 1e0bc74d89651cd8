"""Duration parsing utilities."""

import math
import re
from datetime import timedelta

from fetchstate.types import Duration

_DURATION_PATTERN = re.compile(r"^(\d+(?:\.\d+)?)(ms|s|m|h|d)$")
_UNITS: dict[str, int] = {
    "ms": 1,
    "s": 1000,
    "m": 60_000,
    "h": 3_600_000,
    "d": 86_400_000,
}


def parse_duration(duration: Duration) -> float:
    """Parse a duration to milliseconds.

    Accepts "300ms", "5s", "1.5m", "2h", "1d", a ``timedelta``, or a plain
    number which is taken to already be milliseconds.
    """
    if isinstance(duration, bool):
        raise ValueError(f"Invalid duration: {duration!r}")

    if isinstance(duration, timedelta):
        ms = duration.total_seconds() * 1000
    elif isinstance(duration, (int, float)):
        ms = float(duration)
    else:
        match = _DURATION_PATTERN.match(duration.strip())
        if not match:
            raise ValueError(f"Invalid duration: {duration!r}")
        value, unit = match.groups()
        ms = float(value) * _UNITS[unit]

    if ms < 0 or math.isnan(ms):
        raise ValueError(f"Duration must be non-negative: {duration!r}")
    return ms
