"""Display formatting helpers for pull request data."""

import re
from datetime import datetime, timezone
from typing import Optional, Tuple

_HEX_DIGITS = re.compile(r'[^0-9a-fA-F]')

_UNITS = (
    ("year", 365 * 24 * 3600),
    ("month", 30 * 24 * 3600),
    ("week", 7 * 24 * 3600),
    ("day", 24 * 3600),
    ("hour", 3600),
    ("minute", 60),
    ("second", 1),
)


def normalize_hex_color(color: str) -> Tuple[int, int, int]:
    """
    Convert a label color to an RGB tuple.

    Accepts 3 or 6 hex digits with any non-hex characters stripped.
    Anything else renders as black.
    """
    digits = _HEX_DIGITS.sub('', color or '')
    if len(digits) == 3:
        return tuple(int(c, 16) * 17 for c in digits)
    if len(digits) == 6:
        return tuple(int(digits[i:i + 2], 16) for i in (0, 2, 4))
    return (0, 0, 0)


def relative_time(moment: datetime, now: Optional[datetime] = None) -> str:
    """Render a timestamp as '3 hours ago' or 'in 5 minutes'."""
    now = now or datetime.now(timezone.utc)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    delta = (now - moment).total_seconds()
    seconds = abs(int(delta))

    if seconds < 1:
        return "now"

    for unit, size in _UNITS:
        if seconds >= size:
            count = seconds // size
            text = f"{count} {unit}{'s' if count != 1 else ''}"
            return f"{text} ago" if delta > 0 else f"in {text}"
    return "now"
