"""Epoch-millisecond helpers."""

import re
from datetime import datetime, timezone

DAY_MS = 24 * 60 * 60 * 1000

# fromisoformat before 3.11 only takes 3 or 6 fractional digits
_FRACTION = re.compile(r"(\d{2}:\d{2}:\d{2})\.(\d+)")


def now_ms() -> int:
    return int(datetime.now(timezone.utc).timestamp() * 1000)


def _pad_fraction(match: re.Match) -> str:
    return f"{match.group(1)}.{match.group(2)[:6].ljust(6, '0')}"


def parse_iso_ms(value) -> int | None:
    """Parse an ISO-8601 string into epoch ms. Naive values are taken as UTC."""
    if not value or not isinstance(value, str):
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    text = _FRACTION.sub(_pad_fraction, text, count=1)
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return int(parsed.timestamp()) * 1000 + parsed.microsecond // 1000
