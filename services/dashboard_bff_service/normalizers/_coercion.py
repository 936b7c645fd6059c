"""Shape-tolerant coercion helpers shared by all resource normalizers.

None of these functions raise: malformed or missing input degrades to the
documented default.
"""

from __future__ import annotations

import math
import re
from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Any

# Priority order for locating a list inside a backend envelope
DEFAULT_LIST_CANDIDATES: tuple[tuple[str, ...], ...] = (
    ("data", "items"),
    ("data",),
    (),
    ("items",),
)

INVALID_IDENTIFIERS = frozenset({"", "undefined", "null"})

_QUOTES = re.compile(r"[\"']")
_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def dig(value: Any, *path: str) -> Any:
    """Walk nested dicts; None as soon as a step is missing."""
    current = value
    for key in path:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


def _split(key: str) -> tuple[str, ...]:
    return tuple(key.split("."))


def first_present(record: Any, *keys: str) -> Any:
    """Return the first value that is not None or an empty string.

    Keys may be dotted paths (``"schedule.startAt"``).
    """
    for key in keys:
        value = dig(record, *_split(key))
        if value is None or (isinstance(value, str) and not value.strip()):
            continue
        return value
    return None


def pick_list(
    raw: Any, candidates: Sequence[tuple[str, ...]] = DEFAULT_LIST_CANDIDATES
) -> list[Any]:
    """Return the first candidate path that resolves to a list, else []."""
    for path in candidates:
        value = dig(raw, *path)
        if isinstance(value, list):
            return value
    return []


def as_record(raw: Any) -> dict[str, Any]:
    return raw if isinstance(raw, dict) else {}


def coerce_str(value: Any, default: str = "") -> str:
    if value is None:
        return default
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        number = to_number(value)
        return default if number is None else str(number)
    return default


def coerce_optional_str(value: Any) -> str | None:
    text = coerce_str(value)
    return text or None


def coerce_id(record: Any, keys: Sequence[str] = ("id", "_id")) -> str:
    """Coerce ``id ?? _id ?? ""`` to a trimmed string."""
    return coerce_str(first_present(record, *keys)).strip()


def to_number(value: Any) -> int | float | None:
    """Parse a finite number; integral values come back as int."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        number = value
    elif isinstance(value, str) and value.strip():
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return int(number) if number.is_integer() else number


def coerce_number(record: Any, *keys: str, default: int | float = 0) -> int | float:
    """Ordered fallback through ``keys`` to the first finite number."""
    for key in keys:
        number = to_number(dig(record, *_split(key)))
        if number is not None:
            return number
    return default


def coerce_optional_number(record: Any, *keys: str) -> int | float | None:
    for key in keys:
        number = to_number(dig(record, *_split(key)))
        if number is not None:
            return number
    return None


def coerce_bool(value: Any, default: bool) -> bool:
    return value if isinstance(value, bool) else default


def coerce_str_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    items = (coerce_str(item).strip() for item in value)
    return [item for item in items if item]


def slugify(text: Any) -> str:
    """Lowercase, strip quotes, collapse non-alphanumerics to single hyphens."""
    value = coerce_str(text).lower().strip()
    value = _QUOTES.sub("", value)
    value = _NON_ALNUM.sub("-", value)
    return value.strip("-")


def normalize_identifier(value: Any) -> str:
    """Trimmed id string, or "" for empty/``undefined``/``null`` placeholders."""
    text = coerce_str(value).strip()
    return "" if text in INVALID_IDENTIFIERS else text


def to_iso_timestamp(value: Any) -> str | None:
    """Render a timestamp as ISO-8601 UTC with millisecond precision.

    Epoch milliseconds and ISO strings are understood; any other string is
    returned unchanged.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        try:
            moment = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        try:
            moment = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            return text
    else:
        return None

    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    rendered = moment.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return rendered.replace("+00:00", "Z")


def utc_now_iso() -> str:
    return to_iso_timestamp(datetime.now(timezone.utc).isoformat()) or ""
