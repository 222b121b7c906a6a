import json
import re
from datetime import datetime
from typing import Any, List, Optional

_NON_DIGITS_RE = re.compile(r"\D")

# "No filter" values of the dashboard selects
ALL_BRANDS = "Todas"
ALL_VERSIONS = "Todas"
ALL_FORMATS = "Todos"
ALL_SENTINELS = frozenset({ALL_BRANDS, ALL_FORMATS})

def is_all(value: Optional[str]) -> bool:
    """True when a filter value means 'any' (missing, blank or a sentinel)."""
    if value is None:
        return True
    v = value.strip()
    return not v or v in ALL_SENTINELS

def version_number(label: Any) -> int:
    """'V3' -> 3, 'v12b' -> 12; no digits -> 0."""
    digits = _NON_DIGITS_RE.sub("", "" if label is None else str(label))
    try:
        return int(digits) if digits else 0
    except ValueError:
        return 0

def parse_topics(raw: Any) -> Optional[List[str]]:
    """
    Decode the AI topic field (a JSON array of strings).
    Returns None when the field is blank, not JSON, not an array,
    or holds no strings.
    """
    if raw is None:
        return None
    if isinstance(raw, list):
        data = raw
    else:
        text = str(raw).strip()
        if not text:
            return None
        try:
            data = json.loads(text)
        except (TypeError, ValueError):
            return None
    if not isinstance(data, list):
        return None
    topics = [t.strip() for t in data if isinstance(t, str) and t.strip()]
    return topics or None

def parse_timestamp(value: Any) -> Optional[datetime]:
    """ISO date/datetime string -> datetime; None when malformed."""
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    s = value.strip()
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(s)
    except ValueError:
        return None
