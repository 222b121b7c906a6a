import re

from feedback_intel.utils.helpers import is_all

def clean_str(val: str | None, max_len: int = 255) -> str | None:
    """
    Collapse whitespace, trim, enforce max length. Returns None if empty after cleaning.
    """
    if val is None:
        return None
    s = re.sub(r"\s+", " ", val).strip()
    if not s:
        return None
    return s[:max_len]

def clean_filter(val: str | None, max_len: int = 120) -> str | None:
    """Query-string filter value; sentinels and blanks collapse to None."""
    s = clean_str(val, max_len=max_len)
    if s is None or is_all(s):
        return None
    return s
