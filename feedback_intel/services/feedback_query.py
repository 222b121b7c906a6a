from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Tuple

from sqlalchemy import text
from sqlalchemy.orm import Session

from feedback_intel.models.record import FEEDBACK_FIELDS
from feedback_intel.utils.validators import clean_filter

# query-string param -> column; order is the order of conditions in WHERE
FILTER_COLUMNS = (
    ("marca", "video_marca"),
    ("versao", "video_versao"),
    ("formato", "video_formato"),
)

_SELECT = "SELECT {cols} FROM feedbacks".format(cols=", ".join(FEEDBACK_FIELDS))
_ORDER = "ORDER BY created_at DESC, id DESC"


@dataclass(frozen=True)
class FeedbackQuery:
    """Equality filters for the feedbacks table; None means 'any'."""

    marca: Optional[str] = None
    versao: Optional[str] = None
    formato: Optional[str] = None

    @classmethod
    def from_args(cls, args: Mapping[str, str]) -> "FeedbackQuery":
        """Build from request args; blanks and 'Todas'/'Todos' drop the filter."""
        return cls(
            marca=clean_filter(args.get("marca")),
            versao=clean_filter(args.get("versao")),
            formato=clean_filter(args.get("formato")),
        )

    def active_filters(self) -> List[Tuple[str, str]]:
        out = []
        for param, _column in FILTER_COLUMNS:
            value = clean_filter(getattr(self, param))
            if value is not None:
                out.append((param, value))
        return out


def build_feedback_query(query: FeedbackQuery, limit: int) -> Tuple[str, Dict[str, object]]:
    """
    Parameterized SELECT for the feedbacks table.

    One `column = :param` condition per supplied filter, AND-joined; the WHERE
    clause is omitted when no filter is supplied. Always newest first, always
    capped at `limit` rows.
    """
    columns = dict(FILTER_COLUMNS)
    params: Dict[str, object] = {}
    conditions = []
    for param, value in query.active_filters():
        conditions.append(f"{columns[param]} = :{param}")
        params[param] = value

    parts = [_SELECT]
    if conditions:
        parts.append("WHERE " + " AND ".join(conditions))
    parts.append(_ORDER)
    parts.append("LIMIT :limit")
    params["limit"] = max(int(limit), 0)
    return " ".join(parts), params


def _jsonable(row: Mapping[str, object]) -> dict:
    out = {}
    for key in FEEDBACK_FIELDS:
        value = row.get(key)
        if hasattr(value, "isoformat"):
            value = value.isoformat()
        out[key] = value
    return out


def fetch_feedbacks(session: Session, query: FeedbackQuery, limit: int) -> List[dict]:
    """Run the read-only query and return JSON-ready rows (never more than `limit`)."""
    sql, params = build_feedback_query(query, limit)
    rows = session.execute(text(sql), params).mappings().all()
    return [_jsonable(r) for r in rows[: params["limit"]]]
