from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping

# Column order of the feedbacks table; also the JSON/CSV field order
FEEDBACK_FIELDS = (
    "id",
    "video_marca",
    "video_tema",
    "video_formato",
    "video_versao",
    "comment_author",
    "comment_text",
    "ai_summary",
    "ai_category_topic",
    "ai_action_category",
    "status",
    "sentiment",
    "video_file",
    "created_at",
)


def _text(value: Any) -> str:
    if value is None:
        return ""
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)


@dataclass(frozen=True)
class FeedbackRecord:
    """One feedback row as seen by the reporting layer."""

    id: int
    video_marca: str = ""
    video_tema: str = ""
    video_formato: str = ""
    video_versao: str = ""
    comment_author: str = ""
    comment_text: str = ""
    ai_summary: str = ""
    ai_category_topic: str = ""
    ai_action_category: str = ""
    status: str = ""
    sentiment: str = ""
    video_file: str = ""
    created_at: str = ""

    @classmethod
    def from_dict(cls, row: Mapping[str, Any]) -> "FeedbackRecord":
        """Build from a JSON row; missing or null fields become ''."""
        try:
            rid = int(row.get("id") or 0)
        except (TypeError, ValueError):
            rid = 0
        values = {f.name: _text(row.get(f.name)) for f in fields(cls) if f.name != "id"}
        return cls(id=rid, **values)

    def to_dict(self) -> dict:
        return {name: getattr(self, name) for name in FEEDBACK_FIELDS}
