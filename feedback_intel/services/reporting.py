from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, timezone
from typing import Dict, Iterable, List, Mapping, Sequence

from feedback_intel.models.record import FeedbackRecord
from feedback_intel.utils.helpers import (
    ALL_BRANDS,
    ALL_FORMATS,
    ALL_VERSIONS,
    parse_timestamp,
    parse_topics,
    version_number,
)
from feedback_intel.utils.validators import clean_filter

OTHER_TOPIC = "Other"


def _distinct(values: Iterable[str]) -> List[str]:
    """First-seen order, blanks dropped."""
    return [v for v in dict.fromkeys(values) if v]


@dataclass(frozen=True)
class FilterState:
    """Current selections of the dashboard filter bar."""

    brand: str = ALL_BRANDS
    version: str = ALL_VERSIONS
    format: str = ALL_FORMATS
    search: str = ""

    @classmethod
    def from_args(cls, args: Mapping[str, str]) -> "FilterState":
        return cls(
            brand=clean_filter(args.get("marca")) or ALL_BRANDS,
            version=clean_filter(args.get("versao"), max_len=16) or ALL_VERSIONS,
            format=clean_filter(args.get("formato"), max_len=32) or ALL_FORMATS,
            search=(args.get("q") or "").strip(),
        )

    def normalized(self, records: Sequence[FeedbackRecord]) -> "FilterState":
        """
        Drop a version the selected brand never had (the brand select changed
        under it). A version no brand has is kept as asked and matches nothing.
        """
        if self.version == ALL_VERSIONS or self.brand == ALL_BRANDS:
            return self
        if self.version in version_options(records, self.brand):
            return self
        if self.version not in version_options(records):
            return self
        return replace(self, version=ALL_VERSIONS)

    def to_dict(self) -> dict:
        return {"marca": self.brand, "versao": self.version, "formato": self.format, "q": self.search}


# --- Cascading option lists ---

def brand_options(records: Sequence[FeedbackRecord]) -> List[str]:
    return [ALL_BRANDS, *_distinct(r.video_marca for r in records)]


def version_options(records: Sequence[FeedbackRecord], brand: str = ALL_BRANDS) -> List[str]:
    """Versions offered for `brand` (every version when brand is 'Todas'), sorted."""
    scoped = records if brand == ALL_BRANDS else [r for r in records if r.video_marca == brand]
    return sorted({ALL_VERSIONS, *(r.video_versao for r in scoped if r.video_versao)})


def format_options(records: Sequence[FeedbackRecord]) -> List[str]:
    return [ALL_FORMATS, *sorted(_distinct(r.video_formato for r in records))]


# --- Filter predicate ---

def matches(record: FeedbackRecord, state: FilterState) -> bool:
    return (
        (state.brand == ALL_BRANDS or record.video_marca == state.brand)
        and (state.version == ALL_VERSIONS or record.video_versao == state.version)
        and (state.format == ALL_FORMATS or record.video_formato == state.format)
        and state.search.lower() in record.video_tema.lower()
    )


def filter_records(records: Sequence[FeedbackRecord], state: FilterState) -> List[FeedbackRecord]:
    return [r for r in records if matches(r, state)]


# --- Aggregates ---

def rounds_by_brand(records: Sequence[FeedbackRecord]) -> List[Dict]:
    """
    Revision rounds per brand: highest version number seen for the brand, +1
    (a brand whose projects only reached V0 still went through one round).
    Most-revised brands first.
    """
    best: Dict[str, int] = {}
    for r in records:
        if not r.video_marca:
            continue
        n = version_number(r.video_versao)
        if r.video_marca not in best or n > best[r.video_marca]:
            best[r.video_marca] = n
    rows = [{"name": brand, "rodadas": n + 1} for brand, n in best.items()]
    return sorted(rows, key=lambda row: row["rodadas"], reverse=True)


def average_rounds(rounds: Sequence[Mapping]) -> float:
    if not rounds:
        return 0.0
    return round(sum(r["rodadas"] for r in rounds) / len(rounds), 1)


def topic_distribution(records: Sequence[FeedbackRecord]) -> List[Dict]:
    """
    Count of records per AI topic. A topic repeated inside one record counts
    once for that record. Records whose topic field is not a JSON array of
    strings, including an empty array, land in the 'Other' bucket, so every
    record is counted at least once.
    """
    counts: Dict[str, int] = {}
    for r in records:
        topics = parse_topics(r.ai_category_topic) or [OTHER_TOPIC]
        for t in dict.fromkeys(topics):
            counts[t] = counts.get(t, 0) + 1
    return [{"name": name, "value": value} for name, value in counts.items()]


def volume_timeline(records: Sequence[FeedbackRecord]) -> List[Dict]:
    """
    Feedback volume per calendar day, oldest first; unparsable timestamps are
    skipped. Offset-aware timestamps are bucketed by their UTC date, naive ones
    as written.
    """
    per_day: Dict[date, int] = {}
    for r in records:
        ts = parse_timestamp(r.created_at)
        if ts is None:
            continue
        if ts.tzinfo is not None:
            ts = ts.astimezone(timezone.utc)
        day = ts.date()
        per_day[day] = per_day.get(day, 0) + 1
    return [
        {"date": day.strftime("%d/%m"), "day": day.isoformat(), "count": per_day[day]}
        for day in sorted(per_day)
    ]


def project_table(records: Sequence[FeedbackRecord]) -> List[Dict]:
    """One row per (brand, theme): comment count and highest version, most versions first."""
    groups: Dict[tuple, Dict] = {}
    for r in records:
        key = (r.video_marca, r.video_tema)
        row = groups.get(key)
        if row is None:
            row = groups[key] = {"marca": r.video_marca, "tema": r.video_tema, "alteracoes": 0, "versoes": 0}
        row["alteracoes"] += 1
        row["versoes"] = max(row["versoes"], version_number(r.video_versao))
    return sorted(groups.values(), key=lambda row: row["versoes"], reverse=True)


def category_counts(records: Sequence[FeedbackRecord], field: str) -> List[Dict]:
    counts: Dict[str, int] = {}
    for r in records:
        key = (getattr(r, field) or "").strip() or OTHER_TOPIC
        counts[key] = counts.get(key, 0) + 1
    return [{"name": name, "value": value} for name, value in counts.items()]


def status_badge(status: str | None) -> str:
    s = (status or "").lower()
    if "aprovado" in s or "resolved" in s:
        return "success"
    if "pendente" in s or "pending" in s:
        return "warning"
    if "revis" in s or "review" in s:
        return "danger"
    return "secondary"


def summary_cards(filtered: Sequence[FeedbackRecord], rounds: Sequence[Mapping]) -> List[Dict]:
    return [
        {"title": "Feedbacks", "value": len(filtered), "sub": "Volume de pedidos"},
        {"title": "Projetos", "value": len(_distinct(r.video_tema for r in filtered)), "sub": "Campanhas ativas"},
        {"title": "Rodadas", "value": average_rounds(rounds), "sub": "Média por marca"},
    ]


def build_report(records: Sequence[FeedbackRecord], state: FilterState) -> Dict:
    """Every derived structure for one record collection + filter state."""
    state = state.normalized(records)
    filtered = filter_records(records, state)
    rounds = rounds_by_brand(records)
    return {
        "filters": state.to_dict(),
        "options": {
            "marcas": brand_options(records),
            "versoes": version_options(records, state.brand),
            "formatos": format_options(records),
        },
        "cards": summary_cards(filtered, rounds),
        "rounds_by_brand": rounds,
        "topics": topic_distribution(filtered),
        "timeline": volume_timeline(filtered),
        "projects": project_table(filtered),
        "total": len(records),
        "matched": len(filtered),
    }
