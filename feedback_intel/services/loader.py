from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

import httpx
from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from feedback_intel.extensions import db
from feedback_intel.models.record import FeedbackRecord
from feedback_intel.services.feedback_query import FeedbackQuery, fetch_feedbacks
from feedback_intel.services.sample_data import sample_records

logger = logging.getLogger("feedback_intel.loader")

STATE_LOADED = "loaded"
STATE_ERROR = "error"

SOURCE_DATABASE = "database"
SOURCE_REMOTE = "remote"
SOURCE_SAMPLE = "sample"


class FeedbackSourceError(RuntimeError):
    """The feedback source could not be read (connection, HTTP status, bad payload)."""


@dataclass(frozen=True)
class LoadResult:
    state: str
    source: str
    records: List[FeedbackRecord] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.state == STATE_LOADED


def _fetch_remote(url: str, timeout: float) -> List[dict]:
    try:
        response = httpx.get(url, timeout=timeout, headers={"Accept": "application/json"})
        response.raise_for_status()
        payload = response.json()
    except httpx.HTTPStatusError as e:
        raise FeedbackSourceError(f"Feedback API returned {e.response.status_code}") from e
    except (httpx.HTTPError, ValueError) as e:
        raise FeedbackSourceError(f"Feedback API unreachable: {e}") from e
    # A well-formed response that is not a list is an empty collection
    return payload if isinstance(payload, list) else []


def _fetch_local(limit: int) -> List[dict]:
    try:
        return fetch_feedbacks(db.session, FeedbackQuery(), limit)
    except SQLAlchemyError as e:
        db.session.rollback()
        raise FeedbackSourceError(str(e)) from e


def fetch_records() -> tuple[str, List[FeedbackRecord]]:
    """
    One fetch of the unfiltered collection from the configured source.
    Returns (source, records); raises FeedbackSourceError.
    """
    cfg = current_app.config
    url = cfg.get("FEEDBACKS_API_URL")
    if url:
        rows = _fetch_remote(url, float(cfg.get("FEEDBACKS_API_TIMEOUT", 10.0)))
        source = SOURCE_REMOTE
    else:
        rows = _fetch_local(int(cfg.get("FEEDBACKS_ROW_LIMIT", 50)))
        source = SOURCE_DATABASE
    records = [FeedbackRecord.from_dict(r) for r in rows if isinstance(r, dict)]
    return source, records


def load_records(fallback: bool = True) -> LoadResult:
    """
    Fetch once for a view. On failure either switch to the sample dataset
    (fallback views) or report the error state (strict views). The
    DASHBOARD_SAMPLE_FALLBACK setting turns the fallback off everywhere.
    """
    cfg = current_app.config
    try:
        source, records = fetch_records()
    except FeedbackSourceError as e:
        if fallback and cfg.get("DASHBOARD_SAMPLE_FALLBACK", True):
            logger.warning("feedback source failed, serving sample data: %s", e)
            return LoadResult(state=STATE_LOADED, source=SOURCE_SAMPLE, records=sample_records(), error=str(e))
        logger.error("feedback source failed: %s", e)
        source = SOURCE_REMOTE if cfg.get("FEEDBACKS_API_URL") else SOURCE_DATABASE
        return LoadResult(state=STATE_ERROR, source=source, error=str(e))
    return LoadResult(state=STATE_LOADED, source=source, records=records)
