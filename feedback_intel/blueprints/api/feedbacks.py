import csv
import io
from datetime import datetime

from flask import current_app, jsonify, make_response, request

from feedback_intel.extensions import db, limiter
from feedback_intel.models.record import FEEDBACK_FIELDS
from feedback_intel.services.feedback_query import FeedbackQuery, fetch_feedbacks
from . import bp


def _row_limit() -> int:
    return int(current_app.config.get("FEEDBACKS_ROW_LIMIT", 50))


@bp.get("/feedbacks")
@limiter.limit("120 per minute")
def list_feedbacks():
    """Latest feedbacks, newest first; optional marca/versao/formato equality filters."""
    query = FeedbackQuery.from_args(request.args)
    try:
        rows = fetch_feedbacks(db.session, query, _row_limit())
        return jsonify(rows), 200
    except Exception as e:
        db.session.rollback()
        current_app.logger.exception("GET /api/feedbacks failed")
        return jsonify({"error": str(e)}), 500


@bp.get("/feedbacks/export.csv")
@limiter.limit("30 per minute")
def export_feedbacks_csv():
    query = FeedbackQuery.from_args(request.args)
    try:
        rows = fetch_feedbacks(db.session, query, _row_limit())
    except Exception as e:
        db.session.rollback()
        current_app.logger.exception("GET /api/feedbacks/export.csv failed")
        return jsonify({"error": str(e)}), 500

    buf = io.StringIO(newline="")
    w = csv.writer(buf)
    w.writerow(FEEDBACK_FIELDS)
    for row in rows:
        w.writerow(["" if row.get(k) is None else row.get(k) for k in FEEDBACK_FIELDS])

    csv_str = buf.getvalue()
    buf.close()

    stamp = datetime.now().strftime("%Y%m%d")
    filename = f"feedbacks_{stamp}.csv"

    resp = make_response(csv_str)
    resp.headers["Content-Type"] = "text/csv; charset=utf-8"
    resp.headers["Content-Disposition"] = f'attachment; filename="{filename}"'
    return resp
