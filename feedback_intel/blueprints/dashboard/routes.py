from flask import jsonify, request

from feedback_intel.services import reporting
from feedback_intel.services.loader import LoadResult, load_records
from feedback_intel.utils.helpers import parse_topics
from . import bp


def _envelope(result: LoadResult, **payload):
    body = {"state": result.state, "source": result.source}
    if result.error:
        body["error"] = result.error
    body.update(payload)
    return body


def _error_response(result: LoadResult):
    # Upstream (DB or remote API) failure, not a fault of this request
    return jsonify(_envelope(result)), 502


@bp.get("/overview.json")
def overview():
    """KPI cards, topics, rounds per brand and the feedback feed. No sample fallback."""
    result = load_records(fallback=False)
    if not result.ok:
        return _error_response(result)

    records = result.records
    state = reporting.FilterState.from_args(request.args).normalized(records)
    filtered = reporting.filter_records(records, state)
    rounds = reporting.rounds_by_brand(records)

    feed = []
    for r in filtered:
        feed.append({
            "id": r.id,
            "marca": r.video_marca,
            "tema": r.video_tema,
            "formato": r.video_formato,
            "versao": r.video_versao.upper(),
            "resumo": r.ai_summary,
            "topics": parse_topics(r.ai_category_topic) or [],
        })

    return jsonify(_envelope(
        result,
        filters=state.to_dict(),
        options={
            "marcas": reporting.brand_options(records),
            "versoes": reporting.version_options(records, state.brand),
            "formatos": reporting.format_options(records),
        },
        cards=reporting.summary_cards(filtered, rounds),
        topics=reporting.topic_distribution(filtered),
        rounds_by_brand=rounds,
        feed=feed,
    )), 200


@bp.get("/analytics.json")
def analytics():
    result = load_records(fallback=True)
    if not result.ok:
        return _error_response(result)

    records = result.records
    state = reporting.FilterState.from_args(request.args).normalized(records)
    filtered = reporting.filter_records(records, state)

    return jsonify(_envelope(
        result,
        filters=state.to_dict(),
        timeline=reporting.volume_timeline(filtered),
        projects=reporting.project_table(filtered),
        topics=reporting.topic_distribution(filtered),
        sentiment=reporting.category_counts(filtered, "sentiment"),
        status=reporting.category_counts(filtered, "status"),
        actions=reporting.category_counts(filtered, "ai_action_category"),
    )), 200


@bp.get("/table.json")
def table():
    result = load_records(fallback=True)
    if not result.ok:
        return _error_response(result)

    records = result.records
    state = reporting.FilterState.from_args(request.args).normalized(records)
    rows = [
        {
            "id": r.id,
            "marca": r.video_marca,
            "resumo_ia": r.ai_summary,
            "status": r.status,
            "badge": reporting.status_badge(r.status),
            "sentimento": r.sentiment,
            "arquivo_video": r.video_file,
        }
        for r in reporting.filter_records(records, state)
    ]
    return jsonify(_envelope(result, filters=state.to_dict(), rows=rows)), 200
