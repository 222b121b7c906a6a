import json

import pytest

from feedback_intel.models import FeedbackRecord
from feedback_intel.services import reporting
from feedback_intel.services.reporting import FilterState
from feedback_intel.services.sample_data import sample_records

def _rec(i, **kw):
    kw.setdefault("video_marca", "Nubank")
    kw.setdefault("video_tema", "Roxinho Cashback")
    kw.setdefault("video_formato", "BC")
    kw.setdefault("video_versao", "V1")
    kw.setdefault("created_at", "2024-05-10T09:00:00")
    return FeedbackRecord(id=i, **kw)

@pytest.fixture()
def records():
    return [
        _rec(1, video_marca="Coca-Cola", video_tema="Verão Sempre", video_versao="V1"),
        _rec(2, video_marca="Coca-Cola", video_tema="Verão Sempre", video_versao="V3", video_formato="BCR"),
        _rec(3, video_marca="Nubank", video_tema="Roxinho Cashback", video_versao="V2"),
        _rec(4, video_marca="Itaú", video_tema="Feito de Futuro", video_versao="V1"),
    ]

# --- options ---

def test_brand_options_first_seen_order(records):
    assert reporting.brand_options(records) == ["Todas", "Coca-Cola", "Nubank", "Itaú"]

def test_version_options_cascade(records):
    assert reporting.version_options(records, "Todas") == ["Todas", "V1", "V2", "V3"]
    assert reporting.version_options(records, "Coca-Cola") == ["Todas", "V1", "V3"]
    assert reporting.version_options(records, "Unknown") == ["Todas"]

def test_version_options_for_brand_never_exceed_all(records):
    everything = set(reporting.version_options(records, "Todas"))
    for brand in reporting.brand_options(records):
        assert set(reporting.version_options(records, brand)) <= everything

def test_format_options(records):
    assert reporting.format_options(records) == ["Todos", "BC", "BCR"]

# --- filter state ---

def test_filter_state_from_args_maps_sentinels():
    state = FilterState.from_args({"marca": "Nubank", "formato": "Todos"})
    assert state == FilterState(brand="Nubank", version="Todas", format="Todos", search="")
    # a sentinel of the other gender still means "any"
    assert FilterState.from_args({"marca": "Todos"}).brand == "Todas"

def test_normalized_resets_version_missing_for_brand(records):
    state = FilterState(brand="Itaú", version="V3")
    assert state.normalized(records).version == "Todas"
    kept = FilterState(brand="Coca-Cola", version="V3")
    assert kept.normalized(records) is kept

def test_normalized_keeps_version_no_brand_has(records):
    state = FilterState(version="V9")
    assert state.normalized(records) is state
    assert reporting.filter_records(records, state.normalized(records)) == []
    branded = FilterState(brand="Nubank", version="V9")
    assert branded.normalized(records).version == "V9"

def test_filter_records_combines_all_predicates(records):
    assert [r.id for r in reporting.filter_records(records, FilterState())] == [1, 2, 3, 4]
    assert [r.id for r in reporting.filter_records(records, FilterState(brand="Coca-Cola"))] == [1, 2]
    assert [r.id for r in reporting.filter_records(records, FilterState(brand="Coca-Cola", format="BCR"))] == [2]
    assert [r.id for r in reporting.filter_records(records, FilterState(version="V1"))] == [1, 4]
    assert [r.id for r in reporting.filter_records(records, FilterState(search="verão"))] == [1, 2]
    assert [r.id for r in reporting.filter_records(records, FilterState(search="FUTURO"))] == [4]

# --- rounds ---

def test_rounds_by_brand_max_plus_one():
    recs = [_rec(1, video_marca="Coca-Cola", video_versao="V1"),
            _rec(2, video_marca="Coca-Cola", video_versao="V3")]
    assert reporting.rounds_by_brand(recs) == [{"name": "Coca-Cola", "rodadas": 4}]

def test_rounds_at_least_one_and_sorted(records):
    recs = records + [_rec(9, video_marca="Vivo", video_versao="final")]
    rounds = reporting.rounds_by_brand(recs)
    assert all(r["rodadas"] >= 1 for r in rounds)
    assert {r["name"]: r["rodadas"] for r in rounds} == {"Coca-Cola": 4, "Nubank": 3, "Itaú": 2, "Vivo": 1}
    assert [r["rodadas"] for r in rounds] == sorted((r["rodadas"] for r in rounds), reverse=True)

def test_average_rounds():
    assert reporting.average_rounds([]) == 0.0
    assert reporting.average_rounds([{"rodadas": 4}, {"rodadas": 3}, {"rodadas": 2}]) == 3.0
    assert reporting.average_rounds([{"rodadas": 4}, {"rodadas": 1}, {"rodadas": 1}]) == 2.0
    assert reporting.average_rounds([{"rodadas": 2}, {"rodadas": 1}, {"rodadas": 1}]) == 1.3

# --- topics ---

def test_topic_distribution_counts_and_other_bucket():
    recs = [
        _rec(1, ai_category_topic='["Color","Audio"]'),
        _rec(2, ai_category_topic=""),
        _rec(3, ai_category_topic="{not json"),
        _rec(4, ai_category_topic='"Audio"'),
        _rec(5, ai_category_topic='["Audio"]'),
    ]
    assert reporting.topic_distribution(recs) == [
        {"name": "Color", "value": 1},
        {"name": "Audio", "value": 2},
        {"name": "Other", "value": 3},
    ]

def test_topic_distribution_single_topic_sums_to_record_count():
    recs = [_rec(i, ai_category_topic=t) for i, t in
            enumerate(['["Audio"]', '["Color"]', "", "[]", "oops", '["Audio"]'])]
    dist = reporting.topic_distribution(recs)
    assert sum(d["value"] for d in dist) == len(recs)

def test_topic_repeated_within_record_counts_once():
    recs = [_rec(1, ai_category_topic='["Audio","Audio"]')]
    assert reporting.topic_distribution(recs) == [{"name": "Audio", "value": 1}]

def test_empty_topic_array_counts_as_other():
    recs = [_rec(1, ai_category_topic="[]"), _rec(2, ai_category_topic='["", 3]')]
    assert reporting.topic_distribution(recs) == [{"name": "Other", "value": 2}]

# --- timeline ---

def test_volume_timeline_groups_by_day_and_skips_bad_timestamps():
    recs = [
        _rec(1, created_at="2024-05-10T18:00:00"),
        _rec(2, created_at="2024-05-09 23:59:00"),
        _rec(3, created_at="2024-05-10T09:00:00Z"),
        _rec(4, created_at="not a date"),
        _rec(5, created_at=""),
        _rec(6, created_at="2023-12-31"),
    ]
    assert reporting.volume_timeline(recs) == [
        {"date": "31/12", "day": "2023-12-31", "count": 1},
        {"date": "09/05", "day": "2024-05-09", "count": 1},
        {"date": "10/05", "day": "2024-05-10", "count": 2},
    ]

def test_volume_timeline_buckets_aware_timestamps_by_utc_day():
    # same instant, two offsets
    recs = [
        _rec(1, created_at="2024-05-10T23:30:00-03:00"),
        _rec(2, created_at="2024-05-11T02:30:00Z"),
        _rec(3, created_at="2024-05-11T02:30:00+00:00"),
    ]
    assert reporting.volume_timeline(recs) == [
        {"date": "11/05", "day": "2024-05-11", "count": 3},
    ]

# --- project table ---

def test_project_table_groups_and_sorts_by_versions(records):
    table = reporting.project_table(records)
    assert table[0] == {"marca": "Coca-Cola", "tema": "Verão Sempre", "alteracoes": 2, "versoes": 3}
    assert table[1] == {"marca": "Nubank", "tema": "Roxinho Cashback", "alteracoes": 1, "versoes": 2}
    assert table[2] == {"marca": "Itaú", "tema": "Feito de Futuro", "alteracoes": 1, "versoes": 1}

# --- categories / badges / cards ---

def test_category_counts_buckets_blank_values():
    recs = [_rec(1, sentiment="positive"), _rec(2, sentiment="negative"),
            _rec(3, sentiment="positive"), _rec(4, sentiment="")]
    assert reporting.category_counts(recs, "sentiment") == [
        {"name": "positive", "value": 2},
        {"name": "negative", "value": 1},
        {"name": "Other", "value": 1},
    ]

@pytest.mark.parametrize("status,badge", [
    ("Aprovado", "success"),
    ("resolved", "success"),
    ("Pendente", "warning"),
    ("pending", "warning"),
    ("Em revisão", "danger"),
    ("in-review", "danger"),
    ("", "secondary"),
    (None, "secondary"),
])
def test_status_badge(status, badge):
    assert reporting.status_badge(status) == badge

def test_summary_cards(records):
    cards = reporting.summary_cards(records, reporting.rounds_by_brand(records))
    assert [c["title"] for c in cards] == ["Feedbacks", "Projetos", "Rodadas"]
    assert [c["value"] for c in cards] == [4, 3, 3.0]

# --- whole report ---

def test_build_report_is_idempotent():
    recs = sample_records()
    state = FilterState(brand="Nubank", search="cash")
    first = json.dumps(reporting.build_report(recs, state), sort_keys=True, ensure_ascii=False)
    second = json.dumps(reporting.build_report(recs, state), sort_keys=True, ensure_ascii=False)
    assert first == second

def test_build_report_counts_and_rounds_use_full_collection():
    recs = sample_records()
    report = reporting.build_report(recs, FilterState(brand="Itaú"))
    assert report["total"] == len(recs)
    assert report["matched"] == 2
    # rounds are computed over every brand, not only the filtered one
    assert {r["name"] for r in report["rounds_by_brand"]} == {"Nubank", "Coca-Cola", "Itaú"}
    assert report["options"]["versoes"] == ["Todas", "V1", "V2"]
