from fitpulse.fitness.models import DataSource
from fitpulse.fitness.services import filter_by_data_type

HEART_RATE = "com.google.heart_rate.bpm"


def _sources():
    return [
        DataSource("raw:com.google.heart_rate.bpm:band", HEART_RATE),
        DataSource("raw:com.google.step_count.delta:band", "com.google.step_count.delta"),
        DataSource("derived:com.google.heart_rate.bpm:merged", HEART_RATE),
        DataSource("raw:com.google.heart_rate.summary:band", "com.google.heart_rate.summary"),
    ]


def test_filter_keeps_exact_matches_in_order():
    matches = filter_by_data_type(_sources(), HEART_RATE)
    assert [s.data_stream_id for s in matches] == [
        "raw:com.google.heart_rate.bpm:band",
        "derived:com.google.heart_rate.bpm:merged",
    ]


def test_filter_is_case_sensitive():
    assert filter_by_data_type(_sources(), HEART_RATE.upper()) == []


def test_filter_rejects_prefix_match():
    assert filter_by_data_type(_sources(), "com.google.heart_rate") == []


def test_filter_with_no_sources():
    assert filter_by_data_type([], HEART_RATE) == []
