from conscalc.consensus import evaluate
from conscalc.presentation import (
    DETAIL_KEYS,
    FIELD_LABELS,
    MISSING,
    PLACEHOLDER,
    detail_rows,
    format_value,
    gauge_position,
    headline,
)


def test_format_value():
    assert format_value(0.125, 4) == "0.1250"
    assert format_value(1.0) == "1.000000"
    assert format_value(None) == MISSING
    assert format_value(float("nan")) == MISSING


def test_headline_placeholder_until_valid():
    assert headline(None) == PLACEHOLDER
    assert headline(evaluate(0, 1)) == PLACEHOLDER
    assert headline(evaluate(3, 1)) == "0.125000"
    assert headline(evaluate(3, 1), precision=2) == "0.12"


def test_gauge_shows_consensus():
    assert gauge_position(evaluate(3, 1)) == 0.875
    assert gauge_position(evaluate(3, 4)) == 0.0
    assert gauge_position(evaluate(5, 1.5)) == 1.0


def test_gauge_is_clamped():
    assert gauge_position(evaluate(3, 10)) == 0.0
    assert gauge_position(None) == 0.0
    assert gauge_position(evaluate(3, -1)) == 0.0


def test_detail_rows():
    rows = detail_rows(evaluate(3, 1))
    assert [r["key"] for r in rows] == list(DETAIL_KEYS)
    by_key = {r["key"]: r for r in rows}
    assert by_key["K"]["value"] == "0.8750"
    assert by_key["K"]["label"] == FIELD_LABELS["K"]
    assert by_key["I"]["help"]
    assert detail_rows(evaluate(6, 1)) == []
