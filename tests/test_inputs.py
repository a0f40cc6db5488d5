import pytest

from conscalc.consensus import CalculatorInputs, ConsensusEngine, FieldStatus, parse_field


@pytest.mark.parametrize("raw,status,value", [
    ("3", FieldStatus.OK, 3.0),
    (" 2.5 ", FieldStatus.OK, 2.5),
    ("1e0", FieldStatus.OK, 1.0),
    ("", FieldStatus.EMPTY, None),
    ("   ", FieldStatus.EMPTY, None),
    (None, FieldStatus.EMPTY, None),
    ("abc", FieldStatus.UNPARSEABLE, None),
    ("3,5", FieldStatus.UNPARSEABLE, None),
    (4, FieldStatus.OK, 4.0),
])
def test_parse_field(raw, status, value):
    parsed = parse_field(raw)
    assert parsed.status is status
    assert parsed.value == value
    assert parsed.complete is (status is FieldStatus.OK)


def test_incomplete_inputs_do_not_evaluate():
    inputs = CalculatorInputs(mean_text="", variance_text="1")
    assert not inputs.complete
    assert inputs.evaluate() is None
    assert inputs.pending_fields() == ["Mean (C)"]

    inputs = CalculatorInputs(mean_text="x", variance_text="")
    assert inputs.evaluate() is None
    assert inputs.pending_fields() == ["Mean (C)", "Variance (D)"]


def test_complete_inputs_evaluate():
    inputs = CalculatorInputs(mean_text="3", variance_text="1")
    assert inputs.complete
    assert inputs.pending_fields() == []
    result = inputs.evaluate()
    assert result.ok
    assert result.index_of_disagreement == 0.125


def test_numbers_outside_the_scale_reach_the_engine():
    # Parsed but invalid numbers produce an error, not an incomplete state
    result = CalculatorInputs(mean_text="7", variance_text="1").evaluate()
    assert result is not None and not result.ok

    result = CalculatorInputs(mean_text="nan", variance_text="1").evaluate()
    assert result is not None and not result.ok


def test_engine_is_passed_through():
    inputs = CalculatorInputs(mean_text="3", variance_text="4.5")
    assert inputs.evaluate().ok
    assert not inputs.evaluate(ConsensusEngine(max_variance=4.0)).ok


def test_from_defaults_formats_text():
    inputs = CalculatorInputs.from_defaults(5.0, 1.5)
    assert inputs.mean_text == "5"
    assert inputs.variance_text == "1.5"
    assert inputs.evaluate().index_of_disagreement == 0.0
