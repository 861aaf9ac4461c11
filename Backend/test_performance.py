import pytest

from Backend.ModelCodeEngine.catalog import CategoryId, get_model
from Backend.ModelCodeEngine.performance import (
    CalibratedRange,
    PerformanceState,
    RangeState,
    accuracy_at,
    accuracy_curve,
    check_calibrated_range,
    evaluate,
    get_accuracy_info,
    turndown_ratio,
)


def _a2():
    return get_model("RTX2300A").selected_range({CategoryId.PRESSURE_RANGE: "A2"})


# ---------------------------------------------------------------------------
# Calibrated range
# ---------------------------------------------------------------------------

def test_turndown_boundary_at_min_span():
    option = _a2()
    check = check_calibrated_range(option, CalibratedRange(low="0", high="10"))
    assert check.state == RangeState.VALID
    assert turndown_ratio(option, check) == 4.0


def test_span_below_minimum():
    check = check_calibrated_range(_a2(), CalibratedRange(low="0", high="5"))
    assert check.state == RangeState.INVALID
    assert check.error == "Calibrated span must be at least 10 kPa."


def test_out_of_bounds():
    check = check_calibrated_range(_a2(), CalibratedRange(low="-1", high="10"))
    assert check.state == RangeState.INVALID
    assert check.error == "Range must be within 0 to 40 kPa."


def test_low_not_below_high():
    check = check_calibrated_range(_a2(), CalibratedRange(low="20", high="20"))
    assert check.state == RangeState.INVALID
    assert check.error == "Low value must be less than high value."


@pytest.mark.parametrize("low, high", [("abc", "10"), ("0", "nan"), ("", "inf"), ("1_0", "20")])
def test_non_numeric_input(low, high):
    check = check_calibrated_range(_a2(), CalibratedRange(low=low, high=high))
    assert check.state == RangeState.INVALID
    assert check.error == "Range values must be numbers."


@pytest.mark.parametrize("low, high", [("", ""), ("5", ""), ("", "30"), ("  ", " ")])
def test_unset_when_incomplete(low, high):
    check = check_calibrated_range(_a2(), CalibratedRange(low=low, high=high))
    assert check.state == RangeState.UNSET


def test_decimal_span_at_minimum_is_accepted():
    option = get_model("RTX2300A").selected_range({CategoryId.PRESSURE_RANGE: "A7"})
    check = check_calibrated_range(option, CalibratedRange(low="0.1", high="0.11"))
    assert check.state == RangeState.VALID


# ---------------------------------------------------------------------------
# Accuracy
# ---------------------------------------------------------------------------

def test_accuracy_domain():
    info = get_accuracy_info(get_model("RTX2300A"), "A7")

    assert accuracy_at(info, 10).value == pytest.approx(0.04)

    near_limit = accuracy_at(info, 99.999)
    assert near_limit.error is None
    assert near_limit.value < 0.364

    over = accuracy_at(info, 100.001)
    assert over.value is None
    assert over.error


def test_accuracy_curve_points():
    info = get_accuracy_info(get_model("RTX2500D"), "D1")
    points = accuracy_curve(info, steps=19)
    assert len(points) == 20
    assert points[0] == (1, pytest.approx(0.04))
    assert points[-1][0] == pytest.approx(20)
    assert points[-1][1] == pytest.approx(0.553)


def test_accuracy_curve_skips_undefined_points():
    info = get_accuracy_info(get_model("RTX2300A"), "A7")
    points = accuracy_curve(info, steps=99)
    # The curve is undefined exactly at its limit.
    assert len(points) == 99
    assert all(ratio < 100 for ratio, _ in points)


def test_unknown_range_has_no_accuracy():
    assert get_accuracy_info(get_model("RTX2300A"), "G2") is None
    assert get_accuracy_info(get_model("RTX2300A"), None) is None


# ---------------------------------------------------------------------------
# evaluate
# ---------------------------------------------------------------------------

def test_evaluate_without_range():
    report = evaluate(get_model("RTX2300A"), {})
    assert report.state == PerformanceState.NO_RANGE
    assert report.specs == {}
    assert report.error


def test_evaluate_nominal_specs():
    report = evaluate(get_model("RTX2300A"), {CategoryId.PRESSURE_RANGE: "A5"})
    assert report.state == PerformanceState.NOMINAL
    assert report.ratio is None
    assert report.specs["accuracy"].text == "±0.0400 % FS"
    assert report.specs["temperatureEffect"].text.startswith("±0.0700% FS * N")
    assert report.specs["vibrationEffect"].text == "±0.0325 % FS"
    assert report.specs["powerSupplyEffect"].text == "±0.0275 % FS"
    assert report.specs["longTermStability"].text == "±0.1% URL / 10 years"
    assert "staticPressureEffect" not in report.specs


def test_evaluate_calibrated_specs():
    selections = {CategoryId.PRESSURE_RANGE: "A5"}
    report = evaluate(get_model("RTX2300A"), selections, CalibratedRange(low="0", high="10"))
    assert report.state == PerformanceState.CALIBRATED
    assert report.ratio == pytest.approx(20.0)
    assert report.specs["accuracy"].value is None
    assert report.specs["accuracy"].text == "Not applicable at this ratio"
    assert report.specs["vibrationEffect"].text == "±0.0800 % FS"


def test_evaluate_span_error_reported_before_ratio():
    selections = {CategoryId.PRESSURE_RANGE: "A7"}
    option = get_model("RTX2300A").selected_range(selections)
    assert option.min_span == 0.01

    # Span 0.009 is under the minimum, so the span check reports first.
    report = evaluate(get_model("RTX2300A"), selections, CalibratedRange(low="0", high="0.009"))
    assert report.state == PerformanceState.INVALID
    assert "at least" in report.error


def test_evaluate_ratio_over_max_ratio():
    # G2 allows a 0.8 kPa span (ratio 100) but its accuracy curve stops at 50.
    selections = {CategoryId.PRESSURE_RANGE: "G2"}
    report = evaluate(get_model("RTX2400G"), selections, CalibratedRange(low="0", high="1"))
    assert report.state == PerformanceState.INVALID
    assert report.ratio == pytest.approx(80.0)
    assert report.specs == {}
    assert "exceeds" in report.error


def test_evaluate_turndown_limit_boundary():
    # D3 spans 200 kPa, so the span sets the ratio directly: 2.00002 -> 99.999, 1.99998 -> 100.001.
    model = get_model("RTX2500D")
    selections = {CategoryId.PRESSURE_RANGE: "D3"}

    report = evaluate(model, selections, CalibratedRange(low="0", high="2.00002"))
    assert report.state == PerformanceState.CALIBRATED
    assert report.specs["accuracy"].value == pytest.approx(0.004 + 0.0036 * 99.999, abs=1e-4)

    report = evaluate(model, selections, CalibratedRange(low="0", high="1.99998"))
    assert report.state == PerformanceState.INVALID
    assert report.ratio > 100
    assert report.specs == {}
    assert "exceeds" in report.error


def test_temperature_note_doubled_for_small_kpa_ranges():
    report = evaluate(get_model("RTX2500D"), {CategoryId.PRESSURE_RANGE: "D1"})
    assert "doubled" in report.specs["temperatureEffect"].text

    report = evaluate(get_model("RTX2500D"), {CategoryId.PRESSURE_RANGE: "D3"})
    assert "doubled" not in report.specs["temperatureEffect"].text


def test_static_pressure_effect_two_decimals():
    report = evaluate(get_model("RTX2500D"), {CategoryId.PRESSURE_RANGE: "D1"})
    assert report.specs["staticPressureEffect"].text == "±0.10% FS / 3.2 MPa"

    report = evaluate(
        get_model("RTX2500D"),
        {CategoryId.PRESSURE_RANGE: "D3"},
        CalibratedRange(low="-50", high="50"),
    )
    assert report.ratio == pytest.approx(2.0)
    assert report.specs["staticPressureEffect"].text == "±0.08% FS / 16 MPa"
    assert report.specs["accuracy"].text == "±0.0400 % FS"


def test_report_to_dict():
    data = evaluate(get_model("RTX2300A"), {CategoryId.PRESSURE_RANGE: "A2"}).to_dict()
    assert data["state"] == "nominal"
    assert data["specs"]["accuracy"]["value"] == pytest.approx(0.04)
