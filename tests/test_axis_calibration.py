import pytest

from chart_decoder.models import (
    AxisCalibration,
    ErrorType,
    InsufficientCalibrationPoints,
    ProcessingError,
    TextLabel,
)
from chart_decoder.nodes.axis_calibration import calibrate_axis, value_references
from chart_decoder.utils.numeric import parse_value_label, round_half_up


def test_thousands_suffix_example():
    cal = calibrate_axis([TextLabel(text="0", x=0, y=300), TextLabel(text="10k", x=0, y=50)])
    assert isinstance(cal, AxisCalibration)
    assert (cal.min_value, cal.min_pixel) == (0, 300)
    assert (cal.max_value, cal.max_pixel) == (10000, 50)
    assert cal.pixel_to_value(175) == 5000


def test_anchors_are_exact(value_labels):
    cal = calibrate_axis(value_labels)
    assert cal.pixel_to_value(cal.min_pixel) == cal.min_value
    assert cal.pixel_to_value(cal.max_pixel) == cal.max_value


def test_monotonic_on_inverted_axis():
    cal = AxisCalibration.from_reference_points([(0, 400), (250, 20)])
    values = [cal.pixel_to_value(px) for px in range(0, 450, 7)]
    assert values == sorted(values, reverse=True)


def test_pixel_to_value_is_idempotent():
    cal = AxisCalibration.from_reference_points([(100, 280.5), (900, 31.25)])
    assert cal.pixel_to_value(123.456) == cal.pixel_to_value(123.456)


def test_label_order_does_not_matter():
    a = AxisCalibration.from_reference_points([(0, 300), (5000, 175), (10000, 50)])
    b = AxisCalibration.from_reference_points([(10000, 50), (0, 300), (5000, 175)])
    assert a == b


def test_single_label_is_fatal():
    result = calibrate_axis([TextLabel(text="10k", x=0, y=50), TextLabel(text="Oct 9", x=0, y=320)])
    assert isinstance(result, ProcessingError)
    assert result.error_type == ErrorType.INSUFFICIENT_CALIBRATION_POINTS
    assert not result.recoverable


def test_duplicate_values_do_not_count_twice():
    with pytest.raises(InsufficientCalibrationPoints):
        AxisCalibration.from_reference_points([(5000, 175), (5000, 176)])


def test_distinct_values_at_same_pixel_rejected():
    with pytest.raises(InsufficientCalibrationPoints):
        AxisCalibration.from_reference_points([(0, 100), (10, 100)])


def test_value_references_skip_non_numeric():
    refs = value_references(
        [
            TextLabel(text="Oct 14", x=0, y=0),
            TextLabel(text="2k", x=0, y=10),
            TextLabel(text="Visits", x=0, y=5),
            TextLabel(text="0", x=0, y=20),
        ]
    )
    assert refs == [(0, 20), (2000, 10)]


@pytest.mark.parametrize(
    "text,expected",
    [
        ("0", 0),
        ("250", 250),
        ("10k", 10000),
        ("1,500", 1500),
        ("2.5M", 2500000),
        ("-20", -20),
        ("1B", 1000000000),
        ("10/14", None),
        ("k", None),
        ("", None),
    ],
)
def test_parse_value_label(text, expected):
    assert parse_value_label(text) == expected


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(-2.5) == -2
    assert round_half_up(2.4999) == 2
