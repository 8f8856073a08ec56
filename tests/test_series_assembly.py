from datetime import date

import pytest

from chart_decoder.models import (
    AxisCalibration,
    ChartSnapshot,
    DataPoint,
    DateFormat,
    DateRange,
    DecodedPathPoints,
    DecoderState,
    ErrorType,
    LegendEntry,
    Point,
    SeriesDecoded,
    TimelinePlan,
    TimelineStrategy,
)
from chart_decoder.nodes.series_assembly import (
    assemble,
    assemble_series,
    build_result,
    build_table,
    merge_same_date,
    order_dates,
    table_to_csv,
)
from chart_decoder.utils.date_strings import sort_date_strings

CALIBRATION = AxisCalibration.from_reference_points([(0, 300), (10000, 50)])
PLAN = TimelinePlan(
    strategy=TimelineStrategy.RANGE_PROPORTIONAL,
    date_format=DateFormat.MONTH_NAME,
    date_range=DateRange(start=date(2023, 10, 14), end=date(2023, 10, 16)),
)


def test_merge_same_date_averages_and_rounds_half_up():
    merged = merge_same_date(["Oct 9", "Oct 9", "Oct 10", "Oct 9"], [100, 201, 7, 300])
    assert merged == [DataPoint(date="Oct 9", value=200), DataPoint(date="Oct 10", value=7)]
    assert merge_same_date(["a", "a"], [1, 2]) == [DataPoint(date="a", value=2)]


def test_sort_recognises_all_four_shapes():
    assert sort_date_strings(["Jan 2 2024", "Dec 31 2023"]) == ["Dec 31 2023", "Jan 2 2024"]
    assert sort_date_strings(["1/2/2024", "12/31/2023", "1/2/2024"]) == ["12/31/2023", "1/2/2024"]
    assert sort_date_strings(["Oct 10", "Sep 30", "Oct 9"]) == ["Sep 30", "Oct 9", "Oct 10"]
    assert sort_date_strings(["10/10", "9/30", "10/9"]) == ["9/30", "10/9", "10/10"]


def test_sort_placeholders_and_weak_fallback():
    assert sort_date_strings(["Point 10", "Point 2", "Point 0"]) == ["Point 0", "Point 2", "Point 10"]
    assert sort_date_strings(["2024-01-05", "mystery", "2024-01-01", "other"]) == [
        "2024-01-01",
        "2024-01-05",
        "mystery",
        "other",
    ]


def test_sort_skips_impossible_dates():
    assert sort_date_strings(["2/30", "2/1"]) == ["2/1", "2/30"]


def test_build_result_unions_and_orders_dates():
    series = [
        SeriesDecoded(name="A", color_key="#a", data=[DataPoint(date="Oct 10", value=1), DataPoint(date="Oct 9", value=2)]),
        SeriesDecoded(name="B", color_key="#b", data=[DataPoint(date="Oct 11", value=3), DataPoint(date="Oct 10", value=4)]),
    ]
    result = build_result(series, PLAN, timestamp="t", source_identifier="s")
    assert result.dates == ["Oct 9", "Oct 10", "Oct 11"]
    assert [p.date for p in result.series[0].data] == ["Oct 9", "Oct 10"]
    assert result.metadata.strategy == TimelineStrategy.RANGE_PROPORTIONAL
    assert (result.metadata.timestamp, result.metadata.source_identifier) == ("t", "s")


def test_table_marks_absent_cells_explicitly():
    series = [
        SeriesDecoded(name="A", color_key="#a", data=[DataPoint(date="Oct 9", value=2)]),
        SeriesDecoded(name="B, Inc", color_key="#b", data=[DataPoint(date="Oct 10", value=4)]),
    ]
    table = build_table(build_result(series, PLAN))
    assert table.header == ["Date", "A", "B, Inc"]
    assert table.rows == [["Oct 9", 2, None], ["Oct 10", None, 4]]
    assert table_to_csv(table) == 'Date,A,"B, Inc"\nOct 9,2,\nOct 10,,4\n'


def test_assemble_series_values_dates_and_names():
    paths = [
        DecodedPathPoints(
            ordinal=0,
            color_key="#2caffe",
            points=[Point(x=0, y=300), Point(x=1, y=175), Point(x=2, y=50)],
        ),
        DecodedPathPoints(ordinal=1, color_key="#ff0000", points=[Point(x=0, y=50)]),
    ]
    legend = [LegendEntry(name="Visits", color_key="#2caffe", ordinal_position=0)]
    result, errors = assemble_series(paths, CALIBRATION, PLAN, legend)
    assert result.dates == ["Oct 14", "Oct 15", "Oct 16"]
    assert result.series[0].name == "Visits"
    assert [(p.date, p.value) for p in result.series[0].data] == [
        ("Oct 14", 0),
        ("Oct 15", 5000),
        ("Oct 16", 10000),
    ]
    assert result.series[1].name == "Series 2"
    assert [(p.date, p.value) for p in result.series[1].data] == [("Oct 14", 10000)]
    assert [e.error_type for e in errors] == [ErrorType.LEGEND_MISMATCH]


def test_more_points_than_days_are_merged():
    points = [Point(x=i, y=300 - i * 25) for i in range(5)]
    paths = [DecodedPathPoints(ordinal=0, color_key="#a", points=points)]
    plan = PLAN.model_copy(
        update={"date_range": DateRange(start=date(2023, 10, 14), end=date(2023, 10, 15))}
    )
    result, _ = assemble_series(paths, CALIBRATION, plan, [])
    # offsets 0, 0.25->0, 0.5->1, 0.75->1, 1 -> 1
    assert [(p.date, p.value) for p in result.series[0].data] == [("Oct 14", 500), ("Oct 15", 3000)]


def test_assembly_is_idempotent():
    paths = [DecodedPathPoints(ordinal=0, color_key="#a", points=[Point(x=0, y=120.3), Point(x=4, y=99.9)])]
    first, _ = assemble_series(paths, CALIBRATION, PLAN, [], timestamp="t")
    second, _ = assemble_series(paths, CALIBRATION, PLAN, [], timestamp="t")
    assert first.model_dump_json() == second.model_dump_json()


def test_interpolated_labels_keep_axis_order_over_year_end():
    plan = TimelinePlan(
        strategy=TimelineStrategy.LABEL_INTERPOLATION,
        date_format=DateFormat.MONTH_NAME,
        labels=["Dec 30", "Dec 31", "Jan 1", "Jan 2"],
    )
    assert order_dates(["Jan 1", "Dec 31", "Jan 2", "Jan 1", "Dec 30"], plan) == [
        "Dec 30", "Dec 31", "Jan 1", "Jan 2",
    ]


def test_assemble_without_calibration_raises():
    with pytest.raises(ValueError):
        assemble(DecoderState(snapshot=ChartSnapshot(), timeline=PLAN))
