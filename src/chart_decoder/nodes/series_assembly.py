"""Per-series valuation, same-date merging, and result/table emission."""

from __future__ import annotations

import csv
import io
import logging

import numpy as np

from chart_decoder import config
from chart_decoder.models import (
    AxisCalibration,
    DataPoint,
    DecodedPathPoints,
    DecodedResult,
    DecodedTable,
    DecodeMetadata,
    DecoderState,
    LegendEntry,
    ProcessingError,
    SeriesDecoded,
    TimelinePlan,
    TimelineStrategy,
)
from chart_decoder.utils.date_strings import sort_date_strings
from chart_decoder.utils.numeric import round_half_up

from .legend_matching import assign_series_names
from .temporal_mapping import assign_dates

logger = logging.getLogger(__name__)


def merge_same_date(dates: list[str], values: list[int]) -> list[DataPoint]:
    """Collapse samples sharing a date into their mean, rounded half up.

    Several drawn points can land on one date when the chart has more points
    than days, or when labels are interpolated. The mean is a smoothing of
    those samples; no sample is dropped.
    """
    grouped: dict[str, list[int]] = {}
    for d, v in zip(dates, values):
        grouped.setdefault(d, []).append(v)
    return [
        DataPoint(date=d, value=vs[0] if len(vs) == 1 else round_half_up(float(np.mean(vs))))
        for d, vs in grouped.items()
    ]


def value_series(
    path: DecodedPathPoints,
    name: str,
    calibration: AxisCalibration,
    plan: TimelinePlan,
) -> SeriesDecoded:
    values = [calibration.pixel_to_value(p.y) for p in path.points]
    dates = assign_dates(plan, path.points)
    return SeriesDecoded(name=name, color_key=path.color_key, data=merge_same_date(dates, values))


def order_dates(dates: list[str], plan: TimelinePlan) -> list[str]:
    """Chronological date axis for one decode pass.

    Interpolated axis labels carry no year, so their left-to-right order is
    the only reliable chronology across a year boundary.
    """
    if plan.strategy == TimelineStrategy.LABEL_INTERPOLATION:
        rank: dict[str, int] = {}
        for i, label in enumerate(plan.labels):
            rank.setdefault(label, i)
        unique = list(dict.fromkeys(dates))
        return sorted(unique, key=lambda d: rank.get(d, len(plan.labels)))
    return sort_date_strings(dates)


def build_result(
    series: list[SeriesDecoded],
    plan: TimelinePlan,
    timestamp: str | None = None,
    source_identifier: str | None = None,
) -> DecodedResult:
    dates = order_dates([point.date for s in series for point in s.data], plan)
    position = {d: i for i, d in enumerate(dates)}
    ordered = [
        s.model_copy(update={"data": sorted(s.data, key=lambda p: position[p.date])})
        for s in series
    ]
    return DecodedResult(
        dates=dates,
        series=ordered,
        metadata=DecodeMetadata(
            timestamp=timestamp,
            source_identifier=source_identifier,
            strategy=plan.strategy,
            date_format=plan.date_format,
        ),
    )


def build_table(result: DecodedResult) -> DecodedTable:
    lookups = [{p.date: p.value for p in s.data} for s in result.series]
    rows: list[list[str | int | None]] = [
        [d, *(lookup.get(d) for lookup in lookups)] for d in result.dates
    ]
    return DecodedTable(
        header=[config.CSV_DATE_HEADER, *(s.name for s in result.series)],
        rows=rows,
    )


def table_to_csv(table: DecodedTable) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(table.header)
    for row in table.rows:
        writer.writerow(["" if cell is None else cell for cell in row])
    return buf.getvalue()


def assemble_series(
    paths: list[DecodedPathPoints],
    calibration: AxisCalibration,
    plan: TimelinePlan,
    legend: list[LegendEntry],
    timestamp: str | None = None,
    source_identifier: str | None = None,
) -> tuple[DecodedResult, list[ProcessingError]]:
    names = assign_series_names([p.color_key for p in paths], legend)
    series: list[SeriesDecoded] = []
    errors: list[ProcessingError] = []
    for path, (name, err) in zip(paths, names):
        if err is not None:
            logger.warning(err.message)
            errors.append(err)
        decoded = value_series(path, name, calibration, plan)
        logger.debug("Series %s (%s): %d dated samples", name, path.color_key, len(decoded.data))
        series.append(decoded)
    return build_result(series, plan, timestamp, source_identifier), errors


def assemble(state: DecoderState) -> DecoderState:
    if state.calibration is None or state.timeline is None:
        raise ValueError("Assembly needs an axis calibration and a timeline plan")
    result, errors = assemble_series(
        state.decoded_paths,
        state.calibration,
        state.timeline,
        state.legend,
        timestamp=state.snapshot.timestamp,
        source_identifier=state.snapshot.source_identifier,
    )
    logger.debug("Decoded %d dates across %d series", len(result.dates), len(result.series))
    return state.model_copy(update={
        "output": result,
        "errors": state.errors + errors,
    })
