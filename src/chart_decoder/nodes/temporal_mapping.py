"""Point ordinal / horizontal position to calendar date label."""

from __future__ import annotations

import logging
from datetime import timedelta

import numpy as np

from chart_decoder import config
from chart_decoder.models import (
    DateRange,
    DecoderState,
    ErrorType,
    PlotArea,
    Point,
    ProcessingError,
    ProcessingStage,
    TextLabel,
    TimelinePlan,
    TimelineStrategy,
)
from chart_decoder.utils.date_strings import (
    detect_date_format,
    format_date,
    is_axis_date_label,
    parse_date_range,
)
from chart_decoder.utils.numeric import round_half_up_array

logger = logging.getLogger(__name__)


def visible_date_labels(labels: list[TextLabel]) -> list[TextLabel]:
    """Axis date ticks ordered left to right, duplicates at the same spot dropped."""
    seen: set[tuple[str, float]] = set()
    out: list[TextLabel] = []
    for label in sorted(labels, key=lambda t: t.x):
        text = label.text.strip()
        if not is_axis_date_label(text):
            continue
        key = (text, round(label.x, 1))
        if key in seen:
            continue
        seen.add(key)
        out.append(label.model_copy(update={"text": text}))
    return out


def _plot_extent(plot_area: PlotArea | None, paths: list[list[Point]]) -> tuple[float, float]:
    if plot_area is not None:
        return plot_area.left, plot_area.width
    xs = [p.x for pts in paths for p in pts]
    if not xs:
        return 0.0, 0.0
    return min(xs), max(xs) - min(xs)


def plan_timeline(
    labels: list[TextLabel],
    date_range_text: str | None,
    plot_area: PlotArea | None = None,
    paths: list[list[Point]] | None = None,
    end_exclusive: bool = config.RANGE_END_EXCLUSIVE,
) -> tuple[TimelinePlan, list[ProcessingError]]:
    """Choose exactly one dating strategy for the whole decode pass.

    An authoritative range always wins. Without one, visible axis labels are
    interpolated; with fewer than two labels points get sequential names.
    """
    errors: list[ProcessingError] = []
    date_labels = visible_date_labels(labels)
    texts = [label.text for label in date_labels]
    fmt = detect_date_format(texts)

    date_range: DateRange | None = None
    if date_range_text:
        date_range = parse_date_range(date_range_text, end_exclusive=end_exclusive)
        if date_range is None:
            errors.append(
                ProcessingError(
                    stage=ProcessingStage.TIMELINE,
                    error_type=ErrorType.UNPARSEABLE_DATE_RANGE,
                    recoverable=True,
                    message=f"Could not parse date range {date_range_text!r}",
                    details={"text": date_range_text},
                )
            )

    if date_range is not None:
        return (
            TimelinePlan(
                strategy=TimelineStrategy.RANGE_PROPORTIONAL,
                date_format=fmt,
                date_range=date_range,
                labels=texts,
            ),
            errors,
        )

    if len(date_labels) >= 2:
        left, width = _plot_extent(plot_area, paths or [])
        return (
            TimelinePlan(
                strategy=TimelineStrategy.LABEL_INTERPOLATION,
                date_format=fmt,
                labels=texts,
                plot_left=left,
                plot_width=width,
            ),
            errors,
        )

    errors.append(
        ProcessingError(
            stage=ProcessingStage.TIMELINE,
            error_type=ErrorType.NO_DATE_RANGE_AVAILABLE,
            recoverable=True,
            message="No date range and fewer than 2 axis date labels; using point numbers",
            details={"visible_labels": texts},
        )
    )
    return (
        TimelinePlan(strategy=TimelineStrategy.SEQUENTIAL_PLACEHOLDER, date_format=fmt, labels=texts),
        errors,
    )


def range_day_offsets(n_points: int, total_days: int) -> list[int]:
    if n_points <= 0:
        return []
    if n_points == 1:
        return [0]
    fractions = np.arange(n_points, dtype=np.float64) / (n_points - 1)
    return [int(v) for v in round_half_up_array(fractions * total_days)]


def label_indices(xs: list[float], n_labels: int, plot_left: float, plot_width: float) -> list[int]:
    if not xs or n_labels <= 0:
        return []
    x = np.asarray(xs, dtype=np.float64)
    if plot_width > 0:
        fractions = (x - plot_left) / plot_width
    else:
        fractions = np.zeros_like(x)
    idx = round_half_up_array(fractions * (n_labels - 1))
    return [int(i) for i in np.clip(idx, 0, n_labels - 1)]


def assign_dates(plan: TimelinePlan, points: list[Point]) -> list[str]:
    """Date label for each point of one series, in drawing order."""
    if plan.strategy == TimelineStrategy.RANGE_PROPORTIONAL:
        date_range = plan.date_range
        if date_range is None:
            raise ValueError("Range-proportional timeline has no date range")
        include_year = date_range.spans_multiple_years
        return [
            format_date(date_range.start + timedelta(days=offset), plan.date_format, include_year)
            for offset in range_day_offsets(len(points), date_range.total_days)
        ]

    if plan.strategy == TimelineStrategy.LABEL_INTERPOLATION:
        indices = label_indices(
            [p.x for p in points], len(plan.labels), plan.plot_left, plan.plot_width
        )
        return [plan.labels[i] for i in indices]

    return [config.POINT_LABEL_TEMPLATE.format(n=i) for i in range(len(points))]


def resolve_timeline(state: DecoderState) -> DecoderState:
    snapshot = state.snapshot
    plan, errors = plan_timeline(
        snapshot.labels,
        snapshot.date_range_text,
        plot_area=snapshot.plot_area,
        paths=[p.points for p in state.decoded_paths],
        end_exclusive=state.config.range_end_exclusive,
    )
    for err in errors:
        logger.warning(err.message)
    if plan.date_range is not None:
        logger.debug(
            "Date range %s to %s (%d days, multi-year=%s)",
            plan.date_range.start,
            plan.date_range.end,
            plan.date_range.total_days + 1,
            plan.date_range.spans_multiple_years,
        )
    logger.debug("Timeline strategy: %s", plan.strategy.value)
    return state.model_copy(update={
        "timeline": plan,
        "errors": state.errors + errors,
    })
