"""Value axis calibration from labeled tick positions."""

from __future__ import annotations

import logging

from chart_decoder.models import (
    AxisCalibration,
    DecoderState,
    ErrorType,
    InsufficientCalibrationPoints,
    ProcessingError,
    ProcessingStage,
    TextLabel,
)
from chart_decoder.utils.numeric import parse_value_label

logger = logging.getLogger(__name__)


def value_references(labels: list[TextLabel]) -> list[tuple[float, float]]:
    """``(value, y)`` for every label that reads as an axis number, sorted by value."""
    refs: list[tuple[float, float]] = []
    for label in labels:
        value = parse_value_label(label.text)
        if value is not None:
            refs.append((value, label.y))
    refs.sort(key=lambda r: r[0])
    return refs


def calibrate_axis(labels: list[TextLabel]) -> AxisCalibration | ProcessingError:
    refs = value_references(labels)
    try:
        return AxisCalibration.from_reference_points(refs)
    except InsufficientCalibrationPoints as e:
        return ProcessingError(
            stage=ProcessingStage.CALIBRATE,
            error_type=ErrorType.INSUFFICIENT_CALIBRATION_POINTS,
            recoverable=False,
            message=str(e),
            details={"value_labels": [v for v, _ in refs]},
        )


def calibrate(state: DecoderState) -> DecoderState:
    result = calibrate_axis(state.snapshot.labels)
    if isinstance(result, ProcessingError):
        logger.error("Axis calibration failed: %s", result.message)
        return state.model_copy(update={"errors": state.errors + [result]})

    logger.debug(
        "Value axis %s..%s over pixels %s..%s",
        result.min_value,
        result.max_value,
        result.min_pixel,
        result.max_pixel,
    )
    return state.model_copy(update={"calibration": result})
