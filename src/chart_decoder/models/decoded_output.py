from enum import Enum
from typing import Any

from pydantic import BaseModel

from .plot_model import DateFormat, TimelineStrategy


class ProcessingStage(str, Enum):
    CALIBRATE = "calibrate"
    TIMELINE = "timeline"
    LEGEND = "legend"
    DECODE = "decode"
    ASSEMBLE = "assemble"


class ErrorType(str, Enum):
    INSUFFICIENT_CALIBRATION_POINTS = "insufficient_calibration_points"
    UNPARSEABLE_SEGMENT = "unparseable_segment"
    SERIES_NOT_DECODABLE = "series_not_decodable"
    NO_DATE_RANGE_AVAILABLE = "no_date_range_available"
    UNPARSEABLE_DATE_RANGE = "unparseable_date_range"
    LEGEND_MISMATCH = "legend_mismatch"


class ProcessingError(BaseModel):
    stage: ProcessingStage
    error_type: ErrorType
    recoverable: bool
    message: str
    details: dict[str, Any] = {}


class DataPoint(BaseModel):
    date: str
    value: int


class SeriesDecoded(BaseModel):
    name: str
    color_key: str | None
    data: list[DataPoint]


class DecodeMetadata(BaseModel):
    timestamp: str | None = None
    source_identifier: str | None = None
    strategy: TimelineStrategy
    date_format: DateFormat


class DecodedResult(BaseModel):
    dates: list[str]
    series: list[SeriesDecoded]
    metadata: DecodeMetadata


class DecodedTable(BaseModel):
    """Row-oriented view of a result: one row per date, one column per series."""

    header: list[str]
    rows: list[list[str | int | None]]
