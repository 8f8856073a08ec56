from .chart_snapshot import (
    ChartSnapshot,
    LegendLabel,
    LegendMarker,
    PathDescriptor,
    PlotArea,
    Point,
    TextLabel,
)
from .decoded_output import (
    DataPoint,
    DecodedResult,
    DecodedTable,
    DecodeMetadata,
    ErrorType,
    ProcessingError,
    ProcessingStage,
    SeriesDecoded,
)
from .plot_model import (
    AxisCalibration,
    DateFormat,
    DateRange,
    InsufficientCalibrationPoints,
    LegendEntry,
    TimelinePlan,
    TimelineStrategy,
)
from .state import DecodedPathPoints, DecoderConfig, DecoderState

__all__ = [
    "AxisCalibration",
    "ChartSnapshot",
    "DataPoint",
    "DateFormat",
    "DateRange",
    "DecodedPathPoints",
    "DecodedResult",
    "DecodedTable",
    "DecodeMetadata",
    "DecoderConfig",
    "DecoderState",
    "ErrorType",
    "InsufficientCalibrationPoints",
    "LegendEntry",
    "LegendLabel",
    "LegendMarker",
    "PathDescriptor",
    "PlotArea",
    "Point",
    "ProcessingError",
    "ProcessingStage",
    "SeriesDecoded",
    "TextLabel",
    "TimelinePlan",
    "TimelineStrategy",
]
