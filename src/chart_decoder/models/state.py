from pydantic import BaseModel

from chart_decoder import config

from .chart_snapshot import ChartSnapshot, Point
from .decoded_output import DecodedResult, ProcessingError
from .plot_model import AxisCalibration, LegendEntry, TimelinePlan


class DecoderConfig(BaseModel):
    legend_row_tolerance: float = config.LEGEND_ROW_TOLERANCE_PX
    range_end_exclusive: bool = config.RANGE_END_EXCLUSIVE


class DecodedPathPoints(BaseModel):
    """Points of one plotted path, in page coordinates, before valuation."""

    ordinal: int
    color_key: str | None
    points: list[Point]


class DecoderState(BaseModel):
    snapshot: ChartSnapshot
    config: DecoderConfig = DecoderConfig()

    calibration: AxisCalibration | None = None
    timeline: TimelinePlan | None = None
    legend: list[LegendEntry] = []
    decoded_paths: list[DecodedPathPoints] = []

    output: DecodedResult | None = None

    errors: list[ProcessingError] = []

    @property
    def degraded(self) -> bool:
        return self.output is not None and any(e.recoverable for e in self.errors)
