from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict, computed_field, model_validator

from chart_decoder.utils.numeric import round_half_up


class InsufficientCalibrationPoints(ValueError):
    """Fewer than two distinct axis values were available to fix a scale."""


class AxisCalibration(BaseModel):
    """Linear pixel to value transform for a vertical axis drawn top-down."""

    model_config = ConfigDict(frozen=True)

    min_value: float
    max_value: float
    min_pixel: float  # pixel of the lowest-valued label
    max_pixel: float  # pixel of the highest-valued label

    @model_validator(mode="after")
    def _check_span(self) -> "AxisCalibration":
        if self.min_pixel == self.max_pixel:
            raise InsufficientCalibrationPoints("Calibration anchors share the same pixel")
        return self

    @classmethod
    def from_reference_points(
        cls, references: list[tuple[float, float]]
    ) -> "AxisCalibration":
        """Build from ``(value, pixel)`` pairs, keeping the first pixel seen per value."""
        by_value: dict[float, float] = {}
        for value, pixel in references:
            by_value.setdefault(value, pixel)
        if len(by_value) < 2:
            raise InsufficientCalibrationPoints(
                f"Need at least 2 distinct axis values, got {len(by_value)}"
            )
        low = min(by_value)
        high = max(by_value)
        if by_value[low] == by_value[high]:
            raise InsufficientCalibrationPoints(
                f"Axis values {low} and {high} are drawn at the same pixel"
            )
        return cls(
            min_value=low,
            max_value=high,
            min_pixel=by_value[low],
            max_pixel=by_value[high],
        )

    def pixel_to_value(self, pixel: float) -> int:
        ratio = (pixel - self.max_pixel) / (self.min_pixel - self.max_pixel)
        return round_half_up(self.max_value - ratio * (self.max_value - self.min_value))


class DateRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    start: date
    end: date

    @model_validator(mode="after")
    def _check_order(self) -> "DateRange":
        if self.end < self.start:
            raise ValueError(f"Date range ends ({self.end}) before it starts ({self.start})")
        return self

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_days(self) -> int:
        return (self.end - self.start).days

    @computed_field  # type: ignore[prop-decorator]
    @property
    def spans_multiple_years(self) -> bool:
        return self.start.year != self.end.year


class DateFormat(str, Enum):
    SLASH = "slash"  # 10/14
    MONTH_NAME = "month_name"  # Oct 14


class TimelineStrategy(str, Enum):
    RANGE_PROPORTIONAL = "range_proportional"
    LABEL_INTERPOLATION = "label_interpolation"
    SEQUENTIAL_PLACEHOLDER = "sequential_placeholder"


class TimelinePlan(BaseModel):
    """How every point in this decode pass gets its date label."""

    model_config = ConfigDict(frozen=True)

    strategy: TimelineStrategy
    date_format: DateFormat = DateFormat.MONTH_NAME
    date_range: DateRange | None = None
    # x-ordered visible axis date labels
    labels: list[str] = []
    plot_left: float = 0.0
    plot_width: float = 0.0


class LegendEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    color_key: str
    ordinal_position: int
