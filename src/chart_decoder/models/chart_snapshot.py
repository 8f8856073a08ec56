"""Raw chart inputs read from the rendered document by the element lookup layer."""

from pydantic import BaseModel, ConfigDict


class Point(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: float
    y: float


class TextLabel(BaseModel):
    """A text node inside the chart, positioned in page coordinates."""

    text: str
    x: float
    y: float


class PathDescriptor(BaseModel):
    path_description: str
    color_key: str | None = None


class LegendMarker(BaseModel):
    color_key: str
    x: float
    y: float


class LegendLabel(BaseModel):
    name: str
    x: float
    y: float


class PlotArea(BaseModel):
    left: float
    width: float


class ChartSnapshot(BaseModel):
    labels: list[TextLabel] = []
    paths: list[PathDescriptor] = []
    legend_markers: list[LegendMarker] = []
    legend_labels: list[LegendLabel] = []
    date_range_text: str | None = None
    # Offset of the drawing surface; path coordinates are local to it
    plot_origin: Point = Point(x=0.0, y=0.0)
    plot_area: PlotArea | None = None
    source_identifier: str | None = None
    timestamp: str | None = None
