import pytest

from chart_decoder.models import (
    ChartSnapshot,
    LegendLabel,
    LegendMarker,
    PathDescriptor,
    TextLabel,
)


@pytest.fixture
def value_labels() -> list[TextLabel]:
    return [
        TextLabel(text="0", x=30, y=300),
        TextLabel(text="5k", x=30, y=175),
        TextLabel(text="10k", x=30, y=50),
    ]


@pytest.fixture
def small_snapshot(value_labels: list[TextLabel]) -> ChartSnapshot:
    return ChartSnapshot(
        labels=value_labels + [
            TextLabel(text="Oct 14", x=100, y=320),
            TextLabel(text="Oct 16", x=300, y=320),
        ],
        paths=[
            PathDescriptor(
                path_description="M 100 300 C 1 1 1 1 200 175 C 1 1 1 1 300 50",
                color_key="#2caffe",
            ),
            PathDescriptor(
                path_description="M 100 50 C 1 1 1 1 200 50 C 1 1 1 1 300 300",
                color_key="#544FC5",
            ),
        ],
        legend_markers=[
            LegendMarker(color_key="#2caffe", x=60, y=360),
            LegendMarker(color_key="#544fc5", x=260, y=360),
        ],
        legend_labels=[
            LegendLabel(name="Visits", x=74, y=362),
            LegendLabel(name="Sessions", x=274, y=362),
        ],
        date_range_text="10/14/2023 - 10/17/2023",
        source_identifier="https://example.test/chart",
        timestamp="2025-01-01T00:00:00+00:00",
    )
