"""Synthetic chart test harness.

Generate time series with known ground truth and render them into chart
snapshots for decoder evaluation.

Usage:
    from tests.synthetic import generate_chart, render_snapshot
"""

from .data_gen import SyntheticChart, SyntheticSeries, generate_chart
from .renderer import render_path, render_snapshot

__all__ = [
    "generate_chart",
    "render_path",
    "render_snapshot",
    "SyntheticChart",
    "SyntheticSeries",
]
