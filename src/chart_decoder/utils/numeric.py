"""Rounding and label-number helpers shared by calibration and assembly."""

from __future__ import annotations

import math
import re

import numpy as np
from numpy.typing import NDArray

from chart_decoder import config

_VALUE_LABEL_RE = re.compile(
    r"^(?P<sign>[-+−]?)(?P<number>\d{1,3}(?:,\d{3})+|\d+)(?P<fraction>\.\d+)?\s*(?P<suffix>[kKMB]?)$"
)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going towards +inf."""
    return int(math.floor(value + 0.5))


def round_half_up_array(values: NDArray[np.float64]) -> NDArray[np.int64]:
    return np.floor(values + 0.5).astype(np.int64)


def parse_value_label(text: str) -> float | None:
    """Parse an axis tick like ``"10k"``, ``"1,500"`` or ``"2.5M"``; None if not numeric."""
    match = _VALUE_LABEL_RE.match(text.strip())
    if match is None:
        return None
    number = float(match.group("number").replace(",", "") + (match.group("fraction") or ""))
    suffix = match.group("suffix")
    if suffix:
        number *= config.VALUE_SUFFIX_MULTIPLIERS[suffix]
    if match.group("sign") in ("-", "−"):
        number = -number
    return number
