"""Legend marker/label pairing and path-to-series naming."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import TypeVar

from chart_decoder import config
from chart_decoder.models import (
    DecoderState,
    ErrorType,
    LegendEntry,
    LegendLabel,
    LegendMarker,
    ProcessingError,
    ProcessingStage,
)

logger = logging.getLogger(__name__)

T = TypeVar("T", LegendMarker, LegendLabel)


def normalize_color_key(color: str | None) -> str | None:
    if color is None:
        return None
    return color.strip().lower() or None


def placeholder_name(ordinal: int) -> str:
    return config.SERIES_NAME_TEMPLATE.format(n=ordinal + 1)


def row_major_sort(items: Sequence[T], row_tolerance: float) -> list[T]:
    """Top-to-bottom rows, left-to-right within a row.

    An item joins the current row while its y is within ``row_tolerance`` of
    the row's first item.
    """
    rows: list[list[T]] = []
    for item in sorted(items, key=lambda i: (i.y, i.x)):
        if rows and abs(item.y - rows[-1][0].y) < row_tolerance:
            rows[-1].append(item)
        else:
            rows.append([item])
    return [item for row in rows for item in sorted(row, key=lambda i: i.x)]


def build_legend(
    markers: list[LegendMarker],
    labels: list[LegendLabel],
    row_tolerance: float = config.LEGEND_ROW_TOLERANCE_PX,
) -> tuple[list[LegendEntry], list[ProcessingError]]:
    """Pair markers with labels by rank under the same spatial order."""
    ordered_markers = row_major_sort(markers, row_tolerance)
    ordered_labels = row_major_sort(labels, row_tolerance)
    errors: list[ProcessingError] = []

    entries: list[LegendEntry] = []
    for idx, marker in enumerate(ordered_markers):
        name = ordered_labels[idx].name.strip() if idx < len(ordered_labels) else placeholder_name(idx)
        entries.append(
            LegendEntry(
                name=name,
                color_key=normalize_color_key(marker.color_key) or "",
                ordinal_position=idx,
            )
        )

    if len(ordered_markers) != len(ordered_labels):
        errors.append(
            ProcessingError(
                stage=ProcessingStage.LEGEND,
                error_type=ErrorType.LEGEND_MISMATCH,
                recoverable=True,
                message=(
                    f"Legend has {len(ordered_markers)} markers but {len(ordered_labels)} labels"
                ),
                details={
                    "markers": len(ordered_markers),
                    "labels": len(ordered_labels),
                    "unlabeled": [e.name for e in entries[len(ordered_labels):]],
                    "unused_labels": [lbl.name for lbl in ordered_labels[len(ordered_markers):]],
                },
            )
        )
    return entries, errors


# Matchers take the still-unclaimed entries sharing a path's color and the
# path's ordinal; None means "no decision".
LegendMatcher = Callable[[list[LegendEntry], int], LegendEntry | None]


def _unique_color(candidates: list[LegendEntry], ordinal: int) -> LegendEntry | None:
    return candidates[0] if len(candidates) == 1 else None


def _same_ordinal(candidates: list[LegendEntry], ordinal: int) -> LegendEntry | None:
    for entry in candidates:
        if entry.ordinal_position == ordinal:
            return entry
    return None


def _first_unclaimed(candidates: list[LegendEntry], ordinal: int) -> LegendEntry | None:
    return candidates[0] if candidates else None


LEGEND_MATCHERS: tuple[LegendMatcher, ...] = (_unique_color, _same_ordinal, _first_unclaimed)


def assign_series_names(
    path_colors: list[str | None], legend: list[LegendEntry]
) -> list[tuple[str, ProcessingError | None]]:
    """Name each path by legend color, falling back to ``Series {n}`` by path order.

    A legend entry names at most one path.
    """
    by_color: dict[str, list[LegendEntry]] = {}
    for entry in legend:
        by_color.setdefault(entry.color_key, []).append(entry)

    claimed: set[int] = set()
    names: list[tuple[str, ProcessingError | None]] = []
    for ordinal, raw_color in enumerate(path_colors):
        color = normalize_color_key(raw_color)
        candidates = [
            e for e in (by_color.get(color, []) if color else [])
            if e.ordinal_position not in claimed
        ]

        match: LegendEntry | None = None
        for matcher in LEGEND_MATCHERS:
            if not candidates:
                break
            match = matcher(candidates, ordinal)
            if match is not None:
                break

        if match is not None:
            claimed.add(match.ordinal_position)
            names.append((match.name, None))
            continue
        fallback = placeholder_name(ordinal)
        names.append((
            fallback,
            ProcessingError(
                stage=ProcessingStage.LEGEND,
                error_type=ErrorType.LEGEND_MISMATCH,
                recoverable=True,
                message=f"No legend entry for path {ordinal} color {raw_color!r}; named {fallback!r}",
                details={"path": ordinal, "color_key": raw_color},
            ),
        ))
    return names


def match_legend(state: DecoderState) -> DecoderState:
    snapshot = state.snapshot
    legend, errors = build_legend(
        snapshot.legend_markers,
        snapshot.legend_labels,
        row_tolerance=state.config.legend_row_tolerance,
    )
    for err in errors:
        logger.warning(err.message)
    for entry in legend:
        logger.debug("Legend %s -> %s", entry.name, entry.color_key)
    return state.model_copy(update={
        "legend": legend,
        "errors": state.errors + errors,
    })
