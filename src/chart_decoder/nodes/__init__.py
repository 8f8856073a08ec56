"""Pipeline nodes for chart decoding.

Each node takes the decoder state and returns an updated copy.
"""

from __future__ import annotations

from chart_decoder.models import DecoderState


def calibrate(state: DecoderState) -> DecoderState:
    from chart_decoder.nodes.axis_calibration import calibrate as _calibrate

    return _calibrate(state)


def decode(state: DecoderState) -> DecoderState:
    from chart_decoder.nodes.path_decoder import decode_paths as _decode

    return _decode(state)


def timeline(state: DecoderState) -> DecoderState:
    from chart_decoder.nodes.temporal_mapping import resolve_timeline as _timeline

    return _timeline(state)


def legend(state: DecoderState) -> DecoderState:
    from chart_decoder.nodes.legend_matching import match_legend as _legend

    return _legend(state)


def assemble(state: DecoderState) -> DecoderState:
    from chart_decoder.nodes.series_assembly import assemble as _assemble

    return _assemble(state)


__all__ = [
    "assemble",
    "calibrate",
    "decode",
    "legend",
    "timeline",
]
