"""Vector path tokenizer and drawn-point extraction."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from chart_decoder.models import (
    DecodedPathPoints,
    DecoderState,
    ErrorType,
    Point,
    ProcessingError,
    ProcessingStage,
)

logger = logging.getLogger(__name__)

COMMAND_LETTERS = frozenset("MmLlCcZzHhVvQqSsTtAa")
_ARG_SEPARATOR_RE = re.compile(r"[\s,]+")


@dataclass(frozen=True)
class MoveCommand:
    coords: tuple[float, ...]


@dataclass(frozen=True)
class CurveCommand:
    coords: tuple[float, ...]


@dataclass(frozen=True)
class LineCommand:
    coords: tuple[float, ...]


@dataclass(frozen=True)
class CloseCommand:
    pass


@dataclass(frozen=True)
class UnsupportedCommand:
    letter: str
    raw_args: str


@dataclass(frozen=True)
class MalformedCommand:
    letter: str
    raw_args: str
    reason: str


PathCommand = (
    MoveCommand | CurveCommand | LineCommand | CloseCommand | UnsupportedCommand | MalformedCommand
)


@dataclass(frozen=True)
class SkippedSegment:
    index: int  # position of the command in the path
    letter: str
    raw_args: str
    reason: str


@dataclass(frozen=True)
class DecodedPath:
    points: tuple[Point, ...]
    skipped: tuple[SkippedSegment, ...]


def _split_commands(path_description: str) -> list[tuple[str, str]]:
    """Split into ``(letter, argument text)`` runs. Text before the first letter is dropped."""
    runs: list[tuple[str, str]] = []
    letter: str | None = None
    buf: list[str] = []
    for ch in path_description:
        if ch in COMMAND_LETTERS:
            if letter is not None:
                runs.append((letter, "".join(buf)))
            letter = ch
            buf = []
        elif letter is not None:
            buf.append(ch)
    if letter is not None:
        runs.append((letter, "".join(buf)))
    return runs


def _parse_numbers(raw_args: str) -> tuple[float, ...]:
    stripped = raw_args.strip(" \t\r\n,")
    if not stripped:
        return ()
    return tuple(float(tok) for tok in _ARG_SEPARATOR_RE.split(stripped))


def tokenize_path(path_description: str) -> list[PathCommand]:
    commands: list[PathCommand] = []
    for letter, raw_args in _split_commands(path_description):
        if letter in "Zz":
            commands.append(CloseCommand())
            continue
        if letter not in "MCL":
            commands.append(UnsupportedCommand(letter=letter, raw_args=raw_args))
            continue
        try:
            coords = _parse_numbers(raw_args)
        except ValueError as e:
            commands.append(MalformedCommand(letter=letter, raw_args=raw_args, reason=str(e)))
            continue
        if len(coords) < 2:
            commands.append(
                MalformedCommand(
                    letter=letter,
                    raw_args=raw_args,
                    reason=f"expected a coordinate pair, got {len(coords)} value(s)",
                )
            )
        elif letter == "M":
            commands.append(MoveCommand(coords=coords))
        elif letter == "C":
            commands.append(CurveCommand(coords=coords))
        else:
            commands.append(LineCommand(coords=coords))
    return commands


def decode_path(path_description: str) -> DecodedPath:
    """Extract the drawn endpoints of a path, one per move/curve/line command.

    A curve carries its control points too; only the final pair is drawn.
    Commands whose coordinates cannot be read are skipped and reported so the
    rest of the path still decodes. Without any move command nothing is drawn
    and the result is empty.
    """
    commands = tokenize_path(path_description)
    if not any(isinstance(c, MoveCommand) for c in commands):
        return DecodedPath(points=(), skipped=())

    points: list[Point] = []
    skipped: list[SkippedSegment] = []
    started = False
    for index, command in enumerate(commands):
        if isinstance(command, MoveCommand):
            started = True
            points.append(Point(x=command.coords[0], y=command.coords[1]))
        elif not started:
            continue
        elif isinstance(command, (CurveCommand, LineCommand)):
            points.append(Point(x=command.coords[-2], y=command.coords[-1]))
        elif isinstance(command, MalformedCommand):
            skipped.append(SkippedSegment(index, command.letter, command.raw_args, command.reason))
        elif isinstance(command, UnsupportedCommand):
            skipped.append(
                SkippedSegment(index, command.letter, command.raw_args, "unsupported command")
            )
    return DecodedPath(points=tuple(points), skipped=tuple(skipped))


def decode_paths(state: DecoderState) -> DecoderState:
    """Decode every plotted path and shift points into page coordinates."""
    origin = state.snapshot.plot_origin
    decoded: list[DecodedPathPoints] = []
    errors: list[ProcessingError] = []

    for ordinal, descriptor in enumerate(state.snapshot.paths):
        result = decode_path(descriptor.path_description)
        for seg in result.skipped:
            logger.warning(
                "Skipping segment %d (%s) of path %d: %s", seg.index, seg.letter, ordinal, seg.reason
            )
            errors.append(
                ProcessingError(
                    stage=ProcessingStage.DECODE,
                    error_type=ErrorType.UNPARSEABLE_SEGMENT,
                    recoverable=True,
                    message=f"Skipped segment {seg.index} ({seg.letter}) of path {ordinal}: {seg.reason}",
                    details={"path": ordinal, "segment": seg.index, "raw": seg.raw_args.strip()},
                )
            )
        if not result.points:
            logger.warning("Path %d has no drawable points", ordinal)
            errors.append(
                ProcessingError(
                    stage=ProcessingStage.DECODE,
                    error_type=ErrorType.SERIES_NOT_DECODABLE,
                    recoverable=True,
                    message=f"Path {ordinal} has no move command or drawable points",
                    details={"path": ordinal, "color_key": descriptor.color_key},
                )
            )
            continue
        decoded.append(
            DecodedPathPoints(
                ordinal=ordinal,
                color_key=descriptor.color_key,
                points=[Point(x=p.x + origin.x, y=p.y + origin.y) for p in result.points],
            )
        )
        logger.debug("Path %d: %d points", ordinal, len(result.points))

    return state.model_copy(update={
        "decoded_paths": decoded,
        "errors": state.errors + errors,
    })
