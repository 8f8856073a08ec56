"""Date label shapes: recognising, formatting, parsing and ordering.

Every fallback chain here is an ordered tuple of strategies. Each strategy
either returns a definite result or None, and the first hit wins.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from datetime import date, datetime, timedelta

from chart_decoder import config
from chart_decoder.models.plot_model import DateFormat, DateRange

_MONTHS = "|".join(config.MONTH_NAMES)
_MONTH_INDEX = {name: i + 1 for i, name in enumerate(config.MONTH_NAMES)}

MONTH_DAY_RE = re.compile(rf"^({_MONTHS})\s+(\d{{1,2}})$")
SLASH_DAY_RE = re.compile(r"^(\d{1,2})/(\d{1,2})$")
MONTH_DAY_YEAR_RE = re.compile(rf"^({_MONTHS})\s+(\d{{1,2}}),?\s+(\d{{4}})$")
SLASH_DAY_YEAR_RE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")
POINT_LABEL_RE = re.compile(r"^Point\s+(\d+)$")

_SLASH_DATE = r"(\d{1,2})/(\d{1,2})/(\d{4})"
_ISO_DATE = r"(\d{4})-(\d{2})-(\d{2})"


def is_axis_date_label(text: str) -> bool:
    return bool(MONTH_DAY_RE.match(text) or SLASH_DAY_RE.match(text))


def detect_date_format(visible_labels: list[str]) -> DateFormat:
    if visible_labels and SLASH_DAY_RE.match(visible_labels[0]):
        return DateFormat.SLASH
    return DateFormat.MONTH_NAME


def format_date(value: date, fmt: DateFormat, include_year: bool = False) -> str:
    if fmt == DateFormat.SLASH:
        text = f"{value.month}/{value.day}"
        return f"{text}/{value.year}" if include_year else text
    text = f"{config.MONTH_NAMES[value.month - 1]} {value.day}"
    return f"{text} {value.year}" if include_year else text


# ---------------------------------------------------------------------------
# Authoritative date range text
# ---------------------------------------------------------------------------


def _slash_pair(pattern: str) -> Callable[[str], tuple[date, date] | None]:
    regex = re.compile(pattern.format(d=_SLASH_DATE))

    def _parse(text: str) -> tuple[date, date] | None:
        match = regex.search(text)
        if match is None:
            return None
        sm, sd, sy, em, ed, ey = (int(g) for g in match.groups())
        return date(sy, sm, sd), date(ey, em, ed)

    return _parse


def _iso_pair(text: str) -> tuple[date, date] | None:
    match = re.search(rf"{_ISO_DATE}\s*(?:-|–|to)\s*{_ISO_DATE}", text)
    if match is None:
        return None
    sy, sm, sd, ey, em, ed = (int(g) for g in match.groups())
    return date(sy, sm, sd), date(ey, em, ed)


DATE_RANGE_PARSERS: tuple[Callable[[str], tuple[date, date] | None], ...] = (
    _slash_pair(r"{d}\s*[-–]\s*{d}"),
    _slash_pair(r"Data from {d} to {d}"),
    _iso_pair,
)


def parse_date_range(text: str, end_exclusive: bool = True) -> DateRange | None:
    """Parse selector text such as ``"10/14/2023 - 10/16/2025"``.

    With ``end_exclusive`` the named end date is not plotted, so the range
    stops one day earlier. Returns None when no parser recognises the text
    or the dates are impossible.
    """
    for parser in DATE_RANGE_PARSERS:
        try:
            parsed = parser(text)
        except ValueError:
            return None
        if parsed is None:
            continue
        start, end = parsed
        if end_exclusive and end > start:
            end = end - timedelta(days=1)
        if end < start:
            return None
        return DateRange(start=start, end=end)
    return None


# ---------------------------------------------------------------------------
# Chronological ordering of formatted date strings
# ---------------------------------------------------------------------------

SortKey = tuple[int, int]


def _month_year_key(text: str) -> SortKey | None:
    match = MONTH_DAY_YEAR_RE.match(text)
    if match is None:
        return None
    return 0, date(int(match.group(3)), _MONTH_INDEX[match.group(1)], int(match.group(2))).toordinal()


def _slash_year_key(text: str) -> SortKey | None:
    match = SLASH_DAY_YEAR_RE.match(text)
    if match is None:
        return None
    month, day, year = (int(g) for g in match.groups())
    return 0, date(year, month, day).toordinal()


def _month_key(text: str) -> SortKey | None:
    match = MONTH_DAY_RE.match(text)
    if match is None:
        return None
    return 0, date(config.YEARLESS_SORT_YEAR, _MONTH_INDEX[match.group(1)], int(match.group(2))).toordinal()


def _slash_key(text: str) -> SortKey | None:
    match = SLASH_DAY_RE.match(text)
    if match is None:
        return None
    month, day = (int(g) for g in match.groups())
    return 0, date(config.YEARLESS_SORT_YEAR, month, day).toordinal()


def _placeholder_key(text: str) -> SortKey | None:
    match = POINT_LABEL_RE.match(text)
    if match is None:
        return None
    return 1, int(match.group(1))


def _generic_key(text: str) -> SortKey | None:
    # Weak fallback: only ISO shapes are accepted, locale-dependent forms are not guessed.
    try:
        return 0, datetime.fromisoformat(text).date().toordinal()
    except ValueError:
        return None


DATE_SORT_STRATEGIES: tuple[Callable[[str], SortKey | None], ...] = (
    _month_year_key,
    _slash_year_key,
    _month_key,
    _slash_key,
    _placeholder_key,
    _generic_key,
)


def date_sort_key(text: str) -> SortKey | None:
    for strategy in DATE_SORT_STRATEGIES:
        try:
            key = strategy(text)
        except ValueError:
            # Matched the shape but named an impossible day
            continue
        if key is not None:
            return key
    return None


def sort_date_strings(dates: Iterable[str]) -> list[str]:
    """Deduplicate and order chronologically; unparseable strings go last, first-seen order."""
    unique = list(dict.fromkeys(dates))
    keyed: list[tuple[tuple[int, int, int], str]] = []
    for position, text in enumerate(unique):
        key = date_sort_key(text)
        rank = key if key is not None else (2, 0)
        keyed.append(((rank[0], rank[1], position), text))
    keyed.sort(key=lambda item: item[0])
    return [text for _, text in keyed]
