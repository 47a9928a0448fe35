from __future__ import annotations

import re
from typing import Mapping

from chronospan._exceptions import EmptyDurationError, ParseError
from chronospan.shifters import UNITS_WITH_WEEK, UNITS_WITHOUT_WEEK

_PERIOD_WEEK_RE = re.compile(r"P(\d+)W", re.ASCII)
_PERIOD_RE = re.compile(
    r"P(?:(\d+)Y)?(?:(\d+)M)?(?:(\d+)D)?"
    r"(?:T(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?)?",
    re.ASCII,
)

# index into UNITS_WITHOUT_WEEK of the first clock-time unit
_TIME_START = UNITS_WITHOUT_WEEK.index("hour")


def parse_spans(text: str) -> dict[str, int]:
    """
    Split an ISO period like ``P1DT3H`` or ``P2W`` into a span mapping.
    Zero groups are left out of the result; a week form of zero is an
    empty duration.
    """
    match = _PERIOD_WEEK_RE.fullmatch(text)
    if match:
        weeks = int(match.group(1))
        if not weeks:
            raise EmptyDurationError("Duration can not be empty")
        return {"week": weeks}

    match = _PERIOD_RE.fullmatch(text)
    if match is None:
        raise ParseError(f"Can not parse duration '{text}'")

    spans: dict[str, int] = {}
    for unit, group in zip(UNITS_WITHOUT_WEEK, match.groups()):
        if group and int(group):
            spans[unit] = int(group)
    return spans


def format_spans(spans: Mapping[str, int]) -> str:
    if spans.get("week"):
        return f"P{spans['week']}W"

    parts = ["P"]
    added_t = False
    for i, unit in enumerate(UNITS_WITHOUT_WEEK):
        value = spans.get(unit)
        if not value:
            continue
        if not added_t and i >= _TIME_START:
            parts.append("T")
            added_t = True
        parts.append(f"{value}{unit[0].upper()}")
    return "".join(parts)


def describe_spans(spans: Mapping[str, int], capitalize: bool = False) -> str:
    description = []
    for unit in UNITS_WITH_WEEK:
        value = spans.get(unit)
        if not value:
            continue
        title = unit.capitalize() if capitalize else unit
        description.append(title if value == 1 else f"{value} {title}s")
    return ", ".join(description)
