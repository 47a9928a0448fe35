# src/chronospan/duration/__init__.py
"""
chronospan.duration
~~~~~~~~~~~~~~~~~~~

Calendar-aware durations.  A Duration is an immutable mapping of calendar
units (year, month, week, day, hour, minute, second) to positive counts; it
parses and prints ISO periods, does canonical-length arithmetic, and floors,
shifts and enumerates timezone-aware instants.

Basic usage::

    from chronospan.duration import Duration
    from chronospan.timezone import Timezone

    d = Duration.from_string("P3DT4H")
    str(d)                                          # → 'P3DT4H'
    Duration.from_string("P1D") + Duration.from_string("P1D")   # → Duration('P2D')

    hour = Duration({"hour": 1})
    hour.floor(instant, Timezone.UTC)               # start of the hour
    hour.materialize(start, end, Timezone.UTC)      # every hour in [start, end]

    Duration.from_interval(start, end, Timezone("Europe/Paris"))

Arithmetic goes through each unit's canonical length (months are 30 days,
years 365), so ``a + b`` is rebuilt greedily, largest unit first, and need
not keep the unit mix of its operands.

Public API
----------
Duration                    The value class.
parse_duration              Shorthand for Duration.from_string.
DurationError               Base exception; ParseError, ValidationError,
                            EmptyDurationError, RangeError and
                            UnsupportedOperationError derive from it.
"""

from __future__ import annotations

from chronospan._exceptions import (
    DurationError,
    EmptyDurationError,
    ParseError,
    RangeError,
    UnsupportedOperationError,
    ValidationError,
)
from chronospan.duration.duration import Duration, parse_duration

__all__ = [
    "Duration",
    "DurationError",
    "EmptyDurationError",
    "ParseError",
    "RangeError",
    "UnsupportedOperationError",
    "ValidationError",
    "parse_duration",
]
