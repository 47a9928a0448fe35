# src/chronospan/shifters/__init__.py
"""
chronospan.shifters
~~~~~~~~~~~~~~~~~~~

Calendar stepper table: per-unit floor / shift / round functions over
timezone-aware instants.  Durations never do calendar math themselves; they
look the unit up in a stepper table and call into it.

Basic usage::

    from chronospan.shifters import DEFAULT_STEPPERS
    from chronospan.timezone import Timezone

    day = DEFAULT_STEPPERS["day"]
    midnight = day.floor(instant, Timezone.UTC)
    tomorrow = day.shift(midnight, Timezone.UTC, 1)

A custom table is any mapping from unit name to Stepper; pass it as
``steppers=`` to the Duration operations.

Public API
----------
Stepper              One table entry.
DEFAULT_STEPPERS     Read-only default table for the seven units.
UNITS_WITH_WEEK      year → second, including week.
UNITS_WITHOUT_WEEK   year → second, without week.
get_stepper          Table lookup with validation.
"""

from __future__ import annotations

from chronospan.shifters.shifters import (
    DEFAULT_STEPPERS,
    UNITS_WITH_WEEK,
    UNITS_WITHOUT_WEEK,
    Stepper,
    StepperTable,
    get_stepper,
)

__all__ = [
    "DEFAULT_STEPPERS",
    "UNITS_WITH_WEEK",
    "UNITS_WITHOUT_WEEK",
    "Stepper",
    "StepperTable",
    "get_stepper",
]
