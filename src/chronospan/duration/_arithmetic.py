from __future__ import annotations

from numbers import Real
from typing import Mapping, Optional

import numpy as np

from chronospan._exceptions import RangeError
from chronospan.shifters import UNITS_WITH_WEEK, StepperTable, get_stepper


def unit_lengths(steppers: Optional[StepperTable] = None) -> np.ndarray:
    """Canonical lengths (ms) in with-week order."""
    return np.array(
        [get_stepper(unit, steppers).canonical_length for unit in UNITS_WITH_WEEK],
        dtype=np.int64,
    )


def canonical_length(
    spans: Mapping[str, int],
    steppers: Optional[StepperTable] = None,
) -> int:
    try:
        counts = np.array([spans.get(unit, 0) for unit in UNITS_WITH_WEEK], dtype=np.int64)
    except OverflowError as exc:
        raise RangeError("Duration is too long to measure.") from exc
    lengths = unit_lengths(steppers)
    if np.any(counts > np.iinfo(np.int64).max // lengths):
        raise RangeError("Duration is too long to measure.")
    return int(counts @ lengths)


def spans_from_canonical_length(
    length: float,
    steppers: Optional[StepperTable] = None,
) -> dict[str, int]:
    """
    Greedy reconstruction in with-week order: take as many of each unit as
    fit into what is left, largest unit first.  Anything shorter than the
    smallest unit is dropped.
    """
    if not isinstance(length, Real) or isinstance(length, bool):
        raise TypeError(f"Canonical length must be a number; got {type(length).__name__}.")
    if length < 0:
        raise RangeError("A duration can not be negative.")

    remaining = length
    spans: dict[str, int] = {}
    for unit, unit_length in zip(UNITS_WITH_WEEK, unit_lengths(steppers).tolist()):
        count = int(remaining // unit_length)
        remaining -= count * unit_length
        if count:
            spans[unit] = count
    return spans
