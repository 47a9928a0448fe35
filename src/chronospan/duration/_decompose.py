from __future__ import annotations

import datetime as dt
import logging
from typing import Optional

from chronospan._exceptions import RangeError
from chronospan.shifters import UNITS_WITHOUT_WEEK, StepperTable, get_stepper
from chronospan.timezone import Timezone, ensure_aware

logger = logging.getLogger(__name__)

_MS = dt.timedelta(milliseconds=1)


def decompose_interval(
    start: dt.datetime,
    end: dt.datetime,
    timezone: Timezone,
    steppers: Optional[StepperTable] = None,
    *,
    skip_ahead: bool = False,
) -> dict[str, int]:
    """
    Calendar distance from ``start`` to ``end``, largest units first.

    For each unit (year → second) take the largest count that, shifted from
    the current cursor, does not pass ``end``; then move the cursor there.
    With ``skip_ahead`` the count starts from a canonical-length estimate
    one unit short of the remaining length; the estimate is only kept when
    it does not overshoot, so the result is the same either way.
    """
    ensure_aware(start, "start")
    ensure_aware(end, "end")

    second = get_stepper("second", steppers)
    start = second.floor(start, timezone)
    end = second.floor(end, timezone)
    if end <= start:
        raise RangeError("start must come before end")

    spans: dict[str, int] = {}
    cursor = start
    shifts = 0
    skipped = 0
    for unit in UNITS_WITHOUT_WEEK:
        stepper = get_stepper(unit, steppers)
        remaining = (end - cursor) // _MS
        if remaining < stepper.canonical_length / 4:
            continue

        count = 0
        target = cursor
        if skip_ahead:
            estimate = max(0, remaining // stepper.canonical_length - 1)
            if estimate > 0:
                moved = stepper.shift(cursor, timezone, estimate)
                shifts += 1
                if moved <= end:
                    count, target = estimate, moved
                    skipped += estimate

        while True:
            moved = stepper.shift(cursor, timezone, count + 1)
            shifts += 1
            if moved > end:
                break
            count, target = count + 1, moved

        if count:
            spans[unit] = count
            cursor = target

    logger.debug(
        "Decomposed %s .. %s in %s into %s (%d shifts, %d skipped)",
        start.isoformat(), end.isoformat(), timezone, spans, shifts, skipped,
    )
    return spans
