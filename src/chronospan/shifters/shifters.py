from __future__ import annotations

import calendar
import datetime as dt
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Mapping, Optional

from chronospan._exceptions import ValidationError
from chronospan.timezone import Timezone, ensure_aware

UNITS_WITH_WEEK: tuple[str, ...] = ("year", "month", "week", "day", "hour", "minute", "second")
UNITS_WITHOUT_WEEK: tuple[str, ...] = ("year", "month", "day", "hour", "minute", "second")

_UTC = dt.timezone.utc

_SECOND_MS = 1000
_MINUTE_MS = 60 * _SECOND_MS
_HOUR_MS = 60 * _MINUTE_MS
_DAY_MS = 24 * _HOUR_MS

FloorFn = Callable[[dt.datetime, Timezone], dt.datetime]
ShiftFn = Callable[[dt.datetime, Timezone, int], dt.datetime]
RoundFn = Callable[[dt.datetime, int, Timezone], dt.datetime]


@dataclass(frozen=True)
class Stepper:
    """
    Calendar primitives for one unit.

    canonical_length is an approximate length in milliseconds (months are 30
    days, years 365) and is only meant for comparison and cross-unit
    arithmetic.  siblings is how many of this unit make one cycle of its
    parent; round snaps to a multiple of a count within that cycle.
    """

    name: str
    canonical_length: int
    floor: FloorFn
    shift: ShiftFn
    siblings: Optional[int] = None
    round: Optional[RoundFn] = None


StepperTable = Mapping[str, Stepper]


# ── wall-clock helpers ────────────────────────────────────────────────────

def _utc(instant: dt.datetime) -> dt.datetime:
    return ensure_aware(instant).astimezone(_UTC)


def _local(instant: dt.datetime, timezone: Timezone) -> dt.datetime:
    return ensure_aware(instant).astimezone(timezone.tzinfo)


def _from_wall(wall: dt.datetime, timezone: Timezone) -> dt.datetime:
    # fold=0: gaps resolve forward, repeated wall times to their first occurrence
    return wall.replace(tzinfo=timezone.tzinfo, fold=0).astimezone(_UTC)


def _local_midnight(day: dt.date, timezone: Timezone) -> dt.datetime:
    return _from_wall(dt.datetime.combine(day, dt.time()), timezone)


def _wall(instant: dt.datetime, timezone: Timezone) -> dt.datetime:
    return _local(instant, timezone).replace(tzinfo=None)


def _month_shift(wall: dt.datetime, amount: int) -> dt.datetime:
    if amount == 0:
        return wall
    new_year, new_month0 = divmod(wall.year * 12 + wall.month - 1 + amount, 12)
    new_month = new_month0 + 1
    if wall.day <= 28:
        return wall.replace(year=new_year, month=new_month)
    days_in_month = calendar.monthrange(new_year, new_month)[1]
    return wall.replace(year=new_year, month=new_month, day=min(wall.day, days_in_month))


def _year_shift(wall: dt.datetime, amount: int) -> dt.datetime:
    if amount == 0:
        return wall
    new_year = wall.year + amount
    if wall.day <= 28:
        return wall.replace(year=new_year)
    days_in_month = calendar.monthrange(new_year, wall.month)[1]
    return wall.replace(year=new_year, day=min(wall.day, days_in_month))


# ── second ────────────────────────────────────────────────────────────────

def _second_floor(instant: dt.datetime, timezone: Timezone) -> dt.datetime:
    return _utc(instant).replace(microsecond=0)


def _second_shift(instant: dt.datetime, timezone: Timezone, step: int) -> dt.datetime:
    return _utc(instant) + dt.timedelta(seconds=step)


def _second_round(instant: dt.datetime, multiple: int, timezone: Timezone) -> dt.datetime:
    excess = _local(instant, timezone).second % multiple
    return _utc(instant) - dt.timedelta(seconds=excess)


# ── minute ────────────────────────────────────────────────────────────────

def _minute_floor(instant: dt.datetime, timezone: Timezone) -> dt.datetime:
    return _local(instant, timezone).replace(second=0, microsecond=0).astimezone(_UTC)


def _minute_shift(instant: dt.datetime, timezone: Timezone, step: int) -> dt.datetime:
    return _utc(instant) + dt.timedelta(minutes=step)


def _minute_round(instant: dt.datetime, multiple: int, timezone: Timezone) -> dt.datetime:
    excess = _local(instant, timezone).minute % multiple
    return _utc(instant) - dt.timedelta(minutes=excess)


# ── hour ──────────────────────────────────────────────────────────────────

def _hour_floor(instant: dt.datetime, timezone: Timezone) -> dt.datetime:
    local = _local(instant, timezone)
    return local.replace(minute=0, second=0, microsecond=0).astimezone(_UTC)


def _hour_shift(instant: dt.datetime, timezone: Timezone, step: int) -> dt.datetime:
    return _utc(instant) + dt.timedelta(hours=step)


def _hour_round(instant: dt.datetime, multiple: int, timezone: Timezone) -> dt.datetime:
    wall = _wall(instant, timezone)
    excess = wall.hour % multiple
    if not excess:
        return _utc(instant)
    return _from_wall(wall.replace(hour=wall.hour - excess), timezone)


# ── day / week ────────────────────────────────────────────────────────────

def _day_floor(instant: dt.datetime, timezone: Timezone) -> dt.datetime:
    return _local_midnight(_wall(instant, timezone).date(), timezone)


def _day_shift(instant: dt.datetime, timezone: Timezone, step: int) -> dt.datetime:
    return _from_wall(_wall(instant, timezone) + dt.timedelta(days=step), timezone)


def _week_floor(instant: dt.datetime, timezone: Timezone) -> dt.datetime:
    day = _wall(instant, timezone).date()
    return _local_midnight(day - dt.timedelta(days=day.weekday()), timezone)


def _week_shift(instant: dt.datetime, timezone: Timezone, step: int) -> dt.datetime:
    return _day_shift(instant, timezone, step * 7)


# ── month / year ──────────────────────────────────────────────────────────

def _month_floor(instant: dt.datetime, timezone: Timezone) -> dt.datetime:
    return _local_midnight(_wall(instant, timezone).date().replace(day=1), timezone)


def _month_shift_fn(instant: dt.datetime, timezone: Timezone, step: int) -> dt.datetime:
    return _from_wall(_month_shift(_wall(instant, timezone), step), timezone)


def _month_round(instant: dt.datetime, multiple: int, timezone: Timezone) -> dt.datetime:
    wall = _wall(instant, timezone)
    excess = (wall.month - 1) % multiple
    if not excess:
        return _utc(instant)
    return _from_wall(wall.replace(month=wall.month - excess), timezone)


def _year_floor(instant: dt.datetime, timezone: Timezone) -> dt.datetime:
    return _local_midnight(dt.date(_wall(instant, timezone).year, 1, 1), timezone)


def _year_shift_fn(instant: dt.datetime, timezone: Timezone, step: int) -> dt.datetime:
    return _from_wall(_year_shift(_wall(instant, timezone), step), timezone)


DEFAULT_STEPPERS: StepperTable = MappingProxyType({
    "second": Stepper("second", _SECOND_MS, _second_floor, _second_shift, 60, _second_round),
    "minute": Stepper("minute", _MINUTE_MS, _minute_floor, _minute_shift, 60, _minute_round),
    "hour": Stepper("hour", _HOUR_MS, _hour_floor, _hour_shift, 24, _hour_round),
    "day": Stepper("day", _DAY_MS, _day_floor, _day_shift),
    "week": Stepper("week", 7 * _DAY_MS, _week_floor, _week_shift),
    "month": Stepper("month", 30 * _DAY_MS, _month_floor, _month_shift_fn, 12, _month_round),
    "year": Stepper("year", 365 * _DAY_MS, _year_floor, _year_shift_fn),
})


def get_stepper(unit: str, steppers: Optional[StepperTable] = None) -> Stepper:
    table = DEFAULT_STEPPERS if steppers is None else steppers
    try:
        return table[unit]
    except KeyError:
        raise ValidationError(f"No stepper for unit '{unit}'.") from None
