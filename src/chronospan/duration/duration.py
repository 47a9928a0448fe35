from __future__ import annotations

import datetime as dt
import logging
from numbers import Integral
from types import MappingProxyType
from typing import Any, Mapping, Optional

import numpy as np

from chronospan._exceptions import (
    EmptyDurationError,
    RangeError,
    UnsupportedOperationError,
    ValidationError,
)
from chronospan.config.settings import EngineSettings, get_settings
from chronospan.duration._arithmetic import canonical_length, spans_from_canonical_length
from chronospan.duration._decompose import decompose_interval
from chronospan.duration._parse import describe_spans, format_spans, parse_spans
from chronospan.shifters import UNITS_WITH_WEEK, StepperTable, get_stepper
from chronospan.timezone import Timezone, ensure_aware

logger = logging.getLogger(__name__)

_UTC = dt.timezone.utc


def _check_timezone(timezone: Any) -> Timezone:
    if not isinstance(timezone, Timezone):
        raise ValidationError(f"Expected a Timezone; got {type(timezone).__name__}.")
    return timezone


def _validate_spans(spans: Mapping[str, Any]) -> dict[str, int]:
    unknown = set(spans) - set(UNITS_WITH_WEEK)
    if unknown:
        raise ValidationError(f"Unknown duration spans: {sorted(map(str, unknown))}.")

    clean: dict[str, int] = {}
    for unit in UNITS_WITH_WEEK:
        value = spans.get(unit)
        if value is None:
            continue
        if isinstance(value, bool) or not isinstance(value, Integral):
            raise ValidationError(f"Span '{unit}' must be an integer; got {value!r}.")
        if value < 0:
            raise ValidationError(f"Span '{unit}' must be non-negative; got {value}.")
        if value:
            clean[unit] = int(value)

    if not clean:
        raise EmptyDurationError("Duration can not be empty")
    if "week" in clean and len(clean) > 1:
        raise ValidationError("Can not mix 'week' and other spans")
    return clean


class Duration:
    """
    Immutable calendar duration like P1DT3H or P2W.

    Spans are stored in with-week order and are all positive.  A duration
    made of exactly one span exposes it as ``single_span``; only such
    durations can be floored.  Every operation touching instants takes a
    Timezone and an optional stepper table, and returns instants in UTC.
    """

    __slots__ = ("_spans", "_single_span")

    def __init__(self, spans: Mapping[str, int]) -> None:
        if not isinstance(spans, Mapping):
            raise ValidationError(
                f"Duration must be built from a mapping of spans; got {type(spans).__name__}."
            )
        clean = _validate_spans(spans)
        object.__setattr__(self, "_spans", MappingProxyType(clean))
        object.__setattr__(self, "_single_span", next(iter(clean)) if len(clean) == 1 else None)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    # ── alternative constructors ─────────────────────────────────────────

    @classmethod
    def from_string(cls, text: str) -> Duration:
        if not isinstance(text, str):
            raise TypeError("Duration string must be a str")
        return cls(parse_spans(text))

    @classmethod
    def from_interval(
        cls,
        start: dt.datetime,
        end: dt.datetime,
        timezone: Timezone,
        *,
        steppers: Optional[StepperTable] = None,
        settings: Optional[EngineSettings] = None,
    ) -> Duration:
        settings = settings or get_settings()
        spans = decompose_interval(
            start, end, _check_timezone(timezone), steppers,
            skip_ahead=settings.skip_ahead,
        )
        return cls(spans)

    @classmethod
    def from_canonical_length(
        cls,
        length: float,
        *,
        steppers: Optional[StepperTable] = None,
    ) -> Duration:
        return cls(spans_from_canonical_length(length, steppers))

    @staticmethod
    def is_duration(candidate: Any) -> bool:
        return isinstance(candidate, Duration)

    # ── accessors ────────────────────────────────────────────────────────

    @property
    def spans(self) -> Mapping[str, int]:
        return self._spans

    @property
    def single_span(self) -> Optional[str]:
        return self._single_span

    def value_of(self) -> dict[str, int]:
        return dict(self._spans)

    def get_single_span(self) -> Optional[str]:
        return self._single_span

    def get_single_span_value(self) -> Optional[int]:
        if self._single_span is None:
            return None
        return self._spans[self._single_span]

    def is_simple(self) -> bool:
        return self.get_single_span_value() == 1

    # ── formatting ───────────────────────────────────────────────────────

    def to_string(self) -> str:
        return format_spans(self._spans)

    def to_js(self) -> str:
        return self.to_string()

    def to_json(self) -> str:
        return self.to_string()

    def get_description(self, capitalize: bool = False) -> str:
        return describe_spans(self._spans, capitalize)

    # ── canonical-length arithmetic ──────────────────────────────────────

    @property
    def canonical_length(self) -> int:
        return canonical_length(self._spans)

    def get_canonical_length(self, *, steppers: Optional[StepperTable] = None) -> int:
        return canonical_length(self._spans, steppers)

    def add(self, other: Duration, *, steppers: Optional[StepperTable] = None) -> Duration:
        total = self.get_canonical_length(steppers=steppers) + other.get_canonical_length(steppers=steppers)
        return Duration.from_canonical_length(total, steppers=steppers)

    def subtract(self, other: Duration, *, steppers: Optional[StepperTable] = None) -> Duration:
        difference = self.get_canonical_length(steppers=steppers) - other.get_canonical_length(steppers=steppers)
        if difference < 0:
            raise RangeError("A duration can not be negative.")
        return Duration.from_canonical_length(difference, steppers=steppers)

    def divides_by(self, smaller: Duration, *, steppers: Optional[StepperTable] = None) -> bool:
        """True when ``smaller`` fits a whole number of times and both are floorable."""
        if not isinstance(smaller, Duration):
            raise TypeError(f"Expected a Duration; got {type(smaller).__name__}.")
        mine = self.get_canonical_length(steppers=steppers)
        theirs = smaller.get_canonical_length(steppers=steppers)
        return (
            mine % theirs == 0
            and self.is_floorable(steppers=steppers)
            and smaller.is_floorable(steppers=steppers)
        )

    # ── floor / shift / materialize ──────────────────────────────────────

    def is_floorable(self, *, steppers: Optional[StepperTable] = None) -> bool:
        unit = self._single_span
        if unit is None:
            return False
        count = self._spans[unit]
        if count == 1:
            return True
        siblings = get_stepper(unit, steppers).siblings
        if not siblings:
            return False
        return siblings % count == 0

    def floor(
        self,
        instant: dt.datetime,
        timezone: Timezone,
        *,
        steppers: Optional[StepperTable] = None,
    ) -> dt.datetime:
        """Floor ``instant`` to the start of the enclosing duration-aligned bucket."""
        unit = self._single_span
        if unit is None:
            raise UnsupportedOperationError("Can not floor on a complex duration")
        ensure_aware(instant)
        timezone = _check_timezone(timezone)
        count = self._spans[unit]
        stepper = get_stepper(unit, steppers)

        floored = stepper.floor(instant, timezone)
        if count == 1:
            return floored
        if not stepper.siblings:
            raise UnsupportedOperationError(f"Can not floor on a {unit} duration that is not 1")
        if stepper.siblings % count:
            raise UnsupportedOperationError(
                f"Can not floor on a {unit} duration that does not divide into {stepper.siblings}"
            )
        if stepper.round is None:
            raise UnsupportedOperationError(f"No rounding defined for {unit}")
        return stepper.round(floored, count, timezone)

    def shift(
        self,
        instant: dt.datetime,
        timezone: Timezone,
        step: int = 1,
        *,
        steppers: Optional[StepperTable] = None,
    ) -> dt.datetime:
        """
        Move ``instant`` by ``step`` times this duration.  Negative steps move
        back in time.  Spans are applied largest first.
        """
        ensure_aware(instant)
        timezone = _check_timezone(timezone)
        result = instant.astimezone(_UTC)
        for unit, value in self._spans.items():
            result = get_stepper(unit, steppers).shift(result, timezone, step * value)
        return result

    def materialize(
        self,
        start: dt.datetime,
        end: dt.datetime,
        timezone: Timezone,
        step: int = 1,
        *,
        steppers: Optional[StepperTable] = None,
        settings: Optional[EngineSettings] = None,
    ) -> list[dt.datetime]:
        """
        Every aligned instant from ``floor(start)`` up to and including ``end``.
        """
        ensure_aware(end, "end")
        if step < 1:
            raise ValidationError(f"Materialize step must be at least 1; got {step}.")
        limit = (settings or get_settings()).materialize_limit

        values: list[dt.datetime] = []
        current = self.floor(start, timezone, steppers=steppers)
        while current <= end:
            if limit is not None and len(values) >= limit:
                raise RangeError(
                    f"Materializing {self} would produce more than {limit} instants."
                )
            values.append(current)
            current = self.shift(current, timezone, step, steppers=steppers)

        logger.debug("Materialized %s in %s: %d instants", self, timezone, len(values))
        return values

    def materialize_array(
        self,
        start: dt.datetime,
        end: dt.datetime,
        timezone: Timezone,
        step: int = 1,
        *,
        steppers: Optional[StepperTable] = None,
        settings: Optional[EngineSettings] = None,
    ) -> np.ndarray:
        """Same as materialize(), as a ``datetime64[us]`` array of UTC instants."""
        values = self.materialize(start, end, timezone, step, steppers=steppers, settings=settings)
        return np.array(
            [np.datetime64(v.astimezone(_UTC).replace(tzinfo=None), "us") for v in values],
            dtype="datetime64[us]",
        )

    def is_aligned(
        self,
        instant: dt.datetime,
        timezone: Timezone,
        *,
        steppers: Optional[StepperTable] = None,
    ) -> bool:
        return self.floor(instant, timezone, steppers=steppers) == instant

    # ── dunder ───────────────────────────────────────────────────────────

    def __add__(self, other: object) -> Duration:
        if not isinstance(other, Duration):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: object) -> Duration:
        if not isinstance(other, Duration):
            return NotImplemented
        return self.subtract(other)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return dict(self._spans) == dict(other._spans)

    def __hash__(self) -> int:
        return hash(tuple(self._spans.items()))

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Duration({self.to_string()!r})"

    def __reduce__(self) -> tuple[Any, ...]:
        return (Duration, (dict(self._spans),))


def parse_duration(text: str) -> Duration:
    return Duration.from_string(text)
