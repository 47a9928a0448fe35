from __future__ import annotations

import datetime as dt
from typing import Any, ClassVar, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from chronospan._exceptions import ValidationError

_UTC_NAME = "Etc/UTC"


class Timezone:
    """
    Immutable handle on an IANA zone.  Two handles are equal when they name
    the same zone; the resolved ``tzinfo`` is shared through zoneinfo's cache.
    """

    UTC: ClassVar["Timezone"]

    def __init__(self, name: str) -> None:
        if not isinstance(name, str) or not name:
            raise ValidationError(f"timezone '{name}' does not exist")
        try:
            tzinfo = ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError, OSError) as exc:
            raise ValidationError(f"timezone '{name}' does not exist") from exc
        self._name = name
        self._tzinfo = tzinfo

    @classmethod
    def from_string(cls, name: str) -> "Timezone":
        if name == _UTC_NAME:
            return cls.UTC
        return cls(name)

    @staticmethod
    def is_timezone(candidate: Any) -> bool:
        return isinstance(candidate, Timezone)

    @property
    def name(self) -> str:
        return self._name

    @property
    def tzinfo(self) -> dt.tzinfo:
        return self._tzinfo

    def is_utc(self) -> bool:
        return self._name == _UTC_NAME

    def to_json(self) -> str:
        return self._name

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Timezone):
            return NotImplemented
        return self._name == other._name

    def __hash__(self) -> int:
        return hash(("Timezone", self._name))

    def __str__(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"Timezone({self._name!r})"


Timezone.UTC = Timezone(_UTC_NAME)


def ensure_aware(instant: dt.datetime, label: str = "instant") -> dt.datetime:
    if not isinstance(instant, dt.datetime):
        raise ValidationError(f"{label} must be a datetime; got {type(instant).__name__}.")
    if instant.tzinfo is None or instant.utcoffset() is None:
        raise ValidationError(f"{label} must be timezone-aware; got {instant.isoformat()}.")
    return instant


def format_datetime_with_timezone(
    instant: dt.datetime,
    timezone: Optional[Timezone] = None,
) -> str:
    """
    ISO8601 rendering of ``instant`` in ``timezone`` (UTC when omitted).
    Milliseconds are printed only when non-zero; UTC is written as ``Z``.
    """
    ensure_aware(instant)
    if timezone is None or timezone.is_utc():
        local = instant.astimezone(dt.timezone.utc)
        suffix = "Z"
    else:
        local = instant.astimezone(timezone.tzinfo)
        offset = local.utcoffset() or dt.timedelta(0)
        sign = "-" if offset < dt.timedelta(0) else "+"
        minutes = abs(int(offset.total_seconds())) // 60
        suffix = f"{sign}{minutes // 60:02d}:{minutes % 60:02d}"

    stamp = local.strftime("%Y-%m-%dT%H:%M:%S")
    millis = local.microsecond // 1000
    if millis:
        stamp += f".{millis:03d}"
    return stamp + suffix
