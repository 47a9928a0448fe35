# src/chronospan/timezone/__init__.py
"""
chronospan.timezone
~~~~~~~~~~~~~~~~~~~

An opaque, validated handle on an IANA timezone.  The duration engine never
parses zone names itself; it only receives Timezone instances.

Basic usage::

    from chronospan.timezone import Timezone, format_datetime_with_timezone

    tz = Timezone("Europe/Paris")
    Timezone.UTC.is_utc()                           # → True
    format_datetime_with_timezone(instant, tz)      # → '2016-12-08T20:46:13+01:00'

Public API
----------
Timezone                        The handle class.
format_datetime_with_timezone   ISO8601 with the zone's UTC offset.
ensure_aware                    Reject naive datetimes.
"""

from __future__ import annotations

from chronospan.timezone.timezone import (
    Timezone,
    ensure_aware,
    format_datetime_with_timezone,
)

__all__ = [
    "Timezone",
    "ensure_aware",
    "format_datetime_with_timezone",
]
