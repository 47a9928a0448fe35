"""
tests/timezone/test_timezone.py

Covers:
  - Validation of zone identifiers
  - UTC singleton, equality and hashing
  - ISO8601 formatting with offsets
  - ensure_aware
"""

import datetime as dt

import pytest

from chronospan._exceptions import ValidationError
from chronospan.timezone import Timezone, ensure_aware, format_datetime_with_timezone


# ── Construction ──────────────────────────────────────────────────────────────

class TestConstruction:

    @pytest.mark.parametrize("name", ["", "Blah/UTC", "America/Lost_Angeles"])
    def test_unknown_zone_raises(self, name):
        with pytest.raises(ValidationError, match=f"timezone '{name}' does not exist"):
            Timezone(name)

    def test_non_string_raises(self):
        with pytest.raises(ValidationError):
            Timezone(None)

    def test_to_string(self):
        assert str(Timezone("America/Los_Angeles")) == "America/Los_Angeles"
        assert str(Timezone.UTC) == "Etc/UTC"

    def test_to_json(self):
        assert Timezone("Europe/Paris").to_json() == "Europe/Paris"

    def test_is_timezone(self):
        assert Timezone.is_timezone(Timezone("Europe/Paris"))
        assert not Timezone.is_timezone("Europe/Paris")

    def test_from_string_returns_utc_singleton(self):
        assert Timezone.from_string("Etc/UTC") is Timezone.UTC

    def test_from_string(self):
        assert Timezone.from_string("Asia/Kathmandu").name == "Asia/Kathmandu"


# ── Equality ──────────────────────────────────────────────────────────────────

class TestEquality:

    def test_equal_by_name(self):
        assert Timezone("Europe/Paris") == Timezone("Europe/Paris")
        assert Timezone("Europe/Paris") != Timezone("Europe/Berlin")

    def test_hashable(self):
        assert len({Timezone("Europe/Paris"), Timezone("Europe/Paris"), Timezone.UTC}) == 2

    def test_not_equal_to_string(self):
        assert Timezone.UTC != "Etc/UTC"

    def test_is_utc(self):
        assert Timezone.UTC.is_utc()
        assert not Timezone("Europe/London").is_utc()

    def test_repr(self):
        assert repr(Timezone("Europe/Paris")) == "Timezone('Europe/Paris')"


# ── Formatting ────────────────────────────────────────────────────────────────

class TestFormat:

    @pytest.fixture
    def with_ms(self):
        return dt.datetime(2016, 12, 8, 19, 46, 13, 915000, tzinfo=dt.timezone.utc)

    @pytest.fixture
    def without_ms(self):
        return dt.datetime(2016, 12, 8, 19, 46, 13, tzinfo=dt.timezone.utc)

    def test_no_timezone(self, with_ms, without_ms):
        assert format_datetime_with_timezone(with_ms) == "2016-12-08T19:46:13.915Z"
        assert format_datetime_with_timezone(without_ms) == "2016-12-08T19:46:13Z"

    def test_utc(self, with_ms, without_ms):
        assert format_datetime_with_timezone(with_ms, Timezone.UTC) == "2016-12-08T19:46:13.915Z"
        assert format_datetime_with_timezone(without_ms, Timezone.UTC) == "2016-12-08T19:46:13Z"

    def test_kathmandu(self, with_ms, without_ms):
        tz = Timezone.from_string("Asia/Kathmandu")
        assert format_datetime_with_timezone(with_ms, tz) == "2016-12-09T01:31:13.915+05:45"
        assert format_datetime_with_timezone(without_ms, tz) == "2016-12-09T01:31:13+05:45"

    def test_negative_offset(self, without_ms):
        tz = Timezone("America/New_York")
        assert format_datetime_with_timezone(without_ms, tz) == "2016-12-08T14:46:13-05:00"

    def test_microseconds_truncated_to_ms(self):
        instant = dt.datetime(2020, 1, 1, 0, 0, 0, 999, tzinfo=dt.timezone.utc)
        assert format_datetime_with_timezone(instant) == "2020-01-01T00:00:00Z"


# ── ensure_aware ──────────────────────────────────────────────────────────────

class TestEnsureAware:

    def test_aware_passes_through(self):
        instant = dt.datetime(2020, 1, 1, tzinfo=dt.timezone.utc)
        assert ensure_aware(instant) is instant

    def test_naive_raises(self):
        with pytest.raises(ValidationError, match="start must be timezone-aware"):
            ensure_aware(dt.datetime(2020, 1, 1), "start")

    def test_date_raises(self):
        with pytest.raises(ValidationError, match="must be a datetime"):
            ensure_aware(dt.date(2020, 1, 1))
