"""
tests/duration/test_parse.py

Covers:
  - Week form and full form grammar
  - Omitted and zero groups
  - Empty durations from strings
  - Malformed strings
"""

import pytest

from chronospan.duration import (
    Duration,
    EmptyDurationError,
    ParseError,
    ValidationError,
    parse_duration,
)
from chronospan.duration._parse import describe_spans, format_spans, parse_spans


# ── Grammar ───────────────────────────────────────────────────────────────────

class TestGrammar:

    def test_week_form(self):
        assert parse_duration("P2W").value_of() == {"week": 2}

    def test_full_form(self):
        assert parse_duration("P1Y2M3DT4H5M6S").value_of() == {
            "year": 1, "month": 2, "day": 3, "hour": 4, "minute": 5, "second": 6,
        }

    def test_month_vs_minute(self):
        assert parse_duration("P5M").value_of() == {"month": 5}
        assert parse_duration("PT5M").value_of() == {"minute": 5}

    def test_time_only(self):
        assert parse_duration("PT36H").value_of() == {"hour": 36}

    def test_zero_groups_are_omitted(self):
        assert parse_spans("P0Y1DT0H") == {"day": 1}

    def test_multi_digit(self):
        assert parse_duration("P120D").value_of() == {"day": 120}

    def test_trailing_t_is_accepted(self):
        assert parse_duration("P1DT").value_of() == {"day": 1}

    def test_parse_spans_can_be_empty(self):
        assert parse_spans("PT") == {}


# ── Empty durations ───────────────────────────────────────────────────────────

class TestEmpty:

    def test_zero_weeks(self):
        with pytest.raises(ParseError, match="can not be empty"):
            parse_duration("P0W")

    @pytest.mark.parametrize("text", ["P", "PT", "P0D", "PT0S"])
    def test_empty_full_form(self, text):
        with pytest.raises(EmptyDurationError):
            parse_duration(text)

    def test_empty_is_both_parse_and_validation_error(self):
        with pytest.raises(ValidationError):
            parse_duration("P0W")


# ── Malformed ─────────────────────────────────────────────────────────────────

class TestMalformed:

    @pytest.mark.parametrize("text", [
        "", "1D", "p1d", "P1D ", " P1D", "P1W1D", "P1H", "PT1D",
        "P1.5D", "P-1D", "P1D\n", "P1DT2H3", "P١D",
    ])
    def test_rejected(self, text):
        with pytest.raises(ParseError, match="Can not parse duration"):
            Duration.from_string(text)

    def test_message_names_string(self):
        with pytest.raises(ParseError, match="'P1X'"):
            parse_duration("P1X")

    def test_wrong_order_rejected(self):
        with pytest.raises(ParseError):
            parse_duration("P1D2M")


# ── Helpers ───────────────────────────────────────────────────────────────────

class TestHelpers:

    def test_format_week(self):
        assert format_spans({"week": 4}) == "P4W"

    def test_format_inserts_t_once(self):
        assert format_spans({"day": 1, "minute": 2, "second": 3}) == "P1DT2M3S"

    def test_describe_empty(self):
        assert describe_spans({}) == ""
