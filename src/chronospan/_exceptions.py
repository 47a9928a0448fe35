from __future__ import annotations


class DurationError(ValueError):
    """Base class for every error raised by chronospan."""


class ParseError(DurationError):
    """A duration string does not match the period grammar."""


class ValidationError(DurationError):
    """Bad constructor input: empty duration, mixed units, bad counts."""


class EmptyDurationError(ParseError, ValidationError):
    """A duration with no non-zero span, from a string or a mapping."""


class RangeError(DurationError):
    """An interval or a length falls outside what can be represented."""


class UnsupportedOperationError(DurationError):
    """The duration does not have the shape an operation needs."""
