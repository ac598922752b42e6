"""
Sizeval Exceptions

Every error derives from ValueError, so callers that already guard int() conversions
keep working when they switch to sized values.

Hierarchy:
    UnitTableError
        NoBaseUnitError         no suffix maps to multiplier 1
        InvalidMultiplierError  multiplier is not positive or exceeds the int64 range
    ParseError
        EmptyInputError         zero-length input
        InvalidNumberError      numeric part is not a base-10 int64
        UnknownUnitError        suffix is not in the unit table
        MagnitudeOverflowError  number × multiplier exceeds the int64 range
    ConfigFieldError            a config field failed to parse
"""

# Local ----------------------------------------------------------------------------------------------------------------
from .tools import fmt_value


# Unit Tables ----------------------------------------------------------------------------------------------------------

class UnitTableError(ValueError):
    """Unit table violates its construction rules."""


class NoBaseUnitError(UnitTableError):
    """No unit maps to multiplier 1."""


class InvalidMultiplierError(UnitTableError):
    """Unit multiplier is zero, negative or out of the int64 range."""


# Parsing --------------------------------------------------------------------------------------------------------------

class ParseError(ValueError):
    """
    Input string could not be converted to a sized value.

    Attributes:
        text: The offending input string.
        reason: Human-readable cause, without the input.
    """

    def __init__(self, text: str, reason: str):
        self.text = text
        self.reason = reason
        super().__init__(f"invalid size {fmt_value(text)}: {reason}")


class EmptyInputError(ParseError):
    def __init__(self, text: str = ""):
        super().__init__(text, "empty input")


class InvalidNumberError(ParseError):
    pass


class UnknownUnitError(ParseError):
    """Suffix is not a key of the unit table; the suffix is kept in `unit`."""

    def __init__(self, text: str, unit: str, reason: str | None = None):
        self.unit = unit
        super().__init__(text, reason or f"unit {unit!r} is not valid")


class MagnitudeOverflowError(ParseError):
    pass


# Config ---------------------------------------------------------------------------------------------------------------

class ConfigFieldError(ValueError):
    """A sized config field failed to parse; the original ParseError is chained as __cause__."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"config field {field!r}: {message}")
