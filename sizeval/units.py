#
# Sizeval Units Tools
#

# Standard library -----------------------------------------------------------------------------------------------------
import os
import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from enum import StrEnum, unique
from typing import Self

# Third-party ----------------------------------------------------------------------------------------------------------
from frozendict import frozendict

# Local ----------------------------------------------------------------------------------------------------------------
from .errors import EmptyInputError, InvalidMultiplierError, InvalidNumberError, MagnitudeOverflowError
from .errors import NoBaseUnitError, UnknownUnitError
from .tools import fmt_type, fmt_units, fmt_value

# Constants ------------------------------------------------------------------------------------------------------------

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

# ASCII digits only: int() would also accept whitespace, underscores and non-ASCII digits
_INT_PATTERN = re.compile(r"[+-]?[0-9]+")


# Classes --------------------------------------------------------------------------------------------------------------

@unique
class Sign(StrEnum):
    """
    Explicit sign typed in front of a sized value.

    The member value is the prefix printed back on format. It records the input text only
    and is independent of the arithmetic sign of the magnitude: "-0KB" has sign NEGATIVE
    and magnitude 0.

    Attributes:
        NONE (str)     : No sign character - "10KB"
        NEGATIVE (str) : Leading minus - "-10KB"
        POSITIVE (str) : Leading plus - "+10KB"
    """
    NONE = ""
    NEGATIVE = "-"
    POSITIVE = "+"

    @classmethod
    def from_text(cls, text: str) -> "Sign":
        """Sign recorded by the first character of text."""
        if text[:1] == "-":
            return cls.NEGATIVE
        if text[:1] == "+":
            return cls.POSITIVE
        return cls.NONE


class UnitTable(Mapping[str, int]):
    """
    Immutable mapping of unit suffixes to integer multipliers.

    Some suffix must map to multiplier 1 (the base unit), so every magnitude has at least
    one exact textual form. Suffixes are matched exactly and case-sensitively; include ""
    to accept bare integers.

    Iteration order follows the mapping the table was built from. It never affects
    parsing; among units with the same multiplier it decides which one format picks,
    which callers should treat as unspecified.

    Examples:
        >>> units = UnitTable({"": 1, "KB": 1000, "MB": 1000_000})
        >>> units.parse("5MB").magnitude
        5000000
        >>> str(units.value(2000))
        '2KB'
    """

    __slots__ = ("_mapping",)

    def __init__(self, mapping: Mapping[str, int]) -> None:
        if not isinstance(mapping, Mapping):
            raise TypeError(f"unit mapping must be a Mapping, but found {fmt_type(mapping)}")

        for unit, mult in mapping.items():
            if not isinstance(unit, str):
                raise TypeError(f"unit suffix must be a str, but found {fmt_value(unit)}")
            if isinstance(mult, bool) or not isinstance(mult, int):
                raise TypeError(f"multiplier of unit {unit!r} must be an int, but found {fmt_value(mult)}")
            if not 0 < mult <= INT64_MAX:
                raise InvalidMultiplierError(
                    f"multiplier of unit {unit!r} must be in range [1, {INT64_MAX}], but found {mult}")

        if 1 not in mapping.values():
            raise NoBaseUnitError(f"could not find unit that maps to multiplier 1 for {fmt_units(mapping)}")

        self._mapping = frozendict(mapping)

    @classmethod
    def from_toml(cls, source: str | os.PathLike, section: str = "units") -> Self:
        """Load a unit table from a TOML file path or document string, see config.load_unit_table()."""
        from .config import load_unit_table
        return load_unit_table(source, section=section)

    # ----- Mapping required methods -----

    def __getitem__(self, unit: str) -> int:
        return self._mapping[unit]

    def __iter__(self) -> Iterator[str]:
        return iter(self._mapping)

    def __len__(self) -> int:
        return len(self._mapping)

    def __hash__(self) -> int:
        return hash(self._mapping)

    def __eq__(self, other) -> bool:
        if isinstance(other, UnitTable):
            return self._mapping == other._mapping
        return NotImplemented

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict(self._mapping)!r})"

    # ----- Units -----

    @property
    def mapping(self) -> frozendict:
        return self._mapping

    @property
    def base_units(self) -> tuple[str, ...]:
        """Suffixes with multiplier 1."""
        return tuple(unit for unit, mult in self._mapping.items() if mult == 1)

    def best_unit(self, magnitude: int) -> tuple[str, int] | None:
        """
        Return (suffix, multiplier) of the largest multiplier evenly dividing magnitude.

        Among equal multipliers the last one in iteration order wins. Returns None only if
        nothing divides, which the base unit rules out for any int.
        """
        best = None
        for unit, mult in self._mapping.items():
            if magnitude % mult == 0 and (best is None or mult >= best[1]):
                best = (unit, mult)
        return best

    def value(self, magnitude: int, sign: "Sign | str" = Sign.NONE) -> "SizedValue":
        """Build a value directly from a magnitude, e.g. to seed a flag default."""
        return SizedValue(magnitude, sign, self)

    def parse(self, text: str) -> "SizedValue":
        return parse_size(text, self)


@dataclass(frozen=True)
class SizedValue:
    """
    Integer quantity scaled by a unit, with the explicit sign it was typed with.

    Values are immutable; set() returns a new value instead of updating this one.

    Attributes:
        magnitude: Unit-scaled signed integer, within the int64 range.
        explicit_sign: Sign character the input started with, see Sign.
        table: Unit table used to parse and format the value.

    Examples:
        >>> units = UnitTable({"": 1, "Ki": 1024})
        >>> v = SizedValue.parse("+4Ki", units)
        >>> v.magnitude, v.explicit_sign
        (4096, <Sign.POSITIVE: '+'>)
        >>> str(v)
        '+4Ki'
    """

    magnitude: int
    explicit_sign: Sign
    table: UnitTable

    def __post_init__(self):
        if isinstance(self.magnitude, bool) or not isinstance(self.magnitude, int):
            raise TypeError(f"magnitude must be an int, but found {fmt_value(self.magnitude)}")
        if not INT64_MIN <= self.magnitude <= INT64_MAX:
            raise ValueError(f"magnitude must fit in int64, but found {self.magnitude}")
        if not isinstance(self.table, UnitTable):
            raise TypeError(f"table must be a UnitTable, but found {fmt_type(self.table)}")
        object.__setattr__(self, "explicit_sign", Sign(self.explicit_sign))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.format()!r}, magnitude={self.magnitude})"

    def __str__(self) -> str:
        return self.format()

    @classmethod
    def parse(cls, text: str, table: UnitTable) -> Self:
        return parse_size(text, table)

    def format(self) -> str:
        return format_size(self)

    def get(self) -> Self:
        return self

    def set(self, text: str) -> Self:
        """Parse text against the same unit table and return the new value."""
        return parse_size(text, self.table)

    @property
    def unit(self) -> str | None:
        """Suffix format() displays the magnitude with."""
        best = self.table.best_unit(self.magnitude)
        return best[0] if best else None

    @property
    def quantity(self) -> int:
        """Magnitude expressed in the display unit."""
        best = self.table.best_unit(self.magnitude)
        return self.magnitude // best[1] if best else self.magnitude


# Methods --------------------------------------------------------------------------------------------------------------

def parse_size(text: str, table: UnitTable) -> SizedValue:
    """
    Parse a signed integer followed by an optional unit suffix.

    The first letter after the optional sign starts the suffix; everything before it is
    the number, sign included. A leading '+' or '-' is recorded as the explicit sign and
    also sets the arithmetic sign of the number.

    Args:
        text: Input such as "10KB", "-4Gi" or "+512".
        table: Units the suffix is looked up in.

    Returns:
        SizedValue: magnitude = number × table[suffix].

    Raises:
        TypeError: If text is not a str or table not a UnitTable.
        EmptyInputError: If text is empty.
        InvalidNumberError: If the number is not a base-10 int64; non-letters between
            the digits and the suffix land here as well ("10 KB").
        UnknownUnitError: If the suffix is not in the table.
        MagnitudeOverflowError: If number × multiplier exceeds the int64 range.

    Examples:
        >>> units = UnitTable({"": 1, "KB": 1000})
        >>> parse_size("-3KB", units).magnitude
        -3000
        >>> parse_size("12", units).magnitude
        12
    """
    if not isinstance(text, str):
        raise TypeError(f"size must be a str, but found {fmt_type(text)}")
    if not isinstance(table, UnitTable):
        raise TypeError(f"table must be a UnitTable, but found {fmt_type(table)}")
    if not text:
        raise EmptyInputError(text)

    sign = Sign.from_text(text)
    start = 0 if sign is Sign.NONE else 1

    end = len(text)
    for i in range(start, len(text)):
        if text[i].isalpha():
            end = i
            break

    number, unit = text[:end], text[end:]
    if not _INT_PATTERN.fullmatch(number):
        raise InvalidNumberError(text, f"could not convert {number!r} to an integer")
    value = int(number)
    if not INT64_MIN <= value <= INT64_MAX:
        raise InvalidNumberError(text, f"{number!r} is out of int64 range")

    mult = table.get(unit)
    if mult is None:
        raise UnknownUnitError(text, unit)

    magnitude = value * mult
    if not INT64_MIN <= magnitude <= INT64_MAX:
        raise MagnitudeOverflowError(text, f"{value} × {mult} is out of int64 range")

    return SizedValue(magnitude, sign, table)


def format_size(value: SizedValue) -> str:
    """
    Format a value with the largest unit that divides its magnitude evenly.

    The explicit sign is printed as a prefix. For NEGATIVE with a negative quotient the
    quotient's own minus is that prefix, so "-5KB" formats back to "-5KB".

    Examples:
        >>> units = UnitTable({"": 1, "KB": 1000, "MB": 1000_000})
        >>> format_size(parse_size("5000KB", units))
        '5MB'
        >>> format_size(parse_size("+0KB", units))
        '+0MB'
    """
    if not isinstance(value, SizedValue):
        raise TypeError(f"value must be a SizedValue, but found {fmt_type(value)}")

    sign = value.explicit_sign
    best = value.table.best_unit(value.magnitude)
    if best is None:
        return f"{sign.value}{value.magnitude} (no unit)"

    unit, mult = best
    quantity = value.magnitude // mult
    if sign is Sign.NEGATIVE and quantity < 0:
        quantity = -quantity
    return f"{sign.value}{quantity}{unit}"


# Unit Tables ----------------------------------------------------------------------------------------------------------

# @formatter:off
BYTES_SI = UnitTable({
    "": 1, "B": 1,
    "KB": 10**3, "MB": 10**6, "GB": 10**9, "TB": 10**12, "PB": 10**15, "EB": 10**18,
})

BYTES_IEC = UnitTable({
    "": 1, "B": 1,
    "Ki": 2**10, "Mi": 2**20, "Gi": 2**30, "Ti": 2**40, "Pi": 2**50, "Ei": 2**60,
    "KiB": 2**10, "MiB": 2**20, "GiB": 2**30, "TiB": 2**40, "PiB": 2**50, "EiB": 2**60,
})

BYTES = UnitTable({**BYTES_SI, **BYTES_IEC})
# @formatter:on
