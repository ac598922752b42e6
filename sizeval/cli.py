"""
Sizeval CLI Tools

Binds sized values to argparse. The core never registers itself with a parser; these
helpers do it on a parser the caller owns.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import argparse
from typing import Any, Callable, Protocol, runtime_checkable

# Local ----------------------------------------------------------------------------------------------------------------
from .errors import ParseError
from .tools import fmt_type
from .units import SizedValue, UnitTable, parse_size


# Classes --------------------------------------------------------------------------------------------------------------

@runtime_checkable
class FlagValue(Protocol):
    """Set/String/Get contract expected from a flag value holder."""

    def set(self, text: str) -> Any: ...

    def get(self) -> Any: ...

    def __str__(self) -> str: ...


class SizeFlag:
    """
    Mutable holder of a SizedValue for flag-style APIs.

    set() parses a new value and replaces the held reference; values already handed out
    by get() are never modified.

    Examples:
        >>> flag = SizeFlag(UnitTable({"": 1, "KB": 1000}), default="1KB")
        >>> flag.set("-3KB")
        >>> flag.get().magnitude
        -3000
        >>> str(flag)
        '-3KB'
    """

    def __init__(self, table: UnitTable, default: SizedValue | str | None = None):
        if not isinstance(table, UnitTable):
            raise TypeError(f"table must be a UnitTable, but found {fmt_type(table)}")
        self.table = table
        self.value = _as_sized(default, table)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.value!r})"

    def __str__(self) -> str:
        return "" if self.value is None else self.value.format()

    def set(self, text: str) -> None:
        self.value = parse_size(text, self.table)

    def get(self) -> SizedValue | None:
        return self.value


# Methods --------------------------------------------------------------------------------------------------------------

def size_type(table: UnitTable) -> Callable[[str], SizedValue]:
    """
    Return an argparse `type=` converter parsing sizes against table.

    ParseError is re-raised as argparse.ArgumentTypeError, so argparse reports it as a
    usage error naming the option.
    """
    if not isinstance(table, UnitTable):
        raise TypeError(f"table must be a UnitTable, but found {fmt_type(table)}")

    def convert(text: str) -> SizedValue:
        try:
            return parse_size(text, table)
        except ParseError as exc:
            raise argparse.ArgumentTypeError(str(exc)) from exc

    convert.__name__ = "size"
    return convert


def add_size_argument(
        parser: argparse.ArgumentParser,
        *names: str,
        table: UnitTable,
        default: SizedValue | str | None = None,
        help: str | None = None,
        **kwargs,
) -> argparse.Action:
    """
    Add a sized option or positional to parser.

    Args:
        parser: Parser (or argument group) owned by the caller.
        *names: Option strings or positional name, as for parser.add_argument().
        table: Units accepted by the argument.
        default: Default value; text is parsed immediately so a bad default fails at
            startup rather than on first use.
        help: Help text, the formatted default is appended to it.
        **kwargs: Passed through to parser.add_argument().

    Returns:
        argparse.Action: The created action.

    Examples:
        >>> parser = argparse.ArgumentParser()
        >>> units = UnitTable({"": 1, "Mi": 2**20, "Gi": 2**30})
        >>> _ = add_size_argument(parser, "--limit", table=units, default="512Mi")
        >>> parser.parse_args(["--limit", "2Gi"]).limit.magnitude
        2147483648
    """
    default = _as_sized(default, table)
    if help is not None and default is not None:
        help = f"{help} (default: {default.format()})"
    return parser.add_argument(*names, type=size_type(table), default=default, help=help, **kwargs)


# Private Methods ------------------------------------------------------------------------------------------------------

def _as_sized(value: SizedValue | str | None, table: UnitTable) -> SizedValue | None:
    if value is None or isinstance(value, SizedValue):
        return value
    if isinstance(value, str):
        return parse_size(value, table)
    raise TypeError(f"default must be a SizedValue, str or None, but found {fmt_type(value)}")
