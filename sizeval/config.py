"""
Sizeval Config Tools

Load unit tables and sized config fields from TOML.

A unit table section maps suffixes to integer multipliers:

    [units]
    "" = 1
    KB = 1000
    Ki = 1024

Sized fields are plain strings typed the same way as on the command line:

    [limits]
    memory = "512Mi"
    upload = "+10MB"
"""

# Standard library -----------------------------------------------------------------------------------------------------
import os
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

# Third-party ----------------------------------------------------------------------------------------------------------
import toml

# Local ----------------------------------------------------------------------------------------------------------------
from .errors import ConfigFieldError, ParseError
from .tools import fmt_type, fmt_value
from .units import Sign, SizedValue, UnitTable, parse_size


# Methods --------------------------------------------------------------------------------------------------------------

def read_toml(source: str | os.PathLike) -> dict[str, Any]:
    """
    Read a TOML document from a path or from the document text itself.

    A single-line str without '=' is a path; anything else is parsed as TOML text.

    Raises:
        FileNotFoundError: If source is a path that does not exist.
        toml.TomlDecodeError: If the document is not valid TOML.
    """
    if isinstance(source, os.PathLike):
        return toml.load(Path(source))
    if not isinstance(source, str):
        raise TypeError(f"TOML source must be a path or str, but found {fmt_type(source)}")
    if "\n" not in source and "=" not in source:
        return toml.load(Path(source))
    return toml.loads(source)


def load_unit_table(source: str | os.PathLike, section: str = "units") -> UnitTable:
    """
    Load a UnitTable from a TOML section.

    Args:
        source: Path to a TOML file, or the TOML text.
        section: Name of the table holding suffix = multiplier pairs.

    Returns:
        UnitTable: Validated unit table.

    Raises:
        KeyError: If the section is missing.
        TypeError: If the section is not a table or a multiplier is not an int.
        UnitTableError: If the table has no base unit or a non-positive multiplier.
    """
    data = read_toml(source)
    if section not in data:
        raise KeyError(f"TOML section {section!r} not found")
    units = data[section]
    if not isinstance(units, Mapping):
        raise TypeError(f"TOML section {section!r} must be a table, but found {fmt_type(units)}")
    return UnitTable(units)


def parse_fields(
        data: Mapping[str, Any],
        table: UnitTable,
        fields: Iterable[str] | None = None,
) -> dict[str, SizedValue]:
    """
    Parse sized fields of a config mapping.

    Strings are parsed with parse_size(). Ints are taken as base-unit magnitudes without
    an explicit sign, since TOML integers carry no unit.

    Args:
        data: Config mapping, e.g. one section of a TOML document.
        table: Units the field suffixes are looked up in.
        fields: Field names to parse. All fields of data if None; a listed field
            missing from data raises KeyError.

    Returns:
        dict[str, SizedValue]: Parsed values in field order.

    Raises:
        ConfigFieldError: If a field fails to parse; the ParseError is chained.
        KeyError: If a listed field is missing.

    Examples:
        >>> units = UnitTable({"": 1, "Mi": 2**20})
        >>> parse_fields({"memory": "512Mi", "threads": 8}, units)["memory"].magnitude
        536870912
    """
    names = list(data) if fields is None else list(fields)
    result = {}
    for name in names:
        if name not in data:
            raise KeyError(f"config field {name!r} not found")
        raw = data[name]
        if isinstance(raw, str):
            try:
                result[name] = parse_size(raw, table)
            except ParseError as exc:
                raise ConfigFieldError(name, str(exc)) from exc
        elif isinstance(raw, int) and not isinstance(raw, bool):
            try:
                result[name] = SizedValue(raw, Sign.NONE, table)
            except ValueError as exc:
                raise ConfigFieldError(name, str(exc)) from exc
        else:
            raise ConfigFieldError(name, f"expected a str or int size, but found {fmt_value(raw)}")
    return result


def load_sized_config(
        source: str | os.PathLike,
        table: UnitTable,
        section: str,
        fields: Iterable[str] | None = None,
) -> dict[str, SizedValue]:
    """Load a TOML document and parse the sized fields of one section, see parse_fields()."""
    data = read_toml(source)
    if section not in data:
        raise KeyError(f"TOML section {section!r} not found")
    return parse_fields(data[section], table, fields)
