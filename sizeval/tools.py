#
# Sizeval Tools & Utilites
#

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any, Mapping


# Methods --------------------------------------------------------------------------------------------------------------

def fmt_value(x: Any, *, max_repr: int = 80) -> str:
    """
    Format a value as "<type: repr>" for exception messages.

    User input can be arbitrarily long (a whole config line pasted into a flag), so the
    repr is cut at max_repr characters. A '>' inside the repr is escaped so the closing
    bracket stays unambiguous.

    Examples:
        >>> fmt_value("10XYZ")
        "<str: '10XYZ'>"
        >>> fmt_value("x" * 100, max_repr=10)
        "<str: 'xxxxxx'...>"
    """
    type_name = type(x).__name__
    try:
        text = repr(x)
    except Exception as e:
        text = f"<{type_name} object (repr failed: {type(e).__name__})>"
    text = text.replace(">", "\\>")
    return f"<{type_name}: {_truncate(text, max_repr)}>"


def fmt_type(obj: Any) -> str:
    """
    Format the type of an object, or a type itself, as "<type: name>".

    Examples:
        >>> fmt_type(42)
        '<type: int>'
        >>> fmt_type(dict)
        '<type: dict>'
    """
    target_type = obj if isinstance(obj, type) else type(obj)
    return f"<type: {getattr(target_type, '__name__', target_type)}>"


def fmt_units(mapping: Mapping[str, int], *, max_items: int = 8) -> str:
    """
    Format a unit mapping compactly, with the multipliers in ascending order.

    Examples:
        >>> fmt_units({"": 1, "KB": 1000, "Ki": 1024})
        "{'': 1, 'KB': 1000, 'Ki': 1024}"
        >>> fmt_units({"": 1, "KB": 1000, "MB": 10**6}, max_items=2)
        "{'': 1, 'KB': 1000, ...}"
    """
    ordered = sorted(mapping.items(), key=lambda kv: (kv[1], kv[0]))
    parts = [f"{k!r}: {v}" for k, v in ordered[:max_items]]
    if len(ordered) > max_items:
        parts.append("...")
    return "{" + ", ".join(parts) + "}"


# Private Methods ------------------------------------------------------------------------------------------------------

def _truncate(s: str, max_len: int) -> str:
    """Cut s to max_len characters plus '...'; quoted reprs keep both quotes."""
    if len(s) <= max_len:
        return s
    if len(s) >= 2 and s[0] in ("'", '"') and s[-1] == s[0]:
        return f"{s[0]}{s[1:1 + max(1, max_len - 4)]}{s[0]}..."
    return s[:max(1, max_len)] + "..."
