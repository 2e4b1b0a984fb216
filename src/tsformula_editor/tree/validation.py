"""Atom input validation: checks raw text against an Atom's ValueType.

Validation never rejects input.  ``validate`` returns the (lightly
normalised) text together with an error message, and the editor stores both:
the user can keep typing through intermediate invalid states, and the
renderer emits whatever was typed.

Only valid input is normalised, and normalisation is limited to:
- trimming surrounding whitespace
- lower-casing boolean literals (``True`` -> ``true``)

Invalid input is returned exactly as typed.
"""

from __future__ import annotations

import re
from datetime import date, datetime

from tsformula_editor.grammar.kinds import ValueType

__all__ = ["DEFAULT_INPUTS", "validate"]

# Compiled once at module level.
_INT = re.compile(r"[+-]?\d+")
_FLOAT = re.compile(r"[+-]?(?:\d+\.\d*|\.\d+|\d+)(?:[eE][+-]?\d+)?")
# Double-quoted literal with backslash escapes; no bare quote inside.
_STRING = re.compile(r'"(?:[^"\\]|\\.)*"')

DEFAULT_INPUTS: dict[ValueType, str] = {
    ValueType.NUMBER: "0",
    ValueType.INT: "0",
    ValueType.FLOAT: "0.0",
    ValueType.STR: '""',
    ValueType.BOOL: "false",
    ValueType.TIMESTAMP: '""',
    ValueType.NIL: "nil",
}


def _check_timestamp(text: str) -> str | None:
    if not _STRING.fullmatch(text):
        return "expected a quoted date, e.g. \"2024-01-31\""
    body = text[1:-1]
    if not body:
        return "empty timestamp"
    try:
        if "T" in body or " " in body:
            datetime.fromisoformat(body)
        else:
            date.fromisoformat(body)
    except ValueError:
        return f"invalid ISO 8601 timestamp: {body!r}"
    return None


def validate(value_type: ValueType, raw: str) -> tuple[str, str | None]:
    """Validate ``raw`` as a literal of ``value_type``.

    Args:
        value_type: Declared value type of the Atom.
        raw:        Text as typed by the user.

    Returns:
        ``(text, None)`` with the normalised literal when ``raw`` is valid,
        else ``(raw, error)`` with ``raw`` untouched and a short message.
    """
    text, error = _check(value_type, raw.strip())
    if error is not None:
        return raw, error
    return text, None


def _check(value_type: ValueType, text: str) -> tuple[str, str | None]:
    if not text:
        return text, "a value is required"

    if value_type == ValueType.NUMBER:
        if _INT.fullmatch(text) or _FLOAT.fullmatch(text):
            return text, None
        return text, f"not a number: {text!r}"

    if value_type == ValueType.INT:
        if _INT.fullmatch(text):
            return text, None
        return text, f"not an integer: {text!r}"

    if value_type == ValueType.FLOAT:
        if _FLOAT.fullmatch(text):
            return text, None
        return text, f"not a float: {text!r}"

    if value_type == ValueType.STR:
        if _STRING.fullmatch(text):
            return text, None
        return text, "expected a double-quoted string"

    if value_type == ValueType.BOOL:
        lowered = text.lower()
        if lowered in ("true", "false"):
            return lowered, None
        return text, "expected true or false"

    if value_type == ValueType.TIMESTAMP:
        return text, _check_timestamp(text)

    if value_type == ValueType.NIL:
        if text == "nil":
            return text, None
        return text, "expected nil"

    raise TypeError(f"Unsupported value type: {value_type!r}")
