"""Conversions between JSON text and plain Python JSON values.

A JSON value is held as the natural Python type: ``None`` for null,
``str``, ``int``/``float``, ``bool``, ``list`` and ``dict``.  Raw bytes
carried inside a JSON document are held as :class:`Binary`.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
import re
from typing import Any

logger = logging.getLogger(__name__)

_NUMERIC = re.compile(r"[+-]?[0-9]*(?:\.[0-9]*)?")
_LEADING_FLOAT = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)")


class Binary(bytes):
    """Bytes carried as a JSON value; serialised as an upper-case hex string."""

    def __repr__(self) -> str:
        return f"Binary({bytes(self)!r})"

    def hex_string(self) -> str:
        """Return the upper-case hex text this value is written as."""
        return self.hex().upper()


def is_binary(raw: Any) -> bool:
    """Tell whether a JSON value holds raw bytes rather than text."""
    return isinstance(raw, (bytes, bytearray))


def as_binary(raw: Any) -> bytes:
    """Return the bytes of a value.

    Bytes are returned as they are; a string is read as base64; anything
    else gives empty bytes.
    """
    if is_binary(raw):
        return bytes(raw)
    if isinstance(raw, str):
        try:
            return base64.b64decode(raw, validate=True)
        except (binascii.Error, ValueError):
            logger.warning("could not decode %s as binary", raw)
            return b""
    return b""


def _default(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).hex().upper()
    raise TypeError(f"value of type {type(value).__name__} is not JSON serialisable")


def dumps_compact(raw: Any) -> str:
    """Serialise a value as condensed JSON with no whitespace."""
    return json.dumps(raw, separators=(",", ":"), ensure_ascii=False, default=_default)


def to_json_string(raw: Any) -> str:
    """Render a value as text.

    Strings come back as they are, null as an empty string, numbers in
    fixed six-decimal form, booleans as ``1``/``0`` and containers as
    condensed JSON.
    """
    if raw is None:
        return ""
    if isinstance(raw, str):
        return raw
    if is_binary(raw):
        return bytes(raw).hex().upper()
    if isinstance(raw, bool):
        return "1" if raw else "0"
    if isinstance(raw, (int, float)):
        return "%f" % raw
    if isinstance(raw, (list, tuple, dict)):
        return dumps_compact(raw)
    return ""


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant {name}")


def _loads(json_string: str) -> Any:
    return json.loads(json_string, parse_constant=_reject_constant)


def _atod(text: str) -> float:
    match = _LEADING_FLOAT.match(text.strip())
    return float(match.group(0)) if match else 0.0


def json_string_to_json_value(json_string: str) -> Any:
    """Guess the JSON value a piece of text stands for.

    Empty text is null, numeric text a number, text starting with ``{`` an
    object, valid array text an array, ``true``/``false`` a boolean, and
    anything else stays a string.
    """
    if not json_string:
        return None
    if _NUMERIC.fullmatch(json_string):
        return _atod(json_string)
    if json_string.startswith("{"):
        return to_json_object(json_string)
    if json_string.startswith("["):
        try:
            parsed = _loads(json_string)
        except ValueError:
            parsed = None
        if isinstance(parsed, list):
            return parsed
    if json_string in ("true", "false"):
        return json_string == "true"
    return json_string


def json_string_to_json_array(json_string: str) -> list:
    """Parse a JSON array; text that is not one gives an empty list."""
    try:
        parsed = _loads(json_string)
    except ValueError:
        return []
    return parsed if isinstance(parsed, list) else []


def to_json_object(json_string: str) -> dict:
    """Parse a JSON object; text that is not one gives an empty dict."""
    try:
        parsed = _loads(json_string)
    except ValueError:
        return {}
    return parsed if isinstance(parsed, dict) else {}