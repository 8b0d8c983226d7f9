"""A typed view over a single JSON value."""

from __future__ import annotations

import enum
import logging
import re
from typing import Any

from sioj.convert import (
    Binary,
    as_binary,
    is_binary,
    json_string_to_json_value,
    to_json_string,
)

logger = logging.getLogger(__name__)

_HEX_TEXT = re.compile(r"(?:[0-9A-Fa-f]{2})*")


class _Unset:
    """Marker for a value that holds nothing at all, not even null."""

    _instance: "_Unset | None" = None

    def __new__(cls) -> "_Unset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"


UNSET = _Unset()


class JsonType(enum.Enum):
    """Kinds of JSON value, with bytes told apart from text."""

    NONE = "None"
    NULL = "Null"
    STRING = "String"
    NUMBER = "Number"
    BOOLEAN = "Boolean"
    ARRAY = "Array"
    OBJECT = "Object"
    BINARY = "Binary"


class JsonValue:
    """Wraps one JSON value held as a plain Python object.

    Constructed with no argument, the value is unset: it has type
    ``JsonType.NONE`` and every ``as_*`` accessor raises ``TypeError``.
    """

    __slots__ = ("raw",)

    def __init__(self, raw: Any = UNSET) -> None:
        if isinstance(raw, JsonValue):
            raw = raw.raw
        elif isinstance(raw, bytearray):
            raw = Binary(raw)
        self.raw = raw

    @classmethod
    def from_json_string(cls, json_string: str) -> "JsonValue":
        """Build a value from text, guessing which JSON kind it stands for."""
        return cls(json_string_to_json_value(json_string))

    def __repr__(self) -> str:
        return f"JsonValue({self.raw!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JsonValue):
            return NotImplemented
        return type(self.raw) is type(other.raw) and self.raw == other.raw

    def __hash__(self) -> int:
        return hash(repr(self.raw))

    def _check_set(self, wanted: str) -> None:
        if self.raw is UNSET:
            raise TypeError(
                f"JSON value of type '{self.type_string()}' used as a '{wanted}'"
            )

    def _wrong_kind(self, wanted: str) -> TypeError:
        return TypeError(
            f"JSON value of type '{self.type_string()}' used as a '{wanted}'"
        )

    def type(self) -> JsonType:
        """Return the kind of this value; bytes count as ``BINARY``."""
        raw = self.raw
        if raw is UNSET:
            return JsonType.NONE
        if raw is None:
            return JsonType.NULL
        if is_binary(raw):
            return JsonType.BINARY
        if isinstance(raw, str):
            return JsonType.STRING
        if isinstance(raw, bool):
            return JsonType.BOOLEAN
        if isinstance(raw, (int, float)):
            return JsonType.NUMBER
        if isinstance(raw, (list, tuple)):
            return JsonType.ARRAY
        if isinstance(raw, dict):
            return JsonType.OBJECT
        return JsonType.NONE

    def type_string(self) -> str:
        """Return the JSON kind's name; bytes are reported as ``String``."""
        kind = self.type()
        if kind is JsonType.BINARY:
            return JsonType.STRING.value
        return kind.value

    def is_null(self) -> bool:
        """Tell whether the value is null or unset."""
        return self.raw is UNSET or self.raw is None

    def as_number(self) -> float:
        """Return the value as a number.

        Booleans count as 1 and 0 and numeric strings are parsed; any
        other kind raises ``TypeError``.
        """
        self._check_set("Number")
        raw = self.raw
        if isinstance(raw, bool):
            return 1.0 if raw else 0.0
        if isinstance(raw, (int, float)):
            return float(raw)
        if isinstance(raw, str) and not is_binary(raw):
            try:
                return float(raw)
            except ValueError:
                raise self._wrong_kind("Number") from None
        raise self._wrong_kind("Number")

    def as_string(self) -> str:
        """Return text as it is and any other kind encoded as JSON text."""
        self._check_set("String")
        if isinstance(self.raw, str):
            return self.raw
        return self.encode_json()

    def as_bool(self) -> bool:
        """Return the value as a boolean.

        Numbers are true when non-zero and the strings ``true``/``false``
        are read regardless of case; any other kind raises ``TypeError``.
        """
        self._check_set("Boolean")
        raw = self.raw
        if isinstance(raw, bool):
            return raw
        if isinstance(raw, (int, float)):
            return raw != 0
        if isinstance(raw, str):
            lowered = raw.lower()
            if lowered in ("true", "false"):
                return lowered == "true"
        raise self._wrong_kind("Boolean")

    def as_array(self) -> list["JsonValue"]:
        """Return the items of an array, each wrapped as a value."""
        self._check_set("Array")
        if not isinstance(self.raw, (list, tuple)):
            raise self._wrong_kind("Array")
        return [JsonValue(item) for item in self.raw]

    def as_dict(self) -> dict:
        """Return the object's dict itself, shared rather than copied."""
        self._check_set("Object")
        if not isinstance(self.raw, dict):
            raise self._wrong_kind("Object")
        return self.raw

    def as_binary(self) -> bytes:
        """Return the bytes held by the value.

        Bytes come back as they are; a string is read as hex text and gives
        empty bytes when it is not valid hex; any other kind gives empty bytes.
        """
        self._check_set("Binary")
        raw = self.raw
        if is_binary(raw):
            return as_binary(raw)
        if isinstance(raw, str):
            if _HEX_TEXT.fullmatch(raw):
                return bytes.fromhex(raw)
            return b""
        return b""

    def encode_json(self) -> str:
        """Render the value as text; unset and null give an empty string."""
        if self.raw is UNSET:
            return ""
        return to_json_string(self.raw)