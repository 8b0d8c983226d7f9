"""A mutable JSON object with typed field access."""

from __future__ import annotations

import json
import logging
from typing import Any, Iterable, Optional

from sioj.convert import Binary, as_binary, dumps_compact, is_binary
from sioj.values import JsonType, JsonValue

logger = logging.getLogger(__name__)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant {name}")


class JsonObject:
    """Wraps a JSON object held as a plain ``dict``.

    Nested objects handed out by the ``*_object_*`` accessors share their
    dict with this object, so changes made through them show here too.
    Setters given an empty field name do nothing.
    """

    __slots__ = ("root",)

    def __init__(self, root: Optional[dict] = None) -> None:
        self.root: dict = {} if root is None else root

    @classmethod
    def from_value(cls, value: Any) -> "JsonObject":
        """Wrap the object held by a value, sharing its dict."""
        return cls(JsonValue(value).as_dict())

    def __repr__(self) -> str:
        return f"JsonObject({self.root!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JsonObject):
            return NotImplemented
        return self.root == other.root

    __hash__ = None  # type: ignore[assignment]

    def reset(self) -> None:
        """Drop every field, starting over with a fresh empty dict."""
        self.root = {}

    # Serialisation

    def encode_json(self) -> str:
        """Serialise the object as condensed JSON."""
        return dumps_compact(self.root)

    def encode_json_to_single_string(self) -> str:
        """Serialise the object as JSON text on a single line."""
        return self.encode_json().replace("\r\n", "").replace("\n", "").replace("\t", "")

    def decode_json(self, json_string: str) -> None:
        """Replace the contents with the object parsed from text.

        Raises ``ValueError`` when the text is not a JSON object; the
        object is then left empty.
        """
        try:
            parsed = json.loads(json_string, parse_constant=_reject_constant)
        except ValueError:
            parsed = None
        if not isinstance(parsed, dict):
            self.reset()
            logger.error("JSON decoding failed for: %s", json_string)
            raise ValueError(f"JSON decoding failed for: {json_string}")
        self.root = parsed

    # Generic field access

    def field_names(self) -> list[str]:
        """Return the names of all fields, in insertion order."""
        return list(self.root)

    def has_field(self, field_name: str) -> bool:
        """Tell whether a field of that name exists."""
        return bool(field_name) and field_name in self.root

    def remove_field(self, field_name: str) -> None:
        """Remove a field if it exists."""
        if field_name:
            self.root.pop(field_name, None)

    def get_field(self, field_name: str) -> Optional[JsonValue]:
        """Return a field as a value, or ``None`` when it is missing."""
        if not field_name or field_name not in self.root:
            return None
        return JsonValue(self.root[field_name])

    def set_field(self, field_name: str, value: Any) -> None:
        """Set a field to a value."""
        if not field_name:
            return
        self.root[field_name] = JsonValue(value).raw

    def _typed(self, field_name: str, kind: JsonType) -> JsonValue:
        if field_name not in self.root:
            logger.warning("No field with name %s of type %s", field_name, kind.value)
            raise KeyError(f"no field with name {field_name!r}")
        value = JsonValue(self.root[field_name])
        if value.type() is not kind:
            logger.warning("No field with name %s of type %s", field_name, kind.value)
            raise TypeError(f"field {field_name!r} is not of type {kind.value}")
        return value

    # Scalars

    def try_get_number_field(self, field_name: str) -> Optional[float]:
        """Return a field as a number, or ``None`` when that is not possible."""
        value = self.get_field(field_name)
        if value is None:
            return None
        try:
            return value.as_number()
        except TypeError:
            return None

    def get_number_field(self, field_name: str) -> float:
        """Return a number field; raise if it is missing or not a number."""
        return self._typed(field_name, JsonType.NUMBER).as_number()

    def set_number_field(self, field_name: str, number: float) -> None:
        """Set a field to a number."""
        if field_name:
            self.root[field_name] = float(number)

    def try_get_string_field(self, field_name: str) -> Optional[str]:
        """Return a text field, or ``None`` when it is missing or not text."""
        value = self.get_field(field_name)
        if value is None or value.type() is not JsonType.STRING:
            return None
        return value.raw

    def get_string_field(self, field_name: str) -> str:
        """Return a text field; raise if it is missing or not text."""
        return self._typed(field_name, JsonType.STRING).raw

    def set_string_field(self, field_name: str, value: str) -> None:
        """Set a field to text."""
        if field_name:
            self.root[field_name] = str(value)

    def try_get_bool_field(self, field_name: str) -> Optional[bool]:
        """Return a boolean field, or ``None`` when it is missing or not one."""
        value = self.get_field(field_name)
        if value is None or value.type() is not JsonType.BOOLEAN:
            return None
        return value.raw

    def get_bool_field(self, field_name: str) -> bool:
        """Return a boolean field; raise if it is missing or not a boolean."""
        return self._typed(field_name, JsonType.BOOLEAN).raw

    def set_bool_field(self, field_name: str, value: bool) -> None:
        """Set a field to a boolean."""
        if field_name:
            self.root[field_name] = bool(value)

    # Arrays of values

    def get_array_field(self, field_name: str) -> list[JsonValue]:
        """Return the items of an array field, each wrapped as a value."""
        return self._typed(field_name, JsonType.ARRAY).as_array()

    def set_array_field(self, field_name: str, values: Iterable[Any]) -> None:
        """Set a field to an array built from copies of the given values.

        Unset values and byte values are left out.
        """
        if not field_name:
            return
        items = []
        for item in values:
            value = JsonValue(item)
            kind = value.type()
            if kind in (JsonType.NONE, JsonType.BINARY):
                continue
            raw = value.raw
            if kind is JsonType.ARRAY:
                raw = list(raw)
            items.append(raw)
        self.root[field_name] = items

    def merge_json_object(self, other: "JsonObject", overwrite: bool = True) -> None:
        """Copy the fields of another object into this one.

        Fields already present are kept unless ``overwrite`` is true.
        """
        for key in other.field_names():
            if not overwrite and self.has_field(key):
                continue
            field = other.get_field(key)
            if field is not None:
                self.set_field(key, field)

    # Nested objects

    def try_get_object_field(self, field_name: str) -> Optional["JsonObject"]:
        """Return an object field sharing its dict, or ``None``."""
        value = self.get_field(field_name)
        if value is None or value.type() is not JsonType.OBJECT:
            return None
        return JsonObject(value.raw)

    def get_object_field(self, field_name: str) -> "JsonObject":
        """Return an object field sharing its dict; raise if not one."""
        return JsonObject(self._typed(field_name, JsonType.OBJECT).raw)

    def set_object_field(self, field_name: str, json_object: "JsonObject") -> None:
        """Set a field to another object, sharing its dict."""
        if field_name:
            self.root[field_name] = json_object.root

    # Bytes

    def get_binary_field(self, field_name: str) -> bytes:
        """Return the bytes of a field.

        Byte values come back as they are and text is read as base64;
        any other kind gives empty bytes.  Raises ``KeyError`` when the
        field is missing.
        """
        if field_name not in self.root:
            logger.warning("No field with name %s of type String", field_name)
            raise KeyError(f"no field with name {field_name!r}")
        raw = self.root[field_name]
        if is_binary(raw) or isinstance(raw, str):
            return as_binary(raw)
        return b""

    def set_binary_field(self, field_name: str, data: bytes) -> None:
        """Set a field to raw bytes."""
        if field_name:
            self.root[field_name] = Binary(data)

    # Uniform arrays

    def _uniform(self, field_name: str, kind: JsonType) -> list[JsonValue]:
        items = self.get_array_field(field_name)
        for item in items:
            if item.type() is not kind:
                logger.error(
                    "Not %s element in array with field name %s", kind.value, field_name
                )
                raise TypeError(
                    f"array field {field_name!r} holds a non-{kind.value} element"
                )
        return items

    def get_number_array_field(self, field_name: str) -> list[float]:
        """Return an array field whose items must all be numbers."""
        return [item.as_number() for item in self._uniform(field_name, JsonType.NUMBER)]

    def set_number_array_field(self, field_name: str, numbers: Iterable[float]) -> None:
        """Set a field to an array of numbers."""
        if field_name:
            self.root[field_name] = [float(number) for number in numbers]

    def get_string_array_field(self, field_name: str) -> list[str]:
        """Return an array field whose items must all be text."""
        return [item.raw for item in self._uniform(field_name, JsonType.STRING)]

    def set_string_array_field(self, field_name: str, strings: Iterable[str]) -> None:
        """Set a field to an array of strings."""
        if field_name:
            self.root[field_name] = [str(text) for text in strings]

    def get_bool_array_field(self, field_name: str) -> list[bool]:
        """Return an array field whose items must all be booleans."""
        return [item.raw for item in self._uniform(field_name, JsonType.BOOLEAN)]

    def set_bool_array_field(self, field_name: str, bools: Iterable[bool]) -> None:
        """Set a field to an array of booleans."""
        if field_name:
            self.root[field_name] = [bool(flag) for flag in bools]

    def get_object_array_field(self, field_name: str) -> list["JsonObject"]:
        """Return an array field whose items must all be objects."""
        return [
            JsonObject(item.raw) for item in self._uniform(field_name, JsonType.OBJECT)
        ]

    def set_object_array_field(
        self, field_name: str, objects: Iterable["JsonObject"]
    ) -> None:
        """Set a field to an array of objects, sharing their dicts."""
        if field_name:
            self.root[field_name] = [obj.root for obj in objects]