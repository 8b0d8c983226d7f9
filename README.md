# sioj

A small toolkit with no dependencies for working with JSON values that may
carry raw bytes. It provides:

- typed access to the fields of JSON objects,
- trimming and restoring of generated key-name suffixes,
- a request object for JSON or form-encoded HTTP calls,
- a settings record that holds WebSocket connection defaults.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Modules

### `sioj.convert`

Plain Python values represent JSON: `None`, `str`, `int`/`float`, `bool`,
`list` and `dict`. Raw bytes are held as `Binary`, a `bytes` subclass that is
written out as upper-case hex text.

- `json_string_to_json_value(text)` works out what a piece of text stands for:
  - empty text gives `None`,
  - numeric text gives a `float`,
  - text starting with `{` gives a dict,
  - valid array text gives a list,
  - `true`/`false` give a bool,
  - anything else stays a string.
- `json_string_to_json_array(text)` and `to_json_object(text)` parse text. When
  the text is not a JSON array or object, they return an empty list or dict.
- `dumps_compact(value)` writes condensed JSON.
- `to_json_string(value)` renders a value as text:
  - strings are returned unchanged,
  - null gives `""`,
  - numbers use `%f` form,
  - booleans give `1`/`0`,
  - containers give condensed JSON.
- `is_binary(value)` reports whether a value holds bytes.
- `as_binary(value)` returns bytes unchanged and decodes a string as base64.
  Anything else gives `b""`.

### `sioj.keymap`

- `trim_key(key)` cuts a key at its second-to-last underscore. For example,
  `boolKey_8_EDBB...` becomes `boolKey`. It returns `None` when the key holds
  fewer than two underscores.
- `trim_value_key_names(value)` trims every object key, at any depth, in place.
- `TrimmedKeyMap` maps trimmed names to long names. It nests one map per
  sub-structure.
- `replace_json_value_names_with_map(value, key_map)` puts the long names back
  in place.

### `sioj.values`

`JsonValue(raw)` wraps one JSON value.

- `type()` returns a `JsonType`; bytes count as `BINARY`.
- `type_string()` gives the name of the kind.
- `is_null()` checks for null.
- Conversion methods: `as_number`, `as_string`, `as_bool`, `as_array`,
  `as_dict`, `as_binary` and `encode_json`.
  - `as_binary` reads string values as hex text.
  - Asking for a kind the value cannot give raises `TypeError`.
- `JsonValue.from_json_string(text)` builds a value in the same way as
  `json_string_to_json_value`.

### `sioj.objects`

`JsonObject` wraps a `dict`.

- Typed getters and setters cover:
  - numbers, strings and booleans,
  - arrays of values, numbers, strings, booleans or objects,
  - nested objects,
  - bytes.
- The `get_*` methods raise `KeyError` for a missing field and `TypeError` for
  a field of the wrong kind. The `try_get_*` methods return `None` instead.
- `get_binary_field` decodes a string field as base64.
- `merge_json_object` copies fields from another object.
- `encode_json` and `decode_json` convert to and from text. `decode_json`
  raises `ValueError` on text that is not a JSON object.

### `sioj.request`

`JsonRequest(verb, content_type)` prepares and sends an HTTP request.

- The verb is one of `RequestVerb.GET`, `POST`, `PUT`, `DEL` or `CUSTOM`.
- The body is one of:
  - form-encoded in the URL,
  - form-encoded in the body,
  - JSON,
  - binary.
- `prepare(url)` returns the `PreparedRequest` without sending it.
- `process_url(url)` sends the request with `urllib`, or with a callable
  assigned to `transport`, and returns a `RequestStatus`.
- The response is parsed into `response_object`. The status code, the headers
  (`response_header`, `all_response_headers`) and `is_valid_json_response` are
  kept.
- Handlers in `on_request_complete` and `on_request_fail` are called once the
  request is done.
- Tags are managed with `add_tag`, `remove_tag` and `has_tag`.

### `sioj.library`

- `percent_encode`
- `base64_encode`, `base64_encode_bytes`, `base64_decode` and
  `base64_decode_bytes`. The decoders raise `ValueError` on invalid input.
- `string_to_json_value_array`
- `call_url(url, verb, content_type, json_object, callback)`
- `get_url_binary(url, verb, content_type)` returns the response body. It
  raises `ConnectionError` on failure.

### `sioj.settings`

`HorizonSettings` is a dataclass of connection, logging, security and debug
defaults. `validate()` clamps the bounded fields into their ranges.
`get_horizon_settings()` returns the shared process-wide instance.

## Example

```python
from sioj.objects import JsonObject
from sioj.values import JsonValue

obj = JsonObject()
obj.set_string_field("name", "player")
obj.set_number_array_field("scores", [1, 2, 3])
print(obj.encode_json())          # {"name":"player","scores":[1.0,2.0,3.0]}

value = JsonValue.from_json_string("42")
print(value.as_number())          # 42.0
```

```python
from sioj.library import percent_encode

print(percent_encode("a b&c"))    # a%20b%26c
```

## What it does not do

The package has no WebSocket or socket.io client. `HorizonSettings` only holds
defaults that such a client would read. Nothing here opens connections or
sends heartbeats. The package has no command-line program either.