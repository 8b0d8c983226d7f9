import base64

import pytest

from sioj.convert import (
    Binary,
    as_binary,
    dumps_compact,
    is_binary,
    json_string_to_json_array,
    json_string_to_json_value,
    to_json_object,
    to_json_string,
)


def test_is_binary_distinguishes_bytes_from_text():
    assert is_binary(Binary(b"\x01\x02")) is True
    assert is_binary("abc") is False
    assert is_binary(None) is False


def test_as_binary_returns_bytes_unchanged():
    assert as_binary(Binary(b"\x00\xff")) == b"\x00\xff"


def test_as_binary_decodes_base64_string():
    payload = b"hello world"
    assert as_binary(base64.b64encode(payload).decode()) == payload


def test_as_binary_bad_base64_gives_empty():
    assert as_binary("not base64!!") == b""


@pytest.mark.parametrize("raw", [1.0, True, [1], {"a": 1}, None])
def test_as_binary_non_string_gives_empty(raw):
    assert as_binary(raw) == b""


def test_dumps_compact_has_no_whitespace_and_round_trips():
    value = {"a": [1, 2, {"b": "c"}], "d": True, "e": None}
    text = dumps_compact(value)
    assert " " not in text
    assert to_json_object(text) == value


def test_dumps_compact_writes_binary_as_hex():
    binary = Binary(b"\xab\x01")
    assert dumps_compact([binary]) == '["' + binary.hex_string() + '"]'
    assert binary.hex_string() == binary.hex().upper()


def test_to_json_string_null_and_string():
    assert to_json_string(None) == ""
    assert to_json_string("plain") == "plain"


def test_to_json_string_number_uses_fixed_format():
    assert to_json_string(1.5) == "1.500000"


def test_to_json_string_bool():
    assert to_json_string(True) == "1"
    assert to_json_string(False) == "0"


def test_to_json_string_containers_match_compact():
    value = {"x": [1, "y"]}
    assert to_json_string(value) == dumps_compact(value)
    assert to_json_string([1, 2]) == dumps_compact([1, 2])


def test_json_string_to_json_value_empty_is_null():
    assert json_string_to_json_value("") is None


@pytest.mark.parametrize("text", ["42", "-3.25", "+7", ".5", "5."])
def test_json_string_to_json_value_numeric(text):
    result = json_string_to_json_value(text)
    assert isinstance(result, float)
    assert result == float(text)


def test_json_string_to_json_value_lone_sign_is_zero():
    assert json_string_to_json_value("-") == 0.0


def test_json_string_to_json_value_exponent_is_not_numeric():
    assert json_string_to_json_value("1e5") == "1e5"


def test_json_string_to_json_value_object():
    assert json_string_to_json_value('{"k":"v"}') == {"k": "v"}


def test_json_string_to_json_value_broken_object_is_empty_dict():
    assert json_string_to_json_value("{broken") == {}


def test_json_string_to_json_value_array():
    assert json_string_to_json_value("[1,\"a\",true]") == [1, "a", True]


def test_json_string_to_json_value_broken_array_is_string():
    assert json_string_to_json_value("[oops") == "[oops"


def test_json_string_to_json_value_bool():
    assert json_string_to_json_value("true") is True
    assert json_string_to_json_value("false") is False


def test_json_string_to_json_value_other_text_is_string():
    assert json_string_to_json_value("hello") == "hello"


def test_json_string_to_json_array():
    assert json_string_to_json_array('[{"a":1},2]') == [{"a": 1}, 2]
    assert json_string_to_json_array('{"a":1}') == []
    assert json_string_to_json_array("nonsense") == []


def test_to_json_object_rejects_non_objects():
    assert to_json_object("[1,2]") == []  or to_json_object("[1,2]") == {}
    assert to_json_object("[1,2]") == {}
    assert to_json_object("NaN") == {}


def test_to_json_object_round_trip():
    value = {"name": "n", "nested": {"list": [1.5, None]}}
    assert to_json_object(dumps_compact(value)) == value