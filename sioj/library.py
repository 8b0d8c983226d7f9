"""Helper functions for encoding text and making JSON HTTP calls."""

from __future__ import annotations

import base64
import binascii
from typing import Callable, Optional

from sioj.convert import json_string_to_json_array
from sioj.objects import JsonObject
from sioj.request import JsonRequest, RequestContentType, RequestStatus, RequestVerb
from sioj.values import JsonValue

_PERCENT_ESCAPES = str.maketrans(
    {
        " ": "%20",
        "!": "%21",
        '"': "%22",
        "#": "%23",
        "$": "%24",
        "&": "%26",
        "'": "%27",
        "(": "%28",
        ")": "%29",
        "*": "%2A",
        "+": "%2B",
        ",": "%2C",
        "/": "%2F",
        ":": "%3A",
        ";": "%3B",
        "=": "%3D",
        "?": "%3F",
        "@": "%40",
        "[": "%5B",
        "]": "%5D",
        "{": "%7B",
        "}": "%7D",
    }
)


def percent_encode(source: str) -> str:
    """Percent-encode the reserved URL characters of a string.

    ``%`` itself and non-reserved characters are left as they are.
    """
    return source.translate(_PERCENT_ESCAPES)


def base64_encode(source: str) -> str:
    """Encode the UTF-8 bytes of a string as base64."""
    return base64.b64encode(source.encode("utf-8")).decode("ascii")


def base64_encode_bytes(source: bytes) -> str:
    """Encode bytes as base64."""
    return base64.b64encode(bytes(source)).decode("ascii")


def base64_decode_bytes(source: str) -> bytes:
    """Decode base64 text; raise ``ValueError`` when it is not valid."""
    try:
        return base64.b64decode(source, validate=True)
    except binascii.Error as error:
        raise ValueError(f"invalid base64 text: {source!r}") from error


def base64_decode(source: str) -> str:
    """Decode base64 text into a string; raise ``ValueError`` when invalid."""
    return base64_decode_bytes(source).decode("utf-8", errors="replace")


def string_to_json_value_array(json_string: str) -> list[JsonValue]:
    """Parse a JSON array into wrapped values; invalid text gives an empty list."""
    return [JsonValue(item) for item in json_string_to_json_array(json_string)]


def call_url(
    url: str,
    verb: RequestVerb = RequestVerb.GET,
    content_type: RequestContentType = RequestContentType.X_WWW_FORM_URLENCODED_URL,
    json_object: Optional[JsonObject] = None,
    callback: Optional[Callable[[JsonRequest], None]] = None,
) -> JsonRequest:
    """Send a JSON object to a URL and call back once, on success or failure.

    Returns the request, which holds the response when it comes back.
    """
    request = JsonRequest(verb, content_type)
    request.request_object = json_object if json_object is not None else JsonObject()

    def finished(done: JsonRequest) -> None:
        request.on_request_complete.remove(finished)
        request.on_request_fail.remove(finished)
        if callback is not None:
            callback(done)

    request.on_request_complete.append(finished)
    request.on_request_fail.append(finished)
    request.reset_response_data()
    request.process_url(url)
    return request


def get_url_binary(
    url: str,
    verb: RequestVerb = RequestVerb.GET,
    content_type: RequestContentType = RequestContentType.X_WWW_FORM_URLENCODED_URL,
) -> bytes:
    """Fetch a URL and return the raw response body.

    Raises ``ConnectionError`` when no response could be had.
    """
    request = JsonRequest(verb, content_type)
    request.should_have_binary_response = True
    request.reset_response_data()
    status = request.process_url(url)
    if status is not RequestStatus.SUCCEEDED:
        raise ConnectionError(f"request to {url} failed")
    return request.result_binary_data