"""HTTP requests that send and receive JSON objects."""

from __future__ import annotations

import enum
import http.client
import json
import logging
import urllib.error
import urllib.request
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Optional

from sioj.convert import dumps_compact, is_binary, to_json_string
from sioj.objects import JsonObject

logger = logging.getLogger(__name__)

_FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
_JSON_CONTENT_TYPE = "application/json"
_PARAM_ESCAPES = str.maketrans(
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


def _escape(text: str) -> str:
    return text.translate(_PARAM_ESCAPES)


class RequestVerb(enum.Enum):
    """HTTP method of a request; ``CUSTOM`` uses the request's custom verb."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DEL = "DELETE"
    CUSTOM = "CUSTOM"


class RequestContentType(enum.Enum):
    """How the request object is sent."""

    X_WWW_FORM_URLENCODED_URL = "x_www_form_urlencoded_url"
    X_WWW_FORM_URLENCODED_BODY = "x_www_form_urlencoded_body"
    JSON = "json"
    BINARY = "binary"


class RequestStatus(enum.IntEnum):
    """Progress of a request."""

    NOT_STARTED = 0
    PROCESSING = 1
    FAILED = 2
    FAILED_CONNECTION_ERROR = 3
    SUCCEEDED = 4


@dataclass
class PreparedRequest:
    """Everything needed to send one HTTP request."""

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""


Transport = Callable[[PreparedRequest], "tuple[int, Iterable[tuple[str, str]], bytes]"]


def _urllib_transport(
    prepared: PreparedRequest, timeout: float = 30.0
) -> tuple[int, list[tuple[str, str]], bytes]:
    """Send a request with urllib; HTTP error statuses count as responses."""
    request = urllib.request.Request(
        prepared.url,
        data=prepared.body or None,
        headers=prepared.headers,
        method=prepared.method,
    )
    try:
        with urllib.request.urlopen(request, timeout=timeout) as response:
            return response.status, list(response.headers.items()), response.read()
    except urllib.error.HTTPError as error:
        with error:
            return error.code, list(error.headers.items()), error.read()
    except http.client.HTTPException as error:
        raise ConnectionError(str(error)) from error


def _param_text(raw: Any) -> str:
    if raw is None:
        return ""
    if isinstance(raw, str):
        return raw
    if is_binary(raw):
        return to_json_string(raw)
    if isinstance(raw, bool):
        return "true" if raw else "false"
    if isinstance(raw, (int, float)):
        return repr(float(raw))
    return ""


def _encode_params(root: dict, first_prefix: str) -> str:
    parts = []
    for index, (key, raw) in enumerate(root.items()):
        value = _param_text(raw)
        if key and value:
            parts.append(first_prefix if index == 0 else "&")
            parts.append(f"{_escape(key)}={_escape(value)}")
    return "".join(parts)


class JsonRequest:
    """An HTTP request carrying a JSON object and collecting the response.

    Handlers in ``on_request_complete`` and ``on_request_fail`` are called
    with the request once a response arrived or the request failed.
    """

    def __init__(
        self,
        verb: RequestVerb = RequestVerb.GET,
        content_type: RequestContentType = RequestContentType.X_WWW_FORM_URLENCODED_URL,
    ) -> None:
        self.verb = verb
        self.custom_verb = ""
        self.content_type = content_type
        self.binary_content_type = "application/octet-stream"
        self.request_bytes = b""
        self.request_headers: dict[str, str] = {}
        self.should_have_binary_response = False
        self.on_process_url_complete: Optional[Callable[[bytes], None]] = None
        self.on_request_complete: list[Callable[["JsonRequest"], None]] = []
        self.on_request_fail: list[Callable[["JsonRequest"], None]] = []
        self.transport: Transport = _urllib_transport
        self.tags: list[str] = []
        self.request_object = JsonObject()
        self.response_object = JsonObject()
        self.response_headers: dict[str, str] = {}
        self.response_code = -1
        self.response_content = ""
        self.result_binary_data = b""
        self.is_valid_json_response = False
        self.url = ""
        self.status = RequestStatus.NOT_STARTED
        self.reset_data()

    def set_header(self, name: str, value: str) -> None:
        """Add a header sent with the request, overriding any default."""
        self.request_headers[name] = value

    # Reset

    def reset_data(self) -> None:
        """Clear both the request and the response data."""
        self.reset_request_data()
        self.reset_response_data()

    def reset_request_data(self) -> None:
        """Empty the request object and forget the last URL and status."""
        self.request_object.reset()
        self.url = ""
        self.status = RequestStatus.NOT_STARTED

    def reset_response_data(self) -> None:
        """Empty the response object, headers and code."""
        self.response_object.reset()
        self.response_headers = {}
        self.response_code = -1
        self.is_valid_json_response = False

    def cancel(self) -> None:
        """Drop whatever response data was collected."""
        self.reset_response_data()

    # Request building and sending

    def _method(self) -> str:
        if self.verb is RequestVerb.CUSTOM:
            return self.custom_verb
        return self.verb.value

    def prepare(self, url: str) -> PreparedRequest:
        """Build the method, URL, headers and body this request sends."""
        prepared = PreparedRequest(method=self._method(), url=url)
        root = self.request_object.root
        if self.content_type is RequestContentType.X_WWW_FORM_URLENCODED_URL:
            prepared.headers["Content-Type"] = _FORM_CONTENT_TYPE
            params = _encode_params(root, "?")
            prepared.url = url + params
            logger.info("Request (urlencoded): %s %s %s", prepared.method, prepared.url, params)
        elif self.content_type is RequestContentType.X_WWW_FORM_URLENCODED_BODY:
            prepared.headers["Content-Type"] = _FORM_CONTENT_TYPE
            params = _encode_params(root, "")
            prepared.body = params.encode("utf-8")
            logger.info("Request (url body): %s %s %s", prepared.method, prepared.url, params)
        elif self.content_type is RequestContentType.BINARY:
            prepared.headers["Content-Type"] = self.binary_content_type
            prepared.body = bytes(self.request_bytes)
            logger.info("Request (binary): %s %s", prepared.method, prepared.url)
        elif self.content_type is RequestContentType.JSON:
            prepared.headers["Content-Type"] = _JSON_CONTENT_TYPE
            text = dumps_compact(root)
            prepared.body = text.encode("utf-8")
            logger.info("Request (json): %s %s %s", prepared.method, prepared.url, text)
        prepared.headers.update(self.request_headers)
        return prepared

    def process_url(self, url: str) -> RequestStatus:
        """Send the request to a URL and collect the response.

        Returns the final status; failures are reported through
        ``on_request_fail`` rather than raised.
        """
        prepared = self.prepare(url)
        self.url = prepared.url
        self.status = RequestStatus.PROCESSING
        try:
            code, headers, body = self.transport(prepared)
        except OSError as error:
            self._fail(RequestStatus.FAILED_CONNECTION_ERROR, error)
        except ValueError as error:
            self._fail(RequestStatus.FAILED, error)
        else:
            if self.should_have_binary_response:
                self._complete_binary(code, body)
            else:
                self._complete_json(code, headers, body)
        return self.status

    def _fail(self, status: RequestStatus, error: Exception) -> None:
        self.reset_response_data()
        logger.error("Request failed (%d): %s: %s", self.response_code, self.url, error)
        self.status = status
        for handler in list(self.on_request_fail):
            handler(self)

    def _broadcast_complete(self) -> None:
        self.status = RequestStatus.SUCCEEDED
        for handler in list(self.on_request_complete):
            handler(self)

    def _complete_json(self, code: int, headers: Iterable[tuple[str, str]], body: bytes) -> None:
        self.reset_response_data()
        self.response_code = code
        self.response_content = body.decode("utf-8", errors="replace")
        logger.info("Response (%d): %s", code, self.response_content)
        self.response_headers = {name: value for name, value in headers}
        try:
            parsed = json.loads(self.response_content)
        except ValueError:
            parsed = None
        if isinstance(parsed, dict):
            self.response_object.root = parsed
            self.is_valid_json_response = True
        else:
            logger.warning("JSON could not be decoded!")
        self._broadcast_complete()

    def _complete_binary(self, code: int, body: bytes) -> None:
        self.reset_response_data()
        self.response_code = code
        self.result_binary_data = bytes(body)
        self._broadcast_complete()
        if self.on_process_url_complete is not None:
            self.on_process_url_complete(self.result_binary_data)

    # Response access

    def response_header(self, name: str) -> str:
        """Return a response header's value, or an empty string if absent."""
        wanted = name.lower()
        for key, value in self.response_headers.items():
            if key.lower() == wanted:
                return value
        return ""

    def all_response_headers(self) -> list[str]:
        """Return every response header as ``Name: value`` text."""
        return [f"{key}: {value}" for key, value in self.response_headers.items()]

    # Tags

    def add_tag(self, tag: str) -> None:
        """Add a tag once; empty tags are ignored."""
        if tag and tag not in self.tags:
            self.tags.append(tag)

    def remove_tag(self, tag: str) -> int:
        """Remove a tag and return how many entries were removed."""
        before = len(self.tags)
        self.tags = [existing for existing in self.tags if existing != tag]
        return before - len(self.tags)

    def has_tag(self, tag: str) -> bool:
        """Tell whether a non-empty tag is present."""
        return bool(tag) and tag in self.tags