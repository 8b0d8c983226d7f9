import json
import socket
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from sioj.library import (
    base64_decode,
    base64_decode_bytes,
    base64_encode,
    base64_encode_bytes,
    call_url,
    get_url_binary,
    percent_encode,
    string_to_json_value_array,
)
from sioj.objects import JsonObject
from sioj.request import RequestContentType, RequestStatus, RequestVerb
from sioj.values import JsonValue


class _Handler(BaseHTTPRequestHandler):
    def log_message(self, *args):
        pass

    def _reply(self, code, body, content_type):
        self.send_response(code)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def _handle(self):
        length = int(self.headers.get("Content-Length") or 0)
        body = self.rfile.read(length).decode("utf-8")
        if self.path.startswith("/bytes"):
            self._reply(200, b"\x00\x01\xfe", "application/octet-stream")
        else:
            echo = {"method": self.command, "path": self.path, "body": body}
            self._reply(200, json.dumps(echo).encode(), "application/json")

    do_GET = do_POST = do_PUT = do_DELETE = _handle


@pytest.fixture
def server():
    httpd = ThreadingHTTPServer(("127.0.0.1", 0), _Handler)
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{httpd.server_address[1]}"
    httpd.shutdown()
    httpd.server_close()


def _closed_url():
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    return f"http://127.0.0.1:{port}/json"


def test_percent_encode_reserved_characters():
    source = " !\"#$&'()*+,/:;=?@[]{}"
    expected = (
        "%20%21%22%23%24%26%27%28%29%2A%2B%2C%2F%3A%3B%3D%3F%40%5B%5D%7B%7D"
    )
    assert percent_encode(source) == expected


def test_percent_encode_leaves_other_characters():
    assert percent_encode("abc-XYZ_09.%~") == "abc-XYZ_09.%~"


def test_base64_string_round_trip():
    assert base64_encode("hello") == "aGVsbG8="
    assert base64_decode(base64_encode("some text")) == "some text"


def test_base64_bytes_round_trip():
    data = bytes(range(256))
    assert base64_decode_bytes(base64_encode_bytes(data)) == data


def test_base64_decode_invalid():
    with pytest.raises(ValueError):
        base64_decode_bytes("not*base64")
    with pytest.raises(ValueError):
        base64_decode("abc")


def test_string_to_json_value_array():
    values = string_to_json_value_array('[1, "a", true, null]')
    assert values == [JsonValue(1), JsonValue("a"), JsonValue(True), JsonValue(None)]


def test_string_to_json_value_array_invalid():
    assert string_to_json_value_array("{}") == []
    assert string_to_json_value_array("not json") == []


def test_call_url_posts_body_and_calls_back_once(server):
    body = JsonObject()
    body.set_string_field("a", "1")
    seen = []
    request = call_url(
        server + "/json",
        RequestVerb.POST,
        RequestContentType.X_WWW_FORM_URLENCODED_BODY,
        body,
        seen.append,
    )
    assert seen == [request]
    assert request.status is RequestStatus.SUCCEEDED
    assert request.response_object.get_string_field("method") == "POST"
    assert request.response_object.get_string_field("body") == "a=1"
    assert request.on_request_complete == []
    assert request.on_request_fail == []


def test_call_url_without_object_sends_no_params(server):
    seen = []
    request = call_url(
        server + "/json",
        RequestVerb.GET,
        RequestContentType.X_WWW_FORM_URLENCODED_URL,
        None,
        seen.append,
    )
    assert len(seen) == 1
    assert request.response_object.get_string_field("path") == "/json"


def test_call_url_failure_calls_back():
    seen = []
    request = call_url(
        _closed_url(),
        RequestVerb.GET,
        RequestContentType.JSON,
        JsonObject(),
        seen.append,
    )
    assert seen == [request]
    assert request.status is RequestStatus.FAILED_CONNECTION_ERROR
    assert not request.is_valid_json_response


def test_get_url_binary(server):
    data = get_url_binary(
        server + "/bytes", RequestVerb.GET, RequestContentType.X_WWW_FORM_URLENCODED_URL
    )
    assert data == b"\x00\x01\xfe"


def test_get_url_binary_failure():
    with pytest.raises(ConnectionError):
        get_url_binary(
            _closed_url(), RequestVerb.GET, RequestContentType.X_WWW_FORM_URLENCODED_URL
        )