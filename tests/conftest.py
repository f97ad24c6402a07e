import json
import threading
from http.server import BaseHTTPRequestHandler, HTTPServer
from unittest import mock

import pytest
import requests


def _make_response(status_code: int = 200, body="", url: str = "test-url") -> requests.Response:
    """Build a requests.Response without touching the network."""
    if not isinstance(body, (str, bytes)):
        body = json.dumps(body)
    if isinstance(body, str):
        body = body.encode("utf-8")
    r = requests.Response()
    r.status_code = status_code
    r._content = body
    r.encoding = "utf-8"
    r.url = url
    return r


def _make_session(responses: dict) -> mock.MagicMock:
    """A Session double whose get() answers from a url -> Response map."""
    session = mock.MagicMock(spec=requests.Session)

    def get(url, **kwargs):
        result = responses[url]
        if isinstance(result, Exception):
            raise result
        return result

    session.get.side_effect = get
    return session


@pytest.fixture
def make_response():
    """Factory for canned requests.Response objects."""
    return _make_response


@pytest.fixture
def make_session():
    """Factory for Session doubles backed by a url -> Response map."""
    return _make_session


class PriceHandler(BaseHTTPRequestHandler):
    """Serves canned price documents."""

    routes = {
        "/cheerios.json": (200, b'{"price": 8.43}'),
        "/frosties.json": (200, b'{"price": 4.99}'),
        "/broken.json": (500, b"Internal Server Error"),
        "/garbled.json": (200, b"<html>nope</html>"),
    }

    def log_message(self, format, *args):
        """Suppress logging."""
        pass

    def do_GET(self):
        status, body = self.routes.get(self.path, (404, b"not found"))
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)


@pytest.fixture
def price_server():
    """Start a local price server and yield its base URL."""
    server = HTTPServer(("127.0.0.1", 0), PriceHandler)
    port = server.server_address[1]
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{port}"
    server.shutdown()
    server.server_close()
