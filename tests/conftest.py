"""Shared pytest fixtures."""

import json
import threading
from collections.abc import Callable, Iterator
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any

import httpx
import pytest

from flaresolverr import FlareSolverrClient

BASE_URL = "http://flaresolverr.test/v1"


class RecordingTransport(httpx.MockTransport):
    """Mock transport that replies with canned payloads and keeps every request."""

    def __init__(self, status_code: int = 200, payload: Any = None) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = status_code
        self.payload = payload if payload is not None else {"status": "ok", "message": ""}
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.payload)

    @property
    def last_body(self) -> dict[str, Any]:
        """JSON body of the most recent request."""
        body: dict[str, Any] = json.loads(self.requests[-1].content)
        return body


@pytest.fixture
def make_client() -> Callable[..., tuple[FlareSolverrClient, RecordingTransport]]:
    """Build a client wired to a recording transport."""

    def _make(
        status_code: int = 200, payload: Any = None, timeout: float = 60
    ) -> tuple[FlareSolverrClient, RecordingTransport]:
        transport = RecordingTransport(status_code, payload)
        http_client = httpx.AsyncClient(transport=transport)
        return FlareSolverrClient(BASE_URL, timeout, http_client), transport

    return _make


@pytest.fixture
def solution_payload() -> dict[str, Any]:
    """Reply for a successful page fetch."""
    return {
        "status": "ok",
        "message": "Challenge not detected!",
        "startTimestamp": 1700000000000,
        "endTimestamp": 1700000000950,
        "version": "3.3.21",
        "solution": {
            "url": "https://example.com/",
            "status": 200,
            "headers": {},
            "response": "<html><body>hello</body></html>",
            "cookies": [],
            "userAgent": "Mozilla/5.0 (X11; Linux x86_64)",
        },
    }


class _CommandHandler(BaseHTTPRequestHandler):
    """Answers every command with an empty session list over keep-alive connections."""

    protocol_version = "HTTP/1.1"

    def do_POST(self) -> None:
        self.rfile.read(int(self.headers.get("Content-Length", 0)))
        body = json.dumps({"status": "ok", "message": "", "sessions": []}).encode()
        self.send_response(200)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format: str, *args: Any) -> None:
        pass


@pytest.fixture
def local_server() -> Iterator[str]:
    """Command endpoint served from a background thread."""
    server = ThreadingHTTPServer(("127.0.0.1", 0), _CommandHandler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        host, port = server.server_address[:2]
        yield f"http://{host}:{port}/v1"
    finally:
        server.shutdown()
        server.server_close()
