"""Shared fixtures"""

from __future__ import annotations

import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Dict, List, Optional, Tuple

import pytest


class RecordingServer:
    """Local HTTP server answering scripted routes and recording every request"""

    def __init__(self):
        self.requests: List[Dict[str, Any]] = []
        self.routes: Dict[Tuple[str, str], Tuple[int, bytes, Dict[str, str]]] = {}
        self.url = ""

    def route(
        self,
        method: str,
        path: str,
        status: int = 200,
        body: bytes = b"{}",
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        self.routes[(method, path)] = (status, body, headers or {})


class _Handler(BaseHTTPRequestHandler):
    def _handle(self):
        length = int(self.headers.get("Content-Length") or 0)
        body = self.rfile.read(length) if length else b""
        recorder: RecordingServer = self.server.recorder  # type: ignore[attr-defined]
        recorder.requests.append(
            {
                "method": self.command,
                "path": self.path,
                "headers": {k.lower(): v for k, v in self.headers.items()},
                "body": body,
            }
        )
        status, payload, headers = recorder.routes.get(
            (self.command, self.path), (404, b'{"error":"not found"}', {})
        )
        self.send_response(status)
        for name, value in headers.items():
            self.send_header(name, value)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        self.wfile.write(payload)

    do_GET = _handle
    do_POST = _handle
    do_PATCH = _handle
    do_DELETE = _handle

    def log_message(self, format, *args):
        pass


@pytest.fixture
def local_server(monkeypatch):
    """Threaded HTTP server on 127.0.0.1, shut down after the test"""
    for name in ("HTTP_PROXY", "http_proxy", "HTTPS_PROXY", "https_proxy", "ALL_PROXY", "all_proxy"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("NO_PROXY", "127.0.0.1,localhost")
    monkeypatch.setenv("no_proxy", "127.0.0.1,localhost")

    recorder = RecordingServer()
    httpd = ThreadingHTTPServer(("127.0.0.1", 0), _Handler)
    httpd.recorder = recorder  # type: ignore[attr-defined]
    recorder.url = f"http://127.0.0.1:{httpd.server_address[1]}"
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    try:
        yield recorder
    finally:
        httpd.shutdown()
        httpd.server_close()
        thread.join(timeout=5)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    monkeypatch.delenv("UPTIMEROBOT_API_KEY", raising=False)
    monkeypatch.delenv("UPTIMEROBOT_API_URL", raising=False)
