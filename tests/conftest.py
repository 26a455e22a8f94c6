from __future__ import annotations

from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from urllib.parse import parse_qs, urlsplit
import threading
import time

import pytest

DATA_FILE = Path(__file__).resolve().parent / "data" / "sample_data.txt"


class WriteServer:
    """Local HTTP server answering every request with a fixed status."""

    def __init__(
        self, status: int = 204, body: bytes = b"", delay: float = 0.0, trickle: float = 0.0
    ) -> None:
        self.status = status
        self.body = body
        self.delay = delay
        self.trickle = trickle
        self.requests: list[dict] = []
        self._httpd = ThreadingHTTPServer(("127.0.0.1", 0), self._handler())
        self._httpd.daemon_threads = True
        self._thread = threading.Thread(target=self._httpd.serve_forever, daemon=True)

    @property
    def url(self) -> str:
        host, port = self._httpd.server_address[:2]
        return f"http://{host}:{port}"

    def _handler(self):
        server = self

        class Handler(BaseHTTPRequestHandler):
            def do_POST(self):
                length = int(self.headers.get("Content-Length") or 0)
                payload = self.rfile.read(length)
                parts = urlsplit(self.path)
                server.requests.append(
                    {
                        "path": parts.path,
                        "query": {k: v[0] for k, v in parse_qs(parts.query).items()},
                        "raw_query": parts.query,
                        "content_type": self.headers.get("Content-Type"),
                        "body": payload,
                    }
                )
                if server.delay:
                    time.sleep(server.delay)
                if server.trickle:
                    self._trickle_headers()
                    return
                self.send_response(server.status)
                if server.status != 204:
                    self.send_header("Content-Length", str(len(server.body)))
                self.end_headers()
                if server.status != 204 and server.body:
                    self.wfile.write(server.body)

            def _trickle_headers(self):
                # Each header line arrives within a short read timeout.
                self.wfile.write(f"HTTP/1.0 {server.status} Trickle\r\n".encode())
                for i in range(10):
                    time.sleep(server.trickle)
                    self.wfile.write(f"X-Trickle-{i}: x\r\n".encode())
                self.wfile.write(b"\r\n")

            def log_message(self, format, *args):
                pass

        return Handler

    def start(self) -> "WriteServer":
        self._thread.start()
        return self

    def stop(self) -> None:
        self._httpd.shutdown()
        self._httpd.server_close()


@pytest.fixture
def write_server():
    servers: list[WriteServer] = []

    def _start(status: int = 204, body: bytes = b"", delay: float = 0.0, trickle: float = 0.0) -> WriteServer:
        server = WriteServer(status=status, body=body, delay=delay, trickle=trickle).start()
        servers.append(server)
        return server

    yield _start
    for server in servers:
        server.stop()


@pytest.fixture
def data_file() -> Path:
    return DATA_FILE
