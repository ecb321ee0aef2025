"""
Shared fixtures: stub HTTP servers, unused ports and root logger state
"""

import json
import logging
import socket
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest


class StubServer:
    """Serve canned responses keyed by (method, raw path) and record what was received"""

    def __init__(self):
        self.routes = {}
        self.received = []
        self.release = threading.Event()
        self.httpd = ThreadingHTTPServer(("127.0.0.1", 0), self._make_handler())
        self.httpd.daemon_threads = True
        self.thread = threading.Thread(target=self.httpd.serve_forever, daemon=True)

    @property
    def url(self):
        host, port = self.httpd.server_address[:2]
        return f"http://{host}:{port}"

    def route(self, method, path, status=200, body=b"", json_body=None,
              chunks=None, truncate=False, stall=False, headers=None):
        """Register a reply; chunks are sent with chunked transfer encoding,
        truncate drops the terminating chunk and closes the connection,
        stall holds the connection open after the chunks until the server stops"""
        if json_body is not None:
            body = json.dumps(json_body).encode()
            headers = dict(headers or {}, **{"Content-Type": "application/json"})
        self.routes[(method, path)] = {
            "status": status,
            "body": body.encode() if isinstance(body, str) else body,
            "chunks": [c.encode() if isinstance(c, str) else c for c in chunks] if chunks else None,
            "truncate": truncate,
            "stall": stall,
            "headers": headers or {},
        }

    def _make_handler(self):
        stub = self

        class Handler(BaseHTTPRequestHandler):
            protocol_version = "HTTP/1.1"

            def log_message(self, format, *args):
                pass

            def _dispatch(self):
                length = int(self.headers.get("Content-Length") or 0)
                raw = self.rfile.read(length) if length else b""
                stub.received.append({
                    "method": self.command,
                    "path": self.path,
                    "headers": dict(self.headers),
                    "body": json.loads(raw) if raw else None,
                })

                reply = stub.routes.get((self.command, self.path))
                if reply is None:
                    reply = {"status": 404, "body": b"Not Found", "chunks": None,
                             "truncate": False, "stall": False, "headers": {}}

                self.send_response(reply["status"])
                for name, value in reply["headers"].items():
                    self.send_header(name, value)

                if reply["chunks"] is None:
                    self.send_header("Content-Length", str(len(reply["body"])))
                    self.end_headers()
                    self.wfile.write(reply["body"])
                    return

                self.send_header("Transfer-Encoding", "chunked")
                self.end_headers()
                for chunk in reply["chunks"]:
                    self.wfile.write(b"%x\r\n%s\r\n" % (len(chunk), chunk))
                    self.wfile.flush()
                if reply["stall"]:
                    stub.release.wait(10)
                if reply["truncate"] or reply["stall"]:
                    self.close_connection = True
                    return
                self.wfile.write(b"0\r\n\r\n")

            do_GET = _dispatch
            do_POST = _dispatch

        return Handler

    def start(self):
        self.thread.start()

    def stop(self):
        self.release.set()
        self.httpd.shutdown()
        self.httpd.server_close()


@pytest.fixture
def stub_server():
    server = StubServer()
    server.start()
    yield server
    server.stop()


@pytest.fixture
def closed_port_url():
    """URL on a local port that nothing is listening on"""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return f"http://127.0.0.1:{port}/api/asset-categories"


@pytest.fixture
def silent_server_url():
    """URL on a local port that completes the TCP handshake but never answers"""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    sock.listen(1)
    port = sock.getsockname()[1]
    yield f"http://127.0.0.1:{port}/api/asset-categories"
    sock.close()


@pytest.fixture
def root_log_level():
    """Restore the root logger level changed by --verbose"""
    root = logging.getLogger()
    level = root.level
    yield root
    root.setLevel(level)
