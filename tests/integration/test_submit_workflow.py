"""
Integration tests for document submission
Runs CrptApi with the real RequestsTransport against a local HTTP server
"""
import json
import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from unittest.mock import Mock

import pytest

from crpt.api import CrptApi, TimeUnit
from crpt.exceptions import HttpError, ProtocolError

DOC_ID = "11111111-2222-3333-4444-555555555555"


class FixedResponder(BaseHTTPRequestHandler):
    """Answers every POST with the server's canned status and body."""

    def do_POST(self):
        length = int(self.headers.get("Content-Length", 0))
        self.server.requests.append({
            "path": self.path,
            "headers": dict(self.headers),
            "body": self.rfile.read(length).decode("utf-8"),
            "at": time.monotonic(),
        })
        payload = self.server.response_body.encode("utf-8")
        self.send_response(self.server.response_status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        self.wfile.write(payload)

    def log_message(self, format, *args):
        pass


@pytest.fixture
def start_server():
    """Start a local server with a fixed response; stopped after the test."""
    servers = []

    def _start(status: int, body: str) -> ThreadingHTTPServer:
        server = ThreadingHTTPServer(("127.0.0.1", 0), FixedResponder)
        server.response_status = status
        server.response_body = body
        server.requests = []
        threading.Thread(target=server.serve_forever, daemon=True).start()
        servers.append(server)
        return server

    yield _start

    for server in servers:
        server.shutdown()
        server.server_close()


def _api(server, token_provider, time_unit=TimeUnit.SECOND, limit=10) -> CrptApi:
    host, port = server.server_address
    return CrptApi(
        time_unit,
        limit,
        token_provider,
        base_url=f"http://{host}:{port}",
        logger=Mock(),
    )


@pytest.mark.integration
class TestSubmitWorkflow:
    """End-to-end submission over HTTP"""

    def test_success_returns_document_id(self, start_server, token_provider, minimal_document):
        server = start_server(200, f'{{"value":"{DOC_ID}"}}')

        with _api(server, token_provider) as api:
            doc_id = api.create_introduce_goods(minimal_document, "SIG", "milk")

        assert doc_id.value == DOC_ID
        request = server.requests[0]
        assert request["path"] == "/lk/documents/create?pg=milk"
        assert request["headers"]["Authorization"] == "Bearer token"
        assert json.loads(request["body"])["product_group"] == "milk"

    def test_server_error_is_http_error_without_retry(self, start_server, token_provider, minimal_document):
        server = start_server(500, "internal error")

        with _api(server, token_provider) as api:
            with pytest.raises(HttpError) as exc_info:
                api.create_introduce_goods(minimal_document, "SIG", "milk")

        assert exc_info.value.status_code == 500
        assert exc_info.value.body == "internal error"
        assert len(server.requests) == 1

    def test_empty_object_is_protocol_error(self, start_server, token_provider, minimal_document):
        server = start_server(200, "{}")

        with _api(server, token_provider) as api:
            with pytest.raises(ProtocolError):
                api.create_introduce_goods(minimal_document, "SIG", "milk")

    def test_concurrent_callers_share_the_limit(self, start_server, token_provider, minimal_document):
        """6 concurrent submissions at 3 per second take at least one second."""
        server = start_server(200, f'{{"value":"{DOC_ID}"}}')
        results = []
        errors = []

        with _api(server, token_provider, limit=3) as api:
            def submit():
                try:
                    results.append(api.create_introduce_goods(minimal_document, "SIG", "milk"))
                except Exception as e:
                    errors.append(e)

            start = time.monotonic()
            threads = [threading.Thread(target=submit) for _ in range(6)]
            for t in threads:
                t.start()
            for t in threads:
                t.join(timeout=10)
            elapsed = time.monotonic() - start

        assert not errors
        assert len(results) == 6
        assert elapsed >= 1.0
        arrivals = sorted(r["at"] for r in server.requests)
        assert arrivals[3] - arrivals[0] >= 0.9
