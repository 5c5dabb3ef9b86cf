"""
Unit tests for the ASGI middleware.

The transport guard is driven with hand-built scopes because a real HTTP
client always sends a method and a path.
"""

import asyncio
import json
import logging
from typing import Any

import pytest
from fastapi.testclient import TestClient

from src.api.middleware import (
    CORSHeadersMiddleware,
    RequestLoggingMiddleware,
    TransportGuardMiddleware,
)


def run_asgi(app: Any, scope: dict[str, Any]) -> list[dict[str, Any]]:
    """Call an ASGI app once and collect the messages it sends."""
    messages: list[dict[str, Any]] = []

    async def receive() -> dict[str, Any]:
        return {"type": "http.request", "body": b"", "more_body": False}

    async def send(message: dict[str, Any]) -> None:
        messages.append(message)

    asyncio.run(app(scope, receive, send))
    return messages


async def ok_app(scope: Any, receive: Any, send: Any) -> None:
    await send({"type": "http.response.start", "status": 200, "headers": []})
    await send({"type": "http.response.body", "body": b"ok"})


def http_scope(**overrides: Any) -> dict[str, Any]:
    scope = {"type": "http", "method": "GET", "path": "/", "headers": []}
    scope.update(overrides)
    return scope


class TestTransportGuard:
    """Tests for TransportGuardMiddleware."""

    def test_missing_method_returns_405(self) -> None:
        messages = run_asgi(TransportGuardMiddleware(ok_app), http_scope(method=None))

        assert messages[0]["status"] == 405
        body = json.loads(messages[1]["body"])
        assert body == {
            "error": "TransportError",
            "message": "Method Not Allowed",
            "details": None,
        }

    def test_missing_path_returns_404(self) -> None:
        scope = http_scope()
        del scope["path"]

        messages = run_asgi(TransportGuardMiddleware(ok_app), scope)

        assert messages[0]["status"] == 404
        assert json.loads(messages[1]["body"])["message"] == "Not Found"

    def test_missing_path_checked_before_method(self) -> None:
        messages = run_asgi(TransportGuardMiddleware(ok_app), http_scope(method="", path=""))

        assert messages[0]["status"] == 404

    def test_complete_request_passes_through(self) -> None:
        messages = run_asgi(TransportGuardMiddleware(ok_app), http_scope())

        assert messages[0]["status"] == 200
        assert messages[1]["body"] == b"ok"

    def test_rejection_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.ERROR):
            run_asgi(TransportGuardMiddleware(ok_app), http_scope(method=None))

        assert "Method Not Allowed" in caplog.text


class TestCORSHeaders:
    """Tests for CORSHeadersMiddleware."""

    def test_headers_added_to_response(self) -> None:
        app = CORSHeadersMiddleware(ok_app, headers={"Access-Control-Allow-Origin": "*"})

        messages = run_asgi(app, http_scope())

        assert (b"access-control-allow-origin", b"*") in messages[0]["headers"]

    def test_existing_header_replaced_not_duplicated(self) -> None:
        async def app_with_header(scope: Any, receive: Any, send: Any) -> None:
            await send(
                {
                    "type": "http.response.start",
                    "status": 200,
                    "headers": [(b"access-control-allow-origin", b"example.com")],
                }
            )
            await send({"type": "http.response.body", "body": b""})

        app = CORSHeadersMiddleware(app_with_header, headers={"Access-Control-Allow-Origin": "*"})

        headers = run_asgi(app, http_scope())[0]["headers"]

        assert [value for name, value in headers if name == b"access-control-allow-origin"] == [
            b"*"
        ]

    def test_guard_rejections_carry_cors_headers(self, app) -> None:
        wrapped = CORSHeadersMiddleware(
            TransportGuardMiddleware(ok_app), headers=app.state.cors_headers
        )

        messages = run_asgi(wrapped, http_scope(method=None))

        assert (b"access-control-max-age", b"86400") in messages[0]["headers"]


class TestRequestLogging:
    """Tests for RequestLoggingMiddleware."""

    def test_logs_request_and_status(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO):
            run_asgi(RequestLoggingMiddleware(ok_app), http_scope(path="/todo"))

        assert "Incoming request GET /todo" in caplog.text
        assert "Completed GET /todo -> 200" in caplog.text

    def test_application_requests_are_logged(
        self, client: TestClient, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.INFO):
            client.get("/users/missing")

        assert "Incoming request GET /users/missing" in caplog.text
        assert "Completed GET /users/missing -> 404" in caplog.text
        assert "Error occurred GET /users/missing: User not found (404)" in caplog.text

    def test_route_summary_is_logged(
        self, client: TestClient, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.INFO):
            client.post("/todo", json={"message": "buy milk"})
            client.get("/todo")

        assert "API response POST /todo: created " in caplog.text
        assert "API response GET /todo: 1 todo(s)" in caplog.text
