"""
ASGI middleware wrapped around the FastAPI application.

Outermost first, as installed by the application factory:
- CORSHeadersMiddleware: attaches the CORS headers to every response
- TransportGuardMiddleware: rejects requests lacking a method or path
- RequestLoggingMiddleware: logs each request and its final status
"""

import logging

from starlette.datastructures import MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from src.api.errors import error_response
from src.domain.exceptions import TransportError

logger = logging.getLogger(__name__)


class CORSHeadersMiddleware:
    """
    Set CORS headers on every HTTP response, including error responses.

    Unlike Starlette's CORSMiddleware this does not answer preflight
    requests itself; OPTIONS is served by the route table.
    """

    def __init__(self, app: ASGIApp, headers: dict[str, str]) -> None:
        self.app = app
        self.headers = headers

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async def send_with_cors(message: Message) -> None:
            if message["type"] == "http.response.start":
                headers = MutableHeaders(scope=message)
                for name, value in self.headers.items():
                    headers[name] = value
            await send(message)

        await self.app(scope, receive, send_with_cors)


class TransportGuardMiddleware:
    """
    Answer malformed transport input before routing.

    A request without a path gets 404, one without a method gets 405.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            error = None
            if not scope.get("path"):
                error = TransportError("Not Found", status_code=404)
            elif not scope.get("method"):
                error = TransportError("Method Not Allowed", status_code=405)
            if error is not None:
                logger.error(f"Rejected request: {error.message} ({error.status_code})")
                await error_response(error)(scope, receive, send)
                return

        await self.app(scope, receive, send)


class RequestLoggingMiddleware:
    """Log incoming requests and the status they completed with."""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        method = scope["method"]
        path = scope["path"]
        headers = {
            key.decode("latin-1"): value.decode("latin-1")
            for key, value in scope.get("headers", ())
        }
        logger.info(f"Incoming request {method} {path} headers={headers}")

        async def send_and_log(message: Message) -> None:
            if message["type"] == "http.response.start":
                logger.info(f"Completed {method} {path} -> {message['status']}")
            await send(message)

        await self.app(scope, receive, send_and_log)
