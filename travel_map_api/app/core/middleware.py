"""
Request body size limit.

``BodySizeLimitMiddleware`` refuses bodies larger than
``settings.max_body_bytes`` with HTTP 413.  A declared
``Content-Length`` above the limit is refused before the application
sees the request.  Bodies sent without a length (chunked transfer) are
counted while they are read; crossing the limit raises
``PayloadTooLargeError``, which the application renders as 413.
"""

from fastapi import HTTPException
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from .config import settings

PAYLOAD_TOO_LARGE = "Payload too large"


class PayloadTooLargeError(HTTPException):
    """Raised while reading a body that exceeds the configured limit.

    Subclasses ``HTTPException`` so FastAPI's body parsing re-raises it
    unchanged instead of reporting a generic parse error.
    """

    def __init__(self) -> None:
        super().__init__(status_code=413, detail=PAYLOAD_TOO_LARGE)


class BodySizeLimitMiddleware:
    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        limit = settings.max_body_bytes
        headers = dict(scope.get("headers") or [])
        length = headers.get(b"content-length", b"")
        if length.isdigit() and int(length) > limit:
            response = JSONResponse(status_code=413, content={"message": PAYLOAD_TOO_LARGE})
            await response(scope, receive, send)
            return

        received = 0

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > limit:
                    raise PayloadTooLargeError()
            return message

        await self.app(scope, limited_receive, send)
