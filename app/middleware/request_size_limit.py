"""Request body size limit middleware.

Rejects uploads whose body exceeds MAX_UPLOAD_SIZE before they reach the
multipart parser. A declared Content-Length is checked up front; bodies
without one are buffered while counting and replayed to the app.
Uses raw ASGI (no BaseHTTPMiddleware).
"""

from typing import Callable

from starlette.datastructures import Headers
from starlette.responses import JSONResponse

_BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})


def _too_large(max_bytes: int, actual: int) -> JSONResponse:
    return JSONResponse(
        status_code=413,
        content={
            "error": "PAYLOAD_TOO_LARGE",
            "message": f"Request body must be at most {max_bytes} bytes",
            "details": {"max_bytes": max_bytes, "content_length": actual},
        },
    )


def RequestSizeLimitMiddleware(app: Callable, max_bytes: int) -> Callable:
    """Reject request bodies larger than max_bytes (declared or streamed). Raw ASGI."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http" or scope["method"] not in _BODY_METHODS:
            await app(scope, receive, send)
            return

        declared = Headers(scope=scope).get("content-length")
        if declared and declared.isdigit():
            if int(declared) > max_bytes:
                await _too_large(max_bytes, int(declared))(scope, receive, send)
                return
            await app(scope, receive, send)
            return

        messages: list[dict] = []
        total = 0
        while True:
            message = await receive()
            if message["type"] != "http.request":
                # Client went away; let the app observe the disconnect.
                messages.append(message)
                break
            total += len(message.get("body", b""))
            if total > max_bytes:
                await _too_large(max_bytes, total)(scope, receive, send)
                return
            messages.append(message)
            if not message.get("more_body", False):
                break

        pending = iter(messages)

        async def replay() -> dict:
            return next(pending, None) or await receive()

        await app(scope, replay, send)

    return asgi_app
