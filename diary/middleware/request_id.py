"""Request id middleware.

Takes the caller's X-Request-ID when it is a short token of safe characters,
otherwise mints a UUID. The id is stored in request state, bound to the
logging context for the lifetime of the request, and echoed on the response.
Raw ASGI so streaming responses pass through untouched.
"""

import re
import uuid
from typing import Callable

from diary.shared.context import reset_request_id, set_request_id

_SAFE_REQUEST_ID = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


def get_header(scope: dict, name: str) -> str | None:
    """First value of header `name` from an ASGI scope (case-insensitive)."""
    wanted = name.lower().encode()
    for key, value in scope.get("headers", []):
        if key.lower() == wanted:
            return value.decode("utf-8", errors="replace")
    return None


def sanitize_request_id(raw: str | None) -> str:
    # Client ids end up in log lines; anything else is replaced.
    candidate = (raw or "").strip()
    if _SAFE_REQUEST_ID.match(candidate):
        return candidate
    return str(uuid.uuid4())


def RequestIDMiddleware(app: Callable, header_name: str = "X-Request-ID") -> Callable:
    encoded_header = header_name.lower().encode()

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        request_id = sanitize_request_id(get_header(scope, header_name))
        scope.setdefault("state", {})["request_id"] = request_id

        async def send_with_request_id(message: dict) -> None:
            if message["type"] == "http.response.start":
                message["headers"] = [
                    *message.get("headers", []),
                    (encoded_header, request_id.encode()),
                ]
            await send(message)

        token = set_request_id(request_id)
        try:
            await app(scope, receive, send_with_request_id)
        finally:
            reset_request_id(token)

    return asgi_app
