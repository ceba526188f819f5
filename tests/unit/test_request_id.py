"""Request id middleware and its logging context."""

import logging
import uuid

from httpx import ASGITransport, AsyncClient

from diary.middleware.request_id import RequestIDMiddleware, sanitize_request_id
from diary.shared.context import NO_REQUEST_ID, get_request_id
from diary.shared.telemetry.logging import RequestIdLogFilter


def make_app(seen: list[str]):
    """Minimal ASGI app that records the request id visible while it runs."""

    async def inner(scope, receive, send) -> None:
        seen.append(get_request_id())
        await send({"type": "http.response.start", "status": 200, "headers": []})
        await send({"type": "http.response.body", "body": b"ok"})

    return RequestIDMiddleware(inner)


async def test_client_id_is_bound_during_request_and_echoed() -> None:
    seen: list[str] = []
    transport = ASGITransport(app=make_app(seen))
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/", headers={"X-Request-ID": "req-42"})

    assert seen == ["req-42"]
    assert response.headers["X-Request-ID"] == "req-42"
    assert get_request_id() == NO_REQUEST_ID


async def test_unsafe_client_id_is_replaced() -> None:
    seen: list[str] = []
    transport = ASGITransport(app=make_app(seen))
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/", headers={"X-Request-ID": "bad id\nforged"})

    assert response.headers["X-Request-ID"] == seen[0]
    uuid.UUID(seen[0])


def test_sanitize_request_id() -> None:
    assert sanitize_request_id(" abc_DEF-1 ") == "abc_DEF-1"
    assert sanitize_request_id("x" * 65) != "x" * 65
    uuid.UUID(sanitize_request_id(None))


async def test_log_filter_stamps_current_request_id() -> None:
    log_filter = RequestIdLogFilter()
    stamped: list[str] = []

    async def inner(scope, receive, send) -> None:
        record = logging.LogRecord("diary", logging.INFO, __file__, 1, "inside", None, None)
        log_filter.filter(record)
        stamped.append(record.request_id)
        await send({"type": "http.response.start", "status": 204, "headers": []})
        await send({"type": "http.response.body", "body": b""})

    transport = ASGITransport(app=RequestIDMiddleware(inner))
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        await client.get("/", headers={"X-Request-ID": "trace-7"})

    outside = logging.LogRecord("diary", logging.INFO, __file__, 1, "outside", None, None)
    assert log_filter.filter(outside) is True
    assert stamped == ["trace-7"]
    assert outside.request_id == NO_REQUEST_ID
