"""Request-scoped context (contextvars).

The request id middleware sets the id for the duration of a request; log
records pick it up through RequestIdLogFilter. Outside a request (scheduler
passes, scripts) the id is "-".
"""

from contextvars import ContextVar, Token

NO_REQUEST_ID = "-"

_current_request_id: ContextVar[str] = ContextVar("current_request_id", default=NO_REQUEST_ID)


def set_request_id(request_id: str) -> Token[str]:
    """Set the request id for this context. Pass the returned token to reset_request_id."""
    return _current_request_id.set(request_id)


def reset_request_id(token: Token[str]) -> None:
    _current_request_id.reset(token)


def get_request_id() -> str:
    return _current_request_id.get()
