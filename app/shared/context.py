"""Request-scoped context (contextvars).

Holds the current request ID so log records can carry it without threading
it through every call.
"""

from contextvars import ContextVar, Token

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)


def get_request_id() -> str | None:
    """Return the request ID of the request being handled, if any."""
    return _request_id.get()


def set_request_id(request_id: str | None) -> Token:
    """Set the current request ID; pass the returned token to reset_request_id()."""
    return _request_id.set(request_id)


def reset_request_id(token: Token) -> None:
    _request_id.reset(token)
