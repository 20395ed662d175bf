"""Request context management using contextvars.

Holds the request ID of the request being served so log records emitted
anywhere below the middleware (repositories, storage backends, cleanup
tasks spawned during the request) can carry it.
"""

from contextvars import ContextVar, Token

NO_REQUEST_ID = "-"

_request_id: ContextVar[str] = ContextVar("request_id", default=NO_REQUEST_ID)


def set_request_id(request_id: str) -> Token[str]:
    """Bind request_id to the current context; returns the token for reset."""
    return _request_id.set(request_id)


def reset_request_id(token: Token[str]) -> None:
    _request_id.reset(token)


def get_request_id() -> str:
    """Return the current request ID, or "-" outside a request."""
    return _request_id.get()
