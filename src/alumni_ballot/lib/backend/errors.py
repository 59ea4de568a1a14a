"""Error taxonomy for backend interactions.

Every failure the HTTP client reports is a :class:`BackendError`. Callers
distinguish the cases by subclass: only :class:`AuthenticationError` ends the
committee session.
"""

from typing import Any

_MESSAGE_KEYS = ("msg", "message", "error", "detail")


class BackendError(Exception):
    """Raised when a backend request does not produce a usable result.

    Args:
        message: Human-readable error description.
        status_code: HTTP status code, when a response was received.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)

    def is_duplicate_vote(self, marker: str = "already voted") -> bool:
        """Return True when the message reports that the voter already voted."""
        return marker.lower() in self.message.lower()


class NetworkError(BackendError):
    """No response was received (connection failure or timeout)."""


class AuthenticationError(BackendError):
    """The backend answered 401; the session token is missing, invalid or expired."""


class AuthorizationError(BackendError):
    """The backend answered 403; the session is valid but not permitted."""


class RejectedError(BackendError):
    """The backend refused the request for a business reason (any other non-2xx)."""


class MalformedResponseError(BackendError):
    """A successful response carried a body in none of the recognized shapes."""


def extract_message(body: Any) -> str | None:
    """Pull a human-readable message out of an error response body.

    Looks at ``msg``, ``message``, ``error`` and ``detail`` in that order.
    """
    if not isinstance(body, dict):
        return None
    for key in _MESSAGE_KEYS:
        value = body.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def error_for_status(status_code: int, body: Any) -> BackendError:
    """Map a non-2xx response to the matching error subclass."""
    message = extract_message(body)
    if status_code == 401:
        return AuthenticationError(message or "Session expired. Please log in again.", status_code)
    if status_code == 403:
        return AuthorizationError(message or "You are not allowed to perform this action.", status_code)
    return RejectedError(message or f"Server error: {status_code}", status_code)
