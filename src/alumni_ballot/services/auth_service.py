"""Committee session service.

Holds the committee bearer token (through an injectable :class:`TokenStorage`)
and the display identity derived from it. The identity is never used for
authorization; the backend checks the token on every request.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from loguru import logger

from alumni_ballot.core.security import decode_display_identity
from alumni_ballot.lib.backend.errors import BackendError
from alumni_ballot.schemas.auth import DisplayIdentity, LoginRequest, SignupRequest
from alumni_ballot.schemas.common import Notice, Outcome, View
from alumni_ballot.services.feedback import outcome_for_error

if TYPE_CHECKING:
    from alumni_ballot.core.storage import TokenStorage
    from alumni_ballot.lib.backend.client import BackendClient


class LoginError(Exception):
    """Raised when a login attempt does not yield a session.

    Args:
        message: Human-readable reason, suitable for display.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


def extract_token(body: dict[str, Any]) -> str | None:
    """Find the session token in a login response.

    Accepts a top-level ``token`` field, or ``success: true`` with the
    token nested under ``data``.
    """
    token = body.get("token")
    if isinstance(token, str) and token:
        return token
    data = body.get("data")
    if body.get("success") and isinstance(data, dict):
        nested = data.get("token")
        if isinstance(nested, str) and nested:
            return nested
    return None


def _identity_from_response(body: dict[str, Any], token: str, request: LoginRequest) -> DisplayIdentity:
    user = body.get("user") if isinstance(body.get("user"), dict) else {}
    committee = body.get("committee") if isinstance(body.get("committee"), dict) else {}
    decoded = decode_display_identity(token)
    email = user.get("email") or committee.get("email") or (decoded.email if decoded else None) or request.email
    surname = user.get("surname") or (decoded.surname if decoded else None) or request.surname
    return DisplayIdentity(email=email, surname=surname)


class CommitteeSession:
    """The committee operator's session.

    On construction a previously stored token is restored; its payload is
    decoded best-effort for the display identity.

    Args:
        storage: Where the bearer token is persisted.
    """

    def __init__(self, storage: TokenStorage) -> None:
        self._storage = storage
        self._user: DisplayIdentity | None = None
        self._authenticated = False

        token = storage.get()
        if token:
            self._authenticated = True
            self._user = decode_display_identity(token)
            if self._user is None:
                logger.warning("Stored session token has no readable identity")

    @property
    def is_authenticated(self) -> bool:
        return self._authenticated

    @property
    def user(self) -> DisplayIdentity | None:
        return self._user

    async def login(self, client: BackendClient, email: str, surname: str) -> DisplayIdentity:
        """Log in and persist the issued token.

        Raises:
            pydantic.ValidationError: If the email or surname is invalid.
            LoginError: If the backend refuses the credentials, answers
                without a token, or cannot be reached.
        """
        request = LoginRequest(email=email, surname=surname)
        logger.info("Logging in committee member {}", request.email)
        try:
            body = await client.login(request)
        except BackendError as exc:
            raise LoginError(exc.message) from exc

        token = extract_token(body)
        if token is None:
            logger.warning("Login response carried no token (keys: {})", sorted(body))
            msg = f"Unexpected response format: {sorted(body)}"
            raise LoginError(msg)

        self._storage.set(token)
        self._user = _identity_from_response(body, token, request)
        self._authenticated = True
        logger.info("Committee session started for {}", self._user.email)
        return self._user

    def logout(self) -> None:
        """End the session locally. No backend call is made."""
        self._storage.clear()
        self._user = None
        self._authenticated = False


async def signup(client: BackendClient, email: str, surname: str) -> Outcome:
    """Create a committee account.

    Raises:
        pydantic.ValidationError: If the email or surname is invalid.
    """
    request = SignupRequest(email=email, surname=surname)
    try:
        await client.signup(request)
    except BackendError as exc:
        return outcome_for_error(exc, prefix="Error: ")
    logger.info("Committee account created for {}", request.email)
    return Outcome(ok=True, notice=Notice.success("Signup successful! Now login."), redirect=View.COMMITTEE_LOGIN)
