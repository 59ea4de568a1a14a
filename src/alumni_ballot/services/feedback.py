"""Translation of failures into user-facing outcomes.

Network, authorization and business-rule failures become error notices and
leave in-progress form data alone. Authentication failures on committee
requests additionally end the session and redirect to the login view.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger
from pydantic import ValidationError

from alumni_ballot.lib.backend.errors import AuthenticationError, BackendError
from alumni_ballot.schemas.common import Notice, Outcome, View

if TYPE_CHECKING:
    from alumni_ballot.services.auth_service import CommitteeSession


def outcome_for_error(exc: BackendError, session: CommitteeSession | None = None, *, prefix: str = "") -> Outcome:
    """Build the outcome for a failed backend interaction.

    Args:
        exc: The backend failure.
        session: The committee session behind the request, if any. It is
            torn down, and the user sent to login, on authentication failure.
        prefix: Optional text placed before the error message.
    """
    message = f"{prefix}{exc.message}"
    if isinstance(exc, AuthenticationError) and session is not None:
        if session.is_authenticated:
            logger.info("Backend rejected the session token; logging out")
            session.logout()
        return Outcome(ok=False, notice=Notice.error(message), redirect=View.COMMITTEE_LOGIN)
    return Outcome(ok=False, notice=Notice.error(message))


def validation_messages(exc: ValidationError) -> list[str]:
    """Flatten a Pydantic validation error into ``field: message`` lines."""
    lines = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"])
        text = error["msg"].removeprefix("Value error, ")
        lines.append(f"{field}: {text}" if field else text)
    return lines


def outcome_for_validation(exc: ValidationError) -> Outcome:
    """Build the outcome for a form that failed client-side validation."""
    return Outcome(ok=False, notice=Notice.error("; ".join(validation_messages(exc))))
