"""Candidate registration service.

Whether the registration form or the "registration closed" notice is shown
is a configuration choice (``registration_open``).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from loguru import logger
from pydantic import ValidationError

from alumni_ballot.lib.backend.errors import BackendError
from alumni_ballot.schemas.candidate import CandidateRegistrationRequest
from alumni_ballot.schemas.common import Notice, Outcome, View
from alumni_ballot.services.feedback import outcome_for_error, outcome_for_validation

if TYPE_CHECKING:
    from alumni_ballot.core.config import Settings
    from alumni_ballot.lib.backend.client import BackendClient

REGISTRATION_CLOSED = (
    "Registration for committee positions is currently closed. "
    "Please proceed to vote to cast your vote for your preferred candidate."
)
REGISTRATION_CLOSED_CONTACT = "If you believe this is an error, please contact the election committee."


def registration_view(settings: Settings) -> View:
    """The view reached from "register": the form, or voting when closed."""
    return View.REGISTER if settings.registration_open else View.VOTE


def closed_outcome() -> Outcome:
    return Outcome(ok=False, notice=Notice.info(REGISTRATION_CLOSED), redirect=View.VOTE)


@dataclass
class RegistrationForm:
    """Candidate registration form fields."""

    name: str = ""
    email: str = ""
    position: str = ""

    def reset(self) -> None:
        self.name = ""
        self.email = ""
        self.position = ""


async def register_candidate(client: BackendClient, settings: Settings, form: RegistrationForm) -> Outcome:
    """Submit a candidate registration.

    When registration is closed nothing is sent and the closed notice is
    returned instead. The form is reset after a successful registration.
    """
    if not settings.registration_open:
        return closed_outcome()

    try:
        request = CandidateRegistrationRequest.model_validate(
            {"name": form.name, "email": form.email, "position": form.position},
            context={"positions": settings.position_list},
        )
    except ValidationError as exc:
        return outcome_for_validation(exc)

    try:
        await client.register_candidate(request)
    except BackendError as exc:
        return outcome_for_error(exc, prefix="Error: ")

    logger.info("Registered candidate {} for {}", request.name, request.position)
    form.reset()
    return Outcome(ok=True, notice=Notice.success("Candidate registered successfully!"))
