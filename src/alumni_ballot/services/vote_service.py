"""Vote submission service.

Submits either a complete multi-position ballot (:func:`submit_ballot`) or a
single vote for one position (:func:`submit_single_vote`).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from loguru import logger
from pydantic import ValidationError

from alumni_ballot.lib.backend.errors import BackendError
from alumni_ballot.lib.ballot.form import BallotIncompleteError
from alumni_ballot.schemas.common import Notice, Outcome
from alumni_ballot.schemas.vote import SingleVoteRequest
from alumni_ballot.services.feedback import outcome_for_error, outcome_for_validation

if TYPE_CHECKING:
    from alumni_ballot.lib.backend.client import BackendClient
    from alumni_ballot.lib.ballot.form import BallotForm
    from alumni_ballot.schemas.candidate import CandidateGroup


async def submit_ballot(client: BackendClient, form: BallotForm, duplicate_marker: str = "already voted") -> Outcome:
    """Validate and submit a full ballot.

    An incomplete or invalid ballot is rejected before any request is made.

    Args:
        client: Backend client.
        form: The ballot; updated in place according to the result.
        duplicate_marker: Substring identifying duplicate-vote rejections.
    """
    try:
        request = form.begin_submit()
    except BallotIncompleteError as exc:
        return Outcome(ok=False, notice=Notice.error(str(exc)))
    except ValidationError as exc:
        return outcome_for_validation(exc)

    logger.info("Submitting ballot with {} selections", len(request.votes))
    try:
        await client.submit_ballot(request)
    except BackendError as exc:
        duplicate = exc.is_duplicate_vote(duplicate_marker)
        form.mark_rejected(exc.message, duplicate=duplicate)
        if duplicate:
            logger.info("Ballot rejected as a duplicate vote (status {})", exc.status_code)
        return outcome_for_error(exc, prefix="Error: ")
    except Exception:
        form.mark_rejected("Unexpected error")
        raise

    form.mark_succeeded()
    return Outcome(ok=True, notice=Notice.success("Your votes have been submitted successfully!"))


@dataclass
class SingleVoteForm:
    """A vote for one position."""

    voter_email: str = ""
    position: str = ""
    candidate_id: str = ""


async def submit_single_vote(
    client: BackendClient,
    form: SingleVoteForm,
    groups: CandidateGroup,
    positions: list[str],
) -> Outcome:
    """Validate and submit a single vote.

    On success the position and candidate are cleared and the email is
    kept; on failure the form is left untouched.
    """
    try:
        request = SingleVoteRequest.model_validate(
            {"voterEmail": form.voter_email, "position": form.position, "candidateId": form.candidate_id},
            context={"positions": positions},
        )
    except ValidationError as exc:
        return outcome_for_validation(exc)

    running = groups.get(request.position, [])
    if not running:
        return Outcome(ok=False, notice=Notice.error("No candidates available for this position"))
    if not any(c.id == request.candidate_id for c in running):
        return Outcome(ok=False, notice=Notice.error("Please select a candidate"))

    try:
        await client.submit_vote(request)
    except BackendError as exc:
        return outcome_for_error(exc, prefix="Error: ")

    form.position = ""
    form.candidate_id = ""
    return Outcome(ok=True, notice=Notice.success("Vote submitted successfully!"))
