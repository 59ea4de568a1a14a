"""Multi-position ballot form state machine.

Holds the voter identity and one candidate choice per position while the
voter fills in the ballot. The form is pure state: the caller performs the
network request between :meth:`BallotForm.begin_submit` and one of
:meth:`BallotForm.mark_succeeded` / :meth:`BallotForm.mark_rejected`.

States::

    editing --begin_submit--> submitting --mark_succeeded--> succeeded
                                         --mark_rejected---> rejected | editing
"""

import enum
from dataclasses import dataclass, field
from typing import NamedTuple

from alumni_ballot.schemas.candidate import CandidateGroup
from alumni_ballot.schemas.vote import BulkVoteRequest, VoteSelection


class BallotState(enum.StrEnum):
    """Lifecycle state of a ballot form."""

    EDITING = "editing"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    REJECTED = "rejected"


class BallotIncompleteError(ValueError):
    """Raised when a ballot is submitted without a choice for every position.

    Args:
        missing: Positions without a selection, in ballot order.
    """

    def __init__(self, missing: list[str]) -> None:
        self.missing = missing
        super().__init__(f"Please select candidates for: {', '.join(missing)}")


class BallotStateError(RuntimeError):
    """Raised when an operation is not valid in the form's current state."""


class Progress(NamedTuple):
    """How many positions have a selection, out of how many."""

    selected: int
    total: int

    @property
    def percent(self) -> int:
        return round(100 * self.selected / self.total) if self.total else 0


@dataclass
class BallotForm:
    """A voter's ballot in progress.

    Args:
        candidates: Candidates grouped by position. Every position with at
            least one candidate must receive a selection; positions nobody
            is running for are not on the ballot.
    """

    candidates: CandidateGroup
    voter_name: str = ""
    voter_email: str = ""
    selections: dict[str, str] = field(default_factory=dict)
    state: BallotState = BallotState.EDITING
    last_error: str | None = None

    @property
    def positions(self) -> list[str]:
        return [position for position, running in self.candidates.items() if running]

    @property
    def progress(self) -> Progress:
        selected = sum(1 for p in self.positions if self.selections.get(p))
        return Progress(selected, len(self.positions))

    @property
    def is_complete(self) -> bool:
        return not self.missing_positions()

    def missing_positions(self) -> list[str]:
        """Positions without a selection, in ballot order."""
        return [p for p in self.positions if not self.selections.get(p)]

    def select(self, position: str, candidate_id: str) -> None:
        """Choose a candidate for a position, replacing any earlier choice.

        Raises:
            KeyError: If the position is not on the ballot.
            ValueError: If the candidate is not running for that position.
        """
        self._ensure_editable()
        if position not in self.candidates:
            raise KeyError(position)
        if not any(c.id == candidate_id for c in self.candidates[position]):
            msg = f"Candidate {candidate_id!r} is not running for {position}"
            raise ValueError(msg)
        self.selections[position] = candidate_id
        self.state = BallotState.EDITING

    def clear_selection(self, position: str) -> None:
        self._ensure_editable()
        self.selections.pop(position, None)
        self.state = BallotState.EDITING

    def build_request(self) -> BulkVoteRequest:
        """Validate the ballot and convert it to a bulk vote request.

        Raises:
            BallotIncompleteError: If any position lacks a selection.
            pydantic.ValidationError: If the voter name or email is invalid.
        """
        missing = self.missing_positions()
        if missing:
            raise BallotIncompleteError(missing)
        return BulkVoteRequest(
            voter_name=self.voter_name.strip(),
            voter_email=self.voter_email.strip(),
            votes=[VoteSelection(position=p, candidate_id=self.selections[p]) for p in self.positions],
        )

    def begin_submit(self) -> BulkVoteRequest:
        """Validate and enter the submitting state.

        Validation failures leave the form in its previous state.
        """
        if self.state is BallotState.SUBMITTING:
            msg = "Ballot is already being submitted"
            raise BallotStateError(msg)
        request = self.build_request()
        self.state = BallotState.SUBMITTING
        self.last_error = None
        return request

    def mark_succeeded(self) -> None:
        """Record a successful submission and reset the form."""
        self._ensure_submitting()
        self.voter_name = ""
        self.voter_email = ""
        self.selections.clear()
        self.state = BallotState.SUCCEEDED

    def mark_rejected(self, message: str, *, duplicate: bool = False) -> None:
        """Record a failed submission.

        A duplicate-vote rejection keeps the voter identity, clears every
        selection and returns to editing. Any other rejection keeps the whole
        form so the voter can retry.
        """
        self._ensure_submitting()
        self.last_error = message
        if duplicate:
            self.selections.clear()
            self.state = BallotState.EDITING
        else:
            self.state = BallotState.REJECTED

    def _ensure_editable(self) -> None:
        if self.state is BallotState.SUBMITTING:
            msg = "Ballot cannot be changed while it is being submitted"
            raise BallotStateError(msg)

    def _ensure_submitting(self) -> None:
        if self.state is not BallotState.SUBMITTING:
            msg = f"Ballot is not being submitted (state={self.state})"
            raise BallotStateError(msg)
