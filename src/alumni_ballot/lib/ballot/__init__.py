"""Ballot library: the multi-position ballot form.

Public API:
    - BallotForm: Ballot state and transitions
    - BallotState: editing / submitting / succeeded / rejected
    - BallotIncompleteError: Client-side rejection listing missing positions
    - BallotStateError: Operation not allowed in the current state
    - Progress: Selected vs. total positions
"""

from alumni_ballot.lib.ballot.form import BallotForm, BallotIncompleteError, BallotState, BallotStateError, Progress

__all__ = [
    "BallotForm",
    "BallotIncompleteError",
    "BallotState",
    "BallotStateError",
    "Progress",
]
