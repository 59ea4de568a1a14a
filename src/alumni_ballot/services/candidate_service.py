"""Candidate board service.

Keeps the most recent candidate grouping for the voting and listing views.
A failed fetch leaves the previous grouping in place.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from alumni_ballot.lib.backend.errors import BackendError
from alumni_ballot.lib.tally.grouping import flatten_groups, order_groups
from alumni_ballot.schemas.common import Notice, Outcome
from alumni_ballot.services.feedback import outcome_for_error

if TYPE_CHECKING:
    from alumni_ballot.lib.backend.client import BackendClient
    from alumni_ballot.schemas.candidate import Candidate, CandidateGroup
    from alumni_ballot.services.auth_service import CommitteeSession


class CandidateBoard:
    """Candidates grouped by position, as last fetched.

    Args:
        client: Backend client.
        positions: Configured position order used to sort the groups.
        session: Committee session, logged out if the backend answers 401.
    """

    def __init__(
        self,
        client: BackendClient,
        positions: list[str],
        session: CommitteeSession | None = None,
    ) -> None:
        self._client = client
        self._positions = positions
        self._session = session
        self.groups: CandidateGroup = {}
        self.loading = False

    @property
    def candidates(self) -> list[Candidate]:
        return flatten_groups(self.groups)

    def find(self, candidate_id: str) -> Candidate | None:
        return next((c for c in self.candidates if c.id == candidate_id), None)

    async def load(self) -> Outcome:
        """Fetch and group the candidate list."""
        self.loading = True
        try:
            groups = await self._client.fetch_candidates()
        except BackendError as exc:
            logger.error("Failed to fetch candidates: {}", exc.message)
            return outcome_for_error(exc, self._session, prefix="Failed to load candidates: ")
        finally:
            self.loading = False

        self.groups = order_groups(groups, self._positions)
        logger.info("Loaded {} candidates across {} positions", len(self.candidates), len(self.groups))
        if not self.groups:
            return Outcome(ok=True, notice=Notice.info("No candidates yet."))
        return Outcome(ok=True)
