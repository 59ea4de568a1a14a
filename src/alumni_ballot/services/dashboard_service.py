"""Committee dashboard service.

Fetches candidates with vote counts and derives the summary statistics and
per-position leaders shown to the committee.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from loguru import logger

from alumni_ballot.lib.backend.errors import BackendError
from alumni_ballot.lib.tally.grouping import order_groups
from alumni_ballot.lib.tally.stats import position_results, summarize
from alumni_ballot.schemas.common import Notice, Outcome, View
from alumni_ballot.schemas.dashboard import DashboardSummary, PositionResult
from alumni_ballot.services.feedback import outcome_for_error

if TYPE_CHECKING:
    from alumni_ballot.lib.backend.client import BackendClient
    from alumni_ballot.schemas.candidate import CandidateGroup
    from alumni_ballot.services.auth_service import CommitteeSession

_EMPTY_SUMMARY = DashboardSummary(total_candidates=0, total_votes=0, total_positions=0)


class CommitteeDashboard:
    """Vote tallies for the committee.

    Each fetch is numbered; a response is applied only if no later-issued
    fetch has been applied already, so an overtaken response cannot replace
    newer data.

    Args:
        client: Backend client.
        session: Committee session; required to open the dashboard.
        positions: Configured position order.
    """

    def __init__(self, client: BackendClient, session: CommitteeSession, positions: list[str]) -> None:
        self._client = client
        self._session = session
        self._positions = positions
        self._issued = 0
        self._applied = 0
        self.groups: CandidateGroup = {}
        self.summary: DashboardSummary = _EMPTY_SUMMARY
        self.results: list[PositionResult] = []
        self.loading = False
        self.refreshing = False
        self.last_updated: datetime | None = None

    async def open(self) -> Outcome:
        """Load the dashboard, or redirect to login when there is no session."""
        if not self._session.is_authenticated:
            return Outcome(
                ok=False,
                notice=Notice.warning("Please log in to view the dashboard."),
                redirect=View.COMMITTEE_LOGIN,
            )
        return await self.fetch(show_loading=True)

    async def refresh(self) -> Outcome:
        """Re-fetch without the full loading state."""
        return await self.fetch(show_loading=False)

    async def fetch(self, show_loading: bool = True) -> Outcome:
        """Fetch candidates with vote counts and recompute the tallies."""
        self._issued += 1
        seq = self._issued
        if show_loading:
            self.loading = True
        else:
            self.refreshing = True

        try:
            groups = await self._client.fetch_committee_candidates()
        except BackendError as exc:
            logger.error("Dashboard fetch {} failed: {}", seq, exc.message)
            return outcome_for_error(exc, self._session)
        finally:
            if seq == self._issued:
                self.loading = False
                self.refreshing = False

        if seq < self._applied:
            logger.debug("Discarding dashboard response {} (newer {} already applied)", seq, self._applied)
            return Outcome(ok=True)

        self._apply(seq, groups)
        return Outcome(ok=True)

    def _apply(self, seq: int, groups: CandidateGroup) -> None:
        self._applied = seq
        self.groups = order_groups(groups, self._positions)
        self.summary = summarize(self.groups)
        self.results = position_results(self.groups)
        self.last_updated = datetime.now(UTC)
        logger.info(
            "Dashboard updated: {} candidates, {} votes, {} positions",
            self.summary.total_candidates,
            self.summary.total_votes,
            self.summary.total_positions,
        )
