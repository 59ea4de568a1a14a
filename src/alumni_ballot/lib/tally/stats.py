"""Vote tally aggregation for the committee dashboard."""

from alumni_ballot.schemas.candidate import Candidate, CandidateGroup
from alumni_ballot.schemas.dashboard import DashboardSummary, PositionResult


def find_leader(candidates: list[Candidate]) -> Candidate | None:
    """Return the candidate with the most votes, or None if nobody has a vote.

    On a tie for the maximum the first such candidate in list order wins.
    """
    leader: Candidate | None = None
    for candidate in candidates:
        if leader is None or candidate.vote_count > leader.vote_count:
            leader = candidate
    if leader is None or leader.vote_count <= 0:
        return None
    return leader


def summarize(groups: CandidateGroup) -> DashboardSummary:
    """Compute candidate, vote and position totals in one pass."""
    total_candidates = 0
    total_votes = 0
    for candidates in groups.values():
        total_candidates += len(candidates)
        total_votes += sum(c.vote_count for c in candidates)
    return DashboardSummary(
        total_candidates=total_candidates,
        total_votes=total_votes,
        total_positions=len(groups),
    )


def position_results(groups: CandidateGroup) -> list[PositionResult]:
    """Build one result row per position, in group order."""
    return [
        PositionResult(
            position=position,
            candidates=candidates,
            leader=find_leader(candidates),
            total_votes=sum(c.vote_count for c in candidates),
        )
        for position, candidates in groups.items()
    ]
