"""Grouping candidates by position and flattening groups back to a list."""

from collections.abc import Iterable

from alumni_ballot.schemas.candidate import Candidate, CandidateGroup


def group_by_position(candidates: Iterable[Candidate]) -> CandidateGroup:
    """Bucket candidates by position.

    Positions appear in first-seen order and candidates keep their input
    order within each position.
    """
    grouped: CandidateGroup = {}
    for candidate in candidates:
        grouped.setdefault(candidate.position, []).append(candidate)
    return grouped


def flatten_groups(groups: CandidateGroup) -> list[Candidate]:
    """Concatenate every position's candidates, in group order."""
    return [candidate for candidates in groups.values() for candidate in candidates]


def order_groups(groups: CandidateGroup, positions: list[str]) -> CandidateGroup:
    """Reorder groups to follow the configured position order.

    Positions the backend reports but the configuration does not know are
    kept, after the known ones, in their original order.
    """
    ordered: CandidateGroup = {p: groups[p] for p in positions if p in groups}
    for position, candidates in groups.items():
        if position not in ordered:
            ordered[position] = candidates
    return ordered
