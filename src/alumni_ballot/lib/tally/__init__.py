"""Tally library: client-side shaping of candidate and vote data.

Public API:
    - group_by_position: Bucket a flat candidate list into a CandidateGroup
    - flatten_groups: Inverse of group_by_position
    - order_groups: Reorder groups to the configured position order
    - find_leader: Leading candidate of one position (None when all-zero)
    - summarize: Total candidates, votes and positions
    - position_results: Per-position rows for the dashboard
"""

from alumni_ballot.lib.tally.grouping import flatten_groups, group_by_position, order_groups
from alumni_ballot.lib.tally.stats import find_leader, position_results, summarize

__all__ = [
    "find_leader",
    "flatten_groups",
    "group_by_position",
    "order_groups",
    "position_results",
    "summarize",
]
