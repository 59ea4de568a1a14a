"""Unit tests for dashboard tally aggregation."""

import pytest

from alumni_ballot.lib.tally.stats import find_leader, position_results, summarize
from alumni_ballot.schemas.candidate import Candidate


def _candidate(cid: str, position: str, votes: int = 0) -> Candidate:
    return Candidate(id=cid, name=f"Name {cid}", email=f"{cid}@example.com", position=position, vote_count=votes)


class TestFindLeader:
    def test_highest_vote_count(self) -> None:
        candidates = [_candidate("a", "Chairman", 3), _candidate("b", "Chairman", 9), _candidate("c", "Chairman", 1)]
        leader = find_leader(candidates)
        assert leader is not None
        assert leader.id == "b"

    def test_all_zero_has_no_leader(self) -> None:
        assert find_leader([_candidate("a", "Chairman"), _candidate("b", "Chairman")]) is None

    def test_empty_has_no_leader(self) -> None:
        assert find_leader([]) is None

    def test_tie_goes_to_first_in_order(self) -> None:
        candidates = [_candidate("a", "Chairman", 1), _candidate("b", "Chairman", 5), _candidate("c", "Chairman", 5)]
        leader = find_leader(candidates)
        assert leader is not None
        assert leader.id == "b"


class TestSummarize:
    @pytest.mark.parametrize(
        "votes",
        [[0], [1, 2, 3], [0, 0, 10, 4], [100, 0]],
    )
    def test_total_votes_is_sum(self, votes: list[int]) -> None:
        groups = {
            "Chairman": [_candidate(f"c{i}", "Chairman", v) for i, v in enumerate(votes)],
            "PRO 1": [_candidate("p", "PRO 1", 2)],
        }
        summary = summarize(groups)
        assert summary.total_votes == sum(votes) + 2
        assert summary.total_candidates == len(votes) + 1
        assert summary.total_positions == 2

    def test_empty(self) -> None:
        summary = summarize({})
        assert (summary.total_candidates, summary.total_votes, summary.total_positions) == (0, 0, 0)

    def test_position_without_candidates_counts(self) -> None:
        assert summarize({"Chairman": []}).total_positions == 1


class TestPositionResults:
    def test_rows_in_group_order(self) -> None:
        groups = {
            "Chairman": [_candidate("a", "Chairman", 2), _candidate("b", "Chairman", 3)],
            "Secretary 1": [_candidate("s", "Secretary 1", 0)],
        }
        results = position_results(groups)
        assert [r.position for r in results] == ["Chairman", "Secretary 1"]
        assert results[0].leader is not None
        assert results[0].leader.id == "b"
        assert results[0].total_votes == 5
        assert results[1].leader is None
