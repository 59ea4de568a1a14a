"""Unit tests for candidate schemas."""

import pytest
from pydantic import ValidationError

from alumni_ballot.schemas.candidate import Candidate, CandidateRegistrationRequest

POSITIONS = ["Chairman", "Secretary 1"]


class TestCandidate:
    def test_accepts_mongo_style_id(self) -> None:
        candidate = Candidate.model_validate(
            {"_id": "abc", "name": "Ada", "email": "ada@example.com", "position": "Chairman"}
        )
        assert candidate.id == "abc"
        assert candidate.vote_count == 0

    def test_accepts_plain_id(self) -> None:
        candidate = Candidate.model_validate({"id": 7, "name": "Ada", "email": "a@x.org", "position": "Chairman"})
        assert candidate.id == "7"

    @pytest.mark.parametrize("key", ["voteCount", "votes", "vote_count"])
    def test_vote_count_aliases(self, key: str) -> None:
        candidate = Candidate.model_validate(
            {"_id": "a", "name": "Ada", "email": "a@x.org", "position": "Chairman", key: 5}
        )
        assert candidate.vote_count == 5

    def test_null_vote_count_is_zero(self) -> None:
        candidate = Candidate.model_validate(
            {"_id": "a", "name": "Ada", "email": "a@x.org", "position": "Chairman", "voteCount": None}
        )
        assert candidate.vote_count == 0

    def test_negative_vote_count_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Candidate.model_validate(
                {"_id": "a", "name": "Ada", "email": "a@x.org", "position": "Chairman", "voteCount": -1}
            )

    def test_created_at_parsed(self) -> None:
        candidate = Candidate.model_validate(
            {
                "_id": "a",
                "name": "Ada",
                "email": "a@x.org",
                "position": "Chairman",
                "createdAt": "2025-03-01T10:15:00Z",
            }
        )
        assert candidate.created_at is not None
        assert candidate.created_at.year == 2025

    def test_missing_id_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Candidate.model_validate({"name": "Ada", "email": "a@x.org", "position": "Chairman"})


class TestCandidateRegistrationRequest:
    def test_valid(self) -> None:
        request = CandidateRegistrationRequest.model_validate(
            {"name": " Ada Obi ", "email": "ada@example.com", "position": "Chairman"},
            context={"positions": POSITIONS},
        )
        assert request.name == "Ada Obi"
        assert request.model_dump() == {"name": "Ada Obi", "email": "ada@example.com", "position": "Chairman"}

    def test_unknown_position_rejected(self) -> None:
        with pytest.raises(ValidationError, match="Unknown position"):
            CandidateRegistrationRequest.model_validate(
                {"name": "Ada", "email": "ada@example.com", "position": "Treasurer"},
                context={"positions": POSITIONS},
            )

    def test_position_unchecked_without_context(self) -> None:
        request = CandidateRegistrationRequest(name="Ada", email="ada@example.com", position="Treasurer")
        assert request.position == "Treasurer"

    def test_invalid_email_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CandidateRegistrationRequest(name="Ada", email="not-an-email", position="Chairman")

    def test_blank_name_rejected(self) -> None:
        with pytest.raises(ValidationError, match="Name required"):
            CandidateRegistrationRequest(name="   ", email="ada@example.com", position="Chairman")

    def test_long_name_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CandidateRegistrationRequest(name="x" * 101, email="ada@example.com", position="Chairman")
