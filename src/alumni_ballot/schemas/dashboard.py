"""Committee dashboard Pydantic v2 schemas."""

from pydantic import BaseModel, Field

from alumni_ballot.schemas.candidate import Candidate


class DashboardSummary(BaseModel):
    """Headline statistics over the grouped candidates."""

    total_candidates: int = Field(ge=0)
    total_votes: int = Field(ge=0)
    total_positions: int = Field(ge=0)


class PositionResult(BaseModel):
    """Tally for one position.

    ``leader`` is None when no candidate in the position has any votes.
    """

    position: str
    candidates: list[Candidate]
    leader: Candidate | None = None
    total_votes: int = Field(default=0, ge=0)
