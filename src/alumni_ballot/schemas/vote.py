"""Vote submission Pydantic v2 schemas.

Serialized with ``by_alias=True`` to produce the backend's camelCase bodies.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, ValidationInfo, field_validator

from alumni_ballot.schemas.candidate import check_position


class SingleVoteRequest(BaseModel):
    """One vote for one position."""

    model_config = ConfigDict(populate_by_name=True)

    voter_email: EmailStr = Field(alias="voterEmail")
    position: str
    candidate_id: str = Field(alias="candidateId", min_length=1)

    @field_validator("position")
    @classmethod
    def _validate_position(cls, v: str, info: ValidationInfo) -> str:
        return check_position(v, info)


class VoteSelection(BaseModel):
    """The chosen candidate for one position on a full ballot."""

    model_config = ConfigDict(populate_by_name=True)

    position: str
    candidate_id: str = Field(alias="candidateId", min_length=1)


class BulkVoteRequest(BaseModel):
    """A complete ballot: voter identity plus one selection per position."""

    model_config = ConfigDict(populate_by_name=True)

    voter_name: str = Field(alias="voterName", min_length=1, max_length=100)
    voter_email: EmailStr = Field(alias="voterEmail")
    votes: list[VoteSelection] = Field(min_length=1)
