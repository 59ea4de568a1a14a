"""Candidate Pydantic v2 schemas.

Candidates are created by the backend and are read-only here. Field names
and aliases follow the backend's camelCase JSON; several historical spellings
are accepted for the identifier and the vote count.
"""

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field, ValidationInfo, field_validator


def check_position(value: str, info: ValidationInfo) -> str:
    """Reject positions outside the configured set when one is supplied in the validation context."""
    positions = (info.context or {}).get("positions")
    if positions is not None and value not in positions:
        msg = f"Unknown position {value!r}. Choose one of: {', '.join(positions)}"
        raise ValueError(msg)
    return value


class Candidate(BaseModel):
    """A registered candidate for one committee position."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(validation_alias=AliasChoices("_id", "id"))
    name: str
    email: str
    position: str
    vote_count: int = Field(default=0, ge=0, validation_alias=AliasChoices("voteCount", "votes", "vote_count"))
    created_at: datetime | None = Field(default=None, validation_alias=AliasChoices("createdAt", "created_at"))

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, v: Any) -> Any:
        return str(v) if isinstance(v, int) else v

    @field_validator("vote_count", mode="before")
    @classmethod
    def _coerce_vote_count(cls, v: Any) -> Any:
        return v if v is not None else 0


# Position name -> candidates for that position, in backend order.
CandidateGroup = dict[str, list[Candidate]]


class CandidateRegistrationRequest(BaseModel):
    """Candidate registration form."""

    name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    position: str

    @field_validator("name")
    @classmethod
    def _strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            msg = "Name required"
            raise ValueError(msg)
        return v

    @field_validator("position")
    @classmethod
    def _validate_position(cls, v: str, info: ValidationInfo) -> str:
        return check_position(v, info)
