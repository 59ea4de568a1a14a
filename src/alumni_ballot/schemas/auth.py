"""Committee authentication Pydantic v2 schemas.

Defines the login/signup request bodies and the display-only identity shown
for an authenticated committee session.
"""

from pydantic import BaseModel, EmailStr, Field


class LoginRequest(BaseModel):
    """Committee login credentials."""

    email: EmailStr
    surname: str = Field(min_length=1, description="Surname, used as the committee passphrase")


class SignupRequest(BaseModel):
    """Committee account bootstrap request."""

    email: EmailStr
    surname: str = Field(min_length=1)


class DisplayIdentity(BaseModel):
    """Who the session belongs to, for greeting text only."""

    email: str
    surname: str | None = None

    @property
    def greeting_name(self) -> str:
        return self.surname or self.email
