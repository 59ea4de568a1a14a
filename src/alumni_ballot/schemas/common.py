"""Common Pydantic v2 schemas shared across the client.

Provides user-facing notices and the named views a command can redirect to.
"""

import enum

from pydantic import BaseModel, Field


class NoticeLevel(enum.StrEnum):
    """Severity of a user-facing notice."""

    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class View(enum.StrEnum):
    """Named screens of the election client."""

    HOME = "home"
    VOTE = "vote"
    REGISTER = "register"
    COMMITTEE_LOGIN = "committee_login"
    COMMITTEE_SIGNUP = "committee_signup"
    COMMITTEE_DASHBOARD = "committee_dashboard"


class Notice(BaseModel):
    """A transient message shown to the user after an interaction."""

    level: NoticeLevel
    message: str = Field(description="Human-readable message")

    @classmethod
    def success(cls, message: str) -> "Notice":
        return cls(level=NoticeLevel.SUCCESS, message=message)

    @classmethod
    def info(cls, message: str) -> "Notice":
        return cls(level=NoticeLevel.INFO, message=message)

    @classmethod
    def warning(cls, message: str) -> "Notice":
        return cls(level=NoticeLevel.WARNING, message=message)

    @classmethod
    def error(cls, message: str) -> "Notice":
        return cls(level=NoticeLevel.ERROR, message=message)


class Outcome(BaseModel):
    """Result of a user interaction: an optional notice and an optional redirect."""

    ok: bool
    notice: Notice | None = None
    redirect: View | None = None
