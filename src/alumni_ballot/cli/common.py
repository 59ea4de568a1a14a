"""Shared helpers for CLI commands: wiring and notice rendering."""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

import typer
from pydantic import ValidationError

from alumni_ballot.schemas.common import NoticeLevel, Outcome, View
from alumni_ballot.services.feedback import validation_messages

if TYPE_CHECKING:
    from alumni_ballot.core.config import Settings
    from alumni_ballot.core.storage import TokenStorage
    from alumni_ballot.schemas.candidate import Candidate, CandidateGroup

_LEVEL_COLORS = {
    NoticeLevel.SUCCESS: typer.colors.GREEN,
    NoticeLevel.INFO: typer.colors.BLUE,
    NoticeLevel.WARNING: typer.colors.YELLOW,
    NoticeLevel.ERROR: typer.colors.RED,
}

VIEW_COMMANDS: dict[View, str] = {
    View.HOME: "alumni-ballot",
    View.VOTE: "alumni-ballot vote ballot",
    View.REGISTER: "alumni-ballot register",
    View.COMMITTEE_LOGIN: "alumni-ballot committee login",
    View.COMMITTEE_SIGNUP: "alumni-ballot committee signup",
    View.COMMITTEE_DASHBOARD: "alumni-ballot committee dashboard",
}


def token_storage(settings: Settings) -> TokenStorage:
    """Build the file-backed token store named by the settings."""
    from alumni_ballot.core.storage import FileTokenStorage

    return FileTokenStorage(settings.token_file)


def echo_outcome(outcome: Outcome, *, exit_on_failure: bool = True) -> None:
    """Print an outcome's notice and redirect hint; exit 1 when it failed."""
    if outcome.notice is not None:
        label = outcome.notice.level.value.upper()
        styled = typer.style(f"{label:<7}", fg=_LEVEL_COLORS[outcome.notice.level], bold=True)
        typer.echo(f"{styled} {outcome.notice.message}", err=outcome.notice.level is NoticeLevel.ERROR)
    if outcome.redirect is not None:
        typer.echo(f"Next: {VIEW_COMMANDS[outcome.redirect]}")
    if not outcome.ok and (exit_on_failure or outcome.redirect is not None):
        raise typer.Exit(code=1)


def echo_validation_error(exc: ValidationError) -> NoReturn:
    """Print each failing field and exit 1."""
    for line in validation_messages(exc):
        typer.echo(typer.style(f"  {line}", fg=typer.colors.RED), err=True)
    raise typer.Exit(code=1)


def format_candidate(candidate: Candidate, *, votes: bool = False) -> str:
    text = f"{candidate.name} <{candidate.email}> [{candidate.id}]"
    if votes:
        text += f" - {candidate.vote_count} vote(s)"
    return text


def echo_groups(groups: CandidateGroup) -> None:
    """Print candidates grouped by position."""
    if not groups:
        typer.echo("No candidates yet.")
        return
    for position, candidates in groups.items():
        typer.echo(typer.style(position, bold=True))
        if not candidates:
            typer.echo("  No candidates available for this position")
        for candidate in candidates:
            typer.echo(f"  - {format_candidate(candidate)}")
