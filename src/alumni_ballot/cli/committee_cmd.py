"""CLI commands for the election committee.

Account signup, session login/logout and the vote-tally dashboard.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Annotated

import typer
from pydantic import ValidationError

from alumni_ballot.cli.common import echo_outcome, echo_validation_error, format_candidate, token_storage

if TYPE_CHECKING:
    from alumni_ballot.services.dashboard_service import CommitteeDashboard

committee_app = typer.Typer()


@committee_app.command("signup")
def signup(
    email: Annotated[str, typer.Option("--email", prompt=True, help="Committee member email")],
    surname: Annotated[str, typer.Option("--surname", prompt=True, help="Committee member surname")],
) -> None:
    """Create a committee account."""
    asyncio.run(_signup_impl(email, surname))


async def _signup_impl(email: str, surname: str) -> None:
    """Async implementation of the signup command."""
    from alumni_ballot.core.config import get_settings
    from alumni_ballot.lib.backend.client import BackendClient
    from alumni_ballot.services import auth_service

    settings = get_settings()
    async with BackendClient(settings, token_storage(settings)) as client:
        try:
            outcome = await auth_service.signup(client, email, surname)
        except ValidationError as exc:
            echo_validation_error(exc)
    echo_outcome(outcome)


@committee_app.command("login")
def login(
    email: Annotated[str, typer.Option("--email", prompt=True, help="Committee member email")],
    surname: Annotated[
        str, typer.Option("--surname", prompt=True, hide_input=True, help="Committee member surname")
    ],
) -> None:
    """Log in and store the committee session token."""
    asyncio.run(_login_impl(email, surname))


async def _login_impl(email: str, surname: str) -> None:
    """Async implementation of the login command."""
    from alumni_ballot.core.config import get_settings
    from alumni_ballot.lib.backend.client import BackendClient
    from alumni_ballot.services.auth_service import CommitteeSession, LoginError

    settings = get_settings()
    storage = token_storage(settings)
    session = CommitteeSession(storage)
    async with BackendClient(settings, storage) as client:
        try:
            user = await session.login(client, email, surname)
        except ValidationError as exc:
            echo_validation_error(exc)
        except LoginError as exc:
            typer.echo(typer.style(f"Error: {exc.message}", fg=typer.colors.RED), err=True)
            raise typer.Exit(code=1) from exc
    typer.echo(typer.style("Login successful!", fg=typer.colors.GREEN, bold=True))
    typer.echo(f"Welcome, {user.greeting_name}.")
    typer.echo("Next: alumni-ballot committee dashboard")


@committee_app.command("logout")
def logout() -> None:
    """Forget the stored committee session."""
    from alumni_ballot.core.config import get_settings
    from alumni_ballot.services.auth_service import CommitteeSession

    session = CommitteeSession(token_storage(get_settings()))
    session.logout()
    typer.echo("Logged out.")


@committee_app.command("whoami")
def whoami() -> None:
    """Show who the stored committee session belongs to."""
    from alumni_ballot.core.config import get_settings
    from alumni_ballot.services.auth_service import CommitteeSession

    session = CommitteeSession(token_storage(get_settings()))
    if not session.is_authenticated:
        typer.echo("Not logged in.")
        raise typer.Exit(code=1)
    if session.user is None:
        typer.echo("Logged in.")
        return
    surname = f" ({session.user.surname})" if session.user.surname else ""
    typer.echo(f"Logged in as {session.user.email}{surname}")


def _echo_dashboard(dashboard: CommitteeDashboard) -> None:
    summary = dashboard.summary
    typer.echo(typer.style("Election Results Dashboard", bold=True))
    typer.echo(
        f"Candidates: {summary.total_candidates} | "
        f"Total votes: {summary.total_votes} | "
        f"Positions: {summary.total_positions}"
    )
    if dashboard.last_updated is not None:
        typer.echo(f"Last updated: {dashboard.last_updated:%Y-%m-%d %H:%M:%S} UTC")
    if not dashboard.results:
        typer.echo("No candidates yet.")
        return
    for result in dashboard.results:
        typer.echo("")
        typer.echo(typer.style(f"{result.position} ({result.total_votes} votes)", bold=True))
        for candidate in result.candidates:
            line = f"  - {format_candidate(candidate, votes=True)}"
            if result.leader is not None and candidate.id == result.leader.id:
                line += " " + typer.style("LEADING", fg=typer.colors.GREEN, bold=True)
            typer.echo(line)


@committee_app.command("dashboard")
def dashboard(
    watch: Annotated[bool, typer.Option("--watch", help="Stay open and refresh on demand")] = False,
) -> None:
    """Show vote tallies grouped by position."""
    asyncio.run(_dashboard_impl(watch))


async def _dashboard_impl(watch: bool) -> None:
    """Async implementation of the dashboard command."""
    from alumni_ballot.core.config import get_settings
    from alumni_ballot.lib.backend.client import BackendClient
    from alumni_ballot.services.auth_service import CommitteeSession
    from alumni_ballot.services.dashboard_service import CommitteeDashboard

    settings = get_settings()
    storage = token_storage(settings)
    session = CommitteeSession(storage)
    async with BackendClient(settings, storage) as client:
        board = CommitteeDashboard(client, session, settings.position_list)
        typer.echo("Loading candidates...")
        echo_outcome(await board.open())
        if session.user is not None:
            typer.echo(f"Signed in as {session.user.greeting_name}")
        _echo_dashboard(board)

        while watch:
            answer = typer.prompt("[r]efresh, [q]uit", default="r").strip().lower()
            if answer.startswith("q"):
                break
            typer.echo("Refreshing...")
            outcome = await board.refresh()
            echo_outcome(outcome, exit_on_failure=False)
            _echo_dashboard(board)


@committee_app.command("candidates")
def candidates() -> None:
    """List registered candidates with their registration date."""
    asyncio.run(_candidates_impl())


async def _candidates_impl() -> None:
    """Async implementation of the candidates command."""
    from alumni_ballot.core.config import get_settings
    from alumni_ballot.lib.backend.client import BackendClient
    from alumni_ballot.services.auth_service import CommitteeSession
    from alumni_ballot.services.dashboard_service import CommitteeDashboard

    settings = get_settings()
    storage = token_storage(settings)
    session = CommitteeSession(storage)
    async with BackendClient(settings, storage) as client:
        board = CommitteeDashboard(client, session, settings.position_list)
        echo_outcome(await board.open())

    if not board.groups:
        typer.echo("No candidates yet.")
        return
    typer.echo(typer.style("Registered Candidates", bold=True))
    for group in board.groups.values():
        for candidate in group:
            created = f"{candidate.created_at:%Y-%m-%d %H:%M}" if candidate.created_at else "-"
            typer.echo(f"{candidate.name:<30} {candidate.email:<35} {candidate.position:<22} {created}")
