"""CLI command for candidate registration."""

import asyncio
from typing import Annotated

import typer

from alumni_ballot.cli.common import echo_outcome, token_storage


def register(
    name: Annotated[str | None, typer.Option("--name", help="Candidate full name")] = None,
    email: Annotated[str | None, typer.Option("--email", help="Candidate email address")] = None,
    position: Annotated[str | None, typer.Option("--position", help="Committee position to run for")] = None,
) -> None:
    """Register as a candidate for a committee position."""
    from alumni_ballot.core.config import get_settings
    from alumni_ballot.services.registration_service import (
        REGISTRATION_CLOSED_CONTACT,
        closed_outcome,
    )

    settings = get_settings()
    if not settings.registration_open:
        closed = closed_outcome()
        typer.echo(typer.style("Registration Closed", bold=True))
        echo_outcome(closed.model_copy(update={"ok": True}))
        typer.echo(REGISTRATION_CLOSED_CONTACT)
        raise typer.Exit(code=0)

    positions = settings.position_list
    if name is None:
        name = typer.prompt("Name")
    if email is None:
        email = typer.prompt("Email")
    if position is None:
        for index, option in enumerate(positions, start=1):
            typer.echo(f"  {index}. {option}")
        picked = typer.prompt("Position number", type=int)
        position = positions[picked - 1] if 1 <= picked <= len(positions) else str(picked)

    asyncio.run(_register_impl(name, email, position))


async def _register_impl(name: str, email: str, position: str) -> None:
    """Async implementation of the register command."""
    from alumni_ballot.core.config import get_settings
    from alumni_ballot.lib.backend.client import BackendClient
    from alumni_ballot.services.registration_service import RegistrationForm, register_candidate

    settings = get_settings()
    form = RegistrationForm(name=name, email=email, position=position)
    async with BackendClient(settings, token_storage(settings)) as client:
        outcome = await register_candidate(client, settings, form)
    echo_outcome(outcome)
