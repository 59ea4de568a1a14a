"""CLI command listing the candidates running for each position."""

import asyncio

import typer

from alumni_ballot.cli.common import echo_groups, echo_outcome, token_storage

candidates_app = typer.Typer()


@candidates_app.command("list")
def list_candidates() -> None:
    """List candidates grouped by position."""
    asyncio.run(_list_impl())


async def _list_impl() -> None:
    """Async implementation of the list command."""
    from alumni_ballot.core.config import get_settings
    from alumni_ballot.lib.backend.client import BackendClient
    from alumni_ballot.services.candidate_service import CandidateBoard

    settings = get_settings()
    async with BackendClient(settings, token_storage(settings)) as client:
        board = CandidateBoard(client, settings.position_list)
        outcome = await board.load()
    if not outcome.ok:
        echo_outcome(outcome)
    echo_groups(board.groups)
