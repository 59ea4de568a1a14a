"""CLI commands for casting votes.

``ballot`` walks the voter through every position and submits the full
ballot in one request; ``single`` submits one vote for one position.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Annotated

import typer

from alumni_ballot.cli.common import echo_outcome, format_candidate, token_storage

if TYPE_CHECKING:
    from alumni_ballot.lib.ballot.form import BallotForm

vote_app = typer.Typer()


@vote_app.command("ballot")
def ballot(
    name: Annotated[str, typer.Option("--name", prompt="Your name", help="Voter full name")],
    email: Annotated[str, typer.Option("--email", prompt="Your email", help="Voter email address")],
    choice: Annotated[
        list[str] | None,
        typer.Option("--choice", help="POSITION=CANDIDATE_ID (repeatable); prompts are skipped when given"),
    ] = None,
) -> None:
    """Vote for one candidate in every position."""
    asyncio.run(_ballot_impl(name, email, choice or [], interactive=not choice))


def _parse_choice(raw: str) -> tuple[str, str]:
    position, sep, candidate_id = raw.partition("=")
    if not sep or not position.strip() or not candidate_id.strip():
        msg = f"Invalid choice {raw!r}; expected POSITION=CANDIDATE_ID"
        raise typer.BadParameter(msg, param_hint="--choice")
    return position.strip(), candidate_id.strip()


def _echo_progress(form: BallotForm) -> None:
    progress = form.progress
    typer.echo(f"Progress: {progress.selected}/{progress.total} positions selected ({progress.percent}%)")


def _prompt_selections(form: BallotForm) -> None:
    """Ask for a candidate for every position that has no selection yet."""
    for position, candidates in form.candidates.items():
        if not candidates:
            typer.echo(f"{position}: no candidates available for this position")
            continue
        if form.selections.get(position):
            continue
        typer.echo(typer.style(position, bold=True))
        for index, candidate in enumerate(candidates, start=1):
            typer.echo(f"  {index}. {format_candidate(candidate)}")
        while True:
            picked = typer.prompt(f"Choose a candidate for {position}", type=int)
            if 1 <= picked <= len(candidates):
                break
            typer.echo(f"Please enter a number between 1 and {len(candidates)}")
        form.select(position, candidates[picked - 1].id)
        _echo_progress(form)


async def _ballot_impl(name: str, email: str, choices: list[str], *, interactive: bool) -> None:
    """Async implementation of the ballot command."""
    from alumni_ballot.core.config import get_settings
    from alumni_ballot.lib.backend.client import BackendClient
    from alumni_ballot.lib.ballot.form import BallotForm
    from alumni_ballot.services.candidate_service import CandidateBoard
    from alumni_ballot.services.vote_service import submit_ballot

    parsed = [_parse_choice(raw) for raw in choices]
    settings = get_settings()
    async with BackendClient(settings, token_storage(settings)) as client:
        board = CandidateBoard(client, settings.position_list)
        loaded = await board.load()
        if not loaded.ok:
            echo_outcome(loaded)
        if not board.candidates:
            typer.echo("No candidates yet.")
            raise typer.Exit(code=1)

        form = BallotForm(candidates=board.groups, voter_name=name, voter_email=email)
        for position, candidate_id in parsed:
            try:
                form.select(position, candidate_id)
            except KeyError as exc:
                msg = f"Unknown position {position!r}"
                raise typer.BadParameter(msg, param_hint="--choice") from exc
            except ValueError as exc:
                raise typer.BadParameter(str(exc), param_hint="--choice") from exc

        if interactive:
            _echo_progress(form)
            _prompt_selections(form)

        outcome = await submit_ballot(client, form, settings.duplicate_vote_marker)
    echo_outcome(outcome)


@vote_app.command("single")
def single(
    email: Annotated[str, typer.Option("--email", help="Voter email address")],
    position: Annotated[str, typer.Option("--position", help="Committee position")],
    candidate_id: Annotated[str, typer.Option("--candidate-id", help="Candidate identifier")],
) -> None:
    """Vote for one candidate in one position."""
    asyncio.run(_single_impl(email, position, candidate_id))


async def _single_impl(email: str, position: str, candidate_id: str) -> None:
    """Async implementation of the single command."""
    from alumni_ballot.core.config import get_settings
    from alumni_ballot.lib.backend.client import BackendClient
    from alumni_ballot.services.candidate_service import CandidateBoard
    from alumni_ballot.services.vote_service import SingleVoteForm, submit_single_vote

    settings = get_settings()
    async with BackendClient(settings, token_storage(settings)) as client:
        board = CandidateBoard(client, settings.position_list)
        loaded = await board.load()
        if not loaded.ok:
            echo_outcome(loaded)
        form = SingleVoteForm(voter_email=email, position=position, candidate_id=candidate_id)
        outcome = await submit_single_vote(client, form, board.groups, settings.position_list)
    echo_outcome(outcome)
