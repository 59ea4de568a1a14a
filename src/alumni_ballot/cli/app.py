"""Typer CLI root application with the landing view."""

import typer

from alumni_ballot.core.config import get_settings
from alumni_ballot.core.logging import setup_logging

app = typer.Typer(name="alumni-ballot", help="Alumni association committee election client")


@app.callback(invoke_without_command=True)
def _main_callback(ctx: typer.Context) -> None:
    """Initialize logging for all CLI commands and show the landing view."""
    settings = get_settings()
    setup_logging(settings.log_level, log_dir=settings.log_dir, json_logs=settings.log_json)
    if ctx.invoked_subcommand is not None:
        return

    typer.echo(typer.style("Welcome to the Alumni Election Portal", bold=True))
    typer.echo("Join the alumni election by registering as a candidate or voting for your preferred candidates.\n")
    typer.echo("  alumni-ballot register       Register as a candidate")
    typer.echo("  alumni-ballot vote ballot    Vote for a candidate in every position")
    typer.echo("  alumni-ballot candidates list See who is running")
    typer.echo("  alumni-ballot committee      Election committee login and dashboard")


def _register_subcommands() -> None:
    """Register all CLI subcommand groups."""
    from alumni_ballot.cli.candidates_cmd import candidates_app
    from alumni_ballot.cli.committee_cmd import committee_app
    from alumni_ballot.cli.register_cmd import register
    from alumni_ballot.cli.vote_cmd import vote_app

    app.add_typer(candidates_app, name="candidates", help="Candidate listing commands")
    app.add_typer(vote_app, name="vote", help="Voting commands")
    app.add_typer(committee_app, name="committee", help="Election committee commands")
    app.command("register")(register)


_register_subcommands()
