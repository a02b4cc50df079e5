"""Main CLI application module."""

import typer

from .db_commands import db_app
from .identity_commands import identity_app
from .serve_commands import serve

app = typer.Typer(
    help="authbridge CLI - identity and tenant resolution",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.add_typer(identity_app, name="identity")
app.add_typer(db_app, name="db")
app.command("serve")(serve)


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
