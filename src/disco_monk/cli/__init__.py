from __future__ import annotations

import typer

from ..commands import build_command_table
from .doctor import DoctorCheck, doctor, settings_checks
from .run import app_main, run_bot

__all__ = ["DoctorCheck", "create_app", "main", "run_bot", "settings_checks"]


def commands_cmd() -> None:
    """List the chat commands the bot answers to."""
    table = build_command_table()
    typer.echo(f"{table.group}:")
    for name, command in table.items():
        usage = command.usage or name
        typer.echo(f"  {usage:<26} {command.description}")
        for sub in command.subcommands:
            sub_usage = sub.usage or sub.name
            typer.echo(f"  {sub_usage:<26} {sub.description}")


def create_app() -> typer.Typer:
    app = typer.Typer(
        add_completion=False,
        invoke_without_command=True,
        help="Disco Monk: a small Discord bot for greetings and self-assigned roles.",
    )
    app.command(name="commands")(commands_cmd)
    app.command(name="doctor")(doctor)
    app.callback()(app_main)
    return app


def main() -> None:
    app = create_app()
    app()


if __name__ == "__main__":
    main()
