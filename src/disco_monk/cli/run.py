from __future__ import annotations

from functools import partial
from typing import NoReturn

import anyio
import typer

from .. import __version__
from ..config import BotConfig, ConfigError, StartupError
from ..discord.client import DiscordBotClient
from ..discord.loop import run_main_loop
from ..logging import get_logger, setup_logging
from ..settings import load_settings

logger = get_logger(__name__)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


def _fail(exc: Exception) -> NoReturn:
    lines = str(exc).splitlines() or ["unknown error"]
    typer.echo(f"error: {lines[0]}", err=True)
    if len(lines) > 1:
        typer.echo("\n".join(lines[1:]), err=True)
    raise typer.Exit(code=1) from exc


def run_bot(*, debug: bool, json_logs: bool) -> None:
    setup_logging(debug=debug, json=json_logs)
    try:
        settings = load_settings()
    except ConfigError as exc:
        logger.error("startup.config_error", error=str(exc))
        _fail(exc)

    config = BotConfig.from_settings(settings)
    client = DiscordBotClient(settings.token_value())
    logger.info("startup.begin", prefix=config.prefix)
    try:
        anyio.run(partial(run_main_loop, config, client))
    except StartupError as exc:
        logger.error("startup.failed", error=str(exc))
        _fail(exc)
    except KeyboardInterrupt:
        logger.info("shutdown.interrupted")


def app_main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        help="Show the version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    debug: bool = typer.Option(
        False,
        "--debug/--no-debug",
        help="Log every parsed command and failed API call.",
    ),
    json_logs: bool = typer.Option(
        False,
        "--json-logs/--console-logs",
        help="Write logs as JSON lines instead of console output.",
    ),
) -> None:
    """Disco Monk Discord bot."""
    if ctx.invoked_subcommand is None:
        run_bot(debug=debug, json_logs=json_logs)
        raise typer.Exit()
