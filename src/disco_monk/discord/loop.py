"""Main event loop for the Discord bot."""

from __future__ import annotations

from dataclasses import replace

from ..commands import CommandTable, build_command_table
from ..config import BotConfig
from ..logging import get_logger
from ..router import CommandRouter
from .client import DiscordBotClient

logger = get_logger(__name__)

__all__ = ["build_router", "run_main_loop"]


async def build_router(
    config: BotConfig,
    client: DiscordBotClient,
    *,
    commands: CommandTable | None = None,
) -> CommandRouter:
    """Resolve the bot's identity and wire a router into the client."""
    identity = await client.fetch_identity()
    config = replace(config, bot_id=identity.bot_id)
    router = CommandRouter(
        config,
        client=client,
        commands=commands if commands is not None else build_command_table(),
    )
    client.set_message_handler(router.dispatch)
    return router


async def run_main_loop(config: BotConfig, client: DiscordBotClient) -> None:
    """Connect, serve commands until the connection closes, then clean up."""
    try:
        await client.start()
        router = await build_router(config, client)
        logger.info(
            "loop.ready",
            bot_id=router.config.bot_id,
            prefix=router.config.prefix,
            commands=router.commands.names(),
            joinable_roles=list(router.config.joinable_roles),
        )
        await client.wait_closed()
    finally:
        await client.close()
        logger.info("loop.closed")
