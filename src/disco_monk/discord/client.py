"""Discord API client wrapper."""

from __future__ import annotations

import asyncio
import contextlib
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import discord

from ..config import StartupError
from ..logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable, Coroutine

    MessageHandler = Callable[[discord.Message], Coroutine[Any, Any, Any]]

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class SentMessage:
    """Result of sending a message."""

    message_id: int
    channel_id: int


@dataclass(frozen=True, slots=True)
class BotIdentity:
    """The bot's own application id, used to recognise mentions."""

    bot_id: int


class DiscordBotClient:
    """Wrapper around the Pycord bot for disco-monk."""

    def __init__(self, token: str) -> None:
        self._token = token
        self._message_handler: MessageHandler | None = None
        # Defer bot creation until inside async context
        self._bot: discord.Bot | None = None
        self._ready_event: asyncio.Event | None = None
        self._start_task: asyncio.Task[None] | None = None

    def _ensure_bot(self) -> discord.Bot:
        """Create the bot if not already created. Must be called from async context."""
        if self._bot is not None:
            return self._bot

        intents = discord.Intents.default()
        intents.message_content = True
        intents.guilds = True
        intents.messages = True

        self._bot = discord.Bot(intents=intents)
        self._ready_event = asyncio.Event()

        @self._bot.event
        async def on_ready() -> None:
            assert self._ready_event is not None
            self._ready_event.set()

        @self._bot.event
        async def on_message(message: discord.Message) -> None:
            await self._on_message(message)

        return self._bot

    async def _on_message(self, message: discord.Message) -> None:
        if self._bot is not None and message.author == self._bot.user:
            return
        if self._message_handler is not None:
            await self._message_handler(message)

    def set_message_handler(self, handler: MessageHandler) -> None:
        """Set the message handler."""
        self._message_handler = handler

    async def start(self) -> None:
        """Start the bot and wait until ready.

        Raises StartupError if the connection ends before the bot is ready,
        e.g. because the token was rejected.
        """
        bot = self._ensure_bot()
        assert self._ready_event is not None

        async def _run_bot() -> None:
            try:
                await bot.start(self._token)
            except asyncio.CancelledError:
                pass
            except RuntimeError as e:
                # Suppress "Session is closed" error during shutdown
                if "Session is closed" not in str(e):
                    raise

        self._start_task = asyncio.create_task(_run_bot(), name="discord-bot-start")
        ready_task = asyncio.create_task(self._ready_event.wait(), name="discord-ready")
        done, _ = await asyncio.wait(
            {self._start_task, ready_task},
            return_when=asyncio.FIRST_COMPLETED,
        )
        if ready_task in done:
            return

        ready_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await ready_task
        exc = self._start_task.exception()
        if exc is not None:
            raise StartupError(f"Could not connect to Discord: {exc}") from exc
        raise StartupError("Discord connection closed before the bot was ready.")

    async def wait_closed(self) -> None:
        """Block until the gateway connection ends."""
        if self._start_task is not None:
            await self._start_task

    async def close(self) -> None:
        """Close the bot connection."""
        if self._bot is not None:
            await self._bot.close()
            # Cancel the start task and wait for it to finish
            if self._start_task is not None and not self._start_task.done():
                self._start_task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await self._start_task

    async def fetch_identity(self) -> BotIdentity:
        """Fetch the application id of the logged-in bot."""
        bot = self._ensure_bot()
        try:
            info = await bot.application_info()
        except discord.HTTPException as e:
            logger.error("identity.fetch_failed", error=str(e))
            raise StartupError(f"Could not access application info: {e}") from e

        return BotIdentity(bot_id=info.id)

    async def reply(self, message: discord.Message, content: str) -> SentMessage | None:
        """Reply to a message in its channel."""
        try:
            sent = await message.reply(content)
        except discord.HTTPException as e:
            logger.error(
                "reply.failed",
                channel_id=message.channel.id,
                error=str(e),
                status=getattr(e, "status", None),
            )
            return None
        return SentMessage(message_id=sent.id, channel_id=sent.channel.id)

    async def edit_member_roles(
        self,
        member: discord.Member,
        roles: Sequence[discord.Role],
        *,
        reason: str | None = None,
    ) -> bool:
        """Replace a member's roles in one edit call."""
        try:
            await member.edit(roles=list(roles), reason=reason)
        except discord.HTTPException as e:
            logger.debug(
                "member_edit.failed",
                member_id=member.id,
                error=str(e),
                status=getattr(e, "status", None),
            )
            return False
        return True
