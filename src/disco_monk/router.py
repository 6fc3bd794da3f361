"""Prefix and mention based command dispatch."""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING, Any

from .commands import (
    Command,
    CommandContext,
    CommandTable,
    Invocation,
    parse_invocation,
    split_args,
)
from .logging import bind_message_context, clear_context, get_logger

if TYPE_CHECKING:
    from .config import BotConfig
    from .discord.client import DiscordBotClient

logger = get_logger(__name__)

UNKNOWN_COMMAND_TEXT = "bzzz... don't know that one :pensive:"


class CommandRouter:
    """Route inbound messages to the handler registered for their command."""

    def __init__(
        self,
        config: BotConfig,
        *,
        client: DiscordBotClient,
        commands: CommandTable,
    ) -> None:
        self._config = config
        self._client = client
        self._commands = commands
        self.invocations: Counter[str] = Counter()

    @property
    def config(self) -> BotConfig:
        return self._config

    @property
    def commands(self) -> CommandTable:
        return self._commands

    def parse(self, content: str) -> Invocation | None:
        return parse_invocation(
            content,
            prefix=self._config.prefix,
            bot_id=self._config.bot_id,
            allow_whitespace=self._config.allow_whitespace,
        )

    def resolve(self, invocation: Invocation) -> tuple[Command, str] | None:
        """Find the command for an invocation, descending into sub-commands."""
        command = self._commands.get(invocation.name)
        if command is None:
            return None
        args_text = invocation.args_text
        while command.subcommands and args_text:
            head, *tail = args_text.split(None, 1)
            sub = command.subcommand(head)
            if sub is None:
                break
            command, args_text = sub, tail[0].strip() if tail else ""
        return command, args_text

    async def dispatch(self, message: Any) -> bool:
        """Handle one inbound message. Returns True if a command ran."""
        if message.author.bot:
            return False
        invocation = self.parse(message.content or "")
        if invocation is None:
            return False

        guild = message.guild
        bind_message_context(
            guild_id=guild.id if guild is not None else None,
            channel_id=message.channel.id,
            author_id=message.author.id,
            command=invocation.name,
        )
        try:
            resolved = self.resolve(invocation)
            if resolved is None:
                await self._unrecognised(message, invocation)
                return False
            command, args_text = resolved
            await self._invoke(message, command, args_text)
            return True
        finally:
            clear_context()

    async def _invoke(self, message: Any, command: Command, args_text: str) -> None:
        self.invocations[command.name] += 1
        logger.info(
            "router.dispatch",
            command=command.name,
            count=self.invocations[command.name],
        )
        ctx = CommandContext(
            message=message,
            command=command.name,
            args_text=args_text,
            args=split_args(args_text, self._config.delimiters),
            config=self._config,
            client=self._client,
            commands=self._commands,
        )
        try:
            await command.handler(ctx)
        except Exception as exc:
            logger.exception(
                "command.failed",
                command=command.name,
                error=str(exc),
                error_type=exc.__class__.__name__,
            )

    async def _unrecognised(self, message: Any, invocation: Invocation) -> None:
        logger.debug(
            "router.unrecognised",
            command=invocation.name,
            via_prefix=invocation.via_prefix,
        )
        if not invocation.via_prefix:
            return
        await self._client.reply(message, UNKNOWN_COMMAND_TEXT)
