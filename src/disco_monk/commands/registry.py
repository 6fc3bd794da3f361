from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..config import BotConfig
    from ..discord.client import DiscordBotClient, SentMessage


@dataclass(frozen=True, slots=True)
class CommandContext:
    """Everything a handler gets to see for one invocation."""

    message: Any
    command: str
    args_text: str
    args: tuple[str, ...]
    config: BotConfig
    client: DiscordBotClient
    commands: CommandTable

    async def reply(self, content: str) -> SentMessage | None:
        return await self.client.reply(self.message, content)


CommandHandler = Callable[[CommandContext], Awaitable[None]]


@dataclass(frozen=True, slots=True)
class Command:
    name: str
    handler: CommandHandler
    description: str = ""
    usage: str | None = None
    subcommands: tuple[Command, ...] = ()

    def subcommand(self, name: str) -> Command | None:
        for sub in self.subcommands:
            if sub.name == name:
                return sub
        return None


@dataclass(frozen=True, slots=True)
class CommandTable(Mapping[str, Command]):
    group: str = "General"
    _commands: dict[str, Command] = field(default_factory=dict)

    @classmethod
    def from_commands(
        cls, commands: list[Command], *, group: str = "General"
    ) -> CommandTable:
        table: dict[str, Command] = {}
        for command in commands:
            if command.name in table:
                raise ValueError(f"duplicate command name {command.name!r}")
            table[command.name] = command
        return cls(group=group, _commands=table)

    def __getitem__(self, name: str) -> Command:
        return self._commands[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._commands)

    def __len__(self) -> int:
        return len(self._commands)

    def names(self) -> list[str]:
        return list(self._commands)
