from __future__ import annotations

from .handlers import drop, join, list_roles, loop_sound, ping, play, pong
from .help import HELP_COMMAND_NAME, help_command
from .parse import Invocation, parse_invocation, split_args
from .registry import Command, CommandContext, CommandHandler, CommandTable

__all__ = [
    "Command",
    "CommandContext",
    "CommandHandler",
    "CommandTable",
    "Invocation",
    "build_command_table",
    "parse_invocation",
    "split_args",
]


def build_command_table() -> CommandTable:
    return CommandTable.from_commands(
        [
            Command("ping", ping, description="Replies with Pong!"),
            Command("pong", pong, description="Replies with Ping!"),
            Command(
                "list",
                list_roles,
                description="Lists the roles you can join.",
                usage="list [roles]",
                subcommands=(
                    Command(
                        "roles",
                        list_roles,
                        description="Lists the roles you can join.",
                        usage="list roles",
                    ),
                ),
            ),
            Command(
                "join",
                join,
                description="Joins one or more of the listed roles.",
                usage="join <role>, <role>...",
            ),
            Command(
                "drop",
                drop,
                description="Leaves one or more of the listed roles.",
                usage="drop <role>, <role>...",
            ),
            Command("play", play, description="Plays a sound. Not implemented yet."),
            Command(
                "loop_sound",
                loop_sound,
                description="Loops a sound. Not implemented yet.",
            ),
            Command(
                HELP_COMMAND_NAME,
                help_command,
                description="Shows the available commands.",
                usage="help [command]",
            ),
        ]
    )
