"""Auto-generated help for the registered command table."""

from __future__ import annotations

from .registry import Command, CommandContext, CommandTable
from .suggest import suggest_commands

INDIVIDUAL_COMMAND_TIP = (
    "Hello! こんにちは！Hola! Bonjour! 您好!\n"
    "If you want more information about a specific command, "
    "just pass the command as argument."
)
COMMAND_NOT_FOUND_TEXT = "Could not find: `{}`."
SUGGESTION_TEXT = "Did you mean {}?"
HELP_COMMAND_NAME = "help"


def render_overview(commands: CommandTable) -> str:
    names = [name for name in commands if name != HELP_COMMAND_NAME]
    listing = " ".join(f"`{name}`" for name in names)
    return f"{INDIVIDUAL_COMMAND_TIP}\n\n**{commands.group}**\n{listing}"


def render_command(command: Command, *, prefix: str) -> str:
    lines = [f"**{command.name}**"]
    if command.description:
        lines.append(command.description)
    usage = command.usage or command.name
    lines.append(f"Usage: `{prefix}{usage}`")
    if command.subcommands:
        subs = " ".join(f"`{sub.name}`" for sub in command.subcommands)
        lines.append(f"Sub-commands: {subs}")
    return "\n".join(lines)


def render_not_found(name: str, commands: CommandTable) -> str:
    suggestions = suggest_commands(name, commands.names())
    if suggestions:
        return SUGGESTION_TEXT.format(", ".join(f"`{s}`" for s in suggestions))
    return COMMAND_NOT_FOUND_TEXT.format(name)


def render_help(args_text: str, commands: CommandTable, *, prefix: str) -> str:
    query = args_text.strip()
    if not query:
        return render_overview(commands)
    name = query.split(None, 1)[0]
    if name.startswith(prefix):
        name = name[len(prefix) :]
    command = commands.get(name)
    if command is None:
        return render_not_found(name, commands)
    return render_command(command, prefix=prefix)


async def help_command(ctx: CommandContext) -> None:
    text = render_help(ctx.args_text, ctx.commands, prefix=ctx.config.prefix)
    await ctx.reply(text)
