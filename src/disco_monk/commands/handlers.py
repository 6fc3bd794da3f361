"""Handlers for the General command group."""

from __future__ import annotations

import json
from collections.abc import Iterable

import discord

from ..logging import get_logger
from .registry import CommandContext

logger = get_logger(__name__)

JOIN_REASON = "self-assigned via join command"


def format_names(names: Iterable[str], *, pretty: bool = False) -> str:
    """Render role names as a JSON list, e.g. ``["politics", "makers"]``."""
    if pretty:
        return json.dumps(list(names), indent=4, ensure_ascii=False)
    return json.dumps(list(names), ensure_ascii=False)


async def ping(ctx: CommandContext) -> None:
    await ctx.reply("Pong!")


async def pong(ctx: CommandContext) -> None:
    await ctx.reply("Ping!")


async def list_roles(ctx: CommandContext) -> None:
    await ctx.reply(format_names(ctx.config.joinable_roles, pretty=True))


async def join(ctx: CommandContext) -> None:
    guild = ctx.message.guild
    if guild is None:
        logger.debug("join.skipped", reason="not in guild")
        return

    matched: list[discord.Role] = []
    for name in ctx.args:
        role = discord.utils.get(guild.roles, name=name)
        if role is None:
            logger.debug("join.role_not_found", role=name)
            continue
        if not ctx.config.is_joinable(name):
            logger.debug("join.role_not_joinable", role=name)
            continue
        if any(existing.id == role.id for existing in matched):
            continue
        matched.append(role)

    if not matched:
        return

    member = ctx.message.author
    current = [role for role in member.roles if not role.is_default()]
    held = {role.id for role in current}
    target = current + [role for role in matched if role.id not in held]

    edited = await ctx.client.edit_member_roles(member, target, reason=JOIN_REASON)
    if not edited:
        return
    await ctx.reply(format_names(role.name for role in matched))


async def drop(ctx: CommandContext) -> None:
    # membership is not checked and the role is never revoked
    for name in ctx.args:
        if ctx.config.is_joinable(name):
            await ctx.reply(f"Leaving {name}")


async def play(ctx: CommandContext) -> None:
    logger.debug("play.unimplemented", args=ctx.args_text)


async def loop_sound(ctx: CommandContext) -> None:
    logger.debug("loop_sound.unimplemented", args=ctx.args_text)
