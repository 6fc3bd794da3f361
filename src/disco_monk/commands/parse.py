from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Invocation:
    name: str
    args_text: str
    via_prefix: bool


def mention_forms(bot_id: int) -> tuple[str, str]:
    return f"<@{bot_id}>", f"<@!{bot_id}>"


def _strip_mention(text: str, bot_id: int | None) -> str | None:
    if bot_id is None:
        return None
    for form in mention_forms(bot_id):
        if text.startswith(form):
            return text[len(form) :]
    return None


def _split_name(rest: str) -> tuple[str, str] | None:
    parts = rest.split(None, 1)
    if not parts:
        return None
    name = parts[0]
    args_text = parts[1].strip() if len(parts) > 1 else ""
    return name, args_text


def parse_invocation(
    text: str,
    *,
    prefix: str,
    bot_id: int | None,
    allow_whitespace: bool = True,
) -> Invocation | None:
    """Extract the command name and argument text from a message.

    A leading mention of the bot counts as a trigger just like the prefix.
    Returns None when the message is not addressed to the bot.
    """
    stripped = text.lstrip()
    rest = _strip_mention(stripped, bot_id)
    if rest is not None:
        split = _split_name(rest)
        if split is None:
            return None
        return Invocation(name=split[0], args_text=split[1], via_prefix=False)

    if not prefix or not stripped.startswith(prefix):
        return None
    rest = stripped[len(prefix) :]
    if not allow_whitespace and rest[:1].isspace():
        return None
    split = _split_name(rest)
    if split is None:
        return None
    return Invocation(name=split[0], args_text=split[1], via_prefix=True)


def split_args(args_text: str, delimiters: Iterable[str]) -> tuple[str, ...]:
    ordered = sorted({d for d in delimiters if d}, key=len, reverse=True)
    if not args_text.strip():
        return ()
    if not ordered:
        return (args_text.strip(),)
    pattern = "|".join(re.escape(d) for d in ordered)
    pieces = (piece.strip() for piece in re.split(pattern, args_text))
    return tuple(piece for piece in pieces if piece)
