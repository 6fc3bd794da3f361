from __future__ import annotations

from collections.abc import Callable, Sequence
from types import SimpleNamespace
from typing import Any

import pytest

from disco_monk.commands import CommandContext, build_command_table, split_args
from disco_monk.config import BotConfig
from disco_monk.discord.client import SentMessage

BOT_ID = 4242
AUTHOR_ID = 1001
GUILD_ID = 9000
CHANNEL_ID = 555


class FakeClient:
    def __init__(self, *, edit_ok: bool = True) -> None:
        self.edit_ok = edit_ok
        self.replies: list[tuple[Any, str]] = []
        self.edits: list[dict[str, Any]] = []

    async def reply(self, message: Any, content: str) -> SentMessage:
        self.replies.append((message, content))
        return SentMessage(message_id=len(self.replies), channel_id=message.channel.id)

    async def edit_member_roles(
        self, member: Any, roles: Sequence[Any], *, reason: str | None = None
    ) -> bool:
        self.edits.append({"member": member, "roles": list(roles), "reason": reason})
        return self.edit_ok

    @property
    def reply_texts(self) -> list[str]:
        return [content for _, content in self.replies]


def make_role(name: str, role_id: int, *, default: bool = False) -> SimpleNamespace:
    return SimpleNamespace(name=name, id=role_id, is_default=lambda: default)


EVERYONE = make_role("@everyone", GUILD_ID, default=True)
GUILD_ROLES = {
    "bot watchers": make_role("bot watchers", 1),
    "politics": make_role("politics", 2),
    "makers": make_role("makers", 3),
    "venters": make_role("venters", 4),
    "moderators": make_role("moderators", 5),
    "regulars": make_role("regulars", 6),
}


@pytest.fixture
def fake_client() -> FakeClient:
    return FakeClient()


@pytest.fixture
def config() -> BotConfig:
    return BotConfig(bot_id=BOT_ID)


@pytest.fixture
def make_message() -> Callable[..., SimpleNamespace]:
    def _factory(
        content: str,
        *,
        author_roles: Sequence[Any] = (),
        in_guild: bool = True,
        bot: bool = False,
    ) -> SimpleNamespace:
        guild = None
        if in_guild:
            guild = SimpleNamespace(
                id=GUILD_ID, roles=[EVERYONE, *GUILD_ROLES.values()]
            )
        author = SimpleNamespace(
            id=AUTHOR_ID,
            bot=bot,
            name="monk",
            roles=[EVERYONE, *author_roles],
        )
        return SimpleNamespace(
            content=content,
            author=author,
            guild=guild,
            channel=SimpleNamespace(id=CHANNEL_ID),
        )

    return _factory


@pytest.fixture
def make_ctx(
    fake_client: FakeClient,
    config: BotConfig,
    make_message: Callable[..., SimpleNamespace],
) -> Callable[..., CommandContext]:
    def _factory(
        command: str, args_text: str = "", **message_kwargs: Any
    ) -> CommandContext:
        message = make_message(f"!{command} {args_text}".strip(), **message_kwargs)
        return CommandContext(
            message=message,
            command=command,
            args_text=args_text,
            args=split_args(args_text, config.delimiters),
            config=config,
            client=fake_client,
            commands=build_command_table(),
        )

    return _factory


@pytest.fixture
def guild_roles() -> dict[str, SimpleNamespace]:
    return GUILD_ROLES


@pytest.fixture
def bot_id() -> int:
    return BOT_ID
