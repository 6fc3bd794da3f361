from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .settings import DiscoMonkSettings

DEFAULT_PREFIX = "!"
DEFAULT_DELIMITERS: tuple[str, ...] = (", ", ",")
DEFAULT_JOINABLE_ROLES: tuple[str, ...] = (
    "bot watchers",
    "politics",
    "makers",
    "venters",
)


class ConfigError(RuntimeError):
    pass


class StartupError(RuntimeError):
    pass


@dataclass(frozen=True, slots=True)
class BotConfig:
    """Read-only configuration shared by the router and every handler."""

    prefix: str = DEFAULT_PREFIX
    delimiters: tuple[str, ...] = DEFAULT_DELIMITERS
    joinable_roles: tuple[str, ...] = DEFAULT_JOINABLE_ROLES
    allow_whitespace: bool = True
    bot_id: int | None = None

    @classmethod
    def from_settings(cls, settings: DiscoMonkSettings) -> BotConfig:
        return cls(
            prefix=settings.prefix,
            delimiters=tuple(settings.delimiters),
            joinable_roles=tuple(settings.joinable_roles),
            allow_whitespace=settings.allow_whitespace,
        )

    def is_joinable(self, role_name: str) -> bool:
        return role_name in self.joinable_roles
