from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict, SettingsError

from .config import (
    DEFAULT_DELIMITERS,
    DEFAULT_JOINABLE_ROLES,
    DEFAULT_PREFIX,
    ConfigError,
)

TOKEN_ENV_NAMES: tuple[str, ...] = ("DISCO_MONK_TOKEN", "DISCORD_TOKEN")


class DiscoMonkSettings(BaseSettings):
    model_config = SettingsConfigDict(
        extra="ignore",
        env_prefix="DISCO_MONK_",
        populate_by_name=True,
    )

    token: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices(*TOKEN_ENV_NAMES),
    )
    prefix: str = DEFAULT_PREFIX
    delimiters: list[str] = Field(default_factory=lambda: list(DEFAULT_DELIMITERS))
    joinable_roles: list[str] = Field(
        default_factory=lambda: list(DEFAULT_JOINABLE_ROLES)
    )
    allow_whitespace: bool = True

    @field_validator("token", mode="before")
    @classmethod
    def _validate_token(cls, value: Any) -> Any:
        if value is None:
            return None
        if not isinstance(value, str):
            raise ValueError("token must be a string")
        cleaned = value.strip()
        return cleaned or None

    @field_validator("prefix", mode="before")
    @classmethod
    def _validate_prefix(cls, value: Any) -> Any:
        if not isinstance(value, str):
            raise ValueError("prefix must be a string")
        if not value.strip():
            raise ValueError("prefix must be a non-empty string")
        return value.strip()

    @field_validator("delimiters")
    @classmethod
    def _validate_delimiters(cls, value: list[str]) -> list[str]:
        cleaned = [item for item in value if item]
        if not cleaned:
            raise ValueError("delimiters must contain at least one delimiter")
        return cleaned

    @field_validator("joinable_roles")
    @classmethod
    def _validate_joinable_roles(cls, value: list[str]) -> list[str]:
        roles: list[str] = []
        for item in value:
            cleaned = item.strip()
            if not cleaned:
                raise ValueError("joinable_roles must not contain blank names")
            roles.append(cleaned)
        return roles

    def token_value(self) -> str:
        if self.token is None:
            names = " or ".join(TOKEN_ENV_NAMES)
            raise ConfigError(f"Missing token from environment ({names}).")
        return self.token.get_secret_value()


def _format_validation_error(exc: ValidationError) -> str:
    lines = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())) or "settings"
        lines.append(f"{location}: {error.get('msg', 'invalid value')}")
    return "Invalid configuration:\n" + "\n".join(lines)


def read_settings(**overrides: Any) -> DiscoMonkSettings:
    """Build settings from the environment without requiring a token."""
    try:
        return DiscoMonkSettings(**overrides)
    except ValidationError as exc:
        raise ConfigError(_format_validation_error(exc)) from None
    except SettingsError as exc:
        # list settings that are not valid JSON fail before validation
        raise ConfigError(f"Invalid configuration:\n{exc}") from None


def load_settings(**overrides: Any) -> DiscoMonkSettings:
    settings = read_settings(**overrides)
    settings.token_value()
    return settings

