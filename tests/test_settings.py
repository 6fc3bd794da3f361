from __future__ import annotations

import pytest

from disco_monk.config import DEFAULT_JOINABLE_ROLES, BotConfig, ConfigError
from disco_monk.settings import DiscoMonkSettings, load_settings

ENV_NAMES = (
    "DISCO_MONK_TOKEN",
    "DISCORD_TOKEN",
    "DISCO_MONK_PREFIX",
    "DISCO_MONK_DELIMITERS",
    "DISCO_MONK_JOINABLE_ROLES",
    "DISCO_MONK_ALLOW_WHITESPACE",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch) -> None:
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)


def test_missing_token_is_fatal() -> None:
    with pytest.raises(ConfigError, match="Missing token"):
        load_settings()


def test_blank_token_counts_as_missing(monkeypatch) -> None:
    monkeypatch.setenv("DISCO_MONK_TOKEN", "   ")
    with pytest.raises(ConfigError, match="DISCO_MONK_TOKEN"):
        load_settings()


def test_token_from_primary_env(monkeypatch) -> None:
    monkeypatch.setenv("DISCO_MONK_TOKEN", "secret")
    settings = load_settings()
    assert settings.token_value() == "secret"
    assert "secret" not in repr(settings)


def test_token_from_alternate_env(monkeypatch) -> None:
    monkeypatch.setenv("DISCORD_TOKEN", "other")
    assert load_settings().token_value() == "other"


def test_defaults(monkeypatch) -> None:
    monkeypatch.setenv("DISCO_MONK_TOKEN", "secret")
    settings = load_settings()

    assert settings.prefix == "!"
    assert settings.delimiters == [", ", ","]
    assert settings.joinable_roles == list(DEFAULT_JOINABLE_ROLES)
    assert settings.allow_whitespace is True


def test_overrides_from_env(monkeypatch) -> None:
    monkeypatch.setenv("DISCO_MONK_TOKEN", "secret")
    monkeypatch.setenv("DISCO_MONK_PREFIX", "?")
    monkeypatch.setenv("DISCO_MONK_JOINABLE_ROLES", '["makers", " venters "]')
    monkeypatch.setenv("DISCO_MONK_ALLOW_WHITESPACE", "false")

    config = BotConfig.from_settings(load_settings())

    assert config.prefix == "?"
    assert config.joinable_roles == ("makers", "venters")
    assert config.allow_whitespace is False
    assert config.bot_id is None


def test_blank_prefix_rejected(monkeypatch) -> None:
    monkeypatch.setenv("DISCO_MONK_TOKEN", "secret")
    monkeypatch.setenv("DISCO_MONK_PREFIX", "  ")
    with pytest.raises(ConfigError, match="prefix"):
        load_settings()


def test_blank_role_name_rejected(monkeypatch) -> None:
    monkeypatch.setenv("DISCO_MONK_TOKEN", "secret")
    with pytest.raises(ConfigError, match="joinable_roles"):
        load_settings(joinable_roles=["makers", " "])


def test_empty_delimiters_rejected(monkeypatch) -> None:
    monkeypatch.setenv("DISCO_MONK_TOKEN", "secret")
    with pytest.raises(ConfigError, match="delimiters"):
        load_settings(delimiters=[""])


def test_settings_without_token_still_construct() -> None:
    settings = DiscoMonkSettings()
    assert settings.token is None
    with pytest.raises(ConfigError):
        settings.token_value()


def test_bot_config_is_joinable() -> None:
    config = BotConfig()
    assert config.is_joinable("politics")
    assert not config.is_joinable("Politics")
    assert not config.is_joinable("moderators")


@pytest.mark.parametrize(
    ("name", "value", "field"),
    [
        ("DISCO_MONK_DELIMITERS", ",", "delimiters"),
        ("DISCO_MONK_JOINABLE_ROLES", "politics, makers", "joinable_roles"),
    ],
)
def test_list_settings_that_are_not_json_are_config_errors(
    monkeypatch, name, value, field
) -> None:
    monkeypatch.setenv("DISCO_MONK_TOKEN", "secret")
    monkeypatch.setenv(name, value)

    with pytest.raises(ConfigError, match=field):
        load_settings()
