from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

import typer

from ..commands import build_command_table
from ..config import ConfigError
from ..settings import TOKEN_ENV_NAMES, DiscoMonkSettings, read_settings

DoctorStatus = Literal["ok", "warning", "error"]


@dataclass(frozen=True, slots=True)
class DoctorCheck:
    label: str
    status: DoctorStatus
    detail: str | None = None

    def render(self) -> str:
        if self.detail:
            return f"- {self.label}: {self.status} ({self.detail})"
        return f"- {self.label}: {self.status}"


def settings_checks(settings: DiscoMonkSettings) -> list[DoctorCheck]:
    checks: list[DoctorCheck] = []

    if settings.token is None:
        names = " or ".join(TOKEN_ENV_NAMES)
        checks.append(DoctorCheck("discord token", "error", f"{names} not set"))
    else:
        checks.append(DoctorCheck("discord token", "ok", "configured"))

    checks.append(DoctorCheck("prefix", "ok", repr(settings.prefix)))
    delimiters = ", ".join(repr(d) for d in settings.delimiters)
    checks.append(DoctorCheck("delimiters", "ok", delimiters))

    roles = settings.joinable_roles
    if not roles:
        checks.append(DoctorCheck("joinable roles", "warning", "none configured"))
    elif len(set(roles)) != len(roles):
        checks.append(DoctorCheck("joinable roles", "warning", "duplicate names"))
    else:
        checks.append(DoctorCheck("joinable roles", "ok", ", ".join(roles)))

    clashes = sorted(set(roles) & set(build_command_table()))
    if clashes:
        detail = f"role names shadow commands: {', '.join(clashes)}"
        checks.append(DoctorCheck("command names", "warning", detail))
    return checks


def doctor() -> None:
    """Run configuration checks."""
    try:
        settings = read_settings()
    except ConfigError as exc:
        typer.echo("disco-monk doctor")
        for line in str(exc).splitlines()[1:]:
            typer.echo(DoctorCheck("settings", "error", line).render())
        raise typer.Exit(code=1) from None

    checks = settings_checks(settings)
    typer.echo("disco-monk doctor")
    for check in checks:
        typer.echo(check.render())
    if any(check.status == "error" for check in checks):
        raise typer.Exit(code=1)
