"""Settings command group for the NPS dashboard CLI."""

from __future__ import annotations

import sys

import typer

from nps_dashboard.cli.io import console


def _cli():
    return sys.modules["nps_dashboard.cli"]


def settings_show() -> None:
    """Display the effective configuration."""

    orchestrator = _cli().get_orchestrator()
    try:
        payload = orchestrator.execute("config_show", {})
    except KeyError as exc:
        console.print("[yellow]No configuration directory found; using built-in defaults.[/]")
        raise typer.Exit(code=1) from exc
    console.print_json(data=payload)


__all__ = ["settings_show"]
