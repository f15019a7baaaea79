"""Configuration inspection command."""

from __future__ import annotations

import typer
import yaml

from .common import CLIError, command_errors, console, get_state, render_panel


def _config_command(
    ctx: typer.Context,
    *,
    output_format: str = typer.Option(
        "json",
        "--format",
        help="Rendering format for the resolved settings (json or yaml).",
        case_sensitive=False,
    ),
) -> None:
    """Show the resolved configuration. Credentials are masked."""

    with command_errors():
        state = get_state(ctx)
        payload = state.settings.model_dump(mode="json")
        if payload["store"].get("application_password"):
            payload["store"]["application_password"] = "********"
        fmt = output_format.lower()
        if fmt == "json":
            render_panel("Resolved Settings", payload)
        elif fmt == "yaml":
            console.print(yaml.safe_dump(payload, sort_keys=False), markup=False)
        else:
            raise CLIError("--format must be either 'json' or 'yaml'")
