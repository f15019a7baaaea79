"""Primary Typer application wiring the product taxonomy CLI."""

from __future__ import annotations

from typing import List, Optional

import typer
from rich.table import Table

from product_taxonomy.utils.logging import configure_logging

from . import category, management, tag
from .common import command_errors, configure_state, console, parse_override

app = typer.Typer(
    add_completion=False,
    help="""
    Administer product categories and product tags stored by the shop
    platform: look terms up, list them, and create, update or delete them.
    """.strip(),
    no_args_is_help=True,
)

product_app = typer.Typer(
    add_completion=False,
    help="Product taxonomy commands.",
    no_args_is_help=True,
)


@app.callback()
def main(
    ctx: typer.Context,
    environment: Optional[str] = typer.Option(
        None,
        "--environment",
        "-e",
        help="Active configuration environment (development, testing, production).",
        show_default=False,
    ),
    override: List[str] = typer.Option(  # noqa: B008 - Typer callback signature
        [],
        "--override",
        "-o",
        metavar="KEY=VALUE",
        help="Configuration override in dotted.key=value notation (repeatable).",
    ),
    backend: Optional[str] = typer.Option(
        None,
        "--backend",
        help="Term storage backend (json or rest); shorthand for -o store.backend=...",
        show_default=False,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Emit verbose diagnostic output for CLI operations.",
    ),
) -> None:
    """Configure shared CLI state prior to executing subcommands."""

    overrides = [parse_override(item) for item in override]
    if backend:
        overrides.append({"store": {"backend": backend}})
    with command_errors():
        state = configure_state(
            ctx,
            environment=environment,
            overrides=overrides,
            verbose=verbose,
        )
    configure_logging(state.settings, level="DEBUG" if verbose else None)

    if verbose:
        table = Table(title="CLI Context", show_header=False, box=None)
        table.add_row("Environment", state.environment)
        table.add_row("Backend", state.settings.store.backend)
        if state.settings.store.backend == "rest":
            table.add_row("Host", state.settings.store.base_url or "<unset>")
        else:
            table.add_row("Snapshot", str(state.settings.store.snapshot_path))
        console.print(table)


product_app.add_typer(category.app, name="category", help="Manage product categories")
product_app.add_typer(tag.app, name="tag", help="Manage product tags")

app.add_typer(product_app, name="product", help="Product taxonomy commands")
app.command("config")(management._config_command)
