"""Shared helpers used across the product taxonomy CLI modules."""

from __future__ import annotations

import json
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Mapping, MutableMapping, Sequence, Tuple

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from product_taxonomy.config.settings import Settings
from product_taxonomy.exceptions import TermCommandError, TermStorageError
from product_taxonomy.storage import TermStore, build_store
from product_taxonomy.terms import TaxonomyCommand, TaxonomyKind
from product_taxonomy.utils.logging import get_logger

console = Console()
err_console = Console(stderr=True)
_LOGGER = get_logger(module=__name__)


class CLIError(RuntimeError):
    """Exception raised for user-facing CLI errors."""


@dataclass(slots=True)
class CLIState:
    """State object attached to ``typer.Context`` for downstream commands."""

    settings: Settings
    overrides: Dict[str, Any]
    environment: str
    verbose: bool
    store: TermStore | None = None


def _merge_dict(dest: MutableMapping[str, Any], src: Mapping[str, Any]) -> None:
    for key, value in src.items():
        if isinstance(value, Mapping) and isinstance(dest.get(key), MutableMapping):
            _merge_dict(dest[key], value)  # type: ignore[index]
        elif isinstance(value, Mapping):
            dest[key] = dict(value)
        else:
            dest[key] = value


def parse_override(argument: str) -> Dict[str, Any]:
    """Parse dotted ``key=value`` overrides into nested dictionaries."""

    if "=" not in argument:
        raise typer.BadParameter("Overrides must be expressed as dotted.key=value")
    dotted, value = argument.split("=", 1)
    cursor: MutableMapping[str, Any] = {}
    current = cursor
    segments = [segment.strip() for segment in dotted.split(".") if segment.strip()]
    if not segments:
        raise typer.BadParameter("Override keys must not be empty")
    for segment in segments[:-1]:
        nested: Dict[str, Any] = {}
        current[segment] = nested
        current = nested
    try:
        parsed_value = json.loads(value)
    except json.JSONDecodeError:
        parsed_value = value
    current[segments[-1]] = parsed_value
    return cursor


def merge_overrides(overrides: Iterable[Dict[str, Any]]) -> Dict[str, Any]:
    """Merge override dictionaries using deep semantics."""

    result: Dict[str, Any] = {}
    for override in overrides:
        _merge_dict(result, override)
    return result


def resolve_settings(environment: str | None, overrides: Dict[str, Any]) -> Settings:
    """Construct :class:`Settings` with environment and overrides applied."""

    payload = dict(overrides)
    if environment:
        payload["environment"] = environment
    try:
        return Settings(**payload)
    except ValidationError as error:
        raise CLIError(f"Invalid configuration: {error}") from error


def configure_state(
    ctx: typer.Context,
    *,
    environment: str | None,
    overrides: Iterable[Dict[str, Any]],
    verbose: bool,
) -> CLIState:
    """Populate ``ctx.obj`` with :class:`CLIState`."""

    merged = merge_overrides(overrides)
    settings = resolve_settings(environment, merged)
    state = CLIState(
        settings=settings,
        overrides=merged,
        environment=settings.environment,
        verbose=verbose,
    )
    ctx.obj = state
    return state


def get_state(ctx: typer.Context) -> CLIState:
    """Return the previously configured :class:`CLIState`.

    Commands must call this helper to access shared state; when the callback has
    not run an informative error is raised to guide developers.
    """

    if ctx.obj is None:
        raise CLIError("CLI context is not initialised")
    if not isinstance(ctx.obj, CLIState):  # pragma: no cover - defensive guard
        raise CLIError("Unexpected CLI context payload")
    return ctx.obj


def get_command(ctx: typer.Context, kind: TaxonomyKind) -> TaxonomyCommand:
    """Build the taxonomy command for ``kind`` on the configured store."""

    state = get_state(ctx)
    if state.store is None:
        try:
            state.store = build_store(state.settings.store)
        except TermStorageError as error:
            raise TermCommandError.from_storage_error(error) from error
    return TaxonomyCommand(state.store, kind)


def parse_assoc_args(tokens: Sequence[str]) -> Tuple[List[str], Dict[str, str]]:
    """Split free-form tokens into positional arguments and ``--key=value`` pairs.

    ``--flag`` alone means ``"true"`` and ``--no-flag`` means ``"false"``.
    Bare tokens are positional, as is everything after ``--``. Keys keep
    their spelling and argument order; a repeated key keeps its last value.
    """

    positional: List[str] = []
    assoc: Dict[str, str] = {}
    tokens = list(tokens)
    for index, token in enumerate(tokens):
        if token == "--":
            positional.extend(tokens[index + 1 :])
            break
        if not token.startswith("--"):
            positional.append(token)
            continue
        key, sep, value = token[2:].partition("=")
        key = key.strip()
        if not key:
            raise CLIError(f"Malformed option: {token}")
        if sep:
            assoc[key] = value
        elif key.startswith("no-") and len(key) > 3:
            assoc[key[3:]] = "false"
        else:
            assoc[key] = "true"
    return positional, assoc


@contextmanager
def command_errors() -> Iterator[None]:
    """Render command failures as ``Error:`` lines and exit non-zero."""

    try:
        yield
    except TermCommandError as error:
        _LOGGER.debug("Command failed", code=error.code)
        err_console.print(f"[bold red]Error:[/bold red] {escape(str(error))}", soft_wrap=True)
        raise typer.Exit(code=1) from error
    except CLIError as error:
        err_console.print(f"[bold red]Error:[/bold red] {escape(str(error))}", soft_wrap=True)
        raise typer.Exit(code=2) from error


def success(message: str) -> None:
    console.print(f"[green]Success:[/green] {escape(message)}", soft_wrap=True)


def render_panel(title: str, content: Mapping[str, Any]) -> None:
    """Utility for rendering JSON-like mappings using Rich panels."""

    from rich.json import JSON as RichJSON

    console.print(Panel(RichJSON.from_data(content), title=title, border_style="cyan"))


__all__ = [
    "CLIError",
    "CLIState",
    "command_errors",
    "configure_state",
    "console",
    "err_console",
    "get_command",
    "get_state",
    "merge_overrides",
    "parse_assoc_args",
    "parse_override",
    "render_panel",
    "resolve_settings",
    "success",
]
