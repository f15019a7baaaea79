"""Command bodies shared by the product category and product tag groups."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

import typer

from product_taxonomy.terms import TaxonomyKind
from product_taxonomy.utils.logging import logging_context

from .common import CLIError, command_errors, console, get_command, get_state, parse_assoc_args, success
from .formatting import Formatter

# Lets Typer hand unknown ``--key=value`` flags and bare ids to ``ctx.args``.
FREE_FORM_CONTEXT = {"allow_extra_args": True, "ignore_unknown_options": True}


def _formatter(ctx: typer.Context, kind: TaxonomyKind, output_format: Optional[str], fields: Optional[str], field: Optional[str]) -> Formatter:
    resolved = output_format or get_state(ctx).settings.output.default_format
    return Formatter(default_fields=kind.default_fields, output_format=resolved, fields=fields, field=field)


def _single_id(ctx: typer.Context, kind: TaxonomyKind) -> tuple[str, Dict[str, str]]:
    positional, assoc = parse_assoc_args(ctx.args)
    if len(positional) != 1:
        raise CLIError(f"Expected exactly one {kind.label} ID, got {len(positional)}")
    return positional[0], assoc


def _collect_fields(declared: Mapping[str, Any], assoc: Mapping[str, str]) -> Dict[str, Any]:
    """Declared options first, then free-form flags in the order given."""

    fields = {key: value for key, value in declared.items() if value is not None}
    fields.update(assoc)
    return fields


def run_get(
    ctx: typer.Context,
    kind: TaxonomyKind,
    *,
    output_format: Optional[str],
    fields: Optional[str],
    field: Optional[str],
) -> None:
    with command_errors(), logging_context(command="get", taxonomy=kind.taxonomy):
        term_id, _ = _single_id(ctx, kind)
        formatter = _formatter(ctx, kind, output_format, fields, field)
        record = get_command(ctx, kind).get(term_id)
        formatter.display_item(record)


def run_list(
    ctx: typer.Context,
    kind: TaxonomyKind,
    *,
    output_format: Optional[str],
    fields: Optional[str],
    field: Optional[str],
) -> None:
    with command_errors(), logging_context(command="list", taxonomy=kind.taxonomy):
        positional, filters = parse_assoc_args(ctx.args)
        if positional:
            raise CLIError(f"Unexpected argument: {positional[0]}")
        formatter = _formatter(ctx, kind, output_format, fields, field)
        records = get_command(ctx, kind).list(filters)
        formatter.display_items(records)


def run_create(ctx: typer.Context, kind: TaxonomyKind, declared: Mapping[str, Any], *, porcelain: bool) -> None:
    with command_errors(), logging_context(command="create", taxonomy=kind.taxonomy):
        positional, assoc = parse_assoc_args(ctx.args)
        if positional:
            raise CLIError(f"Unexpected argument: {positional[0]}")
        record = get_command(ctx, kind).create(_collect_fields(declared, assoc))
        if porcelain:
            typer.echo(str(record["id"]))
            return
        success(f'{kind.title} "{record["name"]}" was created successfully (ID {record["id"]}).')


def run_update(ctx: typer.Context, kind: TaxonomyKind, declared: Mapping[str, Any]) -> None:
    with command_errors(), logging_context(command="update", taxonomy=kind.taxonomy):
        term_id, assoc = _single_id(ctx, kind)
        record = get_command(ctx, kind).update(term_id, _collect_fields(declared, assoc))
        success(f'{kind.title} "{record["name"]}" was updated successfully.')


def run_delete(ctx: typer.Context, kind: TaxonomyKind) -> None:
    with command_errors(), logging_context(command="delete", taxonomy=kind.taxonomy):
        positional, assoc = parse_assoc_args(ctx.args)
        if assoc:
            raise CLIError(f"Unexpected option: --{next(iter(assoc))}")
        if not positional:
            raise CLIError(f"Expected at least one {kind.label} ID")
        command = get_command(ctx, kind)
        for term_id in positional:
            record = command.delete(term_id)
            success(f'{kind.title} "{record["name"]}" was deleted successfully.')
        if get_state(ctx).verbose:
            console.print(f"Deleted {len(positional)} term(s).")


__all__ = ["FREE_FORM_CONTEXT", "run_create", "run_delete", "run_get", "run_list", "run_update"]
