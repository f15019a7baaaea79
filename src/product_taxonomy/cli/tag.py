"""Manage product tags."""

from __future__ import annotations

from typing import Optional

import typer

from product_taxonomy.terms import PRODUCT_TAG

from .terms import FREE_FORM_CONTEXT, run_create, run_delete, run_get, run_list, run_update

app = typer.Typer(
    add_completion=False,
    help="Get, list, create, update and delete product tags.",
    no_args_is_help=True,
)

_FIELDS_HELP = "Available fields: id, name, slug, description, count."


def _get_command(
    ctx: typer.Context,
    field: Optional[str] = typer.Option(None, "--field", help="Print the value of a single field."),
    fields: Optional[str] = typer.Option(None, "--fields", help="Comma separated subset of fields to show."),
    output_format: Optional[str] = typer.Option(
        None, "--format", help="Accepted values: table, json, csv, yaml. Default from settings."
    ),
) -> None:
    """Get a product tag.

    Usage: product tag get <id>
    """

    run_get(ctx, PRODUCT_TAG, output_format=output_format, fields=fields, field=field)


def _list_command(
    ctx: typer.Context,
    field: Optional[str] = typer.Option(None, "--field", help="Print the value of a single field for each tag."),
    fields: Optional[str] = typer.Option(None, "--fields", help="Comma separated subset of fields to show."),
    output_format: Optional[str] = typer.Option(
        None, "--format", help="Accepted values: table, json, csv, yaml, count, ids."
    ),
) -> None:
    """List product tags, including unused ones.

    Any other --<field>=<value> flag filters the list on that field.
    """

    run_list(ctx, PRODUCT_TAG, output_format=output_format, fields=fields, field=field)


def _create_command(
    ctx: typer.Context,
    name: Optional[str] = typer.Option(None, "--name", help="Name of the new tag (required)."),
    slug: Optional[str] = typer.Option(None, "--slug", help="Slug; derived from the name when omitted."),
    description: Optional[str] = typer.Option(None, "--description", help="Tag description."),
    alias_of: Optional[str] = typer.Option(None, "--alias_of", "--alias-of", help="Slug of the tag to alias."),
    porcelain: bool = typer.Option(False, "--porcelain", help="Print only the new tag ID."),
) -> None:
    """Create a product tag.

    Any other --<key>=<value> flag is stored as tag metadata.
    """

    run_create(
        ctx,
        PRODUCT_TAG,
        {"name": name, "slug": slug, "description": description, "alias_of": alias_of},
        porcelain=porcelain,
    )


def _update_command(
    ctx: typer.Context,
    name: Optional[str] = typer.Option(None, "--name", help="Assign a new name to the tag."),
    slug: Optional[str] = typer.Option(None, "--slug", help="Assign a new slug."),
    description: Optional[str] = typer.Option(None, "--description", help="Assign a new description."),
    alias_of: Optional[str] = typer.Option(None, "--alias_of", "--alias-of", help="Slug of the tag to alias."),
) -> None:
    """Update an existing product tag.

    Usage: product tag update <id> [--name=<name>] [--<key>=<value>...]

    Any other --<key>=<value> flag is stored as tag metadata.
    """

    run_update(
        ctx,
        PRODUCT_TAG,
        {"name": name, "slug": slug, "description": description, "alias_of": alias_of},
    )


def _delete_command(ctx: typer.Context) -> None:
    """Delete one or more product tags by ID."""

    run_delete(ctx, PRODUCT_TAG)


app.command("get", context_settings=FREE_FORM_CONTEXT, epilog=_FIELDS_HELP)(_get_command)
app.command("list", context_settings=FREE_FORM_CONTEXT, epilog=_FIELDS_HELP)(_list_command)
app.command("create", context_settings=FREE_FORM_CONTEXT)(_create_command)
app.command("update", context_settings=FREE_FORM_CONTEXT)(_update_command)
app.command("delete", context_settings=FREE_FORM_CONTEXT)(_delete_command)
