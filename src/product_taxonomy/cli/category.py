"""Manage product categories."""

from __future__ import annotations

from typing import Optional

import typer

from product_taxonomy.terms import PRODUCT_CATEGORY

from .terms import FREE_FORM_CONTEXT, run_create, run_delete, run_get, run_list, run_update

app = typer.Typer(
    add_completion=False,
    help="Get, list, create, update and delete product categories.",
    no_args_is_help=True,
)

_FIELDS_HELP = "Available fields: id, name, slug, parent, description, display, image, menu_order, count."


def _get_command(
    ctx: typer.Context,
    field: Optional[str] = typer.Option(None, "--field", help="Print the value of a single field."),
    fields: Optional[str] = typer.Option(None, "--fields", help="Comma separated subset of fields to show."),
    output_format: Optional[str] = typer.Option(
        None, "--format", help="Accepted values: table, json, csv, yaml. Default from settings."
    ),
) -> None:
    """Get a product category.

    Usage: product category get <id>
    """

    run_get(ctx, PRODUCT_CATEGORY, output_format=output_format, fields=fields, field=field)


def _list_command(
    ctx: typer.Context,
    field: Optional[str] = typer.Option(None, "--field", help="Print the value of a single field for each category."),
    fields: Optional[str] = typer.Option(None, "--fields", help="Comma separated subset of fields to show."),
    output_format: Optional[str] = typer.Option(
        None, "--format", help="Accepted values: table, json, csv, yaml, count, ids."
    ),
) -> None:
    """List product categories, including empty ones.

    Any other --<field>=<value> flag filters the list on that field.
    """

    run_list(ctx, PRODUCT_CATEGORY, output_format=output_format, fields=fields, field=field)


def _create_command(
    ctx: typer.Context,
    name: Optional[str] = typer.Option(None, "--name", help="Name of the new category (required)."),
    slug: Optional[str] = typer.Option(None, "--slug", help="Slug; derived from the name when omitted."),
    description: Optional[str] = typer.Option(None, "--description", help="Category description."),
    parent: Optional[int] = typer.Option(None, "--parent", help="ID of the parent category."),
    alias_of: Optional[str] = typer.Option(None, "--alias_of", "--alias-of", help="Slug of the category to alias."),
    display: Optional[str] = typer.Option(
        None, "--display", help="Archive display type: default, products, subcategories or both."
    ),
    image: Optional[str] = typer.Option(None, "--image", help="Attachment ID of the category thumbnail."),
    menu_order: Optional[int] = typer.Option(None, "--menu_order", "--menu-order", help="Position in menus."),
    porcelain: bool = typer.Option(False, "--porcelain", help="Print only the new category ID."),
) -> None:
    """Create a product category.

    Any other --<key>=<value> flag is stored as category metadata.
    """

    run_create(
        ctx,
        PRODUCT_CATEGORY,
        {
            "name": name,
            "slug": slug,
            "description": description,
            "parent": parent,
            "alias_of": alias_of,
            "display": display,
            "image": image,
            "menu_order": menu_order,
        },
        porcelain=porcelain,
    )


def _update_command(
    ctx: typer.Context,
    name: Optional[str] = typer.Option(None, "--name", help="Assign a new name to the category."),
    slug: Optional[str] = typer.Option(None, "--slug", help="Assign a new slug."),
    description: Optional[str] = typer.Option(None, "--description", help="Assign a new description."),
    parent: Optional[int] = typer.Option(None, "--parent", help="Move under another category (0 for top level)."),
    alias_of: Optional[str] = typer.Option(None, "--alias_of", "--alias-of", help="Slug of the category to alias."),
    display: Optional[str] = typer.Option(None, "--display", help="Archive display type."),
    image: Optional[str] = typer.Option(None, "--image", help="Attachment ID of the category thumbnail."),
    menu_order: Optional[int] = typer.Option(None, "--menu_order", "--menu-order", help="Position in menus."),
) -> None:
    """Update an existing product category.

    Usage: product category update <id> [--name=<name>] [--<key>=<value>...]

    Any other --<key>=<value> flag is stored as category metadata.
    """

    run_update(
        ctx,
        PRODUCT_CATEGORY,
        {
            "name": name,
            "slug": slug,
            "description": description,
            "parent": parent,
            "alias_of": alias_of,
            "display": display,
            "image": image,
            "menu_order": menu_order,
        },
    )


def _delete_command(ctx: typer.Context) -> None:
    """Delete one or more product categories by ID.

    Child categories move up to the deleted category's parent.
    """

    run_delete(ctx, PRODUCT_CATEGORY)


app.command("get", context_settings=FREE_FORM_CONTEXT, epilog=_FIELDS_HELP)(_get_command)
app.command("list", context_settings=FREE_FORM_CONTEXT, epilog=_FIELDS_HELP)(_list_command)
app.command("create", context_settings=FREE_FORM_CONTEXT)(_create_command)
app.command("update", context_settings=FREE_FORM_CONTEXT)(_update_command)
app.command("delete", context_settings=FREE_FORM_CONTEXT)(_delete_command)
