"""Render term records as tables, JSON, CSV, YAML, counts or id lists."""

from __future__ import annotations

import csv
import io
import json
from typing import Any, Dict, List, Mapping, Sequence

import typer
import yaml
from rich.table import Table

from .common import CLIError, console

ITEM_FORMATS = ("table", "json", "csv", "yaml")
LIST_FORMATS = ITEM_FORMATS + ("count", "ids")


def _stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class Formatter:
    """Output options shared by ``get`` and ``list`` subcommands.

    ``field`` prints the raw value of one field; ``fields`` restricts and
    orders the columns; otherwise ``default_fields`` are shown.
    """

    def __init__(
        self,
        *,
        default_fields: Sequence[str],
        output_format: str = "table",
        fields: str | None = None,
        field: str | None = None,
    ) -> None:
        self.output_format = output_format.lower()
        self.field = field.strip() if field else None
        if fields:
            self.fields = [name.strip() for name in fields.split(",") if name.strip()]
        else:
            self.fields = list(default_fields)
        self._available = set(default_fields)
        requested = [self.field] if self.field else self.fields
        unknown = [name for name in requested if name not in self._available]
        if unknown:
            raise CLIError(f"Invalid field: {', '.join(unknown)}")

    def _project(self, item: Mapping[str, Any]) -> Dict[str, Any]:
        return {name: item.get(name) for name in self.fields}

    def display_item(self, item: Mapping[str, Any]) -> None:
        if self.output_format not in ITEM_FORMATS:
            raise CLIError(f"Invalid format: {self.output_format}; expected one of {', '.join(ITEM_FORMATS)}")
        if self.field:
            typer.echo(_stringify(item.get(self.field)))
            return
        row = self._project(item)
        if self.output_format == "table":
            table = Table(show_header=True, box=None)
            table.add_column("Field")
            table.add_column("Value")
            for name, value in row.items():
                table.add_row(name, _stringify(value))
            console.print(table)
        else:
            typer.echo(self._serialize([row], single=True))

    def display_items(self, items: Sequence[Mapping[str, Any]]) -> None:
        if self.output_format not in LIST_FORMATS:
            raise CLIError(f"Invalid format: {self.output_format}; expected one of {', '.join(LIST_FORMATS)}")
        if self.output_format == "count":
            typer.echo(str(len(items)))
            return
        if self.output_format == "ids":
            typer.echo(" ".join(_stringify(item.get("id")) for item in items))
            return
        if self.field:
            for item in items:
                typer.echo(_stringify(item.get(self.field)))
            return
        rows = [self._project(item) for item in items]
        if self.output_format == "table":
            table = Table(show_header=True, box=None)
            for name in self.fields:
                table.add_column(name)
            for row in rows:
                table.add_row(*(_stringify(row[name]) for name in self.fields))
            console.print(table)
        else:
            typer.echo(self._serialize(rows, single=False))

    def _serialize(self, rows: List[Dict[str, Any]], *, single: bool) -> str:
        if self.output_format == "json":
            return json.dumps(rows[0] if single else rows, ensure_ascii=False)
        if self.output_format == "yaml":
            return yaml.safe_dump(rows[0] if single else rows, sort_keys=False, allow_unicode=True).rstrip("\n")
        buffer = io.StringIO()
        writer = csv.DictWriter(buffer, fieldnames=self.fields, lineterminator="\n")
        writer.writeheader()
        for row in rows:
            writer.writerow({name: _stringify(value) for name, value in row.items()})
        return buffer.getvalue().rstrip("\n")


__all__ = ["Formatter", "ITEM_FORMATS", "LIST_FORMATS"]
