"""Tests for the CLI output formatter."""

from __future__ import annotations

import csv
import io
import json

import pytest
import yaml

from product_taxonomy.cli.common import CLIError
from product_taxonomy.cli.formatting import Formatter

FIELDS = ("id", "name", "slug", "description", "count")
RECORDS = [
    {"id": 1, "name": "Eco", "slug": "eco", "description": "Green, clean", "count": 2},
    {"id": 4, "name": "Sale", "slug": "sale", "description": "", "count": 0},
]


def test_json_item_uses_requested_fields(capsys: pytest.CaptureFixture[str]) -> None:
    Formatter(default_fields=FIELDS, output_format="json", fields="id,name").display_item(RECORDS[0])

    assert json.loads(capsys.readouterr().out) == {"id": 1, "name": "Eco"}


def test_single_field_prints_raw_value(capsys: pytest.CaptureFixture[str]) -> None:
    Formatter(default_fields=FIELDS, field="slug").display_item(RECORDS[0])

    assert capsys.readouterr().out == "eco\n"


def test_csv_items_quote_commas(capsys: pytest.CaptureFixture[str]) -> None:
    Formatter(default_fields=FIELDS, output_format="csv").display_items(RECORDS)

    rows = list(csv.DictReader(io.StringIO(capsys.readouterr().out)))
    assert rows[0]["description"] == "Green, clean"
    assert [row["id"] for row in rows] == ["1", "4"]


def test_yaml_items(capsys: pytest.CaptureFixture[str]) -> None:
    Formatter(default_fields=FIELDS, output_format="yaml", fields="name").display_items(RECORDS)

    assert yaml.safe_load(capsys.readouterr().out) == [{"name": "Eco"}, {"name": "Sale"}]


def test_count_and_ids(capsys: pytest.CaptureFixture[str]) -> None:
    Formatter(default_fields=FIELDS, output_format="count").display_items(RECORDS)
    Formatter(default_fields=FIELDS, output_format="ids").display_items(RECORDS)

    assert capsys.readouterr().out == "2\n1 4\n"


def test_field_per_item_in_lists(capsys: pytest.CaptureFixture[str]) -> None:
    Formatter(default_fields=FIELDS, field="name").display_items(RECORDS)

    assert capsys.readouterr().out == "Eco\nSale\n"


def test_table_lists_every_row(capsys: pytest.CaptureFixture[str]) -> None:
    Formatter(default_fields=FIELDS).display_items(RECORDS)

    output = capsys.readouterr().out
    assert "Eco" in output
    assert "Sale" in output
    assert "slug" in output


def test_unknown_field_is_rejected() -> None:
    with pytest.raises(CLIError):
        Formatter(default_fields=FIELDS, fields="id,colour")


def test_count_is_not_an_item_format() -> None:
    formatter = Formatter(default_fields=FIELDS, output_format="count")

    with pytest.raises(CLIError):
        formatter.display_item(RECORDS[0])
