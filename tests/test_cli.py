"""End-to-end tests for the Typer-based product taxonomy CLI."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml
from typer.testing import CliRunner

from product_taxonomy.cli.common import CLIError, parse_assoc_args
from product_taxonomy.cli.main import app
from product_taxonomy.cli.terms import _collect_fields


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def snapshot(tmp_path: Path) -> Path:
    return tmp_path / "terms.json"


@pytest.fixture()
def cli_env(snapshot: Path) -> dict[str, str]:
    return {
        "PRODUCT_TAXONOMY_SETTINGS__STORE__BACKEND": "json",
        "PRODUCT_TAXONOMY_SETTINGS__STORE__SNAPSHOT_PATH": str(snapshot),
        "PRODUCT_TAXONOMY_SETTINGS__LOGGING__LEVEL": "ERROR",
    }


def _meta(snapshot: Path, term_id: int) -> dict:
    payload = json.loads(snapshot.read_text(encoding="utf-8"))
    return payload["meta"].get(str(term_id), {})


def _create(runner: CliRunner, cli_env: dict[str, str], group: str, *args: str) -> int:
    result = runner.invoke(app, ["product", group, "create", "--porcelain", *args], env=cli_env)
    assert result.exit_code == 0, result.output
    return int(result.output.strip())


def test_parse_assoc_args_splits_positional_and_flags() -> None:
    positional, assoc = parse_assoc_args(["12", "--color=red", "--featured", "--no-sale", "--note=a=b"])

    assert positional == ["12"]
    assert assoc == {"color": "red", "featured": "true", "sale": "false", "note": "a=b"}
    assert list(assoc) == ["color", "featured", "sale", "note"]


def test_parse_assoc_args_respects_terminator() -> None:
    positional, assoc = parse_assoc_args(["--a=1", "--", "--b=2"])

    assert positional == ["--b=2"]
    assert assoc == {"a": "1"}


def test_parse_assoc_args_rejects_empty_key() -> None:
    with pytest.raises(CLIError):
        parse_assoc_args(["--=value"])


def test_tag_create_and_get_json(runner: CliRunner, cli_env: dict[str, str]) -> None:
    term_id = _create(runner, cli_env, "tag", "--name=Summer Sale", "--description=Hot deals")

    result = runner.invoke(app, ["product", "tag", "get", str(term_id), "--format=json"], env=cli_env)

    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == {
        "id": term_id,
        "name": "Summer Sale",
        "slug": "summer-sale",
        "description": "Hot deals",
        "count": 0,
    }


def test_tag_get_single_field(runner: CliRunner, cli_env: dict[str, str]) -> None:
    term_id = _create(runner, cli_env, "tag", "--name=Eco")

    result = runner.invoke(app, ["product", "tag", "get", str(term_id), "--field=slug"], env=cli_env)

    assert result.exit_code == 0, result.output
    assert result.output.strip() == "eco"


def test_tag_update_writes_fields_and_metadata(runner: CliRunner, cli_env: dict[str, str], snapshot: Path) -> None:
    term_id = _create(runner, cli_env, "tag", "--name=Vintage")

    result = runner.invoke(
        app,
        ["product", "tag", "update", str(term_id), "--name=Retro", "--slug=retro", "--color=amber", "--featured"],
        env=cli_env,
    )

    assert result.exit_code == 0, result.output
    assert 'Success: Product tag "Retro" was updated successfully.' in result.output
    assert _meta(snapshot, term_id) == {"color": "amber", "featured": "true"}


def test_metadata_flags_may_precede_the_id(runner: CliRunner, cli_env: dict[str, str], snapshot: Path) -> None:
    term_id = _create(runner, cli_env, "tag", "--name=Vintage")

    result = runner.invoke(app, ["product", "tag", "update", "--color=amber", str(term_id)], env=cli_env)

    assert result.exit_code == 0, result.output
    assert _meta(snapshot, term_id) == {"color": "amber"}


def test_update_unknown_tag_reports_error(runner: CliRunner, cli_env: dict[str, str], snapshot: Path) -> None:
    result = runner.invoke(app, ["product", "tag", "update", "75", "--name=x", "--color=red"], env=cli_env)

    assert result.exit_code == 1
    assert 'Invalid product tag ID "75"' in result.output
    assert "woocommerce_cli_invalid_product_tag_id" in result.output
    assert "Success" not in result.output
    assert not snapshot.exists()


def test_update_duplicate_slug_surfaces_storage_code(runner: CliRunner, cli_env: dict[str, str], snapshot: Path) -> None:
    _create(runner, cli_env, "tag", "--name=Vintage")
    other = _create(runner, cli_env, "tag", "--name=Retro")

    result = runner.invoke(
        app, ["product", "tag", "update", str(other), "--slug=vintage", "--color=red"], env=cli_env
    )

    assert result.exit_code == 1
    assert "duplicate_term_slug" in result.output
    assert "Success" not in result.output
    assert _meta(snapshot, other) == {}


def test_update_requires_exactly_one_id(runner: CliRunner, cli_env: dict[str, str]) -> None:
    result = runner.invoke(app, ["product", "tag", "update", "--name=x"], env=cli_env)

    assert result.exit_code == 2
    assert "Expected exactly one product tag ID" in result.output


def test_update_rejects_space_separated_flag_value(runner: CliRunner, cli_env: dict[str, str], snapshot: Path) -> None:
    term_id = _create(runner, cli_env, "tag", "--name=Eco")

    result = runner.invoke(app, ["product", "tag", "update", str(term_id), "--color", "amber"], env=cli_env)

    assert result.exit_code == 2
    assert "Expected exactly one product tag ID, got 2" in result.output
    assert _meta(snapshot, term_id) == {}


def test_collect_fields_puts_declared_options_before_free_form_flags() -> None:
    fields = _collect_fields(
        {"name": None, "display": "both", "menu_order": 3},
        {"zeta": "1", "alpha": "2"},
    )

    assert list(fields) == ["display", "menu_order", "zeta", "alpha"]


def test_category_update_display_and_parent(runner: CliRunner, cli_env: dict[str, str], snapshot: Path) -> None:
    parent = _create(runner, cli_env, "category", "--name=Clothing")
    child = _create(runner, cli_env, "category", "--name=Shirts")

    result = runner.invoke(
        app,
        ["product", "category", "update", str(child), f"--parent={parent}", "--display=products", "--menu_order=2"],
        env=cli_env,
    )
    assert result.exit_code == 0, result.output
    assert 'Product category "Shirts" was updated successfully.' in result.output

    shown = runner.invoke(app, ["product", "category", "get", str(child), "--format=json"], env=cli_env)
    record = json.loads(shown.output)
    assert record["parent"] == parent
    assert record["display"] == "products"
    assert record["menu_order"] == 2
    assert _meta(snapshot, child) == {"display_type": "products", "order": 2}


def test_category_list_filters_and_formats(runner: CliRunner, cli_env: dict[str, str]) -> None:
    parent = _create(runner, cli_env, "category", "--name=Clothing")
    shirts = _create(runner, cli_env, "category", "--name=Shirts", f"--parent={parent}")
    hats = _create(runner, cli_env, "category", "--name=Hats", f"--parent={parent}")

    ids = runner.invoke(app, ["product", "category", "list", f"--parent={parent}", "--format=ids"], env=cli_env)
    count = runner.invoke(app, ["product", "category", "list", "--format=count"], env=cli_env)
    names = runner.invoke(app, ["product", "category", "list", "--fields=id,name", "--format=yaml"], env=cli_env)

    assert ids.output.strip() == f"{hats} {shirts}"
    assert count.output.strip() == "3"
    assert yaml.safe_load(names.output) == [
        {"id": parent, "name": "Clothing"},
        {"id": hats, "name": "Hats"},
        {"id": shirts, "name": "Shirts"},
    ]


def test_list_rejects_unknown_filter(runner: CliRunner, cli_env: dict[str, str]) -> None:
    result = runner.invoke(app, ["product", "tag", "list", "--parent=1"], env=cli_env)

    assert result.exit_code == 1
    assert "woocommerce_cli_invalid_filter_field" in result.output


def test_list_table_output(runner: CliRunner, cli_env: dict[str, str]) -> None:
    _create(runner, cli_env, "tag", "--name=Eco")

    result = runner.invoke(app, ["product", "tag", "list"], env=cli_env)

    assert result.exit_code == 0, result.output
    assert "Eco" in result.output
    assert "description" in result.output


def test_create_stores_extra_flags_as_metadata(runner: CliRunner, cli_env: dict[str, str], snapshot: Path) -> None:
    result = runner.invoke(app, ["product", "tag", "create", "--name=Local", "--origin=farm"], env=cli_env)

    assert result.exit_code == 0, result.output
    assert 'Product tag "Local" was created successfully' in result.output
    assert _meta(snapshot, 1) == {"origin": "farm"}


def test_create_without_name_fails(runner: CliRunner, cli_env: dict[str, str]) -> None:
    result = runner.invoke(app, ["product", "category", "create", "--slug=x"], env=cli_env)

    assert result.exit_code == 1
    assert "woocommerce_cli_missing_name" in result.output


def test_delete_multiple_terms(runner: CliRunner, cli_env: dict[str, str]) -> None:
    first = _create(runner, cli_env, "tag", "--name=One")
    second = _create(runner, cli_env, "tag", "--name=Two")

    result = runner.invoke(app, ["product", "tag", "delete", str(first), str(second)], env=cli_env)
    remaining = runner.invoke(app, ["product", "tag", "list", "--format=count"], env=cli_env)

    assert result.exit_code == 0, result.output
    assert 'Product tag "One" was deleted successfully.' in result.output
    assert 'Product tag "Two" was deleted successfully.' in result.output
    assert remaining.output.strip() == "0"


def test_invalid_backend_is_a_usage_error(runner: CliRunner, cli_env: dict[str, str]) -> None:
    result = runner.invoke(app, ["--backend", "ftp", "product", "tag", "list"], env=cli_env)

    assert result.exit_code == 2
    assert "Invalid configuration" in result.output


def test_rest_backend_requires_base_url(runner: CliRunner, cli_env: dict[str, str]) -> None:
    result = runner.invoke(app, ["--backend", "rest", "product", "tag", "list"], env=cli_env)

    assert result.exit_code == 2
    assert "base_url" in result.output


def test_config_yaml_masks_password(runner: CliRunner, cli_env: dict[str, str]) -> None:
    result = runner.invoke(
        app,
        ["-o", "store.application_password=secret-value", "config", "--format", "yaml"],
        env=cli_env,
    )

    assert result.exit_code == 0, result.output
    assert "secret-value" not in result.output
    assert "********" in result.output
