"""Test CLI commands via Typer's CliRunner."""

import json

from typer.testing import CliRunner

from parquet_probe import __version__
from parquet_probe.cli import app

runner = CliRunner()


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


# ── pages ─────────────────────────────────────────────────────────────────


def test_pages_table(dictionary_file):
    result = runner.invoke(app, ["pages", dictionary_file, "--column", "1"])
    assert result.exit_code == 0, result.output
    assert "DictionaryPage" in result.output
    assert "DataPage" in result.output
    assert "pages," in result.output


def test_pages_two_files_json(dictionary_file, v2_file):
    result = runner.invoke(app, ["--output", "json", "pages", dictionary_file, v2_file, "-c", "2"])
    assert result.exit_code == 0, result.output
    rows = json.loads(result.stdout)
    assert {row["Path"] for row in rows} == {dictionary_file, v2_file}
    v2_rows = [row for row in rows if row["Path"] == v2_file]
    assert all(row["Kind"] == "DataPageV2" for row in v2_rows)
    assert all(row["Column"] == 2 for row in rows)


def test_pages_csv(plain_file):
    result = runner.invoke(app, ["-o", "csv", "pages", plain_file])
    assert result.exit_code == 0, result.output
    header, *lines = result.stdout.strip().splitlines()
    assert header.startswith("Path,Row Group,Column,Page,Kind")
    assert len(lines) > 1


def test_pages_uses_env_default(dictionary_file, monkeypatch):
    monkeypatch.setenv("PARQUET_PROBE_ROW_GROUP", "3")
    result = runner.invoke(app, ["-o", "json", "pages", dictionary_file])
    assert result.exit_code == 0, result.output
    assert {row["Row Group"] for row in json.loads(result.stdout)} == {3}


# ── info ──────────────────────────────────────────────────────────────────


def test_info_table(dictionary_file):
    result = runner.invoke(app, ["info", dictionary_file])
    assert result.exit_code == 0, result.output
    assert "File Info" in result.output
    assert "Row Groups" in result.output
    assert "Created By" in result.output
    assert "Columns (row group 0)" in result.output


def test_info_json(dictionary_file):
    result = runner.invoke(app, ["-o", "json", "info", dictionary_file])
    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    rows = payload["row_groups"]
    assert [row["Row Group"] for row in rows] == [0, 1, 2, 3]
    assert all(row["Rows"] == 250 for row in rows)
    assert len(payload["columns"]) == 3


# ── errors ────────────────────────────────────────────────────────────────


def test_missing_file(tmp_path):
    result = runner.invoke(app, ["pages", str(tmp_path / "nope.parquet")])
    assert result.exit_code == 1
    assert "File not found" in result.output


def test_not_parquet(not_parquet_file):
    result = runner.invoke(app, ["info", not_parquet_file])
    assert result.exit_code == 1
    assert "Not a Parquet file" in result.output


def test_selection_out_of_range(plain_file):
    result = runner.invoke(app, ["pages", plain_file, "--row-group", "9"])
    assert result.exit_code == 1
    assert "Invalid selection" in result.output


def test_too_many_files(plain_file):
    result = runner.invoke(app, ["pages", *([plain_file] * 6)])
    assert result.exit_code == 1
    assert "Too many files" in result.output


def test_tui_fails_before_starting_on_bad_path(tmp_path):
    result = runner.invoke(app, ["tui", str(tmp_path / "nope.parquet")])
    assert result.exit_code == 1
    assert "File not found" in result.output


def test_bad_config(isolated_config, plain_file):
    isolated_config.write_text("defaults:\n  column: -4\n")
    result = runner.invoke(app, ["pages", plain_file])
    assert result.exit_code == 1
    assert "Config error" in result.output
