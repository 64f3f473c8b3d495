"""Test formatter helpers, utils and the demo files."""

import csv
import json
from io import StringIO

from rich.console import Console

from data_factory import NUM_ROWS, expected_nulls
from parquet_probe import formatters
from parquet_probe.demo import cleanup_demo, create_demo_files
from parquet_probe.output import OutputFormat
from parquet_probe.pages import DataPageV2, DictionaryPage
from parquet_probe.reader import ParquetPageSource
from parquet_probe.session import Session
from parquet_probe.utils import format_bytes, slot_label, truncate_path

# ── unit tests for utils helpers ──────────────────────────────────────────


def test_format_bytes_small():
    assert format_bytes(512) == "512.0 B"


def test_format_bytes_kb():
    assert format_bytes(1536) == "1.5 KB"


def test_format_bytes_mb():
    assert format_bytes(5 * 1024 * 1024) == "5.0 MB"


def test_truncate_path_short():
    path = "/tmp/data/file.parquet"
    assert truncate_path(path) == path


def test_truncate_path_long():
    path = (
        "/very/long/path/that/exceeds/the/maximum/length"
        "/allowed/for/display/purposes/file.parquet"
    )
    result = truncate_path(path, max_length=40)
    assert len(result) == 40
    assert result.startswith("...")
    assert result.endswith("/file.parquet")


def test_truncate_path_long_filename():
    assert truncate_path("/a/" + "x" * 50 + ".parquet", max_length=20).startswith(".../x")


def test_slot_labels():
    assert [slot_label(i) for i in range(5)] == ["A", "B", "C", "D", "E"]


# ── helpers ───────────────────────────────────────────────────────────────


def _capture(render_fn, *args, **kwargs) -> str:
    """Call a render function and return its plain-text output."""
    console = Console(file=StringIO(), width=160)
    render_fn(console, *args, **kwargs)
    return console.file.getvalue()


# ── pages ─────────────────────────────────────────────────────────────────


def test_collect_pages(fake_source):
    session = Session.open(fake_source, ["a.parquet"], column=2)
    rows = formatters.collect_pages(session)
    assert [r["Kind"] for r in rows] == ["DictionaryPage", "DataPage", "DataPage"]
    assert [r["Bytes"] for r in rows] == [20, 30, 30]
    assert rows[1]["Encoding"] == "RLE_DICTIONARY"
    assert rows[0]["Detail"] == "DictionaryPage[PLAIN], num_values:5, sorted:false"
    assert all(r["Rows"] is None and r["Distinct"] is None for r in rows)


def test_collect_pages_v2_rows(v2_file):
    session = Session.open(ParquetPageSource(), [v2_file], column=2)
    try:
        rows = formatters.collect_pages(session)
    finally:
        session.close()
    assert {r["Kind"] for r in rows} == {"DataPageV2"}
    assert sum(r["Rows"] for r in rows) == NUM_ROWS
    assert sum(r["Nulls"] for r in rows) == expected_nulls()


def test_render_pages(fake_source):
    session = Session.open(fake_source, ["a.parquet", "b.parquet"])
    text = _capture(formatters.render_pages, session)
    assert "File A: a.parquet" in text
    assert "File B: b.parquet" in text
    assert "3 pages," in text


# ── file info ─────────────────────────────────────────────────────────────


def test_render_file_info(dictionary_file):
    source = ParquetPageSource()
    handle = source.open(dictionary_file)
    try:
        text = _capture(formatters.render_file_info, handle)
        columns = formatters.collect_columns(handle)
    finally:
        source.close(handle)
    assert "File Info" in text
    assert "city" in text
    assert [c["Path"] for c in columns] == ["id", "city", "score"]
    assert columns[1]["Dictionary"] is True


def test_file_info_json_has_row_groups_and_columns(dictionary_file, capsys):
    source = ParquetPageSource()
    handle = source.open(dictionary_file)
    try:
        formatters.render_file_info(Console(file=StringIO()), handle, OutputFormat.JSON)
    finally:
        source.close(handle)
    payload = json.loads(capsys.readouterr().out)
    assert [row["Row Group"] for row in payload["row_groups"]] == [0, 1, 2, 3]
    assert [col["Path"] for col in payload["columns"]] == ["id", "city", "score"]


def test_file_info_csv_has_two_blocks(dictionary_file, capsys):
    source = ParquetPageSource()
    handle = source.open(dictionary_file)
    try:
        formatters.render_file_info(Console(file=StringIO()), handle, OutputFormat.CSV)
    finally:
        source.close(handle)
    row_groups, columns = capsys.readouterr().out.split("\n\n")
    assert len(list(csv.DictReader(StringIO(row_groups)))) == 4
    assert [r["Path"] for r in csv.DictReader(StringIO(columns))] == ["id", "city", "score"]


# ── demo ──────────────────────────────────────────────────────────────────


def test_demo_files_differ_in_layout(tmp_path):
    demo_dir, (dictionary_path, plain_path) = create_demo_files(tmp_path / "demo")
    try:
        session = Session.open(
            ParquetPageSource(), [str(dictionary_path), str(plain_path)], column=2
        )
        try:
            first, second = session.documents
            assert isinstance(first.pages[0], DictionaryPage)
            assert all(isinstance(p, DataPageV2) for p in second.pages)
            assert first.row_group_count == 3
            assert second.row_group_count == 2
        finally:
            session.close()
    finally:
        cleanup_demo(demo_dir)
    assert not demo_dir.exists()
