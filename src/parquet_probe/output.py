"""Row output in table, JSON or CSV form."""

from __future__ import annotations

import csv
import io
import json
from enum import Enum
from typing import Any

from rich.console import Console
from rich.table import Table as RichTable


class OutputFormat(str, Enum):
    TABLE = "table"
    JSON = "json"
    CSV = "csv"


def emit(
    console: Console,
    rows: list[dict[str, Any]],
    columns: list[str],
    fmt: OutputFormat,
    *,
    title: str = "",
    column_styles: dict[str, dict[str, Any]] | None = None,
) -> None:
    """Write *rows* restricted to *columns* in the requested format.

    JSON and CSV go to stdout untouched by rich markup so they can be piped;
    table mode renders through *console*.  ``column_styles`` holds per-column
    keyword args for ``RichTable.add_column``.
    """
    if fmt == OutputFormat.JSON:
        print(to_json(rows, columns))
    elif fmt == OutputFormat.CSV:
        print(to_csv(rows, columns), end="")
    else:
        console.print(to_rich_table(rows, columns, title=title, column_styles=column_styles))


def emit_sections(
    sections: dict[str, tuple[list[dict[str, Any]], list[str]]],
    fmt: OutputFormat,
) -> None:
    """Write several named row sets as one JSON object, or as CSV blocks split by a blank line."""
    if fmt == OutputFormat.JSON:
        payload = {name: _records(rows, columns) for name, (rows, columns) in sections.items()}
        print(json.dumps(payload, indent=2, default=str))
    elif fmt == OutputFormat.CSV:
        blocks = [to_csv(rows, columns) for rows, columns in sections.values()]
        print("\n".join(blocks), end="")
    else:
        raise ValueError(f"sections cannot be rendered as {fmt.value}")


def _records(rows: list[dict[str, Any]], columns: list[str]) -> list[dict[str, Any]]:
    return [{col: row.get(col) for col in columns} for row in rows]


def to_json(rows: list[dict[str, Any]], columns: list[str]) -> str:
    return json.dumps(_records(rows, columns), indent=2, default=str)


def to_csv(rows: list[dict[str, Any]], columns: list[str]) -> str:
    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=columns, extrasaction="ignore", lineterminator="\n")
    writer.writeheader()
    for row in rows:
        writer.writerow({col: "" if row.get(col) is None else row[col] for col in columns})
    return buf.getvalue()


def to_rich_table(
    rows: list[dict[str, Any]],
    columns: list[str],
    *,
    title: str = "",
    column_styles: dict[str, dict[str, Any]] | None = None,
) -> RichTable:
    column_styles = column_styles or {}
    table = RichTable(title=title, show_lines=False)
    for col in columns:
        table.add_column(col, **column_styles.get(col, {}))
    for row in rows:
        table.add_row(*("-" if row.get(col) is None else str(row[col]) for col in columns))
    return table
