"""Rich formatters for non-interactive output."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table as RichTable

from parquet_probe.output import OutputFormat, emit, emit_sections
from parquet_probe.pages import page_distinct, page_kind, page_nulls, page_rows, page_text
from parquet_probe.utils import format_bytes, truncate_path

if TYPE_CHECKING:
    from parquet_probe.reader import ParquetHandle
    from parquet_probe.session import Session

PAGE_COLUMNS = [
    "File",
    "Row Group",
    "Column",
    "Page",
    "Kind",
    "Encoding",
    "Values",
    "Rows",
    "Bytes",
    "Nulls",
    "Distinct",
]
ROW_GROUP_COLUMNS = ["Row Group", "Rows", "Columns", "Size"]
COLUMN_COLUMNS = [
    "Column",
    "Path",
    "Type",
    "Compression",
    "Encodings",
    "Dictionary",
    "Compressed",
    "Uncompressed",
]


# ─── pages ────────────────────────────────────────────────────


def collect_pages(session: Session) -> list[dict[str, Any]]:
    """One row per page of every document's current selection."""
    rows: list[dict[str, Any]] = []
    for i, doc in enumerate(session.documents):
        for index, page in enumerate(doc.pages):
            rows.append(
                {
                    "File": session.label(i),
                    "Path": doc.path,
                    "Row Group": doc.row_group,
                    "Column": doc.column,
                    "Page": index,
                    "Kind": page_kind(page),
                    "Encoding": str(page.encoding),
                    "Values": page.num_values,
                    "Rows": page_rows(page),
                    "Bytes": page.byte_length,
                    "Nulls": page_nulls(page),
                    "Distinct": page_distinct(page),
                    "Detail": page_text(page),
                }
            )
    return rows


def render_pages(
    console: Console, session: Session, fmt: OutputFormat = OutputFormat.TABLE
) -> None:
    """Render the page list of every document."""
    rows = collect_pages(session)

    if fmt != OutputFormat.TABLE:
        emit(console, rows, ["Path", *PAGE_COLUMNS[1:], "Detail"], fmt)
        return

    for i, doc in enumerate(session.documents):
        label = session.label(i)
        doc_rows = [row for row in rows if row["File"] == label]
        title = (
            f"File {label}: {truncate_path(doc.path)}  "
            f"[dim]row group {doc.row_group}, column {doc.column}[/dim]"
        )
        emit(
            console,
            doc_rows,
            PAGE_COLUMNS[3:],
            fmt,
            title=title,
            column_styles={
                "Bytes": {"justify": "right", "style": "green"},
                "Values": {"justify": "right"},
                "Rows": {"justify": "right"},
                "Nulls": {"justify": "right"},
                "Distinct": {"justify": "right"},
            },
        )
        console.print(
            f"  [bold]{len(doc.pages)}[/bold] pages, "
            f"[bold]{format_bytes(doc.total_bytes)}[/bold] uncompressed\n"
        )


# ─── file info ────────────────────────────────────────────────


def collect_row_groups(handle: ParquetHandle) -> list[dict[str, Any]]:
    md = handle.metadata
    rows: list[dict[str, Any]] = []
    for i in range(md.num_row_groups):
        rg = md.row_group(i)
        rows.append(
            {
                "Row Group": i,
                "Rows": rg.num_rows,
                "Columns": rg.num_columns,
                "Size": rg.total_byte_size,
            }
        )
    return rows


def collect_columns(handle: ParquetHandle, row_group: int = 0) -> list[dict[str, Any]]:
    """Column chunk details for one row group."""
    md = handle.metadata
    if md.num_row_groups == 0:
        return []
    rg = md.row_group(row_group)
    rows: list[dict[str, Any]] = []
    for i in range(rg.num_columns):
        col = rg.column(i)
        rows.append(
            {
                "Column": i,
                "Path": col.path_in_schema,
                "Type": col.physical_type,
                "Compression": col.compression,
                "Encodings": ", ".join(col.encodings),
                "Dictionary": col.has_dictionary_page,
                "Compressed": col.total_compressed_size,
                "Uncompressed": col.total_uncompressed_size,
            }
        )
    return rows


def render_file_info(
    console: Console, handle: ParquetHandle, fmt: OutputFormat = OutputFormat.TABLE
) -> None:
    """Render the bounds a session can navigate within, plus column details."""
    row_groups = collect_row_groups(handle)
    columns = collect_columns(handle)

    if fmt != OutputFormat.TABLE:
        emit_sections(
            {
                "row_groups": (row_groups, ROW_GROUP_COLUMNS),
                "columns": (columns, COLUMN_COLUMNS),
            },
            fmt,
        )
        return

    md = handle.metadata
    info = RichTable(show_header=False, box=None, padding=(0, 2))
    info.add_column("Key", style="bold cyan")
    info.add_column("Value")
    info.add_row("Path", handle.path)
    info.add_row("Created By", md.created_by or "unknown")
    info.add_row("Format Version", str(md.format_version))
    info.add_row("Rows", f"{md.num_rows:,}")
    info.add_row("Row Groups", str(md.num_row_groups))
    info.add_row("Columns", str(md.num_columns))
    console.print(Panel(info, title="[bold]File Info[/bold]", border_style="blue"))

    for row in row_groups:
        row["Size"] = format_bytes(row["Size"])
    emit(console, row_groups, ROW_GROUP_COLUMNS, fmt, title="Row Groups")

    for row in columns:
        row["Compressed"] = format_bytes(row["Compressed"])
        row["Uncompressed"] = format_bytes(row["Uncompressed"])
    emit(
        console,
        columns,
        COLUMN_COLUMNS,
        fmt,
        title="Columns (row group 0)",
        column_styles={"Path": {"style": "cyan"}},
    )
