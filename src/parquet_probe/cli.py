"""parquet-probe CLI."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console

from parquet_probe import __version__, formatters
from parquet_probe.config import ProbeConfig, resolve_probe_config, setup_logging
from parquet_probe.errors import FatalError
from parquet_probe.output import OutputFormat
from parquet_probe.reader import ParquetPageSource
from parquet_probe.session import MAX_DOCUMENTS, Session

log = logging.getLogger(__name__)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"parquet-probe {__version__}")
        raise typer.Exit()


app = typer.Typer(
    name="parquet-probe",
    help="Compare how Parquet files lay out a column's pages.",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)


# ─── error handling ───────────────────────────────────────────


def _friendly_error(e: Exception) -> None:
    """Print a friendly error message instead of a raw traceback, then exit 1."""
    if isinstance(e, FatalError):
        reason = e.reason.lower()
        if "does not exist" in reason:
            err_console.print(
                f"[red bold]File not found:[/red bold] {e.path}\n"
                "  Check the path and try again."
            )
        elif "not a valid parquet" in reason:
            err_console.print(
                f"[red bold]Not a Parquet file:[/red bold] {e.path}\n"
                "  The footer could not be parsed. Is the file complete?"
            )
        elif "out of range" in reason or "has no column" in reason:
            err_console.print(
                f"[red bold]Invalid selection:[/red bold] {e.path}: {e.reason}\n"
                "  Run [bold]parquet-probe info <file>[/bold] to see its row groups and columns."
            )
        elif "at most" in reason:
            err_console.print(
                f"[red bold]Too many files:[/red bold] {e.reason}.\n"
                f"  Pass up to {MAX_DOCUMENTS} paths."
            )
        else:
            err_console.print(f"[red bold]Cannot open file:[/red bold] {e}")
    elif isinstance(e, ValueError):
        err_console.print(f"[red bold]Config error:[/red bold] {e}")
    else:
        err_console.print(f"[red bold]Error:[/red bold] {e}")
    log.error("fatal: %s", e)
    raise SystemExit(1)


def _run(fn):
    """Execute *fn* with friendly error handling."""
    try:
        return fn()
    except SystemExit:
        raise
    except Exception as e:
        _friendly_error(e)


def _config(ctx: typer.Context, row_group: int | None, column: int | None) -> ProbeConfig:
    base: ProbeConfig = ctx.obj["config"]
    return ProbeConfig(
        row_group=base.row_group if row_group is None else row_group,
        column=base.column if column is None else column,
        log_file=base.log_file,
    )


# ─── global callback ─────────────────────────────────────────


@app.callback()
def main(
    ctx: typer.Context,
    output: OutputFormat = typer.Option(  # noqa: B008
        OutputFormat.TABLE, "--output", "-o", help="Output format (table, json, csv)"
    ),
    env_file: Path | None = typer.Option(  # noqa: B008
        None,
        "--env-file",
        "-e",
        help="Path to .env file to load",
        exists=True,
        dir_okay=False,
    ),
    log_file: str | None = typer.Option(
        None, "--log-file", help="Write debug logs to this file"
    ),
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
):
    """Compare how Parquet files lay out a column's pages."""
    if env_file:
        load_dotenv(env_file, override=True)
    else:
        load_dotenv()

    ctx.ensure_object(dict)

    try:
        config = resolve_probe_config(log_file=log_file)
    except ValueError as exc:
        err_console.print(f"[red bold]Config error:[/red bold] {exc}")
        if "referenced in config but not set" in str(exc):
            err_console.print(
                "\n  Your config file uses ${{VAR}} placeholders that need matching\n"
                "  environment variables. Export them or put them in a .env file."
            )
        elif "invalid yaml" in str(exc).lower():
            err_console.print("\n  Fix the syntax error in your config file and try again.")
        raise SystemExit(1) from None

    setup_logging(config.log_file)
    ctx.obj["config"] = config
    ctx.obj["output_format"] = output


# ─── tui ──────────────────────────────────────────────────────


def _launch(session: Session) -> None:
    from parquet_probe.tui.app import ProbeApp

    tui_app = ProbeApp(session)
    try:
        tui_app.run()
    except Exception as exc:
        log.exception("TUI crashed")
        err_console.print(
            f"[red bold]TUI crashed:[/red bold] {exc}\n"
            "  Try [bold]parquet-probe pages <files>[/bold] for a plain listing instead."
        )
        raise SystemExit(1) from None


@app.command()
def tui(
    ctx: typer.Context,
    paths: list[str] = typer.Argument(help="Parquet files to compare (up to five)"),
    row_group: int | None = typer.Option(
        None, "--row-group", "-r", min=0, help="Row group to start on (default: 0)"
    ),
    column: int | None = typer.Option(
        None, "--column", "-c", min=0, help="Column to start on (default: 0)"
    ),
) -> None:
    """Launch the interactive page inspector.

    Arrow keys change the focused file's row group (up/down) and column
    (left/right); tab moves focus to the next file; q or escape quits.
    """
    config = _config(ctx, row_group, column)
    session = _run(
        lambda: Session.open(ParquetPageSource(), paths, config.row_group, config.column)
    )
    try:
        _launch(session)
    finally:
        session.close()


# ─── pages ────────────────────────────────────────────────────


@app.command()
def pages(
    ctx: typer.Context,
    paths: list[str] = typer.Argument(help="Parquet files to list (up to five)"),
    row_group: int | None = typer.Option(
        None, "--row-group", "-r", min=0, help="Row group to list (default: 0)"
    ),
    column: int | None = typer.Option(
        None, "--column", "-c", min=0, help="Column to list (default: 0)"
    ),
) -> None:
    """Print the pages of one row group / column for each file."""
    config = _config(ctx, row_group, column)
    fmt: OutputFormat = ctx.obj["output_format"]

    def _do():
        session = Session.open(ParquetPageSource(), paths, config.row_group, config.column)
        try:
            formatters.render_pages(console, session, fmt=fmt)
        finally:
            session.close()

    _run(_do)


# ─── info ─────────────────────────────────────────────────────


@app.command()
def info(
    ctx: typer.Context,
    path: str = typer.Argument(help="Parquet file"),
) -> None:
    """Show the row groups and columns of a file."""
    fmt: OutputFormat = ctx.obj["output_format"]

    def _do():
        source = ParquetPageSource()
        handle = source.open(path)
        try:
            formatters.render_file_info(console, handle, fmt=fmt)
        finally:
            source.close(handle)

    _run(_do)


# ─── demo ─────────────────────────────────────────────────────


@app.command()
def demo(ctx: typer.Context) -> None:
    """Try parquet-probe with sample files, no data of your own needed.

    Writes two versions of the same table with different page settings
    and opens them side by side.  Cleaned up automatically on exit.
    """
    from parquet_probe.demo import cleanup_demo, create_demo_files

    console.print("[bold]parquet-probe demo[/bold]\n\n  Writing sample files...\n")

    try:
        demo_dir, files = create_demo_files()
    except Exception as exc:
        err_console.print(f"[red bold]Failed to create demo files:[/red bold] {exc}")
        raise SystemExit(1) from None

    try:
        session = _run(lambda: Session.open(ParquetPageSource(), [str(f) for f in files]))
        for i, doc in enumerate(session.documents):
            console.print(
                f"  [green]✓[/green] File {session.label(i)}: {Path(doc.path).name:<28} "
                f"{doc.row_group_count} row groups"
            )
        console.print("\n  Launching TUI, press [bold]q[/bold] to quit\n")
        try:
            _launch(session)
        finally:
            session.close()
    finally:
        cleanup_demo(demo_dir)
        console.print("[dim]Demo files cleaned up.[/dim]")
