"""Command line interface for ltfsindex."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from ltfsindex.errors import IndexFormatError
from ltfsindex.index.ltfs_index import LTFSIndex
from ltfsindex.models import ExtentDescription, MultipleExtent


console = Console()
err_console = Console(stderr=True)
app = typer.Typer(help="ltfsindex - catalog the files on an LTFS tape")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _open_index(index_file: Path) -> LTFSIndex:
    if not index_file.exists():
        raise typer.BadParameter(f"Index file not found: {index_file}")
    try:
        return LTFSIndex(index_file)
    except IndexFormatError as exc:
        err_console.print(f"[red]Invalid LTFS index {index_file}: {exc}[/red]", soft_wrap=True)
        raise typer.Exit(code=1) from exc


def _extent_summary(extent: ExtentDescription, delimiter: str) -> str:
    if isinstance(extent, MultipleExtent):
        partitions = extent.joined("partition", delimiter)
        return f"{len(extent.extents)} extents (partitions {partitions})"
    if extent.kind == "missing":
        return "-"
    return f"{extent.partition}:{extent.start_block}+{extent.byte_count}"


@app.command()
def header(
    index_file: Path = typer.Argument(..., help="LTFS index XML file."),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Show the tape header of an index."""
    _setup_logging(verbose)
    index = _open_index(index_file)
    fields = index.header.to_dict()

    if as_json:
        typer.echo(json.dumps(fields, indent=2))
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Field")
    table.add_column("Value")
    for key, value in fields.items():
        table.add_row(key, "" if value is None else str(value))
    console.print(table)


@app.command()
def files(
    index_file: Path = typer.Argument(..., help="LTFS index XML file."),
    as_json: bool = typer.Option(False, "--json", help="Print one JSON object per file"),
    limit: Optional[int] = typer.Option(None, help="Only show the first N files", min=1),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """List the files catalogued in an index."""
    _setup_logging(verbose)
    index = _open_index(index_file)
    try:
        records = index.files()
    except IndexFormatError as exc:
        err_console.print(f"[red]Invalid LTFS index {index_file}: {exc}[/red]", soft_wrap=True)
        raise typer.Exit(code=1) from exc

    if not records:
        console.print("[yellow]No files on this tape.[/yellow]")
        return
    if limit is not None:
        records = records[:limit]

    if as_json:
        for record in records:
            typer.echo(json.dumps(record.to_dict()))
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Path")
    table.add_column("Name")
    table.add_column("Size", justify="right")
    table.add_column("Modified")
    table.add_column("UID", justify="right")
    table.add_column("Extent")

    for record in records:
        table.add_row(
            record.filepath,
            record.name,
            str(record.size),
            record.modified_at.strftime("%Y-%m-%d %H:%M:%S"),
            record.unique_id or "",
            _extent_summary(record.extent, index.config.display_delimiter),
        )

    console.print(table)
    console.print(
        f"{len(index)} files on volume [bold]{index.header.volume_name}[/bold]", soft_wrap=True
    )
