#!/usr/bin/env python3
"""
Scan subcommand for the Parson CLI

Lists the JSON files in a folder (the configured input folder by default)
with their size, whether they parse, and the kind of their top-level value.
"""

from pathlib import Path
from typing import Dict, List, Optional

import typer
from rich.table import Table

from parson.cli.common.session import configured_input_folder, get_config, get_logger
from parson.cli.utils.render import console, print_error
from parson.core.errors import ParsonError, SourceReadError
from parson.core.query import value_kind
from parson.core.scanner import find_json_files
from parson.utils.json_parser import load_json_file


def describe_file(path: Path) -> Dict[str, object]:
    entry = {"file": str(path), "size": path.stat().st_size, "valid": False, "kind": None, "error": None}
    try:
        entry["kind"] = value_kind(load_json_file(path))
        entry["valid"] = True
    except ParsonError as e:
        entry["error"] = str(e)
    return entry


def scan_table(entries: List[Dict[str, object]], folder: Path) -> Table:
    table = Table(title=f"JSON files in {folder}")
    table.add_column("File", style="cyan")
    table.add_column("Size", justify="right")
    table.add_column("Valid")
    table.add_column("Top-level")
    for entry in entries:
        table.add_row(
            str(Path(entry["file"]).relative_to(folder)),
            str(entry["size"]),
            "[green]yes[/green]" if entry["valid"] else "[red]no[/red]",
            entry["kind"] or "-",
        )
    return table


def scan(
    ctx: typer.Context,
    folder: Optional[Path] = typer.Argument(
        None, help="Folder to scan (defaults to the configured input folder)"
    ),
    recursive: bool = typer.Option(
        False, "--recursive", "-R", help="Descend into subfolders"
    ),
):
    """
    List JSON files in a folder and check that they parse.
    """
    logger = get_logger(ctx)
    folder = folder or configured_input_folder(get_config(ctx), param_hint="FOLDER")

    try:
        files = find_json_files(folder, recursive=recursive, include_gzip=True)
    except SourceReadError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    entries = [describe_file(path) for path in files]
    for entry in entries:
        if entry["error"]:
            logger.warning(entry["error"])

    console.print(scan_table(entries, folder))
    invalid = sum(1 for e in entries if not e["valid"])
    console.print(f"{len(entries)} files, {invalid} invalid", highlight=False)
