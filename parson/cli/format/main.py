#!/usr/bin/env python3
"""
Format subcommand for the Parson CLI

Pretty-prints (or compacts) whole JSON documents, to stdout or to an output
directory, optionally gzip-compressed.
"""

from pathlib import Path
from typing import List, Optional

import typer

from parson.cli.common.config import non_negative_int
from parson.cli.common.session import get_config, option_or_setting
from parson.cli.utils.render import print_result, print_summary
from parson.core.batch import process_files
from parson.core.formatter import OutputFormat


def format_files(
    ctx: typer.Context,
    files: List[Path] = typer.Argument(
        ..., help="JSON files to format"
    ),
    indent: Optional[int] = typer.Option(
        None, "--indent", "-i", min=0, help="Indentation width"
    ),
    compact: bool = typer.Option(
        False, "--compact", "-c", help="Single-line output instead of pretty-printing"
    ),
    output_dir: Optional[Path] = typer.Option(
        None, "--output-dir", "-o", help="Write formatted files to this directory instead of stdout"
    ),
    compress: bool = typer.Option(
        False, "--gzip", help="Gzip-compress written files (requires --output-dir)"
    ),
):
    """
    Pretty-print JSON files.
    """
    settings = get_config(ctx)
    if compress and output_dir is None:
        raise typer.BadParameter("--gzip requires --output-dir", param_hint="--gzip")

    # The empty dotted query addresses the whole document
    results = process_files(
        files,
        "",
        output_format=OutputFormat.RAW if compact else OutputFormat.PRETTY_JSON,
        indent=option_or_setting(indent, settings, "output.indent", non_negative_int, "--indent"),
        output_dir=output_dir,
        compress=compress,
    )

    batch = len(results) > 1
    for result in results:
        print_result(result, show_header=batch and output_dir is None)

    failed = print_summary(results)["failed"] if batch else int(not results[0].success)
    if failed:
        raise typer.Exit(code=1)
