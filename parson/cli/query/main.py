#!/usr/bin/env python3
"""
Query subcommand for the Parson CLI

This module implements the 'query' subcommand: resolve a query against one
or more JSON files and print (or write) the addressed values. Files are
processed one after another and each reports its own status, so a failure
on one file does not stop the others.
"""

from pathlib import Path
from typing import List, Optional

import typer

from parson.cli.common.config import boolean, non_negative_int
from parson.cli.common.session import (
    configured_input_folder,
    get_config,
    get_logger,
    is_interactive,
    option_or_setting,
)
from parson.cli.menu.main import prompt_for_format, prompt_for_query
from parson.cli.utils.render import print_error, print_result, print_summary
from parson.core.batch import process_files
from parson.core.errors import SourceReadError
from parson.core.formatter import OutputFormat
from parson.core.query import QuerySyntax
from parson.core.scanner import find_json_files


def query(
    ctx: typer.Context,
    files: Optional[List[Path]] = typer.Argument(
        None, help="JSON files to query (defaults to every file in the input folder)"
    ),
    query_text: Optional[str] = typer.Option(
        None, "--query", "-k", help="Query, e.g. items.0.name (dotted) or /items/0/name (pointer)"
    ),
    syntax: Optional[str] = typer.Option(
        None, "--syntax", "-s", help="Query syntax: dotted, pointer or key"
    ),
    output_format: Optional[str] = typer.Option(
        None, "--format", "-f", help="Output format: raw, pretty_json, google_cloud_ai (wrapped)"
    ),
    indent: Optional[int] = typer.Option(
        None, "--indent", "-i", min=0, help="Indentation for pretty output"
    ),
    source: Optional[str] = typer.Option(
        None, "--source", help="Source name recorded in the google_cloud_ai envelope"
    ),
    output_dir: Optional[Path] = typer.Option(
        None, "--output-dir", "-o", help="Write each result to this directory instead of stdout"
    ),
    compress: Optional[bool] = typer.Option(
        None, "--gzip/--no-gzip", help="Gzip-compress written results (requires --output-dir)"
    ),
    input_folder: Optional[Path] = typer.Option(
        None, "--input-folder", help="Folder scanned when no files are given"
    ),
):
    """
    Extract a value from JSON files by dotted path or JSON Pointer.
    """
    logger = get_logger(ctx)
    settings = get_config(ctx)
    interactive = is_interactive(ctx)

    query_syntax = option_or_setting(syntax, settings, "query.syntax", QuerySyntax.from_name, "--syntax")

    if query_text is None:
        if not interactive:
            raise typer.BadParameter("a query is required in non-interactive mode", param_hint="--query")
        query_text = prompt_for_query(query_syntax)

    fmt = option_or_setting(output_format, settings, "output.format", OutputFormat.from_name, "--format")
    if output_format is None and interactive:
        fmt = prompt_for_format(fmt)

    indent = option_or_setting(indent, settings, "output.indent", non_negative_int, "--indent")
    source = option_or_setting(source, settings, "output.source", str, "--source")

    if output_dir is None and settings.get("folders.output_folder"):
        output_dir = option_or_setting(None, settings, "folders.output_folder", Path, "--output-dir")
    compress = option_or_setting(compress, settings, "output.gzip", boolean, "--gzip")
    if compress and output_dir is None:
        raise typer.BadParameter("--gzip requires --output-dir", param_hint="--gzip")

    if not files:
        folder = input_folder or configured_input_folder(settings)
        try:
            files = find_json_files(folder)
        except SourceReadError as e:
            print_error(str(e))
            raise typer.Exit(code=1)
        if not files:
            print_error(f"No JSON files found in {folder}")
            raise typer.Exit(code=1)
        logger.info(f"Querying {len(files)} files from {folder}")

    results = process_files(
        files,
        query_text,
        syntax=query_syntax,
        output_format=fmt,
        indent=indent,
        source=source,
        output_dir=output_dir,
        compress=compress,
    )

    batch = len(results) > 1
    for result in results:
        print_result(result, show_header=batch)

    if batch:
        counts = print_summary(results)
    else:
        counts = {"failed": 0 if results[0].success else 1}

    if counts["failed"]:
        raise typer.Exit(code=1)
