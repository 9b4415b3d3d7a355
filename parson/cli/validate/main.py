#!/usr/bin/env python3
"""
Validate subcommand for the Parson CLI

This module implements the 'validate' subcommand, which checks that files
contain well-formed JSON and, optionally, that they conform to a JSON Schema.
"""

import json
import time
from pathlib import Path
from typing import Any, List, Optional

import typer
import jsonschema
from rich.markup import escape

from parson.cli.common.session import get_logger
from parson.cli.utils.render import console, print_error, print_summary
from parson.core.batch import FileResult, summarize
from parson.core.errors import ParsonError, SourceReadError
from parson.core.output import write_output
from parson.core.scanner import find_json_files
from parson.utils.json_parser import load_json_file


def expand_paths(paths: List[Path], recursive: bool = False) -> List[Path]:
    """Replace directories in paths with the JSON files they contain."""
    expanded = []
    for path in paths:
        if path.is_dir():
            expanded.extend(find_json_files(path, recursive=recursive, include_gzip=True))
        else:
            expanded.append(path)
    return expanded


def check_schema(data: Any, schema: dict, result: FileResult) -> None:
    try:
        jsonschema.validate(data, schema)
    except jsonschema.exceptions.ValidationError as e:
        result.success = False
        result.error_type = "ValidationError"
        result.error = e.message
        result.details["path"] = ".".join(str(p) for p in e.path)
        result.details["schema_path"] = ".".join(str(p) for p in e.schema_path)
    except jsonschema.exceptions.SchemaError as e:
        result.success = False
        result.error_type = "SchemaError"
        result.error = f"Schema error: {e.message}"


def validate_file(path: Path, schema: Optional[dict] = None) -> FileResult:
    """
    Validate one file.

    Args:
        path: JSON file
        schema: Optional JSON Schema the document must satisfy

    Returns:
        FileResult with success set and, on failure, the error recorded
    """
    result = FileResult(file=str(path))
    try:
        data = load_json_file(path)
    except ParsonError as e:
        result.error = str(e)
        result.error_type = e.error_type
        return result

    result.success = True
    if schema is not None:
        check_schema(data, schema, result)
    return result


def validate(
    ctx: typer.Context,
    files: List[Path] = typer.Argument(
        ..., help="JSON files or folders to validate"
    ),
    schema_file: Optional[Path] = typer.Option(
        None, "--schema", "-s", help="Path to a JSON Schema the files must satisfy"
    ),
    report_file: Optional[Path] = typer.Option(
        None, "--report", "-r", help="Write validation results to this JSON file"
    ),
    recursive: bool = typer.Option(
        False, "--recursive", "-R", help="Descend into subfolders of folder arguments"
    ),
    fail_fast: bool = typer.Option(
        False, "--fail-fast", help="Stop on first validation failure"
    ),
):
    """
    Check that files contain valid JSON, optionally against a schema.
    """
    logger = get_logger(ctx)

    schema = None
    if schema_file:
        try:
            schema = load_json_file(schema_file)
        except ParsonError as e:
            print_error(f"Invalid schema file: {e}")
            raise typer.Exit(code=1)

    try:
        paths = expand_paths(files, recursive=recursive)
    except SourceReadError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    if not paths:
        console.print("[yellow]Warning:[/yellow] No JSON files to validate", highlight=False)

    results = []
    for path in paths:
        result = validate_file(path, schema)
        results.append(result)
        if result.success:
            console.print(f"[green]✓[/green] {escape(str(path))}", highlight=False, soft_wrap=True)
        else:
            console.print(f"[red]✗[/red] {escape(f'{path}: {result.error}')}", highlight=False, soft_wrap=True)
            if fail_fast:
                logger.error(f"Validation failed on {path}, stopping")
                break

    counts = print_summary(results, title=None) if len(results) > 1 else summarize(results)

    if report_file:
        report = {
            "timestamp": time.time(),
            "schema": str(schema_file) if schema_file else None,
            **counts,
            "results": [r.to_dict() for r in results],
        }
        try:
            written = write_output(json.dumps(report, indent=2), report_file)
            console.print(f"Validation results written to {escape(str(written))}", highlight=False, soft_wrap=True)
        except ParsonError as e:
            print_error(str(e))
            raise typer.Exit(code=1)

    if counts["failed"]:
        raise typer.Exit(code=1)
