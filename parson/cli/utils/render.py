"""
Rendering utilities for Parson command output.
Resolved values go to stdout untouched so they can be piped; status
messages, errors and summary tables go through a rich console on stderr.
"""

from typing import Dict, List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from parson.core.batch import FileResult, summarize

console = Console(stderr=True)


def print_error(message: str, file_path: Optional[str] = None) -> None:
    where = f"{file_path}: " if file_path else ""
    console.print(f"[red]Error:[/red] {escape(where + message)}", highlight=False, soft_wrap=True)


def print_result(result: FileResult, show_header: bool = False) -> None:
    """
    Print one file's result.

    Args:
        result: Processed file result
        show_header: Prefix the output with the file name (used for batches)
    """
    if show_header:
        console.rule(f"[cyan]{escape(result.file)}[/cyan]")
    if not result.success:
        print_error(f"{result.error_type}: {result.error}", result.file)
        return
    if result.output_path:
        console.print(f"[green]✓[/green] Wrote {escape(result.output_path)}", highlight=False, soft_wrap=True)
    else:
        typer.echo(result.output)


def results_table(results: List[FileResult], title: Optional[str] = None) -> Table:
    counts = summarize(results)
    table = Table(title=title or f"Results: {counts['passed']} passed, {counts['failed']} failed")
    table.add_column("File", style="cyan")
    table.add_column("Result")
    table.add_column("Error", style="red")

    for result in results:
        result_text = "[green]PASS[/green]" if result.success else "[red]FAIL[/red]"
        error_text = f"{result.error_type}: {result.error}" if result.error else ""
        table.add_row(escape(result.file), result_text, escape(error_text))

    return table


def print_summary(results: List[FileResult], title: Optional[str] = None) -> Dict[str, int]:
    console.print(results_table(results, title))
    return summarize(results)
