#!/usr/bin/env python3
"""
Interactive menu for the Parson CLI

This module implements the 'menu' subcommand and the prompts the other
commands fall back to when a required choice was not given on the command
line. Choices are numbered; all state for one session lives in a MenuState
object passed between the steps.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import typer
from rich.prompt import Prompt, Confirm

from parson.cli.common.config import non_negative_int
from parson.cli.common.session import (
    configured_input_folder,
    get_config,
    get_logger,
    is_interactive,
    option_or_setting,
)
from parson.cli.utils.render import console, print_error, print_result
from parson.core.batch import FileResult, process_file
from parson.core.errors import SourceReadError
from parson.core.formatter import OutputFormat
from parson.core.query import QuerySyntax
from parson.core.scanner import find_json_files

QUIT_CHOICE = "q"


@dataclass
class MenuState:
    """Selections made during one menu session."""
    files: List[Path] = field(default_factory=list)
    selected_file: Optional[Path] = None
    query: Optional[str] = None
    syntax: QuerySyntax = QuerySyntax.DOTTED
    output_format: OutputFormat = OutputFormat.PRETTY_JSON
    history: List[FileResult] = field(default_factory=list)


def prompt_for_file(files: List[Path]) -> Optional[Path]:
    """Show the files as a numbered list; returns None when the user quits."""
    for number, path in enumerate(files, start=1):
        console.print(f"  [bold]{number}[/bold]. {path.name}", highlight=False)
    choices = [str(n) for n in range(1, len(files) + 1)] + [QUIT_CHOICE]
    answer = Prompt.ask("Select a file", console=console, choices=choices, default="1")
    if answer == QUIT_CHOICE:
        return None
    return files[int(answer) - 1]


def prompt_for_query(syntax: QuerySyntax = QuerySyntax.DOTTED) -> str:
    examples = {
        QuerySyntax.DOTTED: "items.0.name",
        QuerySyntax.POINTER: "/items/0/name",
        QuerySyntax.KEY: "name",
    }
    return Prompt.ask(f"Query ({syntax.value}, e.g. {examples[syntax]})", console=console, default="")


def prompt_for_format(default: OutputFormat = OutputFormat.PRETTY_JSON) -> OutputFormat:
    answer = Prompt.ask(
        "Output format",
        console=console,
        choices=[f.value for f in OutputFormat],
        default=default.value,
    )
    return OutputFormat(answer)


def run_selection(state: MenuState, indent: int, source: str) -> FileResult:
    result = process_file(
        state.selected_file,
        state.query,
        syntax=state.syntax,
        output_format=state.output_format,
        indent=indent,
        source=source,
    )
    state.history.append(result)
    return result


def menu(
    ctx: typer.Context,
    folder: Optional[str] = typer.Argument(
        None, help="Folder to browse (defaults to the configured input folder)"
    ),
    syntax: Optional[str] = typer.Option(
        None, "--syntax", "-s", help="Query syntax: dotted, pointer or key"
    ),
):
    """
    Browse JSON files interactively and query them.
    """
    logger = get_logger(ctx)
    settings = get_config(ctx)

    if not is_interactive(ctx):
        print_error("The menu requires an interactive terminal (use 'parson query' instead)")
        raise typer.Exit(code=2)

    query_syntax = option_or_setting(syntax, settings, "query.syntax", QuerySyntax.from_name, "--syntax")
    default_format = option_or_setting(None, settings, "output.format", OutputFormat.from_name, "output.format")
    indent = option_or_setting(None, settings, "output.indent", non_negative_int, "output.indent")
    source = option_or_setting(None, settings, "output.source", str, "output.source")

    folder_path = Path(folder) if folder else configured_input_folder(settings, param_hint="FOLDER")
    try:
        files = find_json_files(folder_path)
    except SourceReadError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    if not files:
        print_error(f"No JSON files found in {folder_path}")
        raise typer.Exit(code=1)

    state = MenuState(files=files, syntax=query_syntax, output_format=default_format)

    while True:
        state.selected_file = prompt_for_file(state.files)
        if state.selected_file is None:
            break
        state.query = prompt_for_query(state.syntax)
        state.output_format = prompt_for_format(state.output_format)

        logger.debug(f"Menu selection: {state.selected_file} {state.query!r} {state.output_format.value}")
        print_result(run_selection(state, indent, source), show_header=True)

        if not Confirm.ask("Run another query?", console=console, default=True):
            break

    failed = sum(1 for r in state.history if not r.success)
    console.print(f"{len(state.history)} queries run, {failed} failed", highlight=False)
