#!/usr/bin/env python3
"""
Parson CLI: Main entry point

This module provides the main CLI interface for Parson, configuring logging
and configuration for the session and registering the subcommands.
"""

import logging
import sys
import platform
import importlib
from importlib.metadata import entry_points, version as get_version, PackageNotFoundError
from typing import Optional, Tuple

import typer
from rich.console import Console
from rich.logging import RichHandler
from pythonjsonlogger.json import JsonFormatter

from parson.cli.common.config import reload as reload_config
from parson.core.errors import ConfigError

# Initialize the main Typer app
app = typer.Typer(
    help="Parson: inspect, query and reformat JSON files",
    add_completion=True,
    no_args_is_help=True,
)

COMMAND_GROUP = "parson.commands"

BUILTIN_COMMANDS = {
    "query": "parson.cli.query.main:query",
    "validate": "parson.cli.validate.main:validate",
    "format": "parson.cli.format.main:format_files",
    "scan": "parson.cli.scan.main:scan",
    "menu": "parson.cli.menu.main:menu",
}

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(verbose: bool = False, quiet: bool = False, json_logs: bool = False, log_file: Optional[str] = None,
                  no_color: bool = False, ci: bool = False) -> Tuple[Console, logging.Logger]:
    """
    Configure logging based on CLI options.

    Args:
        verbose: Enable verbose logging
        quiet: Suppress all output except errors
        json_logs: Output logs in JSON format
        log_file: Optional path to log file
        no_color: Disable colored output
        ci: Run in CI mode (disables colors and highlighting)

    Returns:
        tuple[Console, Logger]: The configured console and logger instances
    """
    log_console = Console(
        stderr=True,
        color_system=None if no_color or ci else "auto",
        highlight=not ci,
    )

    if quiet:
        log_level = logging.ERROR
    elif verbose:
        log_level = logging.DEBUG
    else:
        log_level = logging.INFO

    handlers = []

    if json_logs and not log_file:
        # Structured logs replace the rich handler on stderr
        stream_handler = logging.StreamHandler(sys.stderr)
        stream_handler.setLevel(log_level)
        stream_handler.setFormatter(JsonFormatter(LOG_FORMAT))
        handlers.append(stream_handler)
    elif not quiet:
        console_handler = RichHandler(
            console=log_console,
            show_path=verbose,
            show_time=verbose,
            rich_tracebacks=True,
            markup=False,
        )
        console_handler.setLevel(log_level)
        handlers.append(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)  # Always debug level for file
        if json_logs:
            file_handler.setFormatter(JsonFormatter(LOG_FORMAT))
        else:
            file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handlers.append(file_handler)

    # The root level must admit DEBUG records when a file handler wants them
    root_level = logging.DEBUG if log_file else log_level
    logging.basicConfig(
        level=root_level,
        handlers=handlers,
        force=True  # Override any existing configuration
    )

    logger = logging.getLogger("parson")
    logger.debug(f"Logging configured: level={log_level}, quiet={quiet}, verbose={verbose}")

    return log_console, logger


def version_callback(version: bool):
    """Handle version flag."""
    if version:
        try:
            version_str = get_version("parson")
        except PackageNotFoundError:
            from parson import __version__ as version_str

        typer.echo(f"Parson v{version_str}")
        typer.echo(f"Python {platform.python_version()}")
        typer.echo(f"Platform: {platform.platform()}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress all output except errors"),
    ci: bool = typer.Option(False, "--ci", help="Run in non-interactive CI mode"),
    json_logs: bool = typer.Option(False, "--log-json", help="Output logs in JSON format"),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Path to log file"),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colored output"),
    config_file: Optional[str] = typer.Option(None, "--config", help="Path to config.toml"),
    version: bool = typer.Option(False, "--version", help="Show version and exit", callback=version_callback,
                                 is_eager=True),
):
    """
    Parson: inspect, query and reformat JSON files.

    Queries use dotted paths (items.0.name) by default; --syntax pointer
    selects JSON-Pointer style (/items/0/name) and --syntax key a single
    top-level key lookup.

    Use 'parson COMMAND --help' to get help for specific commands.
    """
    setup_console, logger = setup_logging(
        verbose=verbose,
        quiet=quiet,
        json_logs=json_logs,
        log_file=log_file,
        no_color=no_color,
        ci=ci
    )

    try:
        settings = reload_config(config_file, strict=config_file is not None)
    except ConfigError as e:
        setup_console.print(f"[red]Error:[/red] {e}", highlight=False)
        raise typer.Exit(code=2)

    ctx.ensure_object(dict)
    ctx.obj['console'] = setup_console
    ctx.obj['logger'] = logger
    ctx.obj['config'] = settings
    ctx.obj['verbose'] = verbose
    ctx.obj['quiet'] = quiet
    ctx.obj['ci'] = ci


def _import_builtin_commands() -> int:
    """Register the commands shipped with Parson by importing them directly."""
    registered = 0
    for name, target in BUILTIN_COMMANDS.items():
        module_name, _, attr = target.partition(":")
        command = getattr(importlib.import_module(module_name), attr)
        app.command(name=name)(command)
        registered += 1
    return registered


def load_commands() -> int:
    """
    Register subcommands from the parson.commands entry point group.

    Falls back to the built-in command table when the package metadata is
    not available (e.g. running from a source checkout without install).

    Returns:
        Number of commands registered
    """
    registered = 0
    for ep in entry_points(group=COMMAND_GROUP):
        app.command(name=ep.name)(ep.load())
        registered += 1

    if not registered:
        registered = _import_builtin_commands()
    return registered


load_commands()

if __name__ == "__main__":
    app()
