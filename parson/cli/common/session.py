"""
Per-invocation session state shared by the subcommands.

The main callback stores its settings in ctx.obj; these helpers read them
back with safe defaults so commands also work when invoked on their own.
"""

import logging
import sys
from pathlib import Path
from typing import Any, Callable, Optional, TypeVar

import typer

from parson.cli.common.config import config
from parson.core.errors import ConfigError

T = TypeVar("T")


def session_value(ctx: Optional[typer.Context], key: str, default: Any = None) -> Any:
    obj = ctx.obj if ctx is not None and isinstance(ctx.obj, dict) else {}
    return obj.get(key, default)


def get_config(ctx: Optional[typer.Context] = None):
    return session_value(ctx, 'config', config)


def get_logger(ctx: Optional[typer.Context] = None) -> logging.Logger:
    return session_value(ctx, 'logger') or logging.getLogger("parson")


def is_interactive(ctx: Optional[typer.Context]) -> bool:
    """True when prompting the user is allowed: a terminal on stdin and not --ci."""
    return not session_value(ctx, 'ci', False) and sys.stdin.isatty()


def option_or_setting(value: Any, settings, key: str, convert: Callable[[Any], T], param_hint: str) -> T:
    """
    Convert an explicit option value, or the configured setting when the
    option was not given.

    A bad value from either source is a usage error naming the option that
    overrides it.
    """
    try:
        if value is not None:
            return convert(value)
        return settings.get_as(key, convert)
    except (ValueError, ConfigError) as e:
        raise typer.BadParameter(str(e), param_hint=param_hint)


def configured_input_folder(settings, param_hint: str = "--input-folder") -> Path:
    try:
        return settings.input_folder
    except ConfigError as e:
        raise typer.BadParameter(str(e), param_hint=param_hint)
