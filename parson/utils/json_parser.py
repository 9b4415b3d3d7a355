#!/usr/bin/env python3
"""
JSON parsing utilities

Thin wrappers around the standard json decoder that turn decoder and
filesystem failures into Parson errors carrying the source path.

Usage:
    data = load_json_file("manifest.json")
    data = parse_json('{"retention_days": 7}', source="<inline>")
"""

import gzip
import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

from parson.core.errors import ParseError, SourceReadError

logger = logging.getLogger(__name__)


def _reject_constant(name: str):
    raise ValueError(f"{name} is not valid JSON")


def parse_json(text: str, source: Optional[str] = None) -> Any:
    """
    Parse JSON text.

    Strictness is the standard decoder's, except that the non-standard
    constants NaN, Infinity and -Infinity are rejected. For duplicate keys
    the last occurrence wins.

    Args:
        text: JSON text
        source: Optional name of the text's origin, used in error messages

    Returns:
        Decoded JSON value

    Raises:
        ParseError: If the text is not valid JSON
    """
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise ParseError(e.msg, source=source, line=e.lineno, column=e.colno) from e
    except ValueError as e:
        raise ParseError(str(e), source=source) from e


def read_text(file_path: Union[str, Path]) -> str:
    """Read a UTF-8 text file, decompressing it first if it ends in .gz."""
    path = Path(file_path)
    try:
        if path.suffix == ".gz":
            with gzip.open(path, "rt", encoding="utf-8") as f:
                return f.read()
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise SourceReadError(path, "file does not exist") from None
    except IsADirectoryError:
        raise SourceReadError(path, "is a directory") from None
    except (OSError, UnicodeDecodeError) as e:
        raise SourceReadError(path, str(e)) from e


def load_json_file(file_path: Union[str, Path]) -> Any:
    """Read and parse a JSON file."""
    text = read_text(file_path)
    logger.debug(f"Read {len(text)} characters from {file_path}")
    return parse_json(text, source=str(file_path))
