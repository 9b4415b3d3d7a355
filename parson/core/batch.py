#!/usr/bin/env python3
"""
Sequential multi-file query processing

Each file is parsed, queried, formatted and optionally written on its own.
A failure is recorded in that file's FileResult and processing moves on to
the next file, so one bad input never hides the results of the others.
"""

import logging
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from parson.core.errors import ParsonError
from parson.core.formatter import DEFAULT_INDENT, DEFAULT_SOURCE, OutputFormat, format_value
from parson.core.output import output_path_for, write_output
from parson.core.query import QuerySyntax, resolve
from parson.utils.json_parser import load_json_file

logger = logging.getLogger(__name__)


@dataclass
class FileResult:
    """Outcome of processing one file."""
    file: str
    success: bool = False
    value: Any = None
    output: Optional[str] = None
    output_path: Optional[str] = None
    error: Optional[str] = None
    error_type: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def process_file(path: Union[str, Path], query: str,
                 syntax: QuerySyntax = QuerySyntax.DOTTED,
                 output_format: OutputFormat = OutputFormat.PRETTY_JSON,
                 indent: int = DEFAULT_INDENT,
                 source: str = DEFAULT_SOURCE,
                 output_dir: Optional[Union[str, Path]] = None,
                 compress: bool = False) -> FileResult:
    """
    Resolve a query against one file.

    Args:
        path: JSON file to read
        query: Query string
        syntax: Query grammar
        output_format: Rendering of the resolved value
        indent: Indentation for multi-line formats
        source: Source name for the google_cloud_ai envelope
        output_dir: If set, the rendered value is written there
        compress: Gzip the written output

    Returns:
        FileResult; errors are captured, not raised
    """
    result = FileResult(file=str(path), details={"query": query, "syntax": syntax.value})
    try:
        document = load_json_file(path)
        result.value = resolve(document, query, syntax)
        result.output = format_value(result.value, output_format, indent=indent, source=source)
        if output_dir is not None:
            target = output_path_for(path, output_dir, compress)
            result.output_path = str(write_output(result.output, target, compress=compress))
        result.success = True
    except ParsonError as e:
        result.error = str(e)
        result.error_type = e.error_type
        logger.debug(f"{path}: {e.error_type}: {e}")
    return result


def process_files(paths: Iterable[Union[str, Path]], query: str, **options) -> List[FileResult]:
    """Process files one after another; see process_file for options."""
    results = []
    for path in paths:
        result = process_file(path, query, **options)
        if result.success:
            logger.info(f"Resolved {query!r} in {path}")
        else:
            logger.warning(f"Failed to resolve {query!r} in {path}: {result.error}")
        results.append(result)
    return results


def summarize(results: List[FileResult]) -> Dict[str, int]:
    passed = sum(1 for r in results if r.success)
    return {
        "total": len(results),
        "passed": passed,
        "failed": len(results) - passed,
    }
