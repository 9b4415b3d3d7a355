#!/usr/bin/env python3
"""
Output formatting for resolved values

Renders a JSON value as one of:
- raw:             compact single-line JSON
- pretty_json:     indented multi-line JSON
- google_cloud_ai: pretty JSON wrapped in a payload/metadata envelope for
                   downstream ingestion
"""

import json
from enum import Enum
from typing import Any, Dict

DEFAULT_INDENT = 2
DEFAULT_SOURCE = "parson"


class OutputFormat(str, Enum):
    RAW = "raw"
    PRETTY_JSON = "pretty_json"
    GOOGLE_CLOUD_AI = "google_cloud_ai"

    @classmethod
    def from_name(cls, name: str) -> "OutputFormat":
        """Look up a format by value or alias, case-insensitively."""
        normalized = name.strip().lower().replace("-", "_")
        normalized = FORMAT_ALIASES.get(normalized, normalized)
        try:
            return cls(normalized)
        except ValueError:
            choices = ", ".join(f.value for f in cls)
            raise ValueError(f"Unknown output format: {name!r} (expected one of: {choices})") from None


FORMAT_ALIASES = {
    "wrapped": "google_cloud_ai",
    "pretty": "pretty_json",
}


def wrap_for_cloud_ai(value: Any, source: str = DEFAULT_SOURCE) -> Dict[str, Any]:
    return {
        "payload": {
            "data": value,
        },
        "metadata": {
            "format": "json",
            "source": source,
        },
    }


def format_value(value: Any, output_format: OutputFormat = OutputFormat.PRETTY_JSON,
                 indent: int = DEFAULT_INDENT, source: str = DEFAULT_SOURCE) -> str:
    """
    Render a JSON value as text.

    Args:
        value: Decoded JSON value
        output_format: Target format
        indent: Indentation for the multi-line formats
        source: Source name recorded in the google_cloud_ai envelope

    Returns:
        Formatted string without a trailing newline
    """
    if output_format is OutputFormat.RAW:
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    if output_format is OutputFormat.GOOGLE_CLOUD_AI:
        value = wrap_for_cloud_ai(value, source)
    return json.dumps(value, ensure_ascii=False, indent=indent)
