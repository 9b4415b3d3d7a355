#!/usr/bin/env python3
"""
Writing rendered output to disk, optionally gzip-compressed.
"""

import gzip
import logging
from pathlib import Path
from typing import Union

from parson.core.errors import OutputError

logger = logging.getLogger(__name__)


def output_path_for(source: Union[str, Path], output_dir: Union[str, Path],
                    compress: bool = False) -> Path:
    """Map an input file to its output file inside output_dir.

    "data/report.json" and "data/report.json.gz" both become
    "<output_dir>/report.json", plus ".gz" when compressing.
    """
    name = Path(source).name
    if name.endswith(".gz"):
        name = name[:-3]
    stem = name[:-5] if name.endswith(".json") else name
    suffix = ".json.gz" if compress else ".json"
    return Path(output_dir) / f"{stem}{suffix}"


def write_output(text: str, path: Union[str, Path], compress: bool = False) -> Path:
    """
    Write text to path with a trailing newline.

    Args:
        text: Rendered output
        path: Destination file; parent directories are created
        compress: Write gzip-compressed bytes

    Returns:
        The path written

    Raises:
        OutputError: If the file cannot be written
    """
    path = Path(path)
    data = text if text.endswith("\n") else text + "\n"
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        if compress:
            with gzip.open(path, "wt", encoding="utf-8", newline="\n") as f:
                f.write(data)
        else:
            path.write_text(data, encoding="utf-8", newline="\n")
    except OSError as e:
        raise OutputError(path, e.strerror or str(e)) from e
    logger.debug(f"Wrote {len(data)} characters to {path} (compressed={compress})")
    return path
