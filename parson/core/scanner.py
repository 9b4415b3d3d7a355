#!/usr/bin/env python3
"""
Discovery of JSON files in an input folder.
"""

import logging
from pathlib import Path
from typing import List, Union

from parson.core.errors import SourceReadError

logger = logging.getLogger(__name__)


def is_json_file(path: Path, include_gzip: bool = False) -> bool:
    name = path.name.lower()
    if name.endswith(".json"):
        return True
    return include_gzip and name.endswith(".json.gz")


def find_json_files(folder: Union[str, Path], recursive: bool = False,
                    include_gzip: bool = False) -> List[Path]:
    """
    List JSON files in a folder.

    Args:
        folder: Folder to scan
        recursive: Descend into subfolders
        include_gzip: Also match *.json.gz files

    Returns:
        Sorted list of file paths

    Raises:
        SourceReadError: If the folder does not exist or is not a directory
    """
    folder = Path(folder)
    if not folder.exists():
        raise SourceReadError(folder, "folder does not exist")
    if not folder.is_dir():
        raise SourceReadError(folder, "not a directory")

    candidates = folder.rglob("*") if recursive else folder.iterdir()
    files = sorted(p for p in candidates if p.is_file() and is_json_file(p, include_gzip))
    logger.debug(f"Found {len(files)} JSON files in {folder} (recursive={recursive})")
    return files
