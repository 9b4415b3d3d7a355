"""Parson: inspect, query and reformat JSON files from the command line.

This package provides the path resolver used to extract values from parsed
JSON documents, together with the formatting, batch and CLI layers built
around it.
"""

__version__ = "0.4.0"
