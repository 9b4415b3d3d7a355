#!/usr/bin/env python3
"""
Parson error taxonomy

All failures raised by the core modules derive from ParsonError so the CLI
can report them per file without aborting a batch:

1. ParseError / SourceReadError for input that cannot be read or decoded
2. QueryError subclasses for every way a query can miss its target
3. ConfigError / OutputError for configuration and output problems
"""

from typing import Optional, Union


class ParsonError(Exception):
    """Base class for all Parson errors."""

    @property
    def error_type(self) -> str:
        return type(self).__name__


class ParseError(ParsonError):
    """Raised when JSON text cannot be decoded.

    The message is the underlying decoder's message; line and column are
    kept separately so callers can point at the offending location.
    """

    def __init__(self, message: str, source: Optional[str] = None,
                 line: Optional[int] = None, column: Optional[int] = None):
        self.message = message
        self.source = source
        self.line = line
        self.column = column
        super().__init__(self._describe())

    def _describe(self) -> str:
        where = f"{self.source}: " if self.source else ""
        if self.line is not None:
            return f"{where}Invalid JSON: {self.message} (line {self.line}, column {self.column})"
        return f"{where}Invalid JSON: {self.message}"


class SourceReadError(ParsonError):
    """Raised when an input file or folder cannot be read."""

    def __init__(self, path, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Could not read {self.path}: {reason}")


class ConfigError(ParsonError):
    def __init__(self, path, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Invalid configuration file {self.path}: {reason}")


class OutputError(ParsonError):
    def __init__(self, path, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Could not write {self.path}: {reason}")


class QueryError(ParsonError):
    """Base class for resolver failures.

    Attributes:
        query: The full query string, attached by the resolver
        position: Zero-based index of the failing segment, if known
    """

    def __init__(self, message: str):
        self.query: Optional[str] = None
        self.position: Optional[int] = None
        super().__init__(message)

    def with_context(self, query: str, position: Optional[int] = None) -> "QueryError":
        self.query = query
        self.position = position
        return self

    def __str__(self) -> str:
        message = super().__str__()
        if self.query is not None:
            return f"{message} (query: {self.query!r})"
        return message


class KeyNotFound(QueryError):
    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Key not found: {key!r}")


class IndexOutOfBounds(QueryError):
    """The index is past the end of the array.

    index is kept as the original token when it was too long to convert.
    """

    def __init__(self, index: Union[int, str], length: int):
        self.index = index
        self.length = length
        super().__init__(f"Index {index} out of bounds for array of length {length}")


# Older name for the same failure
IndexNotFound = IndexOutOfBounds


class InvalidIndex(QueryError):
    """The segment addressing an array is not a base-10 non-negative integer."""

    def __init__(self, token: str):
        self.token = token
        super().__init__(f"Invalid array index: {token!r}")


class NotIndexable(QueryError):
    def __init__(self, segment: str, kind: str):
        self.segment = segment
        self.kind = kind
        super().__init__(f"Cannot descend into {kind} value with segment {segment!r}")


class RootNotObject(QueryError):
    """Key lookup was requested against a root that is not a JSON object."""

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"Root value is not an object (found {kind})")
