#!/usr/bin/env python3
"""
JSON path resolver

Walks a parsed JSON value through a query string and returns an owned copy
of the addressed sub-value. Three query grammars are supported, selected
explicitly by the caller and never mixed:

- dotted:  "items.1.name"   segments separated by "."
- pointer: "/items/1/name"  segments separated by "/", leading "/" optional
- key:     "name"           single flat key lookup against an object root

Delimiter characters inside keys cannot be escaped in the dotted and
pointer grammars.
"""

import copy
import logging
from enum import Enum
from typing import Any, List, Optional

from parson.core.errors import (
    InvalidIndex,
    IndexOutOfBounds,
    KeyNotFound,
    NotIndexable,
    QueryError,
    RootNotObject,
)
from parson.utils.json_parser import parse_json

logger = logging.getLogger(__name__)


class QuerySyntax(str, Enum):
    DOTTED = "dotted"
    POINTER = "pointer"
    KEY = "key"

    @property
    def delimiter(self) -> str:
        return {"dotted": ".", "pointer": "/"}.get(self.value, "")

    @classmethod
    def from_name(cls, name: str) -> "QuerySyntax":
        try:
            return cls(name.strip().lower())
        except ValueError:
            choices = ", ".join(s.value for s in cls)
            raise ValueError(f"Unknown query syntax: {name!r} (expected one of: {choices})") from None


def value_kind(value: Any) -> str:
    """Return the JSON kind name of a decoded value."""
    # bool is a subclass of int
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    raise TypeError(f"Not a JSON value: {type(value).__name__}")


def split_query(query: str, syntax: QuerySyntax = QuerySyntax.DOTTED) -> List[str]:
    """
    Split a query into its ordered segment tokens.

    An empty query (for pointers: empty after trimming the leading "/")
    yields no segments and therefore addresses the root. Empty segments
    inside a query, e.g. "a..b", are kept as empty-string keys.

    Args:
        query: Query string
        syntax: Grammar to split with; KEY queries are a single segment

    Returns:
        List of segment tokens
    """
    if syntax is QuerySyntax.KEY:
        return [query]
    if syntax is QuerySyntax.POINTER and query.startswith("/"):
        query = query[1:]
    if query == "":
        return []
    return query.split(syntax.delimiter)


def parse_index(token: str, length: Optional[int] = None) -> int:
    """Parse an array index segment.

    Only "0" or ASCII digits without a leading zero are accepted. A token
    too long to convert to an int is out of bounds for an array of the given
    length, or an invalid index when no length is given.
    """
    if not token or not token.isascii() or not token.isdigit():
        raise InvalidIndex(token)
    if len(token) > 1 and token[0] == "0":
        raise InvalidIndex(token)
    try:
        return int(token)
    except ValueError:
        # longer than the interpreter's int conversion limit
        if length is not None:
            raise IndexOutOfBounds(token, length) from None
        raise InvalidIndex(token) from None


def _step(current: Any, segment: str) -> Any:
    if isinstance(current, dict):
        if segment not in current:
            raise KeyNotFound(segment)
        return current[segment]
    if isinstance(current, list):
        index = parse_index(segment, len(current))
        if index >= len(current):
            raise IndexOutOfBounds(index, len(current))
        return current[index]
    raise NotIndexable(segment, value_kind(current))


def resolve(root: Any, query: str, syntax: QuerySyntax = QuerySyntax.DOTTED) -> Any:
    """
    Resolve a query against a parsed JSON document.

    Resolution stops at the first failing segment; there is no partial
    result. The input is never modified.

    Args:
        root: Parsed JSON document
        query: Query string in the given syntax
        syntax: Query grammar

    Returns:
        Deep copy of the addressed value

    Raises:
        KeyNotFound, IndexOutOfBounds, InvalidIndex, NotIndexable,
        RootNotObject (KEY syntax only)
    """
    if syntax is QuerySyntax.KEY:
        return resolve_key(root, query)

    current = root
    for position, segment in enumerate(split_query(query, syntax)):
        try:
            current = _step(current, segment)
        except QueryError as e:
            logger.debug(f"Query {query!r} failed at segment {position} ({segment!r}): {e}")
            raise e.with_context(query, position)
    return copy.deepcopy(current)


def resolve_key(root: Any, key: str) -> Any:
    """Single-level lookup: the root must be an object, the key is taken whole."""
    if not isinstance(root, dict):
        raise RootNotObject(value_kind(root)).with_context(key, 0)
    if key not in root:
        raise KeyNotFound(key).with_context(key, 0)
    return copy.deepcopy(root[key])


def query_json(text: str, query: str, syntax: QuerySyntax = QuerySyntax.DOTTED) -> Any:
    """Parse JSON text and resolve a query against it."""
    return resolve(parse_json(text), query, syntax)
