#!/usr/bin/env python3
"""
Tests for the JSON path resolver

Covers the dotted, pointer and single-key grammars, every failure type,
and the guarantee that resolved values are copies of the document.
"""

import os
import sys
import json

import pytest

# Add the project root to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from parson.core.errors import (
    IndexNotFound,
    IndexOutOfBounds,
    InvalidIndex,
    KeyNotFound,
    NotIndexable,
    ParseError,
    QueryError,
    RootNotObject,
)
from parson.core.query import (
    QuerySyntax,
    parse_index,
    query_json,
    resolve,
    resolve_key,
    split_query,
    value_kind,
)


DOCUMENT = {
    "name": "inventory",
    "active": True,
    "owner": None,
    "items": [
        {"id": 1, "tags": ["a", "b"]},
        {"id": 2, "tags": []},
    ],
    "meta": {"count": 2, "nested": {"deep": "value"}},
}


class TestScenarios:
    """The reference scenarios for the resolver."""

    def test_nested_object_lookup(self):
        assert resolve({"a": {"b": 5}}, "a.b") == 5

    def test_array_index(self):
        assert resolve({"items": [10, 20, 30]}, "items.1") == 20

    def test_index_out_of_bounds(self):
        with pytest.raises(IndexOutOfBounds) as excinfo:
            resolve({"items": [10]}, "items.5")
        assert excinfo.value.index == 5
        assert excinfo.value.length == 1

    def test_descend_into_number(self):
        with pytest.raises(NotIndexable) as excinfo:
            resolve({"a": 1}, "a.b")
        assert excinfo.value.segment == "b"
        assert excinfo.value.kind == "number"

    def test_missing_key(self):
        with pytest.raises(KeyNotFound) as excinfo:
            resolve({"x": 1}, "y")
        assert excinfo.value.key == "y"

    def test_pointer_style(self):
        document = {"a": {"b": 5}}
        assert resolve(document, "/a/b", QuerySyntax.POINTER) == 5
        assert resolve(document, "", QuerySyntax.POINTER) == document


class TestDottedQueries:
    """Dotted-path resolution against a richer document."""

    @pytest.mark.parametrize("query,expected", [
        ("name", "inventory"),
        ("active", True),
        ("owner", None),
        ("items.0.id", 1),
        ("items.1.tags", []),
        ("items.0.tags.1", "b"),
        ("meta.nested.deep", "value"),
    ])
    def test_existing_paths(self, query, expected):
        assert resolve(DOCUMENT, query) == expected

    def test_empty_query_returns_root(self):
        assert resolve(DOCUMENT, "") == DOCUMENT

    def test_scalar_root_with_empty_query(self):
        assert resolve(42, "") == 42

    def test_fails_at_first_scalar_segment(self):
        with pytest.raises(NotIndexable) as excinfo:
            resolve(DOCUMENT, "meta.count.x.y")
        assert excinfo.value.segment == "x"
        assert excinfo.value.position == 2

    def test_null_is_not_indexable(self):
        with pytest.raises(NotIndexable) as excinfo:
            resolve(DOCUMENT, "owner.x")
        assert excinfo.value.kind == "null"

    def test_boolean_is_not_indexable(self):
        with pytest.raises(NotIndexable) as excinfo:
            resolve(DOCUMENT, "active.0")
        assert excinfo.value.kind == "boolean"

    def test_string_is_not_indexable(self):
        with pytest.raises(NotIndexable) as excinfo:
            resolve(DOCUMENT, "name.0")
        assert excinfo.value.kind == "string"

    def test_numeric_key_on_object_is_a_key(self):
        assert resolve({"0": "zero"}, "0") == "zero"

    def test_empty_segment_is_an_empty_key(self):
        assert resolve({"a": {"": {"b": 1}}}, "a..b") == 1

    def test_error_carries_query(self):
        with pytest.raises(KeyNotFound) as excinfo:
            resolve(DOCUMENT, "meta.missing")
        assert excinfo.value.query == "meta.missing"
        assert "meta.missing" in str(excinfo.value)


class TestArrayIndices:
    """Array segments must be base-10 non-negative integers."""

    @pytest.mark.parametrize("token", ["01", "-1", "+1", "1.0", "one", "", " 1", "１"])
    def test_invalid_tokens(self, token):
        with pytest.raises(InvalidIndex) as excinfo:
            parse_index(token)
        assert excinfo.value.token == token

    @pytest.mark.parametrize("token,expected", [("0", 0), ("7", 7), ("42", 42)])
    def test_valid_tokens(self, token, expected):
        assert parse_index(token) == expected

    def test_invalid_index_regardless_of_contents(self):
        with pytest.raises(InvalidIndex):
            resolve({"items": ["x"] * 20}, "items.01")
        with pytest.raises(InvalidIndex):
            resolve({"items": []}, "items.first")

    def test_no_key_fallback_on_arrays(self):
        with pytest.raises(InvalidIndex):
            resolve({"items": [1, 2]}, "items.length")

    def test_index_not_found_alias(self):
        assert IndexNotFound is IndexOutOfBounds

    def test_oversized_index_is_out_of_bounds(self):
        huge = "9" * 5000
        with pytest.raises(IndexOutOfBounds) as excinfo:
            resolve({"items": [1]}, "items." + huge)
        assert excinfo.value.index == huge
        assert excinfo.value.length == 1
        assert excinfo.value.position == 1

    def test_index_with_more_digits_than_length(self):
        with pytest.raises(IndexOutOfBounds) as excinfo:
            resolve({"items": list(range(9))}, "items.10")
        assert excinfo.value.index == 10

    def test_oversized_token_without_length(self):
        with pytest.raises(InvalidIndex):
            parse_index("9" * 5000)


class TestPointerQueries:
    def test_nested(self):
        assert resolve(DOCUMENT, "/items/0/tags/0", QuerySyntax.POINTER) == "a"

    def test_leading_slash_optional(self):
        assert resolve(DOCUMENT, "meta/count", QuerySyntax.POINTER) == 2

    def test_single_slash_is_root(self):
        assert resolve(DOCUMENT, "/", QuerySyntax.POINTER) == DOCUMENT

    def test_dots_are_part_of_keys(self):
        assert resolve({"a.b": 1}, "/a.b", QuerySyntax.POINTER) == 1

    def test_no_tilde_unescaping(self):
        with pytest.raises(KeyNotFound):
            resolve({"a/b": 1}, "/a~1b", QuerySyntax.POINTER)


class TestKeyQueries:
    """The single-level resolver only supports flat key lookup."""

    def test_flat_lookup(self):
        assert resolve_key(DOCUMENT, "name") == "inventory"

    def test_key_containing_delimiters(self):
        assert resolve({"a.b/c": 3}, "a.b/c", QuerySyntax.KEY) == 3

    def test_no_nesting(self):
        with pytest.raises(KeyNotFound):
            resolve_key(DOCUMENT, "meta.count")

    def test_array_root_is_rejected(self):
        with pytest.raises(RootNotObject) as excinfo:
            resolve([1, 2, 3], "0", QuerySyntax.KEY)
        assert excinfo.value.kind == "array"

    def test_scalar_root_is_rejected(self):
        with pytest.raises(RootNotObject):
            resolve_key("text", "x")

    def test_failures_report_the_same_position(self):
        with pytest.raises(RootNotObject) as root_error:
            resolve_key([1], "x")
        with pytest.raises(KeyNotFound) as key_error:
            resolve_key({}, "x")
        assert root_error.value.position == key_error.value.position == 0
        assert root_error.value.query == key_error.value.query == "x"


class TestResolverProperties:
    def test_result_is_not_aliased(self):
        document = json.loads(json.dumps(DOCUMENT))
        result = resolve(document, "items.0")
        result["id"] = 99
        result["tags"].append("c")
        assert document["items"][0] == {"id": 1, "tags": ["a", "b"]}

    def test_root_result_is_a_copy(self):
        document = {"a": [1]}
        result = resolve(document, "")
        result["a"].append(2)
        assert document == {"a": [1]}

    def test_document_not_mutated_on_failure(self):
        document = json.loads(json.dumps(DOCUMENT))
        with pytest.raises(QueryError):
            resolve(document, "items.9")
        assert document == DOCUMENT

    def test_idempotent(self):
        assert resolve(DOCUMENT, "items.0.tags") == resolve(DOCUMENT, "items.0.tags")

    def test_all_failures_are_query_errors(self):
        for query in ("missing", "items.9", "items.x", "name.x"):
            with pytest.raises(QueryError):
                resolve(DOCUMENT, query)


class TestHelpers:
    def test_split_dotted(self):
        assert split_query("a.b.0") == ["a", "b", "0"]

    def test_split_pointer(self):
        assert split_query("/a/b/", QuerySyntax.POINTER) == ["a", "b", ""]

    def test_split_key(self):
        assert split_query("a.b", QuerySyntax.KEY) == ["a.b"]

    @pytest.mark.parametrize("value,kind", [
        (None, "null"), (False, "boolean"), (0, "number"), (1.5, "number"),
        ("", "string"), ([], "array"), ({}, "object"),
    ])
    def test_value_kind(self, value, kind):
        assert value_kind(value) == kind

    def test_syntax_from_name(self):
        assert QuerySyntax.from_name("Pointer") is QuerySyntax.POINTER
        with pytest.raises(ValueError):
            QuerySyntax.from_name("jsonpath")

    def test_query_json_parses_text(self):
        assert query_json('{"a": {"b": 5}}', "a.b") == 5

    def test_query_json_reports_parse_errors(self):
        with pytest.raises(ParseError):
            query_json('{"a": ', "a")
