#!/usr/bin/env python3
"""
Tests for JSON parsing utilities and the error taxonomy they raise.
"""

import os
import sys
import gzip
import tempfile
import unittest

# Add the project root to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from parson.core.errors import (
    ConfigError,
    KeyNotFound,
    OutputError,
    ParseError,
    ParsonError,
    SourceReadError,
)
from parson.utils.json_parser import load_json_file, parse_json, read_text


class TestParseJson(unittest.TestCase):
    """Test parse_json"""

    def test_valid_document(self):
        self.assertEqual(parse_json('{"a": [1, 2.5, null, true]}'), {"a": [1, 2.5, None, True]})

    def test_scalar_document(self):
        self.assertEqual(parse_json('"text"'), "text")

    def test_invalid_document(self):
        with self.assertRaises(ParseError) as ctx:
            parse_json('{"invalid": "json"', source="broken.json")
        error = ctx.exception
        self.assertEqual(error.source, "broken.json")
        self.assertEqual(error.line, 1)
        self.assertIsNotNone(error.column)
        self.assertIn("broken.json", str(error))
        self.assertIn("Invalid JSON", str(error))

    def test_empty_text(self):
        with self.assertRaises(ParseError):
            parse_json("")

    def test_duplicate_keys_last_wins(self):
        self.assertEqual(parse_json('{"a": 1, "a": 2}'), {"a": 2})

    def test_non_standard_constants_rejected(self):
        for text in ('NaN', '{"a": Infinity}', '[-Infinity]'):
            with self.subTest(text=text):
                with self.assertRaises(ParseError) as ctx:
                    parse_json(text, source="nan.json")
                self.assertIn("not valid JSON", str(ctx.exception))
                self.assertIn("nan.json", str(ctx.exception))

    def test_oversized_integer_literal(self):
        with self.assertRaises(ParseError):
            parse_json("9" * 5000)


class TestLoadJsonFile(unittest.TestCase):
    """Test reading JSON from disk"""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.root = self.temp_dir.name

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_load_plain_file(self):
        path = os.path.join(self.root, "data.json")
        with open(path, "w", encoding="utf-8") as f:
            f.write('{"name": "café"}')
        self.assertEqual(load_json_file(path), {"name": "café"})

    def test_load_gzip_file(self):
        path = os.path.join(self.root, "data.json.gz")
        with gzip.open(path, "wt", encoding="utf-8") as f:
            f.write('{"compressed": true}')
        self.assertEqual(load_json_file(path), {"compressed": True})

    def test_missing_file(self):
        with self.assertRaises(SourceReadError) as ctx:
            load_json_file(os.path.join(self.root, "missing.json"))
        self.assertIn("does not exist", str(ctx.exception))

    def test_directory(self):
        with self.assertRaises(SourceReadError):
            read_text(self.root)

    def test_parse_error_names_file(self):
        path = os.path.join(self.root, "bad.json")
        with open(path, "w") as f:
            f.write("[1, 2,")
        with self.assertRaises(ParseError) as ctx:
            load_json_file(path)
        self.assertEqual(ctx.exception.source, path)


class TestErrorTaxonomy(unittest.TestCase):
    def test_error_type_is_class_name(self):
        self.assertEqual(KeyNotFound("x").error_type, "KeyNotFound")
        self.assertEqual(ParseError("bad").error_type, "ParseError")

    def test_all_errors_share_base(self):
        for error in (ParseError("m"), SourceReadError("p", "r"), ConfigError("p", "r"),
                      OutputError("p", "r"), KeyNotFound("k")):
            self.assertIsInstance(error, ParsonError)

    def test_query_error_without_context(self):
        self.assertEqual(str(KeyNotFound("k")), "Key not found: 'k'")


if __name__ == "__main__":
    unittest.main()
