"""
Test suite for shitlang diagnostics and error reporting.

Author: halo
"""

import os
import sys
import unittest

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from shitlang import Diagnostic, LexError, ParseError, ShitError, parse, tokenize
from shitlang.lexer.errors import ERROR_CODES
from shitlang.parser.errors import PARSER_ERROR_CODES


class TestDiagnostic(unittest.TestCase):

    def test_str_without_location(self):
        diagnostic = Diagnostic("Something broke", 3, 4, code="P001", help_text="Fix it")
        self.assertEqual(str(diagnostic),
                         "ERROR[P001]: Something broke\n  --> offset 3\n  help: Fix it\n")

    def test_suggestions(self):
        diagnostic = Diagnostic("Oops", 0, 1, severity="warning", suggestions=("a", "b"))
        text = str(diagnostic)
        self.assertTrue(text.startswith("WARNING: Oops"))
        self.assertIn("    - a\n", text)
        self.assertIn("    - b\n", text)

    def test_error_codes_registered(self):
        self.assertIn("L001", ERROR_CODES)
        for code in ("P001", "P002", "P010"):
            self.assertIn(code, PARSER_ERROR_CODES)


class TestLexErrorReport(unittest.TestCase):

    def test_format_underlines_character(self):
        source = "x = 1\ny = 2 + @"
        with self.assertRaises(LexError) as cm:
            list(tokenize(source, filename="demo.shit"))
        text = cm.exception.diagnostic.format(source)
        lines = text.splitlines()
        self.assertEqual(lines[0], "ERROR[L001]: Invalid character: '@'")
        self.assertEqual(lines[1], "  --> demo.shit:2:9")
        self.assertIn("2 | y = 2 + @", lines)
        self.assertEqual(lines[-1], "  | " + " " * 8 + "^")

    def test_non_printable_help(self):
        with self.assertRaises(LexError) as cm:
            list(tokenize("x\x01"))
        self.assertIn("U+0001", cm.exception.diagnostic.help_text)


class TestParseErrorReport(unittest.TestCase):

    def test_format_underlines_token(self):
        source = "fun (a)"
        with self.assertRaises(ParseError) as cm:
            parse(source)
        lines = cm.exception.diagnostic.format(source).splitlines()
        self.assertEqual(lines[0], "ERROR[P001]: Expected function name, found punctuation '('")
        self.assertEqual(lines[-1], "  |     ^")

    def test_end_of_input_message(self):
        with self.assertRaises(ParseError) as cm:
            parse("x = ")
        error = cm.exception
        self.assertEqual(error.diagnostic.code, "P010")
        self.assertEqual(error.position, 4)
        self.assertIn("Unexpected end of input", error.diagnostic.message)

    def test_missing_token_help(self):
        with self.assertRaises(ParseError) as cm:
            parse("if x y")
        self.assertIn("colon", cm.exception.diagnostic.help_text)

    def test_common_base_class(self):
        for source in ("x @", "x = ="):
            with self.subTest(source=source):
                with self.assertRaises(ShitError):
                    parse(source)


if __name__ == '__main__':
    unittest.main()
