"""
shitlang Front End Package

Lexer, grammar tables and parser for the shitlang toy language.

Architecture:
    shitlang/
    ├── grammar.py       # Productions, keywords, precedence per revision
    ├── lexer/           # Tokenization and lexical analysis
    └── parser/          # Syntax analysis and AST generation

Author: halo
License: MIT
"""

import logging

__version__ = "0.2.0"
__author__ = "halo"
__license__ = "MIT"

from .grammar import Grammar, GrammarRevision, DEFAULT_REVISION
from .lexer import Lexer, Token, TokenKind, SourceLocation, tokenize, Diagnostic, LexError, ShitError
from .parser import Parser, ParseError, SourceFile, parse, parse_file, dump

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Core classes
    "Lexer",
    "Parser",
    "Grammar",
    "GrammarRevision",
    "DEFAULT_REVISION",

    # Entry points
    "tokenize",
    "parse",
    "parse_file",
    "dump",

    # Data
    "Token",
    "TokenKind",
    "SourceLocation",
    "SourceFile",

    # Errors
    "Diagnostic",
    "ShitError",
    "LexError",
    "ParseError",

    # Version info
    "__version__",
    "__author__",
    "__license__",
]
