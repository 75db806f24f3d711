"""
shitlang Lexer Package

Implements the lexical analyzer (tokenizer) for the shitlang toy language.

Key Features:
- Lazy, single forward pass over the source text
- Keyword reclassification before parsing begins
- Revision-aware number literals (signed in the second revision)
- Source location tracking for diagnostics

Author: halo
"""

from .tokens import Token, TokenKind, SourceLocation
from .lexer import Lexer, tokenize, tokenize_file
from .errors import Diagnostic, LexError, ShitError

__all__ = [
    "Lexer",
    "tokenize",
    "tokenize_file",
    "Token",
    "TokenKind",
    "SourceLocation",
    "Diagnostic",
    "LexError",
    "ShitError",
]
