"""
Token definitions for the shitlang lexer.

This module defines the token kinds produced by the lexer:
- Identifiers and keywords (keywords are reclassified inside the lexer)
- Numbers (optionally negative in the second grammar revision)
- Single-character operators and punctuation
- Comments (kept in the stream, skipped by the grammar inside productions)

Author: halo
"""

from enum import Enum
from dataclasses import dataclass
from typing import Optional

# Longest digit run converted by a single int() call, under the
# interpreter's integer string conversion limit.
_DIGIT_CHUNK = 4000


class TokenKind(Enum):
    """
    Enumeration of token kinds in shitlang.

    The parser dispatches on the kind plus the exact text.
    """

    IDENTIFIER = "identifier"       # foo, x1
    NUMBER = "number"               # 42, -7 (second revision)
    KEYWORD = "keyword"             # extern, fun, ret, if, else, for
    OPERATOR = "operator"           # = + - * / > <
    PUNCTUATION = "punctuation"     # { } ( ) , ; :
    COMMENT = "comment"             # # to end of line
    END_OF_INPUT = "end-of-input"   # EOF


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the source code.

    Used for error reporting and debugging information.
    """
    filename: str
    line: int
    column: int
    offset: int  # Character offset from start of file

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"SourceLocation({self.filename!r}, {self.line}, {self.column}, {self.offset})"


@dataclass(frozen=True)
class Token:
    """
    A lexical token.

    ``start`` and ``end`` are character offsets into the source (``end`` is
    exclusive), so ``source[token.start:token.end] == token.text`` always holds.
    """
    kind: TokenKind
    text: str
    start: int
    end: int
    location: SourceLocation

    def __str__(self) -> str:
        return f"TOKEN : {self.kind.name}({self.text!r})"

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.text!r}, {self.start}, {self.end})"

    @property
    def value(self):
        """Numeric value of a NUMBER token, the text for anything else."""
        if self.kind is TokenKind.NUMBER:
            return literal_value(self.text)
        return self.text

    @property
    def is_keyword(self) -> bool:
        return self.kind is TokenKind.KEYWORD

    @property
    def is_operand(self) -> bool:
        """True for tokens that can end an operand (used for '-' lexing)."""
        return (self.kind in (TokenKind.IDENTIFIER, TokenKind.NUMBER)
                or (self.kind is TokenKind.PUNCTUATION and self.text == ")"))

    def matches(self, kind: TokenKind, text: Optional[str] = None) -> bool:
        """Check kind, and text too when given."""
        return self.kind is kind and (text is None or self.text == text)


def literal_value(text: str) -> int:
    """Integer value of a number literal, whatever its length."""
    digits = text.lstrip("-")
    value = 0
    for i in range(0, len(digits), _DIGIT_CHUNK):
        chunk = digits[i:i + _DIGIT_CHUNK]
        value = value * 10 ** len(chunk) + int(chunk)
    return -value if text.startswith("-") else value
