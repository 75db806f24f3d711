"""
shitlang Lexer - turns source text into a lazy stream of tokens

Single forward pass. Whitespace is dropped, comments are kept as tokens, and
keywords are told apart from identifiers here so the parser never has to.

The only context-sensitive rule is the negative number literal of the second
grammar revision: '-' glued to digits is part of the number unless the
previous significant token ends an operand, so `a-1` stays a subtraction.
"""

import logging
import re
from typing import Iterator, List, Optional

from ..grammar import DEFAULT_REVISION, OPERATORS, PUNCTUATION, Grammar, GrammarRevision
from .tokens import Token, TokenKind, SourceLocation
from .errors import LexError, create_invalid_character_error

logger = logging.getLogger(__name__)


class Lexer:
    """
    shitlang lexical analyzer.

    Converts source text into a stream of tokens according to the tables of
    one grammar revision. Stops at the first character no rule accepts.
    """

    def __init__(self, source: str, filename: str = "<unknown>",
                 revision: GrammarRevision = DEFAULT_REVISION,
                 grammar: Optional[Grammar] = None):
        """
        Initialize the lexer with source code.

        Args:
            source: Source code string
            filename: Name of source file for error reporting
            revision: Grammar revision to lex for
            grammar: Explicit grammar tables, overrides ``revision``
        """
        self.source = source
        self.filename = filename
        self.grammar = grammar or Grammar.for_revision(revision)
        self.pos = 0
        self.line = 1
        self.column = 1
        self._last_significant: Optional[Token] = None

        self._compile_patterns()

    def _compile_patterns(self):
        """Compile regex patterns used by the lexer."""
        self.identifier_pattern = re.compile(r'[a-zA-Z][a-zA-Z0-9]*')
        self.number_pattern = re.compile(self.grammar.number_pattern, re.ASCII)
        self.comment_pattern = re.compile(r'#[^\r\n]*')

    def tokenize(self) -> Iterator[Token]:
        """
        Lazily tokenize the source from offset 0.

        Yields:
            Tokens in source order, ending with a single END_OF_INPUT token

        Raises:
            LexError: On the first unrecognized character
        """
        self.pos = 0
        self.line = 1
        self.column = 1
        self._last_significant = None

        while True:
            self._skip_whitespace()
            if self.pos >= len(self.source):
                break

            token = self._next_token()
            if token.kind is not TokenKind.COMMENT:
                self._last_significant = token
            logger.debug("token %s at %s", token, token.location)
            yield token

        yield Token(TokenKind.END_OF_INPUT, "", self.pos, self.pos, self._location())

    def _next_token(self) -> Token:
        """Match exactly one token at the current position."""
        location = self._location()
        current_char = self.source[self.pos]

        # Comments run to end of line
        if current_char == '#':
            match = self.comment_pattern.match(self.source, self.pos)
            return self._emit(TokenKind.COMMENT, match.group(0), location)

        # Numbers, possibly with a leading '-'
        match = self.number_pattern.match(self.source, self.pos)
        if match and (current_char != '-' or self._minus_starts_number()):
            return self._emit(TokenKind.NUMBER, match.group(0), location)

        # Identifiers and keywords
        match = self.identifier_pattern.match(self.source, self.pos)
        if match:
            lexeme = match.group(0)
            kind = TokenKind.KEYWORD if self.grammar.is_keyword(lexeme) else TokenKind.IDENTIFIER
            return self._emit(kind, lexeme, location)

        if current_char in self.grammar.operators:
            return self._emit(TokenKind.OPERATOR, current_char, location)

        if current_char in self.grammar.punctuation:
            return self._emit(TokenKind.PUNCTUATION, current_char, location)

        raise self._invalid_character(current_char, location)

    def _minus_starts_number(self) -> bool:
        """A '-' before digits is a sign only where no operand precedes it."""
        previous = self._last_significant
        return previous is None or not previous.is_operand

    def _invalid_character(self, char: str, location: SourceLocation) -> LexError:
        help_text = None
        for revision in GrammarRevision:
            if revision is not self.grammar.revision and (
                    char in OPERATORS[revision] or char in PUNCTUATION[revision]):
                help_text = (f"'{char}' is only valid in grammar revision "
                             f"{int(revision)}.")
        error = create_invalid_character_error(char, location, help_text)
        logger.debug("lex error at offset %d: %r", location.offset, char)
        return error

    def _emit(self, kind: TokenKind, lexeme: str, location: SourceLocation) -> Token:
        start = self.pos
        self._advance_by(len(lexeme))
        return Token(kind, lexeme, start, self.pos, location)

    def _location(self) -> SourceLocation:
        return SourceLocation(self.filename, self.line, self.column, self.pos)

    def _skip_whitespace(self):
        """Skip whitespace, newlines included."""
        while self.pos < len(self.source) and self.source[self.pos].isspace():
            self._advance()

    def _advance(self):
        """Advance position by one character, updating line/column."""
        if self.pos < len(self.source):
            if self.source[self.pos] == '\n':
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1

    def _advance_by(self, count: int):
        """Advance position by multiple characters."""
        for _ in range(count):
            self._advance()


def tokenize(source: str, filename: str = "<string>",
             revision: GrammarRevision = DEFAULT_REVISION) -> Iterator[Token]:
    """
    Convenience function to lazily tokenize a source string.

    Args:
        source: Source code string
        filename: Filename for error reporting
        revision: Grammar revision to lex for

    Returns:
        Iterator of tokens; a LexError surfaces when iteration reaches it
    """
    return Lexer(source, filename, revision).tokenize()


def tokenize_file(filepath: str, revision: GrammarRevision = DEFAULT_REVISION) -> List[Token]:
    """
    Convenience function to tokenize a source file.

    Args:
        filepath: Path to source file
        revision: Grammar revision to lex for

    Returns:
        List of tokens

    Raises:
        LexError: If lexing fails
        IOError: If file cannot be read
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        source = f.read()

    return list(tokenize(source, filepath, revision))
