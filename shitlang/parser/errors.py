"""
Error handling for the shitlang parser.

A ParseError records which token kinds would have been accepted, the token
actually found and its position. Parsing stops at the first one; there is
no resynchronization.

Author: halo
"""

from typing import FrozenSet, Iterable, Optional

from ..lexer.tokens import Token, TokenKind
from ..lexer.errors import Diagnostic, ShitError


class ParseError(ShitError):
    """
    Raised when the token sequence matches no production at the current position.

    Attributes:
        expected: token kinds that would have been accepted here
        found: the offending token
        position: character offset of the offending token
    """

    def __init__(
        self,
        message: str,
        expected: Iterable[TokenKind],
        found: Token,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
    ):
        super().__init__(Diagnostic(
            message=message,
            start_offset=found.start,
            end_offset=found.end,
            severity="error",
            location=found.location,
            code=code,
            help_text=help_text,
        ))
        self.expected: FrozenSet[TokenKind] = frozenset(expected)
        self.found = found


# Common parser error codes for categorization
PARSER_ERROR_CODES = {
    "P001": "Unexpected token",
    "P002": "Invalid assignment target",
    "P010": "Unexpected end of input",
}

_MISSING_TOKEN_HELP = {
    ")": "Add a closing parenthesis ')'",
    "(": "Add an opening parenthesis '('",
    "}": "Add a closing brace '}'",
    "{": "Add an opening brace '{' to start a block",
    ":": "Add a colon ':' between the condition and the branch",
    ";": "Add a semicolon ';' between the loop clauses",
    "=": "Add an assignment operator '='",
}


def _describe(token: Token) -> str:
    if token.kind is TokenKind.END_OF_INPUT:
        return "end of input"
    return f"{token.kind.value} '{token.text}'"


def create_unexpected_token_error(expected: Iterable[TokenKind], found: Token,
                                  what: Optional[str] = None) -> ParseError:
    """
    Create an error for an unexpected token.

    ``what`` names the expected construct or exact text (e.g. "')'") when the
    token kinds alone are too coarse.
    """
    expected = frozenset(expected)
    expected_str = what or " or ".join(sorted(kind.value for kind in expected))

    if found.kind is TokenKind.END_OF_INPUT:
        return ParseError(
            message=f"Unexpected end of input, expected {expected_str}",
            expected=expected,
            found=found,
            code="P010",
            help_text=f"The parser reached the end of the file while expecting {expected_str}.",
        )

    help_text = None
    if what is not None:
        help_text = _MISSING_TOKEN_HELP.get(what.strip("'"))

    return ParseError(
        message=f"Expected {expected_str}, found {_describe(found)}",
        expected=expected,
        found=found,
        code="P001",
        help_text=help_text,
    )


def create_invalid_assignment_error(target_start: Token) -> ParseError:
    """Create an error for an assignment whose left side is not an identifier."""
    return ParseError(
        message=f"Invalid assignment target starting at {_describe(target_start)}",
        expected={TokenKind.IDENTIFIER},
        found=target_start,
        code="P002",
        help_text="The left-hand side of '=' must be a single identifier.",
    )
