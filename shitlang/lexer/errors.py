"""
Error handling for the shitlang lexer.

Provides the Diagnostic value type shared by the lexer and the parser, plus
the LexError raised on the first character no lexical rule accepts.

Author: halo
"""

from typing import Optional, Tuple
from dataclasses import dataclass

from .tokens import SourceLocation


@dataclass(frozen=True)
class Diagnostic:
    """A position-tagged message (error, warning, info)."""
    message: str
    start_offset: int
    end_offset: int
    severity: str = "error"
    location: Optional[SourceLocation] = None
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Tuple[str, ...] = ()

    def __str__(self) -> str:
        severity_prefix = self.severity.upper()
        if self.code:
            severity_prefix += f"[{self.code}]"
        result = f"{severity_prefix}: {self.message}\n"
        if self.location is not None:
            result += f"  --> {self.location}\n"
        else:
            result += f"  --> offset {self.start_offset}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        if self.suggestions:
            result += "  suggestions:\n"
            for suggestion in self.suggestions:
                result += f"    - {suggestion}\n"

        return result

    def format(self, source: str) -> str:
        """Render the diagnostic with the offending source line underlined."""
        line_start = source.rfind("\n", 0, self.start_offset) + 1
        line_end = source.find("\n", self.start_offset)
        if line_end == -1:
            line_end = len(source)
        line_text = source[line_start:line_end]

        width = max(1, min(self.end_offset, line_end) - self.start_offset)
        gutter = str(self.location.line) if self.location else ""
        pad = " " * len(gutter)

        result = str(self)
        result += f"{pad} |\n"
        result += f"{gutter} | {line_text}\n"
        result += f"{pad} | {' ' * (self.start_offset - line_start)}{'^' * width}\n"
        return result


class ShitError(Exception):
    """Base class for lexer and parser failures; carries a Diagnostic."""

    def __init__(self, diagnostic: Diagnostic):
        super().__init__(diagnostic.message)
        self.diagnostic = diagnostic

    @property
    def position(self) -> int:
        return self.diagnostic.start_offset

    def __str__(self) -> str:
        return str(self.diagnostic)


class LexError(ShitError):
    """
    Raised when no lexical rule matches the current position.

    Lexing is not resumed after this error.
    """

    def __init__(
        self,
        message: str,
        offset: int,
        character: str,
        location: SourceLocation,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
    ):
        super().__init__(Diagnostic(
            message=message,
            start_offset=offset,
            end_offset=offset + len(character),
            severity="error",
            location=location,
            code=code,
            help_text=help_text,
        ))
        self.offset = offset
        self.character = character
        self.location = location


# Common error codes for categorization
ERROR_CODES = {
    "L001": "Invalid character",
}


def create_invalid_character_error(char: str, location: SourceLocation,
                                   help_text: Optional[str] = None) -> LexError:
    """Create an error for an invalid character."""
    if help_text is None and char.isprintable():
        help_text = f"The character '{char}' is not valid in shitlang source code."
    elif help_text is None:
        help_text = f"Non-printable character (Unicode: U+{ord(char):04X}) is not allowed."

    return LexError(
        message=f"Invalid character: '{char}'",
        offset=location.offset,
        character=char,
        location=location,
        code="L001",
        help_text=help_text,
    )
