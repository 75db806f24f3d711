"""
shitlang Parser Implementation

Recursive descent for definitions, precedence climbing for expressions.
The binding powers come from the grammar tables of the selected revision;
the parser itself only knows the shape of each production.

Comments are definitions in their own right at the top level and inside
blocks. Anywhere else they are skipped.

Author: halo
"""

import logging
from typing import Iterable, Iterator, List, Optional, Set, Tuple

from ..grammar import ASSIGNMENT_OPERATOR, DEFAULT_REVISION, Associativity, Grammar, GrammarRevision
from ..lexer.lexer import Lexer
from ..lexer.tokens import Token, TokenKind, SourceLocation, literal_value
from .ast_nodes import (
    Assignment, BinaryExpression, Block, Call, Comment, Comparison, Definition,
    EndOfStatement, Expression, ExternDeclaration, ForLoop, FunctionDefinition,
    Identifier, IfElse, NumberLiteral, ReturnStatement, SourceFile, Span,
)
from .errors import ParseError, create_invalid_assignment_error, create_unexpected_token_error

logger = logging.getLogger(__name__)


class Parser:
    """
    shitlang parser.

    Consumes a token stream (lazily, buffering only what lookahead needs)
    and builds a SourceFile. The first syntax error aborts the parse.
    """

    def __init__(self, tokens: Iterable[Token], grammar: Optional[Grammar] = None,
                 source_length: Optional[int] = None,
                 revision: GrammarRevision = DEFAULT_REVISION):
        """
        Initialize parser with a token stream.

        Args:
            tokens: Tokens from the lexer; a list or the lazy lexer iterator
            grammar: Grammar tables; must match the ones the tokens were lexed with
            source_length: End of the SourceFile span; defaults to the end-of-input offset
            revision: Grammar revision, used when ``grammar`` is not given
        """
        self.grammar = grammar or Grammar.for_revision(revision)
        self.source_length = source_length
        self.tokens: List[Token] = []
        self.current = 0
        self._stream: Iterator[Token] = iter(tokens)
        self._exhausted = False

        self._keyword_parsers = {
            "extern": self._parse_extern,
            "fun": self._parse_function,
            "ret": self._parse_return,
        }
        if self.grammar.allows("if_else"):
            self._keyword_parsers["if"] = self._parse_if_else
        if self.grammar.allows("for_loop"):
            self._keyword_parsers["for"] = self._parse_for_loop

    def parse(self) -> SourceFile:
        """
        Parse the token stream into an AST.

        Returns:
            SourceFile node spanning the entire source

        Raises:
            ParseError: On the first token no production accepts
            LexError: If the lazy token stream fails
        """
        self.current = 0
        definitions = []

        try:
            while not self._peek_raw().matches(TokenKind.END_OF_INPUT):
                definition = self._parse_definition()
                logger.debug("parsed %s", definition)
                definitions.append(definition)
        except ParseError as e:
            logger.debug("parse failed at offset %d: %s", e.position, e.diagnostic.message)
            raise

        end = self.source_length
        if end is None:
            end = self._peek_raw().end
        return SourceFile(tuple(definitions), Span(0, end))

    # Definitions

    def _parse_definition(self) -> Definition:
        """Parse one top-level (or block-level) definition."""
        token = self._peek_raw()

        if token.kind is TokenKind.COMMENT:
            self._advance_raw()
            return Comment(token.text, Span(token.start, token.end))

        if token.kind is TokenKind.KEYWORD and token.text in self._keyword_parsers:
            return self._keyword_parsers[token.text]()

        if token.matches(TokenKind.PUNCTUATION, ";") and self.grammar.allows("end_of_statement"):
            self._advance()
            return EndOfStatement(Span(token.start, token.end))

        if token.kind in (TokenKind.IDENTIFIER, TokenKind.NUMBER):
            return self._parse_expression()

        raise create_unexpected_token_error(self._definition_start_kinds(), token, "definition")

    def _definition_start_kinds(self) -> Set[TokenKind]:
        kinds = {TokenKind.COMMENT, TokenKind.KEYWORD, TokenKind.IDENTIFIER, TokenKind.NUMBER}
        if self.grammar.allows("end_of_statement"):
            kinds.add(TokenKind.PUNCTUATION)
        return kinds

    def _parse_extern(self) -> ExternDeclaration:
        """Parse ``extern`` followed by the module reference."""
        start_token = self._advance()

        if self.grammar.allows("extern_call"):
            module = self._parse_call()
        else:
            module = self._parse_identifier("module name")

        return ExternDeclaration(module, Span.covering(start_token, module.span))

    def _parse_function(self) -> FunctionDefinition:
        """Parse a function definition (a forward declaration in revision 2)."""
        start_token = self._advance()

        name = self._parse_identifier("function name")
        parameters, end_token = self._parse_parameter_list()

        body = None
        end = end_token.end
        if self.grammar.allows("function_body"):
            body = self._parse_block()
            end = body.span.end

        return FunctionDefinition(name, parameters, body, Span(start_token.start, end))

    def _parse_parameter_list(self) -> Tuple[Tuple[Identifier, ...], Token]:
        """Parse ``( (identifier [,])* )``; returns the parameters and the ')' token."""
        self._consume(TokenKind.PUNCTUATION, "(")
        parameters = []

        while not self._peek().matches(TokenKind.PUNCTUATION, ")"):
            if not self._peek().matches(TokenKind.IDENTIFIER):
                raise create_unexpected_token_error(
                    {TokenKind.IDENTIFIER, TokenKind.PUNCTUATION}, self._peek(),
                    "parameter name or ')'")
            parameters.append(self._parse_identifier())
            self._match(TokenKind.PUNCTUATION, ",")

        end_token = self._advance()
        return tuple(parameters), end_token

    def _parse_block(self) -> Block:
        """Parse ``{ definition* }``."""
        start_token = self._consume(TokenKind.PUNCTUATION, "{")
        definitions = []

        while not self._peek_raw().matches(TokenKind.PUNCTUATION, "}"):
            if self._peek_raw().matches(TokenKind.END_OF_INPUT):
                raise create_unexpected_token_error(
                    {TokenKind.PUNCTUATION}, self._peek_raw(), "'}'")
            definitions.append(self._parse_definition())

        end_token = self._advance()
        return Block(tuple(definitions), Span.covering(start_token, end_token))

    def _parse_return(self) -> ReturnStatement:
        """Parse ``ret expression``."""
        start_token = self._advance()
        value = self._parse_expression()
        return ReturnStatement(value, Span.covering(start_token, value.span))

    def _parse_if_else(self) -> IfElse:
        """Parse ``if expression : expression [else expression]``."""
        start_token = self._advance()

        condition = self._parse_expression()
        self._consume(TokenKind.PUNCTUATION, ":")
        then_branch = self._parse_expression()

        else_branch = None
        end = then_branch.span.end
        if self._match(TokenKind.KEYWORD, "else"):
            else_branch = self._parse_expression()
            end = else_branch.span.end

        return IfElse(condition, then_branch, else_branch, Span(start_token.start, end))

    def _parse_for_loop(self) -> ForLoop:
        """Parse ``for ( identifier = expression ; expression [; expression] )`` [block]."""
        start_token = self._advance()
        self._consume(TokenKind.PUNCTUATION, "(")

        init_variable = self._parse_identifier("loop variable")
        self._consume(TokenKind.OPERATOR, ASSIGNMENT_OPERATOR)
        init_value = self._parse_expression()
        self._consume(TokenKind.PUNCTUATION, ";")

        condition = self._parse_expression()

        step = None
        if self._match(TokenKind.PUNCTUATION, ";"):
            step = self._parse_expression()

        end_token = self._consume(TokenKind.PUNCTUATION, ")")

        body = None
        end = end_token.end
        if self._peek().matches(TokenKind.PUNCTUATION, "{"):
            body = self._parse_block()
            end = body.span.end

        return ForLoop(init_variable, init_value, condition, step,
                       Span(start_token.start, end), body=body)

    # Expressions

    def _parse_expression(self, min_precedence: int = 0) -> Expression:
        """
        Parse an expression by precedence climbing.

        Operators bind while their precedence is at least ``min_precedence``;
        the right operand of a left-associative operator is parsed one level
        higher, so equal-precedence chains fold to the left.
        """
        left_start = self._peek()
        left = self._parse_primary()

        while True:
            operator_token = self._peek()
            if operator_token.kind is not TokenKind.OPERATOR:
                break

            precedence = self.grammar.precedence(operator_token.text)
            if precedence < min_precedence:
                break

            self._advance()

            if operator_token.text == ASSIGNMENT_OPERATOR:
                node_class = Assignment
                if not isinstance(left, Identifier):
                    raise create_invalid_assignment_error(left_start)
            elif self.grammar.is_comparison(operator_token.text):
                node_class = Comparison
            else:
                node_class = BinaryExpression

            if self.grammar.associativity(operator_token.text) is Associativity.RIGHT:
                right = self._parse_expression(precedence)
            else:
                right = self._parse_expression(precedence + 1)
            left = node_class(operator_token.text, left, right,
                              Span.covering(left.span, right.span))

        return left

    def _parse_primary(self) -> Expression:
        """Parse a number, an identifier or a call. There is no grouping."""
        token = self._peek()

        if token.kind is TokenKind.NUMBER:
            self._advance()
            return NumberLiteral(literal_value(token.text), token.text, Span(token.start, token.end))

        if token.kind is TokenKind.IDENTIFIER:
            if self._peek_after().matches(TokenKind.PUNCTUATION, "("):
                return self._parse_call()
            return self._parse_identifier()

        raise create_unexpected_token_error(
            {TokenKind.IDENTIFIER, TokenKind.NUMBER}, token, "expression")

    def _parse_call(self) -> Call:
        """Parse ``identifier ( (expression [,])* )``."""
        name = self._parse_identifier("function name")
        self._consume(TokenKind.PUNCTUATION, "(")
        arguments = []

        while not self._peek().matches(TokenKind.PUNCTUATION, ")"):
            if self._peek().kind not in (TokenKind.IDENTIFIER, TokenKind.NUMBER):
                raise create_unexpected_token_error(
                    {TokenKind.IDENTIFIER, TokenKind.NUMBER, TokenKind.PUNCTUATION},
                    self._peek(), "expression or ')'")
            arguments.append(self._parse_expression())
            self._match(TokenKind.PUNCTUATION, ",")

        end_token = self._advance()
        return Call(name, tuple(arguments), Span.covering(name.span, end_token))

    def _parse_identifier(self, what: str = "identifier") -> Identifier:
        token = self._consume(TokenKind.IDENTIFIER, what=what)
        return Identifier(token.text, Span(token.start, token.end))

    # Token stream utilities

    def _token_at(self, index: int) -> Token:
        """Buffered token at ``index``, pulling from the stream as needed."""
        while len(self.tokens) <= index and not self._exhausted:
            token = next(self._stream, None)
            if token is None:
                token = self._synthetic_end()
            self.tokens.append(token)
            if token.kind is TokenKind.END_OF_INPUT:
                self._exhausted = True
        return self.tokens[min(index, len(self.tokens) - 1)]

    def _synthetic_end(self) -> Token:
        """END_OF_INPUT for token lists that were handed in without one."""
        if self.tokens:
            last = self.tokens[-1]
            return Token(TokenKind.END_OF_INPUT, "", last.end, last.end, last.location)
        return Token(TokenKind.END_OF_INPUT, "", 0, 0, SourceLocation("<unknown>", 1, 1, 0))

    def _significant_index(self, index: int) -> int:
        """First index at or after ``index`` that is not a comment."""
        while self._token_at(index).kind is TokenKind.COMMENT:
            index += 1
        return index

    def _peek_raw(self) -> Token:
        """Current token, comments included."""
        return self._token_at(self.current)

    def _peek(self) -> Token:
        """Current token, skipping over comments without consuming them."""
        return self._token_at(self._significant_index(self.current))

    def _peek_after(self) -> Token:
        """The significant token following ``_peek()``."""
        index = self._significant_index(self.current)
        return self._token_at(self._significant_index(index + 1))

    def _advance_raw(self) -> Token:
        token = self._peek_raw()
        if token.kind is not TokenKind.END_OF_INPUT:
            self.current += 1
        return token

    def _advance(self) -> Token:
        """Consume and return the current significant token."""
        index = self._significant_index(self.current)
        token = self._token_at(index)
        if token.kind is not TokenKind.END_OF_INPUT:
            self.current = index + 1
        return token

    def _match(self, kind: TokenKind, text: Optional[str] = None) -> bool:
        """Consume the current token if it matches."""
        if self._peek().matches(kind, text):
            self._advance()
            return True
        return False

    def _consume(self, kind: TokenKind, text: Optional[str] = None,
                what: Optional[str] = None) -> Token:
        """Consume token of expected kind/text or raise error."""
        if self._peek().matches(kind, text):
            return self._advance()
        if what is None and text is not None:
            what = f"'{text}'"
        raise create_unexpected_token_error({kind}, self._peek(), what)


def parse(source: str, filename: str = "<string>",
          revision: GrammarRevision = DEFAULT_REVISION) -> SourceFile:
    """
    Parse a source string.

    Args:
        source: Source code string
        filename: Filename for error reporting
        revision: Grammar revision to parse with

    Returns:
        SourceFile AST

    Raises:
        LexError: If a character matches no lexical rule
        ParseError: If parsing fails
    """
    grammar = Grammar.for_revision(revision)
    tokens = Lexer(source, filename, grammar=grammar).tokenize()
    return Parser(tokens, grammar=grammar, source_length=len(source)).parse()


def parse_file(filepath: str, revision: GrammarRevision = DEFAULT_REVISION) -> SourceFile:
    """
    Parse a source file.

    Raises:
        LexError, ParseError: If parsing fails
        IOError: If file cannot be read
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        source = f.read()

    return parse(source, filepath, revision)
