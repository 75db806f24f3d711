"""
shitlang Parser Package

Recursive descent parser for shitlang, with precedence climbing for binary
expressions. Produces immutable AST nodes carrying source spans.

Key Features:
- Table-driven operator precedence (per grammar revision)
- Structural check of assignment targets
- Comments preserved as definitions at the top level and inside blocks
- First-error diagnostics with expected token kinds

Author: halo
"""

from .ast_nodes import (
    ASTNode, ASTNodeType, ASTVisitor, NodeVisitor, ASTPrinter, Span,
    SourceFile, Definition, Expression, Comment, Block, ReturnStatement,
    EndOfStatement, Identifier, NumberLiteral, Call, BinaryExpression,
    Assignment, Comparison, ExternDeclaration, FunctionDefinition, IfElse,
    ForLoop, walk, dump,
)
from .parser import Parser, parse, parse_file
from .errors import ParseError

__all__ = [
    # Core parser
    "Parser", "parse", "parse_file",

    # AST nodes
    "ASTNode", "ASTNodeType", "ASTVisitor", "NodeVisitor", "ASTPrinter", "Span",
    "SourceFile", "Definition", "Expression", "Comment", "Block",
    "ReturnStatement", "EndOfStatement", "Identifier", "NumberLiteral", "Call",
    "BinaryExpression", "Assignment", "Comparison", "ExternDeclaration",
    "FunctionDefinition", "IfElse", "ForLoop",
    "walk", "dump",

    # Error handling
    "ParseError",
]
