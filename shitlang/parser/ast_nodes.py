"""
Abstract Syntax Tree node definitions for shitlang.

Every node is an immutable value that owns its children exclusively (no
parent pointers, no sharing) and carries the source span it covers.
Child spans always lie inside the parent span, in left-to-right order.

Author: halo
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Iterator, List, Optional, Tuple, Union


class ASTNodeType(Enum):
    """Enumeration of all AST node types."""

    # Top-level
    SOURCE_FILE = "SourceFile"

    # Definitions
    COMMENT = "Comment"
    EXTERN_DECLARATION = "ExternDeclaration"
    FUNCTION_DEFINITION = "FunctionDefinition"
    BLOCK = "Block"
    RETURN_STATEMENT = "ReturnStatement"
    IF_ELSE = "IfElse"
    FOR_LOOP = "ForLoop"
    END_OF_STATEMENT = "EndOfStatement"

    # Expressions
    CALL = "Call"
    IDENTIFIER = "Identifier"
    NUMBER_LITERAL = "NumberLiteral"
    BINARY_EXPRESSION = "BinaryExpression"
    ASSIGNMENT = "Assignment"
    COMPARISON = "Comparison"


@dataclass(frozen=True)
class Span:
    """Half-open range of character offsets ``[start, end)``."""
    start: int
    end: int

    @classmethod
    def covering(cls, first: Any, last: Any) -> "Span":
        """Span from the start of ``first`` to the end of ``last`` (tokens or spans)."""
        return cls(first.start, last.end)

    def contains(self, other: "Span") -> bool:
        return self.start <= other.start and other.end <= self.end

    def text(self, source: str) -> str:
        return source[self.start:self.end]

    def __str__(self) -> str:
        return f"{self.start}..{self.end}"


class ASTVisitor(ABC):
    """Abstract visitor interface for traversing AST nodes."""

    @abstractmethod
    def visit(self, node: 'ASTNode') -> Any:
        """Visit a generic AST node."""
        pass


class ASTNode(ABC):
    """Base class for all AST nodes."""

    node_type: ClassVar[ASTNodeType]
    span: Span

    def accept(self, visitor: ASTVisitor) -> Any:
        """Accept a visitor (visitor pattern)."""
        return visitor.visit(self)

    @abstractmethod
    def children(self) -> Tuple['ASTNode', ...]:
        """Get all child nodes, in source order."""
        pass

    def __str__(self) -> str:
        return f"{self.node_type.value}@{self.span}"


class Definition(ASTNode):
    """Anything that may appear at the top level of a source file."""
    pass


class Expression(Definition):
    """Base class for expressions; every expression is also a definition."""
    pass


# ============================================================================
# Top-level and definition nodes
# ============================================================================

@dataclass(frozen=True)
class SourceFile(ASTNode):
    """Root node: the ordered top-level definitions of one source text."""
    definitions: Tuple[Definition, ...]
    span: Span

    node_type = ASTNodeType.SOURCE_FILE

    def children(self) -> Tuple[ASTNode, ...]:
        return self.definitions


@dataclass(frozen=True)
class Comment(Definition):
    """A `#` comment. Never part of an expression."""
    text: str
    span: Span

    node_type = ASTNodeType.COMMENT

    def children(self) -> Tuple[ASTNode, ...]:
        return ()


@dataclass(frozen=True)
class Block(Definition):
    """Brace-delimited definitions: function bodies (revision 1), loop bodies."""
    definitions: Tuple[Definition, ...]
    span: Span

    node_type = ASTNodeType.BLOCK

    def children(self) -> Tuple[ASTNode, ...]:
        return self.definitions


@dataclass(frozen=True)
class ReturnStatement(Definition):
    value: 'Expression'
    span: Span

    node_type = ASTNodeType.RETURN_STATEMENT

    def children(self) -> Tuple[ASTNode, ...]:
        return (self.value,)


@dataclass(frozen=True)
class EndOfStatement(Definition):
    """A `;` marker between top-level definitions."""
    span: Span

    node_type = ASTNodeType.END_OF_STATEMENT

    def children(self) -> Tuple[ASTNode, ...]:
        return ()


# ============================================================================
# Expressions
# ============================================================================

@dataclass(frozen=True)
class Identifier(Expression):
    name: str
    span: Span

    node_type = ASTNodeType.IDENTIFIER

    def children(self) -> Tuple[ASTNode, ...]:
        return ()


@dataclass(frozen=True)
class NumberLiteral(Expression):
    """Integer literal; ``text`` keeps the exact source spelling."""
    value: int
    text: str
    span: Span

    node_type = ASTNodeType.NUMBER_LITERAL

    def children(self) -> Tuple[ASTNode, ...]:
        return ()


@dataclass(frozen=True)
class Call(Expression):
    """Function call: ``name(arg, ...)``."""
    name: Identifier
    arguments: Tuple[Expression, ...]
    span: Span

    node_type = ASTNodeType.CALL

    def children(self) -> Tuple[ASTNode, ...]:
        return (self.name,) + self.arguments


@dataclass(frozen=True)
class BinaryExpression(Expression):
    """Binary operation expression."""
    operator: str
    left: Expression
    right: Expression
    span: Span

    node_type = ASTNodeType.BINARY_EXPRESSION

    def children(self) -> Tuple[ASTNode, ...]:
        return (self.left, self.right)


@dataclass(frozen=True)
class Assignment(BinaryExpression):
    """``identifier = expression``; the target is always a bare identifier."""

    node_type = ASTNodeType.ASSIGNMENT

    def __post_init__(self):
        if self.operator != "=":
            raise ValueError(f"assignment operator must be '=', got {self.operator!r}")
        if not isinstance(self.left, Identifier):
            raise ValueError("assignment target must be an Identifier")

    @property
    def target(self) -> Identifier:
        return self.left

    @property
    def value(self) -> Expression:
        return self.right


@dataclass(frozen=True)
class Comparison(BinaryExpression):
    """``<`` or ``>`` between two expressions."""

    node_type = ASTNodeType.COMPARISON

    def __post_init__(self):
        if self.operator not in ("<", ">"):
            raise ValueError(f"comparison operator must be '<' or '>', got {self.operator!r}")


# ============================================================================
# Definitions that hold expressions
# ============================================================================

@dataclass(frozen=True)
class ExternDeclaration(Definition):
    """``extern`` followed by a call-shaped reference (an identifier in revision 1)."""
    module: Union[Call, Identifier]
    span: Span

    node_type = ASTNodeType.EXTERN_DECLARATION

    def children(self) -> Tuple[ASTNode, ...]:
        return (self.module,)


@dataclass(frozen=True)
class FunctionDefinition(Definition):
    """
    Function definition.

    In revision 2 this is a forward declaration and ``body`` is None.
    In revision 1 ``body`` is the block that follows the parameter list.
    """
    name: Identifier
    parameters: Tuple[Identifier, ...]
    body: Optional[Block]
    span: Span

    node_type = ASTNodeType.FUNCTION_DEFINITION

    def children(self) -> Tuple[ASTNode, ...]:
        children: Tuple[ASTNode, ...] = (self.name,) + self.parameters
        if self.body is not None:
            children += (self.body,)
        return children


@dataclass(frozen=True)
class IfElse(Definition):
    """``if condition : then_branch [else else_branch]``."""
    condition: Expression
    then_branch: Expression
    else_branch: Optional[Expression]
    span: Span

    node_type = ASTNodeType.IF_ELSE

    def children(self) -> Tuple[ASTNode, ...]:
        children: Tuple[ASTNode, ...] = (self.condition, self.then_branch)
        if self.else_branch is not None:
            children += (self.else_branch,)
        return children


@dataclass(frozen=True)
class ForLoop(Definition):
    """``for (init_variable = init_value; condition [; step])`` with an optional block."""
    init_variable: Identifier
    init_value: Expression
    condition: Expression
    step: Optional[Expression]
    span: Span
    body: Optional[Block] = None

    node_type = ASTNodeType.FOR_LOOP

    def children(self) -> Tuple[ASTNode, ...]:
        children: Tuple[ASTNode, ...] = (self.init_variable, self.init_value, self.condition)
        if self.step is not None:
            children += (self.step,)
        if self.body is not None:
            children += (self.body,)
        return children


# ============================================================================
# Traversal
# ============================================================================

def walk(node: ASTNode) -> Iterator[ASTNode]:
    """Yield ``node`` and all its descendants in pre-order."""
    stack: List[ASTNode] = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children()))


class NodeVisitor(ASTVisitor):
    """
    Visitor dispatching on node type: ``visit_call``, ``visit_for_loop`` ...

    Falls back to ``generic_visit``, which visits the children.
    """

    def visit(self, node: ASTNode) -> Any:
        method = getattr(self, f"visit_{node.node_type.name.lower()}", self.generic_visit)
        return method(node)

    def generic_visit(self, node: ASTNode) -> Any:
        for child in node.children():
            self.visit(child)
        return None


class ASTPrinter(NodeVisitor):
    """Indented, one-node-per-line rendering of a tree."""

    INDENT = "    "

    def __init__(self):
        self.lines: List[str] = []
        self._layer = 0

    def render(self, node: ASTNode) -> str:
        self.lines = []
        self._layer = 0
        self.visit(node)
        return "\n".join(self.lines)

    def generic_visit(self, node: ASTNode) -> Any:
        self.lines.append(f"{self.INDENT * self._layer}{self._label(node)}")
        self._layer += 1
        try:
            super().generic_visit(node)
        finally:
            self._layer -= 1
        return None

    @staticmethod
    def _label(node: ASTNode) -> str:
        label = node.node_type.value
        if isinstance(node, Identifier):
            return f"{label}: {node.name}"
        if isinstance(node, NumberLiteral):
            return f"{label}: {node.text}"
        if isinstance(node, Comment):
            return f"{label}: {node.text}"
        if isinstance(node, BinaryExpression):
            return f"{label}: {node.operator}"
        if isinstance(node, Call):
            return f"{label}: {node.name.name}"
        if isinstance(node, FunctionDefinition):
            return f"{label}: {node.name.name}"
        return label


def dump(node: ASTNode) -> str:
    """Render ``node`` as an indented tree."""
    return ASTPrinter().render(node)
