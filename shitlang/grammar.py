"""
Grammar rule set for shitlang.

Declarative tables describing both revisions of the language: productions,
keywords, operator/punctuation sets and the binary precedence table. The
parser consults these tables; it never dispatches on the production text.

Revision 1 has function bodies and unsigned numbers.
Revision 2 drops function bodies and adds ``if``/``for``, comparisons,
signed numbers and ``;`` terminators. Revision 2 is the default.

Author: halo
"""

from dataclasses import dataclass
from enum import IntEnum
from functools import lru_cache
from typing import Dict, FrozenSet, Mapping


class GrammarRevision(IntEnum):
    """The two incompatible revisions of the grammar."""
    FIRST = 1
    SECOND = 2


DEFAULT_REVISION = GrammarRevision.SECOND


class Associativity(IntEnum):
    LEFT = 0
    RIGHT = 1


# ============================================================================
# Productions
# ============================================================================

_COMMON_PRODUCTIONS = {
    "comment": "/#.*/",
    "parameter_list": "'(' (identifier [','])* ')'",
    "call": "identifier args_list",
    "args_list": "'(' (expression [','])* ')'",
    "return_statement": "'ret' expression",
    "expression": "identifier | number | call | binary_expression",
    "identifier": "/[a-zA-Z][a-zA-Z0-9]*/",
}

PRODUCTIONS: Dict[GrammarRevision, Mapping[str, str]] = {
    GrammarRevision.FIRST: {
        "source_file": "definition*",
        "definition": ("comment | extern_definition | function_definition"
                       " | call | return_statement | expression"),
        "extern_definition": "'extern' identifier",
        "function_definition": "'fun' identifier parameter_list block",
        "block": "'{' definition* '}'",
        **_COMMON_PRODUCTIONS,
        "binary_expression": ("expression ('+' | '-' | '*' | '/') expression"
                              " | identifier '=' expression"),
        "number": r"/\d+/",
    },
    GrammarRevision.SECOND: {
        "source_file": "definition*",
        "definition": ("comment | extern_definition | function_definition"
                       " | call | return_statement | expression | if_else"
                       " | for_loop | end_of_statement"),
        "extern_definition": "'extern' call",
        "function_definition": "'fun' identifier parameter_list",
        **_COMMON_PRODUCTIONS,
        "if_else": "'if' expression ':' expression ['else' expression]",
        "for_loop": ("'for' '(' identifier '=' expression ';' expression"
                     " [';' expression] ')'"),
        "binary_expression": ("expression ('+' | '-' | '*' | '/' | '>' | '<') expression"
                              " | identifier '=' expression"),
        "number": r"/-?\d+/",
        "end_of_statement": "';'",
    },
}


# ============================================================================
# Lexical tables
# ============================================================================

KEYWORDS: Dict[GrammarRevision, FrozenSet[str]] = {
    GrammarRevision.FIRST: frozenset({"extern", "fun", "ret"}),
    GrammarRevision.SECOND: frozenset({"extern", "fun", "ret", "if", "else", "for"}),
}

OPERATORS: Dict[GrammarRevision, FrozenSet[str]] = {
    GrammarRevision.FIRST: frozenset("=+-*/"),
    GrammarRevision.SECOND: frozenset("=+-*/><"),
}

PUNCTUATION: Dict[GrammarRevision, FrozenSet[str]] = {
    GrammarRevision.FIRST: frozenset("{}(),"),
    GrammarRevision.SECOND: frozenset("{}(),;:"),
}

# Higher binds tighter
BINARY_PRECEDENCE: Dict[GrammarRevision, Mapping[str, int]] = {
    GrammarRevision.FIRST: {
        "=": 0,
        "+": 1, "-": 1,
        "*": 2, "/": 2,
    },
    GrammarRevision.SECOND: {
        "=": 0,
        "<": 1, ">": 1,
        "+": 2, "-": 2,
        "*": 3, "/": 3,
    },
}

ASSOCIATIVITY: Mapping[str, Associativity] = {
    op: Associativity.LEFT for op in "=+-*/<>"
}

COMPARISON_OPERATORS = frozenset("<>")
ASSIGNMENT_OPERATOR = "="

# Optional syntax by revision
FEATURES: Dict[GrammarRevision, FrozenSet[str]] = {
    GrammarRevision.FIRST: frozenset({"function_body"}),
    GrammarRevision.SECOND: frozenset({
        "if_else", "for_loop", "end_of_statement", "negative_numbers",
        "comparison", "extern_call",
    }),
}


@dataclass(frozen=True, eq=False)
class Grammar:
    """All tables of one grammar revision."""
    revision: GrammarRevision
    keywords: FrozenSet[str]
    operators: FrozenSet[str]
    punctuation: FrozenSet[str]
    precedences: Mapping[str, int]
    features: FrozenSet[str]
    number_pattern: str

    @classmethod
    def for_revision(cls, revision: GrammarRevision = DEFAULT_REVISION) -> "Grammar":
        return _build_grammar(GrammarRevision(revision))

    def precedence(self, operator: str) -> int:
        """Binding power of a binary operator, -1 for anything else."""
        return self.precedences.get(operator, -1)

    def associativity(self, operator: str) -> Associativity:
        return ASSOCIATIVITY[operator]

    def is_keyword(self, word: str) -> bool:
        return word in self.keywords

    def is_comparison(self, operator: str) -> bool:
        return operator in COMPARISON_OPERATORS and operator in self.operators

    def allows(self, feature: str) -> bool:
        return feature in self.features

    @property
    def productions(self) -> Mapping[str, str]:
        return PRODUCTIONS[self.revision]

    def describe(self) -> str:
        """Render the production and precedence tables as text."""
        width = max(len(name) for name in self.productions)
        lines = [f"# grammar revision {int(self.revision)}"]
        for name, rule in self.productions.items():
            lines.append(f"{name.ljust(width)} := {rule}")
        lines.append("")
        lines.append("# precedence (higher binds tighter)")
        by_level: Dict[int, list] = {}
        for op, level in self.precedences.items():
            by_level.setdefault(level, []).append(op)
        for level in sorted(by_level, reverse=True):
            ops = " ".join(by_level[level])
            assoc = self.associativity(by_level[level][0]).name.lower()
            lines.append(f"{level}: {ops} ({assoc})")
        return "\n".join(lines)


@lru_cache(maxsize=None)
def _build_grammar(revision: GrammarRevision) -> Grammar:
    return Grammar(
        revision=revision,
        keywords=KEYWORDS[revision],
        operators=OPERATORS[revision],
        punctuation=PUNCTUATION[revision],
        precedences=BINARY_PRECEDENCE[revision],
        features=FEATURES[revision],
        number_pattern=PRODUCTIONS[revision]["number"].strip("/"),
    )
