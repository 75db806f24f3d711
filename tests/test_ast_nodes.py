"""
Test suite for the shitlang AST nodes and traversal helpers.

Author: halo
"""

import os
import sys
import unittest

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from shitlang.parser import (
    ASTNodeType, Assignment, BinaryExpression, Call, Comparison, Identifier,
    NodeVisitor, NumberLiteral, Span, dump, parse, walk,
)


class TestSpan(unittest.TestCase):

    def test_contains(self):
        outer = Span(0, 10)
        self.assertTrue(outer.contains(Span(0, 10)))
        self.assertTrue(outer.contains(Span(3, 4)))
        self.assertFalse(outer.contains(Span(5, 11)))

    def test_covering_and_text(self):
        span = Span.covering(Span(2, 3), Span(6, 9))
        self.assertEqual(span, Span(2, 9))
        self.assertEqual(span.text("x = foo(1)"), "= foo(1")
        self.assertEqual(str(span), "2..9")


class TestNodeInvariants(unittest.TestCase):

    def test_assignment_requires_identifier_target(self):
        number = NumberLiteral(1, "1", Span(0, 1))
        with self.assertRaises(ValueError):
            Assignment("=", number, number, Span(0, 5))

    def test_assignment_requires_equals(self):
        target = Identifier("x", Span(0, 1))
        with self.assertRaises(ValueError):
            Assignment("+", target, target, Span(0, 5))

    def test_comparison_operator(self):
        a = Identifier("a", Span(0, 1))
        with self.assertRaises(ValueError):
            Comparison("*", a, a, Span(0, 5))
        self.assertEqual(Comparison("<", a, a, Span(0, 5)).node_type, ASTNodeType.COMPARISON)

    def test_nodes_are_immutable(self):
        node = Identifier("x", Span(0, 1))
        with self.assertRaises(AttributeError):
            node.name = "y"

    def test_assignment_is_a_binary_expression(self):
        node = parse("x = 1").definitions[0]
        self.assertIsInstance(node, BinaryExpression)
        self.assertEqual(node.node_type, ASTNodeType.ASSIGNMENT)

    def test_str(self):
        node = parse("foo(1)").definitions[0]
        self.assertEqual(str(node), "Call@0..6")


class TestTraversal(unittest.TestCase):

    def test_walk_is_preorder(self):
        tree = parse("x = f(1) + y")
        names = [node.node_type.value for node in walk(tree)]
        self.assertEqual(names, [
            "SourceFile", "Assignment", "Identifier", "BinaryExpression",
            "Call", "Identifier", "NumberLiteral", "Identifier",
        ])

    def test_node_visitor_dispatch(self):
        class NameCollector(NodeVisitor):
            def __init__(self):
                self.names = []

            def visit_identifier(self, node):
                self.names.append(node.name)

            def visit_call(self, node):
                self.names.append(f"{node.name.name}()")
                for argument in node.arguments:
                    self.visit(argument)

        collector = NameCollector()
        parse("fun f(a)\nret g(a, b) + c").accept(collector)
        self.assertEqual(collector.names, ["f", "a", "g()", "a", "b", "c"])

    def test_dump(self):
        self.assertEqual(dump(parse("x = 1 + 2")), "\n".join([
            "SourceFile",
            "    Assignment: =",
            "        Identifier: x",
            "        BinaryExpression: +",
            "            NumberLiteral: 1",
            "            NumberLiteral: 2",
        ]))

    def test_dump_definitions(self):
        text = dump(parse("# hi\nextern print(x)\nif a : b else c;"))
        self.assertIn("    Comment: # hi", text.splitlines())
        self.assertIn("        Call: print", text.splitlines())
        self.assertIn("    IfElse", text.splitlines())
        self.assertIn("    EndOfStatement", text.splitlines())

    def test_call_children(self):
        node = parse("f(1, 2)").definitions[0]
        self.assertIsInstance(node, Call)
        self.assertEqual(len(node.children()), 3)


if __name__ == '__main__':
    unittest.main()
