#!/usr/bin/env python3
"""
Main test runner for the shitlang front end.

Runs a quick smoke pass over both grammar revisions, then the unittest suite
under tests/.

Author: halo
"""

import sys
import os
import unittest

# Add the project root to the Python path
project_root = os.path.abspath(os.path.dirname(__file__))
sys.path.insert(0, project_root)


def run_smoke_tests():
    """Lex and parse a few small programs end to end."""

    print("🚀 shitlang Front End Test Suite")
    print("=" * 60)

    try:
        from shitlang import GrammarRevision, LexError, ParseError, dump, parse, tokenize
        print("✅ All front end modules imported successfully")
        print()
    except ImportError as e:
        print(f"❌ Failed to import front end modules: {e}")
        return False

    print("Testing revision 2 pipeline...")
    code = """
    # forward declarations
    extern print(x)
    fun add(a, b)

    x = add(1, -2) * 3 + 4;
    if x > 5 : print(x) else print(0)
    for (i = 0; i < x; i = i + 1) { print(i) }
    ret x
    """

    try:
        print("  🔧 Lexing...")
        tokens = list(tokenize(code))
        print(f"     Generated {len(tokens)} tokens")

        print("  🔧 Parsing...")
        ast = parse(code)
        print(f"     Generated AST with {len(ast.definitions)} top-level definitions")
        print()
        print(dump(ast))
        print()
    except (LexError, ParseError) as e:
        print(f"❌ Revision 2 pipeline FAILED:\n{e.diagnostic.format(code)}")
        return False

    print("Testing revision 1 pipeline...")
    code = """
    extern print
    fun add(a, b) {
        ret a + b
    }
    add(1, 2)
    """

    try:
        ast = parse(code, revision=GrammarRevision.FIRST)
        print(f"     ✅ Parsed {len(ast.definitions)} top-level definitions")
    except (LexError, ParseError) as e:
        print(f"❌ Revision 1 pipeline FAILED:\n{e.diagnostic.format(code)}")
        return False

    print("  ❌ Testing error handling...")
    for bad_code in ("fun (a)", "1 + 2 = 3", "x = 1 @ 2"):
        try:
            parse(bad_code)
        except (LexError, ParseError) as e:
            print(f"     ✅ Caught expected {type(e).__name__} [{e.diagnostic.code}] for {bad_code!r}")
        else:
            print(f"     ❌ Error handling test failed: {bad_code!r} parsed without errors")
            return False

    print()
    return True


def run_unit_tests():
    """Discover and run the unittest suite."""
    suite = unittest.defaultTestLoader.discover(os.path.join(project_root, "tests"))
    result = unittest.TextTestRunner(verbosity=1).run(suite)
    return result.wasSuccessful()


if __name__ == "__main__":
    success = run_smoke_tests() and run_unit_tests()
    sys.exit(0 if success else 1)
