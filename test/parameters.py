"""
Parameter declaration and introspection tests.

Scope
- Validate eager sanitization of Option/Flag/Cardinal metadata.
- Validate the derived arity, hints and sort key used by the renderer.
- Validate the read-only, introspectable surface (repr, properties, sealing).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from synopsis import Option, Flag, Cardinal
from synopsis.introspection import arity, hints, displaynames, sortkey


class TestParameterDeclaration(TestCase):
    """Sanitization of parameter declarations."""

    def testNamesKeepDeclarationOrder(self):
        self.assertEqual(Flag("-h", "-?", "--help").names, ("-h", "-?", "--help"))

    def testMissingNamesRaise(self):
        with self.assertRaises(TypeError):
            Option()

    def testDashOnlyNameRaises(self):
        with self.assertRaises(ValueError):
            Option("--")

    def testWhitespaceInNameRaises(self):
        with self.assertRaises(ValueError):
            Option("--class path")

    def testDuplicateNamesRaise(self):
        with self.assertRaises(ValueError):
            Flag("-h", "-h")

    def testNegativeArityRaises(self):
        with self.assertRaises(ValueError):
            Option("--api", arity=-1)

    def testBooleanArityRaises(self):
        with self.assertRaises(TypeError):
            Option("--api", arity=True)

    def testStringHintsRaise(self):
        with self.assertRaises(TypeError):
            Option("--api", hints="level")

    def testEmptyDescriptionRaises(self):
        with self.assertRaises(ValueError):
            Cardinal(descr="   ")

    def testUnsetDescriptionBecomesNone(self):
        self.assertIsNone(Option("--api").descr)
        self.assertIsNone(Option("--api").arity)

    def testPropertiesAreReadOnly(self):
        option = Option("--api")
        with self.assertRaises(AttributeError):
            option.names = ("--level",)  # type: ignore[misc]

    def testSpecsAreSealed(self):
        with self.assertRaises(TypeError):
            class Custom(Option): ...  # NOQA: F-841
        with self.assertRaises(TypeError):
            class Main(Cardinal): ...  # NOQA: F-841

    def testRepr(self):
        self.assertEqual(
            repr(Option("-a", "--api", hints=("level",))),
            "option(names=('-a', '--api'), arity=None, hints=('level',), descr=None, hidden=False)",
        )
        self.assertEqual(repr(Cardinal("file")), "cardinal(hints=('file',), descr=None, hidden=False)")


class TestParameterIntrospection(TestCase):
    """Derived facts used by the renderer."""

    def testDefaultArityFollowsKind(self):
        self.assertEqual(arity(Flag("--help")), 0)
        self.assertEqual(arity(Option("--api")), 1)
        self.assertEqual(arity(Cardinal()), 1)

    def testPositiveArityOverridesKind(self):
        self.assertEqual(arity(Option("--classpath", arity=3)), 3)
        self.assertEqual(arity(Flag("--debug", arity=2)), 2)

    def testZeroArityFallsBackToKind(self):
        self.assertEqual(arity(Option("--api", arity=0)), 1)
        self.assertEqual(arity(Flag("--help", arity=0)), 0)

    def testHints(self):
        self.assertEqual(hints(Option("--api")), ())
        self.assertEqual(hints(Cardinal("file", "more")), ("file", "more"))

    def testSortKeyStripsEveryLeadingDash(self):
        self.assertEqual(sortkey(Option("--bootclasspath", "-b")), "bootclasspath")
        self.assertEqual(sortkey(Option("-a")), "a")
        self.assertEqual(displaynames(Option("-a", "--api")), ("-a", "--api"))


if __name__ == "__main__":
    unittest.main()
