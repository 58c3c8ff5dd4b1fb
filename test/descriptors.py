"""
Descriptor registry and sub-command resolution tests.

Scope
- Validate registration through Command construction and @extended.
- Validate lookup through the type hierarchy and the missing-descriptor defect.
- Validate resolve(): exact name first, aliases next, None for unknown tokens.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from synopsis import command, extended, descriptor, register, resolve, Descriptor, MissingDescriptorError


class TestDescriptorRegistry(TestCase):
    """Registration and lookup."""

    def testCommandRegistersItsDescriptor(self):
        @command(name="list", aliases=("l", "ls"), inline=True, postfix="more")
        def listing():
            pass

        self.assertEqual(descriptor(listing), Descriptor("list", ("l", "ls"), True, "more"))

    def testExtendedClassAndSubclasses(self):
        @extended("dump", aliases=("d",))
        class DumpCommand:
            pass

        class VerboseDumpCommand(DumpCommand):
            pass

        self.assertEqual(descriptor(DumpCommand()).name, "dump")
        self.assertEqual(descriptor(VerboseDumpCommand()).aliases, ("d",))

    def testMissingDescriptorNamesType(self):
        class Foreign:
            pass

        with self.assertRaises(MissingDescriptorError) as context:
            descriptor(Foreign())
        self.assertIs(context.exception.type, Foreign)
        self.assertIn("Foreign", str(context.exception))
        self.assertIsInstance(context.exception, LookupError)

    def testDoubleRegistrationRaises(self):
        @extended("dump")
        class DumpCommand:
            pass

        with self.assertRaises(ValueError):
            register(DumpCommand, Descriptor("other"))

    def testAliasEqualToNameRaises(self):
        with self.assertRaises(ValueError):
            extended("list", aliases=("list",))
        with self.assertRaises(ValueError):
            extended("list", aliases=("l", "l"))

    def testNameMustBeOneWord(self):
        with self.assertRaises(ValueError):
            extended("list all")
        with self.assertRaises(TypeError):
            extended("list", aliases="l")


class TestResolve(TestCase):
    """Sub-command resolution."""

    def setUp(self) -> None:
        @command
        def tool():
            pass

        tool.command(lambda: None, name="list", aliases=("l", "ls"))
        tool.command(lambda: None, name="dump", aliases=("list-all",), hidden=True)
        tool.command(lambda: None, name="ls-old", aliases=("l",))
        self.tool = tool

    def testResolveByName(self):
        self.assertEqual(resolve(self.tool, "list").name, "list")

    def testResolveByAlias(self):
        self.assertEqual(resolve(self.tool, "ls").name, "list")

    def testFirstAliasMatchWins(self):
        self.assertEqual(resolve(self.tool, "l").name, "list")

    def testHiddenChildrenResolve(self):
        self.assertEqual(resolve(self.tool, "list-all").name, "dump")

    def testUnknownTokenResolvesToNone(self):
        self.assertIsNone(resolve(self.tool, "unknownfoo"))

    def testExactNameBeatsAlias(self):
        @command
        def tool():
            pass

        tool.command(lambda: None, name="list", aliases=("l",))
        tool.command(lambda: None, name="l")
        self.assertEqual(resolve(tool, "l").name, "l")


if __name__ == "__main__":
    unittest.main()
