"""
Help topic dispatch tests.

Scope
- Validate that `help` without tokens shows the root usage.
- Validate that a sub-command token shows exactly what render() produces.
- Validate reserved keyword topics and unknown tokens.
- Validate the mounted `help` command and its hidden misspelling twin.
- Validate console width detection through the host hook.

Conventions
- Test method names follow CamelCase per project convention.
- Output is captured with a rich Console writing to a string buffer.
"""

from __future__ import annotations

import contextlib
import io
import unittest
from unittest import TestCase, mock

from rich.console import Console

from synopsis import command, render, show_help, helper, Topic, Flag, Option, Cardinal
from synopsis.faults import UnknownCommandError
from synopsis.utils import columns


class TestShowHelp(TestCase):
    """show_help() dispatch."""

    def setUp(self) -> None:
        @command(postfix="See tool help <command> for more information")
        def tool(*, help=Flag("-h", "--help", descr="Show usage information")):
            pass

        @tool.command(name="list", aliases=("l",))
        def listing(files=Cardinal("file", descr="A dex file"), /, api=Option("-a", "--api", hints=("api",))):
            """Lists various objects in a dex file."""

        self.tool = tool
        self.listing = listing
        self.console = Console(file=io.StringIO(), width=120)

    def output(self):
        return self.console.file.getvalue()

    def testNoTopicsShowsRootUsage(self):
        show_help(self.tool, [], width=80, console=self.console)
        self.assertEqual(self.output(), render(self.tool, 80))

    def testCommandTopicMatchesRender(self):
        show_help(self.tool, ["list"], width=80, console=self.console)
        self.assertEqual(self.output(), render(self.listing, 80))

    def testAliasTopicMatchesRender(self):
        show_help(self.tool, ["l"], width=60, console=self.console)
        self.assertEqual(self.output(), render(self.listing, 60))

    def testUnknownTopicRaisesUnknownCommand(self):
        with self.assertRaises(UnknownCommandError):
            show_help(self.tool, ["unknownfoo"], width=80, console=self.console)
        with self.assertRaises(UnknownCommandError):
            self.tool.select("unknownfoo")

    def testKeywordTopicIsWrapped(self):
        topic = Topic("register-info", "Register information for every instruction\n    ALL: all registers")
        show_help(self.tool, ["register-info"], keywords=[topic], width=20, console=self.console)
        self.assertEqual(self.output(), (
            "Register information\n"
            "for every\n"
            "instruction\n"
            "    ALL: all\n"
            "registers\n"
        ))

    def testKeywordShadowsCommand(self):
        show_help(self.tool, ["list"], keywords=[Topic("list", "Topic text")], width=80, console=self.console)
        self.assertEqual(self.output(), "Topic text\n")

    def testTopicsRenderInOrder(self):
        show_help(self.tool, ["list", "list"], width=80, console=self.console)
        self.assertEqual(self.output(), render(self.listing, 80) * 2)

    def testInvalidTopics(self):
        with self.assertRaises(TypeError):
            show_help(self.tool, "list", width=80, console=self.console)
        with self.assertRaises(ValueError):
            show_help(self.tool, [], keywords=[Topic("a", "x"), Topic("a", "y")], console=self.console)


class TestHelper(TestCase):
    """The mounted help command."""

    def setUp(self) -> None:
        @command
        def tool():
            pass

        tool.command(lambda: None, name="list")
        self.help = helper(tool, Topic("register-info", "Register information"))
        self.tool = tool

    def testHelpIsMountedWithMisspelling(self):
        self.assertIs(self.tool.select("help"), self.help)
        self.assertTrue(self.tool.select("hlep").hidden)
        self.assertEqual(self.help.descr, "Shows usage information")
        self.assertEqual(
            self.help.main.descr, "If specified, only show the usage information for the given commands",
        )

    def testMisspellingIsNotRendered(self):
        text = render(self.tool)
        self.assertIn("  help - Shows usage information\n", text)
        self.assertNotIn("hlep", text)

    def testCallingHelpDispatches(self):
        stdout = io.StringIO()
        with mock.patch.object(__import__("__main__"), "__width__", 80, create=True):
            with contextlib.redirect_stdout(stdout):
                self.help(["list"])
                self.help(["register-info"])
        self.assertEqual(stdout.getvalue(), render(self.tool.select("list"), 80) + "Register information\n")

    def testCallingHelpWithoutTokensShowsRoot(self):
        stdout = io.StringIO()
        with mock.patch.object(__import__("__main__"), "__width__", 80, create=True):
            with contextlib.redirect_stdout(stdout):
                self.help()
        self.assertEqual(stdout.getvalue(), render(self.tool, 80))


class TestColumns(TestCase):
    """Console width detection."""

    def testHostOverride(self):
        with mock.patch.object(__import__("__main__"), "__width__", 42, create=True):
            self.assertEqual(columns(), 42)

    def testNarrowHostOverrideStillRenders(self):
        @command
        def tool():
            pass

        console = Console(file=io.StringIO(), width=80)
        with mock.patch.object(__import__("__main__"), "__width__", 3, create=True):
            show_help(tool, [], console=console)
        self.assertEqual(console.file.getvalue(), render(tool, 3))

    def testInvalidHostOverrideRaises(self):
        with mock.patch.object(__import__("__main__"), "__width__", "wide", create=True):
            with self.assertRaises(TypeError):
                columns()

    def testFallsBackToConsoleWidth(self):
        self.assertIsInstance(columns(), int)
        self.assertGreater(columns(), 0)


if __name__ == "__main__":
    unittest.main()
