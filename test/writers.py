"""
Tests for the wrapping, indenting text sink.

This module verifies the sink contract the renderer relies on:
- Indentation applies from the next line on and is clamped to maxindent.
- Lines break at the last fitting space; longer words break hard.
- flush() terminates the pending line only when it holds text.
- deindent() below zero is a programming error.
- wrap() wraps every source line on its own.
"""
import io
import unittest
from unittest import TestCase

from synopsis.writers import IndentingWriter, wrap


class IndentingWriterTest(TestCase):
    """
    Test suite for IndentingWriter.
    """

    def setUp(self) -> None:
        self.stream = io.StringIO()

    def writer(self, maxindent=15, width=20):
        return IndentingWriter(self.stream, maxindent=maxindent, width=width)

    def testIndentAppliesToNextLine(self):
        writer = self.writer()
        writer.write("head")
        writer.indent(2)
        writer.write(" same\nnext")
        writer.flush()
        self.assertEqual(self.stream.getvalue(), "head same\n  next\n")

    def testIndentationIsClamped(self):
        writer = self.writer(maxindent=2)
        writer.indent(8)
        self.assertEqual(writer.indentation, 2)
        writer.write("x\ny")
        writer.flush()
        self.assertEqual(self.stream.getvalue(), "x\n  y\n")

    def testBreaksAtLastFittingSpace(self):
        writer = self.writer(maxindent=8, width=12)
        writer.indent(4)
        writer.write("alpha beta gamma delta")
        writer.flush()
        self.assertEqual(self.stream.getvalue(), "alpha beta\n    gamma\n    delta\n")

    def testLongWordBreaksHard(self):
        writer = self.writer(maxindent=0, width=5)
        writer.write("abcdefghij")
        writer.flush()
        self.assertEqual(self.stream.getvalue(), "abcde\nfghij\n")

    def testFlushSkipsBlankLine(self):
        writer = self.writer()
        writer.indent(4)
        writer.write("text\n")
        writer.flush()
        self.assertEqual(self.stream.getvalue(), "text\n")

        writer.flush()
        self.assertEqual(self.stream.getvalue(), "text\n")

    def testDeindentBelowZeroRaises(self):
        writer = self.writer()
        writer.indent(2)
        writer.deindent(2)
        with self.assertRaises(ValueError):
            writer.deindent(1)

    def testNegativeIndentRaises(self):
        with self.assertRaises(ValueError):
            self.writer().indent(-1)

    def testMaxIndentMustBeLowerThanWidth(self):
        with self.assertRaises(ValueError):
            self.writer(maxindent=20, width=20)
        with self.assertRaises(TypeError):
            self.writer(width="20")

    def testNonStringWriteRaises(self):
        with self.assertRaises(TypeError):
            self.writer().write(42)


class WrapTest(TestCase):
    """
    Test suite for wrap().
    """

    def testEachSourceLineWrapsIndependently(self):
        self.assertEqual(wrap("  alpha beta gamma\nshort", 12), ["  alpha beta", "gamma", "short"])

    def testBlankLinesArePreserved(self):
        self.assertEqual(wrap("a\n\nb", 10), ["a", "", "b"])


if __name__ == "__main__":
    unittest.main()
