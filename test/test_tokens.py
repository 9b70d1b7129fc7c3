"""
Token tagging behavioral tests.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from lalias.faults import TooManyInputsError
from lalias.tokens import EMPTY, MAX_TOKENS, TokenKind, tag, tokenize


class TestTokenize(TestCase):
    """Behavioral tests for tag() and tokenize()."""

    def testLongFlagKeepsOneDash(self):
        token = tag("--append")
        self.assertIs(token.kind, TokenKind.FLAG)
        self.assertEqual(token.name, "-append")
        self.assertEqual(token.raw, "--append")

    def testShortFlag(self):
        token = tag("-rn")
        self.assertIs(token.kind, TokenKind.FLAG)
        self.assertEqual(token.name, "rn")

    def testInput(self):
        token = tag("build")
        self.assertIs(token.kind, TokenKind.INPUT)
        self.assertEqual(token.name, "build")

    def testEmptyArgv(self):
        self.assertEqual(tokenize([]), (EMPTY,))

    def testOrderIsKept(self):
        self.assertEqual([token.raw for token in tokenize(["-a", "x", "ls -la"])], ["-a", "x", "ls -la"])

    def testTooManyInputsRaises(self):
        with self.assertRaises(TooManyInputsError):
            tokenize(["x"] * (MAX_TOKENS + 1))

    def testStringIsRejected(self):
        with self.assertRaises(TypeError):
            tokenize("-a x y")


if __name__ == "__main__":
    unittest.main()
