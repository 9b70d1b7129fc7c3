"""
Serializer behavioral tests (canonical bytes and round trips).

Scope
- Validate the exact canonical layout written for each alias.
- Validate parse(serialize(store)) == store for stores built by the mutation engine.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from lalias import parse, serialize, append, rename, truncate, Store
from lalias.serializer import serialize_line
from lalias.lexer import lex_text


class TestSerialize(TestCase):
    """Behavioral tests for serialize()."""

    def testEmptyStore(self):
        self.assertEqual(serialize(Store()), b"")

    def testCanonicalLayout(self):
        store = Store()
        append(store, "build", ["gcc <<0>> -o <<1>>", "./<<1>>"])
        append(store, "hi", ["echo hi"])
        self.assertEqual(
            serialize(store),
            b"build:{gcc <<0>> -o <<1>>}{./<<1>>}<<END>>\nhi:{echo hi}<<END>>\n",
        )

    def testLineRendering(self):
        self.assertEqual(serialize_line(lex_text("a {b} <<2>>")), b"{a {b} <<2>>}")

    def testHandWrittenFileIsCanonicalized(self):
        store = parse(b"x:{a}\n{b}\n<<END>>\n\n\ny:{c}<<END>>")
        self.assertEqual(serialize(store), b"x:{a}{b}<<END>>\ny:{c}<<END>>\n")

    def testMalformedPlaceholderIsPreserved(self):
        buffer = b"x:{echo <<one>> <<a<<b>>c>>}<<END>>\n"
        self.assertEqual(serialize(parse(buffer)), buffer)


class TestRoundTrip(TestCase):
    """parse(serialize(store)) == store for engine-built stores."""

    def testRoundTrip(self):
        store = Store()
        append(store, "build", ["gcc <<0>> -o <<1>>"])
        append(store, "loop", ["for i in {1..3}; do echo $i; done", "echo <<0>> >> log.txt"])
        append(store, "build", ["./<<1>>", ""])
        append(store, "nested", ["echo {<<0>>}", "echo <<<<0>>>>"])
        append(store, "gone", ["rm -rf build"])
        rename(store, "gone", "clean")
        truncate(store, "loop", 1)

        self.assertEqual(parse(serialize(store)), store)

    def testRoundTripIsStable(self):
        store = Store()
        append(store, "a", ["x <<0>>y", "<<1>><<2>>"])
        once = serialize(store)
        self.assertEqual(serialize(parse(once)), once)


if __name__ == "__main__":
    unittest.main()
