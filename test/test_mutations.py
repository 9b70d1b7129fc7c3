"""
Mutation engine behavioral tests (append, overwrite, truncate, delete, rename).

Scope
- Validate each operation's effect on the store and on untouched aliases.
- Validate faults and that a failed operation leaves the store unchanged.

Conventions
- Test method names follow CamelCase per project convention.
- Stores are built through the public operations, never by hand.
"""

from __future__ import annotations

import copy
import unittest
from unittest import TestCase

from lalias import append, delete, overwrite, rename, truncate, parse, Alias, Line, Literal, Placeholder, Store
from lalias.faults import (
    BadNumericalInputError,
    DuplicateLabelError,
    InsufficientInputsError,
    LabelNotFoundError,
    MalformedLabelError,
    MalformedLineError,
    TruncateFailureError,
)


def _store():
    store = Store()
    append(store, "first", ["echo one"])
    append(store, "build", ["make", "make install", "make clean"])
    append(store, "last", ["echo <<0>>"])
    return store


class TestAppend(TestCase):
    """Behavioral tests for append()."""

    def testAppendNewCreatesTailNode(self):
        store = _store()
        alias = append(store, "deploy", ["scp <<0>> host:", "ssh host ./<<0>>"])
        self.assertEqual(store.names, (b"first", b"build", b"last", b"deploy"))
        self.assertIs(store.find("deploy"), alias)
        self.assertEqual(alias.lines, [
            Line([Literal(b"scp "), Placeholder(0), Literal(b" host:")]),
            Line([Literal(b"ssh host ./"), Placeholder(0)]),
        ])

    def testAppendExistingExtendsLines(self):
        store = _store()
        before = copy.deepcopy(store.find("first"))
        append(store, "build", ["make test"])
        self.assertEqual(store.names, (b"first", b"build", b"last"))
        self.assertEqual([line[0].text for line in store.find("build").lines],
                         [b"make", b"make install", b"make clean", b"make test"])
        self.assertEqual(store.find("first"), before)

    def testAppendWithoutLinesRaises(self):
        store = _store()
        with self.assertRaises(InsufficientInputsError):
            append(store, "build", [])

    def testAppendRestrictedNameRaises(self):
        for name in ("two words", "a{b", "a}b", "a<b", "a>b", "a\nb", "a:b", ""):
            with self.subTest(name=name):
                store = _store()
                with self.assertRaises(MalformedLabelError):
                    append(store, name, ["echo"])
                self.assertEqual(store, _store())

    def testAppendMalformedLineLeavesStoreUnchanged(self):
        store = _store()
        with self.assertRaises(MalformedLineError):
            append(store, "build", ["make test", "echo }"])
        self.assertEqual(store, _store())


class TestOverwrite(TestCase):
    """Behavioral tests for overwrite()."""

    def testOverwriteReplacesLinesInPlace(self):
        store = _store()
        overwrite(store, "build", ["ninja"])
        self.assertEqual(store.names, (b"first", b"build", b"last"))
        self.assertEqual(store.find("build").lines, [Line([Literal(b"ninja")])])

    def testOverwriteMissingRaises(self):
        with self.assertRaises(LabelNotFoundError):
            overwrite(_store(), "nope", ["echo"])

    def testOverwriteWithoutLinesRaises(self):
        store = _store()
        with self.assertRaises(InsufficientInputsError):
            overwrite(store, "build", [])
        self.assertEqual(store, _store())


class TestTruncate(TestCase):
    """Behavioral tests for truncate()."""

    def testTruncateDefaultsToOneLine(self):
        store = _store()
        truncate(store, "build")
        self.assertEqual(len(store.find("build").lines), 2)

    def testTruncateN(self):
        store = _store()
        truncate(store, "build", 2)
        self.assertEqual(store.find("build").lines, [Line([Literal(b"make")])])

    def testTruncateAcceptsNumericText(self):
        store = _store()
        truncate(store, "build", "2")
        self.assertEqual(len(store.find("build").lines), 1)

    def testTruncateZeroIsNoop(self):
        store = _store()
        truncate(store, "build", 0)
        self.assertEqual(store, _store())

    def testTruncateZeroKeepsLinelessNode(self):
        store = parse(b"x:<<END>>\n")
        self.assertEqual(truncate(store, "x", 0), Alias(b"x"))
        self.assertIn(b"x", store)

    def testTruncateToEmptyRemovesNode(self):
        store = _store()
        self.assertIsNone(truncate(store, "build", 3))
        self.assertNotIn("build", store)
        with self.assertRaises(LabelNotFoundError):
            store.find("build")
        self.assertEqual(store.names, (b"first", b"last"))

    def testTruncateSingleLineRemovesNode(self):
        store = _store()
        truncate(store, "first", 1)
        self.assertEqual(store.names, (b"build", b"last"))

    def testTruncateTooManyRaisesAndKeepsStore(self):
        store = _store()
        with self.assertRaises(TruncateFailureError):
            truncate(store, "build", 4)
        self.assertEqual(store, _store())

    def testTruncateBadNumberRaises(self):
        for count in ("x", "1a", "-1", " 1", "", -1):
            with self.subTest(count=count):
                store = _store()
                with self.assertRaises(BadNumericalInputError):
                    truncate(store, "build", count)
                self.assertEqual(store, _store())

    def testTruncateMissingRaises(self):
        with self.assertRaises(LabelNotFoundError):
            truncate(_store(), "nope")


class TestDelete(TestCase):
    """Behavioral tests for delete()."""

    def testDeleteRemovesOnlyTarget(self):
        store = _store()
        delete(store, "build")
        self.assertEqual(store.names, (b"first", b"last"))
        self.assertEqual(store.find("last").lines, _store().find("last").lines)
        with self.assertRaises(LabelNotFoundError):
            store.find("build")

    def testDeleteMissingRaises(self):
        store = _store()
        with self.assertRaises(LabelNotFoundError):
            delete(store, "nope")
        self.assertEqual(store, _store())


class TestRename(TestCase):
    """Behavioral tests for rename()."""

    def testRenameKeepsLinesAndPosition(self):
        store = _store()
        lines = list(store.find("build").lines)
        rename(store, "build", "compile")
        self.assertEqual(store.names, (b"first", b"compile", b"last"))
        self.assertEqual(store.find("compile").lines, lines)
        with self.assertRaises(LabelNotFoundError):
            store.find("build")

    def testRenameOntoExistingRaises(self):
        store = _store()
        with self.assertRaises(DuplicateLabelError):
            rename(store, "build", "last")
        self.assertEqual(store, _store())

    def testRenameToSameNameIsNoop(self):
        store = _store()
        rename(store, "build", "build")
        self.assertEqual(store, _store())

    def testRenameRestrictedNameRaises(self):
        store = _store()
        with self.assertRaises(MalformedLabelError):
            rename(store, "build", "new name")
        self.assertEqual(store, _store())

    def testRenameMissingRaises(self):
        with self.assertRaises(LabelNotFoundError):
            rename(_store(), "nope", "other")


if __name__ == "__main__":
    unittest.main()
