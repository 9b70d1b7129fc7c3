"""
Substitution executor behavioral tests (expansion, ordering, faults).

Scope
- Validate placeholder substitution and line order.
- Validate that insufficient or malformed placeholders abort before any line runs.
- Validate that the default runner uses the shell and ignores exit status.

Conventions
- Test method names follow CamelCase per project convention.
- A list's append method stands in for the shell unless the default runner is under test.
"""

from __future__ import annotations

import unittest
from unittest import TestCase, mock

from lalias import append, expand, invoke, parse, Store
from lalias.faults import InsufficientInputsError, LabelNotFoundError, MalformedPlaceholderError


class TestInvoke(TestCase):
    """Behavioral tests for invoke()."""

    def setUp(self):
        self.store = Store()
        append(self.store, "build", ["gcc <<0>> -o <<1>>"])
        append(self.store, "steps", ["echo first", "echo <<0>>", "echo <<1>> <<0>>"])
        self.calls = []

    def testScenarioBuild(self):
        invoke(self.store, "build", ["main.c", "app"], runner=self.calls.append)
        self.assertEqual(self.calls, [b"gcc main.c -o app"])

    def testLinesRunInOrder(self):
        invoke(self.store, "steps", ["a", "b"], runner=self.calls.append)
        self.assertEqual(self.calls, [b"echo first", b"echo a", b"echo b a"])

    def testExtraArgumentsAreIgnored(self):
        invoke(self.store, "build", ["main.c", "app", "extra"], runner=self.calls.append)
        self.assertEqual(self.calls, [b"gcc main.c -o app"])

    def testInsufficientInputsRunsNothing(self):
        with self.assertRaises(InsufficientInputsError):
            invoke(self.store, "steps", ["a"], runner=self.calls.append)
        self.assertEqual(self.calls, [])

    def testMalformedPlaceholderRunsNothing(self):
        store = parse(b"x:{echo ok}{echo <<one>>}<<END>>\n")
        with self.assertRaises(MalformedPlaceholderError):
            invoke(store, "x", ["a"], runner=self.calls.append)
        self.assertEqual(self.calls, [])

    def testUnknownLabelRaises(self):
        with self.assertRaises(LabelNotFoundError):
            invoke(self.store, "nope", [], runner=self.calls.append)

    def testDefaultRunnerUsesShellAndIgnoresStatus(self):
        with mock.patch("lalias.executor.subprocess.run") as run:
            run.return_value = mock.Mock(returncode=3)
            invoke(self.store, "steps", ["a", "b"])
        self.assertEqual(run.call_count, 3)
        for call in run.call_args_list:
            self.assertEqual(call.kwargs, {"shell": True, "check": False})
        self.assertEqual(run.call_args_list[1].args, (b"echo a",))


class TestExpand(TestCase):
    """Behavioral tests for expand()."""

    def testExpandReturnsEveryCommand(self):
        store = Store()
        alias = append(store, "x", ["cp <<0>> <<0>>.bak", "ls"])
        self.assertEqual(expand(alias, ["f"]), [b"cp f f.bak", b"ls"])

    def testExpandWithoutPlaceholdersNeedsNoArguments(self):
        store = Store()
        alias = append(store, "x", ["ls -la"])
        self.assertEqual(expand(alias), [b"ls -la"])


if __name__ == "__main__":
    unittest.main()
