"""
Tests for the empty-slot marker.

This module verifies semantic guarantees of the `nulltype` sentinel:
- Singleton identity (single instance per interpreter process).
- Falsy semantics and representation behavior.
- Rich rendering integration.
- Copying, deep copying and pickling preserve identity.
- Finality (type cannot be subclassed).
"""
import copy
import pickle
import unittest
from unittest import TestCase

from rich.console import Console
from rich.text import Text

from arglet.null import *


class TestNull(TestCase):
    """
    Test suite for the `nulltype` singleton.
    """

    def setUp(self) -> None:
        self.null: nulltype = nulltype()

    def testSingleton(self) -> None:
        """
        The constructor and the exported `null` are the same object.
        """
        self.assertIs(self.null, nulltype())
        self.assertIs(null, self.null)

    def testFalsy(self) -> None:
        self.assertFalse(self.null)

    def testNotEqualToOtherFalsyValues(self) -> None:
        """
        Falsy does not imply equality with None, "" or an empty list.
        """
        self.assertNotEqual(self.null, None)
        self.assertNotEqual(self.null, "")
        self.assertNotEqual(self.null, [])

    def testRich(self) -> None:
        self.assertEqual(self.null.__rich__(), Text("null", style="dim"))

    def testRichConsolePrint(self) -> None:
        """
        Console.print(...) renders 'null' without ANSI when color is disabled.
        """
        console = Console(color_system=None, force_terminal=False)
        with console.capture() as capture:
            console.print(self.null)
        self.assertEqual(capture.get().strip(), "null")

    def testRepr(self) -> None:
        self.assertEqual(repr(self.null), "null")
        self.assertEqual(str(self.null), "null")

    def testCopiesPreserveSingleton(self) -> None:
        self.assertIs(copy.copy(self.null), self.null)
        self.assertIs(copy.deepcopy(self.null), self.null)
        self.assertIs(pickle.loads(pickle.dumps(self.null)), self.null)

    def testFinalClass(self) -> None:
        with self.assertRaises(TypeError):
            type("nulltype", (nulltype,), {})


if __name__ == '__main__':
    unittest.main()
