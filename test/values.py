"""
Value slot behavioral tests.

Scope
- Storage of the two shapes (single string, ordered list of strings).
- Type-checked extraction: matching shape, mismatched shape, empty slot.
- Independence of copies (no aliasing between a value, its copies and caller data).

Conventions
- Test method names follow CamelCase per project convention.
"""
import copy
import unittest
from unittest import TestCase

from arglet import Value, TypeMismatchError, EmptyValueError, FaultCode
from arglet.null import null


class TestValue(TestCase):
    """Behavioral tests for the tagged value container."""

    def testDefaultIsEmpty(self):
        value = Value()
        self.assertTrue(value.empty)
        self.assertIsNone(value.shape)
        self.assertEqual(len(value), 0)

    def testStoreStringTagsStr(self):
        value = Value("v")
        self.assertIs(value.shape, str)
        self.assertEqual(value.extract(str), "v")
        self.assertEqual(value.extract(), "v")

    def testStoreIterableTagsList(self):
        value = Value(iter(("a", "b", "c")))
        self.assertIs(value.shape, list)
        self.assertEqual(value.extract(list), ["a", "b", "c"])

    def testGenericListShapeAccepted(self):
        value = Value(["a"])
        self.assertEqual(value.extract(list[str]), ["a"])

    def testEmptyStringIsStillStored(self):
        value = Value("")
        self.assertFalse(value.empty)
        self.assertEqual(value.extract(), "")
        self.assertEqual(len(value), 1)

    def testEmptyListIsStillStored(self):
        value = Value([])
        self.assertFalse(value.empty)
        self.assertEqual(value.extract(list), [])
        self.assertEqual(len(value), 0)

    def testStoreReplacesPreviousShape(self):
        value = Value("v")
        value.store(["x", "y"])
        self.assertIs(value.shape, list)
        with self.assertRaises(TypeMismatchError):
            value.extract(str)

    def testMismatchedExtractionRaises(self):
        value = Value("v")
        with self.assertRaises(TypeMismatchError) as context:
            value.extract(list)
        self.assertIs(context.exception.options["code"], FaultCode.TYPE_MISMATCH)
        self.assertIsInstance(context.exception, TypeError)

    def testEmptyExtractionRaises(self):
        with self.assertRaises(EmptyValueError) as context:
            Value().extract(str)
        self.assertIsInstance(context.exception, LookupError)

    def testUnsupportedShapeRejected(self):
        with self.assertRaises(TypeError):
            Value("v").extract(int)
        with self.assertRaises(TypeError):
            Value(["v"]).extract(list[int])

    def testNonStringContentRejected(self):
        with self.assertRaises(TypeError):
            Value(3)
        with self.assertRaises(TypeError):
            Value(["a", 1])

    def testClearEmptiesTheSlot(self):
        value = Value(["a"])
        value.clear()
        self.assertTrue(value.empty)
        with self.assertRaises(EmptyValueError):
            value.extract(list)


class TestValueCopies(TestCase):
    """Copies and extracted content never alias each other."""

    def testStoreCopiesCallerList(self):
        source = ["a", "b"]
        value = Value(source)
        source.append("c")
        self.assertEqual(value.extract(list), ["a", "b"])

    def testExtractReturnsFreshList(self):
        value = Value(["a"])
        value.extract(list).append("b")
        self.assertEqual(value.extract(list), ["a"])

    def testCopyIsIndependent(self):
        value = Value(["a"])
        clone = copy.copy(value)
        value.store(["z"])
        self.assertEqual(clone.extract(list), ["a"])

    def testDeepcopyIsIndependent(self):
        value = Value(["a", "b"])
        clone = copy.deepcopy(value)
        self.assertEqual(clone, value)
        self.assertIsNot(clone, value)
        clone.clear()
        self.assertEqual(value.extract(list), ["a", "b"])

    def testCopyConstructorKeepsShape(self):
        self.assertIs(Value(Value("v")).shape, str)
        self.assertTrue(Value(Value()).empty)

    def testEqualityConsidersShape(self):
        self.assertNotEqual(Value("a"), Value(["a"]))
        self.assertEqual(Value(["a"]), Value(("a",)))

    def testRichReprShowsNullWhenEmpty(self):
        self.assertIs(next(Value().__rich_repr__()), null)
        self.assertEqual(repr(Value("v")), "value('v')")


if __name__ == '__main__':
    unittest.main()
