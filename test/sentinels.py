"""
Tests for the internal helpers (Unset, coalesce, rename, mirror).

This module verifies:
- Singleton identity, falsy semantics and representation of Unset.
- coalesce() preserving legitimate falsy values.
- rename() fixing the names of generated callables.
- mirror() exposing read-only views of private containers.
"""
import copy
import unittest
from unittest import TestCase

from commando.utils import *


class UnsetTest(TestCase):
    """
    Test suite for the `UnsetType` singleton.
    """

    def testSingleton(self) -> None:
        self.assertIs(UnsetType(), Unset)
        self.assertIs(UnsetType(), UnsetType())

    def testFalsy(self) -> None:
        self.assertFalse(Unset)

    def testNotEqualToOtherFalsyValues(self) -> None:
        for value in (None, False, 0, ""):
            self.assertIsNot(Unset, value)
            self.assertNotEqual(Unset, value)

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")
        self.assertEqual(str(Unset), "Unset")

    def testUnionWithTypes(self) -> None:
        self.assertIsInstance(Unset, str | Unset)
        self.assertIsInstance("value", Unset | str)

    def testCopyPreservesSingleton(self) -> None:
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)

    def testFinalClass(self) -> None:
        with self.assertRaises(TypeError):
            class Subclass(UnsetType):  # NOQA
                pass


class HelpersTest(TestCase):
    """
    Test suite for coalesce(), rename() and mirror().
    """

    def testCoalesce(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))
        for value in (None, False, 0, ""):
            self.assertIs(coalesce(value, "fallback"), value)

    def testRenameDecorator(self) -> None:
        def function():
            pass

        self.assertIs(rename("other")(function), function)
        self.assertEqual(function.__name__, "other")
        self.assertEqual(function.__qualname__, "other")

    def testRenameRejectsBadArguments(self) -> None:
        with self.assertRaises(TypeError):
            rename(1)
        with self.assertRaises(TypeError):
            rename("other")(len)

    def testMirrorReturnsViews(self) -> None:
        class Record:
            names = mirror("names")
            table = mirror("table")
            tags = mirror("tags")
            label = mirror("label")

            def __init__(self):
                self._names = ["a", "b"]
                self._table = {"a": 1}
                self._tags = {"x"}
                self._label = "record"

        record = Record()
        self.assertEqual(record.names, ("a", "b"))
        self.assertEqual(record.tags, frozenset({"x"}))
        self.assertEqual(record.label, "record")
        with self.assertRaises(TypeError):
            record.table["b"] = 2
        with self.assertRaises(AttributeError):
            record.label = "other"

        record._table["b"] = 2
        self.assertEqual(record.table["b"], 2)


if __name__ == "__main__":
    unittest.main()
