# python
"""
Utilities module behavioral tests.

Scope
- Validate the Unset sentinel (singleton, falsy, final) and coalesce().
- Validate rename() in both call forms and mirror() read-only properties.
- Validate ordinal() labels and quote() message quoting.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from flagpole.utils import *


class UnsetTest(TestCase):
    """Behavioral tests for the Unset sentinel and coalesce()."""

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)
        self.assertIs(UnsetType(), UnsetType())

    def testFalsy(self):
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)
        self.assertNotEqual(Unset, False)

    def testRepr(self):
        self.assertEqual(repr(Unset), "Unset")

    def testFinalClass(self):
        with self.assertRaises(TypeError):
            class Subclass(UnsetType):  # NOQA: F-841
                pass

    def testCoalesceReplacesOnlyUnset(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertIs(coalesce(False, True), False)
        self.assertEqual(coalesce(0, 1), 0)
        self.assertEqual(coalesce("", "x"), "")


class RenameTest(TestCase):
    """Behavioral tests for rename()."""

    def testRenameInPlace(self):
        def function():
            pass

        self.assertIs(rename(function, "renamed"), function)
        self.assertEqual(function.__name__, "renamed")
        self.assertEqual(function.__qualname__, "renamed")

    def testRenameDecorator(self):
        @rename("declare")
        def function():
            pass

        self.assertEqual(function.__name__, "declare")

    def testRenameRejectsBadArguments(self):
        with self.assertRaises(TypeError):
            rename(42, "name")
        with self.assertRaises(TypeError):
            rename(lambda: None, 42)
        with self.assertRaises(TypeError):
            rename(42)
        with self.assertRaises(TypeError):
            rename()


class MirrorTest(TestCase):
    """Behavioral tests for mirror() read-only properties."""

    def setUp(self):
        class Record:
            items = mirror("items")
            label = mirror("label")

            def __init__(self):
                self._items = [1, 2]
                self._label = "text"

        self.record = Record()

    def testMirrorReadsBackingField(self):
        self.assertEqual(self.record.items, [1, 2])
        self.assertEqual(self.record.label, "text")

    def testMirrorCopiesContainers(self):
        items = self.record.items
        items.append(3)
        self.assertEqual(self.record.items, [1, 2])

    def testMirrorIsReadOnly(self):
        with self.assertRaises(AttributeError):
            self.record.label = "other"

    def testMirrorRejectsNonStringName(self):
        with self.assertRaises(TypeError):
            mirror(1)


class OrdinalTest(TestCase):
    """Behavioral tests for ordinal()."""

    def testWords(self):
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(3), "third")
        self.assertEqual(ordinal(10), "tenth")

    def testSuffixes(self):
        self.assertEqual(ordinal(11), "11th")
        self.assertEqual(ordinal(12), "12th")
        self.assertEqual(ordinal(21), "21st")
        self.assertEqual(ordinal(22), "22nd")
        self.assertEqual(ordinal(23), "23rd")
        self.assertEqual(ordinal(102), "102nd")
        self.assertEqual(ordinal(113), "113th")


class QuoteTest(TestCase):
    """Behavioral tests for quote()."""

    def testShortFlagsUseSingleQuotes(self):
        self.assertEqual(quote("-", char=True), "'-'")
        self.assertEqual(quote("'", char=True), "'\\''")

    def testTextUsesDoubleQuotes(self):
        self.assertEqual(quote("servers"), '"servers"')
        self.assertEqual(quote("4"), '"4"')
        self.assertEqual(quote(""), '""')

    def testEscapes(self):
        self.assertEqual(quote("a\tb"), '"a\\tb"')
        self.assertEqual(quote('say "hi"'), '"say \\"hi\\""')
        self.assertEqual(quote("back\\slash"), '"back\\\\slash"')
        self.assertEqual(quote("\x00"), '"\\x00"')
        self.assertEqual(quote("\u200b"), '"\\u200b"')

    def testPrintableUnicodeKept(self):
        self.assertEqual(quote("café"), '"café"')

    def testRejectsNonString(self):
        with self.assertRaises(TypeError):
            quote(5)


if __name__ == "__main__":
    unittest.main()
