"""
Tests for value kinds.

This module verifies the conversion rules of every Kind (syntax, ranges,
truncation), the duration grammar and rendering, and that formatted values
convert back to equal values.
"""
from __future__ import annotations

import math
import unittest
from datetime import timedelta
from unittest import TestCase

from flagpole.kinds import *


class KindTest(TestCase):
    """Behavioral tests for Kind members."""

    def testLookupByLabel(self):
        self.assertIs(Kind("int"), Kind.INT)
        self.assertIs(Kind("uint64"), Kind.UINT64)
        self.assertEqual(Kind.DURATION.label, "duration")
        with self.assertRaises(ValueError):
            Kind("integer")

    def testArity(self):
        self.assertIs(Kind.BOOL.arity, Arity.NOTHING)
        for kind in Kind:
            if kind is not Kind.BOOL:
                self.assertIs(kind.arity, Arity.TEXT)

    def testZeroValues(self):
        self.assertIs(Kind.BOOL.zero, False)
        self.assertEqual(Kind.DURATION.zero, timedelta(0))
        self.assertEqual(Kind.STRING.zero, "")
        self.assertEqual(Kind.INT.zero, 0)

    def testConvertRejectsNonString(self):
        with self.assertRaises(TypeError):
            Kind.INT.convert(5)

    def testRepr(self):
        self.assertEqual(repr(Kind.INT), "<kind 'int'>")


class BoolConversionTest(TestCase):
    """Behavioral tests for boolean text conversion."""

    def testTrueSpellings(self):
        for text in ("1", "t", "T", "TRUE", "true", "True"):
            self.assertIs(Kind.BOOL.convert(text), True)

    def testFalseSpellings(self):
        for text in ("0", "f", "F", "FALSE", "false", "False"):
            self.assertIs(Kind.BOOL.convert(text), False)

    def testOtherSpellingsRejected(self):
        for text in ("yes", "", "tRUE", " true"):
            with self.assertRaises(ValueError):
                Kind.BOOL.convert(text)


class IntegerConversionTest(TestCase):
    """Behavioral tests for signed and unsigned integer conversion."""

    def testIntAcceptsSignedDecimal(self):
        self.assertEqual(Kind.INT.convert("42"), 42)
        self.assertEqual(Kind.INT.convert("-7"), -7)
        self.assertEqual(Kind.INT.convert("+7"), 7)
        self.assertEqual(Kind.INT.convert("007"), 7)

    def testIntRangeIs32Bit(self):
        self.assertEqual(Kind.INT.convert("2147483647"), 2147483647)
        self.assertEqual(Kind.INT.convert("-2147483648"), -2147483648)
        with self.assertRaisesRegex(ValueError, "value out of range"):
            Kind.INT.convert("2147483648")

    def testInt64Range(self):
        self.assertEqual(Kind.INT64.convert("9223372036854775807"), 9223372036854775807)
        self.assertEqual(Kind.INT64.convert("-9223372036854775808"), -9223372036854775808)
        with self.assertRaisesRegex(ValueError, "value out of range"):
            Kind.INT64.convert("9223372036854775808")

    def testIntRejectsOtherSyntax(self):
        for text in ("", "abc", "0x10", " 1", "1 ", "1_000", "1.0", "--1"):
            with self.assertRaisesRegex(ValueError, "invalid syntax"):
                Kind.INT.convert(text)

    def testUnsignedRejectsSigns(self):
        for kind in (Kind.UINT, Kind.UINT64):
            with self.assertRaisesRegex(ValueError, "invalid syntax"):
                kind.convert("-1")
            with self.assertRaisesRegex(ValueError, "invalid syntax"):
                kind.convert("+1")

    def testUint64Range(self):
        self.assertEqual(Kind.UINT64.convert("18446744073709551615"), 18446744073709551615)
        with self.assertRaisesRegex(ValueError, "value out of range"):
            Kind.UINT64.convert("18446744073709551616")

    def testUintTruncatesTo32Bits(self):
        self.assertEqual(Kind.UINT.convert("4294967295"), 4294967295)
        self.assertEqual(Kind.UINT.convert("4294967296"), 0)
        self.assertEqual(Kind.UINT.convert("4294967297"), 1)
        with self.assertRaisesRegex(ValueError, "value out of range"):
            Kind.UINT.convert("18446744073709551616")


class FloatConversionTest(TestCase):
    """Behavioral tests for float conversion and rendering."""

    def testDecimalAndExponentForms(self):
        self.assertEqual(Kind.FLOAT.convert("3.14"), 3.14)
        self.assertEqual(Kind.FLOAT.convert("-2"), -2.0)
        self.assertEqual(Kind.FLOAT.convert("1e3"), 1000.0)
        self.assertEqual(Kind.FLOAT.convert(".5"), 0.5)
        self.assertEqual(Kind.FLOAT.convert("5."), 5.0)
        self.assertEqual(Kind.FLOAT.convert("2.5E-3"), 0.0025)

    def testSpecialValues(self):
        self.assertEqual(Kind.FLOAT.convert("inf"), math.inf)
        self.assertEqual(Kind.FLOAT.convert("-Infinity"), -math.inf)
        self.assertTrue(math.isnan(Kind.FLOAT.convert("NaN")))

    def testOverflowRejected(self):
        with self.assertRaisesRegex(ValueError, "value out of range"):
            Kind.FLOAT.convert("1e400")

    def testOtherSyntaxRejected(self):
        for text in ("", "abc", " 1.0", "1.0 ", "1_0", "0x1p3", "."):
            with self.assertRaisesRegex(ValueError, "invalid syntax"):
                Kind.FLOAT.convert(text)

    def testFormat(self):
        self.assertEqual(Kind.FLOAT.format(100.0), "100")
        self.assertEqual(Kind.FLOAT.format(0.1), "0.1")
        self.assertEqual(Kind.FLOAT.format(1e16), "1e+16")
        self.assertEqual(Kind.FLOAT.format(math.inf), "+Inf")
        self.assertEqual(Kind.FLOAT.format(-math.inf), "-Inf")
        self.assertEqual(Kind.FLOAT.format(math.nan), "NaN")


class DurationTest(TestCase):
    """Behavioral tests for the duration grammar and rendering."""

    def testUnits(self):
        self.assertEqual(parse_duration("300ms"), timedelta(milliseconds=300))
        self.assertEqual(parse_duration("2h45m"), timedelta(hours=2, minutes=45))
        self.assertEqual(parse_duration("1.5s"), timedelta(seconds=1.5))
        self.assertEqual(parse_duration("10us"), timedelta(microseconds=10))
        self.assertEqual(parse_duration("10µs"), timedelta(microseconds=10))
        self.assertEqual(parse_duration("10μs"), timedelta(microseconds=10))
        self.assertEqual(parse_duration("2000ns"), timedelta(microseconds=2))

    def testSigns(self):
        self.assertEqual(parse_duration("-1.5h"), -timedelta(hours=1.5))
        self.assertEqual(parse_duration("+5s"), timedelta(seconds=5))

    def testBareZero(self):
        self.assertEqual(parse_duration("0"), timedelta(0))
        self.assertEqual(parse_duration("-0"), timedelta(0))

    def testSubMicrosecondRejected(self):
        for text in ("1ns", "500ns", "1500ns", "1.5µs", "-1ns", "0.0000001s"):
            with self.subTest(text=text), self.assertRaisesRegex(ValueError, "invalid duration"):
                parse_duration(text)
        self.assertEqual(parse_duration("1.5ms"), timedelta(microseconds=1500))
        self.assertEqual(parse_duration("0.5µs500ns"), timedelta(microseconds=1))

    def testErrors(self):
        with self.assertRaisesRegex(ValueError, "invalid duration"):
            parse_duration("")
        with self.assertRaisesRegex(ValueError, "invalid duration"):
            parse_duration("-")
        with self.assertRaisesRegex(ValueError, "invalid duration"):
            parse_duration(".s")
        with self.assertRaisesRegex(ValueError, "missing unit"):
            parse_duration("1")
        with self.assertRaisesRegex(ValueError, "unknown unit"):
            parse_duration("1x")
        with self.assertRaisesRegex(ValueError, "unknown unit"):
            parse_duration("1 s")

    def testInt64NanosecondBound(self):
        self.assertEqual(parse_duration("9223372036854775000ns"), timedelta(microseconds=9223372036854775))
        self.assertEqual(parse_duration("-9223372036854775000ns"), timedelta(microseconds=-9223372036854775))
        with self.assertRaisesRegex(ValueError, "invalid duration"):
            parse_duration("9223372036854775808ns")

    def testFormat(self):
        self.assertEqual(format_duration(timedelta(0)), "0s")
        self.assertEqual(format_duration(timedelta(minutes=2)), "2m0s")
        self.assertEqual(format_duration(timedelta(hours=1)), "1h0m0s")
        self.assertEqual(format_duration(timedelta(hours=1, minutes=30)), "1h30m0s")
        self.assertEqual(format_duration(timedelta(seconds=1.5)), "1.5s")
        self.assertEqual(format_duration(timedelta(milliseconds=300)), "300ms")
        self.assertEqual(format_duration(timedelta(microseconds=1500)), "1.5ms")
        self.assertEqual(format_duration(timedelta(microseconds=1)), "1µs")
        self.assertEqual(format_duration(-timedelta(seconds=90)), "-1m30s")

    def testFormatRejectsNonTimedelta(self):
        with self.assertRaises(TypeError):
            format_duration(5)


class RoundTripTest(TestCase):
    """Formatted values convert back to equal values."""

    def testRoundTrips(self):
        samples = {
            Kind.BOOL: [True, False],
            Kind.DURATION: [timedelta(0), timedelta(hours=26, microseconds=7), -timedelta(milliseconds=1)],
            Kind.FLOAT: [0.0, -1.25, 1e-7, 6.02e23, math.inf],
            Kind.INT: [-(1 << 31), 0, (1 << 31) - 1],
            Kind.INT64: [-(1 << 63), (1 << 63) - 1],
            Kind.STRING: ["", "host1,host2", " spaced "],
            Kind.UINT: [0, (1 << 32) - 1],
            Kind.UINT64: [(1 << 64) - 1],
        }
        for kind, values in samples.items():
            for value in values:
                with self.subTest(kind=kind, value=value):
                    self.assertEqual(kind.convert(kind.format(value)), value)


if __name__ == "__main__":
    unittest.main()
