"""
Option table builder tests.

Scope
- Implicit options: help first, modes next, user options, man last.
- Suppression of implicit options the user already declares.
- Mode option naming and configuration errors.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from compactopt import DuplicateKeyError, MalformedModeError
from compactopt.table import OptionTable, build


class TestBuild(TestCase):
    """Behavioral tests for table assembly."""

    def testEmpty(self):
        table = build([])
        self.assertIsInstance(table, OptionTable)
        self.assertEqual(table.keys(), ["help", "man"])
        self.assertTrue(table.allow_man)

    def testUsageDisabled(self):
        self.assertEqual(build([], usage=False).keys(), ["man"])

    def testOrder(self):
        table = build(
            [(["f", "foobar"], "apply foobar algorithm"), (["j", "joobies"], "jooby integer list", "=i")],
            modes=["verbose", "test", "debug"],
        )
        self.assertEqual(table.keys(), ["help", "verbose", "test", "debug", "foobar", "joobies", "man"])
        self.assertEqual(table[0].names, ("h", "help"))
        self.assertEqual(table[-1].names, ("man",))

    def testModeOptions(self):
        table = build([], modes=["verbose", "test", "Debug"])
        self.assertEqual(table.find("verbose").names, ("v", "verbose"))
        self.assertEqual(table.find("verbose").descr, "verbose mode")
        self.assertEqual(table.find("test").names, ("n", "test"))
        self.assertEqual(table.find("Debug").names, ("d", "Debug"))

    def testUserHelpKept(self):
        table = build([(["h", "help"], "custom help")])
        self.assertEqual(table.keys(), ["help", "man"])
        self.assertEqual(table.find("help").descr, "custom help")

    def testUserManKept(self):
        table = build([("man", "read the manual")])
        self.assertFalse(table.allow_man)
        self.assertEqual(table.keys(), ["help", "man"])
        self.assertEqual(table.find("man").descr, "read the manual")

    def testDuplicateKey(self):
        with self.assertRaises(DuplicateKeyError):
            build(["foo", "foo"])
        with self.assertRaises(DuplicateKeyError):
            build([(["v", "verbose"], "loud")], modes=["verbose"])

    def testMalformedMode(self):
        for mode in ("", "-x"):
            with self.subTest(mode=mode), self.assertRaises(MalformedModeError):
                build([], modes=[mode])

    def testWrongTypes(self):
        with self.assertRaises(TypeError):
            build("verbose")
        with self.assertRaises(TypeError):
            build([], modes="verbose")
        with self.assertRaises(TypeError):
            build([], modes=[5])


class TestOptionTable(TestCase):
    """Behavioral tests for table lookups."""

    def setUp(self):
        self.table = build([(["w", "wibble"], "wibble", ":s"), "secret"])

    def testSequence(self):
        self.assertEqual(len(self.table), 4)
        self.assertEqual([option.key for option in self.table], ["help", "wibble", "secret", "man"])

    def testFind(self):
        self.assertEqual(self.table.find("wibble").spec, ":s")
        self.assertIsNone(self.table.find("w"))

    def testHas(self):
        self.assertTrue(self.table.has("w"))
        self.assertTrue(self.table.has("help"))
        self.assertFalse(self.table.has("x"))

    def testRepr(self):
        self.assertEqual(repr(self.table), "option-table(help, wibble, secret, man)")


if __name__ == "__main__":
    unittest.main()
