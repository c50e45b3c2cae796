"""
Tests for the internal helpers.

This module verifies:
- The Unset sentinel (singleton, falsy, sealed).
- coalesce() resolution.
- mirror() read-only copies.
- ucfirst().
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from compactopt.utils import *


class UnsetTest(TestCase):
    """
    Test suite for the Unset sentinel.
    """

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)

    def testFalsy(self):
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)

    def testRepr(self):
        self.assertEqual(repr(Unset), "Unset")

    def testFinal(self):
        with self.assertRaises(TypeError):
            class Subclass(UnsetType):  # NOQA
                pass

    def testUnion(self):
        self.assertIsInstance(Unset, str | UnsetType)


class HelpersTest(TestCase):
    def testCoalesce(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 1), 0)

    def testMirror(self):
        class Holder:
            items = mirror("items")
            names = mirror("names")

            def __init__(self):
                self._items = [1, [2]]
                self._names = ("a", "b")

        holder = Holder()
        holder.items[1].append(3)
        self.assertEqual(holder.items, [1, [2]])
        self.assertEqual(holder.names, ("a", "b"))
        self.assertEqual(Holder.items.fget.__name__, "items")
        with self.assertRaises(AttributeError):
            holder.items = []

    def testMirrorRequiresString(self):
        with self.assertRaises(TypeError):
            mirror(5)

    def testUcfirst(self):
        self.assertEqual(ucfirst("this help message"), "This help message")
        self.assertEqual(ucfirst(""), "")
        self.assertEqual(ucfirst("Already"), "Already")
        with self.assertRaises(TypeError):
            ucfirst(None)


if __name__ == "__main__":
    unittest.main()
