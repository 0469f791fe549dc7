"""
Items module behavioral tests (Argument, Flag, Option builders).

Scope
- Validate defaults and normalization of each item kind.
- Validate short/long switch handling and the short-or-long requirement.
- Validate rejection of malformed props and unknown properties.
- Validate immutability, structural equality and copy.replace() support.

Conventions
- Test method names follow CamelCase per project convention.
- Items are built through their public new(name, props) builders.
"""

from __future__ import annotations

import copy
import unittest
from unittest import TestCase

from armature import Argument, Flag, Option
from armature.faults import FieldError


class TestArgument(TestCase):
    """Behavioral tests for positional argument specs."""

    def testDefaults(self):
        arg = Argument.new("source", {})
        self.assertEqual(arg.name, "source")
        self.assertEqual(arg.value_name, "SOURCE")
        self.assertIsNone(arg.help)
        self.assertTrue(arg.required)
        self.assertIs(arg.type, str)
        self.assertFalse(arg.hide)
        self.assertFalse(arg.global_)

    def testExplicitProperties(self):
        arg = Argument.new("count", {"value_name": "N", "help": "How many", "required": False, "type": "integer"})
        self.assertEqual(arg.value_name, "N")
        self.assertEqual(arg.help, "How many")
        self.assertFalse(arg.required)
        self.assertIs(arg.type, int)

    def testCallableType(self):
        def parse(value):
            return value.split(",")

        self.assertIs(Argument.new("items", {"type": parse}).type, parse)

    def testUnknownTypeNameRejected(self):
        with self.assertRaises(FieldError) as context:
            Argument.new("count", {"type": "decimal"})
        self.assertEqual(context.exception.field, "type")
        self.assertEqual(context.exception.item, "count")

    def testArgumentsRejectSwitchProperties(self):
        with self.assertRaises(FieldError) as context:
            Argument.new("source", {"short": "s"})
        self.assertEqual(context.exception.field, "short")

    def testInvalidNameRejected(self):
        for name in ("", "1st", "with space", 3):
            with self.subTest(name=name), self.assertRaises(FieldError):
                Argument.new(name, {})


class TestFlag(TestCase):
    """Behavioral tests for presence-only flag specs."""

    def testShortAndLongNormalized(self):
        flag = Flag.new("verbose", {"short": "-v", "long": "--verbose"})
        self.assertEqual(flag.short, "v")
        self.assertEqual(flag.long, "verbose")
        self.assertEqual(flag.switches, ("-v", "--verbose"))

    def testBareNamesAccepted(self):
        flag = Flag.new("dry_run", {"long": "dry-run"})
        self.assertIsNone(flag.short)
        self.assertEqual(flag.long, "dry-run")
        self.assertEqual(flag.switches, ("--dry-run",))

    def testDefaults(self):
        flag = Flag.new("verbose", {"short": "v"})
        self.assertIsNone(flag.help)
        self.assertFalse(flag.multiple)
        self.assertFalse(flag.global_)
        self.assertFalse(flag.hide)

    def testGlobalPropertyKey(self):
        self.assertTrue(Flag.new("verbose", {"short": "v", "global": True}).global_)

    def testShortOrLongRequired(self):
        with self.assertRaises(FieldError) as context:
            Flag.new("verbose", {"help": "Louder"})
        self.assertEqual(context.exception.item, "verbose")
        self.assertEqual(str(context.exception), "flag 'verbose' must define a short or a long name")

    def testInvalidShortRejected(self):
        for short in ("vv", "--v", "-", "1", ""):
            with self.subTest(short=short), self.assertRaises(FieldError):
                Flag.new("verbose", {"short": short})

    def testInvalidLongRejected(self):
        for long in ("-verbose", "---verbose", "two words", "trailing-", "1st"):
            with self.subTest(long=long), self.assertRaises(FieldError):
                Flag.new("verbose", {"long": long})

    def testUnknownPropertyRejected(self):
        with self.assertRaises(FieldError) as context:
            Flag.new("verbose", {"short": "v", "globl": True})
        self.assertEqual(context.exception.field, "globl")

    def testMalformedPropsRejected(self):
        for props in ("short", 1, [("short", "v"), ("short", "w")]):
            with self.subTest(props=props), self.assertRaises(FieldError) as context:
                Flag.new("verbose", props)
            self.assertEqual(context.exception.field, "properties")

    def testFieldMessageNamesItem(self):
        with self.assertRaises(FieldError) as context:
            Flag.new("verbose", {"short": "v", "hide": 1})
        self.assertEqual(str(context.exception), "flag 'verbose': hide should be a boolean")


class TestOption(TestCase):
    """Behavioral tests for value-bearing option specs."""

    def testDefaults(self):
        option = Option.new("output", {"short": "o"})
        self.assertEqual(option.value_name, "OUTPUT")
        self.assertFalse(option.required)
        self.assertFalse(option.multiple)
        self.assertIs(option.type, str)
        self.assertIsNone(option.default)
        self.assertFalse(option.global_)
        self.assertFalse(option.hide)

    def testExplicitProperties(self):
        option = Option.new("jobs", {
            "short": "j",
            "long": "jobs",
            "value_name": "N",
            "type": "integer",
            "default": 4,
            "required": True,
            "multiple": True,
            "global": True,
        })
        self.assertEqual(option.switches, ("-j", "--jobs"))
        self.assertEqual(option.value_name, "N")
        self.assertIs(option.type, int)
        self.assertEqual(option.default, 4)
        self.assertTrue(option.required)
        self.assertTrue(option.multiple)
        self.assertTrue(option.global_)

    def testFloatType(self):
        self.assertIs(Option.new("ratio", {"long": "ratio", "type": "float"}).type, float)

    def testShortOrLongRequired(self):
        with self.assertRaises(FieldError):
            Option.new("output", {"value_name": "FILE"})


class TestItemValues(TestCase):
    """Behavioral tests shared by every item kind."""

    def testImmutable(self):
        flag = Flag.new("verbose", {"short": "v"})
        with self.assertRaises(AttributeError):
            flag.hide = True
        with self.assertRaises(AttributeError):
            del flag.short

    def testReplaceReturnsCopy(self):
        flag = Flag.new("verbose", {"short": "v", "global": True})
        hidden = copy.replace(flag, hide=True)
        self.assertTrue(hidden.hide)
        self.assertFalse(flag.hide)
        self.assertEqual(hidden.short, "v")
        self.assertIsNot(hidden, flag)

    def testReplaceRejectsUnknownField(self):
        with self.assertRaises(TypeError):
            copy.replace(Flag.new("verbose", {"short": "v"}), loud=True)

    def testStructuralEquality(self):
        self.assertEqual(Option.new("out", {"short": "o"}), Option.new("out", [("short", "-o")]))
        self.assertNotEqual(Option.new("out", {"short": "o"}), Option.new("out", {"short": "p"}))
        self.assertNotEqual(Flag.new("out", {"short": "o"}), Option.new("out", {"short": "o"}))

    def testRepr(self):
        self.assertEqual(
            repr(Flag.new("verbose", {"short": "-v", "global": True})),
            "flag(name='verbose', short='v', long=None, help=None, multiple=False, global_=True, hide=False)",
        )


if __name__ == "__main__":
    unittest.main()
