"""
Flag registration tests (schema layer, no parsing).

Scope
- Validate Flag construction: long/short names, data kinds, defaults, required derivation.
- Validate Command.add_flag: idempotency, alias collisions, configuration errors.
- Validate FlagValue typed accessors.

Conventions
- Test method names follow CamelCase per project convention.
- Configuration mistakes are raised immediately as TypeError/ValueError.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from commando import Command, DataType, Flag, FlagValue, Registry


class TestFlag(TestCase):
    """Behavioral tests for Flag specifications."""

    def testLongAndShortNames(self):
        flag = Flag("dir, d", "output directory", DataType.STRING)
        self.assertEqual(flag.name, "dir")
        self.assertEqual(flag.short, "d")

    def testLongNameOnly(self):
        flag = Flag("timeout", "operation timeout", DataType.INT, 60)
        self.assertIsNone(flag.short)

    def testBooleanNeverRequired(self):
        flag = Flag("verbose,V", "display log information", DataType.BOOL)
        self.assertFalse(flag.required)
        self.assertEqual(flag.literal, "false")
        self.assertIsNone(flag.default)

    def testBooleanDefaultTrue(self):
        flag = Flag("color", "", bool, True)
        self.assertEqual(flag.literal, "true")
        self.assertIs(flag.default, True)

    def testIntRequiredWithoutDefault(self):
        self.assertTrue(Flag("retries", "", int).required)

    def testIntDefaultLiteral(self):
        flag = Flag("timeout", "", int, 60)
        self.assertFalse(flag.required)
        self.assertEqual(flag.literal, "60")

    def testIntZeroDefaultIsNotRequired(self):
        flag = Flag("offset", "", int, 0)
        self.assertFalse(flag.required)
        self.assertEqual(flag.literal, "0")

    def testStringRequiredWithoutDefault(self):
        self.assertTrue(Flag("dir,d", "", str).required)

    def testStringBlankDefaultIsRequired(self):
        flag = Flag("dir,d", "", DataType.STRING, "   ")
        self.assertTrue(flag.required)
        self.assertEqual(flag.literal, "")

    def testStringDefault(self):
        flag = Flag("type,t", "", DataType.STRING, "simple_type")
        self.assertFalse(flag.required)
        self.assertEqual(flag.literal, "simple_type")

    def testBuiltinTypesAreNormalized(self):
        self.assertIs(Flag("a", "", bool).type, DataType.BOOL)
        self.assertIs(Flag("b", "", int, 1).type, DataType.INT)
        self.assertIs(Flag("c", "", str, "x").type, DataType.STRING)

    def testDefaultTypeMismatchRejected(self):
        with self.assertRaises(TypeError) as context:
            Flag("dir,d", "directory", DataType.STRING, 21)
        self.assertIn("--dir", str(context.exception))

    def testBoolDefaultForIntFlagRejected(self):
        with self.assertRaises(TypeError):
            Flag("timeout", "", DataType.INT, True)

    def testNoneDefaultRejected(self):
        with self.assertRaises(TypeError):
            Flag("dir", "", DataType.STRING, None)

    def testUnsupportedKindRejected(self):
        with self.assertRaises(TypeError):
            Flag("ratio", "", float, 0.5)
        with self.assertRaises(TypeError):
            Flag("ratio", "", 7)

    def testMultiCharacterShortRejected(self):
        with self.assertRaises(ValueError):
            Flag("verbose,vv", "", bool)

    def testMalformedLongRejected(self):
        with self.assertRaises(ValueError):
            Flag("--verbose", "", bool)


class TestAddFlag(TestCase):
    """Behavioral tests for Command.add_flag."""

    def testReRegistrationIsSilentNoOp(self):
        command = Command("create")
        command.add_flag("timeout", "first", int, 60)
        command.add_flag("timeout", "second", int, 30)
        self.assertEqual(len(command.flags), 1)
        self.assertEqual(command.flags["timeout"].descr, "first")
        self.assertEqual(command.flags["timeout"].default, 60)

    def testReRegistrationSkipsValidation(self):
        command = Command("serve").add_flag("port,p", "port to listen on", int, 8080)
        command.add_flag("port,p", "other", int, "9000")
        command.add_flag("port, x", "other", float)
        self.assertEqual(command.flags["port"].default, 8080)
        self.assertEqual(command.flags["port"].short, "p")

    def testBuiltinAliasesAreReserved(self):
        registry = Registry("tool")
        with self.assertRaises(ValueError):
            registry.root.add_flag("verbose,v", "", bool)
        with self.assertRaises(ValueError):
            registry.register("serve").add_flag("host,h", "", str, "localhost")
        registry.register("serve").add_flag("verbose,v", "", bool)
        self.assertEqual(registry.commands["serve"].flags["verbose"].short, "v")

    def testDuplicateShortAliasRejected(self):
        command = Command("create").add_flag("verbose,v", "", bool)
        with self.assertRaises(ValueError):
            command.add_flag("version,v", "", bool)

    def testDeclarationOrderIsPreserved(self):
        command = Command("create")
        command.add_flag("dir,d", "", str).add_flag("type,t", "", str, "x").add_flag("timeout", "", int, 60)
        self.assertEqual(list(command.flags), ["dir", "type", "timeout"])


class TestFlagValue(TestCase):
    """Behavioral tests for FlagValue accessors."""

    def testMatchingAccessorsReturnValue(self):
        self.assertIs(FlagValue(Flag("verbose", "", bool), True).get_bool(), True)
        self.assertEqual(FlagValue(Flag("timeout", "", int, 60), 60).get_int(), 60)
        self.assertEqual(FlagValue(Flag("dir", "", str), "./out").get_string(), "./out")

    def testMismatchedAccessorRaises(self):
        value = FlagValue(Flag("timeout", "", int, 60), 60)
        with self.assertRaises(TypeError):
            value.get_string()
        with self.assertRaises(TypeError):
            value.get_bool()

    def testMetadataIsDelegated(self):
        value = FlagValue(Flag("dir,d", "output directory", str), "./out")
        self.assertEqual(value.name, "dir")
        self.assertEqual(value.short, "d")
        self.assertEqual(value.descr, "output directory")


if __name__ == "__main__":
    unittest.main()
