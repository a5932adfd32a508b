"""
Argument registration tests (schema layer, no parsing).

Scope
- Validate Argument construction: required derivation, variadic markers, name checks.
- Validate Command.add_argument: idempotency, declaration order, variadic placement.

Conventions
- Test method names follow CamelCase per project convention.
- Tests use the public API (Command, Argument, Registry).
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from commando import Argument, Command, Registry


class TestArgument(TestCase):
    """Behavioral tests for Argument specifications."""

    def testRequiredWithoutDefault(self):
        argument = Argument("name", "name of the component")
        self.assertTrue(argument.required)
        self.assertEqual(argument.default, "")

    def testOptionalWithDefault(self):
        argument = Argument("version", "component version", "1.0.0")
        self.assertFalse(argument.required)
        self.assertEqual(argument.default, "1.0.0")

    def testVariadicIsNeverRequired(self):
        argument = Argument("files", variadic=True)
        self.assertTrue(argument.variadic)
        self.assertFalse(argument.required)

    def testVariadicViaTrailingDots(self):
        argument = Argument("files...")
        self.assertEqual(argument.name, "files")
        self.assertTrue(argument.variadic)

    def testWhitespaceIsRemovedFromName(self):
        self.assertEqual(Argument(" cate gory ").name, "category")

    def testDescriptionIsTrimmed(self):
        self.assertEqual(Argument("name", "  the name  ").descr, "the name")

    def testEmptyNameRejected(self):
        with self.assertRaises(ValueError):
            Argument("   ")

    def testNonStringDefaultRejected(self):
        with self.assertRaises(TypeError):
            Argument("count", "", 3)

    def testFieldsAreReadOnly(self):
        argument = Argument("name")
        with self.assertRaises(AttributeError):
            argument.name = "other"

    def testReprMentionsName(self):
        self.assertIn("name='name'", repr(Argument("name")))


class TestAddArgument(TestCase):
    """Behavioral tests for Command.add_argument."""

    def testDeclarationOrderIsPreserved(self):
        command = Command("create")
        command.add_argument("name").add_argument("version", "", "1.0.0").add_argument("alias", "", "x")
        self.assertEqual(list(command.arguments), ["name", "version", "alias"])

    def testReRegistrationIsSilentNoOp(self):
        command = Command("create")
        command.add_argument("name", "first description")
        command.add_argument("name", "second description", "fallback")
        self.assertEqual(len(command.arguments), 1)
        self.assertEqual(command.arguments["name"].descr, "first description")
        self.assertTrue(command.arguments["name"].required)

    def testReRegistrationSkipsValidation(self):
        command = Command("create").add_argument("name", "first description")
        command.add_argument(" name ", "second description", 3)
        self.assertEqual(command.arguments["name"].descr, "first description")

    def testSecondVariadicRejected(self):
        command = Command("create").add_argument("files...")
        with self.assertRaises(ValueError):
            command.add_argument("more...")

    def testArgumentAfterVariadicRejected(self):
        command = Command("create").add_argument("files", variadic=True)
        with self.assertRaises(ValueError):
            command.add_argument("name")

    def testExistingNameAfterVariadicIsStillNoOp(self):
        command = Command("create").add_argument("name").add_argument("files...")
        command.add_argument("name")
        self.assertEqual(list(command.arguments), ["name", "files"])
        self.assertIs(command.variadic, command.arguments["files"])

    def testArgumentsMappingIsReadOnly(self):
        command = Command("create").add_argument("name")
        with self.assertRaises(TypeError):
            command.arguments["other"] = Argument("other")

    def testNewArgumentAfterResolutionRejected(self):
        registry = Registry("reactor")
        root = registry.register()
        registry.parse([])
        with self.assertRaises(RuntimeError):
            root.add_argument("late")


if __name__ == "__main__":
    unittest.main()
