"""
Schema normalization tests.

Scope
- Validate shorthand expansion (strings, numbers, True) and descriptor defaults.
- Validate mode resolution (alone/required/default/multiple are exclusive).
- Validate constraint normalization per type (enumerations, patterns, ranges, counts).
- Validate rejection of malformed schemas: TypeError for wrong Python types,
  ValueError for illegal values or combinations.
- Validate reserved keys (unnamed/helpstring) settings.

Conventions
- Test method names follow CamelCase per project convention.
- Schema mistakes never raise UsageError.
"""
import math
import re
import unittest
from unittest import TestCase

from optionalist import Descriptor, Mode, Range, Unnamed, Command, normalize, unnamed, helpstring


class TestShorthand(TestCase):
    """Shorthand literals expand into full descriptors."""

    def testStringShorthandIsStringDefault(self):
        d = normalize({"name": "anonymous"}).descriptors["name"]
        self.assertEqual(d.type, "string")
        self.assertIs(d.mode, Mode.DEFAULT)
        self.assertEqual(d.default, "anonymous")

    def testNumberShorthandIsNumberDefault(self):
        d = normalize({"count": 3}).descriptors["count"]
        self.assertEqual(d.type, "number")
        self.assertEqual(d.default, 3)

    def testFloatShorthandIsNumberDefault(self):
        d = normalize({"ratio": 0.5}).descriptors["ratio"]
        self.assertEqual(d.type, "number")
        self.assertEqual(d.default, 0.5)

    def testTrueShorthandIsBooleanFlag(self):
        d = normalize({"verbose": True}).descriptors["verbose"]
        self.assertEqual(d.type, "boolean")
        self.assertIs(d.mode, Mode.NONE)
        self.assertIsNone(d.default)

    def testFalseShorthandRejected(self):
        with self.assertRaises(TypeError):
            normalize({"verbose": False})

    def testNoneShorthandRejected(self):
        with self.assertRaises(TypeError):
            normalize({"verbose": None})

    def testFalsyDefaultsKept(self):
        descriptors = normalize({"empty": "", "zero": 0}).descriptors
        self.assertEqual(descriptors["empty"].default, "")
        self.assertEqual(descriptors["zero"].default, 0)
        self.assertIs(descriptors["zero"].mode, Mode.DEFAULT)


class TestDescriptor(TestCase):
    """Descriptor fields, naming and flags."""

    def testDefaultsToStringWithoutMode(self):
        d = Descriptor("alpha", {})
        self.assertEqual(d.type, "string")
        self.assertIs(d.mode, Mode.NONE)
        self.assertEqual(d.aliases, ())
        self.assertIsNone(d.constraints)
        self.assertIsNone(d.describe)
        self.assertIsNone(d.example)
        self.assertEqual(d.placeholder, "parameter")

    def testFlagsFollowNameLength(self):
        d = Descriptor("bravo", {"alias": ["b", "brv"]})
        self.assertEqual(d.flag, "--bravo")
        self.assertEqual(d.flags, ("--bravo", "-b", "--brv"))

    def testSingleAliasString(self):
        d = Descriptor("charlie", {"type": "boolean", "alias": "c"})
        self.assertEqual(d.aliases, ("c",))

    def testKeyFoldsHyphens(self):
        d = Descriptor("dry-run", True)
        self.assertEqual(d.key, "dry_run")
        self.assertEqual(d.flag, "--dry-run")

    def testBuiltinTypesAccepted(self):
        self.assertEqual(Descriptor("a", {"type": int}).type, "number")
        self.assertEqual(Descriptor("a", {"type": float}).type, "number")
        self.assertEqual(Descriptor("a", {"type": str}).type, "string")
        self.assertEqual(Descriptor("a", {"type": bool}).type, "boolean")

    def testUnknownTypeRejected(self):
        with self.assertRaises(ValueError):
            Descriptor("a", {"type": "integer"})
        with self.assertRaises(ValueError):
            Descriptor("a", {"type": list})

    def testUnknownKeyRejected(self):
        with self.assertRaises(ValueError):
            Descriptor("a", {"nature": "required"})

    def testBooleanHasNoPlaceholder(self):
        self.assertIsNone(Descriptor("v", True).placeholder)

    def testExamplePlaceholder(self):
        d = Descriptor("bravo", {"type": "number", "example": "b-value"})
        self.assertEqual(d.example, "b-value")
        self.assertEqual(d.placeholder, "b-value")

    def testEmptyExampleRejected(self):
        with self.assertRaises(ValueError):
            Descriptor("a", {"example": "  "})

    def testPropertiesAreReadOnly(self):
        d = Descriptor("alpha", {})
        with self.assertRaises(AttributeError):
            d.name = "beta"

    def testRepr(self):
        r = repr(Descriptor("alpha", {}))
        self.assertTrue(r.startswith("descriptor("))
        self.assertIn("name='alpha'", r)
        self.assertIn("flag='--alpha'", r)


class TestNames(TestCase):
    """Option and alias name validation."""

    def testEmptyNameRejected(self):
        with self.assertRaisesRegex(ValueError, "^empty option name$"):
            normalize({"": True})

    def testLeadingHyphenRejected(self):
        with self.assertRaisesRegex(ValueError, "^Invalid option name: -def$"):
            normalize({"-def": True})

    def testTrailingHyphenRejected(self):
        with self.assertRaisesRegex(ValueError, "^Invalid option name: abc-$"):
            normalize({"abc-": True})

    def testInnerHyphenAccepted(self):
        self.assertIn("abc-def", normalize({"abc-def": True}).descriptors)

    def testEmptyAliasRejected(self):
        with self.assertRaisesRegex(ValueError, "^empty alias name$"):
            normalize({"abc": {"alias": ""}})

    def testHyphenatedAliasRejected(self):
        with self.assertRaisesRegex(ValueError, "^Invalid alias name: -a$"):
            normalize({"abc": {"alias": "-a"}})

    def testNonStringAliasRejected(self):
        with self.assertRaises(TypeError):
            normalize({"abc": {"alias": [1]}})

    def testNonStringKeyRejected(self):
        with self.assertRaises(TypeError):
            normalize({1: True})

    def testNonMappingSchemaRejected(self):
        with self.assertRaises(TypeError):
            normalize([("a", True)])


class TestModes(TestCase):
    """Cardinality modes and their combinations."""

    def testEachModeResolved(self):
        descriptors = normalize({
            "a": {"alone": True},
            "b": {"required": True},
            "c": {"default": "x"},
            "d": {"multiple": True},
            "e": {},
        }).descriptors
        self.assertIs(descriptors["a"].mode, Mode.ALONE)
        self.assertIs(descriptors["b"].mode, Mode.REQUIRED)
        self.assertIs(descriptors["c"].mode, Mode.DEFAULT)
        self.assertIs(descriptors["d"].mode, Mode.MULTIPLE)
        self.assertIs(descriptors["e"].mode, Mode.NONE)
        self.assertTrue(descriptors["a"].alone)
        self.assertTrue(descriptors["b"].required)
        self.assertTrue(descriptors["d"].multiple)

    def testFalseModesIgnored(self):
        d = Descriptor("a", {"alone": False, "required": False, "multiple": False})
        self.assertIs(d.mode, Mode.NONE)

    def testCombinedModesRejected(self):
        for entry in (
            {"alone": True, "required": True},
            {"alone": True, "multiple": True},
            {"required": True, "default": "x"},
            {"multiple": True, "default": "x"},
        ):
            with self.subTest(entry=entry), self.assertRaises(ValueError):
                Descriptor("a", entry)

    def testRequiredBooleanRejected(self):
        with self.assertRaisesRegex(ValueError, r"^The -a cannot set to be required\.$"):
            Descriptor("a", {"type": "boolean", "required": True})

    def testBooleanDefaultRejected(self):
        with self.assertRaises(ValueError):
            Descriptor("a", {"type": "boolean", "default": False})

    def testNumberDefaultMustBeNumber(self):
        with self.assertRaisesRegex(TypeError, r"^The default value of the -a parameter must be a number\.: '1'$"):
            Descriptor("a", {"type": "number", "default": "1"})
        with self.assertRaises(TypeError):
            Descriptor("a", {"type": "number", "default": True})

    def testStringDefaultMustBeString(self):
        with self.assertRaisesRegex(TypeError, r"^The default value of the -a parameter must be a string\.: 1$"):
            Descriptor("a", {"default": 1})


class TestConstraints(TestCase):
    """Constraint normalization per type."""

    def testStringEnumeration(self):
        d = Descriptor("a", {"constraints": ["x", "y"]})
        self.assertEqual(d.constraints, ("x", "y"))

    def testStringPattern(self):
        pattern = re.compile(r"^\w+=")
        self.assertIs(Descriptor("a", {"constraints": pattern}).constraints, pattern)

    def testBareStringConstraintRejected(self):
        with self.assertRaises(TypeError):
            Descriptor("a", {"constraints": "xyz"})

    def testEmptyEnumerationRejected(self):
        with self.assertRaises(ValueError):
            Descriptor("a", {"constraints": []})
        with self.assertRaises(ValueError):
            Descriptor("a", {"type": "number", "constraints": []})

    def testMixedEnumerationRejected(self):
        with self.assertRaises(TypeError):
            Descriptor("a", {"constraints": ["x", 1]})
        with self.assertRaises(TypeError):
            Descriptor("a", {"type": "number", "constraints": [1, "2"]})

    def testDuplicateEnumerationRejected(self):
        with self.assertRaises(ValueError):
            Descriptor("a", {"constraints": ["x", "x"]})
        with self.assertRaises(ValueError):
            Descriptor("a", {"constraints": ["x", "X"], "ignore_case": True})

    def testNumberEnumeration(self):
        self.assertEqual(Descriptor("a", {"type": "number", "constraints": [1, 3, 5]}).constraints, (1, 3, 5))

    def testNumberRange(self):
        d = Descriptor("a", {"type": "number", "constraints": {"min": 1, "max_exclusive": 10}})
        self.assertEqual(d.constraints, Range(min=1, max_exclusive=10))
        self.assertIsInstance(d.constraints, Range)

    def testRangeBothInclusiveAndExclusiveRejected(self):
        with self.assertRaises(ValueError):
            Descriptor("a", {"type": "number", "constraints": {"min": 1, "min_exclusive": 1}})
        with self.assertRaises(ValueError):
            Descriptor("a", {"type": "number", "constraints": {"max": 1, "max_exclusive": 1}})

    def testRangeNeedsABound(self):
        with self.assertRaises(ValueError):
            Descriptor("a", {"type": "number", "constraints": {}})

    def testRangeUnknownKeyRejected(self):
        with self.assertRaises(ValueError):
            Descriptor("a", {"type": "number", "constraints": {"minimum": 1}})

    def testRangeNonNumberBoundRejected(self):
        with self.assertRaises(TypeError):
            Descriptor("a", {"type": "number", "constraints": {"min": "1"}})

    def testEmptyRangeRejected(self):
        with self.assertRaises(ValueError):
            Descriptor("a", {"type": "number", "constraints": {"min": 5, "max": 1}})
        with self.assertRaises(ValueError):
            Descriptor("a", {"type": "number", "constraints": {"min": 1, "max_exclusive": 1}})

    def testEmptyExclusiveRangeRejected(self):
        for constraints in (
            {"min_exclusive": 10, "max": 5},
            {"min_exclusive": 1, "max_exclusive": 1},
            {"min": 3, "max_exclusive": 2},
        ):
            with self.subTest(constraints=constraints), self.assertRaises(ValueError):
                Descriptor("a", {"type": "number", "constraints": constraints, "auto_adjust": True})

    def testTouchingInclusiveRangeAccepted(self):
        d = Descriptor("a", {"type": "number", "constraints": {"min": 2, "max": 2}})
        self.assertEqual(d.constraints, Range(min=2, max=2))

    def testBooleanCount(self):
        d = Descriptor("v", {"type": "boolean", "multiple": True, "constraints": {"max": 2}})
        self.assertEqual(d.constraints, Range(max=2))

    def testBooleanCountNeedsMultiple(self):
        with self.assertRaises(ValueError):
            Descriptor("v", {"type": "boolean", "constraints": {"max": 2}})

    def testBooleanCountShape(self):
        with self.assertRaises(TypeError):
            Descriptor("v", {"type": "boolean", "multiple": True, "constraints": {"min": 1}})
        with self.assertRaises(TypeError):
            Descriptor("v", {"type": "boolean", "multiple": True, "constraints": {"max": 1.5}})
        with self.assertRaises(ValueError):
            Descriptor("v", {"type": "boolean", "multiple": True, "constraints": {"max": -1}})

    def testIgnoreCaseNeedsStringEnumeration(self):
        self.assertTrue(Descriptor("a", {"constraints": ["x"], "ignore_case": True}).ignore_case)
        with self.assertRaises(ValueError):
            Descriptor("a", {"ignore_case": True})
        with self.assertRaises(ValueError):
            Descriptor("a", {"constraints": re.compile("x"), "ignore_case": True})

    def testAutoAdjustNeedsNumberConstraints(self):
        self.assertTrue(Descriptor("a", {"type": "number", "constraints": [1], "auto_adjust": True}).auto_adjust)
        with self.assertRaises(ValueError):
            Descriptor("a", {"type": "number", "auto_adjust": True})
        with self.assertRaises(ValueError):
            Descriptor("a", {"constraints": ["x"], "auto_adjust": True})

    def testCallerSchemaNotShared(self):
        choices = ["x", "y"]
        d = Descriptor("a", {"constraints": choices})
        choices.append("z")
        self.assertEqual(d.constraints, ("x", "y"))


class TestReservedKeys(TestCase):
    """unnamed and helpstring settings."""

    def testDefaults(self):
        schema = normalize({})
        self.assertIsNone(schema.unnamed)
        self.assertEqual(schema.command, Command())
        self.assertEqual(len(schema.descriptors), 0)

    def testUnnamedSettings(self):
        schema = normalize({unnamed: {"min": 1, "example": "file", "describe": "input files"}})
        self.assertEqual(schema.unnamed, Unnamed(1, math.inf, "file", "input files"))

    def testUnnamedDefaultExample(self):
        self.assertEqual(normalize({unnamed: {}}).unnamed.example, "unnamed_parameters")

    def testUnnamedBoundsValidated(self):
        for settings in ({"min": -1}, {"max": -1}, {"min": 3, "max": 2}):
            with self.subTest(settings=settings), self.assertRaises(ValueError):
                normalize({unnamed: settings})
        with self.assertRaises(TypeError):
            normalize({unnamed: {"min": "1"}})
        with self.assertRaises(ValueError):
            normalize({unnamed: {"count": 1}})

    def testCommandSettings(self):
        schema = normalize({helpstring: {"describe": "Tool.", "show_usage_on_error": True}})
        self.assertEqual(schema.command, Command("Tool.", True))

    def testCommandUnknownKeyRejected(self):
        with self.assertRaises(ValueError):
            normalize({helpstring: {"showUsageOnError": True}})

    def testDeclarationOrderKept(self):
        schema = normalize({"zulu": True, "alpha": True, "mike": True})
        self.assertEqual(list(schema.descriptors), ["zulu", "alpha", "mike"])


if __name__ == "__main__":
    unittest.main()
