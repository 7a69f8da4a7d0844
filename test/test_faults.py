"""
Fault and help rendering tests.

Scope
- Validate trigger(): raise by default, print in shell mode, reject non-triggerables.
- Validate the rich rendering of faults (header, message, hint) and of help.

Conventions
- Test method names follow CamelCase per project convention.
- Output is captured with a rich Console writing to a StringIO, without colors.
"""

import io
import unittest
from unittest import TestCase

from rich.console import Console

from clean_cli import ArgType, Command, parameter, trigger, FaultCode, UnknownParameterError, CommandException
from clean_cli.helper import render
from clean_cli.utils import Unset, coalesce, ordinal


def recording_console():
    return Console(file=io.StringIO(), color_system=None, width=120)


def fault():
    return UnknownParameterError(
        "unknown parameter '--nope' for 'cmd' at second position",
        title="unknown parameter",
        code=FaultCode.UNKNOWN_PARAMETER,
        hint="did you mean '--int'?",
        input="--nope",
        index=2,
        suggestions=("--int",),
    )


class TestTrigger(TestCase):

    def testRaisesByDefault(self):
        with self.assertRaises(UnknownParameterError):
            trigger(fault())

    def testShellModePrints(self):
        console = recording_console()
        self.assertIsNone(trigger(fault(), shell=True, console=console))
        output = console.file.getvalue()
        self.assertIn("11201", output)
        self.assertIn("Unknown Parameter", output)
        self.assertIn("at second position", output)
        self.assertIn("→ did you mean '--int'?", output)

    def testFancyModeDrawsAPanel(self):
        console = recording_console()
        trigger(fault(), shell=True, fancy=True, console=console)
        self.assertIn("╭", console.file.getvalue())

    def testOptionsAreMergedIntoACopy(self):
        original = fault()
        with self.assertRaises(UnknownParameterError) as context:
            trigger(original, shell=False, colorful=True)
        self.assertIsNot(context.exception, original)
        self.assertTrue(context.exception.options["colorful"])
        self.assertEqual(context.exception.suggestions, ("--int",))

    def testRejectsNonTriggerables(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("nope"))

    def testMessageDefaultsToTheTypeName(self):
        self.assertEqual(str(CommandException()), "CommandException")

    def testCodesNormalizeToTheirNumber(self):
        self.assertEqual(FaultCode.MISSING_VALUE.normalize(), "11202")


class TestRender(TestCase):

    def setUp(self):
        self.cmd = Command(
            "cmd",
            value=ArgType.BOOL,
            parameters=[
                parameter("int", ArgType.INT, "i", descr="a whole number"),
                parameter("verbose", ArgType.BOOL),
            ],
            children=[Command("sub", aliases=["s"], descr="a subcommand", handler=lambda context: None)],
            descr="run the thing",
        )

    def rendered(self, *args, **options):
        console = recording_console()
        console.print(render(*args, **options))
        return console.file.getvalue()

    def testUsageAndTables(self):
        output = self.rendered(self.cmd, ("root",))
        self.assertIn("usage: root cmd <bool> [parameters] <command>", output)
        self.assertIn("run the thing", output)
        self.assertIn("--int, -i", output)
        self.assertIn("<int>", output)
        self.assertIn("a whole number", output)
        self.assertIn("--verbose", output)
        self.assertIn("sub, s", output)
        self.assertIn("a subcommand", output)

    def testPrefixIsConfigurable(self):
        output = self.rendered(self.cmd, prefix="+")
        self.assertIn("++int, +i", output)

    def testFancyTitle(self):
        output = self.rendered(self.cmd, fancy=True)
        self.assertIn("[ CMD HELP ]", output)


class TestUtils(TestCase):

    def testCoalesceKeepsFalseyValues(self):
        self.assertIsNone(coalesce(None, 1))
        self.assertEqual(coalesce(Unset, 1), 1)
        self.assertEqual(coalesce(0, 1), 0)

    def testUnsetIsFalseyAndSingleton(self):
        self.assertFalse(Unset)
        self.assertIs(type(Unset)(), Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testOrdinals(self):
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(11), "11th")
        self.assertEqual(ordinal(22), "22nd")
        self.assertEqual(ordinal(103), "103rd")


if __name__ == '__main__':
    unittest.main()
