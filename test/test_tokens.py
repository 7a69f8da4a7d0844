"""
Tokenizer tests (whitespace splitting, optional quoting).

Conventions
- Test method names follow CamelCase per project convention.
"""

import unittest
from unittest import TestCase

from clean_cli import split, MalformedLineError, FaultCode


class TestSplit(TestCase):

    def testRunsOfWhitespaceSeparateTokens(self):
        self.assertEqual(split("  cmd\tfalse   --int  42 \n"), ("cmd", "false", "--int", "42"))

    def testEmptyAndBlankLinesYieldNoTokens(self):
        self.assertEqual(split(""), ())
        self.assertEqual(split(" \t "), ())

    def testQuotesAreLiteralWithoutQuoting(self):
        self.assertEqual(split('say "two words"'), ("say", '"two', 'words"'))

    def testQuotingKeepsQuotedWordsTogether(self):
        self.assertEqual(split('say "two words" \'and more\'', quoting=True), ("say", "two words", "and more"))

    def testUnbalancedQuoteRaises(self):
        with self.assertRaises(MalformedLineError) as context:
            split('say "two words', quoting=True)
        self.assertEqual(context.exception.code, FaultCode.MALFORMED_LINE)
        self.assertEqual(context.exception.input, 'say "two words')

    def testNonStringRaisesTypeError(self):
        with self.assertRaises(TypeError):
            split(None)  # type: ignore[arg-type]


if __name__ == '__main__':
    unittest.main()
