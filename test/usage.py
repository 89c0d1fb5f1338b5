"""
Usage formatter behavioral tests.

Scope
- Rendering of one argument for every arity form, optional and final.
- Ordering of the usage line: required, optional, then the final argument.
- Wrapping at the column limit with prefix-length indentation.

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from unittest import TestCase

from rich.console import Console

from arglet import Argument, ArgumentParser, Fixed, Unbounded, WIDTH, render, format_usage


class TestRender(TestCase):
    """Behavioral tests for single-argument rendering."""

    def testSwitch(self):
        self.assertEqual(render(Argument("v")), "[-v]")
        self.assertEqual(render(Argument("v", "verbose", Fixed(0), False)), "--verbose")

    def testFixedRepeatsPlaceholder(self):
        self.assertEqual(render(Argument("n", "name", Fixed(1))), "[--name NAME]")
        self.assertEqual(render(Argument("", "xyz", Fixed(3), False)), "--xyz XYZ XYZ XYZ")

    def testFixedBeyondThreeIsElided(self):
        self.assertEqual(render(Argument("n", "", Fixed(5), False)), "-n N N N ...")

    def testStar(self):
        self.assertEqual(render(Argument("", "in", Unbounded(0), False)), "--in [IN [IN...]]")

    def testPlus(self):
        self.assertEqual(render(Argument("", "in", Unbounded(1), False)), "--in IN [IN...]")

    def testFinalHasNoFlag(self):
        self.assertEqual(render(Argument("", "files", Unbounded(1), False, final=True)), "FILES [FILES...]")
        self.assertEqual(render(Argument("", "output", Fixed(1), True, final=True)), "[OUTPUT]")


class TestFormatUsage(TestCase):
    """Behavioral tests for the usage line."""

    def setUp(self) -> None:
        self.parser: ArgumentParser = ArgumentParser("prog", program=False)

    def testNoArguments(self):
        self.assertEqual(self.parser.usage(), "Usage: prog ")

    def testOrdering(self):
        self.parser.add_argument("-v")
        self.parser.add_final_argument("files", nargs="+")
        self.parser.add_argument("--in", nargs="+", optional=False)
        self.parser.add_argument("-j", "--jobs", nargs=1)
        self.assertEqual(self.parser.usage(), "Usage: prog --in IN [IN...] [-v] [--jobs JOBS] FILES [FILES...]")

    def testWrapBeforeOverflowingArgument(self):
        # 29 + 29 + 27 = 85 columns of rendered arguments
        self.parser.add_argument("--aaaaaaaaaaaaa", nargs=1, optional=False)
        self.parser.add_argument("--bbbbbbbbbbbbb", nargs=1, optional=False)
        self.parser.add_argument("--cccccccccccc", nargs=1, optional=False)
        usage = self.parser.usage()
        self.assertEqual(usage.count("\n"), 1)
        first, second = usage.split("\n")
        self.assertEqual(first, "Usage: prog --aaaaaaaaaaaaa AAAAAAAAAAAAA --bbbbbbbbbbbbb BBBBBBBBBBBBB")
        self.assertEqual(second, " " * len("Usage: prog ") + "--cccccccccccc CCCCCCCCCCCC")

    def testFittingLineIsNotWrapped(self):
        self.parser.add_argument("--aaaaaaaaaaaaa", nargs=1, optional=False)
        self.parser.add_argument("--bbbbbbbbbbbbb", nargs=1, optional=False)
        self.assertNotIn("\n", self.parser.usage())

    def testOversizedArgumentStaysOnFirstLine(self):
        self.parser.add_argument("--" + "x" * 60, nargs=1, optional=False)
        self.assertNotIn("\n", self.parser.usage())

    def testFinalStaysOnLineWhenItFits(self):
        self.parser.add_argument("--" + "a" * 60, optional=False)
        self.parser.add_final_argument("filesfilesfiles", nargs="+")
        self.assertEqual(
            self.parser.usage(),
            "Usage: prog --%s FILESFILESFILES [FILESFILESFILES...]" % ("a" * 60)
        )

    def testOversizedFinalWraps(self):
        self.parser.add_argument("-v")
        self.parser.add_final_argument("f" * 40, nargs="+")
        first, second = self.parser.usage().split("\n")
        self.assertEqual(first, "Usage: prog [-v]")
        self.assertEqual(second.strip(), "%s [%s...]" % ("F" * 40, "F" * 40))

    def testWrappedArgumentRestartsLineLength(self):
        # after a wrap the running length starts from zero again
        self.parser.add_argument("--aaaaaaaaaaaaa", nargs=1, optional=False)
        self.parser.add_argument("--bbbbbbbbbbbbb", nargs=1, optional=False)
        self.parser.add_argument("--cccccccccccc", nargs=1, optional=False)
        self.parser.add_argument("--ddddddddddddd", nargs=1, optional=False)
        self.parser.add_argument("--eeeeeeeeeeeee", nargs=1, optional=False)
        self.parser.add_argument("--fffffffff", nargs=1, optional=False)
        lines = self.parser.usage().split("\n")
        self.assertEqual(len(lines), 2)
        self.assertEqual(
            lines[1].split(),
            ["--cccccccccccc", "CCCCCCCCCCCC", "--ddddddddddddd", "DDDDDDDDDDDDD",
             "--eeeeeeeeeeeee", "EEEEEEEEEEEEE", "--fffffffff", "FFFFFFFFF"]
        )

    def testCustomWidth(self):
        self.parser.add_argument("-a")
        self.parser.add_argument("-b")
        self.assertEqual(format_usage(self.parser, width=4), "Usage: prog [-a]\n            [-b]")
        self.assertEqual(WIDTH, 80)

    def testPrintUsageWritesLine(self):
        self.parser.add_argument("-v")
        console = Console(color_system=None, force_terminal=False, width=120)
        with console.capture() as capture:
            console.print(self.parser)
        self.assertEqual(capture.get().strip(), "Usage: prog [-v]")


if __name__ == '__main__':
    unittest.main()
