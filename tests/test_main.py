import io
import logging
import os
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest import mock

from mipsasm import main as cli
from mipsasm.controller import RunController
from mipsasm.errors import UnknownRegister
from mipsasm.isa import Format
from mipsasm.stats import Stats
from mipsasm.view import TextView, format_fields, split_fields

PROGRAM = """\
add t0 t1 t2
# comment line

addi t0 t1 -1
foo a b c
sll t0 t1 2
"""


class TtyInput(io.StringIO):
    def isatty(self):
        return True


def make_view():
    out, err = io.StringIO(), io.StringIO()
    return TextView(out=out, err=err), out, err


class TestView(unittest.TestCase):
    def test_split_fields(self):
        self.assertEqual(split_fields(0x012A4020, Format.R), [0, 9, 10, 8, 0, 0x20])
        self.assertEqual(split_fields(0x8FA80004, Format.I), [0x23, 29, 8, 4])

    def test_format_fields(self):
        self.assertEqual(format_fields(0x012A4020, Format.R),
                         "000000 01001 01010 01000 00000 100000")
        self.assertEqual(format_fields(0x00094080, Format.R_SHIFT),
                         "000000 00000 01001 01000 00010 000000")

    def test_show_fields(self):
        out = io.StringIO()
        ctl = RunController(TextView(out=out, err=io.StringIO(), show_fields=True))
        ctl.run_all(["addi t0 t1 -1"])
        self.assertEqual(out.getvalue(),
                         "0x2128ffff  001000 01001 01000 1111111111111111\n")


class TestController(unittest.TestCase):
    def test_run_all_continues_after_error(self):
        view, out, err = make_view()
        ctl = RunController(view)
        ok = ctl.run_all(PROGRAM.splitlines())
        self.assertFalse(ok)
        self.assertEqual(out.getvalue().split(), ["0x012a4020", "0x2128ffff", "0x00094080"])
        self.assertEqual(err.getvalue(), "line 5: Unknown mnemonic 'foo'\n")

    def test_strict_stops(self):
        view, out, err = make_view()
        ctl = RunController(view, strict=True)
        self.assertFalse(ctl.run_all(PROGRAM.splitlines()))
        self.assertEqual(out.getvalue().split(), ["0x012a4020", "0x2128ffff"])
        self.assertEqual(ctl.stats.lines, 3)

    def test_all_good(self):
        view, out, _ = make_view()
        self.assertTrue(RunController(view).run_all(["or v0 a0 a1", "bne t0 t1 8"]))

    def test_stats(self):
        view, _, _ = make_view()
        ctl = RunController(view)
        ctl.run_all(PROGRAM.splitlines() + ["add t0 t1 zz"])
        s = ctl.stats
        self.assertEqual((s.lines, s.words, s.errors), (5, 3, 2))
        self.assertEqual(dict(s.format_counts), {"R": 1, "I": 1, "R-shift": 1})
        self.assertEqual(dict(s.error_counts), {"UnknownMnemonic": 1, "UnknownRegister": 1})

    def test_observers(self):
        seen = []
        view, _, _ = make_view()
        ctl = RunController(view)
        ctl.attach(seen.append)
        ctl.run_all(["add t0 t1 zz"])
        self.assertEqual(len(seen), 1)
        self.assertIsInstance(seen[0].error, UnknownRegister)

    def test_interactive(self):
        view, out, _ = make_view()
        ctl = RunController(view)
        with mock.patch("builtins.input", side_effect=["sll t0 t1 2", "", "q", "add t0 t1 t2"]):
            self.assertTrue(ctl.run_interactive())
        self.assertEqual(out.getvalue(), "0x00094080\n")

    def test_interactive_eof(self):
        view, out, _ = make_view()
        with mock.patch("builtins.input", side_effect=EOFError):
            self.assertTrue(RunController(view).run_interactive())
        self.assertEqual(out.getvalue(), "")


class TestStats(unittest.TestCase):
    def test_empty(self):
        s = Stats()
        self.assertEqual((s.lines, s.words, s.errors), (0, 0, 0))


class TestMain(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.addCleanup(logging.getLogger("mipsasm").setLevel, logging.NOTSET)
        self.src = os.path.join(self.tmp.name, "prog.asm")
        with open(self.src, "w") as f:
            f.write(PROGRAM)

    def run_main(self, *argv):
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            rc = cli.main(list(argv))
        return rc, out.getvalue(), err.getvalue()

    def test_file_input(self):
        rc, out, err = self.run_main(self.src)
        self.assertEqual(rc, 1)
        self.assertEqual(out, "0x012a4020\n0x2128ffff\n0x00094080\n")
        self.assertIn("line 5: Unknown mnemonic 'foo'", err)

    def test_clean_file_exits_zero(self):
        with open(self.src, "w") as f:
            f.write("lw t0 4 sp\nsw t0 8(sp)\n")
        rc, out, _ = self.run_main(self.src)
        self.assertEqual(rc, 0)
        self.assertEqual(out, "0x8fa80004\n0xafa80008\n")

    def test_strict(self):
        rc, out, _ = self.run_main("--strict", self.src)
        self.assertEqual(rc, 1)
        self.assertEqual(out.count("\n"), 2)

    def test_out_file(self):
        dest = os.path.join(self.tmp.name, "prog.bin")
        rc, out, err = self.run_main(self.src, "--out", dest)
        self.assertEqual(rc, 1)
        self.assertEqual(out, "")
        with open(dest) as f:
            self.assertEqual(f.read(), "0x012a4020\n0x2128ffff\n0x00094080\n")
        self.assertIn("(3 words)", err)

    def test_stats_flag(self):
        _, _, err = self.run_main("--stats", self.src)
        self.assertIn("lines=4  words=3  errors=1", err)
        self.assertIn("UnknownMnemonic:1", err)

    def test_unwritable_out_file(self):
        dest = os.path.join(self.tmp.name, "nodir", "prog.bin")
        rc, out, err = self.run_main(self.src, "--out", dest)
        self.assertEqual(rc, 2)
        self.assertEqual(out, "")
        self.assertIn("ERROR: Cannot write", err)

    def test_banner_on_terminal(self):
        with mock.patch("sys.stdin", TtyInput("")), \
                mock.patch("builtins.input", side_effect=["add t0 t1 t2", EOFError]):
            rc, out, _ = self.run_main()
        self.assertEqual(rc, 0)
        self.assertIn("MIPS translator", out)
        self.assertTrue(out.endswith("0x012a4020\n"))

    def test_verbose_enables_debug(self):
        pkg_logger = logging.getLogger("mipsasm")
        self.run_main(self.src)
        self.assertEqual(pkg_logger.level, logging.WARNING)
        self.run_main("-v", self.src)
        self.assertEqual(pkg_logger.level, logging.DEBUG)

    def test_translation_logs_at_debug(self):
        with self.assertLogs("mipsasm.assembler", level="DEBUG") as cm:
            self.run_main("-v", self.src)
        self.assertTrue(any("0x012a4020" in line for line in cm.output))

    def test_missing_file(self):
        rc, _, err = self.run_main(os.path.join(self.tmp.name, "nope.asm"))
        self.assertEqual(rc, 2)
        self.assertIn("No input file", err)

    def test_stdin(self):
        fake = io.StringIO("ori t0 zero 0xffff\n")
        with mock.patch("sys.stdin", fake):
            rc, out, err = self.run_main()
        self.assertEqual(rc, 0)
        self.assertEqual(out, "0x3408ffff\n")
        self.assertNotIn("MIPS translator", out)


if __name__ == "__main__":
    unittest.main()
