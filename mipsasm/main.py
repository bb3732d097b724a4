import sys
import argparse
import logging
from contextlib import ExitStack

from .controller import RunController
from .view import TextView

BANNER = r"""
*********************************************************
*            >> MIPS translator  v0.10 <<               *
*                                                       *
*                                       .---.           *
*                           .--------.  |___|           *
*                           |.------.|  |=. |           *
*                           || >>_  ||  |-- |           *
*                           |'------'|  |   |           *
*                           ')______('~~|___|           *
*                                                       *
*********************************************************
"""


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="mipsasm",
                                description="Translate MIPS assembly lines into 32-bit machine words")
    p.add_argument("program", nargs="?", default=None,
                   help="Path to an .asm file (one instruction per line); reads stdin if omitted")
    p.add_argument("--out", type=str, default=None, help="Write words to this file instead of stdout")
    p.add_argument("--strict", action="store_true", help="Stop at the first line that fails")
    p.add_argument("--fields", action="store_true", help="Also print the binary field breakdown")
    p.add_argument("--stats", action="store_true", help="Print a summary when done")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return p


def main(argv=None) -> int:
    """Entry point: translate a file or standard input line by line."""
    args = build_parser().parse_args(argv)
    level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger(__package__).setLevel(level)

    with ExitStack() as stack:
        try:
            src = stack.enter_context(open(args.program, "r")) if args.program else sys.stdin
        except OSError as e:
            print(f"ERROR: No input file {args.program} ({e.strerror})", file=sys.stderr)
            return 2
        try:
            out = stack.enter_context(open(args.out, "w")) if args.out else None
        except OSError as e:
            print(f"ERROR: Cannot write {args.out} ({e.strerror})", file=sys.stderr)
            return 2

        view = TextView(out=out, show_fields=args.fields)
        ctl = RunController(view, strict=args.strict)
        if src is sys.stdin and sys.stdin.isatty():
            print(BANNER)
            ok = ctl.run_interactive()
        else:
            ok = ctl.run_all(src)
        if args.stats:
            view.render_stats(ctl.stats)

    if out is not None:
        print(f"Wrote {args.out} ({ctl.stats.words} words).", file=sys.stderr)
    return 0 if ok else 1

if __name__ == "__main__":
    sys.exit(main())
