"""Text-only view that prints one result per translated line.

This file is the "View" slice of MVC. It does not influence translation; it
only observes line results and formats them so humans (or a grader diffing
the output) can follow along.
"""

import sys

from .isa import Format

# field widths, most significant first
FIELD_WIDTHS = {
    Format.R: (6, 5, 5, 5, 5, 6),        # op rs rt rd shamt funct
    Format.R_SHIFT: (6, 5, 5, 5, 5, 6),
    Format.I: (6, 5, 5, 16),             # op rs rt imm
}


def split_fields(word: int, fmt: Format):
    """Slice a word into its bit fields, most significant first."""
    fields = []
    shift = 32
    for width in FIELD_WIDTHS[fmt]:
        shift -= width
        fields.append((word >> shift) & ((1 << width) - 1))
    return fields


def format_fields(word: int, fmt: Format) -> str:
    """Render a word as space separated binary fields."""
    return " ".join(f"{val:0{width}b}"
                    for val, width in zip(split_fields(word, fmt), FIELD_WIDTHS[fmt]))


class TextView:
    def __init__(self, out=None, err=None, show_fields: bool = False):
        """Configure where words and diagnostics go and how much to show."""
        self.out = out if out is not None else sys.stdout
        self.err = err if err is not None else sys.stderr
        self.show_fields = show_fields

    def __call__(self, result):
        """Let the view be used as an observer callback."""
        self.render(result)

    def render(self, result):
        """Print the word for a line, or its diagnostic."""
        if not result.ok:
            print(f"line {result.line_num}: {result.error}", file=self.err)
            return
        if self.show_fields:
            print(f"0x{result.word:08x}  {format_fields(result.word, result.format)}", file=self.out)
        else:
            print(f"0x{result.word:08x}", file=self.out)

    def render_stats(self, stats):
        """Print the session summary."""
        fmts = ", ".join([f"{k}:{v}" for k, v in sorted(stats.format_counts.items())]) or "(none)"
        errs = ", ".join([f"{k}:{v}" for k, v in sorted(stats.error_counts.items())]) or "(none)"
        print("-"*40, file=self.err)
        print(f"  lines={stats.lines}  words={stats.words}  errors={stats.errors}", file=self.err)
        print(f"  formats={{ {fmts} }}", file=self.err)
        print(f"  errors={{ {errs} }}", file=self.err)
