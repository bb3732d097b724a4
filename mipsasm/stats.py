from dataclasses import dataclass, field
from collections import defaultdict

from .isa import Format


@dataclass
class Stats:
    lines: int = 0                # non-blank lines seen
    words: int = 0                # lines that produced a word
    format_counts: dict = field(default_factory=lambda: defaultdict(int))  # e.g., {"R": 3, "I": 2}
    error_counts: dict = field(default_factory=lambda: defaultdict(int))   # keyed by exception class name

    def bump_line(self):
        """Record that one non-blank line was read."""
        self.lines += 1

    def bump_word(self, fmt: Format):
        """Record an emitted word under its instruction format."""
        self.words += 1
        self.format_counts[fmt.value] += 1

    def bump_error(self, err: Exception):
        """Increment the count for the failure's error kind."""
        self.error_counts[type(err).__name__] += 1

    @property
    def errors(self) -> int:
        """Total failures across every error kind."""
        return sum(self.error_counts.values())
