from typing import Iterable, List, Callable

from .assembler import LineResult, translate_line
from .stats import Stats

Observer = Callable[[LineResult], None]


class RunController:
    def __init__(self, view, strict: bool = False, stats: Stats = None):
        """Tie the translator to a view and choose whether errors abort."""
        self.strict = strict
        self.stats = stats if stats is not None else Stats()
        self.observers: List[Observer] = []
        self.failed = False

        # attach view as observer
        self.attach(view)

    def attach(self, obs: Observer):
        """Register a callback invoked with every line result."""
        self.observers.append(obs)

    def notify(self, result: LineResult):
        """Call every observer so external views can report the line."""
        for obs in self.observers:
            obs(result)

    def feed(self, line: str, line_num: int) -> bool:
        """Translate one line; return False when processing should stop."""
        result = translate_line(line, line_num)
        if result is None:
            return True
        self.stats.bump_line()
        if result.ok:
            self.stats.bump_word(result.format)
        else:
            self.stats.bump_error(result.error)
            self.failed = True
        self.notify(result)
        return result.ok or not self.strict

    def run_all(self, lines: Iterable[str]) -> bool:
        """Translate every line; True when none of them failed."""
        for line_num, line in enumerate(lines, 1):
            if not self.feed(line, line_num):
                break
        return not self.failed

    def run_interactive(self, prompt: str = ">> ") -> bool:
        """Prompt for lines until end of input or a 'q' on its own."""
        line_num = 0
        while True:
            try:
                line = input(prompt)
            except EOFError:
                break
            if line.strip().lower() in ('q', 'quit'):
                break
            line_num += 1
            if not self.feed(line, line_num):
                break
        return not self.failed
