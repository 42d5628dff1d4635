"""Terminal output helpers."""

import sys
from typing import TextIO

_BLUE = "\033[1;34m"
_YELLOW = "\033[1;33m"
_RED = "\033[1;31m"
_RESET = "\033[0m"


class Console:
    """Prints step headings, warnings and errors.

    Info output is suppressed in quiet mode; warnings and errors never are.
    """

    def __init__(self, colors: bool = True, quiet: bool = False,
                 out: TextIO | None = None, err: TextIO | None = None):
        self.colors = colors
        self.quiet = quiet
        self.out = out or sys.stdout
        self.err = err or sys.stderr

    def _paint(self, color: str, text: str) -> str:
        return f"{color}{text}{_RESET}" if self.colors else text

    def step(self, message: str) -> None:
        if not self.quiet:
            print(f"\n{self._paint(_BLUE, '==>')} {message}", file=self.out)

    def info(self, message: str) -> None:
        if not self.quiet:
            print(message, file=self.out)

    def warn(self, message: str) -> None:
        print(f"{self._paint(_YELLOW, '[warn]')} {message}", file=self.out)

    def error(self, message: str) -> None:
        print(f"{self._paint(_RED, '[err]')} {message}", file=self.err)
