"""Source locations and diagnostic reporting."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Any, TextIO


@dataclass
class ModuleLoc:
    """A zero-based line and column inside a module."""

    module: Any
    line: int
    col: int

    def loc_str(self) -> str:
        """One-based ``line:col`` text."""
        return f"{self.line + 1}:{self.col + 1}"


def _line_text(code: str, line: int) -> str | None:
    start = 0
    for _ in range(line):
        nl = code.find("\n", start)
        if nl == -1:
            return None
        start = nl + 1
    if start >= len(code):
        return None
    end = code.find("\n", start)
    return code[start:] if end == -1 else code[start:end]


class ErrorReporter:
    """Prints failures and warnings, stopping after a maximum number of failures."""

    def __init__(self, max_errors: int = 10, stream: TextIO | None = None):
        self.max_errors = max_errors
        self.stream = stream
        self.error_count = 0

    def set_max_errors(self, count: int) -> None:
        self.max_errors = count

    def _out(self) -> TextIO:
        return self.stream if self.stream is not None else sys.stdout

    def report(self, loc: ModuleLoc | None, *args: Any, warning: bool = False) -> None:
        """Print a diagnostic; with a location, show the source line and a caret."""
        if self.error_count >= self.max_errors:
            return
        out = self._out()
        kind = "Warning" if warning else "Failure"
        message = "".join(str(a) for a in args)
        if loc is None:
            out.write(f"{kind}: {message}\n")
        else:
            module = loc.module
            line_text = _line_text(module.code, loc.line)
            if line_text is None:
                line_text = "<not found>"
            tabs = min(line_text.count("\t"), loc.col)
            caret = "\t" * tabs + " " * (loc.col - tabs)
            out.write(f"{module.path} ({loc.line + 1}:{loc.col + 1}): {kind}: {message}\n")
            out.write(f"{line_text}\n")
            out.write(f"{caret}^\n")
        if not warning:
            self.error_count += 1
        if self.error_count >= self.max_errors:
            out.write("Failure: Too many errors encountered\n")