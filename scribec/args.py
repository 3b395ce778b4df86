"""Command line argument definitions and parsing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

PROJECT_NAME = "scribe"


class ArgumentError(Exception):
    """Raised when the command line does not satisfy the argument definitions."""


@dataclass
class ArgInfo:
    """Definition of one command line option."""

    long: str
    short: str = ""
    help: str = ""
    value_required: bool = False
    required: bool = False


class ArgParser:
    """Parses options of the form ``--long`` and ``-short`` plus positional arguments.

    Positional arguments include the program name at index 0.
    """

    def __init__(self, argv: Sequence[str]):
        self.argv: list[str] = list(argv)
        self.defs: dict[str, ArgInfo] = {}
        self.opts: dict[str, str] = {}
        self.args: list[str] = []
        self.add("help", short="h", help="prints help information for program")

    def add(
        self,
        name: str,
        short: str = "",
        help: str = "",
        value_required: bool = False,
        required: bool = False,
    ) -> ArgInfo:
        """Define (or redefine) the option ``name`` and return its definition."""
        info = self.defs.setdefault(name, ArgInfo(long=name))
        info.long = name
        info.short = short
        info.help = help
        info.value_required = value_required
        info.required = required
        return info

    def _mark(self, matches, pending: str | None) -> str | None:
        for name, info in matches:
            self.opts.setdefault(name, "")
            info.required = False
            if info.value_required:
                pending = name
        return pending

    def parse(self) -> None:
        """Parse ``argv``; raise :class:`ArgumentError` on a missing value or option."""
        self.opts = {}
        self.args = []
        pending: str | None = None
        for arg in self.argv:
            if pending is not None:
                self.opts[pending] = arg
                pending = None
                continue
            if arg.startswith("--"):
                name = arg[2:]
                matches = [(k, v) for k, v in self.defs.items() if v.long == name]
                pending = self._mark(matches, pending)
                continue
            if arg.startswith("-"):
                name = arg[1:]
                matches = [(k, v) for k, v in self.defs.items() if v.short == name]
                pending = self._mark(matches, pending)
                continue
            self.args.append(arg)
        if pending is not None:
            raise ArgumentError(f"Expected value to be provided for argument: {pending}")
        for name, info in self.defs.items():
            if info.required and name not in self.opts:
                raise ArgumentError(f"Required argument: {name} was not provided")

    def has(self, name: str) -> bool:
        return name in self.opts

    def value(self, name: str) -> str:
        """Value given to option ``name``, or an empty string."""
        return self.opts.get(name, "")

    def get(self, index: int) -> str:
        """Positional argument at ``index``, or an empty string when absent."""
        if 0 <= index < len(self.args):
            return self.args[index]
        return ""

    def help_text(self, version: str) -> str:
        """Usage and option summary."""
        program = self.argv[0] if self.argv else PROJECT_NAME
        lines = [f"{PROJECT_NAME} compiler {version}"]
        required = "".join(f" [{name}]" for name, info in sorted(self.defs.items()) if info.required)
        lines.append(f"usage: {program}{required} <args>")
        lines.append("")
        for _, info in sorted(self.defs.items()):
            if info.short:
                lines.append(f"-{info.short}, --{info.long}\t\t{info.help}")
            else:
                lines.append(f"--{info.long}\t\t{info.help}")
        return "\n".join(lines) + "\n"