"""Shared compilation state."""

from __future__ import annotations

from typing import Any, Hashable

from .errors import ErrorReporter, ModuleLoc


class Context:
    """Holds the error reporter, the owning parser and the registered passes."""

    def __init__(self, reporter: ErrorReporter | None = None):
        self.reporter = reporter if reporter is not None else ErrorReporter()
        self.parser: Any = None
        self._passes: dict[Hashable, Any] = {}

    def module_loc(self, module: Any, line: int, col: int) -> ModuleLoc:
        return ModuleLoc(module, line, col)

    def add_pass(self, pass_id: Hashable, pass_obj: Any) -> None:
        self._passes[pass_id] = pass_obj

    def remove_pass(self, pass_id: Hashable) -> None:
        self._passes.pop(pass_id, None)

    def get_pass(self, pass_id: Hashable) -> Any:
        """The pass registered under ``pass_id``, or None."""
        return self._passes.get(pass_id)