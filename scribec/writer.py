"""Indented text accumulator used for code generation."""

from __future__ import annotations


class Writer:
    """Collects generated text, tracking an indentation depth of tabs."""

    def __init__(self, indent: int = 0):
        self.indent = indent
        self._dest = ""

    def child(self) -> "Writer":
        """An empty writer with the same indentation."""
        return Writer(self.indent)

    def add_indent(self, count: int = 1) -> None:
        self.indent += count

    def remove_indent(self, count: int = 1) -> None:
        if count > self.indent:
            raise ValueError("indentation cannot go below zero")
        self.indent -= count

    def new_line(self) -> None:
        """Add a newline followed by the current indentation."""
        self._dest += "\n" + "\t" * self.indent

    def append(self, other: "Writer") -> None:
        self._dest += other.data()

    def write(self, *args: object) -> None:
        """Append each argument; floats use six decimal places."""
        for arg in args:
            if isinstance(arg, float):
                self._dest += f"{arg:.6f}"
            else:
                self._dest += str(arg)

    def write_repeated(self, count: int, char: str) -> None:
        self._dest += char * count

    def write_const_char(self, code: int) -> None:
        self._dest += "'" + chr(code) + "'"

    def write_before(self, data: str) -> None:
        self._dest = data + self._dest

    def insert_after(self, pos: int, data: str) -> None:
        self._dest = self._dest[:pos] + data + self._dest[pos:]

    def clear(self) -> None:
        self._dest = ""

    @property
    def empty(self) -> bool:
        return not self._dest

    def __len__(self) -> int:
        return len(self._dest)

    def data(self) -> str:
        return self._dest