"""Pool of constant data variables emitted at the top of generated C code."""

from __future__ import annotations

from dataclasses import dataclass

from .lexer import Lexeme, TokType

_RAW_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "'": "\\'",
    "\0": "\\0",
    "\a": "\\a",
    "\b": "\\b",
    "\x1b": "\\e",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
}


def to_raw_string(text: str) -> str:
    """Escape ``text`` so it can be placed inside a C string or char literal."""
    return "".join(_RAW_ESCAPES.get(ch, ch) for ch in text)


@dataclass(frozen=True)
class _Constant:
    var: str
    decl: str


class ConstantPool:
    """Hands out one named constant per distinct literal value and type."""

    def __init__(self, stringref_type: str = ""):
        self.stringref_type = stringref_type
        self._constants: dict[str, _Constant] = {}
        self._next_id = 0

    def _new_var(self) -> str:
        var = f"const_{self._next_id}"
        self._next_id += 1
        return var

    def var_for(self, lexeme: Lexeme, bits: int | None = None, signed: bool = True) -> str:
        """Name of the constant holding ``lexeme``'s value, creating it if needed.

        ``bits`` and ``signed`` describe the type of integer and float literals.
        """
        kind = lexeme.kind
        if kind is TokType.TRUE:
            value, key, ctype = "1", "1i1", "const i1"
        elif kind in (TokType.FALSE, TokType.NIL):
            value, key, ctype = "0", "0i1", "const i1"
        elif kind is TokType.INT:
            if bits is None:
                raise ValueError("integer constants need a bit width")
            sign = "i" if signed else "u"
            value = str(lexeme.int_value)
            key = f"{value}{sign}{bits}"
            ctype = f"const {sign}{bits}"
        elif kind is TokType.FLT:
            if bits is None:
                raise ValueError("float constants need a bit width")
            value = f"{lexeme.flt_value:.6f}"
            key = f"{value}f{bits}"
            ctype = f"const f{bits}"
        elif kind is TokType.CHAR:
            value = "'" + to_raw_string(lexeme.text) + "'"
            key = value
            ctype = "const i8"
        elif kind is TokType.STR:
            if not self.stringref_type:
                raise ValueError("string constants need the C type of string references")
            raw = to_raw_string(lexeme.text)
            value = '{"' + raw + '", ' + str(len(raw.encode("utf-8"))) + "}"
            key = value
            ctype = self.stringref_type
        else:
            value, key, ctype = "0", "0i32", "const i32"

        existing = self._constants.get(key)
        if existing is not None:
            return existing.var
        var = self._new_var()
        self._constants[key] = _Constant(var, f"{ctype} {var} = {value};")
        return var

    def declarations(self) -> list[str]:
        """C declarations of every constant, in the order they were created."""
        return [c.decl for c in self._constants.values()]

    def __len__(self) -> int:
        return len(self._constants)