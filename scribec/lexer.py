"""Tokenizer for scribe source text."""

from __future__ import annotations

import os
import string
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .context import Context
from .errors import ModuleLoc


class TokType(Enum):
    """Kinds of lexical tokens; each value is the token's display text."""

    INT = "INT"
    FLT = "FLT"
    CHAR = "CHAR"
    STR = "STR"
    IDEN = "IDEN"

    # Keywords
    LET = "let"
    FN = "fn"
    IF = "if"
    ELIF = "elif"
    ELSE = "else"
    FOR = "for"
    IN = "in"
    WHILE = "while"
    RETURN = "return"
    CONTINUE = "continue"
    BREAK = "break"
    VOID = "void"
    TRUE = "true"
    FALSE = "false"
    NIL = "nil"
    ANY = "any"
    TYPE = "type"
    I1 = "i1"
    I8 = "i8"
    I16 = "i16"
    I32 = "i32"
    I64 = "i64"
    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    U64 = "u64"
    F32 = "f32"
    F64 = "f64"
    OR = "or"
    STATIC = "static"
    CONST = "const"
    VOLATILE = "volatile"
    DEFER = "defer"
    EXTERN = "extern"
    COMPTIME = "comptime"
    GLOBAL = "global"
    INLINE = "inline"
    STRUCT = "struct"
    ENUM = "enum"

    # Operators
    ASSN = "="
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    MOD = "%"
    ADD_ASSN = "+="
    SUB_ASSN = "-="
    MUL_ASSN = "*="
    DIV_ASSN = "/="
    MOD_ASSN = "%="
    XINC = "x++"
    INCX = "++x"
    XDEC = "x--"
    DECX = "--x"
    UADD = "u+"
    USUB = "u-"
    UAND = "u&"
    UMUL = "u*"
    LAND = "&&"
    LOR = "||"
    LNOT = "!"
    EQ = "=="
    LT = "<"
    GT = ">"
    LE = "<="
    GE = ">="
    NE = "!="
    BAND = "&"
    BOR = "|"
    BNOT = "~"
    BXOR = "^"
    BAND_ASSN = "&="
    BOR_ASSN = "|="
    BNOT_ASSN = "~="
    BXOR_ASSN = "^="
    LSHIFT = "<<"
    RSHIFT = ">>"
    LSHIFT_ASSN = "<<="
    RSHIFT_ASSN = ">>="
    SUBS = "[]"
    FNCALL = "()"
    STCALL = "{}"
    POST_VA = "x..."
    PRE_VA = "...x"

    # Separators
    DOT = "."
    QUEST = "?"
    COL = ":"
    COMMA = ","
    AT = "@"
    SPC = "SPC"
    TAB = "TAB"
    NEWL = "NEWL"
    COLS = ";"
    ARROW = "->"
    LPAREN = "("
    RPAREN = ")"
    LBRACE = "{"
    RBRACE = "}"
    LBRACK = "["
    RBRACK = "]"

    FEOF = "<FEOF>"
    INVALID = "<INVALID>"

    @property
    def text(self) -> str:
        return self.value


_MEMBERS = list(TokType)
_KEYWORDS = {
    t.value: t
    for t in _MEMBERS[_MEMBERS.index(TokType.LET) : _MEMBERS.index(TokType.ENUM) + 1]
}
_DATA_TYPES = frozenset(
    {TokType.INT, TokType.FLT, TokType.CHAR, TokType.STR, TokType.IDEN}
)

_UNARY_SYMBOLS = {
    TokType.XINC: "++",
    TokType.INCX: "++",
    TokType.XDEC: "--",
    TokType.DECX: "--",
    TokType.UADD: "+",
    TokType.USUB: "-",
    TokType.UAND: "&",
    TokType.UMUL: "*",
    TokType.LNOT: "!",
    TokType.BNOT: "~",
}

_OPERATOR_NAMES = {
    TokType.ASSN: "__assn__",
    TokType.ADD: "__add__",
    TokType.SUB: "__sub__",
    TokType.MUL: "__mul__",
    TokType.DIV: "__div__",
    TokType.MOD: "__mod__",
    TokType.ADD_ASSN: "__add_assn__",
    TokType.SUB_ASSN: "__sub_assn__",
    TokType.MUL_ASSN: "__mul_assn__",
    TokType.DIV_ASSN: "__div_assn__",
    TokType.MOD_ASSN: "__mod_assn__",
    TokType.XINC: "__xinc__",
    TokType.INCX: "__incx__",
    TokType.XDEC: "__xdec__",
    TokType.DECX: "__decx__",
    TokType.UADD: "__uadd__",
    TokType.USUB: "__usub__",
    TokType.LAND: "__logand__",
    TokType.LOR: "__logor__",
    TokType.LNOT: "__lognot__",
    TokType.EQ: "__eq__",
    TokType.LT: "__lt__",
    TokType.GT: "__gt__",
    TokType.LE: "__le__",
    TokType.GE: "__ge__",
    TokType.NE: "__ne__",
    TokType.BAND: "__band__",
    TokType.BOR: "__bor__",
    TokType.BNOT: "__bnot__",
    TokType.BXOR: "__bxor__",
    TokType.BAND_ASSN: "__band_assn__",
    TokType.BOR_ASSN: "__bor_assn__",
    TokType.BNOT_ASSN: "__bnot_assn__",
    TokType.BXOR_ASSN: "__bxor_assn__",
    TokType.LSHIFT: "__lshift__",
    TokType.RSHIFT: "__rshift__",
    TokType.LSHIFT_ASSN: "__lshift_assn__",
    TokType.RSHIFT_ASSN: "__rshift_assn__",
    TokType.SUBS: "__subscr__",
}


@dataclass(frozen=True)
class Tok:
    """A token kind with operator helpers."""

    val: TokType

    @property
    def text(self) -> str:
        return self.val.text

    def unary_symbol(self) -> str:
        """Operator symbol of a unary token, or an empty string."""
        return _UNARY_SYMBOLS.get(self.val, "")

    def operator_name(self) -> str:
        """Name of the function overloading this operator, or an empty string."""
        return _OPERATOR_NAMES.get(self.val, "")

    def is_data(self) -> bool:
        """Whether the token carries a value (literal or identifier)."""
        return self.val in _DATA_TYPES


@dataclass
class Lexeme:
    """A token with its location and data."""

    loc: ModuleLoc
    tok: Tok
    text: str = ""
    int_value: int = 0
    flt_value: float = 0.0

    @property
    def kind(self) -> TokType:
        return self.tok.val

    def data_equals(self, other: "Lexeme", kind: TokType) -> bool:
        """Compare the data fields relevant to ``kind``."""
        if kind in (TokType.STR, TokType.IDEN):
            return self.text == other.text
        if kind is TokType.INT:
            return self.int_value == other.int_value
        if kind is TokType.FLT:
            return self.flt_value == other.flt_value
        return False

    def str(self, pad: int = 10) -> str:
        """Readable form: token kind, location and data, padded into columns."""
        res = self.tok.text
        res += " " * (pad - len(res))
        if pad == 0:
            res += " "
        before = len(res)
        res += f"[{self.loc.loc_str()}]"
        if not self.tok.is_data():
            return res
        res += " " * (pad - (len(res) - before))
        if pad == 0:
            res += " "
        kind = self.tok.val
        if kind in (TokType.CHAR, TokType.STR, TokType.IDEN):
            res += view_backslash(self.text)
        elif kind is TokType.INT:
            res += str(self.int_value)
        elif kind is TokType.FLT:
            res += f"{self.flt_value:.6f}"
        return res


class LexError(Exception):
    """Raised when source text cannot be tokenized."""

    def __init__(self, message: str, loc: ModuleLoc | None = None):
        super().__init__(message)
        self.loc = loc


def classify_str(text: str) -> TokType:
    """Keyword kind of ``text``; otherwise STR for atoms (leading dot) or IDEN."""
    keyword = _KEYWORDS.get(text)
    if keyword is not None:
        return keyword
    return TokType.STR if text.startswith(".") else TokType.IDEN


_ESCAPES = {
    "0": "\0",
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
}
if os.name != "nt":
    _ESCAPES["e"] = "\x1b"
_VIEW_ESCAPES = {v: "\\" + k for k, v in _ESCAPES.items()}


def remove_backslash(text: str) -> str:
    """Resolve backslash escapes; unknown escapes yield the escaped character."""
    out: list[str] = []
    chars = iter(text)
    for ch in chars:
        if ch == "\\":
            nxt = next(chars, None)
            if nxt is None:
                out.append(ch)
                break
            out.append(_ESCAPES.get(nxt, nxt))
        else:
            out.append(ch)
    return "".join(out)


def view_backslash(text: str) -> str:
    """Show control characters as backslash escapes."""
    return "".join(_VIEW_ESCAPES.get(ch, ch) for ch in text)


_SPACE = " \t\n\v\f\r"
_ALPHA = frozenset(string.ascii_letters)
_DIGITS = frozenset(string.digits)
_ALNUM = _ALPHA | _DIGITS
_QUOTES = "\"'`"

_OPERATORS: dict[str, tuple[TokType, dict[str, TokType]]] = {
    "+": (TokType.ADD, {"=": TokType.ADD_ASSN, "+": TokType.XINC}),
    "-": (TokType.SUB, {"=": TokType.SUB_ASSN, "-": TokType.XDEC, ">": TokType.ARROW}),
    "*": (TokType.MUL, {"=": TokType.MUL_ASSN}),
    "/": (TokType.DIV, {"=": TokType.DIV_ASSN}),
    "%": (TokType.MOD, {"=": TokType.MOD_ASSN}),
    "&": (TokType.BAND, {"&": TokType.LAND, "=": TokType.BAND_ASSN}),
    "|": (TokType.BOR, {"|": TokType.LOR, "=": TokType.BOR_ASSN}),
    "~": (TokType.BNOT, {"=": TokType.BNOT_ASSN}),
    "=": (TokType.ASSN, {"=": TokType.EQ}),
    "<": (TokType.LT, {"=": TokType.LE, "<": TokType.LSHIFT}),
    ">": (TokType.GT, {"=": TokType.GE, ">": TokType.RSHIFT}),
    "!": (TokType.LNOT, {"=": TokType.NE}),
    "^": (TokType.BXOR, {"=": TokType.BXOR_ASSN}),
    " ": (TokType.SPC, {}),
    "\t": (TokType.TAB, {}),
    "\n": (TokType.NEWL, {}),
    "?": (TokType.QUEST, {}),
    ":": (TokType.COL, {}),
    ",": (TokType.COMMA, {}),
    ";": (TokType.COLS, {}),
    "@": (TokType.AT, {}),
    "(": (TokType.LPAREN, {}),
    "[": (TokType.LBRACK, {}),
    "{": (TokType.LBRACE, {}),
    ")": (TokType.RPAREN, {}),
    "]": (TokType.RBRACK, {}),
    "}": (TokType.RBRACE, {}),
}
_SHIFT_ASSIGN = {TokType.LSHIFT: TokType.LSHIFT_ASSN, TokType.RSHIFT: TokType.RSHIFT_ASSN}


def _parse_int_prefix(text: str, base: int) -> int:
    value = 0
    for ch in text:
        try:
            digit = int(ch, 36)
        except ValueError:
            break
        if digit >= base:
            break
        value = value * base + digit
    return value


class Tokenizer:
    """Splits the source of one module into lexemes."""

    def __init__(self, ctx: Context, module: Any):
        self.ctx = ctx
        self.module = module
        self._data = ""
        self._i = 0
        self._line = 0
        self._line_start = 0

    def _at(self, pos: int) -> str:
        return self._data[pos] if 0 <= pos < len(self._data) else ""

    def _loc(self, line: int, col: int) -> ModuleLoc:
        return self.ctx.module_loc(self.module, line, col)

    def _fail(self, line: int, col: int, *parts: Any) -> LexError:
        loc = self._loc(line, col)
        self.ctx.reporter.report(loc, *parts)
        return LexError("".join(str(p) for p in parts), loc)

    def tokenize(self, data: str) -> list[Lexeme]:
        """Tokenize ``data``; raise :class:`LexError` on invalid input."""
        self._data = data
        self._i = 0
        self._line = 0
        self._line_start = 0
        toks: list[Lexeme] = []
        comment_block = 0
        comment_line = False
        n = len(data)
        while self._i < n:
            cur = data[self._i]
            nxt = self._at(self._i + 1)
            if cur == "\n":
                self._line += 1
                self._line_start = self._i + 1
            if comment_line:
                if cur == "\n":
                    comment_line = False
                self._i += 1
                continue
            if cur in _SPACE:
                self._i += 1
                continue
            if cur == "*" and nxt == "/":
                if not comment_block:
                    raise self._fail(
                        self._line,
                        self._i - self._line_start,
                        "encountered multi line comment terminator '*/' in non comment block",
                    )
                self._i += 2
                comment_block -= 1
                continue
            if cur == "/" and nxt == "*":
                self._i += 2
                comment_block += 1
                continue
            if comment_block:
                self._i += 1
                continue
            if cur == "/" and nxt == "/":
                comment_line = True
                self._i += 1
                continue
            prev = self._at(self._i - 1)
            if (
                cur == "."
                and (nxt in _ALPHA or nxt == "_")
                and prev not in _ALNUM
                and prev not in ("_", ")", "]", "'", '"')
            ) or cur in _ALPHA or cur == "_":
                toks.append(self._name())
                continue
            if cur in _DIGITS:
                toks.append(self._number())
                continue
            if cur in _QUOTES:
                toks.append(self._const_str())
                continue
            toks.append(self._operator())
        return toks

    def _name(self) -> Lexeme:
        data = self._data
        start = self._i
        if data[self._i] == ".":
            self._i += 1
        while self._i < len(data) and (data[self._i] in _ALNUM or data[self._i] == "_"):
            self._i += 1
        if self._at(self._i) == "?":
            self._i += 1
        text = data[start : self._i]
        kind = classify_str(text)
        loc = self._loc(self._line, start - self._line_start)
        if kind is TokType.STR:
            return Lexeme(loc, Tok(kind), text[1:])
        if kind is TokType.IDEN:
            return Lexeme(loc, Tok(kind), text)
        return Lexeme(loc, Tok(kind))

    def _number(self) -> Lexeme:
        data = self._data
        first = self._i
        col = first - self._line_start
        buf: list[str] = []
        dot_seen = False
        is_float = False
        base = 10
        read_base = False
        while self._i < len(data):
            c = data[self._i]
            nxt = self._at(self._i + 1)
            ok = False
            if c in "xX":
                if read_base:
                    base = 16
                    read_base = False
                    ok = True
            elif c in "fFeEdDcCbBaA":
                ok = base >= 16
            elif c in "987":
                ok = base >= 8
            elif c in "65432":
                ok = base > 2
            elif c == "1":
                ok = True
            elif c == "0":
                if self._i == first:
                    read_base = True
                    base = 8
                ok = True
            elif c == ".":
                if not read_base and base != 10:
                    raise self._fail(
                        self._line,
                        col,
                        "encountered dot (.) character when base is not 10 (",
                        base,
                        ") ",
                    )
                if dot_seen:
                    raise self._fail(
                        self._line,
                        col,
                        "encountered dot (.) character when the number being "
                        "retrieved (from column ",
                        first + 1,
                        ") already had one",
                    )
                if nxt not in _DIGITS or not nxt:
                    break
                dot_seen = True
                is_float = True
                read_base = False
                base = 10
                ok = True
            if not ok:
                if c in _ALNUM:
                    raise self._fail(
                        self._line,
                        col,
                        "encountered invalid character '",
                        c,
                        "' while retrieving a number of base ",
                        base,
                    )
                break
            if buf or c != "0":
                read_base = False
            buf.append(c)
            self._i += 1
        num = "".join(buf)
        loc = self._loc(self._line, col)
        if is_float:
            return Lexeme(loc, Tok(TokType.FLT), flt_value=float(num))
        if len(num) > 2 and base != 10:
            num = num[1:] if base == 8 else num[2:]
        return Lexeme(loc, Tok(TokType.INT), int_value=_parse_int_prefix(num, base))

    def _const_str(self) -> Lexeme:
        data = self._data
        quote = data[self._i]
        start_line = self._line
        start_col = self._i - self._line_start
        buf: list[str] = []
        backslashes = 0
        self._i += 1
        while self._i < len(data):
            cur = data[self._i]
            if cur == "\n":
                self._line += 1
                self._line_start = self._i + 1
            if cur == "\\":
                backslashes += 1
                buf.append(cur)
                self._i += 1
                continue
            if cur == quote and backslashes % 2 == 0:
                break
            buf.append(cur)
            self._i += 1
            if quote == "'":
                found = self._at(self._i)
                if found != quote:
                    raise self._fail(
                        start_line,
                        start_col,
                        "expected single quote for end of const char, found: ",
                        found,
                    )
                break
            backslashes = 0
        if self._at(self._i) != quote:
            raise self._fail(start_line, start_col, "no matching quote for '", quote, "' found")
        self._i += 1
        kind = TokType.CHAR if quote == "'" else TokType.STR
        return Lexeme(self._loc(start_line, start_col), Tok(kind), remove_backslash("".join(buf)))

    def _operator(self) -> Lexeme:
        begin = self._i
        cur = self._data[begin]
        col = begin - self._line_start
        if cur == ".":
            op = TokType.DOT
            if self._at(self._i + 1) == ".":
                self._i += 1
                if self._at(self._i + 1) == ".":
                    self._i += 1
                    op = TokType.PRE_VA
        elif cur in _OPERATORS:
            op, followers = _OPERATORS[cur]
            follow = followers.get(self._at(self._i + 1))
            if follow is not None:
                self._i += 1
                op = follow
                if op in _SHIFT_ASSIGN and self._at(self._i + 1) == "=":
                    self._i += 1
                    op = _SHIFT_ASSIGN[op]
        else:
            raise self._fail(self._line, col, "unknown operator '", cur, "' found")
        self._i += 1
        return Lexeme(self._loc(self._line, col), Tok(op))