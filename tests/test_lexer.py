import io
from dataclasses import dataclass

import pytest

from scribec.context import Context
from scribec.errors import ErrorReporter, ModuleLoc
from scribec.lexer import (
    LexError,
    Lexeme,
    Tok,
    Tokenizer,
    TokType,
    classify_str,
    remove_backslash,
    view_backslash,
)


@dataclass
class FakeModule:
    path: str
    code: str


def lex(code):
    stream = io.StringIO()
    ctx = Context(ErrorReporter(stream=stream))
    mod = FakeModule("test.sc", code)
    return Tokenizer(ctx, mod).tokenize(code), stream


def kinds(toks):
    return [t.kind for t in toks]


def test_simple_statement():
    toks, _ = lex("let x = 5;")
    assert kinds(toks) == [TokType.LET, TokType.IDEN, TokType.ASSN, TokType.INT, TokType.COLS]
    assert toks[1].text == "x"
    assert toks[3].int_value == 5
    assert [t.loc.col for t in toks] == [0, 4, 6, 8, 9]


def test_line_tracking():
    toks, _ = lex("a\nbb c")
    assert [(t.loc.line, t.text) for t in toks] == [(0, "a"), (1, "bb"), (1, "c")]
    assert toks[2].loc.col == 3


def test_number_bases():
    toks, _ = lex("0x1F 0755 12 0 1.5")
    assert [t.int_value for t in toks[:4]] == [0x1F, 0o755, 12, 0]
    assert toks[4].kind is TokType.FLT
    assert toks[4].flt_value == 1.5


def test_number_followed_by_member_dot():
    toks, _ = lex("1.x")
    assert kinds(toks) == [TokType.INT, TokType.DOT, TokType.IDEN]


@pytest.mark.parametrize(
    "code, fragment",
    [
        ("0x1.5", "base is not 10"),
        ("12a", "invalid character 'a'"),
        ("1.2.3", "already had one"),
    ],
)
def test_number_errors(code, fragment):
    with pytest.raises(LexError) as info:
        lex(code)
    assert fragment in str(info.value)


def test_operators():
    toks, _ = lex("<<= >>= << >> <= >= -> && || ++ -- += == != ...")
    assert kinds(toks) == [
        TokType.LSHIFT_ASSN,
        TokType.RSHIFT_ASSN,
        TokType.LSHIFT,
        TokType.RSHIFT,
        TokType.LE,
        TokType.GE,
        TokType.ARROW,
        TokType.LAND,
        TokType.LOR,
        TokType.XINC,
        TokType.XDEC,
        TokType.ADD_ASSN,
        TokType.EQ,
        TokType.NE,
        TokType.PRE_VA,
    ]


def test_double_dot_is_single_dot_token():
    toks, _ = lex("..")
    assert kinds(toks) == [TokType.DOT]


def test_member_access_not_atom():
    toks, _ = lex("x.y")
    assert kinds(toks) == [TokType.IDEN, TokType.DOT, TokType.IDEN]


def test_atom_and_question_name():
    toks, _ = lex("(.foo ok?)")
    assert kinds(toks) == [TokType.LPAREN, TokType.STR, TokType.IDEN, TokType.RPAREN]
    assert toks[1].text == "foo"
    assert toks[2].text == "ok?"


def test_comments_skipped():
    toks, _ = lex("a // b c\n/* d /* e */ f */ g")
    assert [t.text for t in toks] == ["a", "g"]


def test_stray_comment_terminator():
    with pytest.raises(LexError) as info:
        lex("a */")
    _, stream = None, None
    assert "'*/'" in str(info.value)
    assert info.value.loc.col == 2


def test_error_is_reported_to_stream():
    stream = io.StringIO()
    ctx = Context(ErrorReporter(stream=stream))
    code = "x $"
    with pytest.raises(LexError):
        Tokenizer(ctx, FakeModule("m.sc", code)).tokenize(code)
    out = stream.getvalue()
    assert "unknown operator '$' found" in out
    assert "m.sc" in out


def test_strings_and_chars():
    toks, _ = lex(r'"a\tb" ' + r"'\n' 'q' `raw`")
    assert kinds(toks) == [TokType.STR, TokType.CHAR, TokType.CHAR, TokType.STR]
    assert [t.text for t in toks] == ["a\tb", "\n", "q", "raw"]


def test_escaped_quote_inside_string():
    toks, _ = lex(r'"say \"hi\""')
    assert toks[0].text == 'say "hi"'


def test_unterminated_string():
    with pytest.raises(LexError) as info:
        lex('"abc')
    assert "no matching quote" in str(info.value)


def test_bad_char_literal():
    with pytest.raises(LexError) as info:
        lex("'ab'")
    assert "expected single quote" in str(info.value)


def test_keywords_classified():
    assert classify_str("let") is TokType.LET
    assert classify_str("comptime") is TokType.COMPTIME
    assert classify_str("enum") is TokType.ENUM
    assert classify_str(".atom") is TokType.STR
    assert classify_str("name") is TokType.IDEN


def test_backslash_round_trip():
    raw = "\0\a\b\f\n\r\t\v plain"
    assert remove_backslash(view_backslash(raw)) == raw
    assert view_backslash("a\nb") == "a\\nb"


def test_remove_backslash_edge_cases():
    assert remove_backslash("\\\\") == "\\"
    assert remove_backslash("end\\") == "end\\"
    assert remove_backslash('\\"') == '"'


def test_tok_helpers():
    assert Tok(TokType.ADD).operator_name() == "__add__"
    assert Tok(TokType.SUBS).operator_name() == "__subscr__"
    assert Tok(TokType.COMMA).operator_name() == ""
    assert Tok(TokType.XINC).unary_symbol() == "++"
    assert Tok(TokType.UMUL).unary_symbol() == "*"
    assert Tok(TokType.ADD).unary_symbol() == ""
    assert Tok(TokType.IDEN).is_data()
    assert not Tok(TokType.LET).is_data()


def test_lexeme_str():
    loc = ModuleLoc(None, 0, 0)
    assert Lexeme(loc, Tok(TokType.IDEN), "x").str(0) == "IDEN [1:1] x"
    assert Lexeme(loc, Tok(TokType.COMMA)).str(0) == ", [1:1]"
    flt = Lexeme(loc, Tok(TokType.FLT), flt_value=1.5).str(0)
    assert flt.endswith("1.500000")


def test_lexeme_str_padding_aligns_columns():
    loc = ModuleLoc(None, 2, 3)
    text = Lexeme(loc, Tok(TokType.INT), int_value=42).str(10)
    assert text.startswith("INT" + " " * 7 + "[3:4]")
    assert text.endswith("42")
    assert text.index("42") == 20


def test_lexeme_data_equals():
    loc = ModuleLoc(None, 0, 0)
    a = Lexeme(loc, Tok(TokType.INT), int_value=3)
    b = Lexeme(loc, Tok(TokType.INT), int_value=3)
    c = Lexeme(loc, Tok(TokType.INT), int_value=4)
    assert a.data_equals(b, TokType.INT)
    assert not a.data_equals(c, TokType.INT)
    assert not a.data_equals(b, TokType.COMMA)