import io
from types import SimpleNamespace

from scribec.errors import ErrorReporter, ModuleLoc

MOD = SimpleNamespace(path="f.sc", code="let x = 1;\nlet y = 2;\n\tz = 3;\n")


def test_loc_str_is_one_based():
    assert ModuleLoc(MOD, 0, 0).loc_str() == "1:1"


def test_report_with_location():
    out = io.StringIO()
    rep = ErrorReporter(stream=out)
    rep.report(ModuleLoc(MOD, 1, 2), "bad ", "thing")
    lines = out.getvalue().splitlines()
    assert lines[0] == "f.sc (2:3): Failure: bad thing"
    assert lines[1] == "let y = 2;"
    assert lines[2] == "  ^"
    assert rep.error_count == 1


def test_caret_uses_tabs_of_line():
    out = io.StringIO()
    ErrorReporter(stream=out).report(ModuleLoc(MOD, 2, 3), "x")
    caret = out.getvalue().splitlines()[2]
    assert caret.startswith("\t")
    assert caret.endswith("^")
    assert len(caret) == 3 + 1


def test_line_not_found():
    out = io.StringIO()
    ErrorReporter(stream=out).report(ModuleLoc(MOD, 40, 0), "x")
    assert out.getvalue().splitlines()[1] == "<not found>"


def test_report_without_location_and_warning():
    out = io.StringIO()
    rep = ErrorReporter(stream=out)
    rep.report(None, "careful", warning=True)
    rep.report(None, "broken")
    assert out.getvalue().splitlines() == ["Warning: careful", "Failure: broken"]
    assert rep.error_count == 1


def test_stops_after_max_errors():
    out = io.StringIO()
    rep = ErrorReporter(max_errors=2, stream=out)
    rep.report(None, "one")
    rep.report(None, "two")
    assert out.getvalue().endswith("Failure: Too many errors encountered\n")
    snapshot = out.getvalue()
    rep.report(None, "three")
    assert out.getvalue() == snapshot


def test_set_max_errors():
    out = io.StringIO()
    rep = ErrorReporter(stream=out)
    rep.set_max_errors(1)
    rep.report(None, "only")
    rep.report(None, "ignored")
    assert "ignored" not in out.getvalue()
    assert "Too many errors encountered" in out.getvalue()