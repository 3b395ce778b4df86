from scribec.context import Context
from scribec.errors import ErrorReporter, ModuleLoc


def test_module_loc_fields():
    ctx = Context()
    mod = object()
    loc = ctx.module_loc(mod, 4, 7)
    assert loc == ModuleLoc(mod, 4, 7)
    assert loc.module is mod


def test_default_reporter_created():
    assert isinstance(Context().reporter, ErrorReporter)
    rep = ErrorReporter(max_errors=3)
    assert Context(rep).reporter is rep


def test_pass_registry():
    ctx = Context()
    first, second = object(), object()
    ctx.add_pass(1, first)
    ctx.add_pass(2, second)
    assert ctx.get_pass(1) is first
    ctx.remove_pass(1)
    assert ctx.get_pass(1) is None
    assert ctx.get_pass(2) is second


def test_remove_missing_pass_keeps_others():
    ctx = Context()
    p = object()
    ctx.add_pass("a", p)
    ctx.remove_pass("zzz")
    assert ctx.get_pass("a") is p
    assert ctx.get_pass("zzz") is None