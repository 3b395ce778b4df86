# scribec

Building blocks for a compiler of the Scribe language: a command line option
parser, a tokenizer for Scribe source text, diagnostic reporting with source
locations, an indented text writer, and a pool of named constants for
generated C code.

## Installing

    pip install .

For running the tests:

    pip install .[test]
    pytest

## Modules

### `scribec.args`

`ArgParser(argv)` parses command lines made of `--long` and `-short` options
and positional arguments. The program name in `argv[0]` is kept as positional
argument 0. A `help` option (`-h`, `--help`) is always defined.

- `add(name, short="", help="", value_required=False, required=False)` defines
  an option and returns its `ArgInfo`.
- `parse()` reads `argv`. It raises `ArgumentError` when an option that needs a
  value is last on the line, or when a required option is missing.
- `has(name)`, `value(name)` (empty string when no value) and `get(index)`
  (empty string when there is no such positional argument) query the result.
- `help_text(version)` returns a usage line and one line per option.

### `scribec.lexer`

`Tokenizer(ctx, module).tokenize(text)` returns a list of `Lexeme` values. It
skips whitespace, `//` line comments and nested `/* ... */` block comments, and
recognises keywords, identifiers, atoms (`.name`), integers in decimal, octal
(`0755`) and hexadecimal (`0x1f`), floats, character literals, string literals
in `"`, `` ` `` quotes, and operators. Malformed input raises `LexError`, which
carries the `ModuleLoc` of the problem; the failure is also printed through the
context's `ErrorReporter`, which reads `module.path` and `module.code`.

Each `Lexeme` has a `loc`, a `tok` (a `Tok` wrapping a `TokType`), and its data
in `text`, `int_value` or `flt_value`. `Lexeme.str(pad)` gives a readable,
column-aligned form. `Tok.unary_symbol()` and `Tok.operator_name()` give the
symbol of a unary operator and the name of the function that overloads an
operator (for example `__add__`).

Helper functions: `classify_str(text)`, `remove_backslash(text)` (resolves
escape sequences) and `view_backslash(text)` (shows control characters as
escapes).

    from types import SimpleNamespace
    from scribec.context import Context
    from scribec.lexer import Tokenizer

    src = "let x = 0x1f;"
    module = SimpleNamespace(path="main.sc", code=src)
    for lexeme in Tokenizer(Context(), module).tokenize(src):
        print(lexeme.str())

### `scribec.errors` and `scribec.context`

`ModuleLoc(module, line, col)` is a zero-based position; `loc_str()` gives the
one-based `line:col`. `ErrorReporter(max_errors=10, stream=None)` prints
failures and warnings; with a location it prints the file path, the source
line and a caret under the column. After `max_errors` failures it prints a
final notice and stays silent.

`Context(reporter=None)` holds the reporter and a registry of passes
(`add_pass`, `remove_pass`, `get_pass`), and makes locations with
`module_loc`.

### `scribec.writer`

`Writer(indent=0)` accumulates text: `write(*args)` (floats with six decimal
places), `new_line()` (newline plus tabs for the indentation),
`add_indent`/`remove_indent`, `write_before`, `insert_after`, `append`,
`write_repeated`, `write_const_char`, `clear`, `data()` and the `empty`
property. `child()` gives an empty writer at the same indentation.

### `scribec.constants`

`ConstantPool(stringref_type="")` gives one named C constant (`const_0`,
`const_1`, ...) per distinct literal. `var_for(lexeme, bits=None, signed=True)`
returns the constant's name; integer and float literals need `bits`, string
literals need `stringref_type`, the C type of a string reference.
`declarations()` lists the C declarations in creation order.
`to_raw_string(text)` escapes text for a C literal.

## What this package does not do

There is no command to run: the package is a library only. It does not parse
tokens into a syntax tree, check types, read source files or imports from
disk, render C types, or write and compile a C translation unit with a system
C compiler. Those steps have to be provided by the caller.