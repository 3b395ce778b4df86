"""Scribe language tokenizer, diagnostics and C code generation helpers."""

__version__ = "0.1.0"
__all__ = [
    "args",
    "constants",
    "context",
    "errors",
    "lexer",
    "writer",
]