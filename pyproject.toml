[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "scribec"
version = "0.1.0"
description = "Lexer, diagnostics and C code generation helpers for the Scribe programming language"
requires-python = ">=3.10"
dependencies = []
keywords = ["compiler", "lexer", "tokenizer", "code generation", "c", "scribe"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Compilers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["scribec"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
