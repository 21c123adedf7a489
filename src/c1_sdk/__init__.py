"""
C1 SDK - Syntax Tooling for the C1 Teaching Language
====================================================

This package provides a syntax recognizer for C1, a small C-like language
used in compiler construction courses. C1 programs are lists of function
definitions with if-statements, return, printf, assignment and
arithmetic/boolean expressions.

Main Components
---------------
- **c1**: Lexer, recursive descent parser and recognizer facade
    Accepts or rejects a source text, reporting the first syntax error

- **cli**: Command-line tools
    ``c1check`` checks C1 source files from the terminal

Quick Start
-----------
Check a source string:
    >>> from c1_sdk import check_source
    >>> result = check_source("void main() { printf(42); }")
    >>> result.success
    True

Use the parser directly (raises on the first error):
    >>> from c1_sdk import parse, C1SyntaxError
    >>> try:
    ...     parse("int f() { a = 1 }")
    ... except C1SyntaxError as e:
    ...     print(e.kind.name, e.lexeme, e.line)
    MISSING_TOKEN } 1

Or use the command-line tool:
    $ c1check prog.c1

Version History
---------------
1.0.0 - Initial release with lexer, recognizer and c1check
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from c1_sdk.errors import C1Error, SourceLocation
from c1_sdk.c1 import (
    C1Lexer,
    C1Token,
    Lexeme,
    C1Parser,
    parse,
    C1Recognizer,
    RecognizerOptions,
    RecognitionResult,
    check_source,
    check_file,
    ErrorKind,
    C1SyntaxError,
    UnexpectedTokenError,
    MissingTokenError,
    EmptySourceError,
    LexicalError,
    NestingTooDeepError,
)

__all__ = [
    # Version info
    "__version__",
    # Recognizer
    "C1Recognizer",
    "RecognizerOptions",
    "RecognitionResult",
    "check_source",
    "check_file",
    "parse",
    # Lexer and parser
    "C1Lexer",
    "C1Token",
    "Lexeme",
    "C1Parser",
    # Exception hierarchy
    "C1Error",
    "SourceLocation",
    "ErrorKind",
    "C1SyntaxError",
    "UnexpectedTokenError",
    "MissingTokenError",
    "EmptySourceError",
    "LexicalError",
    "NestingTooDeepError",
]
