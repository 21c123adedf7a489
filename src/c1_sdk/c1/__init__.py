"""
C1 Syntax Recognizer
====================

This module implements a syntax checker for C1, a small C-like teaching
language with functions, typed declarations, if-statements, return,
printf, assignment and arithmetic/boolean expressions.

The recognizer accepts or rejects a source text. It reports the first
syntax error with its line and stops there: there is no error recovery,
no AST and no code generation.

- A lexer producing tokens on demand with one token of lookahead
- A recursive descent parser with one method per grammar rule
- Structured syntax errors with a stable message format

Pipeline
--------
    C1 Source → Lexer → Parser → accept / first error

Usage
-----
>>> from c1_sdk.c1 import check_source
>>> check_source('int f() { return 1 + 2 * x; }').success
True
>>> print(check_source('int f() { return 1 < 2 < 3; }').error)
Expected ';', unexpected token found: "<" at line 1

Language Summary
----------------
- Types: boolean, float, int, void (return types only)
- Statements: if, return, printf, assignment, function call, blocks
- Operators: + - || * / && and one relational operator per expression
- Comments: // and /* */
"""

from c1_sdk.c1.errors import (
    ErrorKind,
    C1SyntaxError,
    UnexpectedTokenError,
    MissingTokenError,
    EmptySourceError,
    LexicalError,
    NestingTooDeepError,
)
from c1_sdk.c1.lexer import C1Lexer, C1Token, Lexeme
from c1_sdk.c1.parser import C1Parser, parse, DEFAULT_MAX_DEPTH
from c1_sdk.c1.recognizer import (
    C1Recognizer,
    RecognizerOptions,
    RecognitionResult,
    check_source,
    check_file,
)

__all__ = [
    # Main API
    "C1Recognizer",
    "RecognizerOptions",
    "RecognitionResult",
    "check_source",
    "check_file",
    "parse",
    "DEFAULT_MAX_DEPTH",
    # Errors
    "ErrorKind",
    "C1SyntaxError",
    "UnexpectedTokenError",
    "MissingTokenError",
    "EmptySourceError",
    "LexicalError",
    "NestingTooDeepError",
    # Lexer
    "C1Lexer",
    "C1Token",
    "Lexeme",
    # Parser
    "C1Parser",
]
