"""
C1 Syntax Error Hierarchy
=========================

This module defines the structured syntax errors raised by the C1
recognizer. Every error carries its kind, the offending lexeme and its
source location as plain attributes, so callers can inspect fields
directly instead of parsing messages.

Message Format
--------------
``str(error)`` always renders the same stable shape:

    <description> found: "<lexeme>" at line <n>

Example:
    Expected ';', unexpected token found: "}" at line 3

The command-line tool adds the location prefix and a caret pointer via
``format_diagnostic``:

    prog.c1:3:1: error: Expected ';', unexpected token found: "}" at line 3
        }
        ^
"""

from enum import Enum, auto
from typing import Optional

from c1_sdk.errors import C1Error, SourceLocation


class ErrorKind(Enum):
    """Category of a syntax error."""

    UNEXPECTED_TOKEN = auto()   # no alternative of a rule matches
    MISSING_TOKEN = auto()      # expect(T) failed
    EMPTY_SOURCE = auto()       # nothing but whitespace and comments
    LEXICAL_ERROR = auto()      # malformed lexeme observed by the parser
    NESTING_TOO_DEEP = auto()   # resource guard tripped


# =============================================================================
# Syntax Errors
# =============================================================================

class C1SyntaxError(C1Error):
    """
    Syntax error in C1 source code.

    This is the single error kind of the recognizer: every mismatch is
    fatal to the current parse and surfaces through this class (or one of
    its subclasses).

    Attributes:
        kind: The ErrorKind classification
        description: Human-readable description of the mismatch
        lexeme: Text of the offending token
        location: Where in the source the offending token starts
    """

    kind = ErrorKind.UNEXPECTED_TOKEN

    def __init__(
        self,
        description: str,
        lexeme: str,
        location: SourceLocation,
        kind: Optional[ErrorKind] = None,
    ):
        self.description = description
        self.lexeme = lexeme
        self.location = location
        if kind is not None:
            self.kind = kind
        super().__init__(self._format_message())

    @property
    def line(self) -> int:
        """Line number of the offending token (1-indexed)."""
        return self.location.line

    @property
    def column(self) -> int:
        """Column number of the offending token (1-indexed)."""
        return self.location.column

    def _format_message(self) -> str:
        return f'{self.description} found: "{self.lexeme}" at line {self.line}'

    def format_diagnostic(self, source_line: Optional[str] = None) -> str:
        """
        Format the error with location prefix and source context.

        Example output:
            prog.c1:5:12: error: Invalid factor, unexpected token found: ")" at line 5
                    return (1 + );
                               ^

        Args:
            source_line: The text of the offending line, if available

        Returns:
            Multi-line diagnostic string
        """
        parts = [f"{self.location}: error: {self}"]

        if source_line is not None and self.column > 0:
            parts.append(f"    {source_line}")
            padding = " " * (4 + self.column - 1)
            parts.append(f"{padding}^")

        return "\n".join(parts)


class UnexpectedTokenError(C1SyntaxError):
    """
    Unexpected token during parsing.

    Raised when the leading token of a rule matches none of its
    alternatives, e.g. a bare identifier used as a statement.

    Example:
        int f() { a; }      // 'a' is neither assignment nor call
    """

    kind = ErrorKind.UNEXPECTED_TOKEN

    def __init__(self, rule: str, lexeme: str, location: SourceLocation):
        self.rule = rule
        super().__init__(
            f"Invalid {rule}, unexpected token",
            lexeme,
            location,
        )


class MissingTokenError(C1SyntaxError):
    """
    Required token is missing.

    Raised when a required token (like ';' or ')') is not found where
    the grammar demands it.
    """

    kind = ErrorKind.MISSING_TOKEN

    def __init__(self, expected: str, lexeme: str, location: SourceLocation):
        self.expected = expected
        super().__init__(
            f"Expected {expected}, unexpected token",
            lexeme,
            location,
        )


class EmptySourceError(C1SyntaxError):
    """Raised when the source contains no function definition at all."""

    kind = ErrorKind.EMPTY_SOURCE

    def __init__(self, location: SourceLocation):
        super().__init__(
            "File is empty, no function definition",
            "",
            location,
        )


class LexicalError(C1SyntaxError):
    """
    Malformed lexeme in source code.

    The lexer never raises: it yields an ERROR token for input it cannot
    classify (stray characters, lone '&' or '|', unterminated comments).
    This error is raised when the parser reaches that token.
    """

    kind = ErrorKind.LEXICAL_ERROR

    def __init__(self, lexeme: str, location: SourceLocation):
        super().__init__(
            "Invalid lexeme, unrecognized input",
            lexeme,
            location,
        )


class NestingTooDeepError(C1SyntaxError):
    """
    Source nesting exceeds the configured limit.

    Blocks and parenthesised expressions are parsed recursively; this
    error replaces Python's RecursionError for adversarially deep input.
    """

    kind = ErrorKind.NESTING_TOO_DEEP

    def __init__(self, limit: int, lexeme: str, location: SourceLocation):
        self.limit = limit
        super().__init__(
            f"Nesting deeper than {limit} levels",
            lexeme,
            location,
        )
