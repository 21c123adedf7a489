"""
C1 SDK Error Hierarchy
======================

This module defines the base of the exception hierarchy for the C1 SDK.
All exceptions inherit from C1Error, allowing callers to catch every
SDK-related error with a single except clause if desired.

Exception Hierarchy
-------------------
C1Error (base)
└── C1SyntaxError (see c1_sdk.c1.errors)
    ├── UnexpectedTokenError - no alternative of a rule matches
    ├── MissingTokenError - a required token is absent
    ├── EmptySourceError - the source holds no tokens at all
    ├── LexicalError - malformed lexeme reached the parser
    └── NestingTooDeepError - nesting exceeds the configured limit

Design Philosophy
-----------------
Each exception captures source location information (filename, line,
column) when applicable. The location is not part of the short message,
but the command-line tool uses it to render a diagnostic in this format:

    filename:line:column: error: description
        source_line_text
        ^ (pointer to error location)
"""

from dataclasses import dataclass


# =============================================================================
# Base Exception Class
# =============================================================================

class C1Error(Exception):
    """
    Base exception for all C1 SDK errors.

    All exceptions in the SDK inherit from this class, allowing callers
    to catch all SDK-related errors with a single except clause:

        try:
            parse(source)
        except C1Error as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"
