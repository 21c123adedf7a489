"""
C1 Recognizer Main Module
=========================

This module provides the high-level interface of the C1 syntax checker.
It wraps the lexer and parser into a single call that never raises for
syntax errors, returning a RecognitionResult instead:

    Source → Lexer → Parser → accept / first error

Usage
-----
Command line:
    $ c1check prog.c1

Programmatic:
    >>> from c1_sdk.c1 import check_source
    >>> result = check_source('void main() { }')
    >>> result.success
    True
    >>> check_source('void main() {').error.kind
    <ErrorKind.UNEXPECTED_TOKEN: 1>

Configuration
-------------
RecognizerOptions holds the tunables. They can come from:
- Default values (defined here)
- Environment variables (RecognizerOptions.from_env)
- Command-line flags (c1check)
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional
import logging
import os

from c1_sdk.c1.lexer import C1Lexer, C1Token
from c1_sdk.c1.parser import C1Parser, DEFAULT_MAX_DEPTH
from c1_sdk.c1.errors import C1SyntaxError

logger = logging.getLogger(__name__)


@dataclass
class RecognizerOptions:
    """
    Recognizer configuration options.

    Attributes:
        max_depth: Maximum nesting of blocks and assignments before
                   the parse is rejected
        filename: Name reported in error locations for string input
    """
    max_depth: int = DEFAULT_MAX_DEPTH
    filename: str = "<input>"

    @classmethod
    def from_env(cls) -> "RecognizerOptions":
        """
        Create RecognizerOptions from environment variables.

        Environment variables (all optional):
            C1_MAX_DEPTH: Nesting limit (positive integer)

        Returns:
            RecognizerOptions with values from environment variables
        """
        options = cls()

        if max_depth := os.environ.get("C1_MAX_DEPTH"):
            try:
                value = int(max_depth)
            except ValueError:
                logger.warning(f"Ignoring invalid C1_MAX_DEPTH={max_depth!r}")
            else:
                if value > 0:
                    options.max_depth = value
                else:
                    logger.warning(f"Ignoring non-positive C1_MAX_DEPTH={value}")

        return options


@dataclass
class RecognitionResult:
    """
    Outcome of checking one source text.

    Attributes:
        filename: Source filename
        success: True if the source is a valid C1 program
        error: The first syntax error, when success is False
        token_count: Tokens consumed before the parse ended
    """
    filename: str = "<input>"
    success: bool = False
    error: Optional[C1SyntaxError] = None
    token_count: int = 0

    def __bool__(self) -> bool:
        return self.success

    def message(self) -> str:
        """Short human-readable outcome."""
        if self.success:
            return "OK"
        return str(self.error)


class C1Recognizer:
    """
    Syntax checker for C1 source code.

    Each check builds a fresh lexer and parser; the recognizer itself only
    carries configuration and can be reused for many sources.

    Example:
        recognizer = C1Recognizer()
        result = recognizer.check_file("prog.c1")
        if not result:
            print(result.error)

    Attributes:
        options: Recognizer configuration options
    """

    def __init__(self, options: Optional[RecognizerOptions] = None):
        self.options = options or RecognizerOptions()

    def check_source(self, source: str, filename: Optional[str] = None) -> RecognitionResult:
        """
        Check C1 source code.

        Args:
            source: C1 source code string
            filename: Source filename for error messages

        Returns:
            RecognitionResult with the outcome
        """
        filename = filename or self.options.filename
        result = RecognitionResult(filename=filename)

        lexer = _CountingLexer(source, filename)
        parser = C1Parser(lexer, max_depth=self.options.max_depth)

        try:
            parser.parse_program()
        except C1SyntaxError as e:
            result.error = e
            logger.debug(f"{filename}: rejected: {e}")
        else:
            result.success = True
            logger.debug(f"{filename}: accepted")

        result.token_count = lexer.eaten
        return result

    def check_file(self, filepath: str | Path) -> RecognitionResult:
        """
        Check a C1 source file.

        Args:
            filepath: Path to the C1 source file

        Returns:
            RecognitionResult with the outcome

        Raises:
            FileNotFoundError: If source file not found
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Source file not found: {filepath}")

        source = path.read_text(encoding="utf-8")
        return self.check_source(source, str(path))


class _CountingLexer(C1Lexer):
    """C1Lexer that counts consumed tokens for RecognitionResult."""

    def __init__(self, source: str, filename: str = "<input>"):
        self.eaten = 0
        super().__init__(source, filename)

    def eat(self) -> None:
        if self.current_token() is not C1Token.EOF:
            self.eaten += 1
        super().eat()


# =============================================================================
# Convenience Functions
# =============================================================================

def check_source(
    source: str,
    filename: Optional[str] = None,
    options: Optional[RecognizerOptions] = None,
) -> RecognitionResult:
    """
    Check C1 source code.

    Args:
        source: C1 source code
        filename: Source filename for error messages (options.filename
                  if None)
        options: Recognizer options (defaults if None)

    Returns:
        RecognitionResult with the outcome
    """
    return C1Recognizer(options).check_source(source, filename)


def check_file(
    filepath: str | Path,
    options: Optional[RecognizerOptions] = None,
) -> RecognitionResult:
    """
    Check a C1 source file.

    Args:
        filepath: Path to the C1 source file
        options: Recognizer options (defaults if None)

    Returns:
        RecognitionResult with the outcome
    """
    return C1Recognizer(options).check_file(filepath)
