"""
c1check - C1 Syntax Checker Command-Line Interface
==================================================

This module implements the command-line interface for the C1 recognizer.
Each input file is checked independently; for a rejected file the first
syntax error is printed with its location and the offending source line.

Usage Examples
--------------
Check a file:
    $ c1check prog.c1

Check several files, printing only failures:
    $ c1check -q examples/*.c1

Dump the token stream:
    $ c1check --tokens prog.c1

Exit Codes
----------
0 - every file was accepted
1 - at least one file was rejected
2 - invalid arguments or unreadable file
3 - internal error
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from c1_sdk import __version__
from c1_sdk.c1 import C1Lexer, C1Recognizer, RecognizerOptions, RecognitionResult
from c1_sdk.cli.errors import ExitCode, handle_cli_exception

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


def format_failure(result: RecognitionResult, source: str) -> str:
    """
    Render a rejected result with location prefix and caret pointer.

    Args:
        result: The failed recognition result
        source: The checked source text

    Returns:
        Multi-line diagnostic string
    """
    lines = source.splitlines()
    line = result.error.line
    source_line = lines[line - 1] if 0 < line <= len(lines) else None
    return result.error.format_diagnostic(source_line)


def dump_tokens(source: str, filename: str) -> None:
    """Print one line per lexeme: position, category and text."""
    for lexeme in C1Lexer(source, filename).tokenize():
        click.echo(f"{lexeme.line}:{lexeme.column}\t{lexeme.token.name}\t{lexeme.text!r}")


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "files",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--max-depth",
    type=click.IntRange(min=1),
    default=None,
    help="Maximum nesting of blocks and assignments "
         "(default: C1_MAX_DEPTH or 128)",
)
@click.option(
    "--tokens",
    is_flag=True,
    help="Print the token stream and exit (for debugging)",
)
@click.option(
    "-q", "--quiet",
    is_flag=True,
    help="Print nothing for accepted files",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="c1check")
def main(
    files: tuple[Path, ...],
    max_depth: Optional[int],
    tokens: bool,
    quiet: bool,
    verbose: bool,
) -> None:
    """
    Check C1 source files for syntax errors.

    FILES are the C1 source files to check.

    The first syntax error of each file is reported with its line and
    column. There is no error recovery: checking stops at that error.

    \b
    Examples:
        c1check prog.c1              # Check one file
        c1check -q *.c1              # Report failures only
        c1check --tokens prog.c1     # Dump tokens
        c1check --max-depth 32 x.c1  # Tighter nesting limit
    """
    setup_logging(verbose)

    options = RecognizerOptions.from_env()
    if max_depth is not None:
        options.max_depth = max_depth

    recognizer = C1Recognizer(options)
    rejected = 0

    try:
        for path in files:
            logger.debug(f"Checking {path} (max depth {options.max_depth})")
            source = path.read_text(encoding="utf-8")

            if tokens:
                dump_tokens(source, str(path))
                continue

            result = recognizer.check_source(source, str(path))

            if result.success:
                if not quiet:
                    click.echo(f"{path}: OK")
                if verbose:
                    click.echo(f"{path}: {result.token_count} tokens")
            else:
                rejected += 1
                click.echo(format_failure(result, source), err=True)

    except Exception as e:
        handle_cli_exception(e, verbose)

    if rejected:
        if verbose:
            click.echo(f"{rejected} of {len(files)} files rejected", err=True)
        sys.exit(ExitCode.BUILD_ERROR)


if __name__ == "__main__":
    main()
