"""
C1 SDK Command-Line Interface
=============================

This package provides command-line tools for the C1 SDK:

- **c1check**: C1 syntax checker

Each tool is implemented as a Click-based CLI application with
comprehensive help and error reporting.
"""

__all__ = ["c1check"]
