"""
symscan Error Hierarchy
=======================

This module defines the root of the exception hierarchy for symscan.
All exceptions inherit from SymscanError, allowing callers to catch all
scanner-related errors with a single except clause if desired.

Exception Hierarchy
-------------------
SymscanError (base)
└── LanguageError (symscan.lang.errors)
    ├── LanguageSyntaxError - syntax errors in source
    │   ├── UnexpectedTokenError - token does not fit the grammar
    │   └── MissingTokenError - required token is absent
    └── ScanFailedError - aggregate report of several errors

Lexical errors are deliberately absent from the hierarchy: an invalid
character becomes an ERROR token and is reported as a notice, it never
stops a scan.

Error messages follow this format:
    filename:line:column: error: description
        source_line_text
        ^ (pointer to error location)
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass


# =============================================================================
# Base Exception Class
# =============================================================================

class SymscanError(Exception):
    """
    Base exception for all symscan errors.

    Example:

        try:
            inventory = scan_file("program.mc").inventory
        except SymscanError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code.

    Used by tokens, syntax tree nodes and errors alike. Control-block
    tags take their line number straight from here.

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
