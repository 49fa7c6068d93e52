"""
MiniC Language Error Hierarchy
==============================

Exceptions raised while turning MiniC source text into a syntax tree.
All of them inherit from LanguageError, which itself inherits from
SymscanError for consistent handling across the package.

Exception Hierarchy
-------------------
LanguageError (base for all MiniC errors)
├── LanguageSyntaxError - parser syntax errors
│   ├── UnexpectedTokenError - token does not fit the grammar
│   └── MissingTokenError - required token is absent
└── ScanFailedError - several errors reported together

Lexical problems are not exceptions. The lexer turns them into ERROR
tokens and the scanner reports them through LexicalError notices.

Error Message Format
--------------------
    program.mc:5:12: error: expected ';'
        int x = 5
                 ^
    hint: add ';' at the end of the declaration
"""

from dataclasses import dataclass
from typing import Optional, List

from symscan.errors import SymscanError, SourceLocation


# =============================================================================
# Base Language Exception
# =============================================================================

class LanguageError(SymscanError):
    """
    Base exception for all MiniC language errors.

    Attributes:
        message: The error description
        location: Where in the source the error occurred
        hint: A suggestion for fixing the error
        source_line: The actual source text at the error location
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

            program.mc:5:12: error: unexpected token '}'
                int x = }
                        ^
            hint: expected constant
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class ScanFailedError(LanguageError):
    """
    Aggregate error containing several errors.

    The message is an already formatted report from ErrorCollector and
    is passed through without another prefix.
    """

    def __init__(self, message: str, errors: Optional[List[LanguageError]] = None):
        self.errors = list(errors or [])
        super().__init__(message)

    def _format_message(self) -> str:
        """Return message as-is - it's already a formatted aggregate report."""
        return self.message


# =============================================================================
# Syntax Errors (Parser)
# =============================================================================

class LanguageSyntaxError(LanguageError):
    """
    Syntax error in MiniC source code.

    Raised when the parser meets a token sequence the grammar does not
    accept, e.g. a missing semicolon or a global without initializer.
    """
    pass


class UnexpectedTokenError(LanguageSyntaxError):
    """Token that does not fit the grammar rule being parsed."""

    def __init__(
        self,
        found: str,
        expected: Optional[str] = None,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.found = found
        self.expected = expected

        hint = f"expected {expected}" if expected else None

        super().__init__(
            f"unexpected token '{found}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class MissingTokenError(LanguageSyntaxError):
    """Required token (like ';' or ')') not found where expected."""

    def __init__(
        self,
        expected: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.expected = expected
        super().__init__(
            f"expected {expected}",
            location=location,
            source_line=source_line,
        )


# =============================================================================
# Lexical Error Notices
# =============================================================================

@dataclass(frozen=True)
class LexicalError:
    """
    A lexical error notice.

    Not an exception: the offending text is kept as an ERROR token and
    scanning carries on. The notice only records what to tell the user.

    Attributes:
        text: The offending source text
        location: Where the text starts
    """
    text: str
    location: SourceLocation

    @property
    def line(self) -> int:
        return self.location.line

    def __str__(self) -> str:
        return f"Lexical error detected: {self.text} at line {self.line}"


# =============================================================================
# Error Collection (for multi-error reporting)
# =============================================================================

class ErrorCollector:
    """
    Collects multiple errors for batch reporting.

    The parser uses this to continue after a syntax error, so that a
    single run reports every problem it can find.

    Example:
        collector = ErrorCollector(max_errors=100)

        for decl in declarations:
            try:
                parse(decl)
            except LanguageError as e:
                collector.add(e)
                if collector.should_stop():
                    break

        collector.raise_if_errors()
    """

    def __init__(self, max_errors: int = 100):
        self.errors: List[LanguageError] = []
        self.max_errors = max_errors

    def add(self, error: LanguageError) -> None:
        """Add an error to the collection."""
        self.errors.append(error)

    def has_errors(self) -> bool:
        """Return True if any errors have been collected."""
        return len(self.errors) > 0

    def should_stop(self) -> bool:
        """Return True if max_errors has been reached."""
        return len(self.errors) >= self.max_errors

    def report(self) -> str:
        """Format all errors for display."""
        lines = []

        for error in self.errors:
            lines.append(str(error))
            lines.append("")

        error_word = "error" if len(self.errors) == 1 else "errors"
        lines.append(f"{len(self.errors)} {error_word}")

        return "\n".join(lines)

    def raise_if_errors(self) -> None:
        """Raise a ScanFailedError if any errors were collected."""
        if self.has_errors():
            raise ScanFailedError(self.report(), self.errors)
