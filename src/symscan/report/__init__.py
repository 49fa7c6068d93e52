"""
Report rendering for symbol inventories.
"""

from symscan.report.writer import (
    NONE_MARKER,
    format_global_variables,
    format_function,
    format_functions,
    format_lexeme,
    format_lexemes,
    write_global_variables,
    write_functions,
    write_lexemes,
    write_reports,
)

__all__ = [
    "NONE_MARKER",
    "format_global_variables",
    "format_function",
    "format_functions",
    "format_lexeme",
    "format_lexemes",
    "write_global_variables",
    "write_functions",
    "write_lexemes",
    "write_reports",
]
