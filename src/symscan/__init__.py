"""
symscan - Symbol Inventory Scanner for MiniC
============================================

symscan reads a program written in MiniC, a small C-like language, and
produces an inventory of its symbols: the global variables, and for each
function its signature, local variables, control blocks and whether it
calls itself.

Main Components
---------------
- **lang**: Lexer, parser and syntax tree for MiniC
- **analysis**: Symbol inventory extraction from the syntax tree
- **report**: Plain-text report rendering
- **scanner**: The Source → Lex → Parse → Analyze pipeline
- **cli**: The `symscan` command

Quick Start
-----------
Scan a source string:
    >>> from symscan import scan_source
    >>> result = scan_source('''
    ... int fact(int n) {
    ...     if (n <= 1) { return 1; }
    ...     return n * fact(n - 1);
    ... }
    ... ''')
    >>> result.inventory.find_function("fact").is_recursive
    True

Or use the command-line tool:
    $ symscan program.mc -o reports/

Reports
-------
- OutputGlobalVariables.txt: one line per global variable
- Functions.txt: one block per function
- Lexemes.txt: one line per token
"""

__version__ = "1.0.0"
__author__ = "symscan contributors"

# =============================================================================
# Public API Exports
# =============================================================================

from symscan.errors import SymscanError, SourceLocation
from symscan.lang.errors import (
    LanguageError,
    LanguageSyntaxError,
    ScanFailedError,
    LexicalError,
)
from symscan.analysis import (
    GlobalVariable,
    Variable,
    Function,
    ProgramInventory,
    RecursionStrategy,
    analyze_program,
)
from symscan.config import ScanOptions
from symscan.scanner import Scanner, ScanResult, scan_source, scan_file
from symscan.report import write_reports

__all__ = [
    "__version__",
    # Errors
    "SymscanError",
    "SourceLocation",
    "LanguageError",
    "LanguageSyntaxError",
    "ScanFailedError",
    "LexicalError",
    # Inventory
    "GlobalVariable",
    "Variable",
    "Function",
    "ProgramInventory",
    "RecursionStrategy",
    "analyze_program",
    # Scanning
    "ScanOptions",
    "Scanner",
    "ScanResult",
    "scan_source",
    "scan_file",
    "write_reports",
]
