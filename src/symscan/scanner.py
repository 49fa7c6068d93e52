"""
symscan Scanner
===============

Orchestrates a complete scan of one MiniC source file:

    Source → Lex → Parse → Analyze → ScanResult

Usage
-----
Command line:
    $ symscan program.mc -o reports/

Programmatic:
    >>> from symscan import scan_source
    >>> result = scan_source('int x = 5; void main() { }')
    >>> result.inventory.global_variables[0].value
    '5'

Lexical errors never stop a scan. They are kept on the result as
LexicalError notices, logged as warnings, and the offending input is
left out of parsing. Syntax errors are collected by the parser and
raised together as one ScanFailedError.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union
import logging

from symscan.analysis import ProgramInventory, analyze_program
from symscan.config import ScanOptions
from symscan.lang.ast import ProgramNode
from symscan.lang.errors import LexicalError
from symscan.lang.lexer import Lexer, Token, TokenType, lexical_errors
from symscan.lang.parser import Parser

logger = logging.getLogger(__name__)


@dataclass
class ScanResult:
    """
    Result of a scan.

    Attributes:
        filename: Source filename
        tokens: Every token lexed, ERROR tokens included, ending with EOF
        lexical_errors: One notice per ERROR token, in source order
        ast: Parsed syntax tree
        inventory: Symbol inventory built from the tree
    """
    filename: str = ""
    tokens: list[Token] = field(default_factory=list)
    lexical_errors: list[LexicalError] = field(default_factory=list)
    ast: Optional[ProgramNode] = None
    inventory: ProgramInventory = field(default_factory=ProgramInventory)

    @property
    def token_count(self) -> int:
        """Number of tokens, EOF excluded."""
        return sum(1 for token in self.tokens if token.type != TokenType.EOF)

    @property
    def has_lexical_errors(self) -> bool:
        return bool(self.lexical_errors)


class Scanner:
    """
    MiniC symbol scanner.

    Example:
        scanner = Scanner()
        result = scanner.scan_file("program.mc")
        print(result.inventory.main_function)

    Attributes:
        options: Scan configuration options
    """

    def __init__(self, options: Optional[ScanOptions] = None):
        """
        Initialize the scanner.

        Args:
            options: Scan configuration (uses defaults if None)
        """
        self.options = options or ScanOptions()

    def scan_source(self, source: str, filename: str = "<input>") -> ScanResult:
        """
        Scan MiniC source code.

        Args:
            source: MiniC source code string
            filename: Source filename for error messages

        Returns:
            ScanResult holding tokens, lexical notices, tree and inventory

        Raises:
            ScanFailedError: If the source has syntax errors
        """
        result = ScanResult(filename=filename)

        # Stage 1: Lexical analysis
        result.tokens = self._lex(source, filename)
        result.lexical_errors = lexical_errors(result.tokens)
        for error in result.lexical_errors:
            logger.warning(f"{filename}: {error}")

        # Stage 2: Parsing
        result.ast = self._parse(result.tokens, filename, source.splitlines())

        # Stage 3: Analysis
        result.inventory = analyze_program(result.ast, self.options.recursion_strategy)

        logger.debug(
            f"Scanned {filename}: {result.token_count} tokens, "
            f"{len(result.lexical_errors)} lexical errors"
        )
        return result

    def scan_file(self, filepath: Union[str, Path]) -> ScanResult:
        """
        Scan a MiniC source file.

        Raises:
            FileNotFoundError: If source file not found
            ScanFailedError: If the source has syntax errors
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Source file not found: {filepath}")

        source = path.read_text(encoding="utf-8")
        return self.scan_source(source, str(filepath))

    def _lex(self, source: str, filename: str) -> list[Token]:
        lexer = Lexer(source, filename)
        return list(lexer.tokenize())

    def _parse(self, tokens: list[Token], filename: str, source_lines: list[str]) -> ProgramNode:
        parser = Parser(tokens, filename, source_lines)
        return parser.parse()


# =============================================================================
# Convenience Functions
# =============================================================================

def scan_source(
    source: str,
    filename: str = "<input>",
    options: Optional[ScanOptions] = None,
) -> ScanResult:
    """
    Scan MiniC source code.

    Convenience wrapper around Scanner.scan_source().
    """
    return Scanner(options).scan_source(source, filename)


def scan_file(filepath: Union[str, Path], options: Optional[ScanOptions] = None) -> ScanResult:
    """
    Scan a MiniC source file.

    Convenience wrapper around Scanner.scan_file().
    """
    return Scanner(options).scan_file(filepath)
