"""
symscan Configuration
=====================

Scan options: where reports go, what they are called, and how recursion
is detected. Configuration can come from:
- Default values (defined here)
- Environment variables (ScanOptions.from_env)
- Command-line flags, which override both

Environment variables (all optional):
    SYMSCAN_OUTPUT_DIR: Directory the reports are written to
    SYMSCAN_RECURSION: Recursion strategy, "lexical" or "calls"
    SYMSCAN_WRITE_LEXEMES: "0"/"false"/"no" to skip the lexeme report
"""

from dataclasses import dataclass, field
from pathlib import Path
import logging
import os

from symscan.analysis.functions import RecursionStrategy

logger = logging.getLogger(__name__)


DEFAULT_GLOBALS_FILE = "OutputGlobalVariables.txt"
DEFAULT_FUNCTIONS_FILE = "Functions.txt"
DEFAULT_LEXEMES_FILE = "Lexemes.txt"

_FALSE_VALUES = ("0", "false", "no", "off")


@dataclass
class ScanOptions:
    """
    Scan configuration options.

    Attributes:
        output_dir: Directory the three reports are written to
        globals_file: Filename of the global variable report
        functions_file: Filename of the function report
        lexemes_file: Filename of the lexeme report
        write_lexemes: Whether the lexeme report is written at all
        recursion_strategy: How self-recursion is detected
    """
    output_dir: Path = field(default_factory=Path.cwd)
    globals_file: str = DEFAULT_GLOBALS_FILE
    functions_file: str = DEFAULT_FUNCTIONS_FILE
    lexemes_file: str = DEFAULT_LEXEMES_FILE
    write_lexemes: bool = True
    recursion_strategy: RecursionStrategy = RecursionStrategy.LEXICAL

    @classmethod
    def from_env(cls) -> "ScanOptions":
        """
        Create ScanOptions from environment variables.

        Invalid values are logged and ignored.
        """
        options = cls()

        if output_dir := os.environ.get("SYMSCAN_OUTPUT_DIR"):
            options.output_dir = Path(output_dir)

        if recursion := os.environ.get("SYMSCAN_RECURSION"):
            try:
                options.recursion_strategy = RecursionStrategy(recursion.lower())
            except ValueError:
                logger.warning(f"Ignoring invalid SYMSCAN_RECURSION value {recursion!r}")

        if write_lexemes := os.environ.get("SYMSCAN_WRITE_LEXEMES"):
            options.write_lexemes = write_lexemes.lower() not in _FALSE_VALUES

        return options

    @property
    def globals_path(self) -> Path:
        return self.output_dir / self.globals_file

    @property
    def functions_path(self) -> Path:
        return self.output_dir / self.functions_file

    @property
    def lexemes_path(self) -> Path:
        return self.output_dir / self.lexemes_file

    def ensure_output_dir(self) -> Path:
        """Create the output directory if needed and return it."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        return self.output_dir
