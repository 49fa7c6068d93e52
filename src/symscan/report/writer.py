"""
Inventory Report Writer
=======================

Renders a symbol inventory (and the token stream it came from) as the
three plain-text reports symscan produces.

Global variables (one line each):
    Variable: x Value: 5 Type: int

Functions (one block each, followed by a blank line):
    Name: fact
    Type: Regular, Recursive
    Return Type: int
    Parameters: int n
    Local Variables:
    	int result = null
    Control Structures:
    	<if...else, 4>

Lexemes (one line per token, EOF excluded):
    <INT, 'int', 1>

The format_* functions are pure; write_* functions only add file I/O.
"""

from pathlib import Path
from typing import Iterable
import logging

from symscan.analysis.model import Function, GlobalVariable, ProgramInventory
from symscan.config import ScanOptions
from symscan.lang.lexer import Token, TokenType

logger = logging.getLogger(__name__)


NONE_MARKER = "None"


# =============================================================================
# Formatting
# =============================================================================

def format_global_variables(variables: Iterable[GlobalVariable]) -> str:
    """Render the global variable report."""
    return "".join(
        f"Variable: {v.name} Value: {v.value} Type: {v.type}\n"
        for v in variables
    )


def format_function(function: Function) -> str:
    """Render one function block, trailing blank line included."""
    kind = "Main" if function.is_main else "Regular"
    recursion = "Recursive" if function.is_recursive else "Non-recursive"
    parameters = ", ".join(function.parameters) if function.parameters else NONE_MARKER
    return_type = function.return_type if function.return_type is not None else ""

    lines = [
        f"Name: {function.name}",
        f"Type: {kind}, {recursion}",
        f"Return Type: {return_type}",
        f"Parameters: {parameters}",
        "Local Variables:",
    ]

    if function.local_variables:
        lines.extend(f"\t{v.type} {v.name} = {v.value}" for v in function.local_variables)
    else:
        lines.append(f"\t{NONE_MARKER}")

    lines.append("Control Structures:")
    if function.control_blocks:
        lines.extend(f"\t{tag}" for tag in function.control_blocks)
    else:
        lines.append(f"\t{NONE_MARKER}")

    lines.append("")
    return "\n".join(lines) + "\n"


def format_functions(functions: Iterable[Function]) -> str:
    """Render the function report."""
    return "".join(format_function(function) for function in functions)


def format_lexeme(token: Token) -> str:
    """Render one token as ``<SYMBOL, 'text', line>``."""
    return f"<{token.type.name}, '{token.text}', {token.line}>"


def format_lexemes(tokens: Iterable[Token]) -> str:
    """Render the lexeme report; the EOF token is left out."""
    return "".join(
        f"{format_lexeme(token)}\n"
        for token in tokens
        if token.type != TokenType.EOF
    )


# =============================================================================
# Writing
# =============================================================================

def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    logger.debug(f"Wrote {len(text)} characters to {path}")
    return path


def write_global_variables(path: Path, variables: Iterable[GlobalVariable]) -> Path:
    return _write(Path(path), format_global_variables(variables))


def write_functions(path: Path, functions: Iterable[Function]) -> Path:
    return _write(Path(path), format_functions(functions))


def write_lexemes(path: Path, tokens: Iterable[Token]) -> Path:
    return _write(Path(path), format_lexemes(tokens))


def write_reports(
    inventory: ProgramInventory,
    tokens: Iterable[Token],
    options: ScanOptions,
) -> list[Path]:
    """
    Write every enabled report into options.output_dir.

    Returns:
        Paths written, in the order lexemes, globals, functions
    """
    options.ensure_output_dir()
    written = []

    if options.write_lexemes:
        written.append(write_lexemes(options.lexemes_path, tokens))

    written.append(write_global_variables(options.globals_path, inventory.global_variables))
    written.append(write_functions(options.functions_path, inventory.functions))

    logger.info(f"Wrote {len(written)} reports to {options.output_dir}")
    return written
