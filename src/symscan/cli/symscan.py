"""
symscan - Symbol Scanner Command-Line Interface
===============================================

Scans a MiniC source file and writes its symbol inventory reports.

Usage Examples
--------------
Basic scan (reports land in the current directory):
    $ symscan program.mc

Reports into a directory:
    $ symscan program.mc -o reports/

Print the reports instead of writing them:
    $ symscan --stdout program.mc

Detect recursion from call expressions:
    $ symscan --recursion calls program.mc

Verbose mode:
    $ symscan -v program.mc
"""

from pathlib import Path
from typing import Optional
import logging

import click

from symscan import __version__
from symscan.analysis import RecursionStrategy
from symscan.cli.errors import handle_cli_exception
from symscan.config import ScanOptions
from symscan.lang.ast import TreePrinter
from symscan.report import format_functions, format_global_variables, write_reports
from symscan.scanner import Scanner


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory for the reports (default: current directory)",
)
@click.option(
    "--globals-file",
    help="Filename of the global variable report",
)
@click.option(
    "--functions-file",
    help="Filename of the function report",
)
@click.option(
    "--lexemes-file",
    help="Filename of the lexeme report",
)
@click.option(
    "--no-lexemes",
    is_flag=True,
    help="Do not write the lexeme report",
)
@click.option(
    "--recursion",
    type=click.Choice([s.value for s in RecursionStrategy], case_sensitive=False),
    default=None,
    help="Recursion detection: 'lexical' counts name occurrences in the "
         "function text, 'calls' looks for self-calls. Default: lexical.",
)
@click.option(
    "--stdout",
    "to_stdout",
    is_flag=True,
    help="Print the global and function reports instead of writing files",
)
@click.option(
    "--tree",
    is_flag=True,
    help="Print the syntax tree and exit (for debugging)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="symscan")
def main(
    input_file: Path,
    output_dir: Optional[Path],
    globals_file: Optional[str],
    functions_file: Optional[str],
    lexemes_file: Optional[str],
    no_lexemes: bool,
    recursion: Optional[str],
    to_stdout: bool,
    tree: bool,
    verbose: bool,
) -> None:
    """
    Inventory the symbols of a MiniC source file.

    INPUT_FILE is the MiniC source file to scan.

    Three reports are written: the global variables, the functions
    (parameters, locals, control blocks, recursion) and the lexemes.
    Lexical errors are reported but do not stop the scan.

    \b
    Examples:
        symscan program.mc               # Reports in current directory
        symscan program.mc -o out/       # Reports in out/
        symscan --no-lexemes program.mc  # Skip Lexemes.txt
        symscan --tree program.mc        # Dump the syntax tree

    \b
    Environment:
        SYMSCAN_OUTPUT_DIR, SYMSCAN_RECURSION, SYMSCAN_WRITE_LEXEMES
        supply defaults that the options above override.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(name)s: %(message)s",
    )

    options = ScanOptions.from_env()
    if output_dir is not None:
        options.output_dir = output_dir
    if globals_file:
        options.globals_file = globals_file
    if functions_file:
        options.functions_file = functions_file
    if lexemes_file:
        options.lexemes_file = lexemes_file
    if no_lexemes:
        options.write_lexemes = False
    if recursion:
        options.recursion_strategy = RecursionStrategy(recursion.lower())

    try:
        if verbose:
            click.echo(f"Scanning {input_file}...")
            click.echo(f"Recursion detection: {options.recursion_strategy.value}")

        result = Scanner(options).scan_file(input_file)

        for error in result.lexical_errors:
            click.echo(str(error))

        # Tree dump mode
        if tree:
            click.echo(TreePrinter().print(result.ast))
            return

        inventory = result.inventory

        if to_stdout:
            click.echo(format_global_variables(inventory.global_variables), nl=False)
            click.echo(format_functions(inventory.functions), nl=False)
            return

        written = write_reports(inventory, result.tokens, options)

        if verbose:
            click.echo(f"Tokenized: {result.token_count} tokens")
            for path in written:
                click.echo(f"Wrote {path}")

        click.echo(
            f"Scanned {input_file}: {len(inventory.global_variables)} globals, "
            f"{len(inventory.functions)} functions -> {options.output_dir}"
        )

    except Exception as e:
        handle_cli_exception(e, verbose)


if __name__ == "__main__":
    main()
