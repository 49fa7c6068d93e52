# =============================================================================
# test_report.py - Report Writer Tests
# =============================================================================
# Tests for the three plain-text reports: global variables, functions and
# lexemes.
# =============================================================================

from pathlib import Path

import pytest
from symscan.analysis import Function, GlobalVariable, ProgramInventory, Variable
from symscan.config import ScanOptions
from symscan.lang import tokenize
from symscan.report import (
    format_function,
    format_functions,
    format_global_variables,
    format_lexemes,
    write_reports,
)


@pytest.fixture
def inventory():
    return ProgramInventory(
        global_variables=(
            GlobalVariable("int", "x", "5"),
            GlobalVariable("string", "name", '"bob"'),
        ),
        functions=(
            Function(
                name="fact",
                is_recursive=True,
                return_type="int",
                parameters=("int n",),
                local_variables=(Variable("int", "result"),),
                control_blocks=("<if, 3>",),
            ),
            Function(name="main", is_main=True, return_type="void"),
        ),
    )


# =============================================================================
# Formatting Tests
# =============================================================================

class TestGlobalVariableReport:
    """Test the global variable report lines."""

    def test_lines(self, inventory):
        text = format_global_variables(inventory.global_variables)
        assert text == (
            "Variable: x Value: 5 Type: int\n"
            'Variable: name Value: "bob" Type: string\n'
        )

    def test_empty(self):
        assert format_global_variables(()) == ""


class TestFunctionReport:
    """Test the per-function blocks."""

    def test_regular_recursive_function(self, inventory):
        assert format_function(inventory.functions[0]) == (
            "Name: fact\n"
            "Type: Regular, Recursive\n"
            "Return Type: int\n"
            "Parameters: int n\n"
            "Local Variables:\n"
            "\tint result = null\n"
            "Control Structures:\n"
            "\t<if, 3>\n"
            "\n"
        )

    def test_main_with_nothing_declared(self, inventory):
        assert format_function(inventory.functions[1]) == (
            "Name: main\n"
            "Type: Main, Non-recursive\n"
            "Return Type: void\n"
            "Parameters: None\n"
            "Local Variables:\n"
            "\tNone\n"
            "Control Structures:\n"
            "\tNone\n"
            "\n"
        )

    def test_missing_return_type_prints_empty(self):
        """A main without a return type prints an empty Return Type line."""
        function = Function(name="main", is_main=True, return_type=None)
        lines = format_function(function).split("\n")
        assert lines[2] == "Return Type: "

    def test_parameters_joined(self):
        function = Function(name="f", return_type="int", parameters=("int a", "float b"))
        assert "Parameters: int a, float b\n" in format_function(function)

    def test_functions_in_order(self, inventory):
        text = format_functions(inventory.functions)
        assert text.index("Name: fact") < text.index("Name: main")
        assert text.endswith("\tNone\n\n")


class TestLexemeReport:
    """Test the lexeme report lines."""

    def test_lines(self):
        text = format_lexemes(tokenize("int x;\nx = 'a';"))
        assert text.splitlines() == [
            "<INT, 'int', 1>",
            "<ID, 'x', 1>",
            "<SEMICOLON, ';', 1>",
            "<ID, 'x', 2>",
            "<ASSIGN, '=', 2>",
            "<CHAR_CONST, ''a'', 2>",
            "<SEMICOLON, ';', 2>",
        ]

    def test_error_tokens_listed(self):
        assert format_lexemes(tokenize("@")) == "<ERROR, '@', 1>\n"

    def test_eof_excluded(self):
        assert format_lexemes(tokenize("")) == ""


# =============================================================================
# Writing Tests
# =============================================================================

class TestWriteReports:
    """Test writing the reports to disk."""

    def test_writes_all_reports(self, inventory, tmp_path):
        options = ScanOptions(output_dir=tmp_path)
        written = write_reports(inventory, tokenize("int x = 5;"), options)

        assert written == [
            tmp_path / "Lexemes.txt",
            tmp_path / "OutputGlobalVariables.txt",
            tmp_path / "Functions.txt",
        ]
        assert (tmp_path / "OutputGlobalVariables.txt").read_text().startswith("Variable: x Value: 5")
        assert (tmp_path / "Functions.txt").read_text().startswith("Name: fact\n")
        assert (tmp_path / "Lexemes.txt").read_text().startswith("<INT, 'int', 1>\n")

    def test_skip_lexemes(self, inventory, tmp_path):
        options = ScanOptions(output_dir=tmp_path, write_lexemes=False)
        written = write_reports(inventory, [], options)

        assert len(written) == 2
        assert not (tmp_path / "Lexemes.txt").exists()

    def test_custom_filenames_and_new_directory(self, inventory, tmp_path):
        out = tmp_path / "reports" / "run1"
        options = ScanOptions(output_dir=out, globals_file="g.txt", functions_file="f.txt")
        write_reports(inventory, [], options)

        assert (out / "g.txt").exists()
        assert (out / "f.txt").exists()

    def test_empty_inventory_writes_empty_files(self, tmp_path):
        options = ScanOptions(output_dir=tmp_path, write_lexemes=False)
        write_reports(ProgramInventory(), [], options)

        assert Path(tmp_path / "OutputGlobalVariables.txt").read_text() == ""
        assert Path(tmp_path / "Functions.txt").read_text() == ""
