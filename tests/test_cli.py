# =============================================================================
# test_cli.py - symscan Command-Line Tests
# =============================================================================
# Tests for the symscan click command, run through click's CliRunner.
# =============================================================================

from pathlib import Path

import pytest
from click.testing import CliRunner

from symscan import __version__
from symscan.cli.errors import ExitCode
from symscan.cli.symscan import main


PROGRAM = """\
int x = 5;

int fact(int n) {
    if (n <= 1) { return 1; }
    return n * fact(n - 1);
}

void main() {
    int y;
    while (y < x) { y++; }
}
"""

ENV = {
    "SYMSCAN_OUTPUT_DIR": None,
    "SYMSCAN_RECURSION": None,
    "SYMSCAN_WRITE_LEXEMES": None,
}


@pytest.fixture
def runner():
    return CliRunner()


def invoke(runner, args, source=PROGRAM, env=None):
    """Write source to prog.mc in an isolated directory and run symscan."""
    Path("prog.mc").write_text(source)
    return runner.invoke(main, args, env={**ENV, **(env or {})})


class TestScan:
    """Test normal scans."""

    def test_writes_reports(self, runner):
        with runner.isolated_filesystem():
            result = invoke(runner, ["prog.mc"])

            assert result.exit_code == ExitCode.SUCCESS, result.output
            assert Path("OutputGlobalVariables.txt").read_text() == "Variable: x Value: 5 Type: int\n"
            functions = Path("Functions.txt").read_text()
            assert "Name: fact\nType: Regular, Recursive\n" in functions
            assert "Name: main\nType: Main, Non-recursive\nReturn Type: void\n" in functions
            assert "\tint y = null\n" in functions
            assert "\t<while, 10>\n" in functions
            assert Path("Lexemes.txt").read_text().startswith("<INT, 'int', 1>\n")
            assert "1 globals, 2 functions" in result.output

    def test_output_dir(self, runner):
        with runner.isolated_filesystem():
            result = invoke(runner, ["prog.mc", "-o", "out"])

            assert result.exit_code == 0, result.output
            assert Path("out/OutputGlobalVariables.txt").exists()
            assert Path("out/Functions.txt").exists()
            assert Path("out/Lexemes.txt").exists()

    def test_custom_filenames(self, runner):
        with runner.isolated_filesystem():
            result = invoke(runner, [
                "prog.mc",
                "--globals-file", "g.txt",
                "--functions-file", "f.txt",
                "--lexemes-file", "l.txt",
            ])

            assert result.exit_code == 0, result.output
            assert Path("g.txt").exists()
            assert Path("f.txt").exists()
            assert Path("l.txt").exists()

    def test_no_lexemes(self, runner):
        with runner.isolated_filesystem():
            result = invoke(runner, ["--no-lexemes", "prog.mc"])

            assert result.exit_code == 0, result.output
            assert not Path("Lexemes.txt").exists()
            assert Path("Functions.txt").exists()

    def test_stdout(self, runner):
        with runner.isolated_filesystem():
            result = invoke(runner, ["--stdout", "prog.mc"])

            assert result.exit_code == 0, result.output
            assert "Variable: x Value: 5 Type: int" in result.output
            assert "Name: fact" in result.output
            assert not Path("Functions.txt").exists()

    def test_tree(self, runner):
        with runner.isolated_filesystem():
            result = invoke(runner, ["--tree", "prog.mc"])

            assert result.exit_code == 0, result.output
            assert result.output.startswith("Program\n")
            assert "Function: int fact(int n) @3" in result.output
            assert not Path("Functions.txt").exists()

    def test_recursion_calls(self, runner):
        source = "int sum(int summary) { return summary; }\nvoid main() { }\n"
        with runner.isolated_filesystem():
            result = invoke(runner, ["--stdout", "--recursion", "calls", "prog.mc"], source=source)

            assert result.exit_code == 0, result.output
            assert "Name: sum\nType: Regular, Non-recursive" in result.output

    def test_env_output_dir(self, runner):
        with runner.isolated_filesystem():
            result = invoke(runner, ["prog.mc"], env={"SYMSCAN_OUTPUT_DIR": "from_env"})

            assert result.exit_code == 0, result.output
            assert Path("from_env/Functions.txt").exists()

    def test_verbose(self, runner):
        with runner.isolated_filesystem():
            result = invoke(runner, ["-v", "prog.mc"])

            assert result.exit_code == 0, result.output
            assert "Scanning prog.mc" in result.output
            assert "Recursion detection: lexical" in result.output
            assert "Tokenized:" in result.output

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestErrors:
    """Test error reporting and exit codes."""

    def test_lexical_errors_reported_not_fatal(self, runner):
        source = "int x = 5 @;\nvoid main() { }\n"
        with runner.isolated_filesystem():
            result = invoke(runner, ["prog.mc"], source=source)

            assert result.exit_code == ExitCode.SUCCESS, result.output
            assert "Lexical error detected: @ at line 1" in result.output
            assert "<ERROR, '@', 1>" in Path("Lexemes.txt").read_text()

    def test_syntax_error(self, runner):
        source = "int x;\nvoid main() { }\n"
        with runner.isolated_filesystem():
            result = invoke(runner, ["prog.mc"], source=source)

            assert result.exit_code == ExitCode.SCAN_ERROR
            assert "prog.mc:1:6: error: expected '='" in result.output
            assert not Path("Functions.txt").exists()

    def test_missing_input(self, runner):
        with runner.isolated_filesystem():
            result = runner.invoke(main, ["nope.mc"])
            assert result.exit_code == ExitCode.INVALID_ARGS

    def test_bad_recursion_choice(self, runner):
        with runner.isolated_filesystem():
            result = invoke(runner, ["--recursion", "guess", "prog.mc"])
            assert result.exit_code == ExitCode.INVALID_ARGS
