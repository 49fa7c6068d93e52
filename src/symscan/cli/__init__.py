"""
symscan Command-Line Interface
==============================

- **symscan**: scan a MiniC source file and write its symbol reports

The tool is a Click-based CLI application; exit codes are shared
through cli.errors.
"""

__all__ = ["symscan"]
