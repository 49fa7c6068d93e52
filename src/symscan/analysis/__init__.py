"""
Semantic Extraction Engine
==========================

Walks a MiniC syntax tree and builds the symbol inventory: global
variables, and per function its signature, local variables, control
blocks and a self-recursion flag.

    ProgramNode → analyze_program → analyze_function → classify_control_block

Nothing here performs I/O or raises on well-formed trees; absent optional
nodes simply leave the matching field as None.

Usage
-----
>>> from symscan.lang import parse_source
>>> from symscan.analysis import analyze_program
>>> inventory = analyze_program(parse_source('void main() { int a; }'))
>>> inventory.main_function.local_variables[0].value
'null'
"""

from symscan.analysis.model import (
    NULL_VALUE,
    GlobalVariable,
    Variable,
    Function,
    ProgramInventory,
)
from symscan.analysis.control import ControlKind, classify_control_block, format_control_tag
from symscan.analysis.functions import (
    MAIN_FUNCTION_NAME,
    RecursionStrategy,
    analyze_function,
    is_self_recursive,
)
from symscan.analysis.program import analyze_program, analyze_global_variable

__all__ = [
    "NULL_VALUE",
    "GlobalVariable",
    "Variable",
    "Function",
    "ProgramInventory",
    "ControlKind",
    "classify_control_block",
    "format_control_tag",
    "MAIN_FUNCTION_NAME",
    "RecursionStrategy",
    "analyze_function",
    "is_self_recursive",
    "analyze_program",
    "analyze_global_variable",
]
