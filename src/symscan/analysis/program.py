"""
Program Analyzer
================

Walks a whole program and returns its symbol inventory. This is pure
aggregation: globals are copied out in source order and each function
is handed to the function analyzer.
"""

import logging

from symscan.lang.ast import ProgramNode, GlobalVariableNode
from symscan.analysis.functions import RecursionStrategy, analyze_function
from symscan.analysis.model import GlobalVariable, ProgramInventory

logger = logging.getLogger(__name__)


def analyze_global_variable(node: GlobalVariableNode) -> GlobalVariable:
    """Extract (type, name, value) from a global variable node."""
    return GlobalVariable(type=node.data_type, name=node.identifier, value=node.constant)


def analyze_program(
    program: ProgramNode,
    strategy: RecursionStrategy = RecursionStrategy.LEXICAL,
) -> ProgramInventory:
    """
    Build the symbol inventory of a program.

    Duplicate global names are kept as separate entries; no
    redeclaration check is made.

    Args:
        program: Root of the syntax tree
        strategy: Recursion detection strategy for ordinary functions

    Returns:
        ProgramInventory with globals and functions in declaration order
    """
    inventory = ProgramInventory(
        global_variables=tuple(analyze_global_variable(node) for node in program.global_variables),
        functions=tuple(analyze_function(node, strategy) for node in program.functions),
    )

    main_count = sum(1 for function in inventory.functions if function.is_main)
    if main_count > 1:
        logger.warning(f"{program.location.filename}: {main_count} entry functions defined")

    logger.info(
        f"Inventory of {program.location.filename}: {len(inventory.global_variables)} globals, "
        f"{len(inventory.functions)} functions"
    )
    return inventory
