"""
Function Analyzer
=================

Builds the inventory record of one function definition: its signature,
the local variables and control blocks found among its statements, and
whether it is self-recursive.

Statement Visiting
------------------
Only the function's own statement sequence is examined. Declarations
and control blocks nested inside a control block's body belong to that
block and are not inventoried, mirroring how the reports have always
been produced.

Recursion Detection
-------------------
Two strategies are available:

- LEXICAL (default): the function is recursive when its name occurs
  more than once in the concatenated token text of its whole definition.
  This is a textual approximation: a parameter or local whose name
  contains the function name, or a call to another function whose name
  contains it, also counts. A function with an empty body is never
  recursive.
- CALLS: the function is recursive when a call expression anywhere in
  its body (nested blocks included) names the function itself.

The entry function is never recursive under either strategy.
"""

from enum import Enum
from typing import Optional
import logging

from symscan.lang.ast import (
    FunctionDefinition,
    FunctionNode,
    MainFunctionNode,
    StatementNode,
    VariableDeclarationNode,
    ControlBlockNode,
    CallExpression,
    NodeVisitor,
)
from symscan.analysis.control import classify_control_block
from symscan.analysis.model import Function, Variable, NULL_VALUE

logger = logging.getLogger(__name__)


# Name the inventory records for the entry function
MAIN_FUNCTION_NAME = "main"


class RecursionStrategy(Enum):
    """How self-recursion is detected for ordinary functions."""
    LEXICAL = "lexical"
    CALLS = "calls"


class _CallCollector(NodeVisitor):
    """Collects the names of every function called under a node."""

    def __init__(self):
        self.called: list[str] = []

    def visit_CallExpression(self, node: CallExpression):
        self.called.append(node.function_name)
        self.generic_visit(node)


def analyze_function(
    node: FunctionDefinition,
    strategy: RecursionStrategy = RecursionStrategy.LEXICAL,
) -> Function:
    """
    Produce the inventory record for one function definition.

    Args:
        node: Entry-function or ordinary-function node
        strategy: Recursion detection strategy for ordinary functions

    Returns:
        The populated Function record
    """
    match node:
        case MainFunctionNode():
            local_variables, control_blocks = _visit_statements(node.statements)
            function = Function(
                name=MAIN_FUNCTION_NAME,
                is_main=True,
                is_recursive=False,
                return_type=_entry_return_type(node),
                parameters=(),
                local_variables=local_variables,
                control_blocks=control_blocks,
            )
        case FunctionNode():
            local_variables, control_blocks = _visit_statements(node.statements)
            function = Function(
                name=node.name,
                is_main=False,
                is_recursive=is_self_recursive(node, strategy),
                return_type=node.return_type,
                parameters=tuple(f"{p.data_type} {p.name}" for p in node.parameters),
                local_variables=local_variables,
                control_blocks=control_blocks,
            )
        case _:
            raise TypeError(f"not a function definition: {type(node).__name__}")

    logger.debug(
        f"Analyzed function '{function.name}': {len(function.local_variables)} locals, "
        f"{len(function.control_blocks)} control blocks, recursive={function.is_recursive}"
    )
    return function


def _entry_return_type(node: MainFunctionNode) -> Optional[str]:
    """Resolve the entry function's return type: `int` first, then `void`."""
    for candidate in (node.return_type_int, node.return_type_void):
        if candidate is not None:
            return candidate
    return None


def _visit_statements(
    statements: list[StatementNode],
) -> tuple[tuple[Variable, ...], tuple[str, ...]]:
    """
    Collect local variables and control-block tags from a statement sequence.

    Returns:
        (local_variables, control_blocks), both in source order
    """
    local_variables: list[Variable] = []
    control_blocks: list[str] = []

    for statement in statements:
        match statement:
            case StatementNode(declaration=VariableDeclarationNode() as declaration):
                value = declaration.constant if declaration.constant is not None else NULL_VALUE
                for name in declaration.variables:
                    local_variables.append(Variable(type=declaration.data_type, name=name, value=value))
            case StatementNode(control_block=ControlBlockNode() as block):
                tag = classify_control_block(block)
                if tag is not None:
                    control_blocks.append(tag)
            case _:
                pass

    return tuple(local_variables), tuple(control_blocks)


def is_self_recursive(
    node: FunctionNode,
    strategy: RecursionStrategy = RecursionStrategy.LEXICAL,
) -> bool:
    """
    Decide whether an ordinary function is self-recursive.

    See the module docstring for the semantics of each strategy.
    """
    if not node.name:
        return False

    if strategy is RecursionStrategy.CALLS:
        collector = _CallCollector()
        for statement in node.statements:
            collector.visit(statement)
        return node.name in collector.called

    if not node.statements:
        return False
    return node.text.count(node.name) > 1
