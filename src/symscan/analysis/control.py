"""
Control-Block Classifier
========================

Turns a control-block node into the tag recorded in a function's
inventory, e.g. ``<while, 12>``.
"""

from enum import Enum
from typing import Optional

from symscan.lang.ast import (
    ControlBlockNode,
    IfBlock,
    IfElseBlock,
    ForBlock,
    WhileBlock,
)


class ControlKind(Enum):
    """The four control-block kinds, valued by their report label."""
    IF = "if"
    IF_ELSE = "if...else"
    FOR = "for"
    WHILE = "while"


def format_control_tag(kind: ControlKind, line: int) -> str:
    """Format a control-block tag: ``<kind, line>``."""
    return f"<{kind.value}, {line}>"


def classify_control_block(node: ControlBlockNode) -> Optional[str]:
    """
    Classify a control-block node.

    An if...else block is its own alternative, not a flavour of if. The
    line is that of the sub-construct's opening keyword.

    Args:
        node: Control-block wrapper holding at most one sub-construct

    Returns:
        The ``<kind, line>`` tag, or None if no sub-construct is present
    """
    match node:
        case ControlBlockNode(if_block=IfBlock() as block):
            return format_control_tag(ControlKind.IF, block.line)
        case ControlBlockNode(for_block=ForBlock() as block):
            return format_control_tag(ControlKind.FOR, block.line)
        case ControlBlockNode(while_block=WhileBlock() as block):
            return format_control_tag(ControlKind.WHILE, block.line)
        case ControlBlockNode(if_else_block=IfElseBlock() as block):
            return format_control_tag(ControlKind.IF_ELSE, block.line)
        case _:
            return None
