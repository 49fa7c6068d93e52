"""
Symbol Inventory Data Model
===========================

Records produced by the analysis package and consumed by the report
writer. Every record is frozen: it is built once by a single traversal
and never modified afterwards. Ordered collections are tuples.
"""

from dataclasses import dataclass
from typing import Optional


# Value recorded for a local variable declared without an initializer
NULL_VALUE = "null"


@dataclass(frozen=True)
class GlobalVariable:
    """
    A module-level variable declaration.

    Attributes:
        type: Declared data type text
        name: Variable name
        value: Initializer constant text
    """
    type: str
    name: str
    value: str


@dataclass(frozen=True)
class Variable:
    """
    A local variable declared in a function body.

    Attributes:
        type: Declared data type text
        name: Variable name
        value: Initializer constant text, NULL_VALUE when absent
    """
    type: str
    name: str
    value: str = NULL_VALUE


@dataclass(frozen=True)
class Function:
    """
    Inventory record for one function definition.

    Attributes:
        name: Function name ("main" for the entry function)
        is_main: True only for the entry function
        is_recursive: Self-recursion flag (always False for the entry function)
        return_type: Return type text; None when the entry function has
                     neither return-type token
        parameters: "type name" strings in declaration order
        local_variables: Locals in declaration order
        control_blocks: "<kind, line>" tags in source order
    """
    name: str
    is_main: bool = False
    is_recursive: bool = False
    return_type: Optional[str] = None
    parameters: tuple[str, ...] = ()
    local_variables: tuple[Variable, ...] = ()
    control_blocks: tuple[str, ...] = ()


@dataclass(frozen=True)
class ProgramInventory:
    """
    The symbol inventory of one program.

    Attributes:
        global_variables: Globals in declaration order, duplicates kept
        functions: Functions in declaration order
    """
    global_variables: tuple[GlobalVariable, ...] = ()
    functions: tuple[Function, ...] = ()

    @property
    def main_function(self) -> Optional[Function]:
        """Return the entry function record, or None if there is none."""
        for function in self.functions:
            if function.is_main:
                return function
        return None

    def find_function(self, name: str) -> Optional[Function]:
        """Return the first function with the given name, or None."""
        for function in self.functions:
            if function.name == name:
                return function
        return None
