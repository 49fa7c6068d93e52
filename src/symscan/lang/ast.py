"""
MiniC Syntax Tree Definitions
=============================

This module defines the syntax tree node types produced by the MiniC
parser and consumed by the analysis package.

Node Hierarchy
--------------
Node (base)
├── ProgramNode - root: global variables, then functions
├── GlobalVariableNode - `int x = 5;` at top level
├── MainFunctionNode - the entry function `int main() { ... }`
├── FunctionNode - ordinary function definition
├── ParameterNode - one `type name` parameter
├── StatementNode - one statement of a body
│   ├── declaration -> VariableDeclarationNode
│   ├── control_block -> ControlBlockNode
│   └── simple -> ExpressionStatement | ReturnStatement
├── ControlBlockNode - wraps exactly one of:
│   ├── IfBlock
│   ├── IfElseBlock
│   ├── ForBlock
│   └── WhileBlock
└── Expressions
    ├── AssignmentExpression
    ├── BinaryExpression
    ├── UnaryExpression
    ├── CallExpression
    ├── IdentifierExpression
    └── ConstantExpression

Design Notes
------------
- All nodes are dataclasses; each stores its source location.
- The tree mirrors the grammar rather than normalising it: a statement
  exposes optional sub-nodes and a control block exposes one optional
  field per alternative, exactly one of which is set.
- Constants and type names are kept as source text, since the inventory
  reports them verbatim.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, Union

from symscan.errors import SourceLocation


# =============================================================================
# Base Classes
# =============================================================================

@dataclass
class Node:
    """
    Base class for all syntax tree nodes.

    Attributes:
        location: Source location of the node's first token
    """
    location: SourceLocation

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}@{self.location.line}:{self.location.column}"

    @property
    def line(self) -> int:
        return self.location.line


@dataclass
class Expression(Node):
    """Base class for all expression nodes."""
    pass


# =============================================================================
# Expression Nodes
# =============================================================================

class BinaryOperator(Enum):
    """Binary operator types."""
    ADD = auto()          # +
    SUBTRACT = auto()     # -
    MULTIPLY = auto()     # *
    DIVIDE = auto()       # /
    MODULO = auto()       # %
    EQUAL = auto()        # ==
    NOT_EQUAL = auto()    # !=
    LESS = auto()         # <
    GREATER = auto()      # >
    LESS_EQ = auto()      # <=
    GREATER_EQ = auto()   # >=
    LOGICAL_AND = auto()  # &&
    LOGICAL_OR = auto()   # ||


class UnaryOperator(Enum):
    """Unary operator types."""
    NEGATE = auto()          # -x
    LOGICAL_NOT = auto()     # !x
    PRE_INCREMENT = auto()   # ++x
    PRE_DECREMENT = auto()   # --x
    POST_INCREMENT = auto()  # x++
    POST_DECREMENT = auto()  # x--


class AssignmentOperator(Enum):
    """Assignment operator types."""
    ASSIGN = auto()      # =
    ADD_ASSIGN = auto()  # +=
    SUB_ASSIGN = auto()  # -=
    MUL_ASSIGN = auto()  # *=
    DIV_ASSIGN = auto()  # /=


@dataclass
class IdentifierExpression(Expression):
    """Variable reference."""
    name: str = ""


@dataclass
class ConstantExpression(Expression):
    """
    Constant value, kept as source text (e.g. `5`, `-2.5`, `"hi"`, `true`).
    """
    text: str = ""


@dataclass
class CallExpression(Expression):
    """
    Function call expression.

    Attributes:
        function_name: Name of the called function
        arguments: Argument expressions in call order
    """
    function_name: str = ""
    arguments: list[Expression] = field(default_factory=list)


@dataclass
class UnaryExpression(Expression):
    operator: UnaryOperator = None
    operand: Expression = None


@dataclass
class BinaryExpression(Expression):
    operator: BinaryOperator = None
    left: Expression = None
    right: Expression = None


@dataclass
class AssignmentExpression(Expression):
    """
    Assignment expression (target op value).

    Attributes:
        operator: The assignment operator
        target: The assigned expression (an identifier in valid code)
        value: The value to assign
    """
    operator: AssignmentOperator = None
    target: Expression = None
    value: Expression = None


# =============================================================================
# Declaration Nodes
# =============================================================================

@dataclass
class GlobalVariableNode(Node):
    """
    Top-level variable declaration `data_type identifier = constant;`.

    Attributes:
        data_type: Type keyword text
        identifier: Variable name
        constant: Initializer constant text
    """
    data_type: str = ""
    identifier: str = ""
    constant: str = ""


@dataclass
class VariableDeclarationNode(Node):
    """
    Local variable declaration `data_type a, b, c (= constant)?;`.

    A single optional initializer is shared by every declared name.

    Attributes:
        data_type: Type keyword text
        variables: Declared names in source order
        constant: Initializer constant text, None when absent
    """
    data_type: str = ""
    variables: list[str] = field(default_factory=list)
    constant: Optional[str] = None


@dataclass
class ParameterNode(Node):
    """Function parameter `data_type name`."""
    data_type: str = ""
    name: str = ""


# =============================================================================
# Statement and Control-Block Nodes
# =============================================================================

@dataclass
class ExpressionStatement(Node):
    """Expression used as a statement, e.g. `x = 5;` or `f(1);`."""
    expression: Expression = None


@dataclass
class ReturnStatement(Node):
    """`return expression?;`"""
    value: Optional[Expression] = None


SimpleStatement = Union[ExpressionStatement, ReturnStatement]


@dataclass
class StatementNode(Node):
    """
    One statement of a function or block body.

    At most one of the three sub-nodes is set.

    Attributes:
        declaration: Variable declaration, if this statement is one
        control_block: Control block, if this statement is one
        simple: Expression or return statement otherwise
    """
    declaration: Optional[VariableDeclarationNode] = None
    control_block: Optional["ControlBlockNode"] = None
    simple: Optional[SimpleStatement] = None


@dataclass
class IfBlock(Node):
    """`if (condition) { body }` with no else branch."""
    condition: Expression = None
    body: list[StatementNode] = field(default_factory=list)


@dataclass
class IfElseBlock(Node):
    """
    `if (condition) { then_body } else ...`

    An `else if` chain is stored as an else_body holding a single
    statement whose control block is the nested conditional.
    """
    condition: Expression = None
    then_body: list[StatementNode] = field(default_factory=list)
    else_body: list[StatementNode] = field(default_factory=list)


@dataclass
class ForBlock(Node):
    """
    `for (initializer; condition; update) { body }`, all header parts optional.
    """
    initializer: Optional[Union[VariableDeclarationNode, Expression]] = None
    condition: Optional[Expression] = None
    update: Optional[Expression] = None
    body: list[StatementNode] = field(default_factory=list)


@dataclass
class WhileBlock(Node):
    """`while (condition) { body }`"""
    condition: Expression = None
    body: list[StatementNode] = field(default_factory=list)


@dataclass
class ControlBlockNode(Node):
    """
    Control-flow construct wrapper; exactly one field is set by the parser.
    """
    if_block: Optional[IfBlock] = None
    if_else_block: Optional[IfElseBlock] = None
    for_block: Optional[ForBlock] = None
    while_block: Optional[WhileBlock] = None


# =============================================================================
# Function and Program Nodes
# =============================================================================

@dataclass
class MainFunctionNode(Node):
    """
    The entry function `(int | void) main() { ... }`.

    It takes no parameters. The grammar offers two alternative return
    type tokens; the parser fills the one that was written.

    Attributes:
        return_type_int: Text of the `int` token, if present
        return_type_void: Text of the `void` token, if present
        statements: Body statements
    """
    return_type_int: Optional[str] = None
    return_type_void: Optional[str] = None
    statements: list[StatementNode] = field(default_factory=list)


@dataclass
class FunctionNode(Node):
    """
    Ordinary function definition.

    Attributes:
        name: Function name
        return_type: Return type text (a data type or `void`)
        parameters: Parameters in declaration order
        statements: Body statements
        text: Concatenated token text of the whole definition, with no
              whitespace or comments (`intfact(intn){...}`)
    """
    name: str = ""
    return_type: str = ""
    parameters: list[ParameterNode] = field(default_factory=list)
    statements: list[StatementNode] = field(default_factory=list)
    text: str = field(default="", repr=False)


FunctionDefinition = Union[MainFunctionNode, FunctionNode]


@dataclass
class ProgramNode(Node):
    """
    Root node: all global variables, then all functions, in source order.
    """
    global_variables: list[GlobalVariableNode] = field(default_factory=list)
    functions: list[FunctionDefinition] = field(default_factory=list)


# =============================================================================
# Visitor
# =============================================================================

class NodeVisitor:
    """
    Base class for syntax tree visitors.

    Dispatches to visit_<ClassName> and falls back to generic_visit,
    which walks every child node.

    Usage:
        class CallCollector(NodeVisitor):
            def __init__(self):
                self.calls = []

            def visit_CallExpression(self, node):
                self.calls.append(node.function_name)
                self.generic_visit(node)
    """

    def visit(self, node: Node):
        method_name = f"visit_{node.__class__.__name__}"
        visitor = getattr(self, method_name, self.generic_visit)
        return visitor(node)

    def generic_visit(self, node: Node) -> None:
        for field_value in node.__dict__.values():
            if isinstance(field_value, Node):
                self.visit(field_value)
            elif isinstance(field_value, list):
                for item in field_value:
                    if isinstance(item, Node):
                        self.visit(item)


# =============================================================================
# Tree Printer
# =============================================================================

class TreePrinter(NodeVisitor):
    """
    Pretty printer for syntax tree debugging (`symscan --tree`).

    Usage:
        printer = TreePrinter()
        print(printer.print(program))
    """

    def __init__(self):
        self.output: list[str] = []
        self.indent_level = 0

    def print(self, node: Node) -> str:
        """Print the tree and return it as a string."""
        self.output = []
        self.indent_level = 0
        self.visit(node)
        return "\n".join(self.output)

    def _emit(self, text: str) -> None:
        self.output.append(f"{'  ' * self.indent_level}{text}")

    def _visit_body(self, label: str, statements: list[StatementNode]) -> None:
        self._emit(label)
        self.indent_level += 1
        for statement in statements:
            self.visit(statement)
        self.indent_level -= 1

    def visit_ProgramNode(self, node: ProgramNode):
        self._emit("Program")
        self.indent_level += 1
        self.generic_visit(node)
        self.indent_level -= 1

    def visit_GlobalVariableNode(self, node: GlobalVariableNode):
        self._emit(f"Global: {node.data_type} {node.identifier} = {node.constant}")

    def visit_MainFunctionNode(self, node: MainFunctionNode):
        return_type = node.return_type_int or node.return_type_void
        self._visit_body(f"Main: {return_type} main() @{node.line}", node.statements)

    def visit_FunctionNode(self, node: FunctionNode):
        params = ", ".join(f"{p.data_type} {p.name}" for p in node.parameters)
        self._visit_body(f"Function: {node.return_type} {node.name}({params}) @{node.line}", node.statements)

    def visit_StatementNode(self, node: StatementNode):
        if node.declaration is not None:
            self.visit(node.declaration)
        elif node.control_block is not None:
            self.visit(node.control_block)
        elif node.simple is not None:
            self.visit(node.simple)

    def visit_VariableDeclarationNode(self, node: VariableDeclarationNode):
        init = f" = {node.constant}" if node.constant is not None else ""
        self._emit(f"Declare: {node.data_type} {', '.join(node.variables)}{init}")

    def visit_IfBlock(self, node: IfBlock):
        self._visit_body(f"If @{node.line}", node.body)

    def visit_IfElseBlock(self, node: IfElseBlock):
        self._visit_body(f"IfElse @{node.line}", node.then_body)
        self._visit_body("Else", node.else_body)

    def visit_ForBlock(self, node: ForBlock):
        self._visit_body(f"For @{node.line}", node.body)

    def visit_WhileBlock(self, node: WhileBlock):
        self._visit_body(f"While @{node.line}", node.body)

    def visit_ExpressionStatement(self, node: ExpressionStatement):
        self._emit(f"Expression @{node.line}")

    def visit_ReturnStatement(self, node: ReturnStatement):
        self._emit(f"Return @{node.line}")
