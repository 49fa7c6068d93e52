"""
MiniC Language Front End
========================

Lexer, parser and syntax tree for MiniC, the small C-like language that
symscan inventories.

Pipeline
--------
    Source → Lexer → Tokens (ERROR tokens kept) → Parser → ProgramNode

Usage
-----
>>> from symscan.lang import parse_source
>>> program = parse_source('''
... int limit = 10;
... void main() {
...     int i;
... }
... ''')
>>> [g.identifier for g in program.global_variables]
['limit']

Language Subset
---------------
- Data types: int, float, double, char, string, bool (and void returns)
- Globals: `type name = constant;`
- Functions: ordinary functions with parameters, plus the entry
  function `int main()` / `void main()`
- Statements: declarations, if / if...else / for / while, return,
  assignments and calls
"""

from symscan.lang.errors import (
    LanguageError,
    LanguageSyntaxError,
    UnexpectedTokenError,
    MissingTokenError,
    ScanFailedError,
    LexicalError,
    ErrorCollector,
)
from symscan.lang.lexer import Lexer, Token, TokenType, tokenize, lexical_errors
from symscan.lang.parser import Parser, parse_source
from symscan.lang.ast import (
    Node,
    ProgramNode,
    GlobalVariableNode,
    MainFunctionNode,
    FunctionNode,
    ParameterNode,
    StatementNode,
    VariableDeclarationNode,
    ControlBlockNode,
    IfBlock,
    IfElseBlock,
    ForBlock,
    WhileBlock,
    ExpressionStatement,
    ReturnStatement,
    CallExpression,
    NodeVisitor,
    TreePrinter,
)

__all__ = [
    # Errors
    "LanguageError",
    "LanguageSyntaxError",
    "UnexpectedTokenError",
    "MissingTokenError",
    "ScanFailedError",
    "LexicalError",
    "ErrorCollector",
    # Lexer
    "Lexer",
    "Token",
    "TokenType",
    "tokenize",
    "lexical_errors",
    # Parser
    "Parser",
    "parse_source",
    # Syntax tree
    "Node",
    "ProgramNode",
    "GlobalVariableNode",
    "MainFunctionNode",
    "FunctionNode",
    "ParameterNode",
    "StatementNode",
    "VariableDeclarationNode",
    "ControlBlockNode",
    "IfBlock",
    "IfElseBlock",
    "ForBlock",
    "WhileBlock",
    "ExpressionStatement",
    "ReturnStatement",
    "CallExpression",
    "NodeVisitor",
    "TreePrinter",
]
