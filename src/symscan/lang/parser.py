"""
MiniC Recursive Descent Parser
==============================

This module implements a recursive descent parser for MiniC. It takes
the token stream from the lexer and builds the syntax tree defined in
symscan.lang.ast.

Grammar (Simplified EBNF)
-------------------------
program          ::= (global_variable | function)*
global_variable  ::= data_type ID '=' constant ';'
function         ::= main_function
                   | return_type ID '(' parameter_list? ')' block
main_function    ::= ('int' | 'void') 'main' '(' ')' block
parameter_list   ::= parameter (',' parameter)*
parameter        ::= data_type ID
block            ::= '{' statement* '}'
statement        ::= variable_declaration ';' | control_block
                   | 'return' expression? ';' | expression ';'
variable_declaration ::= data_type ID (',' ID)* ('=' constant)?
control_block    ::= if_block | if_else_block | for_block | while_block
if_block         ::= 'if' '(' expression ')' block
if_else_block    ::= 'if' '(' expression ')' block 'else' (block | control_block)
for_block        ::= 'for' '(' for_init? ';' expression? ';' expression? ')' block
while_block      ::= 'while' '(' expression ')' block
constant         ::= '-'? (INT_CONST | FLOAT_CONST) | STRING_CONST
                   | CHAR_CONST | 'true' | 'false'
data_type        ::= 'int' | 'float' | 'double' | 'char' | 'string' | 'bool'
return_type      ::= data_type | 'void'

Global variables and functions may be interleaved; each kind keeps its
own source order in the resulting ProgramNode.

Expression Precedence (lowest to highest)
-----------------------------------------
1. assignment     = += -= *= /=
2. logical_or     ||
3. logical_and    &&
4. equality       == !=
5. relational     < > <= >=
6. additive       + -
7. multiplicative * / %
8. unary          - ! ++ --
9. postfix        () ++ --
10. primary       ID, constant, '(' expression ')'

Example Usage
-------------
>>> from symscan.lang.parser import parse_source
>>> program = parse_source('int x = 5; void main() { }')
>>> program.global_variables[0].identifier
'x'
"""

from typing import Optional, Callable, Union
import logging

from symscan.errors import SourceLocation
from symscan.lang.lexer import Lexer, Token, TokenType, DATA_TYPE_TOKENS
from symscan.lang.ast import (
    ProgramNode,
    GlobalVariableNode,
    MainFunctionNode,
    FunctionNode,
    FunctionDefinition,
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
    Expression,
    AssignmentExpression,
    BinaryExpression,
    UnaryExpression,
    CallExpression,
    IdentifierExpression,
    ConstantExpression,
    AssignmentOperator,
    BinaryOperator,
    UnaryOperator,
)
from symscan.lang.errors import (
    LanguageSyntaxError,
    UnexpectedTokenError,
    MissingTokenError,
    ErrorCollector,
)

logger = logging.getLogger(__name__)


CONSTANT_TOKENS = (
    TokenType.INT_CONST,
    TokenType.FLOAT_CONST,
    TokenType.STRING_CONST,
    TokenType.CHAR_CONST,
    TokenType.TRUE,
    TokenType.FALSE,
)

# Tokens at which statement-level error recovery resumes
STATEMENT_STARTS = (
    TokenType.IF,
    TokenType.FOR,
    TokenType.WHILE,
    TokenType.RETURN,
    *DATA_TYPE_TOKENS,
)


class Parser:
    """
    Recursive descent parser for MiniC.

    The parser recovers from syntax errors at statement and declaration
    boundaries, collects every error, and raises a single
    ScanFailedError at the end of parse() if any were found.

    Attributes:
        tokens: Tokens to parse (ERROR tokens are dropped on construction)
        filename: Source filename for error reporting
    """

    def __init__(
        self,
        tokens: list[Token],
        filename: str = "<input>",
        source_lines: Optional[list[str]] = None,
    ):
        """
        Initialize the parser.

        Args:
            tokens: Tokens from the lexer, ending with EOF
            filename: Source filename for error messages
            source_lines: Original source lines for error context
        """
        self.tokens = [t for t in tokens if t.type != TokenType.ERROR]
        if not self.tokens or self.tokens[-1].type != TokenType.EOF:
            self.tokens.append(Token(TokenType.EOF, "", 1, 1, filename))
        self.filename = filename
        self.source_lines = source_lines or []

        self._pos = 0
        self._errors = ErrorCollector()

    def parse(self) -> ProgramNode:
        """
        Parse the token stream into a ProgramNode.

        Raises:
            ScanFailedError: If any syntax error was found
        """
        program = ProgramNode(location=SourceLocation(self.filename, 1, 1))

        while not self._at_end():
            try:
                node = self._parse_top_level()
                if isinstance(node, GlobalVariableNode):
                    program.global_variables.append(node)
                else:
                    program.functions.append(node)
            except LanguageSyntaxError as e:
                if e not in self._errors.errors:
                    self._errors.add(e)
                if self._errors.should_stop():
                    break
                self._synchronize_top_level()

        self._errors.raise_if_errors()

        logger.debug(
            f"Parsed {self.filename}: {len(program.global_variables)} globals, "
            f"{len(program.functions)} functions"
        )
        return program

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._peek().type == TokenType.EOF

    def _peek(self, offset: int = 0) -> Token:
        pos = self._pos + offset
        if pos >= len(self.tokens):
            return self.tokens[-1]
        return self.tokens[pos]

    def _advance(self) -> Token:
        token = self._peek()
        if not self._at_end():
            self._pos += 1
        return token

    def _check(self, *types: TokenType) -> bool:
        return self._peek().type in types

    def _match(self, *types: TokenType) -> Optional[Token]:
        """Consume the current token if it matches one of the types."""
        if self._check(*types):
            return self._advance()
        return None

    def _expect(self, token_type: TokenType, message: str) -> Token:
        """
        Expect and consume a specific token type.

        Raises:
            MissingTokenError: If the expected token is not found
        """
        if self._check(token_type):
            return self._advance()

        current = self._peek()
        raise MissingTokenError(
            message,
            current.location,
            self._get_source_line(current.line),
        )

    def _unexpected(self, expected: str) -> UnexpectedTokenError:
        current = self._peek()
        return UnexpectedTokenError(
            current.text or current.type.name,
            expected=expected,
            location=current.location,
            source_line=self._get_source_line(current.line),
        )

    def _get_source_line(self, line: int) -> Optional[str]:
        if 0 < line <= len(self.source_lines):
            return self.source_lines[line - 1]
        return None

    def _is_data_type(self, offset: int = 0) -> bool:
        return self._peek(offset).type in DATA_TYPE_TOKENS

    # =========================================================================
    # Error Recovery
    # =========================================================================

    def _looks_like_top_level(self) -> bool:
        """Check for `type main`, `type ID (` or `type ID =` at the current position."""
        if not (self._is_data_type() or self._check(TokenType.VOID)):
            return False
        follower = self._peek(1).type
        if follower == TokenType.MAIN:
            return True
        return follower == TokenType.ID and self._peek(2).type in (TokenType.LPAREN, TokenType.ASSIGN)

    def _synchronize_top_level(self) -> None:
        """Skip tokens until something that starts a global or a function."""
        self._advance()
        while not self._at_end() and not self._looks_like_top_level():
            self._advance()

    def _synchronize_statement(self, start: int) -> None:
        """
        Skip tokens until a likely statement boundary inside a block.

        A closing brace is left in place for the enclosing block. At
        least one token is consumed when the failed statement consumed
        none, so recovery always makes progress.
        """
        if self._pos == start:
            self._advance()
        while not self._at_end():
            if self._match(TokenType.SEMICOLON):
                return
            if self._check(TokenType.RBRACE, *STATEMENT_STARTS):
                return
            self._advance()

    # =========================================================================
    # Top-Level Parsing
    # =========================================================================

    def _parse_top_level(self) -> Union[GlobalVariableNode, FunctionDefinition]:
        """Parse a global variable or a function definition."""
        if not (self._is_data_type() or self._check(TokenType.VOID)):
            raise self._unexpected("data type or 'void'")

        if self._peek(1).type == TokenType.MAIN:
            return self._parse_main_function()

        if self._peek(1).type == TokenType.ID and self._peek(2).type == TokenType.LPAREN:
            return self._parse_function()

        if self._check(TokenType.VOID):
            self._advance()
            raise self._unexpected("function name")

        return self._parse_global_variable()

    def _parse_global_variable(self) -> GlobalVariableNode:
        location = self._peek().location
        data_type = self._advance().text
        identifier = self._expect(TokenType.ID, "variable name").text
        self._expect(TokenType.ASSIGN, "'=' (global variables must be initialized)")
        constant = self._parse_constant()
        self._expect(TokenType.SEMICOLON, "';'")

        return GlobalVariableNode(
            location=location,
            data_type=data_type,
            identifier=identifier,
            constant=constant,
        )

    def _parse_main_function(self) -> MainFunctionNode:
        """Parse `(int | void) main() { ... }`."""
        location = self._peek().location
        return_type_int = self._match(TokenType.INT)
        return_type_void = None if return_type_int else self._match(TokenType.VOID)
        if return_type_int is None and return_type_void is None:
            raise self._unexpected("'int' or 'void' as the return type of main")

        self._expect(TokenType.MAIN, "'main'")
        self._expect(TokenType.LPAREN, "'('")
        self._expect(TokenType.RPAREN, "')' (main takes no parameters)")
        statements = self._parse_block()

        return MainFunctionNode(
            location=location,
            return_type_int=return_type_int.text if return_type_int else None,
            return_type_void=return_type_void.text if return_type_void else None,
            statements=statements,
        )

    def _parse_function(self) -> FunctionNode:
        """Parse an ordinary function definition."""
        start = self._pos
        location = self._peek().location
        return_type = self._advance().text
        name = self._expect(TokenType.ID, "function name").text

        self._expect(TokenType.LPAREN, "'('")
        parameters = self._parse_parameter_list()
        self._expect(TokenType.RPAREN, "')'")
        statements = self._parse_block()

        return FunctionNode(
            location=location,
            name=name,
            return_type=return_type,
            parameters=parameters,
            statements=statements,
            text="".join(token.text for token in self.tokens[start:self._pos]),
        )

    def _parse_parameter_list(self) -> list[ParameterNode]:
        parameters = []

        if self._check(TokenType.RPAREN):
            return parameters

        while True:
            location = self._peek().location
            if not self._is_data_type():
                raise self._unexpected("parameter type")
            data_type = self._advance().text
            name = self._expect(TokenType.ID, "parameter name").text
            parameters.append(ParameterNode(location=location, data_type=data_type, name=name))

            if not self._match(TokenType.COMMA):
                break

        return parameters

    # =========================================================================
    # Statement Parsing
    # =========================================================================

    def _parse_block(self) -> list[StatementNode]:
        """Parse `{ statement* }`, recovering from errors statement by statement."""
        self._expect(TokenType.LBRACE, "'{'")

        statements = []
        while not self._check(TokenType.RBRACE) and not self._at_end():
            start = self._pos
            try:
                statement = self._parse_statement()
                if statement is not None:
                    statements.append(statement)
            except LanguageSyntaxError as e:
                self._errors.add(e)
                if self._errors.should_stop():
                    raise
                self._synchronize_statement(start)

        self._expect(TokenType.RBRACE, "'}'")
        return statements

    def _parse_statement(self) -> Optional[StatementNode]:
        """Parse any statement."""
        token = self._peek()

        if self._is_data_type():
            declaration = self._parse_variable_declaration()
            self._expect(TokenType.SEMICOLON, "';'")
            return StatementNode(location=token.location, declaration=declaration)

        if token.type in (TokenType.IF, TokenType.FOR, TokenType.WHILE):
            return StatementNode(location=token.location, control_block=self._parse_control_block())

        if token.type == TokenType.RETURN:
            self._advance()
            value = None
            if not self._check(TokenType.SEMICOLON):
                value = self._parse_expression()
            self._expect(TokenType.SEMICOLON, "';'")
            return StatementNode(
                location=token.location,
                simple=ReturnStatement(location=token.location, value=value),
            )

        if token.type == TokenType.SEMICOLON:
            self._advance()
            return None

        expression = self._parse_expression()
        self._expect(TokenType.SEMICOLON, "';'")
        return StatementNode(
            location=token.location,
            simple=ExpressionStatement(location=token.location, expression=expression),
        )

    def _parse_variable_declaration(self) -> VariableDeclarationNode:
        """Parse `data_type a, b (= constant)?` without the trailing ';'."""
        location = self._peek().location
        data_type = self._advance().text

        variables = [self._expect(TokenType.ID, "variable name").text]
        while self._match(TokenType.COMMA):
            variables.append(self._expect(TokenType.ID, "variable name").text)

        constant = None
        if self._match(TokenType.ASSIGN):
            constant = self._parse_constant()

        return VariableDeclarationNode(
            location=location,
            data_type=data_type,
            variables=variables,
            constant=constant,
        )

    def _parse_constant(self) -> str:
        """Parse a constant and return its source text (`-` sign included)."""
        if self._check(TokenType.MINUS) and self._peek(1).type in (TokenType.INT_CONST, TokenType.FLOAT_CONST):
            sign = self._advance().text
            return sign + self._advance().text

        token = self._match(*CONSTANT_TOKENS)
        if token is None:
            raise self._unexpected("constant")
        return token.text

    # =========================================================================
    # Control Blocks
    # =========================================================================

    def _parse_control_block(self) -> ControlBlockNode:
        location = self._peek().location

        if self._check(TokenType.IF):
            block = self._parse_if()
            if isinstance(block, IfElseBlock):
                return ControlBlockNode(location=location, if_else_block=block)
            return ControlBlockNode(location=location, if_block=block)

        if self._check(TokenType.FOR):
            return ControlBlockNode(location=location, for_block=self._parse_for())

        if self._check(TokenType.WHILE):
            return ControlBlockNode(location=location, while_block=self._parse_while())

        raise self._unexpected("'if', 'for' or 'while'")

    def _parse_condition(self) -> Expression:
        self._expect(TokenType.LPAREN, "'('")
        condition = self._parse_expression()
        self._expect(TokenType.RPAREN, "')'")
        return condition

    def _parse_if(self) -> Union[IfBlock, IfElseBlock]:
        """Parse an if block, or an if...else block when an else follows."""
        location = self._expect(TokenType.IF, "'if'").location
        condition = self._parse_condition()
        then_body = self._parse_block()

        if not self._check(TokenType.ELSE):
            return IfBlock(location=location, condition=condition, body=then_body)

        self._advance()
        if self._check(TokenType.IF, TokenType.FOR, TokenType.WHILE):
            nested_location = self._peek().location
            else_body = [StatementNode(location=nested_location, control_block=self._parse_control_block())]
        else:
            else_body = self._parse_block()

        return IfElseBlock(
            location=location,
            condition=condition,
            then_body=then_body,
            else_body=else_body,
        )

    def _parse_for(self) -> ForBlock:
        location = self._expect(TokenType.FOR, "'for'").location
        self._expect(TokenType.LPAREN, "'('")

        initializer = None
        if self._is_data_type():
            initializer = self._parse_variable_declaration()
        elif not self._check(TokenType.SEMICOLON):
            initializer = self._parse_expression()
        self._expect(TokenType.SEMICOLON, "';'")

        condition = None
        if not self._check(TokenType.SEMICOLON):
            condition = self._parse_expression()
        self._expect(TokenType.SEMICOLON, "';'")

        update = None
        if not self._check(TokenType.RPAREN):
            update = self._parse_expression()
        self._expect(TokenType.RPAREN, "')'")

        body = self._parse_block()

        return ForBlock(
            location=location,
            initializer=initializer,
            condition=condition,
            update=update,
            body=body,
        )

    def _parse_while(self) -> WhileBlock:
        location = self._expect(TokenType.WHILE, "'while'").location
        condition = self._parse_condition()
        body = self._parse_block()
        return WhileBlock(location=location, condition=condition, body=body)

    # =========================================================================
    # Expression Parsing (Operator Precedence)
    # =========================================================================

    def _parse_expression(self) -> Expression:
        return self._parse_assignment()

    def _parse_assignment(self) -> Expression:
        """Parse assignment expression (right-associative)."""
        expr = self._parse_logical_or()

        assign_ops = {
            TokenType.ASSIGN: AssignmentOperator.ASSIGN,
            TokenType.PLUS_ASSIGN: AssignmentOperator.ADD_ASSIGN,
            TokenType.MINUS_ASSIGN: AssignmentOperator.SUB_ASSIGN,
            TokenType.STAR_ASSIGN: AssignmentOperator.MUL_ASSIGN,
            TokenType.SLASH_ASSIGN: AssignmentOperator.DIV_ASSIGN,
        }

        if self._peek().type in assign_ops:
            op_token = self._advance()
            value = self._parse_assignment()
            return AssignmentExpression(
                location=expr.location,
                operator=assign_ops[op_token.type],
                target=expr,
                value=value,
            )

        return expr

    def _parse_logical_or(self) -> Expression:
        return self._parse_binary(
            self._parse_logical_and,
            {TokenType.OR: BinaryOperator.LOGICAL_OR},
        )

    def _parse_logical_and(self) -> Expression:
        return self._parse_binary(
            self._parse_equality,
            {TokenType.AND: BinaryOperator.LOGICAL_AND},
        )

    def _parse_equality(self) -> Expression:
        return self._parse_binary(
            self._parse_relational,
            {
                TokenType.EQ: BinaryOperator.EQUAL,
                TokenType.NE: BinaryOperator.NOT_EQUAL,
            },
        )

    def _parse_relational(self) -> Expression:
        return self._parse_binary(
            self._parse_additive,
            {
                TokenType.LT: BinaryOperator.LESS,
                TokenType.GT: BinaryOperator.GREATER,
                TokenType.LE: BinaryOperator.LESS_EQ,
                TokenType.GE: BinaryOperator.GREATER_EQ,
            },
        )

    def _parse_additive(self) -> Expression:
        return self._parse_binary(
            self._parse_multiplicative,
            {
                TokenType.PLUS: BinaryOperator.ADD,
                TokenType.MINUS: BinaryOperator.SUBTRACT,
            },
        )

    def _parse_multiplicative(self) -> Expression:
        return self._parse_binary(
            self._parse_unary,
            {
                TokenType.STAR: BinaryOperator.MULTIPLY,
                TokenType.SLASH: BinaryOperator.DIVIDE,
                TokenType.PERCENT: BinaryOperator.MODULO,
            },
        )

    def _parse_binary(
        self,
        operand_parser: Callable[[], Expression],
        operators: dict[TokenType, BinaryOperator],
    ) -> Expression:
        """
        Generic left-associative binary expression parser.

        Args:
            operand_parser: Function to parse operands
            operators: Map of token types to binary operators
        """
        expr = operand_parser()

        while self._peek().type in operators:
            op_token = self._advance()
            right = operand_parser()
            expr = BinaryExpression(
                location=expr.location,
                operator=operators[op_token.type],
                left=expr,
                right=right,
            )

        return expr

    def _parse_unary(self) -> Expression:
        """Parse unary expression (- ! ++ --)."""
        unary_ops = {
            TokenType.MINUS: UnaryOperator.NEGATE,
            TokenType.NOT: UnaryOperator.LOGICAL_NOT,
            TokenType.INCREMENT: UnaryOperator.PRE_INCREMENT,
            TokenType.DECREMENT: UnaryOperator.PRE_DECREMENT,
        }

        if self._peek().type in unary_ops:
            op_token = self._advance()
            operand = self._parse_unary()
            return UnaryExpression(
                location=op_token.location,
                operator=unary_ops[op_token.type],
                operand=operand,
            )

        return self._parse_postfix()

    def _parse_postfix(self) -> Expression:
        """Parse postfix expression (call, x++, x--)."""
        expr = self._parse_primary()

        while True:
            if self._match(TokenType.INCREMENT):
                expr = UnaryExpression(location=expr.location, operator=UnaryOperator.POST_INCREMENT, operand=expr)
            elif self._match(TokenType.DECREMENT):
                expr = UnaryExpression(location=expr.location, operator=UnaryOperator.POST_DECREMENT, operand=expr)
            else:
                return expr

    def _parse_primary(self) -> Expression:
        token = self._peek()

        if token.type == TokenType.ID:
            self._advance()
            if self._match(TokenType.LPAREN):
                return CallExpression(
                    location=token.location,
                    function_name=token.text,
                    arguments=self._parse_arguments(),
                )
            return IdentifierExpression(location=token.location, name=token.text)

        if token.type in CONSTANT_TOKENS:
            self._advance()
            return ConstantExpression(location=token.location, text=token.text)

        if self._match(TokenType.LPAREN):
            expr = self._parse_expression()
            self._expect(TokenType.RPAREN, "')'")
            return expr

        raise self._unexpected("expression")

    def _parse_arguments(self) -> list[Expression]:
        """Parse call arguments after '(' up to and including ')'."""
        arguments = []
        if not self._check(TokenType.RPAREN):
            arguments.append(self._parse_expression())
            while self._match(TokenType.COMMA):
                arguments.append(self._parse_expression())
        self._expect(TokenType.RPAREN, "')'")
        return arguments


# =============================================================================
# Convenience Functions
# =============================================================================

def parse_source(source: str, filename: str = "<input>") -> ProgramNode:
    """
    Lex and parse MiniC source into a ProgramNode.

    Raises:
        ScanFailedError: If the source has syntax errors
    """
    tokens = list(Lexer(source, filename).tokenize())
    return Parser(tokens, filename, source.splitlines()).parse()
