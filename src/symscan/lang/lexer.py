"""
MiniC Lexer (Tokenizer)
=======================

This module implements the lexer for MiniC, the small C-like language
symscan analyzes. It converts source text into a stream of tokens for
the parser.

Token Categories
----------------
- Keywords: int, float, double, char, string, bool, void, main,
  if, else, for, while, return, true, false
- Identifiers (ID): variable and function names
- Constants: integer (42), float (3.14), string ("..."), char ('a')
- Operators: + - * / % ++ -- = += -= *= /= == != < > <= >= && || !
- Delimiters: ( ) { } , ;
- ERROR: anything the language does not recognise

Comments
--------
- Single-line: // comment
- Multi-line: /* comment */

Lexical Errors
--------------
The lexer never raises. Invalid characters, unterminated string or
character literals and unterminated block comments are emitted as
ERROR tokens carrying the offending text, so the caller can report
them and keep going. The parser skips ERROR tokens.

Example Usage
-------------
>>> from symscan.lang.lexer import Lexer
>>> lexer = Lexer('int main() { return 0; }', "test.mc")
>>> for token in lexer.tokenize():
...     print(token)
Token(INT, 'int', 1:1)
Token(MAIN, 'main', 1:5)
Token(LPAREN, '(', 1:9)
Token(RPAREN, ')', 1:10)
Token(LBRACE, '{', 1:12)
Token(RETURN, 'return', 1:14)
Token(INT_CONST, '0', 1:21)
Token(SEMICOLON, ';', 1:22)
Token(RBRACE, '}', 1:24)
Token(EOF, '', 1:25)
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Iterator, Optional
import logging
import string

from symscan.errors import SourceLocation
from symscan.lang.errors import LexicalError

logger = logging.getLogger(__name__)


# =============================================================================
# Token Type Enumeration
# =============================================================================

class TokenType(Enum):
    """
    Token types for MiniC.

    The enum member names double as the symbolic names written to the
    lexeme report, so renaming one changes the report format.
    """

    # === Structural Tokens ===
    EOF = auto()
    ERROR = auto()          # Unrecognised input

    # === Identifiers and Constants ===
    ID = auto()
    INT_CONST = auto()      # 42
    FLOAT_CONST = auto()    # 3.14
    STRING_CONST = auto()   # "text"
    CHAR_CONST = auto()     # 'c'

    # === Keywords - Data Types ===
    INT = auto()
    FLOAT = auto()
    DOUBLE = auto()
    CHAR = auto()
    STRING = auto()
    BOOL = auto()
    VOID = auto()

    # === Keywords - Other ===
    MAIN = auto()
    IF = auto()
    ELSE = auto()
    FOR = auto()
    WHILE = auto()
    RETURN = auto()
    TRUE = auto()
    FALSE = auto()

    # === Arithmetic Operators ===
    PLUS = auto()           # +
    MINUS = auto()          # -
    STAR = auto()           # *
    SLASH = auto()          # /
    PERCENT = auto()        # %
    INCREMENT = auto()      # ++
    DECREMENT = auto()      # --

    # === Assignment Operators ===
    ASSIGN = auto()         # =
    PLUS_ASSIGN = auto()    # +=
    MINUS_ASSIGN = auto()   # -=
    STAR_ASSIGN = auto()    # *=
    SLASH_ASSIGN = auto()   # /=

    # === Comparison Operators ===
    EQ = auto()             # ==
    NE = auto()             # !=
    LT = auto()             # <
    GT = auto()             # >
    LE = auto()             # <=
    GE = auto()             # >=

    # === Logical Operators ===
    AND = auto()            # &&
    OR = auto()             # ||
    NOT = auto()            # !

    # === Delimiters ===
    LPAREN = auto()         # (
    RPAREN = auto()         # )
    LBRACE = auto()         # {
    RBRACE = auto()         # }
    COMMA = auto()          # ,
    SEMICOLON = auto()      # ;


# =============================================================================
# Keyword Mapping
# =============================================================================

KEYWORDS: dict[str, TokenType] = {
    # Data types
    "int": TokenType.INT,
    "float": TokenType.FLOAT,
    "double": TokenType.DOUBLE,
    "char": TokenType.CHAR,
    "string": TokenType.STRING,
    "bool": TokenType.BOOL,
    "void": TokenType.VOID,

    # Entry function name
    "main": TokenType.MAIN,

    # Control flow
    "if": TokenType.IF,
    "else": TokenType.ELSE,
    "for": TokenType.FOR,
    "while": TokenType.WHILE,
    "return": TokenType.RETURN,

    # Boolean constants
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
}

DATA_TYPE_TOKENS = (
    TokenType.INT,
    TokenType.FLOAT,
    TokenType.DOUBLE,
    TokenType.CHAR,
    TokenType.STRING,
    TokenType.BOOL,
)


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single token from MiniC source code.

    The text is always the exact source text of the token (quotes
    included for string and char constants), which is what both the
    lexeme report and the syntax tree record.

    Attributes:
        type: The TokenType classification
        text: The source text of the token
        line: Line number in source (1-indexed)
        column: Column number in source (1-indexed)
        filename: Name of the source file
    """
    type: TokenType
    text: str
    line: int
    column: int
    filename: str = "<input>"

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.text!r}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)


# =============================================================================
# Lexer Implementation
# =============================================================================

class Lexer:
    """
    Tokenizes MiniC source code.

    Usage:
        lexer = Lexer(source_text, filename)
        tokens = list(lexer.tokenize())

    Attributes:
        source: The source code being tokenized
        filename: Name of the source file (for error reporting)
    """

    IDENT_START = string.ascii_letters + "_"
    IDENT_CHARS = string.ascii_letters + string.digits + "_"

    SINGLE_TOKENS = {
        "(": TokenType.LPAREN,
        ")": TokenType.RPAREN,
        "{": TokenType.LBRACE,
        "}": TokenType.RBRACE,
        ",": TokenType.COMMA,
        ";": TokenType.SEMICOLON,
    }

    def __init__(self, source: str, filename: str = "<input>"):
        self.source = source
        self.filename = filename

        self._pos = 0
        self._line = 1
        self._column = 1

    def tokenize(self) -> Iterator[Token]:
        """
        Generate tokens from the source code.

        Yields:
            Token objects, ERROR tokens included, always ending with EOF
        """
        while True:
            error = self._skip_whitespace_and_comments()
            if error is not None:
                yield error
                continue

            if self._at_end():
                break

            yield self._scan_token()

        yield self._make_token(TokenType.EOF, "", self._line, self._column)

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._pos >= len(self.source)

    def _peek(self, offset: int = 0) -> str:
        """Look at character at current position + offset ("" past the end)."""
        pos = self._pos + offset
        if pos >= len(self.source):
            return ""
        return self.source[pos]

    def _advance(self) -> str:
        """Consume and return the current character, tracking line and column."""
        if self._at_end():
            return ""

        char = self.source[self._pos]
        self._pos += 1

        if char == "\n":
            self._line += 1
            self._column = 1
        else:
            self._column += 1

        return char

    def _match(self, expected: str) -> bool:
        """Consume next character if it matches expected."""
        if self._peek() == expected:
            self._advance()
            return True
        return False

    # =========================================================================
    # Token Creation
    # =========================================================================

    def _make_token(
        self,
        token_type: TokenType,
        text: str,
        start_line: int,
        start_column: int,
    ) -> Token:
        return Token(
            type=token_type,
            text=text,
            line=start_line,
            column=start_column,
            filename=self.filename,
        )

    def _error_token(self, text: str, start_line: int, start_column: int) -> Token:
        logger.debug(f"Lexical error at {self.filename}:{start_line}:{start_column}: {text!r}")
        return self._make_token(TokenType.ERROR, text, start_line, start_column)

    # =========================================================================
    # Whitespace and Comment Handling
    # =========================================================================

    def _skip_whitespace_and_comments(self) -> Optional[Token]:
        """
        Skip all whitespace and comments.

        Returns:
            An ERROR token if an unterminated block comment was found,
            otherwise None
        """
        while not self._at_end():
            char = self._peek()

            if char in " \t\n\r":
                self._advance()
                continue

            if char == "/" and self._peek(1) == "/":
                while not self._at_end() and self._peek() != "\n":
                    self._advance()
                continue

            if char == "/" and self._peek(1) == "*":
                error = self._skip_multi_line_comment()
                if error is not None:
                    return error
                continue

            break

        return None

    def _skip_multi_line_comment(self) -> Optional[Token]:
        """Skip a /* ... */ comment; unterminated comments become ERROR tokens."""
        start_line = self._line
        start_column = self._column
        start_pos = self._pos

        self._advance()
        self._advance()

        while not self._at_end():
            if self._peek() == "*" and self._peek(1) == "/":
                self._advance()
                self._advance()
                return None
            self._advance()

        return self._error_token(self.source[start_pos:self._pos], start_line, start_column)

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _scan_token(self) -> Token:
        start_line = self._line
        start_column = self._column

        char = self._peek()

        if char in self.IDENT_START:
            return self._scan_identifier(start_line, start_column)

        if char in string.digits:
            return self._scan_number(start_line, start_column)

        if char == '"':
            return self._scan_string(start_line, start_column)

        if char == "'":
            return self._scan_char(start_line, start_column)

        return self._scan_operator(start_line, start_column)

    def _scan_identifier(self, start_line: int, start_column: int) -> Token:
        """Scan an identifier or keyword."""
        chars = []
        while self._peek() and self._peek() in self.IDENT_CHARS:
            chars.append(self._advance())

        name = "".join(chars)
        token_type = KEYWORDS.get(name, TokenType.ID)
        return self._make_token(token_type, name, start_line, start_column)

    def _scan_number(self, start_line: int, start_column: int) -> Token:
        """Scan an integer or float constant (digits, optionally '.' digits)."""
        chars = []
        while self._peek() and self._peek() in string.digits:
            chars.append(self._advance())

        if self._peek() == "." and self._peek(1) and self._peek(1) in string.digits:
            chars.append(self._advance())
            while self._peek() and self._peek() in string.digits:
                chars.append(self._advance())
            return self._make_token(TokenType.FLOAT_CONST, "".join(chars), start_line, start_column)

        return self._make_token(TokenType.INT_CONST, "".join(chars), start_line, start_column)

    def _scan_string(self, start_line: int, start_column: int) -> Token:
        """
        Scan a double-quoted string constant.

        Escape sequences are kept verbatim. A string still open at the end
        of the line is an ERROR token covering the rest of the line.
        """
        start_pos = self._pos
        self._advance()

        while not self._at_end() and self._peek() != "\n":
            char = self._advance()
            if char == "\\":
                if self._peek() and self._peek() != "\n":
                    self._advance()
                continue
            if char == '"':
                return self._make_token(
                    TokenType.STRING_CONST,
                    self.source[start_pos:self._pos],
                    start_line,
                    start_column,
                )

        return self._error_token(self.source[start_pos:self._pos], start_line, start_column)

    def _scan_char(self, start_line: int, start_column: int) -> Token:
        """Scan a character constant: 'c' or an escape such as '\\n'."""
        start_pos = self._pos
        self._advance()

        if self._peek() == "\\":
            self._advance()
            if self._peek() and self._peek() != "\n":
                self._advance()
        elif self._peek() and self._peek() not in "'\n":
            self._advance()

        if self._match("'") and self._pos - start_pos > 2:
            return self._make_token(
                TokenType.CHAR_CONST,
                self.source[start_pos:self._pos],
                start_line,
                start_column,
            )

        return self._error_token(self.source[start_pos:self._pos], start_line, start_column)

    def _scan_operator(self, start_line: int, start_column: int) -> Token:
        """Scan an operator or delimiter."""
        char = self._advance()

        def make(token_type: TokenType, text: str) -> Token:
            return self._make_token(token_type, text, start_line, start_column)

        if char == "+":
            if self._match("+"):
                return make(TokenType.INCREMENT, "++")
            if self._match("="):
                return make(TokenType.PLUS_ASSIGN, "+=")
            return make(TokenType.PLUS, "+")

        if char == "-":
            if self._match("-"):
                return make(TokenType.DECREMENT, "--")
            if self._match("="):
                return make(TokenType.MINUS_ASSIGN, "-=")
            return make(TokenType.MINUS, "-")

        if char == "*":
            if self._match("="):
                return make(TokenType.STAR_ASSIGN, "*=")
            return make(TokenType.STAR, "*")

        if char == "/":
            if self._match("="):
                return make(TokenType.SLASH_ASSIGN, "/=")
            return make(TokenType.SLASH, "/")

        if char == "%":
            return make(TokenType.PERCENT, "%")

        if char == "=":
            if self._match("="):
                return make(TokenType.EQ, "==")
            return make(TokenType.ASSIGN, "=")

        if char == "!":
            if self._match("="):
                return make(TokenType.NE, "!=")
            return make(TokenType.NOT, "!")

        if char == "<":
            if self._match("="):
                return make(TokenType.LE, "<=")
            return make(TokenType.LT, "<")

        if char == ">":
            if self._match("="):
                return make(TokenType.GE, ">=")
            return make(TokenType.GT, ">")

        if char == "&" and self._match("&"):
            return make(TokenType.AND, "&&")

        if char == "|" and self._match("|"):
            return make(TokenType.OR, "||")

        if char in self.SINGLE_TOKENS:
            return make(self.SINGLE_TOKENS[char], char)

        return self._error_token(char, start_line, start_column)


# =============================================================================
# Convenience Functions
# =============================================================================

def tokenize(source: str, filename: str = "<input>") -> list[Token]:
    """Tokenize source into a list of tokens (ERROR and EOF included)."""
    return list(Lexer(source, filename).tokenize())


def lexical_errors(tokens: Iterable[Token]) -> list[LexicalError]:
    """Return one notice per ERROR token, in stream order."""
    return [
        LexicalError(token.text, token.location)
        for token in tokens
        if token.type == TokenType.ERROR
    ]
