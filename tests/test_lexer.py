# =============================================================================
# test_lexer.py - Lexer Unit Tests
# =============================================================================
# Tests for the MiniC lexer/tokenizer.
#
# Test coverage includes:
#   - Keywords, identifiers and the main keyword
#   - Integer, float, string and char constants
#   - Operators and delimiters
#   - Comments and whitespace handling
#   - Position tracking
#   - Lexical errors (ERROR tokens, never exceptions)
# =============================================================================

import pytest
from symscan.lang.lexer import (
    DATA_TYPE_TOKENS,
    TokenType,
    Token,
    lexical_errors,
    tokenize as lex,
)
from symscan.lang.errors import LexicalError
from symscan.errors import SourceLocation


# =============================================================================
# Helper Function
# =============================================================================

def tokenize(source: str) -> list:
    """
    Helper to tokenize and drop the trailing EOF token.
    """
    return [t for t in lex(source, "<test>") if t.type != TokenType.EOF]


def types(source: str) -> list:
    return [t.type for t in tokenize(source)]


# =============================================================================
# Basic Token Recognition Tests
# =============================================================================

class TestBasicTokens:
    """Test basic token recognition for simple inputs."""

    def test_empty_source(self):
        """Empty source produces only EOF."""
        tokens = lex("")
        assert len(tokens) == 1
        assert tokens[0].type == TokenType.EOF
        assert tokens[0].text == ""

    def test_whitespace_only(self):
        """Whitespace produces no meaningful tokens."""
        assert tokenize("  \t\n\r\n ") == []

    def test_stream_ends_with_eof(self):
        """The token stream always ends with EOF."""
        tokens = lex("int x = 5;")
        assert tokens[-1].type == TokenType.EOF
        assert sum(1 for t in tokens if t.type == TokenType.EOF) == 1

    def test_identifier(self):
        tokens = tokenize("counter")
        assert len(tokens) == 1
        assert tokens[0].type == TokenType.ID
        assert tokens[0].text == "counter"

    def test_identifier_with_underscore_and_digits(self):
        """Identifiers may contain underscores and digits (not at start)."""
        tokens = tokenize("_my_var2")
        assert tokens[0].type == TokenType.ID
        assert tokens[0].text == "_my_var2"

    def test_keyword_prefix_is_identifier(self):
        """A keyword embedded in a longer name is an identifier."""
        assert types("integer iffy mainly") == [TokenType.ID, TokenType.ID, TokenType.ID]


class TestKeywords:
    """Test keyword recognition."""

    @pytest.mark.parametrize("text,token_type", [
        ("int", TokenType.INT),
        ("float", TokenType.FLOAT),
        ("double", TokenType.DOUBLE),
        ("char", TokenType.CHAR),
        ("string", TokenType.STRING),
        ("bool", TokenType.BOOL),
        ("void", TokenType.VOID),
        ("main", TokenType.MAIN),
        ("if", TokenType.IF),
        ("else", TokenType.ELSE),
        ("for", TokenType.FOR),
        ("while", TokenType.WHILE),
        ("return", TokenType.RETURN),
        ("true", TokenType.TRUE),
        ("false", TokenType.FALSE),
    ])
    def test_keyword(self, text, token_type):
        tokens = tokenize(text)
        assert len(tokens) == 1
        assert tokens[0].type == token_type
        assert tokens[0].text == text

    def test_keywords_are_case_sensitive(self):
        assert types("Int MAIN") == [TokenType.ID, TokenType.ID]

    def test_data_type_tokens(self):
        """The six data types are data type tokens; void is not."""
        tokens = tokenize("int float double char string bool void")
        assert [t.type in DATA_TYPE_TOKENS for t in tokens] == [True] * 6 + [False]


# =============================================================================
# Constant Tests
# =============================================================================

class TestConstants:
    """Test constant recognition; constants keep their source text."""

    def test_integer(self):
        tokens = tokenize("42")
        assert tokens[0].type == TokenType.INT_CONST
        assert tokens[0].text == "42"

    def test_float(self):
        tokens = tokenize("3.14")
        assert tokens[0].type == TokenType.FLOAT_CONST
        assert tokens[0].text == "3.14"

    def test_trailing_dot_is_not_float(self):
        """A dot without following digits is not part of the number."""
        tokens = tokenize("3.")
        assert tokens[0].type == TokenType.INT_CONST
        assert tokens[0].text == "3"
        assert tokens[1].type == TokenType.ERROR
        assert tokens[1].text == "."

    def test_negative_number_is_two_tokens(self):
        """The sign is an operator, not part of the constant."""
        assert types("-5") == [TokenType.MINUS, TokenType.INT_CONST]

    def test_string_keeps_quotes(self):
        tokens = tokenize('"hello world"')
        assert tokens[0].type == TokenType.STRING_CONST
        assert tokens[0].text == '"hello world"'

    def test_string_escape_kept_verbatim(self):
        tokens = tokenize(r'"say \"hi\"\n"')
        assert len(tokens) == 1
        assert tokens[0].type == TokenType.STRING_CONST
        assert tokens[0].text == r'"say \"hi\"\n"'

    def test_char(self):
        tokens = tokenize("'a'")
        assert tokens[0].type == TokenType.CHAR_CONST
        assert tokens[0].text == "'a'"

    def test_char_escape(self):
        tokens = tokenize(r"'\n'")
        assert tokens[0].type == TokenType.CHAR_CONST
        assert tokens[0].text == r"'\n'"


# =============================================================================
# Operator and Delimiter Tests
# =============================================================================

class TestOperators:
    """Test operator and delimiter recognition."""

    def test_arithmetic(self):
        assert types("+ - * / %") == [
            TokenType.PLUS, TokenType.MINUS, TokenType.STAR,
            TokenType.SLASH, TokenType.PERCENT,
        ]

    def test_increment_decrement(self):
        assert types("++ --") == [TokenType.INCREMENT, TokenType.DECREMENT]

    def test_assignment(self):
        assert types("= += -= *= /=") == [
            TokenType.ASSIGN, TokenType.PLUS_ASSIGN, TokenType.MINUS_ASSIGN,
            TokenType.STAR_ASSIGN, TokenType.SLASH_ASSIGN,
        ]

    def test_comparison(self):
        assert types("== != < > <= >=") == [
            TokenType.EQ, TokenType.NE, TokenType.LT,
            TokenType.GT, TokenType.LE, TokenType.GE,
        ]

    def test_logical(self):
        assert types("&& || !") == [TokenType.AND, TokenType.OR, TokenType.NOT]

    def test_delimiters(self):
        assert types("( ) { } , ;") == [
            TokenType.LPAREN, TokenType.RPAREN, TokenType.LBRACE,
            TokenType.RBRACE, TokenType.COMMA, TokenType.SEMICOLON,
        ]

    def test_no_whitespace_needed(self):
        """Operators split adjacent tokens."""
        assert types("i<=10") == [TokenType.ID, TokenType.LE, TokenType.INT_CONST]


# =============================================================================
# Comment and Position Tests
# =============================================================================

class TestComments:
    """Comments are skipped like whitespace."""

    def test_line_comment(self):
        assert types("int // the rest is ignored\nx") == [TokenType.INT, TokenType.ID]

    def test_block_comment(self):
        assert types("int /* a\nmulti-line\ncomment */ x") == [TokenType.INT, TokenType.ID]

    def test_block_comment_advances_line(self):
        tokens = tokenize("/* one\ntwo */ x")
        assert tokens[0].line == 2


class TestPositions:
    """Test line and column tracking."""

    def test_line_and_column(self):
        tokens = tokenize("int a;\n  float b;")
        assert (tokens[0].line, tokens[0].column) == (1, 1)
        assert (tokens[1].line, tokens[1].column) == (1, 5)
        float_token = tokens[3]
        assert float_token.type == TokenType.FLOAT
        assert (float_token.line, float_token.column) == (2, 3)

    def test_location(self):
        token = tokenize("x")[0]
        assert token.location == SourceLocation("<test>", 1, 1)

    def test_repr(self):
        token = Token(TokenType.ID, "x", 3, 7)
        assert repr(token) == "Token(ID, 'x', 3:7)"


# =============================================================================
# Lexical Error Tests
# =============================================================================

class TestLexicalErrors:
    """Unrecognised input becomes ERROR tokens; the lexer never raises."""

    def test_unknown_character(self):
        tokens = tokenize("int @ x")
        assert [t.type for t in tokens] == [TokenType.INT, TokenType.ERROR, TokenType.ID]
        assert tokens[1].text == "@"

    def test_lexing_continues_after_error(self):
        tokens = tokenize("# $ x;")
        assert [t.type for t in tokens] == [
            TokenType.ERROR, TokenType.ERROR, TokenType.ID, TokenType.SEMICOLON,
        ]

    def test_single_ampersand_and_pipe(self):
        tokens = tokenize("& |")
        assert [t.type for t in tokens] == [TokenType.ERROR, TokenType.ERROR]
        assert [t.text for t in tokens] == ["&", "|"]

    def test_unterminated_string(self):
        """An open string covers the rest of its line."""
        tokens = tokenize('"abc\nx')
        assert tokens[0].type == TokenType.ERROR
        assert tokens[0].text == '"abc'
        assert tokens[1].type == TokenType.ID
        assert tokens[1].line == 2

    def test_empty_char(self):
        tokens = tokenize("''")
        assert tokens[0].type == TokenType.ERROR
        assert tokens[0].text == "''"

    def test_unterminated_block_comment(self):
        tokens = tokenize("x /* never closed")
        assert tokens[1].type == TokenType.ERROR
        assert tokens[1].text == "/* never closed"

    @pytest.mark.parametrize("digit", ["²", "٣", "５"])
    def test_non_ascii_digit(self, digit):
        """Only ASCII digits start a number."""
        tokens = tokenize(f"int x = {digit};")
        assert [t.type for t in tokens] == [
            TokenType.INT, TokenType.ID, TokenType.ASSIGN,
            TokenType.ERROR, TokenType.SEMICOLON,
        ]
        assert tokens[3].text == digit

    def test_non_ascii_digit_ends_number(self):
        tokens = tokenize("12²")
        assert [(t.type, t.text) for t in tokens] == [
            (TokenType.INT_CONST, "12"),
            (TokenType.ERROR, "²"),
        ]

    def test_non_ascii_digit_after_dot(self):
        tokens = tokenize("1.٣")
        assert [(t.type, t.text) for t in tokens] == [
            (TokenType.INT_CONST, "1"),
            (TokenType.ERROR, "."),
            (TokenType.ERROR, "٣"),
        ]

    def test_lexical_errors_notices(self):
        errors = lexical_errors(lex("int @;\nfloat #;", "t.mc"))
        assert len(errors) == 2
        assert all(isinstance(e, LexicalError) for e in errors)
        assert [e.text for e in errors] == ["@", "#"]
        assert [e.line for e in errors] == [1, 2]
        assert errors[0].location == SourceLocation("t.mc", 1, 5)

    def test_lexical_errors_none(self):
        assert lexical_errors(lex("int x = 5;")) == []

    def test_lexical_error_message(self):
        error = LexicalError("@", SourceLocation("t.mc", 4, 2))
        assert str(error) == "Lexical error detected: @ at line 4"
