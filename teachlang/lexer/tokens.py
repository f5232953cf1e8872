"""
Token definitions for the TeachLang lexer.

This module defines every token type the language uses:
- Keywords (control flow, built-in statements and type names)
- Operators (arithmetic, assignment, comparison)
- Literals (numbers, strings, characters)
- Identifiers, punctuation and error tokens

Author: xwest
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Optional


class TokenType(Enum):
    """
    Enumeration of all token types in TeachLang.

    Organized by category for clarity and maintainability.
    """

    # ========================================================================
    # Special Tokens
    # ========================================================================
    EOF = auto()                    # End of input
    ERROR = auto()                  # Lexical error (see Token.error)

    # ========================================================================
    # Literals and Identifiers
    # ========================================================================
    NUMBER = auto()                 # 42, 3.14
    STRING_LITERAL = auto()         # "hello"
    CHAR_LITERAL = auto()           # 'a'
    IDENTIFIER = auto()             # variable_name

    # ========================================================================
    # Keywords
    # ========================================================================

    # Control flow keywords
    IF = auto()                     # if
    WHILE = auto()                  # while
    REPEAT = auto()                 # repeat
    UNTIL = auto()                  # until
    DO = auto()                     # do (reserved)

    # Built-in statements
    PRINT = auto()                  # print
    FACTORIAL = auto()              # factorial

    # Type names
    INT = auto()                    # int
    FLOAT = auto()                  # float
    BOOL = auto()                   # bool
    CHAR = auto()                   # char
    STRING = auto()                 # string

    # ========================================================================
    # Operators
    # ========================================================================
    OPERATOR = auto()               # + - * /
    EQUALS = auto()                 # =
    COMPARISON = auto()             # < > == !=

    # ========================================================================
    # Punctuation and Delimiters
    # ========================================================================
    SEMICOLON = auto()              # ;
    LEFT_PAREN = auto()             # (
    RIGHT_PAREN = auto()            # )
    LEFT_BRACE = auto()             # {
    RIGHT_BRACE = auto()            # }


class LexicalErrorKind(Enum):
    """Classification attached to ERROR tokens."""
    INVALID_CHARACTER = "invalid character"
    UNTERMINATED_STRING = "unterminated string literal"
    UNTERMINATED_CHAR = "unterminated character literal"
    CONSECUTIVE_OPERATORS = "consecutive operators"


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the source code.

    Used for error reporting and diagnostics.
    """
    filename: str
    line: int
    column: int
    offset: int  # Character offset from start of input

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"SourceLocation({self.filename!r}, {self.line}, {self.column}, {self.offset})"


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token in the TeachLang language.

    Contains the token type, lexeme (raw text), source location, and
    the lexical error classification for ERROR tokens.
    """
    type: TokenType
    lexeme: str                                 # Raw text from source
    location: SourceLocation                    # Source location
    error: Optional[LexicalErrorKind] = None    # Set on ERROR tokens only

    def __str__(self) -> str:
        if self.error is not None:
            return f"{self.type.name}({self.lexeme!r}: {self.error.value})"
        return f"{self.type.name}({self.lexeme!r})"

    def __repr__(self) -> str:
        return (f"Token({self.type.name}, {self.lexeme!r}, "
                f"{self.location!r}, {self.error!r})")

    @property
    def line(self) -> int:
        """Source line of the token."""
        return self.location.line

    @property
    def is_literal(self) -> bool:
        """Check if this token is a literal value."""
        return self.type in LITERAL_TYPES

    @property
    def is_keyword(self) -> bool:
        """Check if this token is a keyword."""
        return self.type in KEYWORDS.values()

    @property
    def is_type_name(self) -> bool:
        """Check if this token names a variable type."""
        return self.type in TYPE_KEYWORDS

    @property
    def is_error(self) -> bool:
        """Check if this token carries a lexical error."""
        return self.type == TokenType.ERROR


# Lookup tables used by the lexer and parser

KEYWORDS = {
    "if": TokenType.IF,
    "while": TokenType.WHILE,
    "repeat": TokenType.REPEAT,
    "until": TokenType.UNTIL,
    "do": TokenType.DO,
    "print": TokenType.PRINT,
    "factorial": TokenType.FACTORIAL,
    "int": TokenType.INT,
    "float": TokenType.FLOAT,
    "bool": TokenType.BOOL,
    "char": TokenType.CHAR,
    "string": TokenType.STRING,
}

TYPE_KEYWORDS = frozenset({
    TokenType.INT,
    TokenType.FLOAT,
    TokenType.BOOL,
    TokenType.CHAR,
    TokenType.STRING,
})

LITERAL_TYPES = frozenset({
    TokenType.NUMBER,
    TokenType.STRING_LITERAL,
    TokenType.CHAR_LITERAL,
})

ARITHMETIC_OPERATORS = frozenset({"+", "-", "*", "/"})

PUNCTUATION = {
    ";": TokenType.SEMICOLON,
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
}
