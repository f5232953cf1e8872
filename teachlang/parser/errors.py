"""
Error handling for the TeachLang parser.

Syntax errors are raised inside the parser to unwind out of the statement
being parsed, then recorded and recovered from; they never escape
``Parser.parse``.

Author: xwest
"""

from typing import Optional, List
from enum import Enum

from ..lexer.tokens import Token, TokenType, SourceLocation
from ..lexer.errors import Diagnostic


class SyntaxErrorKind(Enum):
    """Categories of syntax errors."""
    UNEXPECTED_TOKEN = "P001"
    MISSING_SEMICOLON = "P002"
    MISSING_IDENTIFIER = "P003"
    MISSING_EQUALS = "P004"
    INVALID_EXPRESSION = "P005"
    MISSING_BRACKET = "P006"
    MISSING_RPAREN = "P007"
    MISSING_UNTIL = "P008"

    @property
    def code(self) -> str:
        return self.value


class ParseError(Exception):
    """
    A syntax error at a specific token.

    Contains detailed diagnostic information for error reporting.
    """

    def __init__(
        self,
        kind: SyntaxErrorKind,
        message: str,
        token: Token,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.kind = kind
        self.token = token
        self.diagnostic = Diagnostic(
            message=message,
            location=token.location,
            severity="error",
            code=kind.code,
            help_text=help_text,
            suggestions=suggestions
        )

    @property
    def message(self) -> str:
        return self.diagnostic.message

    @property
    def location(self) -> SourceLocation:
        return self.diagnostic.location

    @property
    def line(self) -> int:
        return self.diagnostic.location.line

    def __str__(self) -> str:
        return str(self.diagnostic)


class SyntaxErrorRecovery:
    """
    Utilities for error recovery in the parser.

    Provides the statement-boundary set used for synchronization and
    suggestion text for missing tokens.
    """

    # Token types that end a statement; synchronization consumes them
    STATEMENT_BOUNDARIES = frozenset({
        TokenType.SEMICOLON,
        TokenType.RIGHT_BRACE,
    })

    @staticmethod
    def suggest_missing_token(kind: SyntaxErrorKind) -> List[str]:
        """Suggest what token might be missing."""
        token_suggestions = {
            SyntaxErrorKind.MISSING_SEMICOLON: ["Add a semicolon ';' to end the statement"],
            SyntaxErrorKind.MISSING_RPAREN: ["Add a closing parenthesis ')'"],
            SyntaxErrorKind.MISSING_BRACKET: ["Check that every block is wrapped in '{' and '}'"],
            SyntaxErrorKind.MISSING_EQUALS: ["Add an assignment operator '='"],
            SyntaxErrorKind.MISSING_IDENTIFIER: ["Name the variable after its type, e.g. 'int x;'"],
            SyntaxErrorKind.MISSING_UNTIL: ["Close the loop with 'until <condition>;'"],
        }

        return token_suggestions.get(kind, [])


def _describe(token: Token) -> str:
    if token.type == TokenType.EOF:
        return "end of input"
    return f"'{token.lexeme}'"


def create_syntax_error(kind: SyntaxErrorKind, token: Token,
                        previous: Optional[Token] = None) -> ParseError:
    """
    Create a syntax error of the given kind at ``token``.

    ``previous`` is the last consumed token; messages about missing tokens
    name it as the place where something was expected.
    """
    found = _describe(token)
    after = f" after '{previous.lexeme}'" if previous is not None and previous.lexeme else ""

    messages = {
        SyntaxErrorKind.UNEXPECTED_TOKEN: f"Unexpected token {found}",
        SyntaxErrorKind.MISSING_SEMICOLON: f"Missing semicolon{after}, found {found}",
        SyntaxErrorKind.MISSING_IDENTIFIER: f"Expected identifier{after}, found {found}",
        SyntaxErrorKind.MISSING_EQUALS: f"Expected '='{after}, found {found}",
        SyntaxErrorKind.INVALID_EXPRESSION: f"Invalid expression{after}: unexpected {found}",
        SyntaxErrorKind.MISSING_BRACKET: f"Expected brace, found {found}",
        SyntaxErrorKind.MISSING_RPAREN: f"Expected ')'{after}, found {found}",
        SyntaxErrorKind.MISSING_UNTIL: f"Expected 'until'{after}, found {found}",
    }

    help_text = None
    if token.error is not None:
        help_text = f"The lexer rejected this token: {token.error.value}."

    return ParseError(
        kind=kind,
        message=messages[kind],
        token=token,
        help_text=help_text,
        suggestions=SyntaxErrorRecovery.suggest_missing_token(kind)
    )
