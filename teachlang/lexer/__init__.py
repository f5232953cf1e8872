"""
TeachLang Lexer Package

Implements the token source consumed by the parser.

Key Features:
- One token per ``next_token()`` call, EOF forever after the input ends
- Line/column tracking for diagnostics
- Lexical errors surface as ERROR tokens instead of aborting

Author: xwest
"""

from .tokens import Token, TokenType, SourceLocation, LexicalErrorKind
from .lexer import Lexer, TokenBuffer, tokenize_string
from .errors import Diagnostic, LexerError, format_diagnostics

__all__ = [
    "Lexer",
    "TokenBuffer",
    "tokenize_string",
    "Token",
    "TokenType",
    "SourceLocation",
    "LexicalErrorKind",
    "Diagnostic",
    "LexerError",
    "format_diagnostics",
]
