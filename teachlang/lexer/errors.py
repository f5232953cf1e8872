"""
Error handling for the TeachLang lexer.

Provides the Diagnostic record shared by every front-end stage, the lexer's
own error type, and a stateless renderer for diagnostic lists.

Author: xwest
"""

from typing import Iterable, Optional, List
from dataclasses import dataclass

from .tokens import SourceLocation, LexicalErrorKind


@dataclass
class Diagnostic:
    """Base record for front-end diagnostics (errors, warnings, info)."""
    message: str
    location: SourceLocation
    severity: str  # "error", "warning", "info"
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None

    def __str__(self) -> str:
        severity_prefix = self.severity.upper()
        code = f"[{self.code}] " if self.code else ""
        result = f"{severity_prefix}: {code}{self.message}\n"
        result += f"  --> {self.location}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        if self.suggestions:
            result += "  suggestions:\n"
            for suggestion in self.suggestions:
                result += f"    - {suggestion}\n"

        return result


class LexerError(Exception):
    """
    A lexical error found while scanning.

    The lexer never raises these; it records them in ``Lexer.errors`` and
    hands the parser an ERROR token in their place.
    """

    def __init__(
        self,
        kind: LexicalErrorKind,
        message: str,
        location: SourceLocation,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.kind = kind
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="error",
            code=code,
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


# Helper functions for creating common errors

def create_invalid_character_error(char: str, location: SourceLocation) -> LexerError:
    """Create an error for an invalid character."""
    if char == "!":
        help_text = "'!' is only valid as part of the '!=' comparison."
        suggestions = ["Use '!=' for not equal"]
    elif char.isprintable():
        help_text = f"The character '{char}' is not valid in TeachLang source code."
        suggestions = []
    else:
        help_text = f"Non-printable character (Unicode: U+{ord(char):04X}) is not allowed."
        suggestions = []

    return LexerError(
        kind=LexicalErrorKind.INVALID_CHARACTER,
        message=f"Invalid character: '{char}'",
        location=location,
        code="L001",
        help_text=help_text,
        suggestions=suggestions
    )


def create_unterminated_string_error(location: SourceLocation) -> LexerError:
    """Create an error for an unterminated string literal."""
    return LexerError(
        kind=LexicalErrorKind.UNTERMINATED_STRING,
        message="Unterminated string literal",
        location=location,
        code="L002",
        help_text='String literals must be closed with a matching " quote.',
        suggestions=['Add a closing " quote']
    )


def create_unterminated_char_error(location: SourceLocation) -> LexerError:
    """Create an error for an unterminated character literal."""
    return LexerError(
        kind=LexicalErrorKind.UNTERMINATED_CHAR,
        message="Unterminated character literal",
        location=location,
        code="L003",
        help_text="Character literals must be closed with a matching ' quote.",
        suggestions=["Add a closing ' quote"]
    )


def create_consecutive_operators_error(op: str, location: SourceLocation) -> LexerError:
    """Create an error for an operator directly following another operator."""
    return LexerError(
        kind=LexicalErrorKind.CONSECUTIVE_OPERATORS,
        message=f"Consecutive operators: '{op}' follows another operator",
        location=location,
        code="L004",
        help_text="Arithmetic operators must be separated by an operand.",
        suggestions=["Remove the extra operator", "Put an operand between the operators"]
    )


def format_diagnostics(errors: Iterable) -> str:
    """
    Render lexer, parser and semantic errors as text.

    Accepts any mix of objects carrying a ``diagnostic`` attribute, sorts
    them by source position and appends a one-line summary.
    """
    diagnostics = [error.diagnostic for error in errors]
    if not diagnostics:
        return "No diagnostics."

    diagnostics.sort(key=lambda d: (d.location.line, d.location.column))
    error_count = sum(1 for d in diagnostics if d.severity == "error")
    warning_count = len(diagnostics) - error_count

    body = "".join(str(d) for d in diagnostics)
    return f"{body}{error_count} error(s), {warning_count} warning(s)"
