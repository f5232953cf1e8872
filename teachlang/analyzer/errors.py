"""
Semantic analysis error handling for TeachLang.

Semantic errors are collected, never raised out of analysis: each one
records its kind, the node it was found at and a rendered diagnostic.
``ScopeError`` is the exception, raised for an unbalanced scope exit.

Author: xwest
"""

from typing import Optional, List
from enum import Enum

from ..lexer.tokens import SourceLocation
from ..lexer.errors import Diagnostic
from ..parser.ast_nodes import ASTNode


class SemanticErrorKind(Enum):
    """Categories of semantic errors."""
    UNDECLARED_VARIABLE = "S001"
    REDECLARED_VARIABLE = "S002"
    TYPE_MISMATCH = "S003"
    UNINITIALIZED_VARIABLE = "S004"
    INVALID_OPERATION = "S005"
    SEMANTIC_ERROR = "S006"

    @property
    def code(self) -> str:
        return self.value


class ScopeError(Exception):
    """Raised when a scope is exited without a matching enter."""


class SemanticError(Exception):
    """
    A semantic error found at a specific AST node.

    Contains detailed diagnostic information for error reporting.
    """

    def __init__(
        self,
        kind: SemanticErrorKind,
        message: str,
        location: SourceLocation,
        node: Optional[ASTNode] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.kind = kind
        self.node = node
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
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


# Helper functions for creating specific semantic errors

def create_undeclared_variable_error(
    name: str,
    node: ASTNode,
    similar_names: Optional[List[str]] = None
) -> SemanticError:
    """Create an undeclared variable error."""
    suggestions = []
    if similar_names:
        suggestions.extend([f"Did you mean '{similar}'?" for similar in similar_names[:3]])
    suggestions.append(f"Declare '{name}' before using it, e.g. 'int {name};'")

    return SemanticError(
        SemanticErrorKind.UNDECLARED_VARIABLE,
        f"Undeclared variable '{name}'",
        node.token.location,
        node=node,
        help_text=f"'{name}' is not declared in this scope or any enclosing scope.",
        suggestions=suggestions
    )


def create_redeclared_variable_error(name: str, original_line: int, node: ASTNode) -> SemanticError:
    """Create a redeclaration error pointing back at the first declaration."""
    return SemanticError(
        SemanticErrorKind.REDECLARED_VARIABLE,
        f"Variable '{name}' is already declared in this scope",
        node.token.location,
        node=node,
        help_text=f"'{name}' was first declared on line {original_line}.",
        suggestions=[
            "Rename one of the variables",
            "Declare the second one inside a nested block to shadow the first"
        ]
    )


def create_type_mismatch_error(expected: str, actual: str, node: ASTNode,
                               help_text: Optional[str] = None) -> SemanticError:
    """Create a type mismatch error."""
    return SemanticError(
        SemanticErrorKind.TYPE_MISMATCH,
        f"Type mismatch: expected {expected}, found {actual}",
        node.token.location,
        node=node,
        help_text=help_text or f"The expression has type '{actual}' but '{expected}' was expected."
    )


def create_invalid_char_literal_error(text: str, node: ASTNode) -> SemanticError:
    """Create the error for a char literal that is not exactly one character."""
    return create_type_mismatch_error(
        "char", f"{len(text)}-character literal '{text}'", node,
        help_text="Character literals hold exactly one character; use a string for more."
    )


def create_uninitialized_variable_error(name: str, node: ASTNode) -> SemanticError:
    """Create an error for reading a variable that was never assigned."""
    return SemanticError(
        SemanticErrorKind.UNINITIALIZED_VARIABLE,
        f"Variable '{name}' is used before it is initialized",
        node.token.location,
        node=node,
        suggestions=[f"Assign a value first, e.g. '{name} = ...;'"]
    )


def create_invalid_operation_error(operator: str, operand_type: str, node: ASTNode) -> SemanticError:
    """Create an error for an operator applied to operands that do not support it."""
    return SemanticError(
        SemanticErrorKind.INVALID_OPERATION,
        f"Operator '{operator}' cannot be applied to {operand_type} operands",
        node.token.location,
        node=node,
        help_text="Arithmetic is defined for int, float, bool and char values only."
    )


def create_unknown_type_error(type_name: str, node: ASTNode) -> SemanticError:
    """Create an error for a declaration whose type keyword is not a type."""
    return SemanticError(
        SemanticErrorKind.SEMANTIC_ERROR,
        f"Unknown type '{type_name}'",
        node.token.location,
        node=node,
        suggestions=["Use one of: int, float, bool, char, string"]
    )
