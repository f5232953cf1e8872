"""
TeachLang Parser Package

Implements a Pratt-based recursive descent parser for TeachLang.
Produces a binary-slot Abstract Syntax Tree with source line information.

Key Features:
- Top-down operator precedence (Pratt parsing) for expressions
- Statement-level error recovery and synchronization
- Error nodes in place of unparsable fragments

Author: xwest
"""

from .ast_nodes import *
from .parser import Parser, Precedence, parse, parse_string
from .errors import ParseError, SyntaxErrorKind

__all__ = [
    # Core parser
    "Parser", "Precedence", "parse", "parse_string",

    # AST nodes
    "ASTNode", "ASTNodeType", "StatementChain",
    "Program", "Block", "VarDecl", "Assign", "Print", "If", "While",
    "Repeat", "Factorial", "NumberLiteral", "StringLiteral", "CharLiteral",
    "Identifier", "BinOp", "CompOp", "ErrorNode",

    # Error handling
    "ParseError", "SyntaxErrorKind",
]
