"""
TeachLang Front End Package

Turns source text of TeachLang, a small imperative teaching language,
into a validated, typed abstract syntax tree.

Architecture:
    teachlang/
    ├── lexer/           # Tokenization and lexical analysis
    ├── parser/          # Syntax analysis, error recovery and AST generation
    ├── analyzer/        # Symbol table, scoping and type checking
    ├── config.py        # Front-end options
    └── pipeline.py      # Lexer -> parser -> analyzer in one call

Author: xwest
License: MIT
"""

__version__ = "0.1.0"
__author__ = "xwest"
__license__ = "MIT"

from .config import FrontendConfig
from .lexer import Lexer, format_diagnostics
from .parser import Parser
from .analyzer import SemanticAnalyzer, SymbolTable
from .pipeline import FrontendResult, check_source

__all__ = [
    # Core classes
    "Lexer",
    "Parser",
    "SemanticAnalyzer",
    "SymbolTable",

    # Pipeline
    "FrontendConfig",
    "FrontendResult",
    "check_source",
    "format_diagnostics",

    # Version info
    "__version__",
]
