"""
TeachLang Semantic Analyzer Package

Implements scope-aware semantic analysis:
- Block scoping with shadowing
- Declaration, initialization and type checking
- Structured, collected error diagnostics

Author: xwest
"""

from .semantic_analyzer import SemanticAnalyzer, AnalysisResult, analyze, resolve_type
from .symbol_table import SymbolTable, Symbol, VarType
from .errors import SemanticError, SemanticErrorKind, ScopeError

__all__ = [
    # Main analyzer
    "SemanticAnalyzer", "AnalysisResult", "analyze", "resolve_type",

    # Symbol management
    "SymbolTable", "Symbol", "VarType",

    # Error handling
    "SemanticError", "SemanticErrorKind", "ScopeError",
]
