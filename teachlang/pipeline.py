"""
TeachLang front-end pipeline.

Chains lexing, parsing and semantic analysis behind one call. Every
stage runs even when an earlier one reported errors: lexical errors
reach the parser as ERROR tokens and the analyzer skips Error nodes.

Author: xwest
"""

import logging
from typing import List, Optional
from dataclasses import dataclass

from .config import FrontendConfig
from .lexer.lexer import Lexer
from .lexer.errors import LexerError, format_diagnostics
from .parser.ast_nodes import Program
from .parser.parser import Parser
from .parser.errors import ParseError
from .analyzer.symbol_table import SymbolTable
from .analyzer.semantic_analyzer import SemanticAnalyzer
from .analyzer.errors import SemanticError

logger = logging.getLogger(__name__)


@dataclass
class FrontendResult:
    """Output of the front-end pipeline."""
    program: Program
    symbol_table: SymbolTable
    lexer_errors: List[LexerError]
    parse_errors: List[ParseError]
    semantic_errors: List[SemanticError]

    @property
    def diagnostics(self) -> list:
        """All errors, in stage order."""
        return [*self.lexer_errors, *self.parse_errors, *self.semantic_errors]

    @property
    def error_count(self) -> int:
        return len(self.lexer_errors) + len(self.parse_errors) + len(self.semantic_errors)

    def has_errors(self) -> bool:
        return self.error_count > 0

    def report(self) -> str:
        """Render every diagnostic as text."""
        return format_diagnostics(self.diagnostics)


def check_source(source: str, config: Optional[FrontendConfig] = None) -> FrontendResult:
    """
    Lex, parse and analyze a source string.

    Args:
        source: Program text
        config: Front-end options (defaults apply when omitted)

    Returns:
        FrontendResult with the AST, the final symbol table and the
        errors of each stage
    """
    config = config or FrontendConfig()

    lexer = Lexer(source, config.filename)
    parser = Parser(lexer)
    program = parser.parse()
    logger.info("%s: parsed with %d lexical and %d syntax error(s)",
                config.filename, len(lexer.errors), len(parser.errors))

    analysis = SemanticAnalyzer(config=config).analyze(program)
    logger.info("%s: %d semantic error(s)", config.filename, analysis.error_count)

    return FrontendResult(
        program=program,
        symbol_table=analysis.symbol_table,
        lexer_errors=lexer.errors,
        parse_errors=parser.errors,
        semantic_errors=analysis.errors
    )
