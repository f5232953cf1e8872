"""
Main semantic analyzer for TeachLang.

Walks the AST once, maintaining the symbol table as blocks are entered
and left, and checks:
- Declarations (no redeclaration within one scope)
- Use of undeclared and uninitialized variables
- Assignment compatibility (int and float widen into each other)
- Operand types of arithmetic operations
- The argument of factorial calls

Errors are local: each one is recorded and analysis continues with the
rest of the tree.

Author: xwest
"""

import logging
from typing import Callable, List, Optional
from dataclasses import dataclass

from ..config import FrontendConfig
from ..parser.ast_nodes import (
    ASTNode, Program, Block, VarDecl, Assign, Print, If, While, Repeat,
    Factorial, NumberLiteral, StringLiteral, CharLiteral, Identifier,
    BinOp, CompOp, ErrorNode
)
from .symbol_table import SymbolTable, VarType, NUMERIC_TYPES
from .errors import (
    SemanticError, create_undeclared_variable_error, create_redeclared_variable_error,
    create_type_mismatch_error, create_invalid_char_literal_error,
    create_uninitialized_variable_error, create_invalid_operation_error,
    create_unknown_type_error
)

logger = logging.getLogger(__name__)

Reporter = Callable[[SemanticError], None]


@dataclass
class AnalysisResult:
    """Results of semantic analysis."""
    ast: ASTNode
    symbol_table: SymbolTable
    errors: List[SemanticError]

    @property
    def error_count(self) -> int:
        return len(self.errors)

    def has_errors(self) -> bool:
        """Check if analysis found any errors."""
        return len(self.errors) > 0


def _leaf_type(node: Optional[ASTNode], table: SymbolTable, strict_chars: bool,
               report: Optional[Reporter]) -> VarType:
    """Type a literal or identifier."""
    if isinstance(node, NumberLiteral):
        return VarType.FLOAT if "." in node.text else VarType.INT

    if isinstance(node, StringLiteral):
        return VarType.STRING

    if isinstance(node, CharLiteral):
        if strict_chars and len(node.text) != 1:
            if report:
                report(create_invalid_char_literal_error(node.text, node))
            return VarType.ERROR
        return VarType.CHAR

    if isinstance(node, Identifier):
        symbol = table.lookup(node.name)
        if symbol is None:
            if report:
                report(create_undeclared_variable_error(
                    node.name, node, table.similar_names(node.name)
                ))
            return VarType.ERROR
        if symbol.type is VarType.ERROR:
            return VarType.ERROR
        if not symbol.initialized:
            if report:
                report(create_uninitialized_variable_error(node.name, node))
            return VarType.ERROR
        return symbol.type

    # Error nodes, statements and missing operands have no value type
    return VarType.ERROR


def _operation_type(node: ASTNode, left_type: VarType, right_type: VarType,
                    report: Optional[Reporter]) -> VarType:
    """Type a BinOp or CompOp from its already-typed operands."""
    if isinstance(node, CompOp):
        return VarType.BOOL

    if VarType.ERROR in (left_type, right_type):
        return VarType.ERROR
    if VarType.STRING in (left_type, right_type):
        if report:
            report(create_invalid_operation_error(node.operator, "string", node))
        return VarType.ERROR
    if left_type != right_type:
        if report:
            report(create_type_mismatch_error(
                str(left_type), str(right_type), node,
                help_text=f"Both operands of '{node.operator}' must have the same type."
            ))
        return VarType.ERROR
    return left_type


def _type_of(node: Optional[ASTNode], table: SymbolTable, strict_chars: bool,
             report: Optional[Reporter] = None) -> VarType:
    """
    Compute the type of an expression node.

    When ``report`` is given, every problem found is passed to it exactly
    once, at the node where it occurs. An ERROR operand makes the enclosing
    operation ERROR without a second report.

    Operations are typed post-order with an explicit stack, so operand
    chains of any length are handled without recursion. Problems are
    reported left operand first, then right operand, then the operation.
    """
    stack = [(node, False)]
    types: List[VarType] = []

    while stack:
        current, operands_done = stack.pop()
        if not isinstance(current, (BinOp, CompOp)):
            types.append(_leaf_type(current, table, strict_chars, report))
        elif operands_done:
            right_type = types.pop()
            left_type = types.pop()
            types.append(_operation_type(current, left_type, right_type, report))
        else:
            stack.append((current, True))
            stack.append((current.right, False))
            stack.append((current.left, False))

    return types.pop()


def resolve_type(node: Optional[ASTNode], table: SymbolTable,
                 config: Optional[FrontendConfig] = None) -> VarType:
    """
    Map an expression node to its semantic type without reporting anything.

    Undeclared or uninitialized identifiers and ill-typed operations
    resolve to ``VarType.ERROR``.
    """
    config = config or FrontendConfig()
    return _type_of(node, table, config.strict_char_literals)


class SemanticAnalyzer:
    """
    Main semantic analyzer for TeachLang.

    A single pass over the AST: declarations populate the symbol table,
    blocks open and close scopes, and every expression is type checked
    where it is used.
    """

    def __init__(self, symbol_table: Optional[SymbolTable] = None,
                 config: Optional[FrontendConfig] = None):
        """Initialize the semantic analyzer."""
        self.symbol_table = symbol_table if symbol_table is not None else SymbolTable()
        self.config = config or FrontendConfig()
        self.errors: List[SemanticError] = []

    def analyze(self, ast: ASTNode) -> AnalysisResult:
        """
        Perform semantic analysis on the AST.

        Args:
            ast: The Program to analyze (any statement node is accepted)

        Returns:
            AnalysisResult containing the symbol table and any errors
        """
        self.errors = []

        if isinstance(ast, Program):
            for statement in ast.statements():
                self._analyze_statement(statement)
        else:
            self._analyze_statement(ast)

        logger.debug("semantic analysis finished with %d error(s)", len(self.errors))
        return AnalysisResult(
            ast=ast,
            symbol_table=self.symbol_table,
            errors=self.errors
        )

    def _report(self, error: SemanticError):
        logger.debug("line %d: %s", error.line, error.message)
        self.errors.append(error)

    def _check_expression(self, node: Optional[ASTNode]) -> VarType:
        """Type check an expression, reporting problems."""
        return _type_of(node, self.symbol_table, self.config.strict_char_literals, self._report)

    # ========================================================================
    # Statements
    # ========================================================================

    def _analyze_statement(self, stmt: Optional[ASTNode]):
        """Check a single statement."""
        if isinstance(stmt, VarDecl):
            self._check_variable_decl(stmt)
        elif isinstance(stmt, Assign):
            self._check_assignment(stmt)
        elif isinstance(stmt, Print):
            self._check_expression(stmt.value)
        elif isinstance(stmt, (If, While)):
            self._check_expression(stmt.condition)
            self._analyze_statement(stmt.body)
        elif isinstance(stmt, Repeat):
            # The until condition is evaluated outside the body's scope
            self._analyze_statement(stmt.body)
            self._check_expression(stmt.condition)
        elif isinstance(stmt, Factorial):
            self._check_factorial(stmt)
        elif isinstance(stmt, Block):
            self._check_block(stmt)
        elif stmt is None or isinstance(stmt, ErrorNode):
            # Already reported by the parser
            pass
        else:
            # Bare expression nodes
            self._check_expression(stmt)

    def _check_variable_decl(self, var_decl: VarDecl):
        """Check a declaration and add it to the current scope."""
        existing = self.symbol_table.lookup_current_scope(var_decl.name)
        if existing is not None:
            self._report(create_redeclared_variable_error(var_decl.name, existing.line, var_decl))
            return

        var_type = VarType.from_keyword(var_decl.type_name)
        if var_type is VarType.ERROR:
            self._report(create_unknown_type_error(var_decl.type_name, var_decl))

        self.symbol_table.declare(var_decl.name, var_type, var_decl.line)

    def _check_assignment(self, assign: Assign):
        """Check an assignment; the target becomes initialized on success."""
        target = self.symbol_table.lookup(assign.target.name)
        value_type = self._check_expression(assign.value)

        if target is None:
            self._report(create_undeclared_variable_error(
                assign.target.name, assign.target,
                self.symbol_table.similar_names(assign.target.name)
            ))
            return

        if target.type is VarType.ERROR:
            # Declared with an unknown type, already reported
            target.initialized = True
            return

        if value_type is VarType.ERROR:
            return

        if not self._is_assignable(target.type, value_type):
            self._report(create_type_mismatch_error(str(target.type), str(value_type), assign))
            return

        if (target.type is VarType.CHAR and isinstance(assign.value, CharLiteral)
                and len(assign.value.text) != 1):
            self._report(create_invalid_char_literal_error(assign.value.text, assign))
            return

        target.initialized = True

    @staticmethod
    def _is_assignable(target_type: VarType, value_type: VarType) -> bool:
        """Equal types, or int and float in either direction."""
        if target_type == value_type:
            return True
        return target_type in NUMERIC_TYPES and value_type in NUMERIC_TYPES

    def _check_factorial(self, call: Factorial):
        argument_type = self._check_expression(call.argument)
        if argument_type not in (VarType.INT, VarType.ERROR):
            self._report(create_type_mismatch_error(
                "int", str(argument_type), call,
                help_text="factorial is defined for int arguments only."
            ))

    def _check_block(self, block: Block):
        """Check a block in its own scope."""
        self.symbol_table.enter_scope()
        try:
            for statement in block.statements():
                self._analyze_statement(statement)
        finally:
            self.symbol_table.exit_scope()


def analyze(ast: ASTNode, table: SymbolTable, config: Optional[FrontendConfig] = None) -> int:
    """Analyze ``ast`` against ``table`` and return the number of errors found."""
    return SemanticAnalyzer(table, config).analyze(ast).error_count
