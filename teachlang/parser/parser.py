"""
TeachLang Parser Implementation

Recursive descent for statements, top-down operator precedence (Pratt)
for expressions. Pulls tokens one at a time from a token source and
recovers from syntax errors by synchronizing to the next statement
boundary, so one mistake costs at most the rest of its statement.

Author: xwest
"""

import logging
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union
from enum import IntEnum

from ..lexer.tokens import Token, TokenType
from ..lexer.lexer import Lexer, TokenBuffer
from .ast_nodes import (
    ASTNode, Program, Block, VarDecl, Assign, Print, If, While, Repeat,
    Factorial, NumberLiteral, StringLiteral, CharLiteral, Identifier,
    BinOp, CompOp, ErrorNode
)
from .errors import ParseError, SyntaxErrorKind, SyntaxErrorRecovery, create_syntax_error

logger = logging.getLogger(__name__)


class Precedence(IntEnum):
    """Operator precedence levels for Pratt parsing."""
    NONE = 0
    COMPARISON = 1      # <, >, ==, !=
    TERM = 2            # +, -
    FACTOR = 3          # *, /
    PRIMARY = 4         # literals, identifiers, parentheses


class Parser:
    """
    TeachLang parser.

    Holds all parsing state (token source, current and previous token,
    collected errors), so independent parsers never interfere.
    """

    def __init__(self, tokens: Union[Lexer, TokenBuffer, Sequence[Token]]):
        """
        Initialize parser with a token source.

        Args:
            tokens: Anything with a ``next_token()`` method (a Lexer or a
                TokenBuffer), or a list of tokens
        """
        if isinstance(tokens, (list, tuple)):
            tokens = TokenBuffer(tokens)
        self.source = tokens
        self.errors: List[ParseError] = []
        self.previous: Optional[Token] = None
        self.current: Token = self.source.next_token()

        # Initialize parsing tables
        self._init_parsing_tables()

    def _init_parsing_tables(self):
        """Initialize statement, prefix and operator precedence tables."""

        # Statement parsers, keyed by the token that starts the statement
        self.statement_parsers: Dict[TokenType, Callable[[], ASTNode]] = {
            # Declarations
            TokenType.INT: self._parse_declaration,
            TokenType.FLOAT: self._parse_declaration,
            TokenType.BOOL: self._parse_declaration,
            TokenType.CHAR: self._parse_declaration,
            TokenType.STRING: self._parse_declaration,

            TokenType.IDENTIFIER: self._parse_assignment,
            TokenType.IF: self._parse_if_statement,
            TokenType.WHILE: self._parse_while_statement,
            TokenType.PRINT: self._parse_print_statement,
            TokenType.REPEAT: self._parse_repeat_statement,
            TokenType.FACTORIAL: self._parse_factorial_call,
        }

        # Prefix parsing functions (for tokens that can start expressions)
        self.prefix_parsers: Dict[TokenType, Callable[[], ASTNode]] = {
            TokenType.NUMBER: self._parse_number_literal,
            TokenType.IDENTIFIER: self._parse_identifier,
            TokenType.STRING_LITERAL: self._parse_string_literal,
            TokenType.CHAR_LITERAL: self._parse_character_literal,
            TokenType.LEFT_PAREN: self._parse_grouping,
        }

        # Arithmetic operators share one token type; precedence is by lexeme
        self.operator_precedences: Dict[str, Precedence] = {
            "+": Precedence.TERM,
            "-": Precedence.TERM,
            "*": Precedence.FACTOR,
            "/": Precedence.FACTOR,
        }

    def parse(self) -> Program:
        """
        Parse the token stream into an AST.

        Returns:
            Program AST node representing the entire program. Syntax errors
            do not raise; they are collected in ``self.errors`` and the
            broken statements appear as ErrorNode leaves.
        """
        start_token = self.current
        statements = []

        while not self._check(TokenType.EOF):
            statements.append(self._parse_statement())

        logger.debug("parsed %d statement(s), %d syntax error(s)",
                     len(statements), len(self.errors))
        return Program.from_statements(start_token, statements)

    def has_errors(self) -> bool:
        """Check if the parser reported any syntax errors."""
        return len(self.errors) > 0

    # ========================================================================
    # Statements
    # ========================================================================

    def _parse_statement(self) -> ASTNode:
        """Parse a statement, or recover and return an ErrorNode."""
        try:
            statement_parser = self.statement_parsers.get(self.current.type)
            if statement_parser is None:
                raise self._error(SyntaxErrorKind.UNEXPECTED_TOKEN)
            return statement_parser()

        except ParseError as e:
            self.errors.append(e)
            logger.debug("line %d: %s; synchronizing", e.line, e.message)
            self._synchronize()
            return ErrorNode(e.token)

    def _synchronize(self):
        """
        Discard tokens through the next ';' or '}', or up to end of input.

        Outside end of input this always consumes at least one token.
        """
        while not self._check(TokenType.EOF):
            token = self._advance()
            if token.type in SyntaxErrorRecovery.STATEMENT_BOUNDARIES:
                return

    def _parse_declaration(self) -> VarDecl:
        """Parse a variable declaration: type IDENT ';'."""
        type_token = self._advance()
        name_token = self._consume(TokenType.IDENTIFIER, SyntaxErrorKind.MISSING_IDENTIFIER)
        self._consume(TokenType.SEMICOLON, SyntaxErrorKind.MISSING_SEMICOLON)
        return VarDecl(name_token, type_token)

    def _parse_assignment(self) -> Assign:
        """Parse an assignment: IDENT '=' expression ';'."""
        name_token = self._advance()
        self._consume(TokenType.EQUALS, SyntaxErrorKind.MISSING_EQUALS)
        value = self._parse_expression()
        self._consume(TokenType.SEMICOLON, SyntaxErrorKind.MISSING_SEMICOLON)
        return Assign(name_token, Identifier(name_token), value)

    def _parse_if_statement(self) -> If:
        """Parse an if statement: 'if' '(' expression ')' block."""
        keyword, condition = self._parse_keyword_and_parenthesized()
        body = self._parse_block()
        return If(keyword, condition, body)

    def _parse_while_statement(self) -> While:
        """Parse a while loop: 'while' '(' expression ')' block."""
        keyword, condition = self._parse_keyword_and_parenthesized()
        body = self._parse_block()
        return While(keyword, condition, body)

    def _parse_print_statement(self) -> Print:
        """Parse a print statement: 'print' expression ';'."""
        keyword = self._advance()
        value = self._parse_expression()
        self._consume(TokenType.SEMICOLON, SyntaxErrorKind.MISSING_SEMICOLON)
        return Print(keyword, value)

    def _parse_repeat_statement(self) -> Repeat:
        """Parse a repeat loop: 'repeat' block 'until' expression ';'."""
        keyword = self._advance()
        body = self._parse_block()
        self._consume(TokenType.UNTIL, SyntaxErrorKind.MISSING_UNTIL)
        condition = self._parse_expression()
        self._consume(TokenType.SEMICOLON, SyntaxErrorKind.MISSING_SEMICOLON)
        return Repeat(keyword, body, condition)

    def _parse_factorial_call(self) -> Factorial:
        """Parse a factorial call: 'factorial' '(' expression ')' ';'."""
        keyword, argument = self._parse_keyword_and_parenthesized()
        self._consume(TokenType.SEMICOLON, SyntaxErrorKind.MISSING_SEMICOLON)
        return Factorial(keyword, argument)

    def _parse_keyword_and_parenthesized(self) -> Tuple[Token, ASTNode]:
        """Parse a keyword followed by a parenthesized expression."""
        keyword = self._advance()
        self._consume(TokenType.LEFT_PAREN, SyntaxErrorKind.UNEXPECTED_TOKEN)
        expression = self._parse_expression()
        self._consume(TokenType.RIGHT_PAREN, SyntaxErrorKind.MISSING_RPAREN)
        return keyword, expression

    def _parse_block(self) -> Block:
        """Parse a block: '{' statement* '}'."""
        open_brace = self._consume(TokenType.LEFT_BRACE, SyntaxErrorKind.MISSING_BRACKET)
        statements = []

        while not self._check(TokenType.RIGHT_BRACE) and not self._check(TokenType.EOF):
            statements.append(self._parse_statement())

        if self._check(TokenType.RIGHT_BRACE):
            self._advance()
        else:
            # Input ended inside the block; keep what was parsed
            self.errors.append(self._error(SyntaxErrorKind.MISSING_BRACKET))

        return Block.from_statements(open_brace, statements)

    # ========================================================================
    # Expressions
    # ========================================================================

    def _parse_expression(self) -> ASTNode:
        """Parse an expression using Pratt parsing."""
        return self._parse_precedence(Precedence.COMPARISON)

    def _parse_precedence(self, precedence: Precedence) -> ASTNode:
        """Parse expression with given minimum precedence."""
        prefix_parser = self.prefix_parsers.get(self.current.type)
        if prefix_parser is None:
            raise self._error(SyntaxErrorKind.INVALID_EXPRESSION)

        left = prefix_parser()

        # Binary operators bind while they are at least as strong as required
        while precedence <= self._get_precedence(self.current):
            left = self._parse_binary(left)

        return left

    def _get_precedence(self, token: Token) -> Precedence:
        """Get precedence for an operator token."""
        if token.type == TokenType.COMPARISON:
            return Precedence.COMPARISON
        if token.type == TokenType.OPERATOR:
            return self.operator_precedences.get(token.lexeme, Precedence.NONE)
        return Precedence.NONE

    def _parse_binary(self, left: ASTNode) -> ASTNode:
        """Parse a left-associative binary operation."""
        operator_token = self._advance()
        precedence = self._get_precedence(operator_token)

        right = self._parse_precedence(Precedence(precedence + 1))

        if operator_token.type == TokenType.COMPARISON:
            return CompOp(operator_token, left, right)
        return BinOp(operator_token, left, right)

    def _parse_number_literal(self) -> NumberLiteral:
        return NumberLiteral(self._advance())

    def _parse_identifier(self) -> Identifier:
        return Identifier(self._advance())

    def _parse_string_literal(self) -> StringLiteral:
        return StringLiteral(self._advance())

    def _parse_character_literal(self) -> CharLiteral:
        return CharLiteral(self._advance())

    def _parse_grouping(self) -> ASTNode:
        """Parse parenthesized expression."""
        self._advance()  # Consume (
        expr = self._parse_expression()
        self._consume(TokenType.RIGHT_PAREN, SyntaxErrorKind.MISSING_RPAREN)
        return expr

    # ========================================================================
    # Utility methods
    # ========================================================================

    def _check(self, token_type: TokenType) -> bool:
        """Check if current token matches type without consuming."""
        return self.current.type == token_type

    def _advance(self) -> Token:
        """Consume and return current token."""
        self.previous = self.current
        if self.current.type != TokenType.EOF:
            self.current = self.source.next_token()
        return self.previous

    def _consume(self, token_type: TokenType, kind: SyntaxErrorKind) -> Token:
        """Consume token of expected type or raise a syntax error of ``kind``."""
        if self._check(token_type):
            return self._advance()
        raise self._error(kind)

    def _error(self, kind: SyntaxErrorKind) -> ParseError:
        """Build a syntax error at the current token."""
        if self.current.is_error:
            # Lexical errors surface as unexpected tokens
            kind = SyntaxErrorKind.UNEXPECTED_TOKEN
        return create_syntax_error(kind, self.current, self.previous)


def parse(tokens: Union[Lexer, TokenBuffer, Sequence[Token]]) -> Program:
    """Parse a token source into a Program; syntax errors are not returned."""
    return Parser(tokens).parse()


def parse_string(source: str, filename: str = "<string>") -> Tuple[Program, List[ParseError]]:
    """
    Convenience function to parse a source string.

    Args:
        source: Source code string
        filename: Filename for error reporting

    Returns:
        The Program AST and the syntax errors found while building it
    """
    parser = Parser(Lexer(source, filename))
    program = parser.parse()
    return program, parser.errors
