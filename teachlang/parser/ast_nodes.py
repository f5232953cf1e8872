"""
Abstract Syntax Tree node definitions for TeachLang.

Every node carries the token that anchors it and at most two owned child
slots, ``left`` and ``right``. What a slot means depends on the node kind;
subclasses expose named, read-only aliases for them.

Program and Block nodes are chain links: ``left`` holds one statement and
``right`` the next link of the same kind, so a whole program (or block
body) is a right-leaning list ending in a link whose ``right`` is None.

Author: xwest
"""

from typing import Iterator, List, Optional, Sequence
from enum import Enum

from ..lexer.tokens import Token


class ASTNodeType(Enum):
    """Enumeration of all AST node types."""

    # Top-level
    PROGRAM = "Program"

    # Statements
    VAR_DECL = "VarDecl"
    ASSIGN = "Assign"
    PRINT = "Print"
    IF = "If"
    WHILE = "While"
    REPEAT = "Repeat"
    FACTORIAL = "Factorial"
    BLOCK = "Block"

    # Expressions
    NUMBER = "Number"
    IDENTIFIER = "Identifier"
    STRING = "String"
    CHAR = "Char"
    BIN_OP = "BinOp"
    COMP_OP = "CompOp"

    # Recovery
    ERROR = "Error"


class ASTNode:
    """Base class for all AST nodes."""

    node_type: ASTNodeType

    def __init__(self, token: Token, left: Optional['ASTNode'] = None,
                 right: Optional['ASTNode'] = None):
        self.token = token
        self.left = left
        self.right = right

    @property
    def line(self) -> int:
        return self.token.line

    def children(self) -> List['ASTNode']:
        """Get the child nodes that are present."""
        return [child for child in (self.left, self.right) if child is not None]

    def walk(self) -> Iterator['ASTNode']:
        """Yield this node and every descendant, pre-order, without recursion."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children()))

    def __str__(self) -> str:
        return f"{self.node_type.value}({self.token.lexeme!r})@{self.token.location}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.token.lexeme!r}, line={self.line})"


# ============================================================================
# Statement chains
# ============================================================================

class StatementChain(ASTNode):
    """A chain link holding one statement and the next link."""

    @property
    def statement(self) -> Optional[ASTNode]:
        return self.left

    @property
    def next_link(self) -> Optional['StatementChain']:
        return self.right

    def links(self) -> Iterator['StatementChain']:
        link = self
        while link is not None:
            yield link
            link = link.next_link

    def statements(self) -> Iterator[ASTNode]:
        """Iterate the statements of the whole chain starting at this link."""
        for link in self.links():
            if link.statement is not None:
                yield link.statement

    @classmethod
    def from_statements(cls, token: Token, statements: Sequence[ASTNode]) -> 'StatementChain':
        """Build a chain from a statement list; an empty list gives one empty link."""
        head = cls(token)
        link = head
        for index, statement in enumerate(statements):
            link.left = statement
            if index + 1 < len(statements):
                link.right = cls(token)
                link = link.right
        return head


class Program(StatementChain):
    """Root AST node; statements chain through ``right``."""
    node_type = ASTNodeType.PROGRAM


class Block(StatementChain):
    """Braced statement list; statements chain through ``right``."""
    node_type = ASTNodeType.BLOCK


# ============================================================================
# Statements
# ============================================================================

class VarDecl(ASTNode):
    """Variable declaration: ``int x;``. Anchored on the identifier."""
    node_type = ASTNodeType.VAR_DECL

    def __init__(self, token: Token, type_token: Token):
        super().__init__(token)
        self.type_token = type_token

    @property
    def name(self) -> str:
        return self.token.lexeme

    @property
    def type_name(self) -> str:
        return self.type_token.lexeme


class Assign(ASTNode):
    """Assignment: ``x = expr;``. left = target Identifier, right = value."""
    node_type = ASTNodeType.ASSIGN

    def __init__(self, token: Token, target: 'Identifier', value: ASTNode):
        super().__init__(token, target, value)

    @property
    def target(self) -> 'Identifier':
        return self.left

    @property
    def value(self) -> ASTNode:
        return self.right


class Print(ASTNode):
    """Print statement. left = printed expression."""
    node_type = ASTNodeType.PRINT

    def __init__(self, token: Token, value: ASTNode):
        super().__init__(token, value)

    @property
    def value(self) -> ASTNode:
        return self.left


class If(ASTNode):
    """If statement. left = condition, right = body Block."""
    node_type = ASTNodeType.IF

    def __init__(self, token: Token, condition: ASTNode, body: Block):
        super().__init__(token, condition, body)

    @property
    def condition(self) -> ASTNode:
        return self.left

    @property
    def body(self) -> Block:
        return self.right


class While(ASTNode):
    """While loop. left = condition, right = body Block."""
    node_type = ASTNodeType.WHILE

    def __init__(self, token: Token, condition: ASTNode, body: Block):
        super().__init__(token, condition, body)

    @property
    def condition(self) -> ASTNode:
        return self.left

    @property
    def body(self) -> Block:
        return self.right


class Repeat(ASTNode):
    """Repeat-until loop. left = body Block, right = until condition."""
    node_type = ASTNodeType.REPEAT

    def __init__(self, token: Token, body: Block, condition: ASTNode):
        super().__init__(token, body, condition)

    @property
    def body(self) -> Block:
        return self.left

    @property
    def condition(self) -> ASTNode:
        return self.right


class Factorial(ASTNode):
    """Built-in factorial call. left = argument."""
    node_type = ASTNodeType.FACTORIAL

    def __init__(self, token: Token, argument: ASTNode):
        super().__init__(token, argument)

    @property
    def argument(self) -> ASTNode:
        return self.left


# ============================================================================
# Expressions
# ============================================================================

class NumberLiteral(ASTNode):
    node_type = ASTNodeType.NUMBER

    @property
    def text(self) -> str:
        return self.token.lexeme


class StringLiteral(ASTNode):
    node_type = ASTNodeType.STRING

    @property
    def text(self) -> str:
        return self.token.lexeme


class CharLiteral(ASTNode):
    node_type = ASTNodeType.CHAR

    @property
    def text(self) -> str:
        return self.token.lexeme


class Identifier(ASTNode):
    node_type = ASTNodeType.IDENTIFIER

    @property
    def name(self) -> str:
        return self.token.lexeme


class BinOp(ASTNode):
    """Arithmetic operation; the token is the operator."""
    node_type = ASTNodeType.BIN_OP

    @property
    def operator(self) -> str:
        return self.token.lexeme


class CompOp(ASTNode):
    """Comparison; the token is the operator."""
    node_type = ASTNodeType.COMP_OP

    @property
    def operator(self) -> str:
        return self.token.lexeme


class ErrorNode(ASTNode):
    """Placeholder for a fragment the parser could not make sense of."""
    node_type = ASTNodeType.ERROR
