"""
Symbol table and scope management for TeachLang semantic analysis.

Symbols live in a single ordered list, most recent declaration last.
Because blocks nest, declaration order already respects scope nesting:
scanning backward finds the innermost visible declaration (shadowing),
and the symbols of the scope being exited are always a suffix of the
list, so leaving a scope pops them off the end.

Author: xwest
"""

import logging
from typing import Iterator, List, Optional
from dataclasses import dataclass
from enum import Enum

from .errors import ScopeError

logger = logging.getLogger(__name__)


class VarType(Enum):
    """Semantic types. ERROR is the sentinel for expressions that failed to type."""
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    CHAR = "char"
    STRING = "string"
    ERROR = "error"

    @classmethod
    def from_keyword(cls, keyword: str) -> 'VarType':
        """Map a type keyword to its type; anything else maps to ERROR."""
        for var_type in cls:
            if var_type.value == keyword and var_type is not cls.ERROR:
                return var_type
        return cls.ERROR

    def __str__(self) -> str:
        return self.value


NUMERIC_TYPES = frozenset({VarType.INT, VarType.FLOAT})


@dataclass
class Symbol:
    """Represents a declared variable."""
    name: str
    type: VarType
    scope_level: int
    line: int
    initialized: bool = False

    def __str__(self) -> str:
        return f"{self.name}: {self.type}"


class SymbolTable:
    """
    Manages declared variables and the current scope level.

    Level 0 is the outermost scope. Every ``enter_scope`` must be paired
    with an ``exit_scope``.
    """

    def __init__(self):
        self._symbols: List[Symbol] = []
        self.current_scope = 0

    def enter_scope(self) -> int:
        """Enter a nested scope and return its level."""
        self.current_scope += 1
        logger.debug("enter scope %d", self.current_scope)
        return self.current_scope

    def exit_scope(self) -> List[Symbol]:
        """
        Leave the current scope.

        Removes the symbols declared at the current level, most recent
        first, and returns them in removal order.

        Raises:
            ScopeError: if called at level 0
        """
        if self.current_scope == 0:
            raise ScopeError("exit_scope called without a matching enter_scope")

        removed = []
        while self._symbols and self._symbols[-1].scope_level == self.current_scope:
            removed.append(self._symbols.pop())

        logger.debug("exit scope %d, dropped %d symbol(s)", self.current_scope, len(removed))
        self.current_scope -= 1
        return removed

    def declare(self, name: str, var_type: VarType, line: int) -> Symbol:
        """
        Declare a variable at the current scope level.

        Does not check for redeclaration; callers use
        ``lookup_current_scope`` first.
        """
        symbol = Symbol(name, var_type, self.current_scope, line)
        self._symbols.append(symbol)
        return symbol

    def lookup(self, name: str) -> Optional[Symbol]:
        """Find the most recently declared visible symbol with this name."""
        for symbol in reversed(self._symbols):
            if symbol.name == name:
                return symbol
        return None

    def lookup_current_scope(self, name: str) -> Optional[Symbol]:
        """Find a symbol with this name declared at exactly the current level."""
        for symbol in reversed(self._symbols):
            if symbol.scope_level != self.current_scope:
                # Everything further back belongs to enclosing scopes
                return None
            if symbol.name == name:
                return symbol
        return None

    def destroy(self):
        """Drop every symbol and return to the outermost scope."""
        self._symbols.clear()
        self.current_scope = 0

    def symbols(self) -> List[Symbol]:
        """Visible symbols, oldest first."""
        return list(self._symbols)

    def similar_names(self, name: str, max_distance: int = 2) -> List[str]:
        """Get visible names similar to the given name (for error suggestions)."""
        def levenshtein_distance(s1: str, s2: str) -> int:
            """Calculate edit distance between two strings."""
            if len(s1) < len(s2):
                return levenshtein_distance(s2, s1)

            if len(s2) == 0:
                return len(s1)

            previous_row = list(range(len(s2) + 1))
            for i, c1 in enumerate(s1):
                current_row = [i + 1]
                for j, c2 in enumerate(s2):
                    insertions = previous_row[j + 1] + 1
                    deletions = current_row[j] + 1
                    substitutions = previous_row[j] + (c1 != c2)
                    current_row.append(min(insertions, deletions, substitutions))
                previous_row = current_row

            return previous_row[-1]

        candidates = []
        for symbol_name in {symbol.name for symbol in self._symbols}:
            distance = levenshtein_distance(name.lower(), symbol_name.lower())
            if distance <= max_distance:
                candidates.append((distance, symbol_name))

        candidates.sort()
        return [candidate for _, candidate in candidates[:5]]

    def __len__(self) -> int:
        return len(self._symbols)

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self._symbols)

    def __str__(self) -> str:
        return f"SymbolTable(level={self.current_scope}, {len(self._symbols)} symbols)"
