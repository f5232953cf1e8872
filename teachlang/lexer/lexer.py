"""
TeachLang Lexer - turns source text into tokens

Character classification only: numbers, identifiers/keywords, quoted
literals, single- and double-character operators. Lexical errors never
stop the scan; they become ERROR tokens that the parser reports as
unexpected tokens.

Author: xwest
"""

from typing import Iterable, List, Optional

from .tokens import (
    Token, TokenType, SourceLocation, LexicalErrorKind, KEYWORDS,
    ARITHMETIC_OPERATORS, PUNCTUATION
)
from .errors import (
    LexerError, create_invalid_character_error, create_unterminated_string_error,
    create_unterminated_char_error, create_consecutive_operators_error
)


class Lexer:
    """
    TeachLang lexical analyzer.

    Produces one token per ``next_token()`` call and keeps returning the
    EOF token once the input is exhausted.
    """

    def __init__(self, source: str, filename: str = "<string>"):
        """
        Initialize the lexer with source code.

        Args:
            source: Source code string
            filename: Name of source file for error reporting
        """
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.column = 1
        self.errors: List[LexerError] = []

        # An operator right after another operator is a lexical error
        self._last_was_operator = False

    def tokenize(self) -> List[Token]:
        """
        Tokenize the entire source code.

        Returns:
            List of tokens ending with exactly one EOF token
        """
        tokens = []
        while True:
            token = self.next_token()
            tokens.append(token)
            if token.type == TokenType.EOF:
                return tokens

    def next_token(self) -> Token:
        """Scan and return the next token."""
        self._skip_whitespace_and_comments()

        start = self._location()

        if self.pos >= len(self.source):
            return Token(TokenType.EOF, "", start)

        current_char = self.source[self.pos]

        # Numbers
        if current_char.isdigit():
            return self._finish(self._tokenize_number(start))

        # Identifiers and keywords
        if current_char.isalpha() or current_char == '_':
            return self._finish(self._tokenize_identifier_or_keyword(start))

        # String and character literals
        if current_char == '"':
            return self._finish(self._tokenize_string(start))
        if current_char == "'":
            return self._finish(self._tokenize_character(start))

        self._advance()

        # Arithmetic operators
        if current_char in ARITHMETIC_OPERATORS:
            if self._last_was_operator:
                token = self._error_token(
                    create_consecutive_operators_error(current_char, start), current_char
                )
            else:
                token = Token(TokenType.OPERATOR, current_char, start)
            self._last_was_operator = True
            return token

        # Assignment and comparison operators
        if current_char == '=':
            if self._match('='):
                return self._finish(Token(TokenType.COMPARISON, "==", start))
            return self._finish(Token(TokenType.EQUALS, "=", start))
        if current_char == '!':
            if self._match('='):
                return self._finish(Token(TokenType.COMPARISON, "!=", start))
            return self._finish(self._error_token(
                create_invalid_character_error(current_char, start), current_char
            ))
        if current_char in '<>':
            return self._finish(Token(TokenType.COMPARISON, current_char, start))

        # Punctuation
        if current_char in PUNCTUATION:
            return self._finish(Token(PUNCTUATION[current_char], current_char, start))

        # Single characters that aren't recognized
        return self._finish(self._error_token(
            create_invalid_character_error(current_char, start), current_char
        ))

    def _finish(self, token: Token) -> Token:
        """Record that a non-operator token was produced."""
        self._last_was_operator = False
        return token

    def _error_token(self, error: LexerError, lexeme: str) -> Token:
        """Record a lexical error and build the ERROR token standing in for it."""
        self.errors.append(error)
        return Token(TokenType.ERROR, lexeme, error.location, error.kind)

    def _tokenize_number(self, start: SourceLocation) -> Token:
        """Tokenize a number: digits with at most one decimal point."""
        begin = self.pos
        seen_dot = False

        while self.pos < len(self.source):
            char = self.source[self.pos]
            if char == '.':
                if seen_dot:
                    break
                seen_dot = True
            elif not char.isdigit():
                break
            self._advance()

        return Token(TokenType.NUMBER, self.source[begin:self.pos], start)

    def _tokenize_identifier_or_keyword(self, start: SourceLocation) -> Token:
        """Tokenize an identifier or keyword."""
        begin = self.pos

        # First character is already validated as identifier start
        self._advance()
        while self.pos < len(self.source) and (self.source[self.pos].isalnum()
                                               or self.source[self.pos] == '_'):
            self._advance()

        lexeme = self.source[begin:self.pos]
        token_type = KEYWORDS.get(lexeme, TokenType.IDENTIFIER)
        return Token(token_type, lexeme, start)

    def _tokenize_string(self, start: SourceLocation) -> Token:
        """Tokenize a double-quoted string literal."""
        content = self._read_quoted('"')
        if content is None:
            lexeme = self.source[start.offset + 1:self.pos]
            return self._error_token(create_unterminated_string_error(start), lexeme)
        return Token(TokenType.STRING_LITERAL, content, start)

    def _tokenize_character(self, start: SourceLocation) -> Token:
        """
        Tokenize a single-quoted character literal.

        The whole quoted text is kept so the analyzer can reject literals
        that are not exactly one character long.
        """
        content = self._read_quoted("'")
        if content is None:
            lexeme = self.source[start.offset + 1:self.pos]
            return self._error_token(create_unterminated_char_error(start), lexeme)
        return Token(TokenType.CHAR_LITERAL, content, start)

    def _read_quoted(self, quote: str) -> Optional[str]:
        """Read up to the closing quote; None if the input ends first."""
        self._advance()  # Skip opening quote
        begin = self.pos

        while self.pos < len(self.source) and self.source[self.pos] != quote:
            self._advance()

        if self.pos >= len(self.source):
            return None

        content = self.source[begin:self.pos]
        self._advance()  # Skip closing quote
        return content

    def _skip_whitespace_and_comments(self):
        """Skip whitespace and // line comments."""
        while self.pos < len(self.source):
            if self.source[self.pos] in ' \t\r\n':
                self._advance()
                continue

            if self.source.startswith('//', self.pos):
                while self.pos < len(self.source) and self.source[self.pos] != '\n':
                    self._advance()
                continue

            break

    def _location(self) -> SourceLocation:
        return SourceLocation(self.filename, self.line, self.column, self.pos)

    def _advance(self):
        """Advance position by one character, updating line/column."""
        if self.pos < len(self.source):
            if self.source[self.pos] == '\n':
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1

    def _match(self, expected: str) -> bool:
        """Consume the next character if it is the expected one."""
        if self.pos < len(self.source) and self.source[self.pos] == expected:
            self._advance()
            return True
        return False

    def has_errors(self) -> bool:
        """Check if lexer encountered any errors."""
        return len(self.errors) > 0


class TokenBuffer:
    """
    Token source over an already materialized token sequence.

    Behaves like ``Lexer.next_token``: once the tokens run out it keeps
    returning an EOF token.
    """

    def __init__(self, tokens: Iterable[Token]):
        self.tokens = list(tokens)
        self.pos = 0

    def next_token(self) -> Token:
        if self.pos < len(self.tokens):
            token = self.tokens[self.pos]
            self.pos += 1
            return token
        if self.tokens:
            last = self.tokens[-1].location
        else:
            last = SourceLocation("<tokens>", 1, 1, 0)
        return Token(TokenType.EOF, "", last)


def tokenize_string(source: str, filename: str = "<string>") -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Lexical errors are left in the stream as ERROR tokens.
    """
    return Lexer(source, filename).tokenize()
