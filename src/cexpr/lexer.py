"""Pull-based lexer: produces one token per call from a C-like source buffer."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator

from cexpr.tokens import (
    KEYWORDS,
    LITERAL_TOKENS,
    Position,
    Span,
    Token,
    TokenKind,
    is_digit,
    is_space,
    is_symbol,
    is_symbol_start,
)

logger = logging.getLogger(__name__)


class Lexer:
    """Scan a source buffer on demand, one token per ``next_token`` call.

    State is the cursor (offset of the next unconsumed character), the
    zero-based line count, and ``bol``, the offset where the current line
    begins. The cursor only ever moves forward.
    """

    def __init__(self, source: str) -> None:
        self.source = source
        self.cursor = 0
        self.line = 0
        self.bol = 0

    def __iter__(self) -> Iterator[Token]:
        """Yield the remaining tokens, stopping before END."""
        while True:
            token = self.next_token()
            if token.kind == TokenKind.END:
                return
            yield token

    def next_token(self) -> Token:
        """Consume and return the next token."""
        self._trim_left()
        start = self._current_pos()

        if self._at_end():
            return Token(TokenKind.END, "", Span(start, start))

        ch = self._peek()

        if ch == "#":
            return self._emit(TokenKind.HASH, self._advance(), start)

        if ch == '"':
            return self._lex_string(start)

        if is_digit(ch):
            return self._emit(TokenKind.NUMBER, self._take_while(is_digit), start)

        if is_symbol_start(ch):
            text = self._take_while(is_symbol)
            kind = TokenKind.KEYWORD if text in KEYWORDS else TokenKind.SYMBOL
            return self._emit(kind, text, start)

        if ch + self._peek(1) == "//":
            text = self._take_while(lambda c: c != "\n")
            return self._emit(TokenKind.COMMENT, text, start)

        for text, kind in LITERAL_TOKENS:
            if self.source.startswith(text, self.cursor):
                for _ in text:
                    self._advance()
                return self._emit(kind, text, start)

        logger.debug("invalid character %r at offset %d", ch, self.cursor)
        return self._emit(TokenKind.INVALID, self._advance(), start)

    # ------------------------------------------------------------------
    # Position helpers
    # ------------------------------------------------------------------

    def _current_pos(self) -> Position:
        return Position(self.line + 1, self.cursor - self.bol + 1, self.cursor)

    def _at_end(self) -> bool:
        return self.cursor >= len(self.source)

    def _peek(self, offset: int = 0) -> str:
        idx = self.cursor + offset
        if idx < len(self.source):
            return self.source[idx]
        return ""

    def _advance(self) -> str:
        ch = self.source[self.cursor]
        self.cursor += 1
        if ch == "\n":
            self.line += 1
            self.bol = self.cursor
        return ch

    def _take_while(self, pred: Callable[[str], bool]) -> str:
        chars = []
        while not self._at_end() and pred(self._peek()):
            chars.append(self._advance())
        return "".join(chars)

    def _trim_left(self) -> None:
        while not self._at_end() and is_space(self._peek()):
            self._advance()

    def _emit(self, kind: TokenKind, value: str, start: Position) -> Token:
        return Token(kind, value, Span(start, self._current_pos()))

    # ------------------------------------------------------------------
    # Strings
    # ------------------------------------------------------------------

    def _lex_string(self, start: Position) -> Token:
        self._advance()  # opening quote
        text = self._take_while(lambda c: c != '"' and c != "\n")
        # Closing quote or newline, whichever stopped the scan; absent at EOF
        if not self._at_end():
            self._advance()
        return self._emit(TokenKind.STRING, text, start)


def tokenize(source: str) -> list[Token]:
    """Convenience function: tokenize source text, ending with the END token."""
    lexer = Lexer(source)
    tokens = list(lexer)
    tokens.append(lexer.next_token())
    return tokens
