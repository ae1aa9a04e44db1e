"""Token kinds, data structures, and character classification helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto


class TokenKind(Enum):
    END = auto()  # end of input, idempotent
    HASH = auto()  # #
    SYMBOL = auto()  # letter (letter | digit)*
    INVALID = auto()  # any single unrecognized character
    COMMENT = auto()  # // through end of line

    # Punctuation
    OPEN_PAREN = auto()  # (
    CLOSE_PAREN = auto()  # )
    OPEN_CURLY = auto()  # {
    CLOSE_CURLY = auto()  # }
    SEMICOLON = auto()  # ;

    # Literals
    NUMBER = auto()  # digit+
    STRING = auto()  # "..." (quotes dropped)
    KEYWORD = auto()  # symbol whose text is in KEYWORDS

    # Arithmetic operators
    DIVISION = auto()  # /
    PLUS = auto()  # +
    MINUS = auto()  # -
    MULTIPLY = auto()  # *


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Span:
    """Source range from start to end position."""

    start: Position
    end: Position


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexer token. Compares by kind and value only."""

    kind: TokenKind
    value: str = ""
    span: Span | None = field(default=None, compare=False)


# Ordered: the first entry whose text prefixes the input wins.
LITERAL_TOKENS: tuple[tuple[str, TokenKind], ...] = (
    ("(", TokenKind.OPEN_PAREN),
    (")", TokenKind.CLOSE_PAREN),
    ("{", TokenKind.OPEN_CURLY),
    ("}", TokenKind.CLOSE_CURLY),
    (";", TokenKind.SEMICOLON),
    ("+", TokenKind.PLUS),
    ("/", TokenKind.DIVISION),
    ("-", TokenKind.MINUS),
    ("*", TokenKind.MULTIPLY),
)

KEYWORDS: frozenset[str] = frozenset(
    {
        "auto", "const", "double", "float", "int", "short", "struct", "unsigned",
        "break", "continue", "else", "for", "long", "signed", "switch", "void",
        "case", "default", "enum", "goto", "register", "sizeof", "typedef",
        "volatile", "char", "do", "extern", "if", "return", "static", "union",
        "while",
    }
)

ARITHMETIC_KINDS: frozenset[TokenKind] = frozenset(
    {TokenKind.PLUS, TokenKind.MINUS, TokenKind.MULTIPLY, TokenKind.DIVISION}
)

_ASCII_LETTERS = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ")
_ASCII_DIGITS = frozenset("0123456789")

# ECMAScript WhiteSpace + LineTerminator: includes U+FEFF, excludes \x1c-\x1f and U+0085
_WHITESPACE = frozenset(
    "\t\n\v\f\r \u00a0\u1680\u2000\u2001\u2002\u2003\u2004\u2005\u2006"
    "\u2007\u2008\u2009\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
)


def is_space(ch: str) -> bool:
    """Return True if ch is skipped as whitespace between tokens."""
    return ch in _WHITESPACE


def is_letter(ch: str) -> bool:
    """Return True if ch is an ASCII letter."""
    return ch in _ASCII_LETTERS


def is_digit(ch: str) -> bool:
    """Return True if ch is an ASCII digit."""
    return ch in _ASCII_DIGITS


def is_symbol_start(ch: str) -> bool:
    return is_letter(ch) or ch == "#"


def is_symbol(ch: str) -> bool:
    return is_letter(ch) or is_digit(ch)
