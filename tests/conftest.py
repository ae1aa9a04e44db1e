"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from cexpr.ast import Expr
from cexpr.lexer import Lexer
from cexpr.parser import parse
from cexpr.tokens import Token, TokenKind


@pytest.fixture
def lex():
    """Return a helper that tokenizes source and returns tokens (excluding END)."""

    def _lex(source: str) -> list[Token]:
        return list(Lexer(source))

    return _lex


@pytest.fixture
def parse_source():
    """Return a helper that parses source and returns an expression tree."""

    def _parse(source: str) -> Expr:
        return parse(source)

    return _parse


def assert_kinds(tokens: list[Token], expected: list[TokenKind]) -> None:
    """Assert that the token kinds match the expected list."""
    actual = [t.kind for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_values(tokens: list[Token], expected: list[str]) -> None:
    """Assert that the token values match the expected list."""
    actual = [t.value for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"
