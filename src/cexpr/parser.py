"""Right-recursive expression parser over a pull-based token stream.

Operators have no precedence and associate to the right: ``a - b * c``
parses as ``a - (b * c)`` and ``8 - 4 - 2`` as ``8 - (4 - 2)``.
"""

from __future__ import annotations

import logging

from cexpr.ast import Binary, Expr, Leaf
from cexpr.errors import ParseError
from cexpr.lexer import Lexer
from cexpr.tokens import ARITHMETIC_KINDS, Token, TokenKind

logger = logging.getLogger(__name__)


class Parser:
    """Recursive descent parser pulling one token at a time from a Lexer."""

    def __init__(self, lexer: Lexer) -> None:
        self._lexer = lexer
        # Token that stopped the parse short of END, if any
        self.trailing: Token | None = None

    def parse_primary(self) -> Leaf:
        token = self._lexer.next_token()
        if token.kind == TokenKind.END:
            raise ParseError(
                "expected primary expression, reached end of input",
                token.span,
                self._lexer.source,
            )
        return Leaf(token)

    def parse_expression(self) -> Expr:
        """Parse ``primary (op primary)*`` and nest every operator to the right.

        Operands are collected in a loop and folded from the end, so the
        tree for ``a op1 b op2 c`` is ``a op1 (b op2 c)`` at any length.
        """
        operands: list[Leaf] = [self.parse_primary()]
        operators: list[Token] = []

        while True:
            token = self._lexer.next_token()

            if token.kind == TokenKind.END:
                break

            if token.kind in ARITHMETIC_KINDS:
                operators.append(token)
                operands.append(self.parse_primary())
                continue

            # Lenient: anything else ends the expression and is dropped
            logger.warning(
                "unexpected token %s %r, expression truncated", token.kind.name, token.value
            )
            self.trailing = token
            break

        expr: Expr = operands[-1]
        for op, lhs in zip(reversed(operators), reversed(operands[:-1])):
            expr = Binary(op, lhs, expr)
        return expr


def parse_primary(lexer: Lexer) -> Leaf:
    return Parser(lexer).parse_primary()


def parse_expression(lexer: Lexer) -> Expr:
    """Parse one expression from lexer, consuming tokens up to END or the first stray token."""
    return Parser(lexer).parse_expression()


def parse(source: str) -> Expr:
    """Convenience function: lex and parse source text into an expression tree."""
    return parse_expression(Lexer(source))
