"""Expression tree node types."""

from __future__ import annotations

from dataclasses import dataclass

from cexpr.tokens import Span, Token


@dataclass(frozen=True, slots=True)
class Leaf:
    """A primary expression: a single token."""

    token: Token

    @property
    def span(self) -> Span | None:
        return self.token.span


@dataclass(frozen=True, slots=True)
class Binary:
    """An arithmetic operator applied to two subtrees."""

    op: Token
    lhs: Expr
    rhs: Expr

    @property
    def span(self) -> Span | None:
        last = self.rhs
        while isinstance(last, Binary):
            last = last.rhs
        start, end = self.lhs.span, last.span
        if start is None or end is None:
            return self.op.span
        return Span(start.start, end.end)


Expr = Leaf | Binary
