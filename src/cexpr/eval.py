"""Tree-walking evaluator for parsed expressions."""

from __future__ import annotations

import logging
import math
import operator
from collections.abc import Callable

from cexpr.ast import Binary, Expr, Leaf
from cexpr.errors import InternalError, UnknownVariableError
from cexpr.tokens import Position, Span, Token, TokenKind

logger = logging.getLogger(__name__)

CONSTANTS: dict[str, float] = {"PI": math.pi}

_NO_SPAN = Span(Position(1, 1, 0), Position(1, 1, 0))


def _divide(lhs: float, rhs: float) -> float:
    """IEEE-754 division: x/0 is a signed infinity, 0/0 is nan."""
    if rhs == 0.0:
        if lhs == 0.0 or math.isnan(lhs):
            return math.nan
        # Sign of zero matters: 1/-0 is -inf
        return math.copysign(math.inf, lhs) * math.copysign(1.0, rhs)
    return lhs / rhs


_OPERATORS: dict[TokenKind, Callable[[float, float], float]] = {
    TokenKind.PLUS: operator.add,
    TokenKind.MINUS: operator.sub,
    TokenKind.MULTIPLY: operator.mul,
    TokenKind.DIVISION: _divide,
}


def evaluate(expr: Expr, source: str = "") -> float:
    """Reduce an expression tree to a float.

    ``source`` is only used to give UnknownVariableError its context line.
    The right spine is walked with an explicit stack; left operands are
    evaluated on the way down, in source order.
    """
    pending: list[tuple[Callable[[float, float], float], float, str]] = []
    node = expr
    while isinstance(node, Binary):
        apply = _OPERATORS.get(node.op.kind)
        if apply is None:
            raise InternalError(f"unreachable operator {node.op.kind.name}")
        pending.append((apply, evaluate(node.lhs, source), node.op.value))
        node = node.rhs

    if not isinstance(node, Leaf):
        raise InternalError(f"unreachable node {type(node).__name__}")
    result = _eval_leaf(node.token, source)

    while pending:
        apply, lhs, text = pending.pop()
        rhs = result
        result = apply(lhs, rhs)
        logger.debug("%r %s %r = %r", lhs, text, rhs, result)
    return result


def _eval_leaf(token: Token, source: str) -> float:
    if token.kind == TokenKind.NUMBER:
        return float(token.value)
    if token.kind == TokenKind.SYMBOL:
        if token.value in CONSTANTS:
            return CONSTANTS[token.value]
        raise UnknownVariableError(token.value, token.span or _NO_SPAN, source)
    raise InternalError(f"unreachable leaf {token.kind.name} {token.value!r}")
