"""--tokens and --debug dumps to stderr."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from typing import TextIO

from cexpr.ast import Binary, Expr, Leaf
from cexpr.tokens import Token


def dump_tokens(tokens: Iterable[Token], *, file: TextIO | None = None) -> None:
    """Print one line per token to *file* (default: the current sys.stderr)."""
    f = sys.stderr if file is None else file
    for tok in tokens:
        where = f"{tok.span.start.line}:{tok.span.start.column}" if tok.span else "?"
        f.write(f"{where:>7} {tok.kind.name:<12} {tok.value!r}\n")


def dump_tree(expr: Expr, *, file: TextIO | None = None) -> None:
    """Print a human-readable expression tree to *file* (default: the current sys.stderr)."""
    f = sys.stderr if file is None else file
    # Explicit stack; right-nested trees can be thousands of levels deep
    stack: list[tuple[Expr, int]] = [(expr, 0)]
    while stack:
        node, depth = stack.pop()
        if isinstance(node, Leaf):
            f.write(f"{_indent(depth)}{node.token.kind.name}({node.token.value!r})\n")
        elif isinstance(node, Binary):
            f.write(f"{_indent(depth)}Binary {node.op.value}\n")
            stack.append((node.rhs, depth + 1))
            stack.append((node.lhs, depth + 1))


def _indent(depth: int) -> str:
    return "  " * depth
