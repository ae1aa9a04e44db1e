"""Lexer and right-associative arithmetic evaluator for C-like source text."""

from __future__ import annotations

__version__ = "0.1.0"


def evaluate_source(source: str) -> float:
    """Lex, parse, and evaluate an arithmetic expression."""
    from cexpr.eval import evaluate
    from cexpr.parser import parse

    return evaluate(parse(source), source)
