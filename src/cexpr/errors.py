"""Error types with formatted source context."""

from __future__ import annotations

from cexpr.tokens import Span


def _format_snippet(message: str, span: Span, source: str, filename: str) -> str:
    lines = source.splitlines(keepends=True)
    line_idx = span.start.line - 1
    col = span.start.column

    # Build the source line (strip trailing newline for display)
    if 0 <= line_idx < len(lines):
        source_line = lines[line_idx].rstrip("\n").rstrip("\r")
    else:
        source_line = ""

    # Underline the full span when on one line, otherwise to end of line
    if span.end.line == span.start.line:
        underline_len = max(1, span.end.column - col)
    else:
        underline_len = max(1, len(source_line) - col + 1)

    pad = " " * (col - 1)
    carets = "^" * underline_len

    line_num = str(span.start.line)
    gutter_width = len(line_num) + 1

    blank_gutter = " " * gutter_width + "|"
    line_gutter = f"{line_num:>{gutter_width - 1}} |"

    return (
        f"error: {message}\n"
        f"{' ' * gutter_width}--> {filename}:{span.start.line}:{col}\n"
        f"{blank_gutter}\n"
        f"{line_gutter} {source_line}\n"
        f"{blank_gutter} {pad}{carets}"
    )


class ParseError(Exception):
    """Raised when a primary expression is requested at end of input."""

    def __init__(self, message: str, span: Span, source: str) -> None:
        self.message = message
        self.span = span
        self.source = source
        super().__init__(self.format())

    def format(self, filename: str = "<expr>") -> str:
        return _format_snippet(self.message, self.span, self.source, filename)


class UnknownVariableError(Exception):
    """Raised when a symbol is not in the constant table."""

    def __init__(self, name: str, span: Span, source: str) -> None:
        self.name = name
        self.message = f"unknown variable '{name}'"
        self.span = span
        self.source = source
        super().__init__(self.format())

    def format(self, filename: str = "<expr>") -> str:
        return _format_snippet(self.message, self.span, self.source, filename)


class InternalError(Exception):
    """Raised on an unreachable parser/evaluator contract violation."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"internal error: {message}")
