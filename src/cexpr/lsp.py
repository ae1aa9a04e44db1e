"""Minimal LSP server for cexpr: diagnostics only."""

from __future__ import annotations

from lsprotocol.types import (
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    Position,
    PublishDiagnosticsParams,
    Range,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer

from cexpr import __version__
from cexpr.errors import InternalError, ParseError, UnknownVariableError
from cexpr.eval import evaluate
from cexpr.lexer import Lexer, tokenize
from cexpr.parser import Parser
from cexpr.tokens import Span, TokenKind

server = LanguageServer("cexpr-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full)


def _range(span: Span) -> Range:
    """Convert a 1-based Span to a 0-based LSP Range."""
    return Range(
        start=Position(line=span.start.line - 1, character=span.start.column - 1),
        end=Position(line=span.end.line - 1, character=span.end.column - 1),
    )


def _diagnostic(span: Span, message: str, severity: DiagnosticSeverity) -> Diagnostic:
    return Diagnostic(range=_range(span), message=message, severity=severity, source="cexpr")


def _validate(ls: LanguageServer, uri: str) -> None:
    """Run the lex/parse/evaluate pipeline and publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    source = doc.source
    diagnostics: list[Diagnostic] = []

    for tok in tokenize(source):
        if tok.kind == TokenKind.INVALID:
            diagnostics.append(
                _diagnostic(
                    tok.span,
                    f"invalid character {tok.value!r}",
                    DiagnosticSeverity.Information,
                )
            )

    parser = Parser(Lexer(source))
    try:
        tree = parser.parse_expression()
    except ParseError as exc:
        diagnostics.append(_diagnostic(exc.span, exc.message, DiagnosticSeverity.Error))
    else:
        if parser.trailing is not None:
            diagnostics.append(
                _diagnostic(
                    parser.trailing.span,
                    f"unexpected {parser.trailing.kind.name.lower()} token, expression truncated",
                    DiagnosticSeverity.Warning,
                )
            )
        try:
            evaluate(tree, source)
        except UnknownVariableError as exc:
            diagnostics.append(_diagnostic(exc.span, exc.message, DiagnosticSeverity.Warning))
        except InternalError as exc:
            span = tree.span
            if span is not None:
                diagnostics.append(_diagnostic(span, exc.message, DiagnosticSeverity.Warning))

    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


def main() -> None:
    server.start_io()
