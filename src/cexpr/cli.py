"""Command-line interface for cexpr."""

from __future__ import annotations

import argparse
import logging
import math
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from cexpr.errors import InternalError, ParseError, UnknownVariableError

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Beyond 2**53 not every integer is representable; print those with repr
_EXACT_INT_LIMIT = 2.0**53


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    expression: str | None
    input_file: Path | None
    result_format: str | None
    log_level: str
    tokens: bool
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="cexpr",
        description="Tokenize C-like source and evaluate arithmetic expressions",
    )
    p.add_argument("expression", nargs="?", help="Expression to evaluate")
    p.add_argument("-f", "--file", help="Read the expression from FILE (default: stdin)")
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover cexpr.toml)",
    )
    p.add_argument(
        "--format",
        metavar="SPEC",
        help="Python format spec for the result, e.g. '.3f'",
    )
    p.add_argument("--tokens", action="store_true", help="Print the token stream and exit")
    p.add_argument("--debug", action="store_true", help="Dump expression tree to stderr")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return p


def load_config(config_path: Path | None, search_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else search_dir / "cexpr.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags.
    """
    if args.expression is not None and args.file:
        raise argparse.ArgumentTypeError("give either an expression or --file, not both")

    input_file = Path(args.file) if args.file else None
    search_dir = Path(".")
    if input_file is not None and input_file.parent.parts:
        search_dir = input_file.parent

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, search_dir)

    # Result format: config < CLI
    result_format: str | None = None
    cfg_output = config.get("output")
    if isinstance(cfg_output, dict):
        cfg_format = cfg_output.get("format")
        if isinstance(cfg_format, str):
            result_format = cfg_format
    if args.format is not None:
        result_format = args.format

    # Log level: config < CLI
    log_level = "WARNING"
    cfg_logging = config.get("logging")
    if isinstance(cfg_logging, dict):
        cfg_level = cfg_logging.get("level")
        if isinstance(cfg_level, str):
            log_level = cfg_level.upper()
    if args.verbose:
        log_level = "DEBUG"
    if log_level not in _LOG_LEVELS:
        raise argparse.ArgumentTypeError(f"invalid log level: {log_level}")

    return CliOptions(
        expression=args.expression,
        input_file=input_file,
        result_format=result_format,
        log_level=log_level,
        tokens=args.tokens,
        debug=args.debug,
    )


def read_source(options: CliOptions) -> tuple[str, str]:
    """Return (source, display filename) from the expression, file, or stdin."""
    if options.expression is not None:
        return options.expression, "<expr>"
    if options.input_file is not None:
        return options.input_file.read_text(encoding="utf-8"), str(options.input_file)
    return sys.stdin.read(), "<stdin>"


def format_result(value: float, spec: str | None = None) -> str:
    """Integral finite results print without a fractional part unless spec is given."""
    if spec is not None:
        return format(value, spec)
    if math.isfinite(value) and value.is_integer() and abs(value) < _EXACT_INT_LIMIT:
        return str(int(value))
    return repr(value)


def run(source: str, options: CliOptions) -> str:
    """Lex, parse, and evaluate source, returning the text to print."""
    from cexpr.debug import dump_tokens, dump_tree
    from cexpr.eval import evaluate
    from cexpr.lexer import Lexer, tokenize
    from cexpr.parser import parse_expression

    if options.tokens:
        lines = []
        for tok in tokenize(source):
            where = f"{tok.span.start.line}:{tok.span.start.column}"
            lines.append(f"{where}\t{tok.kind.name}\t{tok.value!r}")
        return "\n".join(lines)

    tree = parse_expression(Lexer(source))

    if options.debug:
        dump_tokens(tokenize(source), file=sys.stderr)
        dump_tree(tree, file=sys.stderr)

    value = evaluate(tree, source)
    return format_result(value, options.result_format)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    logging.basicConfig(level=options.log_level, format="%(levelname)s: %(message)s")

    try:
        source, filename = read_source(options)
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    logger.debug("read %d characters from %s", len(source), filename)

    try:
        output = run(source, options)
    except ParseError as exc:
        print(exc.format(filename), file=sys.stderr)
        return 1
    except UnknownVariableError as exc:
        print(exc.format(filename), file=sys.stderr)
        return 2
    except InternalError as exc:
        print(str(exc), file=sys.stderr)
        return 2
    except ValueError as exc:
        # Bad --format spec
        print(f"error: {exc}", file=sys.stderr)
        return 2

    print(output)
    return 0
