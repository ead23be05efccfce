"""
Lumen CLI Entrypoint.

This module provides the command-line interface for running Lumen code.

Features:
    - Run a script file or an inline string (`-s`).
    - Dump the token stream (`--tokens`) or the parsed statements (`--ast`)
      instead of evaluating.
    - Launch the interactive REPL when no source is given.

Example usage:
    lumen hello.lum
    lumen -s "print 1 + 2;"
    lumen --tokens hello.lum
    lumen --repl --verbose

Exit status:
    0   success
    64  usage error
    65  scan or parse error, or a script that is not UTF-8
    66  source file missing or unreadable
    70  runtime error
"""

import argparse
import logging
import sys

from lumen.lumen_config import Settings
from lumen.lumen_printer import AstPrinter
from lumen.lumen_session import RunStatus, Session

EXIT_OK = 0
EXIT_USAGE = 64
EXIT_DATAERR = 65
EXIT_NOINPUT = 66
EXIT_SOFTWARE = 70

_STATUS_CODES = {
    RunStatus.OK: EXIT_OK,
    RunStatus.STATIC_ERROR: EXIT_DATAERR,
    RunStatus.RUNTIME_ERROR: EXIT_SOFTWARE,
}


def run_lumen(
    source: str,
    is_string: bool = False,
    show_tokens: bool = False,
    show_ast: bool = False,
    settings: Settings | None = None,
) -> int:
    """
    Run the Lumen pipeline on a file or string: scan, parse, then evaluate or dump.

    Args:
        source (str): Lumen source code or path to a script.
        is_string (bool): If True, treats `source` as code instead of a path.
        show_tokens (bool): Print one token per line instead of evaluating.
        show_ast (bool): Print each parsed statement instead of evaluating.
        settings (Settings | None): Limits to run with. Defaults to `Settings()`.

    Returns:
        int: Process exit status.

    Side Effects:
        Program output goes to stdout, diagnostics to stderr.
    """
    if not is_string:
        try:
            with open(source, encoding="utf-8") as f:
                source = f.read()
        except FileNotFoundError:
            print(f"lumen: cannot open {source!r}: no such file", file=sys.stderr)
            return EXIT_NOINPUT
        except UnicodeDecodeError as e:
            print(f"lumen: {source!r} is not valid UTF-8: {e.reason}", file=sys.stderr)
            return EXIT_DATAERR
        except OSError as e:
            print(f"lumen: cannot open {source!r}: {e.strerror}", file=sys.stderr)
            return EXIT_NOINPUT

    session = Session(settings)

    if show_tokens:
        for tok in session.tokens(source):
            print(tok)
        return EXIT_DATAERR if session.reporter.had_error else EXIT_OK

    if show_ast:
        statements = session.ast(source)
        if statements is None:
            return EXIT_DATAERR
        printer = AstPrinter()
        for stmt in statements:
            print(printer.print_stmt(stmt))
        return EXIT_OK

    return _STATUS_CODES[session.run(source)]


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.logging_level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="lumen")
    parser.add_argument("source", nargs="?", help="Script path or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal code"
    )
    dump = parser.add_mutually_exclusive_group()
    dump.add_argument("--tokens", action="store_true", help="Print the token stream")
    dump.add_argument("--ast", action="store_true", help="Print the parsed statements")
    parser.add_argument(
        "--max-depth",
        type=int,
        metavar="N",
        help="Deepest expression nesting accepted (default: $LUMEN_MAX_DEPTH or 100)",
    )
    parser.add_argument(
        "--repl", action="store_true", help="Launch the interactive REPL"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Log debug output to stderr"
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """
    Entry point for the Lumen CLI.

    Runs the REPL when no source is given or `--repl` is passed, and the
    script otherwise. Exits with the status described in the module docstring.
    """
    parser = build_arg_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        if e.code not in (0, None):
            sys.exit(EXIT_USAGE)
        raise

    try:
        settings = Settings.from_env().replace(
            max_depth=args.max_depth, log_level="DEBUG" if args.verbose else None
        )
    except ValueError as e:
        print(f"lumen: {e}", file=sys.stderr)
        sys.exit(EXIT_USAGE)

    configure_logging(settings)

    if args.repl or args.source is None:
        from lumen.lumen_repl import start_repl

        start_repl(settings)
        return

    code = run_lumen(
        source=args.source,
        is_string=args.string,
        show_tokens=args.tokens,
        show_ast=args.ast,
        settings=settings,
    )
    if code != EXIT_OK:
        sys.exit(code)


if __name__ == "__main__":
    main()
