from __future__ import annotations

import argparse
import json
from typing import Any, Callable

from .autocomplete import AutoComplete
from .completion import build_completion_table, get_completion_table, table_to_dict
from .config import LOG_LEVEL, SUPPORTED_FUNCTIONS, VERSION
from .evaluator import parse_function
from .hints import generate_hint
from .logging_config import get_logger, setup_logging
from .splitter import process_func_str, split_function
from .types import ParseError, SplitPolicy, TableBuildError, ValidationError

logger = get_logger("cli")

REPL_EXIT_COMMANDS = {"quit", "exit"}


def _emit(res: dict[str, Any], output_format: str = "human") -> None:
    """Print a result dictionary in the requested format."""
    if output_format == "json":
        print(json.dumps(res, indent=2, ensure_ascii=False))
        return
    if not res.get("ok", True):
        print("Error:", res.get("error"))
        return
    for key, value in res.items():
        if key == "ok":
            continue
        print(f"{key}: {value}")


def _health_check() -> int:
    """Run health check to verify dependencies and basic operations.

    Returns:
        Exit code (0 for success, non-zero for failures)
    """
    checks_passed = 0
    checks_failed = 0

    print("Running implicalc health check...")
    print("-" * 50)

    try:
        import sympy as sp

        print(f"[OK] SymPy {sp.__version__} imported successfully")
        checks_passed += 1
    except ImportError as e:
        print(f"[FAIL] SymPy import failed: {e}")
        checks_failed += 1

    try:
        table = get_completion_table()
        print(f"[OK] Completion table built ({len(table)} prefixes)")
        checks_passed += 1
    except TableBuildError as e:
        print(f"[FAIL] Completion table failed: {e}")
        checks_failed += 1

    processed = process_func_str("2sin(x)cos(x)")
    if processed == "2*sin(x)*cos(x)":
        print("[OK] Splitting works")
        checks_passed += 1
    else:
        print(f"[FAIL] Splitting check failed: got {processed!r}")
        checks_failed += 1

    try:
        parse_function("2sin(x)cos(x)")
        print("[OK] Evaluator parsing works")
        checks_passed += 1
    except (ValidationError, ParseError) as e:
        print(f"[FAIL] Evaluator check failed: {e}")
        checks_failed += 1

    print("-" * 50)
    print(f"Results: {checks_passed} passed, {checks_failed} failed")

    if checks_failed > 0:
        print("\n[WARN] Some health checks failed.")
        return 1

    print("\n[OK] All health checks passed!")
    return 0


def make_completer(session: AutoComplete) -> Callable[[str, int], str | None]:
    """Build a readline completer backed by ``session``.

    The completer expects the whole line as ``text`` (no completer
    delimiters) and offers the line extended by each candidate of its hint.
    """

    def complete(text: str, state: int) -> str | None:
        session.update_string(text)
        options = [text + candidate for candidate in session.active_hint.candidates]
        if state < len(options):
            return options[state]
        return None

    return complete


def repl_loop(output_format: str = "human") -> None:
    """Interactive loop: split each line and show its hint, with Tab completion."""
    session = AutoComplete()
    try:
        import readline

        readline.set_completer_delims("")
        readline.set_completer(make_completer(session))
        readline.parse_and_bind("tab: complete")
    except (ImportError, ModuleNotFoundError):
        # readline not available on Windows - that's fine
        pass

    print("implicalc: type an expression, Tab to complete, 'quit' to exit.")
    while True:
        try:
            line = input(">>> ")
        except (EOFError, KeyboardInterrupt):
            print()
            break
        line = line.strip()
        if line.lower() in REPL_EXIT_COMMANDS:
            break
        session.update_string(line)
        _emit(
            {
                "tokens": split_function(line),
                "processed": process_func_str(line),
                "hint": str(session.active_hint),
            },
            output_format,
        )


def main_entry(argv: list[str] | None = None) -> int:
    """
    Main entry point for the implicalc CLI.

    Args:
        argv: Optional command-line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = argparse.ArgumentParser(prog="implicalc")
    parser.add_argument(
        "-s",
        "--split",
        type=str,
        help="Split an expression into implicitly multiplied terms",
        dest="split_expr",
    )
    parser.add_argument(
        "--term",
        action="store_true",
        help="With --split, also break after every opening parenthesis",
    )
    parser.add_argument(
        "--join",
        action="store_true",
        help="With --split, print the multiplication terms joined with explicit '*'",
    )
    parser.add_argument(
        "--hint", type=str, help="Show the autocomplete hint for an input", dest="hint_expr"
    )
    parser.add_argument(
        "--table",
        action="store_true",
        help="Dump the completion table (JSON) for the supported functions",
    )
    parser.add_argument(
        "--functions",
        type=str,
        help="With --table, comma-separated function names to build the table from",
    )
    parser.add_argument(
        "-c",
        "--check",
        type=str,
        help="Check that an expression is a valid function of x",
        dest="check_expr",
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["json", "human"],
        default="human",
        help="Output format: json (machine-readable) or human (human-readable)",
    )
    parser.add_argument(
        "-v", "--version", action="store_true", help="Show program version"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=LOG_LEVEL.upper(),
        help="Set logging level",
    )
    parser.add_argument("--log-file", type=str, help="Write logs to file")
    parser.add_argument(
        "--health-check",
        action="store_true",
        help="Run health check and verify dependencies",
    )
    args = parser.parse_args(argv)
    if args.join and args.term:
        parser.error("--join cannot be combined with --term")

    setup_logging(level=args.log_level, log_file=args.log_file)

    output_format = args.format

    if args.version:
        print(VERSION)
        return 0
    if args.health_check:
        return _health_check()
    if args.split_expr is not None:
        policy = SplitPolicy.TERM if args.term else SplitPolicy.MULTIPLICATION
        if args.join:
            _emit({"processed": process_func_str(args.split_expr)}, output_format)
        else:
            _emit({"tokens": split_function(args.split_expr, policy)}, output_format)
        return 0
    if args.hint_expr is not None:
        _emit(generate_hint(args.hint_expr).to_dict(), output_format)
        return 0
    if args.table:
        if args.functions:
            names = [name.strip() for name in args.functions.split(",") if name.strip()]
        else:
            names = list(SUPPORTED_FUNCTIONS)
        try:
            table = build_completion_table(names)
        except TableBuildError as e:
            logger.error("Could not build completion table: %s", e)
            _emit({"ok": False, "error": str(e), "code": e.code}, output_format)
            return 1
        print(json.dumps(table_to_dict(table), indent=2, ensure_ascii=False))
        return 0
    if args.check_expr is not None:
        try:
            expr = parse_function(args.check_expr)
        except (ValidationError, ParseError) as e:
            _emit({"ok": False, "error": str(e), "code": e.code}, output_format)
            return 1
        _emit(
            {
                "ok": True,
                "processed": process_func_str(args.check_expr),
                "expression": "" if expr is None else str(expr),
            },
            output_format,
        )
        return 0

    repl_loop(output_format)
    return 0


if __name__ == "__main__":
    raise SystemExit(main_entry())
