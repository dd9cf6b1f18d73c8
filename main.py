#!/usr/bin/env python3
"""
authcheck — Export-presence smoke check for an auth package.

Loads the core package and its adapters/utilities, lists what each one
exports, and exits non-zero if the core package exports nothing.

Usage:
  python main.py
  python main.py my_auth
  python main.py --path src
  python main.py --async
  python main.py --strict
  python main.py --format json
  python main.py --format markdown >> "$GITHUB_STEP_SUMMARY"
  python main.py --no-color

Environment variables (all optional, see core/config.py):
  AUTHCHECK_TARGET_PACKAGE    Package to check when none is given (auth_system)
  AUTHCHECK_TARGET_PATH       Directory to put on sys.path before probing
  AUTHCHECK_STRICT_CALLABLES  Same as --strict
  AUTHCHECK_LOG_LEVEL         Log level for diagnostics on stderr (WARNING)
"""

import argparse
import asyncio
import logging
import sys
from typing import Optional

from core.checker import run_checks, run_checks_async
from core.config import DOTTED_NAME_RE, get_settings
from core.formatter import disable_color, print_footer, print_header, print_unit_result, to_json, to_markdown
from core.loader import add_search_path
from core.models import build_manifest, is_path_reference


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="authcheck",
        description="Check that an auth package and its adapters/utilities export something.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  authcheck
  authcheck my_auth --path src
  authcheck --async --strict
  authcheck --format json > report.json
        """,
    )
    parser.add_argument(
        "package",
        nargs="?",
        default=None,
        metavar="PACKAGE",
        help="Import name of the package to check, or the path of its core .py file "
        "(default: AUTHCHECK_TARGET_PACKAGE or auth_system)",
    )
    parser.add_argument(
        "--path",
        metavar="DIR",
        default=None,
        help="Directory to prepend to sys.path before probing, e.g. a source checkout's src/",
    )
    parser.add_argument(
        "--async",
        dest="use_async",
        action="store_true",
        help="Load units through the asyncio runner (each import awaited in turn)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail when authenticate/authorize are exported but not callable",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output structured JSON (shorthand for --format json)",
    )
    parser.add_argument(
        "--format",
        choices=["terminal", "json", "markdown"],
        default=None,
        metavar="FORMAT",
        help="Output format: terminal (default), json, or markdown",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable ANSI color codes in terminal output",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.package and not (is_path_reference(args.package) or DOTTED_NAME_RE.match(args.package)):
        parser.error(f"PACKAGE must be a dotted import name or a path to a .py file, got {args.package!r}")
    settings = get_settings()

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)-5s %(name)s %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    if args.no_color:
        disable_color()

    # --json is a shorthand for --format json
    output_format = args.format or ("json" if args.json else "terminal")
    strict = args.strict or settings.strict_callables

    search_path = args.path or settings.target_path
    if search_path:
        add_search_path(search_path)

    manifest = build_manifest(args.package or settings.target_package)

    # Only the terminal renderer streams; the export formats need the whole report.
    on_result = print_unit_result if output_format == "terminal" else None
    if on_result is not None:
        print_header(manifest.target)

    if args.use_async:
        report = asyncio.run(run_checks_async(manifest, strict=strict, on_result=on_result))
    else:
        report = run_checks(manifest, strict=strict, on_result=on_result)

    if output_format == "json":
        print(to_json(report))
    elif output_format == "markdown":
        print(to_markdown(report), end="")
    else:
        print_footer(report)

    return report.exit_code


if __name__ == "__main__":
    sys.exit(main())
