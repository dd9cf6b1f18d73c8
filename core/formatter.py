"""
formatter.py -- Renders check results to terminal output, JSON, or Markdown.

Terminal lines are printed as each unit settles (see print_unit_result), so
a slow import shows up where it happens rather than at the end of the run.
"""

import json
import os
import re
import sys
from dataclasses import asdict
from typing import Optional

from .models import FAILED, PASSED, CheckReport, UnitResult

# ---------------------------------------------------------------------------
# ANSI color control
# ---------------------------------------------------------------------------

_ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences from a string."""
    return _ANSI_RE.sub("", text)


def _use_color() -> bool:
    """Return True if stdout is a TTY and color has not been disabled.

    Respects NO_COLOR env var (https://no-color.org) and checks sys.stdout.isatty().
    Can be overridden by calling disable_color() / enable_color().
    """
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("FORCE_COLOR"):
        return True
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


_color_enabled: Optional[bool] = None  # None = auto-detect


def disable_color() -> None:
    """Force-disable color output (called when --no-color flag is set)."""
    global _color_enabled
    _color_enabled = False


def enable_color() -> None:
    """Force-enable color output."""
    global _color_enabled
    _color_enabled = True


def reset_color() -> None:
    """Return to auto-detection."""
    global _color_enabled
    _color_enabled = None


def _color_active() -> bool:
    if _color_enabled is not None:
        return _color_enabled
    return _use_color()


# ---------------------------------------------------------------------------
# ANSI code helpers — return empty string when color is off
# ---------------------------------------------------------------------------


def _reset() -> str:
    return "\033[0m" if _color_active() else ""


def _bold() -> str:
    return "\033[1m" if _color_active() else ""


def _dim() -> str:
    return "\033[2m" if _color_active() else ""


def _red() -> str:
    return "\033[91m" if _color_active() else ""


def _green() -> str:
    return "\033[92m" if _color_active() else ""


def _names(exports: list[str]) -> str:
    return "[" + ", ".join(exports) + "]"


# ---------------------------------------------------------------------------
# Terminal renderer
# ---------------------------------------------------------------------------


def print_header(target: str) -> None:
    bold = _bold()
    reset = _reset()
    print(f"{bold}Testing {target}...{reset}")


def print_unit_result(result: UnitResult) -> None:
    """Print the line(s) for one probed unit. Exactly one line per failure."""
    red = _red()
    dim = _dim()
    reset = _reset()
    unit = result.unit

    if unit.mandatory:
        if not result.loaded:
            print(f"{red}ERROR: Module could not be loaded: {result.error}{reset}")
            return
        print(f"Module exports: {_names(result.exports)}")
        if not result.exports:
            print(f"{red}ERROR: Module does not export anything!{reset}")
        return

    if not result.loaded:
        print(f"{dim}{unit.label} not found or could not be loaded: {result.error}{reset}")
        return
    print(f"Testing {unit.label}...")
    print(f"{unit.label} exports: {_names(result.exports)}")


def print_footer(report: CheckReport) -> None:
    bold = _bold()
    red = _red()
    green = _green()
    reset = _reset()

    for check in report.callables:
        if check.outcome == PASSED:
            print(f"Testing {check.name} function exists: {green}SUCCESS{reset}")
        elif check.outcome == FAILED:
            print(f"Testing {check.name} function exists: {red}FAILED{reset} ({check.detail})")

    if report.passed:
        print(f"{bold}{green}Basic test passed!{reset}")
    elif report.core.status == "ok":
        # Core was fine, so the fatal reason has not been printed yet.
        print(f"{red}ERROR: {report.fatal_reason}{reset}")


def print_terminal(report: CheckReport) -> None:
    """Print a complete report that was produced without streaming."""
    print_header(report.target)
    print_unit_result(report.core)
    for result in report.optional:
        print_unit_result(result)
    print_footer(report)


# ---------------------------------------------------------------------------
# JSON export
# ---------------------------------------------------------------------------


def to_dict(report: CheckReport) -> dict:
    d = asdict(report)
    d["passed"] = report.passed
    d["exit_code"] = report.exit_code
    d["core"]["status"] = report.core.status
    for entry, result in zip(d["optional"], report.optional):
        entry["status"] = result.status
    return d


def to_json(report: CheckReport) -> str:
    return json.dumps(to_dict(report), indent=2)


# ---------------------------------------------------------------------------
# Markdown export
# ---------------------------------------------------------------------------


def _md_cell(text: str) -> str:
    # Escape pipe characters so free text cannot break the table layout.
    return text.replace("|", "\\|").replace("\n", " ")


def to_markdown(report: CheckReport) -> str:
    """Render a report as a Markdown table, suitable for CI summaries."""
    verdict = "passed" if report.passed else f"FAILED ({_md_cell(report.fatal_reason or '')})"
    lines = [
        f"### Export check: `{report.target}` {verdict}",
        "",
        "| Unit | Reference | Status | Exports |",
        "|------|-----------|--------|---------|",
    ]
    for result in [report.core, *report.optional]:
        detail = ", ".join(result.exports) if result.loaded else (result.error or "")
        lines.append(
            f"| {_md_cell(result.unit.label)} | `{result.unit.reference}` | {result.status} | {_md_cell(detail)} |"
        )
    if report.callables:
        lines.append("")
        for check in report.callables:
            suffix = f" ({_md_cell(check.detail)})" if check.detail else ""
            lines.append(f"- `{check.name}`: {check.outcome}{suffix}")
    return "\n".join(lines) + "\n"
