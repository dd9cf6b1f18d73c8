"""
core/checker.py -- Export-presence checks over a manifest of units.

No print statements. The CLI and the API add their own output around these
calls; on_result lets a caller stream progress as each unit settles.

Order is strictly sequential in both the sync and async runners: the core
unit first, then each optional unit in manifest order, then the callability
checks on the core namespace.
"""

from __future__ import annotations

import logging
from types import ModuleType
from typing import Callable, Optional

from core.errors import MandatoryUnitEmptyError, UnitLoadError
from core.loader import export_names, probe_unit, probe_unit_async
from core.models import (
    CORE_CALLABLES,
    FAILED,
    PASSED,
    SKIPPED,
    CallableCheck,
    CheckReport,
    Manifest,
    UnitResult,
)

logger = logging.getLogger("authcheck.checker")

ResultCallback = Optional[Callable[[UnitResult], None]]


def check_core(result: UnitResult) -> None:
    """Raise if the mandatory unit is unusable.

    UnitLoadError when it did not load at all, MandatoryUnitEmptyError when
    it loaded with an empty export mapping.
    """
    if not result.loaded:
        raise UnitLoadError(result.unit.reference, result.error or "unknown error")
    if not result.exports:
        raise MandatoryUnitEmptyError(result.unit.reference)


def check_callables(module: ModuleType, names: tuple[str, ...] = CORE_CALLABLES) -> list[CallableCheck]:
    """Check that each named core symbol, when exported, is callable.

    Exported means present in export_names(module), so the checks agree with
    the reported export list. An absent symbol is SKIPPED, never FAILED.
    """
    exported = set(export_names(module))
    checks: list[CallableCheck] = []
    for name in names:
        if name not in exported:
            checks.append(CallableCheck(name=name, outcome=SKIPPED, detail="not exported"))
            continue
        if not hasattr(module, name):
            checks.append(CallableCheck(name=name, outcome=FAILED, detail="listed in __all__ but not defined"))
            continue
        value = getattr(module, name)
        if callable(value):
            checks.append(CallableCheck(name=name, outcome=PASSED))
        else:
            checks.append(CallableCheck(name=name, outcome=FAILED, detail=f"is {type(value).__name__}, not callable"))
    return checks


def _start(manifest: Manifest, strict: bool, core: UnitResult) -> CheckReport:
    report = CheckReport(target=manifest.target, core=core, strict=strict)
    try:
        check_core(core)
    except (UnitLoadError, MandatoryUnitEmptyError) as e:
        report.fatal_reason = e.message
        logger.error("Mandatory unit %s failed: %s", manifest.core.reference, e.message)
    return report


def _record_optional(report: CheckReport, result: UnitResult, on_result: ResultCallback) -> None:
    report.optional.append(result)
    if on_result is not None:
        on_result(result)


def _finish(report: CheckReport, module: ModuleType) -> CheckReport:
    report.callables = check_callables(module)
    failed = [c.name for c in report.callables if c.outcome == FAILED]
    if failed and report.strict:
        report.fatal_reason = f"Not callable: {', '.join(failed)}"
        logger.error("Strict mode: %s", report.fatal_reason)
    elif failed:
        logger.warning("Exported but not callable: %s", ", ".join(failed))
    logger.info(
        "Checked %s: %d/%d optional unit(s) available",
        report.target,
        sum(1 for r in report.optional if r.loaded),
        len(report.optional),
    )
    return report


def run_checks(manifest: Manifest, strict: bool = False, on_result: ResultCallback = None) -> CheckReport:
    """Run every check synchronously and return the report.

    A fatal core result stops the run before any optional unit is probed.
    """
    core, module = probe_unit(manifest.core)
    if on_result is not None:
        on_result(core)
    report = _start(manifest, strict, core)
    if module is None or not report.passed:
        return report

    for unit in manifest.optional:
        result, _ = probe_unit(unit)
        _record_optional(report, result, on_result)

    return _finish(report, module)


async def run_checks_async(manifest: Manifest, strict: bool = False, on_result: ResultCallback = None) -> CheckReport:
    """Async counterpart of run_checks(). Each load is awaited in turn."""
    core, module = await probe_unit_async(manifest.core)
    if on_result is not None:
        on_result(core)
    report = _start(manifest, strict, core)
    if module is None or not report.passed:
        return report

    for unit in manifest.optional:
        result, _ = await probe_unit_async(unit)
        _record_optional(report, result, on_result)

    return _finish(report, module)
