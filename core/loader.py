"""
core/loader.py -- Import a unit and enumerate what it exports.

A unit reference is either a dotted module name ("auth_system.adapters.jwt")
or a path to a .py file ("src/adapters/jwt.py"). Load failures of any kind
are wrapped in UnitLoadError by import_unit(); probe_unit() turns them into
a UnitResult so callers can keep going.
"""

from __future__ import annotations

import asyncio
import importlib
import importlib.util
import logging
import sys
from pathlib import Path
from types import ModuleType

from core.errors import UnitLoadError
from core.models import Unit, UnitResult, is_path_reference

logger = logging.getLogger("authcheck.loader")


def _import_from_path(reference: str) -> ModuleType:
    path = Path(reference).resolve()
    if not path.is_file():
        raise FileNotFoundError(f"No such file: {reference}")
    spec = importlib.util.spec_from_file_location(path.stem, path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot build an import spec for {reference}")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def import_unit(reference: str) -> ModuleType:
    """Import a unit by dotted name or file path.

    Raises UnitLoadError for anything that goes wrong while locating or
    executing the module, chained to the original exception.
    """
    try:
        if is_path_reference(reference):
            return _import_from_path(reference)
        return importlib.import_module(reference)
    except SystemExit as e:
        # sys.exit() at import time is a load failure, not the end of the run.
        reason = "SystemExit" if e.code is None else str(e.code)
        raise UnitLoadError(reference, reason) from e
    except Exception as e:
        raise UnitLoadError(reference, str(e) or type(e).__name__) from e


async def import_unit_async(reference: str) -> ModuleType:
    """Await import_unit() in a worker thread. Settles before returning."""
    return await asyncio.to_thread(import_unit, reference)


def export_names(module: ModuleType) -> list[str]:
    """Return the names a module exports, in definition order.

    __all__ wins when the module defines it. Otherwise every public attribute
    counts, except submodules and imported modules.
    """
    declared = getattr(module, "__all__", None)
    if declared is not None:
        return [str(name) for name in declared]
    return [
        name
        for name, value in vars(module).items()
        if not name.startswith("_") and not isinstance(value, ModuleType)
    ]


def _result_for(unit: Unit, module: ModuleType) -> UnitResult:
    exports = export_names(module)
    logger.debug("%s (%s) loaded with %d export(s)", unit.label, unit.reference, len(exports))
    return UnitResult(unit=unit, loaded=True, exports=exports)


def _failure_for(unit: Unit, error: UnitLoadError) -> UnitResult:
    logger.debug("%s (%s) could not be loaded: %s", unit.label, unit.reference, error.reason)
    return UnitResult(unit=unit, loaded=False, error=error.reason)


def probe_unit(unit: Unit) -> tuple[UnitResult, ModuleType | None]:
    """Load a unit and describe it. Never raises for load failures.

    Returns the result together with the module object (None on failure) so
    the caller can run further checks against the loaded namespace.
    """
    try:
        module = import_unit(unit.reference)
    except UnitLoadError as e:
        return _failure_for(unit, e), None
    return _result_for(unit, module), module


async def probe_unit_async(unit: Unit) -> tuple[UnitResult, ModuleType | None]:
    """Async counterpart of probe_unit()."""
    try:
        module = await import_unit_async(unit.reference)
    except UnitLoadError as e:
        return _failure_for(unit, e), None
    return _result_for(unit, module), module


def add_search_path(path: str) -> None:
    """Prepend a directory to sys.path once, so a checkout can be probed."""
    resolved = str(Path(path).resolve())
    if resolved not in sys.path:
        sys.path.insert(0, resolved)
        importlib.invalidate_caches()
        logger.debug("Added %s to sys.path", resolved)
