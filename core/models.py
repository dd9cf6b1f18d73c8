from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

# ---------------------------------------------------------------------------
# Domain constants
# ---------------------------------------------------------------------------

DEFAULT_TARGET = "auth_system"

# Core symbols whose callability is checked when they are exported.
CORE_CALLABLES = ("authenticate", "authorize")

# (label, module path relative to the target package), in probe order.
OPTIONAL_UNITS = (
    ("JWT adapter", "adapters.jwt"),
    ("Memory adapter", "adapters.memory"),
    ("Password utils", "utils.password"),
    ("Token utils", "utils.token"),
    ("Validation utils", "utils.validation"),
)

PASSED = "PASSED"
FAILED = "FAILED"
SKIPPED = "SKIPPED"


@dataclass(frozen=True)
class Unit:
    label: str
    reference: str  # dotted module name or path to a .py file
    mandatory: bool = False


@dataclass
class UnitResult:
    unit: Unit
    loaded: bool
    exports: list[str] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def status(self) -> str:
        if not self.loaded:
            return "unavailable"
        return "ok" if self.exports else "empty"


@dataclass
class CallableCheck:
    name: str
    outcome: str  # PASSED | FAILED | SKIPPED
    detail: str = ""


@dataclass
class Manifest:
    target: str
    core: Unit
    optional: list[Unit] = field(default_factory=list)


@dataclass
class CheckReport:
    target: str
    core: UnitResult
    optional: list[UnitResult] = field(default_factory=list)
    callables: list[CallableCheck] = field(default_factory=list)
    strict: bool = False
    fatal_reason: Optional[str] = None

    @property
    def passed(self) -> bool:
        return self.fatal_reason is None

    @property
    def exit_code(self) -> int:
        return 0 if self.passed else 1


def is_path_reference(reference: str) -> bool:
    """True when a reference names a .py file rather than a dotted module."""
    return reference.endswith(".py") or "/" in reference or "\\" in reference


def build_manifest(package: str = DEFAULT_TARGET) -> Manifest:
    """Return the standard manifest for an auth package.

    package is an import name ("auth_system") or the path of the core file
    ("src/index.py", "auth_system/__init__.py"). For a path, the optional
    units are the sibling files adapters/jwt.py, utils/token.py and so on.
    """
    core = Unit(label="core", reference=package, mandatory=True)
    if is_path_reference(package):
        base = Path(package).parent
        optional = [
            Unit(label=label, reference=str(base.joinpath(*suffix.split(".")).with_suffix(".py")))
            for label, suffix in OPTIONAL_UNITS
        ]
    else:
        optional = [Unit(label=label, reference=f"{package}.{suffix}") for label, suffix in OPTIONAL_UNITS]
    return Manifest(target=package, core=core, optional=optional)
