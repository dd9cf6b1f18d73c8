"""
API response models for the authcheck HTTP probe.

These Pydantic v2 models define the HTTP transport contract. They are kept
separate from the dataclasses in core/models.py, which own the internal
representation. Route handlers map between the two.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from core.models import CheckReport, UnitResult

API_VERSION = "0.1.0"


class UnitStatusEnum(str, Enum):
    ok = "ok"
    empty = "empty"
    unavailable = "unavailable"


class OutcomeEnum(str, Enum):
    PASSED = "PASSED"
    FAILED = "FAILED"
    SKIPPED = "SKIPPED"


class HealthResponse(BaseModel):
    """Response for GET /api/v1/health."""

    status: str = "healthy"
    version: str = API_VERSION


class UnitResponse(BaseModel):
    label: str
    reference: str
    mandatory: bool
    status: UnitStatusEnum
    exports: list[str] = Field(default_factory=list)
    error: Optional[str] = None

    @classmethod
    def from_result(cls, result: UnitResult) -> "UnitResponse":
        return cls(
            label=result.unit.label,
            reference=result.unit.reference,
            mandatory=result.unit.mandatory,
            status=UnitStatusEnum(result.status),
            exports=result.exports,
            error=result.error,
        )


class CallableResponse(BaseModel):
    name: str
    outcome: OutcomeEnum
    detail: str = ""


class CheckReportResponse(BaseModel):
    """Response for GET /api/v1/checks."""

    target: str
    passed: bool
    strict: bool
    fatal_reason: Optional[str] = None
    core: UnitResponse
    optional: list[UnitResponse] = Field(default_factory=list)
    callables: list[CallableResponse] = Field(default_factory=list)

    @classmethod
    def from_report(cls, report: CheckReport) -> "CheckReportResponse":
        return cls(
            target=report.target,
            passed=report.passed,
            strict=report.strict,
            fatal_reason=report.fatal_reason,
            core=UnitResponse.from_result(report.core),
            optional=[UnitResponse.from_result(r) for r in report.optional],
            callables=[CallableResponse(name=c.name, outcome=OutcomeEnum(c.outcome), detail=c.detail) for c in report.callables],
        )
