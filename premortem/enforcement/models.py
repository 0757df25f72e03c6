"""Enforcement verdict schemas."""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from premortem.forensic.models import FailureScenario

VETO_MARKER = "[ENFORCEMENT_VETO] "

RULE_RESTRICTED_CONTEXT = "restricted_context"
RULE_CRITICAL_MITIGATION = "critical_mitigation"

REASON_RESTRICTED_CONTEXT = "restricted context without validated reference"
REASON_CRITICAL_MITIGATION = "critical severity lacks sufficiently likely mitigation"


class ValidationResult(BaseModel):
    valid: bool
    overrideReason: Optional[str] = None
    rule: Optional[str] = None


class ScreeningDecision(BaseModel):
    index: int
    scenario_id: str
    valid: bool
    rule: Optional[str] = None
    reason: Optional[str] = None
    lookup_degraded: bool = False


class ScreeningReport(BaseModel):
    scenarios: List[FailureScenario]
    decisions: List[ScreeningDecision] = Field(default_factory=list)
    vetoed: int = 0
    degraded_lookups: int = 0
