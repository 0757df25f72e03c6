"""Admission gate screening generated scenarios before they are displayed.

Each scenario is looked up, validated and, on failure, vetoed (forced to
Critical with a marked title). Scenarios are independent, so the batch is
processed concurrently; output order always matches input order. Input
records are never mutated: every admitted scenario is a fresh copy.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from premortem.config import runtime_config
from premortem.enforcement.errors import AdmissionError, LookupUnavailable
from premortem.enforcement.lookup import GENERAL_CATALOG, ReferenceLookup, degraded_lookup, lookup_from_env
from premortem.enforcement.models import VETO_MARKER, ScreeningDecision, ScreeningReport, ValidationResult
from premortem.enforcement.validator import PolicyValidator, validator_from_env
from premortem.forensic.models import AuthoritativeLookup, FailureScenario, PreMortemAnalysis, Severity
from premortem.logging.audit import EnforcementAuditEvent, emit_audit_event

logger = logging.getLogger(__name__)


def apply_veto(scenario: FailureScenario) -> FailureScenario:
    """Force Critical severity and mark the title once."""
    title = scenario.title if scenario.title.startswith(VETO_MARKER) else f"{VETO_MARKER}{scenario.title}"
    return scenario.model_copy(update={"severity": Severity.critical, "title": title})


@dataclass
class _Admission:
    scenario: FailureScenario
    decision: ScreeningDecision
    lookup_raised: bool


class AdmissionGate:
    def __init__(
        self,
        lookup: Optional[ReferenceLookup] = None,
        validator: Optional[PolicyValidator] = None,
        max_concurrency: Optional[int] = None,
    ) -> None:
        self._lookup = lookup or lookup_from_env()
        self._validator = validator or validator_from_env()
        self._max_concurrency = max(1, max_concurrency or runtime_config.get_max_concurrency())

    @property
    def lookup(self) -> ReferenceLookup:
        return self._lookup

    async def admit(self, scenarios: Sequence[FailureScenario]) -> List[FailureScenario]:
        report = await self.screen(scenarios)
        return report.scenarios

    async def admit_analysis(self, analysis: PreMortemAnalysis) -> PreMortemAnalysis:
        admitted = await self.admit(analysis.scenarios)
        return analysis.model_copy(update={"scenarios": admitted})

    async def screen(self, scenarios: Sequence[FailureScenario]) -> ScreeningReport:
        semaphore = asyncio.Semaphore(self._max_concurrency)

        async def _bounded(index: int, scenario: FailureScenario) -> _Admission:
            async with semaphore:
                return await self._admit_one(index, scenario)

        results = await asyncio.gather(*(_bounded(i, s) for i, s in enumerate(scenarios)))

        if results and all(r.lookup_raised for r in results):
            raise AdmissionError(len(results))

        decisions = [r.decision for r in results]
        report = ScreeningReport(
            scenarios=[r.scenario for r in results],
            decisions=decisions,
            vetoed=sum(1 for d in decisions if not d.valid),
            degraded_lookups=sum(1 for d in decisions if d.lookup_degraded),
        )
        logger.info(
            "admission gate screened %d scenarios (vetoed=%d degraded_lookups=%d)",
            len(decisions),
            report.vetoed,
            report.degraded_lookups,
        )
        return report

    async def _admit_one(self, index: int, scenario: FailureScenario) -> _Admission:
        lookup, raised = await self._resolve_lookup(scenario)
        annotated = scenario.model_copy(update={"authoritativeLookup": lookup}, deep=True)
        result = self._validator.validate(annotated)
        if not result.valid:
            annotated = apply_veto(annotated)
            self._audit(annotated, result, lookup)
        decision = ScreeningDecision(
            index=index,
            scenario_id=scenario.id,
            valid=result.valid,
            rule=result.rule,
            reason=result.overrideReason,
            lookup_degraded=raised,
        )
        return _Admission(scenario=annotated, decision=decision, lookup_raised=raised)

    async def _resolve_lookup(self, scenario: FailureScenario) -> tuple[AuthoritativeLookup, bool]:
        try:
            return await self._lookup.lookup(scenario.lookup_text()), False
        except LookupUnavailable as exc:
            logger.warning("reference lookup unavailable for scenario %s: %s", scenario.id, exc.reason)
            return degraded_lookup(exc.source), True
        except Exception as exc:
            logger.warning("reference lookup failed for scenario %s: %s", scenario.id, exc)
            return degraded_lookup(getattr(self._lookup, "catalog", GENERAL_CATALOG)), True

    @staticmethod
    def _audit(scenario: FailureScenario, result: ValidationResult, lookup: AuthoritativeLookup) -> None:
        emit_audit_event(
            EnforcementAuditEvent(
                scenario_id=scenario.id,
                rule=result.rule,
                reason=result.overrideReason,
                lookup_source=lookup.source.value,
                lookup_found=lookup.found,
            )
        )


_default_gate: Optional[AdmissionGate] = None


def get_admission_gate() -> AdmissionGate:
    global _default_gate
    if _default_gate is None:
        _default_gate = AdmissionGate()
    return _default_gate


def set_admission_gate(gate: Optional[AdmissionGate]) -> None:
    global _default_gate
    _default_gate = gate
