from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from premortem.common.error_envelope import error_response
from premortem.enforcement.errors import AdmissionError, LookupUnavailable
from premortem.enforcement.gate import AdmissionGate, get_admission_gate
from premortem.enforcement.lookup import MAX_QUERY_BYTES
from premortem.enforcement.models import ScreeningReport
from premortem.forensic.models import AuthoritativeLookup, FailureScenario


class ScreenRequest(BaseModel):
    scenarios: List[FailureScenario]


class LookupRequest(BaseModel):
    query: str = Field(..., max_length=MAX_QUERY_BYTES * 4)


router = APIRouter(prefix="/enforcement", tags=["enforcement"])


@router.post("/screen", response_model=ScreeningReport)
async def screen_scenarios(
    payload: ScreenRequest,
    gate: AdmissionGate = Depends(get_admission_gate),
):
    """Screen a batch of scenarios and report each decision."""
    try:
        return await gate.screen(payload.scenarios)
    except AdmissionError as exc:
        error_response(
            code="enforcement.lookup_unavailable",
            message=str(exc),
            status_code=503,
            gate="enforcement",
            details={"failures": exc.failures},
        )


@router.post("/lookup", response_model=AuthoritativeLookup)
async def lookup_reference(
    payload: LookupRequest,
    gate: AdmissionGate = Depends(get_admission_gate),
):
    try:
        return await gate.lookup.lookup(payload.query)
    except LookupUnavailable as exc:
        error_response(
            code="enforcement.lookup_unavailable",
            message=str(exc),
            status_code=503,
            gate="enforcement",
            details={"source": exc.source.value},
        )
