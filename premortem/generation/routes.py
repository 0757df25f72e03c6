from __future__ import annotations

from fastapi import APIRouter, Depends

from premortem.common.error_envelope import error_response
from premortem.cost.vertex_guard import BillingNotAllowed
from premortem.enforcement.errors import AdmissionError
from premortem.forensic.models import PreMortemAnalysis
from premortem.generation.errors import GenerationFailure
from premortem.generation.service import BriefingRequest, PreMortemRequest, PreMortemService, get_premortem_service

router = APIRouter(prefix="/premortem", tags=["premortem"])


def _billing_refused(exc: BillingNotAllowed) -> None:
    error_response(code="generation.billing_disabled", message=str(exc), status_code=403, gate="billing")


def _generation_failed(exc: GenerationFailure) -> None:
    error_response(code="generation.failed", message=str(exc), status_code=502, gate="generation")


@router.post("/analyses", response_model=PreMortemAnalysis)
async def run_analysis(
    payload: PreMortemRequest,
    service: PreMortemService = Depends(get_premortem_service),
):
    """Run a simulation and return the screened document."""
    try:
        return await service.run(payload)
    except BillingNotAllowed as exc:
        _billing_refused(exc)
    except GenerationFailure as exc:
        _generation_failed(exc)
    except AdmissionError as exc:
        error_response(
            code="enforcement.lookup_unavailable",
            message=str(exc),
            status_code=503,
            gate="enforcement",
            details={"failures": exc.failures},
        )


@router.post("/briefings")
async def explain_scenario(
    payload: BriefingRequest,
    service: PreMortemService = Depends(get_premortem_service),
) -> dict[str, str]:
    try:
        briefing = await service.explain(payload.scenario, payload.stack)
    except BillingNotAllowed as exc:
        _billing_refused(exc)
    except GenerationFailure as exc:
        _generation_failed(exc)
    return {"briefing": briefing}
