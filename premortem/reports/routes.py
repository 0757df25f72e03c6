from __future__ import annotations

from fastapi import APIRouter
from pydantic import BaseModel

from premortem.forensic.models import PreMortemAnalysis
from premortem.reports.share import dossier_filename, mailto_link, plain_text_summary


class ShareRequest(BaseModel):
    title: str
    analysis: PreMortemAnalysis
    recipient: str = ""


class ShareBundle(BaseModel):
    filename: str
    text: str
    mailto: str


router = APIRouter(prefix="/reports", tags=["reports"])


@router.post("/share", response_model=ShareBundle)
def share_report(payload: ShareRequest) -> ShareBundle:
    return ShareBundle(
        filename=dossier_filename(payload.title),
        text=plain_text_summary(payload.analysis, payload.title),
        mailto=mailto_link(payload.analysis, payload.title, payload.recipient),
    )
