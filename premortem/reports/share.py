"""Share-ready renderings of a screened analysis (dossier name, plain text, mailto)."""
from __future__ import annotations

import re
from typing import List
from urllib.parse import quote

from premortem.forensic.models import PreMortemAnalysis

_WHITESPACE = re.compile(r"\s+")


def dossier_filename(title: str) -> str:
    slug = _WHITESPACE.sub("_", (title or "").strip().upper())
    return f"NEXUS_DOSSIER_{slug or 'UNTITLED'}.pdf"


def plain_text_summary(analysis: PreMortemAnalysis, title: str) -> str:
    decision = analysis.executiveMetrics.decisionStatus if analysis.executiveMetrics else "UNKNOWN"
    lines: List[str] = [
        f"NEXUS FORENSIC PRE-MORTEM :: {title}",
        f"Verdict: {analysis.forensicVerdict}",
        f"Aggregate exposure: {analysis.overallRiskScore:g}%",
        f"Decision status: {decision}",
        "",
        "Scenarios:",
    ]
    for idx, scenario in enumerate(analysis.scenarios, start=1):
        lines.append(f"{idx}. [{scenario.severity.value}] {scenario.title}")
    if not analysis.scenarios:
        lines.append("(none)")
    return "\n".join(lines)


def mailto_link(analysis: PreMortemAnalysis, title: str, recipient: str = "") -> str:
    subject = quote(f"Forensic pre-mortem: {title}", safe="")
    body = quote(plain_text_summary(analysis, title), safe="")
    return f"mailto:{quote(recipient, safe='@')}?subject={subject}&body={body}"
