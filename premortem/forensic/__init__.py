"""Pre-mortem analysis document models."""

from __future__ import annotations

from premortem.forensic.models import (
    AuthoritativeLookup,
    FailureScenario,
    MinimalPreventiveChange,
    PreMortemAnalysis,
    ReferenceSource,
    Severity,
)

__all__ = [
    "AuthoritativeLookup",
    "FailureScenario",
    "MinimalPreventiveChange",
    "PreMortemAnalysis",
    "ReferenceSource",
    "Severity",
]
