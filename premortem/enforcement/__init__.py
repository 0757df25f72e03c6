"""Admission gate, reference lookups and policy checks."""

from __future__ import annotations

from premortem.enforcement.errors import AdmissionError, LookupUnavailable
from premortem.enforcement.gate import AdmissionGate, apply_veto, get_admission_gate, set_admission_gate
from premortem.enforcement.lookup import RegistryReferenceLookup, StaticReferenceLookup
from premortem.enforcement.matcher import KeywordMatcher
from premortem.enforcement.models import VETO_MARKER, ValidationResult
from premortem.enforcement.validator import PolicyValidator

__all__ = [
    "AdmissionError",
    "AdmissionGate",
    "KeywordMatcher",
    "LookupUnavailable",
    "PolicyValidator",
    "RegistryReferenceLookup",
    "StaticReferenceLookup",
    "VETO_MARKER",
    "ValidationResult",
    "apply_veto",
    "get_admission_gate",
    "set_admission_gate",
]
