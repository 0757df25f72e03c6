"""Failures raised by the enforcement stage."""
from __future__ import annotations

from premortem.forensic.models import ReferenceSource


class LookupUnavailable(RuntimeError):
    """The reference catalog could not be reached or evaluated for one query."""

    def __init__(self, source: ReferenceSource, reason: str) -> None:
        super().__init__(f"{source.value} lookup unavailable: {reason}")
        self.source = source
        self.reason = reason


class AdmissionError(RuntimeError):
    """Every reference lookup in a non-empty batch failed."""

    def __init__(self, failures: int) -> None:
        super().__init__(f"reference lookup failed for all {failures} scenarios")
        self.failures = failures
