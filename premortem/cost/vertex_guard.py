"""Guard to prevent accidental Vertex usage unless explicitly allowed."""

from __future__ import annotations

import os

ALLOW_BILLABLE_VERTEX_ENV = "ALLOW_BILLABLE_VERTEX"


def allow_billable_vertex() -> bool:
    """Return True when Vertex billing is explicitly allowed."""
    value = os.getenv(ALLOW_BILLABLE_VERTEX_ENV, "").strip().lower()
    return value in {"1", "true", "yes", "on"}


class BillingNotAllowed(RuntimeError):
    """Raised when a billable model call is attempted without opt-in."""


def ensure_billable_vertex_allowed(feature: str) -> None:
    if allow_billable_vertex():
        return
    raise BillingNotAllowed(f"{feature} requires {ALLOW_BILLABLE_VERTEX_ENV}=1 to proceed.")
