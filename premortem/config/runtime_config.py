"""Runtime configuration helpers for the pre-mortem engines."""
from __future__ import annotations

import os
from typing import List, Optional

DEFAULT_PRO_MODEL = "gemini-1.5-pro-002"
DEFAULT_FLASH_MODEL = "gemini-1.5-flash-002"


def _get_env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(name, default)


def _get_float(name: str, default: float) -> float:
    raw = _get_env(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be a number, got: {raw}") from exc


def _get_list(name: str) -> Optional[List[str]]:
    raw = _get_env(name)
    if raw is None:
        return None
    items = [item.strip().lower() for item in raw.split(",")]
    return [item for item in items if item]


def get_env() -> Optional[str]:
    return _get_env("ENV") or _get_env("APP_ENV")


def get_gcp_project() -> Optional[str]:
    return _get_env("GCP_PROJECT_ID") or _get_env("GCP_PROJECT")


def get_region() -> str:
    return _get_env("GCP_REGION") or _get_env("REGION") or "us-central1"


def get_model_name(tier: str) -> str:
    if tier.upper() == "PRO":
        return _get_env("PREMORTEM_MODEL_PRO") or DEFAULT_PRO_MODEL
    return _get_env("PREMORTEM_MODEL_FLASH") or DEFAULT_FLASH_MODEL


def get_lookup_backend() -> str:
    return (_get_env("ENFORCEMENT_LOOKUP_BACKEND") or "static").lower()


def get_registry_url() -> Optional[str]:
    return _get_env("ENFORCEMENT_REGISTRY_URL")


def get_registry_timeout() -> float:
    return _get_float("ENFORCEMENT_REGISTRY_TIMEOUT", 5.0)


def get_lookup_terms() -> Optional[List[str]]:
    """Terms overriding the lookup's restricted-domain set, or None for defaults."""
    return _get_list("ENFORCEMENT_LOOKUP_TERMS")


def get_restricted_terms() -> Optional[List[str]]:
    """Terms overriding the validator's restricted-topic set, or None for defaults."""
    return _get_list("ENFORCEMENT_RESTRICTED_TERMS")


def get_critical_likelihood() -> float:
    value = _get_float("ENFORCEMENT_CRITICAL_LIKELIHOOD", 0.5)
    if not 0.0 <= value <= 1.0:
        raise RuntimeError("ENFORCEMENT_CRITICAL_LIKELIHOOD must be within [0, 1]")
    return value


def get_max_concurrency() -> int:
    value = int(_get_float("ENFORCEMENT_MAX_CONCURRENCY", 8))
    return max(1, value)


def audit_strict() -> bool:
    return (_get_env("ENFORCEMENT_AUDIT_STRICT") or "").strip().lower() in {"1", "true", "yes", "on"}
