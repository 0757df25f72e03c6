"""Audit helper recording every enforcement veto."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Optional
from uuid import uuid4

from pydantic import BaseModel, Field

from premortem.config import runtime_config

logger = logging.getLogger(__name__)


class EnforcementAuditEvent(BaseModel):
    event_id: str = Field(default_factory=lambda: uuid4().hex)
    action: str = "enforcement.veto"
    scenario_id: str
    rule: Optional[str] = None
    reason: Optional[str] = None
    lookup_source: Optional[str] = None
    lookup_found: Optional[bool] = None
    env: Optional[str] = Field(default_factory=runtime_config.get_env)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


AuditLogger = Callable[[EnforcementAuditEvent], None]


def default_audit_logger(event: EnforcementAuditEvent) -> None:
    logger.info(
        "enforcement veto scenario=%s rule=%s reason=%s source=%s found=%s",
        event.scenario_id,
        event.rule,
        event.reason,
        event.lookup_source,
        event.lookup_found,
    )


_audit_logger: AuditLogger = default_audit_logger


def set_audit_logger(audit_logger: Optional[AuditLogger]) -> None:
    global _audit_logger
    _audit_logger = audit_logger or default_audit_logger


def emit_audit_event(event: EnforcementAuditEvent) -> None:
    try:
        _audit_logger(event)
    except Exception as exc:
        if runtime_config.audit_strict():
            raise RuntimeError("audit persistence failed") from exc
        logger.warning("audit persistence failed: %s", exc)
