"""Canonical error envelope for pre-mortem API responses.

Standardized structure:
{
  "error": {
    "code": "string",
    "message": "string",
    "http_status": 400,
    "gate": "enforcement | generation | billing | null",
    "details": {}
  }
}
"""
from __future__ import annotations

from typing import Any, Dict, Literal, NoReturn, Optional

from fastapi import HTTPException
from pydantic import BaseModel, Field

GateType = Literal["enforcement", "generation", "billing", None]


class ErrorDetail(BaseModel):
    code: str
    message: str
    http_status: int
    gate: Optional[GateType] = None
    details: Dict[str, Any] = Field(default_factory=dict)


class ErrorEnvelope(BaseModel):
    error: ErrorDetail


def build_error_envelope(
    code: str,
    message: str,
    status_code: int = 400,
    gate: Optional[GateType] = None,
    details: Optional[Dict[str, Any]] = None,
) -> ErrorEnvelope:
    """Construct an ErrorEnvelope (without raising)."""
    error_detail = ErrorDetail(
        code=code,
        message=message,
        http_status=status_code,
        gate=gate,
        details=details or {},
    )
    return ErrorEnvelope(error=error_detail)


def error_response(
    code: str,
    message: str,
    status_code: int = 400,
    gate: Optional[GateType] = None,
    details: Optional[Dict[str, Any]] = None,
) -> NoReturn:
    """Raise an HTTPException carrying the canonical error envelope.

    Args:
        code: Machine-readable error code (e.g., "generation.failed")
        message: Human-readable error message
        status_code: HTTP status code (default 400)
        gate: Stage that refused the request
        details: Additional context dict
    """
    envelope = build_error_envelope(
        code=code,
        message=message,
        status_code=status_code,
        gate=gate,
        details=details,
    )
    raise HTTPException(status_code=status_code, detail=envelope.model_dump())
