"""Reference lookups attaching a knowledge-source citation to scenario text."""
from __future__ import annotations

from typing import Optional, Protocol

import httpx
from pydantic import ValidationError

from premortem.config import runtime_config
from premortem.enforcement.errors import LookupUnavailable
from premortem.enforcement.matcher import TextMatcher, lookup_matcher
from premortem.forensic.models import AuthoritativeLookup, ReferenceSource

MAX_QUERY_BYTES = 2048

RESTRICTED_CATALOG = ReferenceSource.openfda
RESTRICTED_REFERENCE = "FDA-CFR-21-PARTS-200-299"
GENERAL_CATALOG = ReferenceSource.nist
GENERAL_REFERENCE = "NIST-SP-800-53-R5"


class ReferenceLookup(Protocol):
    catalog: ReferenceSource

    async def lookup(self, query: str) -> AuthoritativeLookup: ...


def cap_query(query: str, limit: int = MAX_QUERY_BYTES) -> str:
    """Trim a query to at most ``limit`` UTF-8 bytes without splitting a character."""
    encoded = (query or "").encode("utf-8")
    if len(encoded) <= limit:
        return query or ""
    return encoded[:limit].decode("utf-8", errors="ignore")


def degraded_lookup(source: ReferenceSource) -> AuthoritativeLookup:
    return AuthoritativeLookup(source=source, found=False, reference="")


class StaticReferenceLookup:
    """Table-backed lookup; no I/O and never fails."""

    catalog = GENERAL_CATALOG

    def __init__(self, matcher: Optional[TextMatcher] = None) -> None:
        self._matcher = matcher or lookup_matcher()

    async def lookup(self, query: str) -> AuthoritativeLookup:
        return self.resolve(query)

    def resolve(self, query: str) -> AuthoritativeLookup:
        if self._matcher.matches(cap_query(query)):
            return AuthoritativeLookup(source=RESTRICTED_CATALOG, found=True, reference=RESTRICTED_REFERENCE)
        return AuthoritativeLookup(source=GENERAL_CATALOG, found=True, reference=GENERAL_REFERENCE)


class RegistryReferenceLookup:
    """Lookup against a remote registry exposing ``GET /lookup?q=<text>``.

    The registry answers with ``{"source": ..., "found": ..., "reference": ...}``.
    Any transport error, timeout, non-2xx status or malformed body raises
    LookupUnavailable for the catalog the query would have been routed to.
    """

    catalog = GENERAL_CATALOG

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        matcher: Optional[TextMatcher] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if not base_url:
            raise ValueError("registry base_url is required")
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._matcher = matcher or lookup_matcher()
        self._transport = transport

    def _expected_catalog(self, query: str) -> ReferenceSource:
        return RESTRICTED_CATALOG if self._matcher.matches(query) else GENERAL_CATALOG

    async def lookup(self, query: str) -> AuthoritativeLookup:
        query = cap_query(query)
        source = self._expected_catalog(query)
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                resp = await client.get(f"{self._base_url}/lookup", params={"q": query})
            resp.raise_for_status()
            body = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise LookupUnavailable(source, str(exc) or type(exc).__name__) from exc
        if not isinstance(body, dict):
            raise LookupUnavailable(source, "registry returned a non-object body")
        body.setdefault("source", source.value)
        try:
            return AuthoritativeLookup.model_validate(body)
        except ValidationError as exc:
            raise LookupUnavailable(source, "registry returned a malformed record") from exc


def lookup_from_env() -> ReferenceLookup:
    terms = runtime_config.get_lookup_terms()
    matcher = lookup_matcher(terms)
    backend = runtime_config.get_lookup_backend()
    if backend == "registry":
        url = runtime_config.get_registry_url()
        if not url:
            raise RuntimeError("ENFORCEMENT_REGISTRY_URL is required for the registry lookup backend")
        return RegistryReferenceLookup(url, timeout=runtime_config.get_registry_timeout(), matcher=matcher)
    if backend == "static":
        return StaticReferenceLookup(matcher)
    raise RuntimeError("ENFORCEMENT_LOOKUP_BACKEND must be static or registry")


__all__ = [
    "RegistryReferenceLookup",
    "ReferenceLookup",
    "StaticReferenceLookup",
    "cap_query",
    "degraded_lookup",
    "lookup_from_env",
]
