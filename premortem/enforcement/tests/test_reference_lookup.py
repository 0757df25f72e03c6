from __future__ import annotations

import asyncio

import httpx
import pytest

from premortem.enforcement.errors import LookupUnavailable
from premortem.enforcement.lookup import (
    MAX_QUERY_BYTES,
    RegistryReferenceLookup,
    StaticReferenceLookup,
    cap_query,
    lookup_from_env,
)
from premortem.enforcement.matcher import KeywordMatcher
from premortem.forensic.models import ReferenceSource


def test_restricted_query_routes_to_drug_catalog():
    result = asyncio.run(StaticReferenceLookup().lookup("patient insulin dosage"))
    assert result.source == ReferenceSource.openfda
    assert result.found is True
    assert result.reference == "FDA-CFR-21-PARTS-200-299"


def test_general_query_routes_to_standards_catalog():
    result = asyncio.run(StaticReferenceLookup().lookup("load balancer misconfiguration"))
    assert result.source == ReferenceSource.nist
    assert result.found is True
    assert result.reference == "NIST-SP-800-53-R5"


def test_injected_matcher_replaces_defaults():
    lookup = StaticReferenceLookup(KeywordMatcher(["kafka"]))
    assert lookup.resolve("Kafka partition loss").source == ReferenceSource.openfda
    assert lookup.resolve("insulin").source == ReferenceSource.nist


def test_cap_query_bounds_bytes_without_splitting_characters():
    assert cap_query("short") == "short"
    capped = cap_query("é" * MAX_QUERY_BYTES)
    assert len(capped.encode("utf-8")) <= MAX_QUERY_BYTES
    assert set(capped) == {"é"}
    assert cap_query(None) == ""


def test_terms_beyond_cap_are_ignored():
    query = "x" * MAX_QUERY_BYTES + " insulin"
    assert StaticReferenceLookup().resolve(query).source == ReferenceSource.nist


def _registry(handler) -> RegistryReferenceLookup:
    return RegistryReferenceLookup("http://registry.local/", transport=httpx.MockTransport(handler))


def test_registry_returns_record():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["q"] = request.url.params["q"]
        return httpx.Response(200, json={"source": "RxNorm", "found": True, "reference": "RXCUI-5856"})

    result = asyncio.run(_registry(handler).lookup("insulin glargine"))
    assert result.source == ReferenceSource.rxnorm
    assert result.reference == "RXCUI-5856"
    assert seen["url"].startswith("http://registry.local/lookup")
    assert seen["q"] == "insulin glargine"


def test_registry_fills_missing_source_from_routing():
    def handler(request):
        return httpx.Response(200, json={"found": False})

    result = asyncio.run(_registry(handler).lookup("fentanyl patch"))
    assert result.source == ReferenceSource.openfda
    assert result.found is False


def test_registry_server_error_raises_unavailable():
    def handler(request):
        return httpx.Response(503, json={"detail": "down"})

    with pytest.raises(LookupUnavailable) as excinfo:
        asyncio.run(_registry(handler).lookup("epinephrine dosage"))
    assert excinfo.value.source == ReferenceSource.openfda


def test_registry_timeout_raises_unavailable():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(LookupUnavailable) as excinfo:
        asyncio.run(_registry(handler).lookup("dns outage"))
    assert excinfo.value.source == ReferenceSource.nist


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, content=b"not json"),
        httpx.Response(200, json=["list"]),
        httpx.Response(200, json={"source": "Unknown", "found": True}),
    ],
)
def test_registry_malformed_body_raises_unavailable(response):
    with pytest.raises(LookupUnavailable):
        asyncio.run(_registry(lambda request: response).lookup("disk full"))


def test_registry_requires_url():
    with pytest.raises(ValueError):
        RegistryReferenceLookup("")


def test_lookup_from_env_static(monkeypatch):
    monkeypatch.setenv("ENFORCEMENT_LOOKUP_BACKEND", "static")
    monkeypatch.setenv("ENFORCEMENT_LOOKUP_TERMS", "kafka, zookeeper")
    lookup = lookup_from_env()
    assert isinstance(lookup, StaticReferenceLookup)
    assert lookup.resolve("zookeeper quorum").source == ReferenceSource.openfda


def test_lookup_from_env_registry(monkeypatch):
    monkeypatch.setenv("ENFORCEMENT_LOOKUP_BACKEND", "registry")
    monkeypatch.setenv("ENFORCEMENT_REGISTRY_URL", "http://registry.local")
    assert isinstance(lookup_from_env(), RegistryReferenceLookup)


def test_lookup_from_env_registry_requires_url(monkeypatch):
    monkeypatch.setenv("ENFORCEMENT_LOOKUP_BACKEND", "registry")
    monkeypatch.delenv("ENFORCEMENT_REGISTRY_URL", raising=False)
    with pytest.raises(RuntimeError):
        lookup_from_env()


def test_lookup_from_env_rejects_unknown_backend(monkeypatch):
    monkeypatch.setenv("ENFORCEMENT_LOOKUP_BACKEND", "carrier-pigeon")
    with pytest.raises(RuntimeError):
        lookup_from_env()
