from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from premortem.enforcement.errors import LookupUnavailable
from premortem.enforcement.gate import AdmissionGate, get_admission_gate
from premortem.enforcement.lookup import StaticReferenceLookup
from premortem.enforcement.models import VETO_MARKER
from premortem.enforcement.routes import router
from premortem.enforcement.validator import PolicyValidator
from premortem.forensic.models import ReferenceSource

app = FastAPI()
app.include_router(router)


class DownLookup:
    catalog = ReferenceSource.nist

    async def lookup(self, query):
        raise LookupUnavailable(self.catalog, "connection refused")


def _client(lookup) -> TestClient:
    gate = AdmissionGate(lookup=lookup, validator=PolicyValidator(), max_concurrency=2)
    app.dependency_overrides[get_admission_gate] = lambda: gate
    return TestClient(app)


@pytest.fixture(autouse=True)
def _clear_overrides():
    yield
    app.dependency_overrides.clear()


def _payload():
    return {
        "scenarios": [
            {
                "id": "s1",
                "title": "Dose calculator rounding",
                "rootCause": "Float truncation in dosage service",
                "impact": "Patient overdose risk",
                "severity": "High",
                "minimalPreventiveChange": {"action": "Decimal math", "likelihood": 0.9},
                "causalChain": [{"step": 1, "description": "Round down", "trigger": "Unit change"}],
            },
            {
                "id": "s2",
                "title": "Token expiry",
                "rootCause": "Clock skew",
                "impact": "Logouts",
                "severity": "Critical",
                "minimalPreventiveChange": {"action": "NTP", "likelihood": 0.2},
            },
        ]
    }


def test_screen_returns_annotated_batch():
    client = _client(StaticReferenceLookup())
    resp = client.post("/enforcement/screen", json=_payload())
    assert resp.status_code == 200
    body = resp.json()
    first, second = body["scenarios"]
    assert first["authoritativeLookup"] == {
        "source": "OpenFDA",
        "found": True,
        "reference": "FDA-CFR-21-PARTS-200-299",
    }
    assert first["title"] == "Dose calculator rounding"
    assert first["causalChain"][0]["trigger"] == "Unit change"
    assert second["severity"] == "Critical"
    assert second["title"] == f"{VETO_MARKER}Token expiry"
    assert body["vetoed"] == 1


def test_screen_all_lookups_down_returns_envelope():
    client = _client(DownLookup())
    resp = client.post("/enforcement/screen", json=_payload())
    assert resp.status_code == 503
    error = resp.json()["detail"]["error"]
    assert error["code"] == "enforcement.lookup_unavailable"
    assert error["gate"] == "enforcement"
    assert error["details"]["failures"] == 2


def test_screen_rejects_unknown_severity():
    client = _client(StaticReferenceLookup())
    payload = _payload()
    payload["scenarios"][0]["severity"] = "Apocalyptic"
    assert client.post("/enforcement/screen", json=payload).status_code == 422


def test_lookup_endpoint():
    client = _client(StaticReferenceLookup())
    resp = client.post("/enforcement/lookup", json={"query": "load balancer misconfiguration"})
    assert resp.status_code == 200
    assert resp.json()["source"] == "NIST"


def test_lookup_endpoint_unavailable():
    client = _client(DownLookup())
    resp = client.post("/enforcement/lookup", json={"query": "insulin"})
    assert resp.status_code == 503
    assert resp.json()["detail"]["error"]["details"]["source"] == "NIST"
