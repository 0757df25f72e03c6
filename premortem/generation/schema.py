"""Structured-output schema handed to the model (OpenAPI subset accepted by Vertex)."""
from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

STRING: Dict[str, Any] = {"type": "string"}
NUMBER: Dict[str, Any] = {"type": "number"}
BOOLEAN: Dict[str, Any] = {"type": "boolean"}
SEVERITY: Dict[str, Any] = {"type": "string", "enum": ["Critical", "High", "Medium", "Low"]}


def _obj(properties: Dict[str, Any], required: Optional[Iterable[str]] = None) -> Dict[str, Any]:
    return {
        "type": "object",
        "properties": properties,
        "required": list(properties) if required is None else list(required),
    }


def _arr(items: Dict[str, Any]) -> Dict[str, Any]:
    return {"type": "array", "items": items}


def _fields(names: str, kind: Dict[str, Any]) -> Dict[str, Any]:
    return {name: kind for name in names.split()}


SCENARIO_SCHEMA = _obj(
    {
        **_fields("id title detectability timeToImpact blastRadius failureType rootCause impact", STRING),
        "severity": SEVERITY,
        **_fields("probability expectedDowntimeHours errorBudgetImpactPercent mttrMinutes", NUMBER),
        "revenueImpactRange": STRING,
        "observabilitySignals": _arr(
            _obj({"type": STRING, "signalName": STRING, "detectionGapMinutes": NUMBER, "isCoveredBySLO": BOOLEAN})
        ),
        "plainEnglishExplanation": _obj(_fields("where why howToFix", STRING)),
        "causalChain": _arr(_obj({"step": NUMBER, "description": STRING, "trigger": STRING})),
        "minimalPreventiveChange": _obj({"action": STRING, "likelihood": NUMBER, "effort": STRING, "cost": STRING}),
        "prevention": _arr(STRING),
        "complianceImpact": _arr(_obj(_fields("framework status requirement actionRequired", STRING))),
        "explainability": _obj(_fields("reasoningPath sourceAttribution confidenceInterval counterfactual", STRING)),
    }
)

EXECUTIVE_METRICS_SCHEMA = _obj(
    {
        "riskTrend": _arr(_obj({"month": STRING, "score": NUMBER, "baseline": NUMBER})),
        **_fields("slaImpact costToHarden riskTolerance readinessScore", NUMBER),
        "costOfInaction": STRING,
        "decisionStatus": STRING,
        "heatmap": _arr(_obj({"probability": NUMBER, "impact": NUMBER, "count": NUMBER, "label": STRING})),
        "topSystemicRisks": _arr(STRING),
        "riskVsCost": _arr(_obj({"name": STRING, "cost": NUMBER, "riskReduction": NUMBER, "size": NUMBER})),
    }
)

ANALYSIS_SCHEMA = _obj(
    {
        "forensicVerdict": STRING,
        "overallRiskScore": NUMBER,
        "simulationConfidence": NUMBER,
        "calibration": _obj(
            {"prior": STRING, "evidenceRank": STRING, "uncertaintyBuffer": NUMBER, "decayWindow": STRING}
        ),
        "executiveMetrics": EXECUTIVE_METRICS_SCHEMA,
        "scenarios": _arr(SCENARIO_SCHEMA),
        "modelCard": _obj(_fields("version datasetLineage privacyBudget", STRING)),
        "riskDistribution": _obj(_fields("logic infrastructure process", NUMBER)),
        "failureTimeline": STRING,
        "stackVulnerabilities": _arr(STRING),
    }
)
