"""Wire models for the pre-mortem analysis document.

Field names mirror the JSON keys produced by the generator so a screened
document can be handed back to consumers unchanged in shape. Unknown keys are
kept (``extra="allow"``).
"""
from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Severity(str, Enum):
    critical = "Critical"
    high = "High"
    medium = "Medium"
    low = "Low"


class ReferenceSource(str, Enum):
    rxnorm = "RxNorm"
    openfda = "OpenFDA"
    nist = "NIST"


class WireModel(BaseModel):
    model_config = ConfigDict(extra="allow")


class AuthoritativeLookup(WireModel):
    source: ReferenceSource
    found: bool
    reference: str = ""


class MinimalPreventiveChange(WireModel):
    action: str = ""
    likelihood: Optional[float] = Field(None, ge=0.0, le=1.0)
    effort: Optional[str] = None
    cost: Optional[str] = None


class FailureStep(WireModel):
    step: int
    description: str
    trigger: str = ""


class ObservabilitySignal(WireModel):
    type: str
    signalName: str
    detectionGapMinutes: float = 0
    isCoveredBySLO: bool = False


class ComplianceMapping(WireModel):
    framework: str
    status: str
    requirement: str = ""
    actionRequired: str = ""


class PlainEnglishExplanation(WireModel):
    where: str = ""
    why: str = ""
    howToFix: str = ""


class Explainability(WireModel):
    reasoningPath: str = ""
    sourceAttribution: str = ""
    confidenceInterval: str = ""
    counterfactual: str = ""


class FailureScenario(WireModel):
    id: str
    title: str = ""
    rootCause: str = ""
    impact: str = ""
    severity: Severity
    minimalPreventiveChange: Optional[MinimalPreventiveChange] = None
    authoritativeLookup: Optional[AuthoritativeLookup] = None

    probability: Optional[float] = None
    expectedDowntimeHours: Optional[float] = None
    revenueImpactRange: Optional[str] = None
    errorBudgetImpactPercent: Optional[float] = None
    mttrMinutes: Optional[float] = None
    detectability: Optional[str] = None
    timeToImpact: Optional[str] = None
    blastRadius: Optional[str] = None
    failureType: Optional[str] = None
    causalChain: List[FailureStep] = Field(default_factory=list)
    observabilitySignals: List[ObservabilitySignal] = Field(default_factory=list)
    plainEnglishExplanation: Optional[PlainEnglishExplanation] = None
    prevention: List[str] = Field(default_factory=list)
    complianceImpact: List[ComplianceMapping] = Field(default_factory=list)
    explainability: Optional[Explainability] = None

    def lookup_text(self) -> str:
        """Text sent to the reference lookup."""
        return f"{self.title} {self.rootCause}"

    def content_text(self) -> str:
        """Text the policy rules are evaluated against."""
        return f"{self.title}{self.rootCause}{self.impact}"


class CalibrationMetrics(WireModel):
    prior: str = ""
    evidenceRank: str = ""
    uncertaintyBuffer: float = 0
    decayWindow: str = ""


class RiskTrendPoint(WireModel):
    month: str
    score: float
    baseline: float


class HeatmapPoint(WireModel):
    probability: float
    impact: float
    count: int = 1
    label: str = ""


class RiskVsCost(WireModel):
    name: str
    cost: float
    riskReduction: float
    size: float = 0


class ExecutiveMetrics(WireModel):
    riskTrend: List[RiskTrendPoint] = Field(default_factory=list)
    slaImpact: float = 0
    costToHarden: float = 0
    costOfInaction: str = ""
    riskTolerance: float = 0
    topSystemicRisks: List[str] = Field(default_factory=list)
    riskVsCost: List[RiskVsCost] = Field(default_factory=list)
    decisionStatus: str = "CAUTION"
    readinessScore: float = 0
    heatmap: List[HeatmapPoint] = Field(default_factory=list)


class RiskDistribution(WireModel):
    logic: float = 0
    infrastructure: float = 0
    process: float = 0


class ModelCard(WireModel):
    version: str = ""
    datasetLineage: str = ""
    privacyBudget: str = ""


class PreMortemAnalysis(WireModel):
    forensicVerdict: str
    overallRiskScore: float
    simulationConfidence: float = 0
    calibration: Optional[CalibrationMetrics] = None
    executiveMetrics: Optional[ExecutiveMetrics] = None
    scenarios: List[FailureScenario]
    modelCard: Optional[ModelCard] = None
    riskDistribution: Optional[RiskDistribution] = None
    failureTimeline: str = ""
    stackVulnerabilities: List[str] = Field(default_factory=list)
