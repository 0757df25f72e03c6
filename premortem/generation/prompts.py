"""Prompt builders for the pre-mortem simulation and scenario briefings."""
from __future__ import annotations

from premortem.forensic.models import FailureScenario

SIMULATION_INSTRUCTION = """You are a Principal SRE and Actuarial Risk Scientist.
Simulate architecture failure using a Failure DAG (Directed Acyclic Graph).
Stages: 1. Context Normalization 2. Surface Enumeration 3. Cascade Simulation 4. Probabilistic Impact Scoring (Bayesian) 5. Mitigation ROI 6. Residual Risk.

Strategic Heatmap Configuration:
- Populate the 'heatmap' array with at least 6 distinct data points.
- USE INTEGERS 1-5 ONLY for 'probability' and 'impact' fields.
- 'probability': 1=Rare, 5=Highly Likely.
- 'impact': 1=Negligible, 5=Catastrophic.
- Group several similar scenarios into points with 'count' > 1.
- Provide a concise 'label' for each point representing the class of failure (e.g., 'Auth Collapse', 'DB Gridlock').

Metrics Requirements:
- Severity: one of Critical, High, Medium, Low.
- minimalPreventiveChange.likelihood: probability in [0, 1] that the change prevents the failure.
- Blast Radius: User %, Region %, Revenue %
- Error Budget Impact: % consumed
- MTTR: Estimated minutes to recovery
- Detection Gap: Time in minutes before observability fires
- Decision Status: GO, NO-GO or CAUTION recommendation for deployment.

Outputs must be decision-grade for a CTO. Simulate observability signals (Metrics, Logs, Traces)."""

BRIEFING_INSTRUCTION = (
    "You are a Senior Principal SRE providing a forensic deep dive for a CTO. "
    "Use high-impact professional language."
)

BRIEFING_FALLBACK = "Failed to generate forensic briefing."


def build_simulation_prompt(title: str, description: str, stack: str, mode: str, mission: str | None = None) -> str:
    return (
        f"PROJECT_ID: {title} | MISSION: {mission or description} | ARCH_SPEC: {description} "
        f"| TECH_STACK: {stack} | SIM_MODE: {mode}"
    )


def build_briefing_prompt(scenario: FailureScenario, stack: str) -> str:
    return f"""Perform a Deep Forensic Briefing for the following failure scenario:
TITLE: {scenario.title}
ROOT CAUSE: {scenario.rootCause}
SYSTEM STACK: {stack}
IMPACT: {scenario.impact}

Provide a detailed explanation covering:
1. THE ANATOMY: Technical detail about this specific failure.
2. CAUSALITY: Exactly why this occurs in a system like this.
3. TRIGGER VECTORS: In which specific cases/states this is most likely to manifest.
4. ENFORCEMENT: A detailed prevention roadmap including architectural and process changes.

Keep the tone professional, adversarial (as a forensic expert), and highly technical but readable. Use Markdown for structure."""
