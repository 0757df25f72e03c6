"""Pre-mortem simulation service: generate, parse, then screen through the admission gate."""
from __future__ import annotations

import json
import logging
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ValidationError, field_validator

from premortem.cost.vertex_guard import BillingNotAllowed
from premortem.enforcement.gate import AdmissionGate, get_admission_gate
from premortem.forensic.models import FailureScenario, PreMortemAnalysis
from premortem.generation.errors import GenerationFailure
from premortem.generation.llm_client import ScenarioGenerator, get_scenario_generator
from premortem.generation.prompts import (
    BRIEFING_FALLBACK,
    BRIEFING_INSTRUCTION,
    SIMULATION_INSTRUCTION,
    build_briefing_prompt,
    build_simulation_prompt,
)
from premortem.generation.schema import ANALYSIS_SCHEMA

logger = logging.getLogger(__name__)


class AdversarialModel(str, Enum):
    standard = "Standard"
    adversarial = "Adversarial"
    systemic_collapse = "Systemic-Collapse"


class Tier(str, Enum):
    flash = "FLASH"
    pro = "PRO"


class PreMortemRequest(BaseModel):
    title: str
    description: str = ""
    stack: str
    mission: Optional[str] = None
    mode: AdversarialModel = AdversarialModel.adversarial
    tier: Tier = Tier.pro

    @field_validator("title", "stack")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


class BriefingRequest(BaseModel):
    scenario: FailureScenario
    stack: str = ""


def parse_analysis(raw: str) -> PreMortemAnalysis:
    """Parse and schema-check a generated document; any defect is a GenerationFailure."""
    if not raw or not raw.strip():
        raise GenerationFailure("model returned an empty response")
    try:
        data: Any = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise GenerationFailure("model response is not valid JSON") from exc
    if not isinstance(data, dict):
        raise GenerationFailure("model response is not a JSON object")
    try:
        return PreMortemAnalysis.model_validate(data)
    except ValidationError as exc:
        raise GenerationFailure(f"model response failed schema validation ({exc.error_count()} errors)") from exc


class PreMortemService:
    def __init__(
        self,
        generator: Optional[ScenarioGenerator] = None,
        gate: Optional[AdmissionGate] = None,
    ) -> None:
        self._generator = generator
        self._gate = gate

    @property
    def generator(self) -> ScenarioGenerator:
        return self._generator or get_scenario_generator()

    @property
    def gate(self) -> AdmissionGate:
        return self._gate or get_admission_gate()

    async def run(self, request: PreMortemRequest) -> PreMortemAnalysis:
        prompt = build_simulation_prompt(
            request.title, request.description, request.stack, request.mode.value, request.mission
        )
        raw = await self._generate(prompt, ANALYSIS_SCHEMA, tier=request.tier.value, instruction=SIMULATION_INSTRUCTION)
        try:
            analysis = parse_analysis(raw)
        except GenerationFailure:
            logger.error("pre-mortem document rejected for project %s", request.title, exc_info=True)
            raise
        return await self.gate.admit_analysis(analysis)

    async def explain(self, scenario: FailureScenario, stack: str) -> str:
        prompt = build_briefing_prompt(scenario, stack)
        raw = await self._generate(prompt, None, tier=Tier.flash.value, instruction=BRIEFING_INSTRUCTION)
        return raw.strip() or BRIEFING_FALLBACK

    async def _generate(
        self, prompt: str, schema: Optional[Dict[str, Any]], *, tier: str, instruction: str
    ) -> str:
        try:
            return await self.generator.generate(prompt, schema, tier=tier, system_instruction=instruction)
        except (BillingNotAllowed, GenerationFailure):
            raise
        except Exception as exc:
            logger.error("generation call failed", exc_info=True)
            raise GenerationFailure(str(exc) or type(exc).__name__) from exc


_default_service: Optional[PreMortemService] = None


def get_premortem_service() -> PreMortemService:
    global _default_service
    if _default_service is None:
        _default_service = PreMortemService()
    return _default_service


def set_premortem_service(service: Optional[PreMortemService]) -> None:
    global _default_service
    _default_service = service
