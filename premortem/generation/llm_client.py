"""Vertex Gemini client used to generate pre-mortem documents.

Uses google-cloud-aiplatform if available; tests inject a fake generator.
"""
from __future__ import annotations

from typing import Any, Dict, Optional, Protocol

from premortem.config import runtime_config
from premortem.cost.vertex_guard import ensure_billable_vertex_allowed
from premortem.generation.errors import GenerationFailure

try:  # pragma: no cover - import guarded for environments without Vertex libs
    import vertexai  # type: ignore
    from vertexai.generative_models import GenerationConfig, GenerativeModel  # type: ignore
except Exception:  # pragma: no cover
    vertexai = None
    GenerationConfig = None
    GenerativeModel = None


class ScenarioGenerator(Protocol):
    async def generate(
        self,
        prompt: str,
        schema: Optional[Dict[str, Any]] = None,
        *,
        tier: str = "PRO",
        system_instruction: Optional[str] = None,
    ) -> str: ...


def _response_text(response: object) -> str:
    try:
        text = getattr(response, "text", None)
    except ValueError:
        # Raised by the SDK when the response carries no usable candidate.
        text = None
    if text:
        return text
    for cand in getattr(response, "candidates", None) or []:
        content = getattr(cand, "content", None)
        parts = getattr(content, "parts", None) or []
        joined = "".join(getattr(p, "text", "") or "" for p in parts)
        if joined:
            return joined
    return ""


class VertexScenarioGenerator:
    """Calls a Gemini model; with a schema, the model must answer in JSON."""

    def __init__(self, project: Optional[str] = None, location: Optional[str] = None) -> None:
        self._project = project or runtime_config.get_gcp_project()
        self._location = location or runtime_config.get_region()
        self._initialised = False

    def _init_client(self) -> None:
        if vertexai is None or GenerativeModel is None:
            raise RuntimeError("Vertex AI client not available; install google-cloud-aiplatform")
        if not self._initialised:
            vertexai.init(project=self._project, location=self._location)
            self._initialised = True

    async def generate(
        self,
        prompt: str,
        schema: Optional[Dict[str, Any]] = None,
        *,
        tier: str = "PRO",
        system_instruction: Optional[str] = None,
    ) -> str:
        ensure_billable_vertex_allowed("Vertex pre-mortem generation")
        self._init_client()
        model_name = runtime_config.get_model_name(tier)
        model = GenerativeModel(model_name, system_instruction=system_instruction)
        config = None
        if schema is not None:
            config = GenerationConfig(response_mime_type="application/json", response_schema=schema)
        try:
            response = await model.generate_content_async(prompt, generation_config=config)
        except Exception as exc:
            raise GenerationFailure(f"Vertex generation failed for model {model_name}: {exc}") from exc
        return _response_text(response)


_default_generator: Optional[ScenarioGenerator] = None


def get_scenario_generator() -> ScenarioGenerator:
    global _default_generator
    if _default_generator is None:
        _default_generator = VertexScenarioGenerator()
    return _default_generator


def set_scenario_generator(generator: Optional[ScenarioGenerator]) -> None:
    global _default_generator
    _default_generator = generator
