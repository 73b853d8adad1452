"""
Bias analyzer - Gemini-backed implementation of the analysis function.

The orchestrator only needs an object with `async analyze(text) -> BiasResult`;
this is the production one.
"""

from typing import Any, Dict, Optional

from creal.config import ModelConfig, get_model_config
from creal.core import RemoteAnalysisFailed, get_logger
from creal.models import BIPOLAR_AXES, PERCENT_AXES, BiasResult
from creal.services.infrastructure.llm import GeminiClient, GenerationConfig
from creal.services.infrastructure.parsing import parse_json_object

from .prompts import BIAS_SYSTEM_INSTRUCTION, build_bias_prompt

logger = get_logger(__name__, component="bias_analyzer")

MAX_REASONING_CHARS = 1200


def _clamp(value: Any, low: float, high: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return max(low, min(high, number))


def normalize_bias_payload(payload: Dict[str, Any]) -> BiasResult:
    """Coerce a model's JSON into a valid BiasResult, clamping every axis."""
    values: Dict[str, Any] = {}
    for axis in BIPOLAR_AXES:
        values[axis] = _clamp(payload.get(axis, 0), -100.0, 100.0)
    for axis in PERCENT_AXES:
        values[axis] = _clamp(payload.get(axis, 0), 0.0, 100.0)
    values["reasoning"] = str(payload.get("reasoning") or "").strip()[:MAX_REASONING_CHARS]
    return BiasResult(**values)


class GeminiBiasAnalyzer:
    """Scores article text along the bias axes with a Gemini model."""

    def __init__(self, client: GeminiClient, model_config: Optional[ModelConfig] = None):
        self.client = client
        self.model_config = model_config or get_model_config("analysis")

    async def analyze(self, text: str) -> BiasResult:
        if not text or not text.strip():
            raise RemoteAnalysisFailed("No article text to analyze")

        raw = await self.client.generate_text(
            self.model_config.model_name,
            build_bias_prompt(text),
            GenerationConfig(
                temperature=self.model_config.temperature,
                response_mime_type=self.model_config.response_mime_type,
                system_instruction=BIAS_SYSTEM_INSTRUCTION,
            ),
        )
        payload = parse_json_object(raw)
        if payload is None:
            logger.warning("Bias model returned no JSON object", extra={"chars": len(raw)})
            raise RemoteAnalysisFailed("Analysis model returned an unreadable response")

        return normalize_bias_payload(payload)
