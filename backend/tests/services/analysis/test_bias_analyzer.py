"""
Tests for the Gemini bias analyzer and payload normalization
"""

from types import SimpleNamespace

import pytest

from creal.config import ModelConfig
from creal.core import RemoteAnalysisFailed
from creal.services.analysis import GeminiBiasAnalyzer, normalize_bias_payload
from creal.services.infrastructure.llm import GeminiClient


class FakeModels:
    def __init__(self, text):
        self.text = text
        self.calls = []

    def generate_content(self, model, contents, config):
        self.calls.append({"model": model, "contents": contents, "config": config})
        return SimpleNamespace(text=self.text)


def make_analyzer(text):
    models = FakeModels(text)
    client = GeminiClient(backend=SimpleNamespace(models=models))
    analyzer = GeminiBiasAnalyzer(client, ModelConfig(model_name="gemini-test"))
    return analyzer, models


class TestNormalizeBiasPayload:
    def test_clamps_axes_into_range(self):
        result = normalize_bias_payload({
            "left_right": -250,
            "auth_lib": 140,
            "objectivity": 120,
            "sensationalism": -5,
        })
        assert result.left_right == -100
        assert result.auth_lib == 100
        assert result.objectivity == 100
        assert result.sensationalism == 0

    def test_missing_and_garbage_values_default_to_zero(self):
        result = normalize_bias_payload({"clarity": "very clear", "confidence": None})
        assert result.clarity == 0
        assert result.confidence == 0
        assert result.nat_glob == 0
        assert result.reasoning == ""

    def test_numeric_strings_are_accepted(self):
        assert normalize_bias_payload({"tone_calm_urgent": "35"}).tone_calm_urgent == 35

    def test_reasoning_is_truncated(self):
        result = normalize_bias_payload({"reasoning": "x" * 5000})
        assert len(result.reasoning) == 1200


@pytest.mark.asyncio
async def test_analyze_parses_fenced_json():
    analyzer, models = make_analyzer(
        '```json\n{"left_right": 30, "objectivity": 55, "reasoning": "Loaded verbs."}\n```'
    )

    result = await analyzer.analyze("Some article text")

    assert result.left_right == 30
    assert result.objectivity == 55
    assert result.reasoning == "Loaded verbs."
    assert models.calls[0]["model"] == "gemini-test"
    assert "Some article text" in models.calls[0]["contents"]


@pytest.mark.asyncio
async def test_analyze_recovers_json_inside_prose():
    analyzer, _ = make_analyzer('Here you go: {"clarity": 90} Hope this helps!')

    result = await analyzer.analyze("text")

    assert result.clarity == 90


@pytest.mark.asyncio
async def test_analyze_unreadable_response():
    analyzer, _ = make_analyzer("I cannot help with that.")

    with pytest.raises(RemoteAnalysisFailed):
        await analyzer.analyze("text")


@pytest.mark.asyncio
async def test_analyze_empty_text_never_calls_model():
    analyzer, models = make_analyzer("{}")

    with pytest.raises(RemoteAnalysisFailed):
        await analyzer.analyze("   ")

    assert models.calls == []
