import pytest
from pydantic import ValidationError

from creal.models import AnalysisRecord, AnalyzeArticleRequest, BiasResult, CacheEnvelope

from conftest import make_record


def test_bias_result_rejects_out_of_range_axes():
    with pytest.raises(ValidationError):
        BiasResult(left_right=101)
    with pytest.raises(ValidationError):
        BiasResult(objectivity=-1)


def test_bias_result_is_immutable():
    result = BiasResult(clarity=50)
    with pytest.raises(ValidationError):
        result.clarity = 60


def test_record_defaults():
    record = AnalysisRecord(key="k", result=BiasResult(), created_at=1.0)

    assert record.title == "Untitled Article"
    assert record.author is None
    assert record.stale is False


def test_envelope_round_trips_through_json():
    envelope = CacheEnvelope(schema_version=1, entries={"k": make_record("k", 10.0)})

    restored = CacheEnvelope.model_validate(envelope.model_dump(mode="json"))

    assert restored == envelope


def test_analyze_request_defaults_url():
    request = AnalyzeArticleRequest(text="body")

    assert request.url == "unknown"
    assert request.title is None


def test_analyze_request_requires_text():
    with pytest.raises(ValidationError):
        AnalyzeArticleRequest(url="https://x")
