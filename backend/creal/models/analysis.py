"""
Schemas for article analysis and the analysis cache

Records, envelopes and request/response models for ANALYZE_ARTICLE and the
history operations.
"""

from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class BiasResult(BaseModel):
    """Bias scores for one article.

    Bipolar axes run from -100 to 100; the rest are percentages.
    """
    model_config = ConfigDict(frozen=True)

    left_right: float = Field(0, ge=-100, le=100)
    auth_lib: float = Field(0, ge=-100, le=100)
    nat_glob: float = Field(0, ge=-100, le=100)
    tone_calm_urgent: float = Field(0, ge=-100, le=100)
    objectivity: float = Field(0, ge=0, le=100)
    sensationalism: float = Field(0, ge=0, le=100)
    clarity: float = Field(0, ge=0, le=100)
    confidence: float = Field(0, ge=0, le=100)
    reasoning: str = ""


BIPOLAR_AXES = ("left_right", "auth_lib", "nat_glob", "tone_calm_urgent")
PERCENT_AXES = ("objectivity", "sensationalism", "clarity", "confidence")


class AnalysisRecord(BaseModel):
    """A cached analysis, keyed by the article's identity key (its URL)"""
    model_config = ConfigDict(frozen=True)

    key: str
    title: str = "Untitled Article"
    author: Optional[str] = None
    source: Optional[str] = None
    result: BiasResult
    created_at: float  # epoch seconds
    stale: bool = False


class CacheEnvelope(BaseModel):
    """The single persisted document holding every cached record"""
    schema_version: int
    entries: Dict[str, AnalysisRecord] = Field(default_factory=dict)


class StorageStats(BaseModel):
    """Summary of what the cache currently holds"""
    count: int
    oldest_timestamp: Optional[float] = None
    newest_timestamp: Optional[float] = None
    estimated_size_bytes: int = 0


# === Request / Response Models ===

class AnalyzeArticleRequest(BaseModel):
    """Payload of ANALYZE_ARTICLE"""
    text: str
    url: str = "unknown"
    title: Optional[str] = None
    author: Optional[str] = None
    source: Optional[str] = None


class AnalyzeArticleResponse(BaseModel):
    """Result of ANALYZE_ARTICLE"""
    result: BiasResult
    served_from_cache: bool
    computed_at: float
