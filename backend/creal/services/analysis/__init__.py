"""Article analysis adapters - bias scoring, author lookup and prompt templates."""

from .bias_analyzer import GeminiBiasAnalyzer, normalize_bias_payload
from .author_lookup import AuthorLookup
from .prompts import build_bias_prompt, build_author_prompt, build_video_prompt

__all__ = [
    "GeminiBiasAnalyzer",
    "normalize_bias_payload",
    "AuthorLookup",
    "build_bias_prompt",
    "build_author_prompt",
    "build_video_prompt",
]
