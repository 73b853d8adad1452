"""Gemini API access."""

from .client import GeminiClient, GenerationConfig

__all__ = ["GeminiClient", "GenerationConfig"]
