"""LLM infrastructure - Gemini client."""

from .gemini import GeminiClient, GenerationConfig

__all__ = ["GeminiClient", "GenerationConfig"]
