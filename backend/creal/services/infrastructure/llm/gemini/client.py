"""
Gemini Client - thin async wrapper over google-genai

The google-genai client is synchronous; calls are pushed onto a worker thread
so they never block the event loop.
"""

import asyncio
import os
from dataclasses import dataclass
from typing import Optional

from google import genai
from google.genai import types

from creal.core import ConfigurationError, get_logger

logger = get_logger(__name__, component="gemini_client")


@dataclass
class GenerationConfig:
    """Configuration for content generation"""
    temperature: float = 0.2
    max_output_tokens: int = 4096
    response_mime_type: Optional[str] = "application/json"
    system_instruction: Optional[str] = None


class GeminiClient:
    """
    Gemini API client.

    Environment Variables:
        GEMINI_API_KEY: API key used when none is passed explicitly

    Usage:
        client = GeminiClient()
        text = await client.generate_text("gemini-2.5-flash", "Hello!")
    """

    def __init__(self, api_key: Optional[str] = None, backend=None):
        """
        Initialize the client.

        Args:
            api_key: Optional API key. If not provided, GEMINI_API_KEY is used
            backend: Pre-built genai.Client (tests inject a fake here)
        """
        self.api_key = api_key or os.getenv("GEMINI_API_KEY")
        if backend is not None:
            self.backend = backend
        else:
            if not self.api_key:
                raise ConfigurationError("GEMINI_API_KEY is required for Gemini requests")
            self.backend = genai.Client(api_key=self.api_key)

    def _build_config(self, config: GenerationConfig) -> types.GenerateContentConfig:
        config_kwargs = {
            "temperature": config.temperature,
            "max_output_tokens": config.max_output_tokens,
        }
        if config.response_mime_type:
            config_kwargs["response_mime_type"] = config.response_mime_type
        if config.system_instruction:
            config_kwargs["system_instruction"] = config.system_instruction
        return types.GenerateContentConfig(**config_kwargs)

    async def generate_text(
        self,
        model: str,
        prompt: str,
        config: Optional[GenerationConfig] = None,
    ) -> str:
        """
        Generate text for a prompt.

        Args:
            model: Model name (e.g., "gemini-2.5-flash")
            prompt: Text prompt
            config: Generation configuration

        Returns:
            The response text ("" when the model returned nothing)
        """
        config = config or GenerationConfig()
        response = await asyncio.to_thread(
            self.backend.models.generate_content,
            model=model,
            contents=prompt,
            config=self._build_config(config),
        )
        text = getattr(response, "text", None) or ""
        logger.debug("Gemini response received", extra={"model": model, "chars": len(text)})
        return text
