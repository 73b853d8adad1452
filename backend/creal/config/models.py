"""
Model Configuration for Service Operations

Each remote operation (bias analysis, author lookup, video synthesis) has its
own model configuration so models can be tuned independently.

=== PROVIDER CONFIGURATION ===

All operations run against the Gemini API (requires GEMINI_API_KEY).
Individual models can be overridden from the environment:
    - ANALYSIS_MODEL
    - AUTHOR_LOOKUP_MODELS (comma separated, tried in order)
    - VEO_MODEL
"""

import os
from dataclasses import dataclass, field
from typing import List


@dataclass
class ModelConfig:
    """Configuration for a single model"""
    model_name: str
    temperature: float = 0.2
    response_mime_type: str = "application/json"
    description: str = ""


def _env_list(name: str, default: List[str]) -> List[str]:
    raw = os.getenv(name)
    if not raw:
        return list(default)
    items = [item.strip() for item in raw.split(",") if item.strip()]
    return items or list(default)


@dataclass
class ServiceModels:
    """
    Model configuration for each remote operation.

    Operations:
    1. Bias analysis - score an article along the bias axes
    2. Author lookup - fetch a public profile for an author (ordered fallbacks)
    3. Video synthesis - Veo long-running clip generation
    """

    analysis: ModelConfig = field(default_factory=lambda: ModelConfig(
        model_name=os.getenv("ANALYSIS_MODEL", "gemini-2.5-flash"),
        temperature=0.2,
        description="Bias scoring of article text",
    ))

    author_lookup: List[ModelConfig] = field(default_factory=lambda: [
        ModelConfig(model_name=name, temperature=0.4, description="Author profile lookup")
        for name in _env_list("AUTHOR_LOOKUP_MODELS", ["gemini-2.0-flash", "gemini-1.5-flash"])
    ])

    video: str = field(default_factory=lambda: os.getenv("VEO_MODEL", "veo-3.1-generate-preview"))


DEFAULT_SERVICE_MODELS = ServiceModels()


def get_model_config(step: str) -> ModelConfig:
    """Get the model configuration for an operation

    Args:
        step: Operation name ("analysis")

    Returns:
        ModelConfig for the requested operation
    """
    config = getattr(DEFAULT_SERVICE_MODELS, step, None)
    if not isinstance(config, ModelConfig):
        raise ValueError(f"Unknown model step: {step}")
    return config


def list_author_lookup_models() -> List[str]:
    """Model names for author lookup, in the order they are tried"""
    return [config.model_name for config in DEFAULT_SERVICE_MODELS.author_lookup]
