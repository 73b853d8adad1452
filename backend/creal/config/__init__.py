"""
Application configuration and settings
"""

import os
from pathlib import Path

# Load environment variables from .env file
from dotenv import load_dotenv
load_dotenv()

# Model configuration
from .models import (
    ModelConfig,
    ServiceModels,
    DEFAULT_SERVICE_MODELS,
    get_model_config,
    list_author_lookup_models,
)


def _env_int(name: str, default: int, minimum: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return max(int(raw), minimum)
    except (TypeError, ValueError):
        return default


def _env_float(name: str, default: float, minimum: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return max(float(raw), minimum)
    except (TypeError, ValueError):
        return default


# Base directories
APP_DIR = Path(__file__).parent.parent
BACKEND_DIR = APP_DIR.parent
DATA_DIR = Path(os.getenv("CREAL_DATA_DIR", str(BACKEND_DIR / "data")))
CACHE_FILE = DATA_DIR / "storage.json"

# API settings
API_TITLE = "CReal Core API"
API_DESCRIPTION = "Cached article bias analysis and article video clip generation"
API_VERSION = "1.0.0"

# CORS origins
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173").split(",")
    if origin.strip()
]

# Gemini API
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")

# Cache policy
STORAGE_KEY = "creal_article_history"
STORAGE_SCHEMA_VERSION = 1
CACHE_TTL_SECONDS = _env_float("CACHE_TTL_HOURS", 24.0, 0.0) * 3600.0
CACHE_RETENTION_SECONDS = _env_float("CACHE_RETENTION_DAYS", 30.0, 1.0) * 24 * 3600.0

# Veo video generation
VEO_BASE_URL = os.getenv("VEO_BASE_URL", "https://generativelanguage.googleapis.com/v1beta")
VEO_POLL_INTERVAL_SECONDS = _env_float("VEO_POLL_INTERVAL_SECONDS", 8.0, 0.0)
VEO_MAX_POLL_ATTEMPTS = _env_int("VEO_MAX_POLL_ATTEMPTS", 30, 1)
VEO_DURATION_SECONDS = _env_int("VEO_DURATION_SECONDS", 8, 1)
VEO_ASPECT_RATIO = os.getenv("VEO_ASPECT_RATIO", "16:9")
VEO_RESOLUTION = os.getenv("VEO_RESOLUTION", "720p")
VEO_REQUEST_TIMEOUT_SECONDS = _env_float("VEO_REQUEST_TIMEOUT_SECONDS", 60.0, 1.0)
