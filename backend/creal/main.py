"""
CReal Core API
FastAPI application exposing the analysis cache and video clip pipeline

This is the main entry point that wires together all routes and services.
"""

import os
import uuid
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from .config import (
    API_TITLE,
    API_DESCRIPTION,
    API_VERSION,
    CACHE_FILE,
    CORS_ORIGINS,
    GEMINI_API_KEY,
    DEFAULT_SERVICE_MODELS,
    get_model_config,
    list_author_lookup_models,
)
from .core import setup_logging, get_logger, set_request_id, clear_context
from .routes import messages_router, health_router
from .services.analysis import AuthorLookup, GeminiBiasAnalyzer
from .services.infrastructure.llm import GeminiClient
from .services.infrastructure.storage import CacheStore, JsonFileKeyValueStore, KeyValueStore
from .services.orchestration import AnalysisOrchestrator, MessageRouter
from .services.video import LongRunningOperationClient

# Initialize logging
log_level = os.getenv("LOG_LEVEL", "INFO")
log_file = os.getenv("LOG_FILE")
use_json_logs = os.getenv("JSON_LOGS", "false").lower() == "true"

setup_logging(
    level=log_level,
    log_file=Path(log_file) if log_file else None,
    use_json=use_json_logs,
)

logger = get_logger(__name__, service="api")


@dataclass
class ServiceContainer:
    cache: CacheStore
    orchestrator: AnalysisOrchestrator
    router: MessageRouter


def build_container(
    api_key: Optional[str] = GEMINI_API_KEY,
    substrate: Optional[KeyValueStore] = None,
) -> ServiceContainer:
    """
    Composition root. Remote adapters are only constructed when an API key is
    present; without one, remote operations fail with ConfigurationError while
    cached reads keep working.
    """
    cache = CacheStore(substrate or JsonFileKeyValueStore(CACHE_FILE))

    analyzer = None
    author_lookup = None
    video_client = None
    if api_key:
        gemini = GeminiClient(api_key=api_key)
        analyzer = GeminiBiasAnalyzer(gemini, get_model_config("analysis"))
        author_lookup = AuthorLookup(gemini, list_author_lookup_models())
        video_client = LongRunningOperationClient(api_key, model=DEFAULT_SERVICE_MODELS.video)
    else:
        logger.warning("GEMINI_API_KEY not set; remote analysis and video generation disabled")

    orchestrator = AnalysisOrchestrator(
        cache,
        analyzer=analyzer,
        video_client=video_client,
        author_lookup=author_lookup,
    )
    return ServiceContainer(cache=cache, orchestrator=orchestrator, router=MessageRouter(orchestrator))


def create_app(container: Optional[ServiceContainer] = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.container = container or build_container()
        logger.info("Starting CReal Core API", extra={
            "log_level": log_level,
            "json_logs": use_json_logs,
        })
        try:
            yield
        finally:
            await app.state.container.orchestrator.drain()

    app = FastAPI(
        title=API_TITLE,
        description=API_DESCRIPTION,
        version=API_VERSION,
        lifespan=lifespan,
    )

    @app.middleware("http")
    async def add_request_correlation(request: Request, call_next):
        """Add correlation ID to every request and its log lines."""
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        set_request_id(request_id)
        logger.info(f"{request.method} {request.url.path}", extra={
            "method": request.method,
            "path": request.url.path,
        })
        try:
            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id
            logger.info(f"Response: {response.status_code}", extra={
                "status_code": response.status_code,
                "path": request.url.path,
            })
            return response
        finally:
            clear_context()

    # CORS middleware for the browser extension and web frontends
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(messages_router)
    app.include_router(health_router)

    @app.get("/")
    async def root():
        """Root endpoint - API info"""
        return {"message": "CReal Core API", "version": API_VERSION}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "8000")))
