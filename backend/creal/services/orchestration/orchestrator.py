"""
Analysis orchestrator - cache-or-compute for article analysis and the video
clip pipeline.

Two horizons govern cached analyses:
    - TTL (default 24h): older records are recomputed on the next analyze call
    - retention (default 30 days): older records are deleted outright

Between the two a record is stale but still listed in history and returned
by get_cached_analysis, flagged with stale=True.

After every analyze call a purge of records past the retention horizon is
spawned as a background task. The purge never blocks the caller and its
failures are only logged.
"""

import asyncio
from typing import List, Optional, Protocol, Set

from creal.config import CACHE_RETENTION_SECONDS, CACHE_TTL_SECONDS
from creal.core import (
    Clock,
    ConfigurationError,
    RemoteAnalysisFailed,
    StoreUnavailable,
    get_logger,
    system_clock,
)
from creal.models import (
    AnalysisRecord,
    AnalyzeArticleRequest,
    AnalyzeArticleResponse,
    AuthorInfo,
    BiasResult,
    GenerateVideoRequest,
    StorageStats,
    VideoClip,
)
from creal.services.analysis.prompts import build_video_prompt
from creal.services.infrastructure.storage import CacheStore
from creal.services.video import LongRunningOperationClient

logger = get_logger(__name__, component="orchestrator")

DEFAULT_TITLE = "Untitled Article"
DEFAULT_KEY = "unknown"
MISSING_KEY_MESSAGE = "No API key. Set GEMINI_API_KEY to enable remote analysis and video generation."


class Analyzer(Protocol):
    async def analyze(self, text: str) -> BiasResult: ...


class AuthorSource(Protocol):
    async def fetch(self, name: str) -> AuthorInfo: ...


class AnalysisOrchestrator:
    def __init__(
        self,
        cache: CacheStore,
        analyzer: Optional[Analyzer] = None,
        video_client: Optional[LongRunningOperationClient] = None,
        author_lookup: Optional[AuthorSource] = None,
        clock: Clock = system_clock,
        ttl_seconds: float = CACHE_TTL_SECONDS,
        retention_seconds: float = CACHE_RETENTION_SECONDS,
    ):
        self.cache = cache
        self.analyzer = analyzer
        self.video_client = video_client
        self.author_lookup = author_lookup
        self.clock = clock
        self.ttl_seconds = ttl_seconds
        self.retention_seconds = retention_seconds
        self._background: Set[asyncio.Task] = set()

    def is_fresh(self, record: AnalysisRecord, now: Optional[float] = None) -> bool:
        now = self.clock() if now is None else now
        return now - record.created_at < self.ttl_seconds

    def _with_stale_flag(self, record: AnalysisRecord, now: float) -> AnalysisRecord:
        return record.model_copy(update={"stale": not self.is_fresh(record, now)})

    async def _lookup(self, key: str) -> Optional[AnalysisRecord]:
        try:
            return await self.cache.get(key)
        except StoreUnavailable as e:
            logger.warning("Cache unavailable, treating as miss", extra={"key": key, "error": str(e)})
            return None

    # ------------------------------------------------------------------
    # Analysis
    # ------------------------------------------------------------------

    async def analyze(self, request: AnalyzeArticleRequest) -> AnalyzeArticleResponse:
        key = request.url or DEFAULT_KEY
        try:
            cached = await self._lookup(key)
            if cached is not None and self.is_fresh(cached):
                logger.info("Serving cached analysis", extra={"key": key})
                return AnalyzeArticleResponse(
                    result=cached.result,
                    served_from_cache=True,
                    computed_at=cached.created_at,
                )

            result = await self._compute(request.text)
            computed_at = self.clock()
            record = AnalysisRecord(
                key=key,
                title=request.title or DEFAULT_TITLE,
                author=request.author,
                source=request.source,
                result=result,
                created_at=computed_at,
            )
            try:
                await self.cache.put(record)
            except StoreUnavailable as e:
                logger.warning("Could not persist analysis", extra={"key": key, "error": str(e)})

            return AnalyzeArticleResponse(result=result, served_from_cache=False, computed_at=computed_at)
        finally:
            self._spawn_purge()

    async def _compute(self, text: str) -> BiasResult:
        if self.analyzer is None:
            raise ConfigurationError(MISSING_KEY_MESSAGE)
        try:
            return await self.analyzer.analyze(text)
        except RemoteAnalysisFailed:
            raise
        except Exception as e:
            raise RemoteAnalysisFailed(f"Analysis failed: {e}") from e

    # ------------------------------------------------------------------
    # Background purge
    # ------------------------------------------------------------------

    def _spawn_purge(self) -> None:
        task = asyncio.create_task(self._purge_expired())
        self._background.add(task)
        task.add_done_callback(self._background.discard)

    async def _purge_expired(self) -> None:
        try:
            await self.cache.purge_older_than(self.retention_seconds)
        except Exception as e:
            logger.warning("Failed to clear old analyses", extra={"error": str(e)}, exc_info=True)

    async def drain(self) -> None:
        """Wait for outstanding background tasks."""
        while self._background:
            await asyncio.gather(*list(self._background), return_exceptions=True)

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    async def get_cached_analysis(self, url: str) -> Optional[AnalysisRecord]:
        record = await self._lookup(url)
        if record is None:
            return None
        return self._with_stale_flag(record, self.clock())

    async def get_article_history(self) -> List[AnalysisRecord]:
        try:
            records = await self.cache.list_records()
        except StoreUnavailable as e:
            logger.warning("Cache unavailable, returning empty history", extra={"error": str(e)})
            return []
        now = self.clock()
        return [self._with_stale_flag(record, now) for record in records]

    async def delete_article(self, url: str) -> None:
        await self.cache.delete(url)

    async def clear_history(self) -> None:
        await self.cache.clear()

    async def get_storage_stats(self) -> StorageStats:
        return await self.cache.stats()

    # ------------------------------------------------------------------
    # Remote extras
    # ------------------------------------------------------------------

    async def generate_clip(self, request: GenerateVideoRequest) -> VideoClip:
        """Synthesize a short clip for an article. Never cached."""
        if self.video_client is None:
            raise ConfigurationError(MISSING_KEY_MESSAGE)
        prompt = build_video_prompt(request.title, request.excerpt, request.rationale)
        return await self.video_client.generate(prompt)

    async def fetch_author_info(self, name: str) -> AuthorInfo:
        if self.author_lookup is None:
            raise ConfigurationError(MISSING_KEY_MESSAGE)
        return await self.author_lookup.fetch(name)
