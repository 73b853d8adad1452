"""
Long-running operation client for Veo video synthesis (Gemini REST).

Protocol:
    start            POST models/{model}:predictLongRunning -> operation name
    await_completion GET {operation} every poll_interval seconds, at most
                     max_attempts times
    resolve_locator  find the video URI in the terminal response
    fetch_payload    authenticated GET of the video bytes

The poll interval is fixed and the attempt budget is the only timeout:
the hard ceiling is poll_interval * max_attempts. There is no external
cancellation; a caller that stops waiting does not stop polling.
"""

import asyncio
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, AsyncIterator, Awaitable, Callable, Dict, Optional

import httpx

from creal.config import (
    DEFAULT_SERVICE_MODELS,
    VEO_ASPECT_RATIO,
    VEO_BASE_URL,
    VEO_DURATION_SECONDS,
    VEO_MAX_POLL_ATTEMPTS,
    VEO_POLL_INTERVAL_SECONDS,
    VEO_REQUEST_TIMEOUT_SECONDS,
    VEO_RESOLUTION,
)
from creal.core import (
    Clock,
    DownloadFailed,
    LogTimer,
    OperationFailed,
    OperationTimedOut,
    ResultUnresolvable,
    StartFailed,
    UnsupportedLocatorScheme,
    get_logger,
    reset_operation_id,
    set_operation_id,
    system_clock,
)
from creal.models import OperationState, VideoClip

from .resolver import DIRECT_FETCH_SCHEMES, ResultShapeResolver

logger = get_logger(__name__, component="veo_client")

DEFAULT_CONTENT_TYPE = "video/mp4"
MAX_ERROR_BODY_CHARS = 500


@dataclass
class Operation:
    """One in-flight remote job; lives only for a single generate call."""
    id: str
    started_at: float
    attempts: int = 0
    state: OperationState = OperationState.PENDING


class LongRunningOperationClient:
    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = VEO_BASE_URL,
        model: Optional[str] = None,
        poll_interval: float = VEO_POLL_INTERVAL_SECONDS,
        max_attempts: int = VEO_MAX_POLL_ATTEMPTS,
        duration_seconds: int = VEO_DURATION_SECONDS,
        aspect_ratio: str = VEO_ASPECT_RATIO,
        resolution: str = VEO_RESOLUTION,
        timeout: float = VEO_REQUEST_TIMEOUT_SECONDS,
        http_client: Optional[httpx.AsyncClient] = None,
        resolver: Optional[ResultShapeResolver] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        clock: Clock = system_clock,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.model = model or DEFAULT_SERVICE_MODELS.video
        self.poll_interval = poll_interval
        self.max_attempts = max_attempts
        self.duration_seconds = duration_seconds
        self.aspect_ratio = aspect_ratio
        self.resolution = resolution
        self.timeout = timeout
        self.resolver = resolver or ResultShapeResolver()
        self._http = http_client
        self._sleep = sleep
        self._clock = clock

    @property
    def max_wait_seconds(self) -> float:
        return self.poll_interval * self.max_attempts

    def _headers(self) -> Dict[str, str]:
        return {"Content-Type": "application/json", "x-goog-api-key": self.api_key}

    @asynccontextmanager
    async def _session(
        self, client: Optional[httpx.AsyncClient] = None
    ) -> AsyncIterator[httpx.AsyncClient]:
        """The caller's session, else the injected client, else a fresh one closed on exit."""
        if client is not None:
            yield client
        elif self._http is not None:
            yield self._http
        else:
            async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as fresh:
                yield fresh

    def _operation_url(self, name: str) -> str:
        if name.startswith("http"):
            return name
        return f"{self.base_url}/{name.lstrip('/')}"

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    async def start(self, prompt: str, client: Optional[httpx.AsyncClient] = None) -> Operation:
        url = f"{self.base_url}/models/{self.model}:predictLongRunning"
        body = {
            "instances": [{"prompt": prompt}],
            "parameters": {
                "durationSeconds": self.duration_seconds,
                "aspectRatio": self.aspect_ratio,
                "resolution": self.resolution,
            },
        }

        async with self._session(client) as session:
            try:
                res = await session.post(url, headers=self._headers(), json=body)
            except httpx.HTTPError as e:
                raise StartFailed(f"Veo start failed: {e}") from e

        if not res.is_success:
            raise StartFailed(f"Veo start failed: {res.status_code} {res.text[:MAX_ERROR_BODY_CHARS]}")

        try:
            data = res.json()
        except ValueError as e:
            raise StartFailed("Veo start: response was not JSON") from e

        name = data.get("name") if isinstance(data, dict) else None
        if not name or not isinstance(name, str):
            raise StartFailed("Veo start: missing operation name in response")

        logger.info("Started video operation", extra={"model": self.model, "operation": name})
        return Operation(id=name, started_at=self._clock())

    async def await_completion(
        self, operation: Operation, client: Optional[httpx.AsyncClient] = None
    ) -> Dict[str, Any]:
        """Poll until done; returns the operation's `response` object."""
        url = self._operation_url(operation.id)

        async with self._session(client) as session:
            while operation.attempts < self.max_attempts:
                operation.attempts += 1
                operation.state = OperationState.POLLING

                try:
                    res = await session.get(url, headers=self._headers())
                except httpx.HTTPError as e:
                    operation.state = OperationState.FAILED
                    raise OperationFailed(f"Veo poll failed: {e}") from e

                if not res.is_success:
                    operation.state = OperationState.FAILED
                    raise OperationFailed(
                        f"Veo poll failed: {res.status_code} {res.text[:MAX_ERROR_BODY_CHARS]}"
                    )

                try:
                    data = res.json()
                except ValueError as e:
                    operation.state = OperationState.FAILED
                    raise OperationFailed("Veo poll: response was not JSON") from e
                if not isinstance(data, dict):
                    data = {}

                error = data.get("error")
                if error:
                    message = error.get("message") if isinstance(error, dict) else None
                    operation.state = OperationState.FAILED
                    raise OperationFailed(f"Veo error: {message or error}")

                if data.get("done"):
                    operation.state = OperationState.DONE
                    logger.info(
                        "Video operation finished",
                        extra={"attempts": operation.attempts, "elapsed_seconds": self._clock() - operation.started_at},
                    )
                    response = data.get("response")
                    return response if isinstance(response, dict) else {}

                logger.debug("Video operation pending", extra={"attempt": operation.attempts})
                if operation.attempts < self.max_attempts:
                    await self._sleep(self.poll_interval)

        operation.state = OperationState.TIMED_OUT
        raise OperationTimedOut(
            f"Veo generation timed out after {operation.attempts} polls (~{self.max_wait_seconds:.0f}s)"
        )

    def resolve_locator(self, payload: Dict[str, Any]) -> str:
        locator = self.resolver.resolve(payload)
        if not locator:
            keys = ", ".join(str(k) for k in payload.keys()) if isinstance(payload, dict) else ""
            raise ResultUnresolvable(f"Veo response missing video URI. Response keys: {keys or '(none)'}")
        if not locator.startswith(DIRECT_FETCH_SCHEMES):
            raise UnsupportedLocatorScheme(locator)
        return locator

    async def fetch_payload(self, locator: str, client: Optional[httpx.AsyncClient] = None) -> VideoClip:
        async with self._session(client) as session:
            try:
                res = await session.get(locator, headers={"x-goog-api-key": self.api_key})
            except httpx.HTTPError as e:
                raise DownloadFailed(f"Veo download failed: {e}") from e

        if not res.is_success:
            raise DownloadFailed(f"Veo download failed: {res.status_code}")

        content_type = res.headers.get("content-type", "").split(";")[0].strip()
        return VideoClip(payload=res.content, content_type=content_type or DEFAULT_CONTENT_TYPE)

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    async def generate(self, prompt: str) -> VideoClip:
        """start -> await_completion -> resolve_locator -> fetch_payload, strictly in order."""
        with LogTimer(logger, "video synthesis"):
            async with self._session() as session:
                operation = await self.start(prompt, client=session)
                token = set_operation_id(operation.id)
                try:
                    payload = await self.await_completion(operation, client=session)
                    try:
                        locator = self.resolve_locator(payload)
                    except (ResultUnresolvable, UnsupportedLocatorScheme):
                        operation.state = OperationState.FAILED
                        raise
                    clip = await self.fetch_payload(locator, client=session)
                finally:
                    reset_operation_id(token)

        logger.info(
            "Downloaded video clip",
            extra={"bytes": len(clip.payload), "content_type": clip.content_type},
        )
        return clip
