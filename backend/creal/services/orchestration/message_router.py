"""
Message router - dispatches typed caller messages to the orchestrator.

Every response is JSON-ready. Failures never raise out of dispatch; they come
back as {"error": ..., "error_type": ...} so callers can show stage-specific
guidance.
"""

import base64
from typing import Any, Awaitable, Callable, Dict, Union

from pydantic import ValidationError

from creal.core import CRealError, get_logger
from creal.models import (
    AnalyzeArticleRequest,
    FetchAuthorInfoRequest,
    GenerateVideoRequest,
    GenerateVideoResponse,
    Message,
    MessageType,
)

from .orchestrator import AnalysisOrchestrator

logger = get_logger(__name__, component="message_router")


class InvalidPayload(ValueError):
    pass


def _url_from(payload: Any) -> str:
    """URL payloads arrive either bare or as {"url": ...}."""
    if isinstance(payload, dict):
        payload = payload.get("url")
    if not isinstance(payload, str) or not payload:
        raise InvalidPayload("Expected an article URL")
    return payload


def error_response(message: str, error_type: str) -> Dict[str, str]:
    return {"error": message, "error_type": error_type}


class MessageRouter:
    def __init__(self, orchestrator: AnalysisOrchestrator):
        self.orchestrator = orchestrator
        self._handlers: Dict[MessageType, Callable[[Any], Awaitable[Any]]] = {
            MessageType.ANALYZE_ARTICLE: self._analyze_article,
            MessageType.GET_CACHED_ANALYSIS: self._get_cached_analysis,
            MessageType.GET_ARTICLE_HISTORY: self._get_article_history,
            MessageType.DELETE_ARTICLE: self._delete_article,
            MessageType.CLEAR_HISTORY: self._clear_history,
            MessageType.GENERATE_VIDEO: self._generate_video,
            MessageType.FETCH_AUTHOR_INFO: self._fetch_author_info,
            MessageType.GET_STORAGE_STATS: self._get_storage_stats,
        }

    async def dispatch(self, message: Union[Message, Dict[str, Any]]) -> Any:
        try:
            msg = message if isinstance(message, Message) else Message.model_validate(message)
        except ValidationError:
            return error_response("Malformed message", "InvalidPayload")

        try:
            message_type = MessageType(msg.type)
        except ValueError:
            return error_response(f"Unknown message type: {msg.type}", "UnknownMessageType")

        handler = self._handlers[message_type]
        try:
            return await handler(msg.payload)
        except (InvalidPayload, ValidationError) as e:
            logger.info("Rejected message payload", extra={"type": message_type.value, "error": str(e)})
            return error_response(f"Invalid payload for {message_type.value}: {e}", "InvalidPayload")
        except CRealError as e:
            logger.warning(
                "Message handler failed",
                extra={"type": message_type.value, "error_type": type(e).__name__, "error": str(e)},
            )
            return error_response(str(e), type(e).__name__)
        except Exception as e:
            logger.error("Message handler error", extra={"type": message_type.value}, exc_info=True)
            return error_response(str(e), "InternalError")

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    async def _analyze_article(self, payload: Any) -> Dict[str, Any]:
        request = AnalyzeArticleRequest.model_validate(payload or {})
        response = await self.orchestrator.analyze(request)
        return response.model_dump(mode="json")

    async def _get_cached_analysis(self, payload: Any) -> Any:
        record = await self.orchestrator.get_cached_analysis(_url_from(payload))
        return record.model_dump(mode="json") if record else None

    async def _get_article_history(self, _payload: Any) -> Any:
        records = await self.orchestrator.get_article_history()
        return [record.model_dump(mode="json") for record in records]

    async def _delete_article(self, payload: Any) -> Dict[str, bool]:
        await self.orchestrator.delete_article(_url_from(payload))
        return {"success": True}

    async def _clear_history(self, _payload: Any) -> Dict[str, bool]:
        await self.orchestrator.clear_history()
        return {"success": True}

    async def _generate_video(self, payload: Any) -> Dict[str, str]:
        request = GenerateVideoRequest.model_validate(payload or {})
        clip = await self.orchestrator.generate_clip(request)
        response = GenerateVideoResponse(
            payload=base64.b64encode(clip.payload).decode("ascii"),
            content_type=clip.content_type,
        )
        return response.model_dump(mode="json")

    async def _fetch_author_info(self, payload: Any) -> Dict[str, Any]:
        request = FetchAuthorInfoRequest.model_validate(payload or {})
        info = await self.orchestrator.fetch_author_info(request.author_name)
        return {"author_info": info.model_dump(mode="json")}

    async def _get_storage_stats(self, _payload: Any) -> Dict[str, Any]:
        stats = await self.orchestrator.get_storage_stats()
        return stats.model_dump(mode="json")
