"""
Author lookup - public profile of an article's author via Gemini.

Models are tried in order; the first one that answers wins.
"""

from typing import List, Optional

from pydantic import ValidationError

from creal.config import list_author_lookup_models
from creal.core import AuthorLookupFailed, get_logger
from creal.models import AuthorInfo
from creal.services.infrastructure.llm import GeminiClient, GenerationConfig
from creal.services.infrastructure.parsing import parse_json_object

from .prompts import build_author_prompt

logger = get_logger(__name__, component="author_lookup")


class AuthorLookup:
    def __init__(self, client: GeminiClient, models: Optional[List[str]] = None):
        self.client = client
        self.models = models or list_author_lookup_models()

    async def fetch(self, name: str) -> AuthorInfo:
        prompt = build_author_prompt(name)
        raw_text = ""
        last_error: Optional[Exception] = None

        for model in self.models:
            try:
                raw_text = await self.client.generate_text(
                    model, prompt, GenerationConfig(temperature=0.4)
                )
            except Exception as e:
                last_error = e
                logger.warning(
                    "Author lookup failed on model",
                    extra={"model": model, "error": str(e)},
                )
                continue
            if raw_text:
                break

        if not raw_text:
            detail = f": {last_error}" if last_error else ""
            raise AuthorLookupFailed(f"Failed to fetch author information{detail}")

        payload = parse_json_object(raw_text)
        if payload is None:
            raise AuthorLookupFailed("Author lookup returned an unreadable response")

        # Older prompts asked for camelCase
        if "social_links" not in payload and "socialLinks" in payload:
            payload["social_links"] = payload.pop("socialLinks")
        for field in ("articles", "social_links"):
            if payload.get(field) is None:
                payload.pop(field, None)
        payload["name"] = payload.get("name") or name
        if payload.get("age") is not None:
            payload["age"] = str(payload["age"])

        try:
            return AuthorInfo.model_validate(payload)
        except ValidationError as e:
            raise AuthorLookupFailed(f"Author lookup returned unexpected fields: {e.error_count()} errors") from e
