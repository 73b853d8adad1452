"""
Result shape resolver - find the video locator in a finished operation.

The Veo response has moved around between API revisions and transports
(Gemini REST, SDK-style payloads, Vertex REST, camelCase vs snake_case).
Matchers are tried in a fixed order, most trusted first; the first one that
produces a plausible locator wins. The last matcher is a bounded generic
search, so a documented path always beats a URI that merely appears
somewhere else in the payload (e.g. in diagnostic metadata).

The resolver never raises and performs no I/O.
"""

from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence

from creal.core import get_logger

logger = get_logger(__name__, component="result_resolver")

SUPPORTED_SCHEMES = ("https://", "http://", "gs://")
DIRECT_FETCH_SCHEMES = ("https://", "http://")

# Container hops below the response root the generic search may take:
# two array -> object levels.
MAX_SEARCH_DEPTH = 4


def is_plausible_locator(value: Any) -> bool:
    return isinstance(value, str) and value.startswith(SUPPORTED_SCHEMES)


def _field(obj: Any, *names: str) -> Any:
    """First present field among alternate spellings."""
    if not isinstance(obj, dict):
        return None
    for name in names:
        if name in obj:
            return obj[name]
    return None


def _first_item(value: Any) -> Any:
    if isinstance(value, list) and value:
        return value[0]
    return None


# ---------------------------------------------------------------------------
# Matchers
# ---------------------------------------------------------------------------

def match_generated_samples(response: dict) -> Optional[str]:
    """generateVideoResponse.generatedSamples[0].video.uri (Gemini REST)."""
    gen = _field(response, "generateVideoResponse", "generate_video_response")
    sample = _first_item(_field(gen, "generatedSamples", "generated_samples"))
    if not isinstance(sample, dict):
        return None
    uri = _field(_field(sample, "video"), "uri")
    if is_plausible_locator(uri):
        return uri
    return _field(sample, "uri")


def match_generated_videos(response: dict) -> Optional[str]:
    """generatedVideos[0].video.uri (SDK style)."""
    first = _first_item(_field(response, "generatedVideos", "generated_videos"))
    return _field(_field(first, "video"), "uri")


def match_videos(response: dict) -> Optional[str]:
    """videos[0].gcsUri or videos[0].uri (Vertex REST)."""
    first = _first_item(_field(response, "videos"))
    if not isinstance(first, dict):
        return None
    gcs_uri = _field(first, "gcsUri", "gcs_uri")
    if is_plausible_locator(gcs_uri):
        return gcs_uri
    return _field(first, "uri")


def match_top_level_uri(response: dict) -> Optional[str]:
    return _field(response, "uri")


def _looks_like_locator_key(key: Any) -> bool:
    lowered = str(key).lower()
    return lowered.endswith("uri") or lowered.endswith("url")


def _search(node: Any, depth: int) -> Optional[str]:
    if isinstance(node, dict):
        for key, value in node.items():
            if _looks_like_locator_key(key) and is_plausible_locator(value):
                return value
        if depth >= MAX_SEARCH_DEPTH:
            return None
        for value in node.values():
            if isinstance(value, (dict, list)):
                found = _search(value, depth + 1)
                if found:
                    return found
    elif isinstance(node, list) and depth < MAX_SEARCH_DEPTH:
        for item in node:
            if isinstance(item, (dict, list)):
                found = _search(item, depth + 1)
                if found:
                    return found
    return None


def match_generic_search(response: dict) -> Optional[str]:
    """Depth-first search for any uri/url-named field with a plausible value."""
    return _search(response, 0)


@dataclass(frozen=True)
class ShapeMatcher:
    name: str
    match: Callable[[dict], Optional[str]]


DEFAULT_MATCHERS: Sequence[ShapeMatcher] = (
    ShapeMatcher("generated_samples", match_generated_samples),
    ShapeMatcher("generated_videos", match_generated_videos),
    ShapeMatcher("vertex_videos", match_videos),
    ShapeMatcher("top_level_uri", match_top_level_uri),
    ShapeMatcher("generic_search", match_generic_search),
)


class ResultShapeResolver:
    """Ordered matcher chain over a terminal operation response."""

    def __init__(self, matchers: Optional[List[ShapeMatcher]] = None):
        self.matchers = list(matchers) if matchers is not None else list(DEFAULT_MATCHERS)

    def resolve(self, response: Any) -> Optional[str]:
        if not isinstance(response, dict):
            return None

        for matcher in self.matchers:
            try:
                candidate = matcher.match(response)
            except Exception as e:
                logger.debug("Shape matcher errored", extra={"matcher": matcher.name, "error": str(e)})
                continue
            if is_plausible_locator(candidate):
                logger.debug("Resolved video locator", extra={"matcher": matcher.name})
                return candidate

        logger.warning(
            "Could not find video locator in response",
            extra={"response_keys": sorted(str(k) for k in response.keys())},
        )
        return None
