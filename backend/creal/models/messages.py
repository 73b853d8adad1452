"""
Message envelope exchanged between callers and the message router
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel


class MessageType(str, Enum):
    ANALYZE_ARTICLE = "ANALYZE_ARTICLE"
    GET_CACHED_ANALYSIS = "GET_CACHED_ANALYSIS"
    GET_ARTICLE_HISTORY = "GET_ARTICLE_HISTORY"
    DELETE_ARTICLE = "DELETE_ARTICLE"
    CLEAR_HISTORY = "CLEAR_HISTORY"
    GENERATE_VIDEO = "GENERATE_VIDEO"
    FETCH_AUTHOR_INFO = "FETCH_AUTHOR_INFO"
    GET_STORAGE_STATS = "GET_STORAGE_STATS"


class Message(BaseModel):
    """A typed request; `type` is kept as a string so unknown types can be reported"""
    type: str
    payload: Optional[Any] = None
