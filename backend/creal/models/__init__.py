"""
Pydantic models for records, messages and request/response schemas
"""

from .analysis import (
    BiasResult,
    BIPOLAR_AXES,
    PERCENT_AXES,
    AnalysisRecord,
    CacheEnvelope,
    StorageStats,
    AnalyzeArticleRequest,
    AnalyzeArticleResponse,
)
from .video import GenerateVideoRequest, GenerateVideoResponse, VideoClip
from .author import AuthorInfo, AuthorArticle, SocialLink, FetchAuthorInfoRequest
from .messages import Message, MessageType
from .status import OperationState

__all__ = [
    "BiasResult",
    "BIPOLAR_AXES",
    "PERCENT_AXES",
    "AnalysisRecord",
    "CacheEnvelope",
    "StorageStats",
    "AnalyzeArticleRequest",
    "AnalyzeArticleResponse",
    "GenerateVideoRequest",
    "GenerateVideoResponse",
    "VideoClip",
    "AuthorInfo",
    "AuthorArticle",
    "SocialLink",
    "FetchAuthorInfoRequest",
    "Message",
    "MessageType",
    "OperationState",
]
