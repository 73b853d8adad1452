"""
Schemas for article video clip generation
"""

from pydantic import BaseModel


class GenerateVideoRequest(BaseModel):
    """Payload of GENERATE_VIDEO"""
    title: str
    excerpt: str = ""
    rationale: str = ""


class VideoClip(BaseModel):
    """Raw synthesized clip as returned by the download step"""
    payload: bytes
    content_type: str = "video/mp4"


class GenerateVideoResponse(BaseModel):
    """Result of GENERATE_VIDEO; payload is base64 encoded"""
    payload: str
    content_type: str
