"""
Schemas for author profile lookup
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class AuthorArticle(BaseModel):
    title: str = ""
    url: Optional[str] = None
    source: Optional[str] = None
    date: Optional[str] = None


class SocialLink(BaseModel):
    platform: str = ""
    url: Optional[str] = None


class AuthorInfo(BaseModel):
    """Public profile of an article's author"""
    name: str
    bio: Optional[str] = None
    occupation: Optional[str] = None
    age: Optional[str] = None
    articles: List[AuthorArticle] = Field(default_factory=list)
    social_links: List[SocialLink] = Field(default_factory=list)


class FetchAuthorInfoRequest(BaseModel):
    """Payload of FETCH_AUTHOR_INFO"""
    author_name: str = Field(min_length=1)
