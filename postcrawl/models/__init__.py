"""Pydantic models for the postcrawl client."""

from __future__ import annotations

from .config import ClientConfig
from .platforms import (
    RedditComment,
    RedditPost,
    TiktokComment,
    TiktokPost,
    is_reddit_post,
    is_tiktok_post,
)
from .requests import (
    ExtractRequest,
    ResponseMode,
    SearchAndExtractRequest,
    SearchRequest,
    SocialPlatform,
)
from .responses import (
    ErrorDetail,
    ErrorResponse,
    ExtractedPost,
    RateLimitInfo,
    RedditExtractedPost,
    SearchResult,
    TiktokExtractedPost,
    extracted_posts_adapter,
    search_results_adapter,
)

__all__ = [
    "ClientConfig",
    "ErrorDetail",
    "ErrorResponse",
    "ExtractRequest",
    "ExtractedPost",
    "RateLimitInfo",
    "RedditComment",
    "RedditExtractedPost",
    "RedditPost",
    "ResponseMode",
    "SearchAndExtractRequest",
    "SearchRequest",
    "SearchResult",
    "SocialPlatform",
    "TiktokComment",
    "TiktokExtractedPost",
    "TiktokPost",
    "extracted_posts_adapter",
    "is_reddit_post",
    "is_tiktok_post",
    "search_results_adapter",
]
