"""PostCrawl - search and extract social media content from Reddit and TikTok."""

try:
    from importlib.metadata import version

    __version__ = version("postcrawl")
except Exception:
    __version__ = "0.0.0-dev"

from .client import PostCrawlClient
from .exceptions import (
    APIError,
    AuthenticationError,
    ErrorKind,
    InsufficientCreditsError,
    NetworkError,
    PostCrawlError,
    RateLimitError,
    TimeoutError,
    ValidationError,
)
from .models import (
    ClientConfig,
    ErrorDetail,
    ErrorResponse,
    ExtractedPost,
    ExtractRequest,
    RateLimitInfo,
    RedditComment,
    RedditExtractedPost,
    RedditPost,
    ResponseMode,
    SearchAndExtractRequest,
    SearchRequest,
    SearchResult,
    SocialPlatform,
    TiktokComment,
    TiktokExtractedPost,
    TiktokPost,
    is_reddit_post,
    is_tiktok_post,
)

__all__ = [
    "APIError",
    "AuthenticationError",
    "ClientConfig",
    "ErrorDetail",
    "ErrorKind",
    "ErrorResponse",
    "ExtractRequest",
    "ExtractedPost",
    "InsufficientCreditsError",
    "NetworkError",
    "PostCrawlClient",
    "PostCrawlError",
    "RateLimitError",
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
    "TimeoutError",
    "ValidationError",
    "__version__",
    "is_reddit_post",
    "is_tiktok_post",
]
