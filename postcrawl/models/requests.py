"""Pydantic models for API requests."""

from __future__ import annotations

from typing import Annotated, Any, Literal
from urllib.parse import urlparse

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, StrictBool, StringConstraints

from ..constants import MAX_RESULTS, MAX_URLS

SocialPlatform = Literal["reddit", "tiktok"]
ResponseMode = Literal["raw", "markdown"]


def _check_absolute_url(value: str) -> str:
    parsed = urlparse(value)
    if not parsed.scheme or not parsed.netloc:
        raise ValueError("Invalid url")
    return value


AbsoluteUrl = Annotated[str, AfterValidator(_check_absolute_url)]
Query = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class _WireRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    def to_wire(self) -> dict[str, Any]:
        """Serialize to the JSON body the API expects."""
        return self.model_dump(mode="json", exclude_none=True)


class SearchRequest(_WireRequest):
    """Search across one or more social platforms."""

    social_platforms: list[SocialPlatform] = Field(min_length=1)
    query: Query
    results: int = Field(strict=True, ge=1, le=MAX_RESULTS)
    page: int = Field(strict=True, ge=1)


class ExtractRequest(_WireRequest):
    """Extract content from a list of post URLs."""

    urls: list[AbsoluteUrl] = Field(min_length=1, max_length=MAX_URLS)
    include_comments: StrictBool = False
    response_mode: ResponseMode = "raw"
    comment_filter_config: dict[str, Any] | None = None


class SearchAndExtractRequest(_WireRequest):
    """Search, then extract every hit, in a single call."""

    social_platforms: list[SocialPlatform] = Field(min_length=1)
    query: Query
    results: int = Field(strict=True, ge=1, le=MAX_RESULTS)
    page: int = Field(strict=True, ge=1)
    include_comments: StrictBool = False
    response_mode: ResponseMode = "raw"
    comment_filter_config: dict[str, Any] | None = None
