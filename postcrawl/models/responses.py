"""Pydantic models for API responses and client-side state."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Annotated, Any, Literal, Union

from pydantic import AliasChoices, BaseModel, Field, TypeAdapter, field_validator

from .platforms import RedditPost, TiktokPost


class SearchResult(BaseModel):
    """A single search hit."""

    title: str
    url: str
    snippet: str
    date: str
    image_url: str = Field(default="", validation_alias=AliasChoices("image_url", "imageUrl"))

    @field_validator("image_url", mode="before")
    @classmethod
    def _empty_image_url(cls, value: Any) -> Any:
        return "" if value is None else value


class _ExtractedPostBase(BaseModel):
    url: str
    markdown: str | None = None
    error: str | None = None


class RedditExtractedPost(_ExtractedPostBase):
    """Extraction result for a Reddit URL."""

    source: Literal["reddit"] = "reddit"
    raw: RedditPost | None = None


class TiktokExtractedPost(_ExtractedPostBase):
    """Extraction result for a TikTok URL."""

    source: Literal["tiktok"] = "tiktok"
    raw: TiktokPost | None = None


ExtractedPost = Annotated[Union[RedditExtractedPost, TiktokExtractedPost], Field(discriminator="source")]

search_results_adapter: TypeAdapter[list[SearchResult]] = TypeAdapter(list[SearchResult])
extracted_posts_adapter: TypeAdapter[list[ExtractedPost]] = TypeAdapter(list[ExtractedPost])


def _as_text(value: Any, default: str) -> str:
    if value is None:
        return default
    return value if isinstance(value, str) else str(value)


class ErrorDetail(BaseModel):
    """A field-level validation problem. Missing parts read as empty strings."""

    field: str = ""
    code: str = ""
    message: str = ""

    @field_validator("field", "code", "message", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str:
        return _as_text(value, "")


class ErrorResponse(BaseModel):
    """Error body returned by the API on non-2xx responses.

    Parsing never fails on a JSON object: null or mistyped fields fall back to
    their defaults, and malformed ``details`` entries are dropped, so the
    ``request_id`` survives whatever else the body carries.
    """

    error: str = "Unknown error"
    message: str = "Unknown error"
    request_id: str | None = Field(default=None, validation_alias=AliasChoices("request_id", "requestId"))
    details: list[ErrorDetail] = Field(default_factory=list)
    credits_required: int | None = None
    credits_available: int | None = None

    @field_validator("error", "message", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str:
        return _as_text(value, "Unknown error")

    @field_validator("request_id", mode="before")
    @classmethod
    def _request_id(cls, value: Any) -> str | None:
        return None if value is None else _as_text(value, "")

    @field_validator("details", mode="before")
    @classmethod
    def _details(cls, value: Any) -> list[Any]:
        if not isinstance(value, list):
            return []
        return [item for item in value if isinstance(item, Mapping)]

    @field_validator("credits_required", "credits_available", mode="before")
    @classmethod
    def _credits(cls, value: Any) -> int | None:
        if value is None or isinstance(value, bool):
            return None
        try:
            return int(value)
        except (TypeError, ValueError, OverflowError):
            return None


@dataclass
class RateLimitInfo:
    """Rate-limit window as last reported by the API.

    Shared by every call on one client and written after each HTTP exchange
    without locking; concurrent calls see whichever response landed last.
    """

    limit: int | None = None
    remaining: int | None = None
    reset: int | None = None
