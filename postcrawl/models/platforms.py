"""Pydantic models for platform-specific raw payloads.

The API returns these payloads with camelCase keys. Every field is optional,
scalars accept any JSON type the API has been seen to send for them, null lists
read as empty, and unknown keys are kept as extras. A payload is preserved as
received even when it does not match the ``source`` tag it came with.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

Scalar = str | int | float | None


class _RawPayload(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    @field_validator("comments", "replies", "hashtags", mode="before", check_fields=False)
    @classmethod
    def _null_list(cls, value: Any) -> Any:
        return [] if value is None else value


class RedditComment(_RawPayload):
    """A Reddit comment with its nested replies."""

    id: Scalar = None
    name: str | None = None
    text: str | None = None
    score: Scalar = None
    upvotes: Scalar = None
    downvotes: Scalar = None
    created_at: Scalar = None
    permalink: str | None = None
    replies: list[RedditComment] = Field(default_factory=list)


class RedditPost(_RawPayload):
    """A Reddit submission as extracted by the API."""

    id: Scalar = None
    subreddit_name: str | None = None
    title: str | None = None
    name: str | None = None
    description: str | None = None
    score: Scalar = None
    upvotes: Scalar = None
    downvotes: Scalar = None
    created_at: Scalar = None
    url: str | None = None
    comments: list[RedditComment] = Field(default_factory=list)


class TiktokComment(_RawPayload):
    """A TikTok comment with its nested replies."""

    id: Scalar = None
    username: str | None = None
    nickname: str | None = None
    text: str | None = None
    likes: Scalar = None
    created_at: Scalar = None
    replies: list[TiktokComment] = Field(default_factory=list)


class TiktokPost(_RawPayload):
    """A TikTok video as extracted by the API."""

    id: Scalar = None
    username: str | None = None
    description: str | None = None
    likes: Scalar = None
    total_comments: Scalar = None
    hashtags: list[Any] = Field(default_factory=list)
    created_at: Scalar = None
    url: str | None = None
    comments: list[TiktokComment] = Field(default_factory=list)


def _payload_keys(raw: Any) -> set[str]:
    """Return the keys a payload actually carries, in both wire and attribute form."""
    if isinstance(raw, BaseModel):
        keys: set[str] = set()
        for name in raw.model_fields_set:
            keys.add(name)
            keys.add(to_camel(name))
        keys.update((raw.model_extra or {}).keys())
        return keys
    if isinstance(raw, Mapping):
        return {key for key in raw if isinstance(key, str)}
    return set()


def is_reddit_post(raw: Any) -> bool:
    """Check whether a raw payload is shaped like a Reddit post."""
    return bool(_payload_keys(raw) & {"subredditName", "subreddit_name"})


def is_tiktok_post(raw: Any) -> bool:
    """Check whether a raw payload is shaped like a TikTok post."""
    keys = _payload_keys(raw)
    return "username" in keys and "id" in keys
