"""Pydantic model for client configuration."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ..constants import DEFAULT_BASE_URL, DEFAULT_MAX_RETRIES, DEFAULT_RETRY_DELAY_MS, DEFAULT_TIMEOUT_MS
from .requests import AbsoluteUrl


class ClientConfig(BaseModel):
    """Immutable settings for one PostCrawlClient.

    ``timeout`` and ``retry_delay`` are in milliseconds. A ``timeout`` of ``0``
    or ``None`` disables the per-request deadline.
    """

    model_config = ConfigDict(frozen=True)

    api_key: str = Field(repr=False)
    base_url: AbsoluteUrl = DEFAULT_BASE_URL
    timeout: int | None = Field(default=DEFAULT_TIMEOUT_MS, strict=True, ge=0)
    max_retries: int = Field(default=DEFAULT_MAX_RETRIES, strict=True, ge=0)
    retry_delay: int = Field(default=DEFAULT_RETRY_DELAY_MS, strict=True, ge=0)

    @property
    def timeout_seconds(self) -> float | None:
        if not self.timeout:
            return None
        return self.timeout / 1000

    @property
    def retry_delay_seconds(self) -> float:
        return self.retry_delay / 1000
