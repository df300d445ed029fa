"""PostCrawl API client."""

from __future__ import annotations

import asyncio
import copy
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .auth import resolve_api_key
from .config import resolve_client_options
from .constants import EXTRACT_ENDPOINT, SEARCH_AND_EXTRACT_ENDPOINT, SEARCH_ENDPOINT
from .exceptions import PostCrawlError, ValidationError
from .models import (
    ClientConfig,
    ErrorDetail,
    ExtractedPost,
    ExtractRequest,
    RateLimitInfo,
    ResponseMode,
    SearchAndExtractRequest,
    SearchRequest,
    SearchResult,
    SocialPlatform,
    extracted_posts_adapter,
    search_results_adapter,
)
from .transport import RequestExecutor

log = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)
T = TypeVar("T")


def _validate(model: type[M], **params: Any) -> M:
    """Build a request model, converting every violation into one ValidationError."""
    try:
        return model(**params)
    except PydanticValidationError as exc:
        details = [
            ErrorDetail(
                field=".".join(str(part) for part in err["loc"]),
                code=err["type"],
                message=err["msg"],
            )
            for err in exc.errors()
        ]
        raise ValidationError("Invalid request parameters", details=details) from exc


def _map_response(adapter: Any, data: Any, endpoint: str) -> Any:
    try:
        return adapter.validate_python(data)
    except PydanticValidationError as exc:
        raise PostCrawlError(f"Unexpected response shape from {endpoint}: {exc.error_count()} error(s)") from exc


class PostCrawlClient:
    """PostCrawl API client for searching and extracting social media content.

    Example::

        async with PostCrawlClient(api_key="sk_...") as client:
            results = await client.search(
                social_platforms=["reddit"],
                query="machine learning",
                results=10,
                page=1,
            )
            posts = await client.extract(urls=[results[0].url], include_comments=True)

    Options not passed explicitly come from the user config file
    (``postcrawl config path``) and then from built-in defaults. When
    ``api_key`` is omitted, ``POSTCRAWL_API_KEY`` is read from the environment
    or ``~/.env``.

    ``rate_limit_info`` reflects the most recent response processed by this
    client. It is shared by concurrent calls without locking, so with several
    calls in flight it shows whichever response arrived last.
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        base_url: str | None = None,
        timeout: int | None = None,
        max_retries: int | None = None,
        retry_delay: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        api_key = resolve_api_key(api_key)

        self.config = ClientConfig(
            api_key=api_key,
            **resolve_client_options(
                base_url=base_url,
                timeout=timeout,
                max_retries=max_retries,
                retry_delay=retry_delay,
            ),
        )
        self.rate_limit_info = RateLimitInfo()
        self._transport = transport
        self._executor: RequestExecutor | None = None

    def __repr__(self) -> str:
        return f"PostCrawlClient(base_url={self.config.base_url!r}, max_retries={self.config.max_retries})"

    async def __aenter__(self) -> PostCrawlClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Release the HTTP connection pool, if one was opened."""
        if self._executor is not None:
            executor, self._executor = self._executor, None
            await executor.aclose()

    def _requests(self) -> RequestExecutor:
        # Opened on first async call, inside the caller's event loop.
        if self._executor is None:
            self._executor = RequestExecutor(self.config, self.rate_limit_info, transport=self._transport)
        return self._executor

    async def search(
        self,
        social_platforms: list[SocialPlatform],
        query: str,
        results: int = 10,
        page: int = 1,
    ) -> list[SearchResult]:
        """Search for content across social media platforms.

        Raises:
            ValidationError: If request parameters are invalid (no request is sent).
            AuthenticationError: If the API key is invalid.
            InsufficientCreditsError: If the account has insufficient credits.
            RateLimitError: If the rate limit is exceeded.
            APIError: For other API errors.
            NetworkError: If the API could not be reached after retries.
            TimeoutError: If the request timed out.
        """
        request = _validate(
            SearchRequest,
            social_platforms=social_platforms,
            query=query,
            results=results,
            page=page,
        )
        data = await self._requests().execute("POST", SEARCH_ENDPOINT, request.to_wire())
        search_results = _map_response(search_results_adapter, data, SEARCH_ENDPOINT)
        log.info("Search %r returned %d results", request.query, len(search_results))
        return search_results

    async def extract(
        self,
        urls: list[str],
        include_comments: bool = False,
        response_mode: ResponseMode = "raw",
        comment_filter_config: dict[str, Any] | None = None,
    ) -> list[ExtractedPost]:
        """Extract content from social media URLs.

        ``comment_filter_config`` is sent to the API unchanged.

        Raises the same errors as :meth:`search`.
        """
        request = _validate(
            ExtractRequest,
            urls=urls,
            include_comments=include_comments,
            response_mode=response_mode,
            comment_filter_config=comment_filter_config,
        )
        data = await self._requests().execute("POST", EXTRACT_ENDPOINT, request.to_wire())
        posts = _map_response(extracted_posts_adapter, data, EXTRACT_ENDPOINT)
        log.info("Extracted %d posts from %d urls", len(posts), len(request.urls))
        return posts

    async def search_and_extract(
        self,
        social_platforms: list[SocialPlatform],
        query: str,
        results: int = 10,
        page: int = 1,
        include_comments: bool = False,
        response_mode: ResponseMode = "raw",
        comment_filter_config: dict[str, Any] | None = None,
    ) -> list[ExtractedPost]:
        """Search for content and extract every hit in a single request.

        Raises the same errors as :meth:`search`.
        """
        request = _validate(
            SearchAndExtractRequest,
            social_platforms=social_platforms,
            query=query,
            results=results,
            page=page,
            include_comments=include_comments,
            response_mode=response_mode,
            comment_filter_config=comment_filter_config,
        )
        data = await self._requests().execute("POST", SEARCH_AND_EXTRACT_ENDPOINT, request.to_wire())
        posts = _map_response(extracted_posts_adapter, data, SEARCH_AND_EXTRACT_ENDPOINT)
        log.info("Search-and-extract %r returned %d posts", request.query, len(posts))
        return posts

    # Synchronous wrappers. Each runs a private event loop with asyncio.run and
    # a short-lived HTTP connection pool, so they raise RuntimeError when called
    # from inside a running event loop; use the async methods there. A client
    # used only through these never holds an open pool and needs no aclose().

    def search_sync(self, *args: Any, **kwargs: Any) -> list[SearchResult]:
        """Blocking version of :meth:`search`."""
        return self._run_sync(PostCrawlClient.search, *args, **kwargs)

    def extract_sync(self, *args: Any, **kwargs: Any) -> list[ExtractedPost]:
        """Blocking version of :meth:`extract`."""
        return self._run_sync(PostCrawlClient.extract, *args, **kwargs)

    def search_and_extract_sync(self, *args: Any, **kwargs: Any) -> list[ExtractedPost]:
        """Blocking version of :meth:`search_and_extract`."""
        return self._run_sync(PostCrawlClient.search_and_extract, *args, **kwargs)

    def _run_sync(self, operation: Callable[..., Awaitable[T]], *args: Any, **kwargs: Any) -> T:
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            pass
        else:
            raise RuntimeError(f"{operation.__name__}_sync() cannot be called from a running event loop")

        async def _run() -> T:
            clone = copy.copy(self)
            clone._executor = None
            async with clone:
                return await operation(clone, *args, **kwargs)

        return asyncio.run(_run())
