"""HTTP request execution: headers, timeout, retry with backoff, error classification."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

from . import __version__
from .constants import API_VERSION
from .exceptions import (
    APIError,
    AuthenticationError,
    InsufficientCreditsError,
    NetworkError,
    PostCrawlError,
    RateLimitError,
    TimeoutError,
    ValidationError,
)
from .models.config import ClientConfig
from .models.responses import ErrorResponse, RateLimitInfo
from .rate_limit import parse_retry_after, update_rate_limit_info

log = logging.getLogger(__name__)

USER_AGENT = f"postcrawl-python/{__version__}"


def _parse_error_body(response: httpx.Response) -> ErrorResponse:
    """Read the error body, or describe the status line when it is not a JSON object."""
    try:
        data = response.json()
    except ValueError:
        data = None
    if isinstance(data, dict):
        return ErrorResponse.model_validate(data)
    log.debug("HTTP %d error body is not a JSON object", response.status_code)
    return ErrorResponse(message=response.reason_phrase or f"HTTP {response.status_code}")


def classify_error(response: httpx.Response) -> APIError:
    """Map a non-success response onto the matching typed error."""
    body = _parse_error_body(response)
    request_id = body.request_id
    status = response.status_code

    if status == 401:
        return AuthenticationError(body.message, request_id=request_id, response=response)
    if status == 403:
        return InsufficientCreditsError(
            body.message,
            credits_required=body.credits_required,
            credits_available=body.credits_available,
            request_id=request_id,
            response=response,
        )
    if status == 422:
        return ValidationError(body.message, details=body.details, request_id=request_id, response=response)
    if status == 429:
        return RateLimitError(
            body.message,
            retry_after=parse_retry_after(response.headers),
            request_id=request_id,
            response=response,
        )
    return APIError(body.message, status, request_id=request_id, response=response)


class RequestExecutor:
    """Performs one logical API call per ``execute``, retrying transport failures.

    HTTP error statuses and timeouts are never retried. Transport failures are
    retried up to ``config.max_retries`` times, waiting
    ``retry_delay * attempt`` between tries.
    """

    def __init__(
        self,
        config: ClientConfig,
        rate_limit_info: RateLimitInfo,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.config = config
        self.rate_limit_info = rate_limit_info
        self._http = httpx.AsyncClient(transport=transport)

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.config.api_key}",
            "User-Agent": USER_AGENT,
            "Content-Type": "application/json",
        }

    def build_url(self, path: str) -> str:
        return f"{self.config.base_url.rstrip('/')}/{API_VERSION}{path}"

    async def execute(self, method: str, path: str, body: dict[str, Any] | None = None) -> Any:
        """Send the request and return the decoded JSON body, or raise a PostCrawlError."""
        url = self.build_url(path)
        attempt = 0

        while True:
            log.debug("%s %s (attempt %d)", method, url, attempt + 1)
            try:
                response = await self._send(method, url, body)
            except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
                log.error("%s %s timed out after %sms", method, path, self.config.timeout)
                raise TimeoutError("Request timed out", exc) from exc
            except httpx.TransportError as exc:
                if attempt < self.config.max_retries:
                    attempt += 1
                    delay = self.config.retry_delay_seconds * attempt
                    log.warning(
                        "%s %s failed: %s (retry %d/%d in %.1fs)",
                        method,
                        path,
                        exc,
                        attempt,
                        self.config.max_retries,
                        delay,
                    )
                    await asyncio.sleep(delay)
                    continue
                log.error("%s %s failed after %d attempts: %s", method, path, attempt + 1, exc)
                raise NetworkError(f"Network error: {exc}", exc) from exc
            except httpx.HTTPError as exc:
                raise NetworkError(f"Network error: {exc}", exc) from exc

            update_rate_limit_info(self.rate_limit_info, response.headers)

            if not response.is_success:
                error = classify_error(response)
                log.error(
                    "%s %s returned HTTP %d: %s (request_id=%s)",
                    method,
                    path,
                    response.status_code,
                    error.message,
                    error.request_id,
                )
                raise error

            try:
                return response.json()
            except ValueError as exc:
                raise PostCrawlError(f"Invalid JSON in response from {path}", response=response) from exc

    async def _send(self, method: str, url: str, body: dict[str, Any] | None) -> httpx.Response:
        timeout = self.config.timeout_seconds
        request = self._http.request(method, url, json=body, headers=self.headers, timeout=timeout)
        if timeout is None:
            return await request
        return await asyncio.wait_for(request, timeout)

    async def aclose(self) -> None:
        await self._http.aclose()
