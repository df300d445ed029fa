"""PostCrawl API exceptions.

Every error raised by the client derives from :class:`PostCrawlError` and carries
a class-level :class:`ErrorKind`, so callers can either catch by class or
dispatch on ``err.kind``.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .models.responses import ErrorDetail


class ErrorKind(str, Enum):
    """Discriminator shared by all PostCrawl errors."""

    CLIENT = "client"
    API = "api"
    AUTHENTICATION = "authentication"
    INSUFFICIENT_CREDITS = "insufficient_credits"
    RATE_LIMIT = "rate_limit"
    VALIDATION = "validation"
    NETWORK = "network"
    TIMEOUT = "timeout"


class PostCrawlError(Exception):
    """Base exception for all PostCrawl errors."""

    kind = ErrorKind.CLIENT

    def __init__(self, message: str, *, request_id: str | None = None, response: Any = None):
        super().__init__(message)
        self.message = message
        self.request_id = request_id
        self.response = response

    def __str__(self) -> str:
        if self.request_id:
            return f"{self.message} (request_id={self.request_id})"
        return self.message


class APIError(PostCrawlError):
    """Non-success HTTP status returned by the API."""

    kind = ErrorKind.API

    def __init__(self, message: str, status_code: int, *, request_id: str | None = None, response: Any = None):
        super().__init__(message, request_id=request_id, response=response)
        self.status_code = status_code


class AuthenticationError(APIError):
    """Raised when the API key is invalid or missing (HTTP 401)."""

    kind = ErrorKind.AUTHENTICATION

    def __init__(
        self,
        message: str = "Invalid or missing API key",
        *,
        request_id: str | None = None,
        response: Any = None,
    ):
        super().__init__(message, 401, request_id=request_id, response=response)


class InsufficientCreditsError(APIError):
    """Raised when the account has run out of credits (HTTP 403)."""

    kind = ErrorKind.INSUFFICIENT_CREDITS

    def __init__(
        self,
        message: str = "Insufficient credits",
        *,
        credits_required: int | None = None,
        credits_available: int | None = None,
        request_id: str | None = None,
        response: Any = None,
    ):
        super().__init__(message, 403, request_id=request_id, response=response)
        self.credits_required = credits_required
        self.credits_available = credits_available


class RateLimitError(APIError):
    """Raised when the request was throttled (HTTP 429)."""

    kind = ErrorKind.RATE_LIMIT

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        *,
        retry_after: int | None = None,
        request_id: str | None = None,
        response: Any = None,
    ):
        super().__init__(message, 429, request_id=request_id, response=response)
        self.retry_after = retry_after


class ValidationError(APIError):
    """Raised when request parameters are rejected, locally or by the API (HTTP 422)."""

    kind = ErrorKind.VALIDATION

    def __init__(
        self,
        message: str,
        *,
        details: list[ErrorDetail] | None = None,
        request_id: str | None = None,
        response: Any = None,
    ):
        super().__init__(message, 422, request_id=request_id, response=response)
        self.details = details or []


class NetworkError(PostCrawlError):
    """Raised when the request could not be delivered."""

    kind = ErrorKind.NETWORK

    def __init__(self, message: str, original_error: BaseException | None = None):
        super().__init__(message)
        self.original_error = original_error


class TimeoutError(NetworkError):  # noqa: A001
    """Raised when a request exceeds the configured timeout. Never retried."""

    kind = ErrorKind.TIMEOUT

    def __init__(self, message: str = "Request timed out", original_error: BaseException | None = None):
        super().__init__(message, original_error)
