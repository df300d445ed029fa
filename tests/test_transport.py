"""Tests for the request executor: retries, timeouts and error classification."""

import asyncio
import json

import httpx
import pytest
from conftest import API_KEY, Recorder

from postcrawl.exceptions import (
    APIError,
    AuthenticationError,
    InsufficientCreditsError,
    NetworkError,
    PostCrawlError,
    RateLimitError,
    TimeoutError,
    ValidationError,
)
from postcrawl.models import ClientConfig, RateLimitInfo
from postcrawl.transport import RequestExecutor, classify_error


def _executor(handler, **config) -> RequestExecutor:
    config.setdefault("retry_delay", 0)
    return RequestExecutor(ClientConfig(api_key=API_KEY, **config), RateLimitInfo(), httpx.MockTransport(handler))


def _execute(executor: RequestExecutor, path="/search", body=None):
    async def _run():
        try:
            return await executor.execute("POST", path, body or {"query": "test"})
        finally:
            await executor.aclose()

    return asyncio.run(_run())


def _connect_error():
    return httpx.ConnectError("connection refused")


# ============================================================================
# Request construction
# ============================================================================


class TestRequestConstruction:
    def test_url_and_headers(self):
        rec = Recorder(httpx.Response(200, json=[]))
        _execute(_executor(rec), "/extract", {"urls": ["https://x.com"]})

        request = rec.requests[0]
        assert request.method == "POST"
        assert str(request.url) == "https://edge.postcrawl.com/v1/extract"
        assert request.headers["Authorization"] == f"Bearer {API_KEY}"
        assert request.headers["User-Agent"].startswith("postcrawl-python/")
        assert request.headers["Content-Type"] == "application/json"
        assert rec.body() == {"urls": ["https://x.com"]}

    def test_custom_base_url(self):
        rec = Recorder(httpx.Response(200, json=[]))
        _execute(_executor(rec, base_url="http://localhost:8787/"))
        assert str(rec.requests[0].url) == "http://localhost:8787/v1/search"

    def test_returns_parsed_json(self):
        rec = Recorder(httpx.Response(200, json=[{"a": 1}]))
        assert _execute(_executor(rec)) == [{"a": 1}]

    def test_invalid_json_body(self):
        rec = Recorder(httpx.Response(200, content=b"<html>oops</html>"))
        with pytest.raises(PostCrawlError) as exc_info:
            _execute(_executor(rec))
        assert type(exc_info.value) is PostCrawlError


# ============================================================================
# Retry behaviour
# ============================================================================


class TestRetry:
    def test_recovers_after_transport_failures(self):
        rec = Recorder(_connect_error(), _connect_error(), httpx.Response(200, json=[]))
        assert _execute(_executor(rec, max_retries=2)) == []
        assert rec.calls == 3

    def test_network_error_after_retries_exhausted(self):
        rec = Recorder(_connect_error())
        with pytest.raises(NetworkError) as exc_info:
            _execute(_executor(rec, max_retries=2))

        assert rec.calls == 3
        assert type(exc_info.value) is NetworkError
        assert isinstance(exc_info.value.original_error, httpx.ConnectError)
        assert "connection refused" in exc_info.value.message

    def test_no_retries_configured(self):
        rec = Recorder(_connect_error())
        with pytest.raises(NetworkError):
            _execute(_executor(rec, max_retries=0))
        assert rec.calls == 1

    def test_same_body_resent(self):
        rec = Recorder(_connect_error(), httpx.Response(200, json=[]))
        _execute(_executor(rec), body={"query": "same"})
        assert rec.body(0) == rec.body(1) == {"query": "same"}

    def test_linear_backoff(self, monkeypatch):
        delays = []

        async def _fake_sleep(delay):
            delays.append(delay)

        monkeypatch.setattr(asyncio, "sleep", _fake_sleep)
        rec = Recorder(_connect_error())
        with pytest.raises(NetworkError):
            _execute(_executor(rec, max_retries=3, retry_delay=500))

        assert delays == [0.5, 1.0, 1.5]

    @pytest.mark.parametrize("status", [401, 403, 422, 429, 500, 503])
    def test_http_errors_not_retried(self, status):
        rec = Recorder(httpx.Response(status, json={"error": "x", "message": "y"}))
        with pytest.raises(APIError):
            _execute(_executor(rec, max_retries=3))
        assert rec.calls == 1


# ============================================================================
# Timeouts
# ============================================================================


class TestTimeout:
    def test_httpx_timeout_not_retried(self):
        rec = Recorder(httpx.ReadTimeout("read timed out"))
        with pytest.raises(TimeoutError) as exc_info:
            _execute(_executor(rec, max_retries=3))
        assert rec.calls == 1
        assert isinstance(exc_info.value, NetworkError)

    def test_deadline_aborts_slow_response(self):
        calls = []

        async def _slow(request):
            calls.append(request)
            await asyncio.sleep(5)
            return httpx.Response(200, json=[])

        with pytest.raises(TimeoutError):
            _execute(_executor(_slow, timeout=20, max_retries=3))
        assert len(calls) == 1

    def test_zero_timeout_disables_deadline(self):
        async def _slightly_slow(request):
            await asyncio.sleep(0.05)
            return httpx.Response(200, json=["ok"])

        assert _execute(_executor(_slightly_slow, timeout=0)) == ["ok"]


# ============================================================================
# Error classification
# ============================================================================


def _response(status, body=None, headers=None, content=None) -> httpx.Response:
    request = httpx.Request("POST", "https://edge.postcrawl.com/v1/search")
    if content is not None:
        return httpx.Response(status, content=content, headers=headers, request=request)
    return httpx.Response(status, json=body, headers=headers, request=request)


class TestClassifyError:
    def test_401(self):
        err = classify_error(_response(401, {"error": "unauthorized", "message": "Bad key", "request_id": "req_1"}))
        assert isinstance(err, AuthenticationError)
        assert err.message == "Bad key"
        assert err.request_id == "req_1"

    def test_403_with_credit_counts(self):
        err = classify_error(
            _response(
                403,
                {"error": "credits", "message": "Out", "credits_required": 5, "credits_available": 1},
            )
        )
        assert isinstance(err, InsufficientCreditsError)
        assert err.credits_required == 5
        assert err.credits_available == 1

    def test_403_without_credit_counts(self):
        err = classify_error(_response(403, {"error": "credits", "message": "Out"}))
        assert err.credits_required is None

    def test_422_details(self):
        err = classify_error(
            _response(
                422,
                {
                    "error": "validation_error",
                    "message": "Invalid request",
                    "request_id": "req_2",
                    "details": [{"field": "urls.0", "code": "invalid_url", "message": "Bad URL"}],
                },
            )
        )
        assert isinstance(err, ValidationError)
        assert err.details[0].field == "urls.0"
        assert err.request_id == "req_2"

    def test_429_retry_after_from_header(self):
        err = classify_error(
            _response(429, {"error": "rate_limited", "message": "Slow down"}, headers={"Retry-After": "60"})
        )
        assert isinstance(err, RateLimitError)
        assert err.retry_after == 60

    def test_429_without_header(self):
        err = classify_error(_response(429, {"error": "rate_limited", "message": "Slow down"}))
        assert err.retry_after is None

    def test_other_status(self):
        err = classify_error(_response(502, {"error": "bad_gateway", "message": "Upstream failed"}))
        assert type(err) is APIError
        assert err.status_code == 502

    def test_unparseable_body_uses_status_line(self):
        err = classify_error(_response(500, content=b"not json"))
        assert type(err) is APIError
        assert err.message == "Internal Server Error"
        assert err.status_code == 500

    def test_unparseable_body_still_classified(self):
        err = classify_error(_response(401, content=b"<html></html>"))
        assert isinstance(err, AuthenticationError)
        assert err.request_id is None

    def test_null_message_keeps_request_id(self):
        err = classify_error(_response(500, {"error": "x", "message": None, "request_id": "req_1"}))
        assert type(err) is APIError
        assert err.message == "Unknown error"
        assert err.request_id == "req_1"

    def test_partial_details_kept(self):
        err = classify_error(
            _response(
                422,
                {
                    "message": "Invalid request",
                    "requestId": "req_3",
                    "details": [{"field": "urls.0", "message": "Bad URL"}, "junk", None],
                },
            )
        )
        assert isinstance(err, ValidationError)
        assert err.request_id == "req_3"
        assert [(d.field, d.code, d.message) for d in err.details] == [("urls.0", "", "Bad URL")]

    def test_mistyped_credit_counts_ignored(self):
        err = classify_error(
            _response(403, {"message": "Out", "credits_required": "lots", "credits_available": 2, "request_id": 7})
        )
        assert isinstance(err, InsufficientCreditsError)
        assert err.credits_required is None
        assert err.credits_available == 2
        assert err.request_id == "7"

    def test_non_object_body(self):
        err = classify_error(_response(500, content=json.dumps(["x"]).encode()))
        assert err.message == "Internal Server Error"


# ============================================================================
# Rate-limit tracking
# ============================================================================


class TestRateLimitTracking:
    def test_updated_on_success(self, rate_limit_headers):
        executor = _executor(Recorder(httpx.Response(200, json=[], headers=rate_limit_headers)))
        _execute(executor)
        assert executor.rate_limit_info == RateLimitInfo(limit=200, remaining=150, reset=1703725200)

    def test_updated_on_error_response(self):
        executor = _executor(Recorder(httpx.Response(401, json={}, headers={"X-RateLimit-Remaining": "150"})))
        with pytest.raises(AuthenticationError):
            _execute(executor)
        assert executor.rate_limit_info.remaining == 150

    def test_untouched_on_network_failure(self):
        executor = _executor(Recorder(_connect_error()), max_retries=0)
        executor.rate_limit_info.remaining = 7
        with pytest.raises(NetworkError):
            _execute(executor)
        assert executor.rate_limit_info == RateLimitInfo(remaining=7)
