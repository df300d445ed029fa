"""Passive tracking of the API's rate-limit headers."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from .constants import (
    RATE_LIMIT_HEADER,
    RATE_LIMIT_REMAINING_HEADER,
    RATE_LIMIT_RESET_HEADER,
    RETRY_AFTER_HEADER,
)
from .models.responses import RateLimitInfo

log = logging.getLogger(__name__)

_FIELDS = {
    "limit": RATE_LIMIT_HEADER,
    "remaining": RATE_LIMIT_REMAINING_HEADER,
    "reset": RATE_LIMIT_RESET_HEADER,
}


def parse_int_header(headers: Mapping[str, str], name: str) -> int | None:
    """Return an integer header value, or None when absent or malformed."""
    value = headers.get(name)
    if value is None or not value.strip():
        return None
    try:
        return int(value.strip())
    except ValueError:
        log.debug("Ignoring non-integer %s header: %r", name, value)
        return None


def update_rate_limit_info(info: RateLimitInfo, headers: Mapping[str, str]) -> None:
    """Copy rate-limit headers onto ``info``; fields without a header keep their value."""
    for attr, header in _FIELDS.items():
        value = parse_int_header(headers, header)
        if value is not None:
            setattr(info, attr, value)


def parse_retry_after(headers: Mapping[str, str]) -> int | None:
    return parse_int_header(headers, RETRY_AFTER_HEADER)
