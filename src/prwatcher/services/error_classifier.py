"""Classification of non-200 GraphQL responses into fetch errors."""

import logging
from datetime import datetime, timezone
from typing import Mapping, Optional

from requests.structures import CaseInsensitiveDict

from prwatcher.services.errors import FetchError, RateLimitedError, ServerError, UnauthorizedError


logger = logging.getLogger(__name__)

RATE_LIMIT_REMAINING_HEADER = "x-ratelimit-remaining"
RATE_LIMIT_RESET_HEADER = "x-ratelimit-reset"


def parse_rate_limit_reset(headers: Mapping[str, str]) -> Optional[datetime]:
    """
    Extract the rate limit reset time when the limit is exhausted.

    Both headers must be conclusive: remaining is exactly "0" and reset is a
    base-10 integer of epoch seconds.

    Args:
        headers: Response headers, looked up case-insensitively

    Returns:
        UTC reset instant, or None when the headers do not show an exhausted limit
    """
    headers = CaseInsensitiveDict(headers)
    remaining = headers.get(RATE_LIMIT_REMAINING_HEADER)
    reset = headers.get(RATE_LIMIT_RESET_HEADER)

    if remaining is None or remaining.strip() != "0" or reset is None:
        return None

    reset = reset.strip()
    # int() alone would also take "+1", "1_000" and non-ASCII digits
    if not (reset.isascii() and reset.isdigit()):
        logger.warning(f"Unparseable {RATE_LIMIT_RESET_HEADER} header: {reset!r}")
        return None

    try:
        return datetime.fromtimestamp(int(reset), tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        logger.warning(f"Out of range {RATE_LIMIT_RESET_HEADER} header: {reset!r}")
        return None


def classify_response(status_code: int, headers: Mapping[str, str]) -> Optional[FetchError]:
    """
    Map an HTTP status and headers to a fetch error.

    Args:
        status_code: HTTP status code
        headers: Response headers

    Returns:
        None for 200 (decode the body), otherwise the matching FetchError
    """
    if status_code == 200:
        return None

    if status_code == 401:
        logger.warning("Unauthorized access (401). Token might be invalid.")
        return UnauthorizedError()

    if status_code == 403:
        reset_at = parse_rate_limit_reset(headers)
        if reset_at is not None:
            logger.warning(f"Rate limit exceeded. Resets at {reset_at.isoformat()}")
            return RateLimitedError(reset_at)
        logger.error("Forbidden access (403) but not rate limit.")
        return ServerError(403)

    logger.error(f"Server error: status code {status_code}")
    return ServerError(status_code)
