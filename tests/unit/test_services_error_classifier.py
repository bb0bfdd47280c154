"""Tests for response status classification."""

import pytest
from datetime import datetime, timezone
from prwatcher.services.error_classifier import classify_response, parse_rate_limit_reset
from prwatcher.services.errors import RateLimitedError, ServerError, UnauthorizedError


class TestParseRateLimitReset:
    """Decision table for the rate limit headers."""

    def test_exhausted_with_reset(self):
        """Test both headers conclusive yields the reset instant."""
        headers = {"x-ratelimit-remaining": "0", "x-ratelimit-reset": "1700000000"}

        assert parse_rate_limit_reset(headers) == datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)

    def test_header_names_are_case_insensitive(self):
        """Test GitHub's canonical header casing is recognized."""
        headers = {"X-RateLimit-Remaining": "0", "X-RateLimit-Reset": "1700000000"}

        assert parse_rate_limit_reset(headers) is not None

    @pytest.mark.parametrize("headers", [
        {},
        {"x-ratelimit-remaining": "0"},
        {"x-ratelimit-reset": "1700000000"},
        {"x-ratelimit-remaining": "12", "x-ratelimit-reset": "1700000000"},
        {"x-ratelimit-remaining": "0", "x-ratelimit-reset": "soon"},
        {"x-ratelimit-remaining": "0", "x-ratelimit-reset": "1700000000.5"},
        {"x-ratelimit-remaining": "0", "x-ratelimit-reset": ""},
        {"x-ratelimit-remaining": "0", "x-ratelimit-reset": "1_700_000_000"},
        {"x-ratelimit-remaining": "0", "x-ratelimit-reset": "+1700000000"},
        {"x-ratelimit-remaining": "0", "x-ratelimit-reset": "\u0661\u0667\u0660\u0660\u0660\u0660\u0660\u0660\u0660\u0660"},
        {"x-ratelimit-remaining": "0", "x-ratelimit-reset": "-5"},
    ])
    def test_inconclusive_headers(self, headers):
        """Test that anything short of exhausted-with-reset yields None."""
        assert parse_rate_limit_reset(headers) is None


class TestClassifyResponse:
    """Test cases for classify_response function."""

    def test_ok_is_not_an_error(self):
        """Test 200 means proceed to decode."""
        assert classify_response(200, {}) is None

    def test_unauthorized(self):
        """Test 401 yields UnauthorizedError."""
        assert isinstance(classify_response(401, {}), UnauthorizedError)

    def test_forbidden_rate_limited(self):
        """Test 403 with exhausted rate limit yields RateLimitedError."""
        error = classify_response(403, {"x-ratelimit-remaining": "0", "x-ratelimit-reset": "1700000000"})

        assert isinstance(error, RateLimitedError)
        assert error.reset_at == datetime.fromtimestamp(1700000000, tz=timezone.utc)
        assert error.reset_at.timestamp() == 1700000000

    def test_forbidden_without_headers(self):
        """Test 403 without rate limit headers yields ServerError(403)."""
        error = classify_response(403, {})

        assert isinstance(error, ServerError)
        assert not isinstance(error, RateLimitedError)
        assert error.status_code == 403

    def test_forbidden_with_remaining_quota(self):
        """Test 403 with quota left is a plain forbidden response."""
        error = classify_response(403, {"x-ratelimit-remaining": "4999", "x-ratelimit-reset": "1700000000"})

        assert isinstance(error, ServerError)
        assert error.status_code == 403

    @pytest.mark.parametrize("status_code", [400, 404, 500, 502, 503])
    def test_other_status_codes(self, status_code):
        """Test other codes yield ServerError with the code."""
        error = classify_response(status_code, {})

        assert isinstance(error, ServerError)
        assert error.status_code == status_code

    def test_rate_limit_headers_ignored_for_non_403(self):
        """Test rate limit headers only matter for 403."""
        error = classify_response(429, {"x-ratelimit-remaining": "0", "x-ratelimit-reset": "1700000000"})

        assert isinstance(error, ServerError)
        assert error.status_code == 429
