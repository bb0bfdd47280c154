"""Tests for fetch error messages."""

from datetime import datetime, timezone
import requests
from prwatcher.services.errors import (
    DecodeFailedError,
    FetchError,
    InvalidEndpointError,
    MissingCredentialError,
    RateLimitedError,
    ServerError,
    TransportError,
    UnauthorizedError,
)


class TestFetchErrors:
    """Test cases for the error taxonomy."""

    def test_all_errors_share_base(self):
        """Test every error is a FetchError."""
        errors = [
            MissingCredentialError(),
            InvalidEndpointError("nope"),
            UnauthorizedError(),
            RateLimitedError(datetime(2024, 1, 1, tzinfo=timezone.utc)),
            ServerError(500),
            DecodeFailedError(),
            TransportError(requests.exceptions.ConnectionError("reset")),
        ]

        for error in errors:
            assert isinstance(error, FetchError)
            assert error.user_message
            assert str(error) == error.user_message

    def test_missing_credential_is_not_unauthorized(self):
        """Test the precondition and server rejection stay distinct."""
        assert not isinstance(MissingCredentialError(), UnauthorizedError)
        assert not isinstance(UnauthorizedError(), MissingCredentialError)

    def test_rate_limited_message_contains_local_reset_time(self):
        """Test the reset time is rendered for the user."""
        reset_at = datetime(2024, 1, 1, 12, 30, 15, tzinfo=timezone.utc)
        error = RateLimitedError(reset_at)

        assert reset_at.astimezone().strftime("%H:%M:%S") in error.user_message

    def test_server_error_message(self):
        """Test the status code is shown."""
        assert "503" in ServerError(503).user_message

    def test_transport_error_keeps_cause(self):
        """Test the underlying exception is exposed."""
        cause = requests.exceptions.Timeout("timed out")
        error = TransportError(cause)

        assert error.cause is cause
        assert "timed out" in error.user_message
