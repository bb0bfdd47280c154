"""Errors raised by the pull request fetch pipeline."""

from datetime import datetime
from typing import Optional


class FetchError(Exception):
    """Base class for every failure reported by a fetch."""

    user_message = "Unexpected error"

    def __str__(self) -> str:
        return self.user_message


class MissingCredentialError(FetchError):
    """No access token is configured. Raised before any network I/O."""

    user_message = "Set a GitHub token in the settings"


class InvalidEndpointError(FetchError):
    """The endpoint is not a well-formed absolute URL."""

    def __init__(self, endpoint: Optional[str]):
        self.endpoint = endpoint
        super().__init__(endpoint)

    @property
    def user_message(self) -> str:
        return f"Invalid URL: {self.endpoint!r}"


class UnauthorizedError(FetchError):
    """The server rejected the token (HTTP 401)."""

    user_message = "Authentication failed. Check your token"


class RateLimitedError(FetchError):
    """
    The API rate limit is exhausted (HTTP 403 with rate limit headers).

    Attributes:
        reset_at: Timezone-aware instant when the limit resets
    """

    def __init__(self, reset_at: datetime):
        self.reset_at = reset_at
        super().__init__(reset_at)

    @property
    def user_message(self) -> str:
        local_reset = self.reset_at.astimezone()
        return f"API rate limit exceeded. Try again at {local_reset:%H:%M:%S}"


class ServerError(FetchError):
    """Any non-200 status that is not more specifically classified."""

    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(status_code)

    @property
    def user_message(self) -> str:
        return f"GitHub server error (Code: {self.status_code})"


class DecodeFailedError(FetchError):
    """The 200 response body could not be decoded into pull requests."""

    user_message = "Failed to parse the response"


class TransportError(FetchError):
    """Network-level failure: DNS, TLS, timeout, connection reset."""

    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(cause)

    @property
    def user_message(self) -> str:
        return f"Network error: {self.cause}"
