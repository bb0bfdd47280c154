"""HTTP transport for the GitHub GraphQL search query."""

import logging
import re
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlparse

import requests
from requests.structures import CaseInsensitiveDict

from prwatcher.services.errors import InvalidEndpointError, TransportError


logger = logging.getLogger(__name__)

USER_AGENT = "prwatcher/1.0"
DEFAULT_TIMEOUT = 30.0

# Whitespace and control characters are never valid inside a URL
_DISALLOWED_URL_CHARS = re.compile(r"[\x00-\x20\x7f]")

_INVALID_URL_ERRORS = (
    requests.exceptions.InvalidURL,
    requests.exceptions.MissingSchema,
    requests.exceptions.InvalidSchema,
)

# Results beyond the first 30 are not retrieved; no cursor is followed.
SEARCH_PULL_REQUESTS_QUERY = """
query($query: String!) {
  search(query: $query, type: ISSUE, first: 30) {
    nodes {
      ... on PullRequest {
        databaseId
        number
        title
        state
        url
        createdAt
        isDraft
        reviewDecision
        author { login avatarUrl }
        labels(first: 10) { nodes { name color } }
        latestReviews(first: 10) {
          nodes {
            id
            state
            author { login avatarUrl }
          }
        }
      }
    }
  }
}
"""


class GraphQLResponse:
    """Raw status, headers and body of a GraphQL HTTP response."""

    def __init__(self, status_code: int, headers: Mapping[str, str], body: bytes):
        self.status_code = status_code
        self.headers = CaseInsensitiveDict(headers)
        self.body = body

    def __repr__(self) -> str:
        return f"GraphQLResponse(status_code={self.status_code}, body={len(self.body)} bytes)"


def build_payload(query: str) -> Dict[str, Any]:
    """Build the JSON request body for a search query string."""
    return {
        "query": SEARCH_PULL_REQUESTS_QUERY,
        "variables": {"query": query},
    }


def validate_endpoint(endpoint: Optional[str]) -> str:
    """
    Check that an endpoint is a well-formed absolute http(s) URL.

    The URL is prepared the same way requests prepares it for sending, so
    anything requests would reject is rejected here before any I/O.

    Args:
        endpoint: GraphQL endpoint URL

    Returns:
        The endpoint unchanged

    Raises:
        InvalidEndpointError: If the endpoint is empty, relative or malformed
    """
    if not endpoint or _DISALLOWED_URL_CHARS.search(endpoint):
        raise InvalidEndpointError(endpoint)

    try:
        parsed = urlparse(endpoint)
    except ValueError as e:
        raise InvalidEndpointError(endpoint) from e

    if parsed.scheme.lower() not in ('http', 'https') or not parsed.netloc:
        raise InvalidEndpointError(endpoint)

    try:
        requests.PreparedRequest().prepare_url(endpoint, None)
    except _INVALID_URL_ERRORS as e:
        raise InvalidEndpointError(endpoint) from e

    return endpoint


class GraphQLTransport:
    """Sends the search query to a GraphQL endpoint. Does not interpret status codes."""

    def __init__(self, session: Optional[requests.Session] = None, timeout: float = DEFAULT_TIMEOUT):
        """
        Initialize the transport.

        Args:
            session: Optional shared requests session (connection pool)
            timeout: Request timeout in seconds
        """
        self._owns_session = session is None
        self.session = session or requests.Session()
        self.timeout = timeout

    def send(self, endpoint: str, token: str, query: str) -> GraphQLResponse:
        """
        POST the search query with one variable to the endpoint.

        Args:
            endpoint: Absolute GraphQL endpoint URL
            token: GitHub access token
            query: Search query string, passed as variables.query

        Returns:
            GraphQLResponse with raw status, headers and body

        Raises:
            InvalidEndpointError: If the endpoint is malformed (no request is sent)
            TransportError: On any network-level failure
        """
        validate_endpoint(endpoint)

        headers = {
            'Authorization': f'Bearer {token}',
            'Content-Type': 'application/json',
            'User-Agent': USER_AGENT,
        }

        try:
            response = self.session.post(
                endpoint,
                json=build_payload(query),
                headers=headers,
                timeout=self.timeout,
            )
        except _INVALID_URL_ERRORS as e:
            logger.error(f"GraphQL endpoint rejected: {e}")
            raise InvalidEndpointError(endpoint) from e
        except requests.RequestException as e:
            logger.error(f"GraphQL request to {endpoint} failed: {e}")
            raise TransportError(e) from e

        logger.debug(f"GraphQL request to {endpoint} returned {response.status_code}")
        return GraphQLResponse(response.status_code, response.headers, response.content)

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "GraphQLTransport":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
